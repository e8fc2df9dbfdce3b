# src/fx_inventory_engine/logic/profit_calculator.py
import logging
from decimal import Decimal
from typing import Optional, Protocol

from .. import config
from ..core.enums.issue_type import IssueType
from ..core.enums.transaction_kind import ProfitSource, TransactionKind
from ..core.models.transaction import Transaction
from ..monitoring import OVERSELL_TOTAL
from .cost_basis import WeightedAverageCostBook
from .issue_reporter import IssueReporter

logger = logging.getLogger(__name__)


class TransactionProfitStrategy(Protocol):
    def calculate_profit(self, transaction: Transaction, book: WeightedAverageCostBook, issue_reporter: IssueReporter) -> None: ...


class BuyStrategy:
    def calculate_profit(self, transaction: Transaction, book: WeightedAverageCostBook, issue_reporter: IssueReporter) -> None:
        book.add_purchase(transaction)
        transaction.realized_profit = Decimal(0)


class SellStrategy:
    def __init__(self, default_valuation_currency: str):
        self._default_valuation_currency = default_valuation_currency

    def calculate_profit(self, transaction: Transaction, book: WeightedAverageCostBook, issue_reporter: IssueReporter) -> None:
        disposition = book.consume_sale(transaction)

        if disposition.oversold:
            message = (
                f"Insufficient stock to sell {transaction.asset_quantity} {transaction.asset_currency} "
                f"on {transaction.transaction_date}: only {disposition.available_quantity} held."
            )
            logger.warning(message)
            OVERSELL_TOTAL.inc()
            issue_reporter.add_issue(transaction.transaction_id, IssueType.OVERSELL, message)

        cogs = disposition.cost_of_goods_sold
        realized_profit = transaction.total_value - cogs

        transaction.realized_profit = realized_profit
        transaction.cost_of_goods_sold = cogs
        transaction.average_cost_at_sale = disposition.average_unit_cost
        transaction.realized_margin_pct = (realized_profit / cogs) * 100 if cogs > 0 else None
        transaction.profit_source = ProfitSource.SALE
        transaction.profit_currency = transaction.valuation_currency or self._default_valuation_currency

        book.record_sale_profit(transaction, realized_profit)


class ArbitrageStrategy:
    def calculate_profit(self, transaction: Transaction, book: WeightedAverageCostBook, issue_reporter: IssueReporter) -> None:
        """Arbitrage profit is given directly and leaves the inventory untouched."""
        realized_profit = transaction.arbitrage_profit or Decimal(0)

        transaction.realized_profit = realized_profit
        transaction.profit_source = ProfitSource.ARBITRAGE
        transaction.profit_currency = transaction.asset_currency

        book.record_arbitrage_profit(transaction, realized_profit)


class IgnoredKindStrategy:
    def calculate_profit(self, transaction: Transaction, book: WeightedAverageCostBook, issue_reporter: IssueReporter) -> None:
        logger.debug(f"Transaction {transaction.transaction_id} has kind '{transaction.kind}'; no inventory or profit effect.")
        transaction.realized_profit = Decimal(0)


class ProfitCalculator:
    def __init__(self, book: WeightedAverageCostBook, issue_reporter: IssueReporter, default_valuation_currency: Optional[str] = None):
        self._book = book
        self._issue_reporter = issue_reporter
        self._strategies: dict[TransactionKind, TransactionProfitStrategy] = {
            TransactionKind.BUY: BuyStrategy(),
            TransactionKind.SELL: SellStrategy(default_valuation_currency or config.DEFAULT_VALUATION_CURRENCY),
            TransactionKind.ARBITRAGE: ArbitrageStrategy(),
        }
        self._ignored_strategy = IgnoredKindStrategy()

    def calculate_transaction_profit(self, transaction: Transaction):
        if transaction.kind not in TransactionKind.list():
            self._ignored_strategy.calculate_profit(transaction, self._book, self._issue_reporter)
            return
        strategy = self._strategies[TransactionKind(transaction.kind)]
        strategy.calculate_profit(transaction, self._book, self._issue_reporter)
