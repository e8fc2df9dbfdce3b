# src/fx_inventory_engine/engine/ledger_replayer.py
import logging
from decimal import Decimal, localcontext
from typing import Iterable, Optional

from .. import config
from ..core.enums.issue_type import IssueType
from ..core.models.response import LedgerReplayResult
from ..core.models.transaction import Transaction
from ..logic.cost_basis import WeightedAverageCostBook
from ..logic.issue_reporter import IssueReporter
from ..logic.parser import RawTransaction, TransactionParser
from ..logic.profit_calculator import ProfitCalculator
from ..logic.sorter import TransactionSorter
from ..monitoring import REPLAY_DEPTH, REPLAY_DURATION_SECONDS

logger = logging.getLogger(__name__)


class LedgerReplayer:
    """
    Rebuilds per-currency stock positions and realized profit from the full
    transaction history. Every call starts from empty state, so one instance
    can serve concurrent callers.
    """
    def __init__(
        self,
        sorter: Optional[TransactionSorter] = None,
        trading_category: Optional[str] = None,
        default_valuation_currency: Optional[str] = None,
        decimal_precision: Optional[int] = None,
    ):
        self._sorter = sorter or TransactionSorter()
        self._trading_category = trading_category or config.TRADING_CATEGORY
        self._default_valuation_currency = default_valuation_currency or config.DEFAULT_VALUATION_CURRENCY
        self._decimal_precision = decimal_precision or config.DECIMAL_PRECISION

    def replay(self, raw_transactions: Iterable[RawTransaction]) -> LedgerReplayResult:
        issue_reporter = IssueReporter()
        parser = TransactionParser(issue_reporter, trading_category=self._trading_category)
        book = WeightedAverageCostBook(default_valuation_currency=self._default_valuation_currency)
        profit_calculator = ProfitCalculator(book, issue_reporter, self._default_valuation_currency)

        with REPLAY_DURATION_SECONDS.time(), localcontext() as ctx:
            ctx.prec = self._decimal_precision

            # 1. Parse and keep the trading category only
            parsed = parser.parse_transactions(raw_transactions)
            trading = [txn for txn in parsed if parser.is_trading(txn)]
            ignored_count = len(parsed) - len(trading)

            # 2. Weighted average cost is order dependent
            timeline = self._sorter.sort_transactions(trading)

            # 3. Fold the timeline into the book
            processed_timeline: list[Transaction] = []
            for transaction in timeline:
                try:
                    profit_calculator.calculate_transaction_profit(transaction)
                except Exception as e:
                    logger.error(f"Unexpected error for transaction {transaction.transaction_id}: {e}", exc_info=True)
                    issue_reporter.add_issue(transaction.transaction_id, IssueType.INVALID_RECORD, f"Unexpected error: {str(e)}")
                    transaction.realized_profit = Decimal(0)
                processed_timeline.append(transaction)

        REPLAY_DEPTH.observe(len(processed_timeline))
        issues = issue_reporter.get_issues()
        logger.info(
            f"Replayed {len(processed_timeline)} trading transactions "
            f"({ignored_count} outside '{self._trading_category}' ignored, {len(issues)} issues)."
        )

        return LedgerReplayResult(
            positions=book.snapshot(),
            transactions=processed_timeline,
            issues=issues,
            ignored_count=ignored_count,
        )
