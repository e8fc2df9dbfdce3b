# src/fx_inventory_engine/logic/aggregator.py
import logging
from collections import defaultdict
from datetime import date
from decimal import Decimal
from typing import Any, Callable, Dict, Iterable, Iterator, List, Mapping, Optional

from ..core.enums.transaction_kind import ProfitSource
from ..core.models.response import (
    MonthlyUtilityRow,
    PositionSnapshot,
    StockSnapshotRow,
    UtilityBreakdown,
    bucket_key,
)
from ..core.models.transaction import Transaction
from ..exceptions import DateParseError
from .date_helpers import coerce_date, month_bounds, month_key

logger = logging.getLogger(__name__)


class UtilityAggregator:
    """
    Read-only reporting views over a replayed ledger.

    Time-window views take the annotated transactions; inventory views take the
    final positions. `today_provider` supplies the current date for the
    "today" and "current month" windows.
    """
    def __init__(self, today_provider: Callable[[], date] = date.today):
        self._today_provider = today_provider

    # --- Lifetime views ---

    def lifetime_utility(self, positions: Mapping[str, PositionSnapshot]) -> Dict[str, Decimal]:
        """
        Cumulative realized utility by currency: sale profit under each
        position's valuation currency, arbitrage profit under the asset
        currency itself. Zero totals are kept.
        """
        totals: Dict[str, Decimal] = defaultdict(Decimal)
        for position in positions.values():
            totals[position.associated_valuation_currency] += position.realized_profit_from_sales
            totals[position.currency] += position.realized_profit_from_arbitrage
        return dict(totals)

    def nonzero_lifetime_utility(self, positions: Mapping[str, PositionSnapshot]) -> Dict[str, Decimal]:
        return {
            currency: amount
            for currency, amount in self.lifetime_utility(positions).items()
            if amount != 0
        }

    def utility_currencies(self, positions: Mapping[str, PositionSnapshot]) -> List[str]:
        return sorted(self.nonzero_lifetime_utility(positions))

    # --- Time series ---

    def monthly_series(self, transactions: Iterable[Transaction]) -> List[MonthlyUtilityRow]:
        monthly: Dict[str, Dict[str, Decimal]] = defaultdict(lambda: defaultdict(Decimal))
        for txn in _profit_entries(transactions):
            if txn.transaction_date is None:
                continue
            key = bucket_key(txn.profit_currency, txn.profit_source)
            monthly[month_key(txn.transaction_date)][key] += txn.realized_profit

        return [
            MonthlyUtilityRow(month=month, buckets=dict(buckets))
            for month, buckets in sorted(monthly.items())
        ]

    # --- Windows ---

    def utility_for_date(self, transactions: Iterable[Transaction], query_date: Any) -> UtilityBreakdown:
        try:
            target = coerce_date(query_date)
        except DateParseError as e:
            logger.warning(f"Ignoring utility query for an invalid date: {e.message}")
            return UtilityBreakdown()
        if target is None:
            return UtilityBreakdown()
        return _breakdown(transactions, lambda d: d == target)

    def utility_for_current_month(self, transactions: Iterable[Transaction], today: Optional[date] = None) -> UtilityBreakdown:
        start, end = month_bounds(self._reference_date(today))
        return _breakdown(transactions, lambda d: start <= d < end)

    def utility_for_today(self, transactions: Iterable[Transaction], today: Optional[date] = None) -> UtilityBreakdown:
        current = self._reference_date(today)
        return _breakdown(transactions, lambda d: d == current)

    def _reference_date(self, today: Optional[date]) -> date:
        # Datetimes are cut to their calendar day before comparing with transaction dates
        return coerce_date(today or self._today_provider())

    # --- Inventory ---

    def stock_snapshot(self, positions: Mapping[str, PositionSnapshot]) -> List[StockSnapshotRow]:
        rows = [
            StockSnapshotRow(
                currency=position.currency,
                quantity=position.quantity,
                average_unit_cost=position.average_unit_cost,
                valuation=position.valuation,
                valuation_currency=position.associated_valuation_currency,
                realized_profit_from_sales=position.realized_profit_from_sales,
                realized_profit_from_arbitrage=position.realized_profit_from_arbitrage,
            )
            for position in positions.values()
            if position.quantity > 0 or position.average_unit_cost > 0
        ]
        return sorted(rows, key=lambda row: row.currency)

    def total_valuation_by_currency(self, positions: Mapping[str, PositionSnapshot]) -> Dict[str, Decimal]:
        totals: Dict[str, Decimal] = defaultdict(Decimal)
        for row in self.stock_snapshot(positions):
            totals[row.valuation_currency] += row.valuation
        return dict(totals)


def _profit_entries(transactions: Iterable[Transaction]) -> Iterator[Transaction]:
    for txn in transactions:
        if txn.profit_source is not None and txn.realized_profit != 0:
            yield txn


def _breakdown(transactions: Iterable[Transaction], date_filter: Callable[[date], bool]) -> UtilityBreakdown:
    sale: Dict[str, Decimal] = defaultdict(Decimal)
    arbitrage: Dict[str, Decimal] = defaultdict(Decimal)
    for txn in _profit_entries(transactions):
        if txn.transaction_date is None or not date_filter(txn.transaction_date):
            continue
        target = sale if txn.profit_source == ProfitSource.SALE else arbitrage
        target[txn.profit_currency] += txn.realized_profit
    return UtilityBreakdown(sale=dict(sale), arbitrage=dict(arbitrage))
