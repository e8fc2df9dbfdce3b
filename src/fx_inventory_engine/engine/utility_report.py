# src/fx_inventory_engine/engine/utility_report.py
import logging
from datetime import date
from typing import Any, Iterable, Optional

from ..core.models.response import UtilityReport
from ..exceptions import DateParseError
from ..logic.aggregator import UtilityAggregator
from ..logic.date_helpers import coerce_date
from ..logic.parser import RawTransaction
from .ledger_replayer import LedgerReplayer

logger = logging.getLogger(__name__)


def build_utility_report(
    raw_transactions: Iterable[RawTransaction],
    query_date: Any = None,
    today: Optional[date] = None,
    replayer: Optional[LedgerReplayer] = None,
) -> UtilityReport:
    """
    Replays the full transaction history and computes every reporting view.

    Args:
        raw_transactions: Every movement known to the back-office, in any order.
        query_date: Day to break utility down for; None skips that view.
        today: Reference date for the "today" and "current month" views.
        replayer: Pre-configured replayer; a default one is used otherwise.
    """
    result = (replayer or LedgerReplayer()).replay(raw_transactions)
    aggregator = UtilityAggregator() if today is None else UtilityAggregator(today_provider=lambda: today)

    try:
        selected_date = coerce_date(query_date)
    except DateParseError as e:
        logger.warning(f"Invalid utility query date: {e.message}")
        selected_date = None

    return UtilityReport(
        lifetime_utility=aggregator.lifetime_utility(result.positions),
        monthly_series=aggregator.monthly_series(result.transactions),
        selected_date=selected_date,
        selected_date_utility=aggregator.utility_for_date(result.transactions, selected_date),
        current_month_utility=aggregator.utility_for_current_month(result.transactions),
        today_utility=aggregator.utility_for_today(result.transactions),
        stock=aggregator.stock_snapshot(result.positions),
        total_valuation_by_currency=aggregator.total_valuation_by_currency(result.positions),
        issues=result.issues,
    )
