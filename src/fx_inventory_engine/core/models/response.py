# src/fx_inventory_engine/core/models/response.py

from datetime import date
from decimal import Decimal
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..enums.issue_type import IssueType
from ..enums.transaction_kind import ProfitSource
from .transaction import Transaction


class ReplayIssue(BaseModel):
    """
    A non-fatal problem found while replaying one transaction.
    """
    transaction_id: str = Field(..., description="The ID of the transaction the issue refers to.")
    issue_type: IssueType = Field(..., description="Category of the issue.")
    message: str = Field(..., description="Human readable description of the issue.")


class PositionSnapshot(BaseModel):
    """
    Final state of one asset currency after the replay.
    """
    currency: str
    quantity: Decimal = Decimal(0)
    total_cost_basis: Decimal = Decimal(0)
    average_unit_cost: Decimal = Decimal(0)
    associated_valuation_currency: str
    realized_profit_from_sales: Decimal = Decimal(0)
    realized_profit_from_arbitrage: Decimal = Decimal(0)

    model_config = ConfigDict(frozen=True)

    @property
    def valuation(self) -> Decimal:
        return self.quantity * self.average_unit_cost


class LedgerReplayResult(BaseModel):
    positions: Dict[str, PositionSnapshot] = Field(default_factory=dict)
    transactions: List[Transaction] = Field(
        default_factory=list,
        description="Trading transactions in processing order, annotated with realized profit."
    )
    issues: List[ReplayIssue] = Field(default_factory=list)
    ignored_count: int = Field(default=0, description="Records outside the trading category.")


class UtilityBreakdown(BaseModel):
    """Realized utility for a time window, split by source and keyed by currency."""
    sale: Dict[str, Decimal] = Field(default_factory=dict)
    arbitrage: Dict[str, Decimal] = Field(default_factory=dict)

    def is_empty(self) -> bool:
        return not self.sale and not self.arbitrage


class MonthlyUtilityRow(BaseModel):
    month: str = Field(..., description="Calendar month as YYYY-MM.")
    buckets: Dict[str, Decimal] = Field(
        default_factory=dict,
        description="Summed realized profit keyed by '<CURRENCY>_<SOURCE>'."
    )

    def amount_for(self, currency: str, source: ProfitSource) -> Decimal:
        return self.buckets.get(bucket_key(currency, source), Decimal(0))


class StockSnapshotRow(BaseModel):
    currency: str
    quantity: Decimal
    average_unit_cost: Decimal
    valuation: Decimal
    valuation_currency: str
    realized_profit_from_sales: Decimal
    realized_profit_from_arbitrage: Decimal


class UtilityReport(BaseModel):
    """Every reporting view computed from one replay."""
    lifetime_utility: Dict[str, Decimal]
    monthly_series: List[MonthlyUtilityRow]
    selected_date: Optional[date] = None
    selected_date_utility: UtilityBreakdown
    current_month_utility: UtilityBreakdown
    today_utility: UtilityBreakdown
    stock: List[StockSnapshotRow]
    total_valuation_by_currency: Dict[str, Decimal]
    issues: List[ReplayIssue] = Field(default_factory=list)


def bucket_key(currency: str, source: ProfitSource) -> str:
    return f"{currency}_{ProfitSource(source).value}"
