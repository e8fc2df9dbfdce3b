# src/fx_inventory_engine/core/models/transaction.py

from datetime import date, datetime
from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ... import config
from ...constants import KIND_ALIASES
from ..enums.transaction_kind import ProfitSource


class Transaction(BaseModel):
    """
    A single currency-exchange ledger record, plus the profit fields the
    replayer fills in on its own copy.
    """
    transaction_id: str = Field(..., alias="id", description="Opaque identifier of the transaction")
    transaction_date: Optional[date] = Field(None, alias="date", description="Calendar date of the transaction")
    category: str = Field(default=config.TRADING_CATEGORY, description="Back-office operation category")
    kind: str = Field(..., description="BUY, SELL or ARBITRAGE; other values are carried but ignored")
    asset_currency: str = Field(..., alias="assetCurrency", description="Currency being traded (inventory key)")
    asset_quantity: Decimal = Field(default=Decimal(0), alias="assetQuantity", description="Magnitude of asset currency moved")
    valuation_currency: Optional[str] = Field(None, alias="valuationCurrency", description="Currency the total value is denominated in")
    total_value: Decimal = Field(default=Decimal(0), alias="totalValue", description="Monetary total in the valuation currency")
    arbitrage_profit: Optional[Decimal] = Field(None, alias="arbitrageProfit", description="Realized profit of an ARBITRAGE record")
    sequence: int = Field(default=0, description="Position in the input collection; breaks same-day ties")

    # --- Computed by the ledger replayer ---
    realized_profit: Decimal = Field(default=Decimal(0), alias="realizedProfit")
    profit_currency: Optional[str] = Field(None, alias="profitCurrency")
    profit_source: Optional[ProfitSource] = Field(None, alias="profitSource")
    cost_of_goods_sold: Optional[Decimal] = Field(None, alias="costOfGoodsSold")
    average_cost_at_sale: Optional[Decimal] = Field(None, alias="averageCostAtSale")
    realized_margin_pct: Optional[Decimal] = Field(None, alias="realizedMarginPct")

    @field_validator("transaction_id", mode="before")
    @classmethod
    def stringify_id(cls, v: Any) -> Any:
        if isinstance(v, (int, Decimal)) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("kind", mode="before")
    @classmethod
    def normalize_kind(cls, v: Any) -> Any:
        """Back-office codes (COMPRA, VENTA, ARBITRAJE) map onto the engine kinds."""
        if isinstance(v, str):
            code = v.strip().upper()
            return KIND_ALIASES.get(code, code)
        return v

    @field_validator("transaction_date", mode="before")
    @classmethod
    def truncate_to_day(cls, v: Any) -> Any:
        """Datetimes and ISO timestamps are reduced to their calendar day."""
        if isinstance(v, datetime):
            return v.date()
        if isinstance(v, str) and len(v) > 10 and v[10] in "T ":
            return v[:10]
        return v

    @field_validator("asset_quantity", mode="after")
    @classmethod
    def quantity_magnitude(cls, v: Decimal) -> Decimal:
        return abs(v)

    model_config = ConfigDict(
        populate_by_name=True,
        from_attributes=True,
        extra="ignore",
    )
