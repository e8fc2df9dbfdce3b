# src/fx_inventory_engine/logic/stock_position.py

from decimal import Decimal

from ..core.models.response import PositionSnapshot


class StockPosition:
    """
    Running inventory of one asset currency during a single replay.
    Quantity and cost basis are kept non-negative; the average unit cost only
    moves on purchases and when a sale empties the position.
    """
    def __init__(self, currency: str, valuation_currency: str):
        self.currency = currency
        self.quantity = Decimal(0)
        self.total_cost_basis = Decimal(0)
        self.average_unit_cost = Decimal(0)
        self.associated_valuation_currency = valuation_currency
        self.realized_profit_from_sales = Decimal(0)
        self.realized_profit_from_arbitrage = Decimal(0)

    def recompute_average_cost(self):
        if self.quantity > 0:
            self.average_unit_cost = self.total_cost_basis / self.quantity
        else:
            self.average_unit_cost = Decimal(0)

    def close_if_exhausted(self):
        """Empties the position when a sale drove it to or below zero."""
        if self.quantity <= 0:
            self.quantity = Decimal(0)
            self.total_cost_basis = Decimal(0)
            self.average_unit_cost = Decimal(0)
        else:
            self.floor_cost_basis()

    def floor_cost_basis(self):
        if self.total_cost_basis < 0:
            self.total_cost_basis = Decimal(0)

    @property
    def valuation(self) -> Decimal:
        return self.quantity * self.average_unit_cost

    def to_snapshot(self) -> PositionSnapshot:
        return PositionSnapshot(
            currency=self.currency,
            quantity=self.quantity,
            total_cost_basis=self.total_cost_basis,
            average_unit_cost=self.average_unit_cost,
            associated_valuation_currency=self.associated_valuation_currency,
            realized_profit_from_sales=self.realized_profit_from_sales,
            realized_profit_from_arbitrage=self.realized_profit_from_arbitrage,
        )

    def __repr__(self) -> str:
        return (f"StockPosition(currency='{self.currency}', "
                f"qty={self.quantity:.2f}, "
                f"cost_basis={self.total_cost_basis:.2f}, "
                f"avg_cost={self.average_unit_cost:.4f} {self.associated_valuation_currency})")
