# src/fx_inventory_engine/logic/cost_basis.py
import logging
from decimal import Decimal
from typing import Dict, NamedTuple, Optional

from .. import config
from ..core.models.response import PositionSnapshot
from ..core.models.transaction import Transaction
from .stock_position import StockPosition

logger = logging.getLogger(__name__)


class SaleDisposition(NamedTuple):
    cost_of_goods_sold: Decimal
    average_unit_cost: Decimal
    available_quantity: Decimal
    sold_quantity: Decimal

    @property
    def oversold(self) -> bool:
        return self.sold_quantity > self.available_quantity


class WeightedAverageCostBook:
    """
    Implements the Weighted Average Cost (WAC) method over per-currency stock
    positions. A book is owned by a single replay and never shared.
    """
    def __init__(self, default_valuation_currency: Optional[str] = None):
        self._positions: Dict[str, StockPosition] = {}
        self._default_valuation_currency = default_valuation_currency or config.DEFAULT_VALUATION_CURRENCY
        logger.debug("WeightedAverageCostBook initialized.")

    def _get_position(self, transaction: Transaction) -> StockPosition:
        currency = transaction.asset_currency
        if currency not in self._positions:
            self._positions[currency] = StockPosition(
                currency=currency,
                valuation_currency=transaction.valuation_currency or self._default_valuation_currency,
            )
        return self._positions[currency]

    def add_purchase(self, transaction: Transaction):
        position = self._get_position(transaction)
        position.total_cost_basis += transaction.total_value
        position.quantity += transaction.asset_quantity
        if transaction.valuation_currency:
            position.associated_valuation_currency = transaction.valuation_currency
        position.floor_cost_basis()
        position.recompute_average_cost()

    def consume_sale(self, transaction: Transaction) -> SaleDisposition:
        """
        Removes the sold quantity at the current average cost. Overselling is
        allowed; the position is emptied instead of going negative.
        """
        position = self._get_position(transaction)
        available_quantity = position.quantity
        average_unit_cost = position.average_unit_cost
        cogs = transaction.asset_quantity * average_unit_cost

        position.quantity -= transaction.asset_quantity
        position.total_cost_basis -= cogs
        position.close_if_exhausted()

        return SaleDisposition(
            cost_of_goods_sold=cogs,
            average_unit_cost=average_unit_cost,
            available_quantity=available_quantity,
            sold_quantity=transaction.asset_quantity,
        )

    def record_sale_profit(self, transaction: Transaction, realized_profit: Decimal):
        self._get_position(transaction).realized_profit_from_sales += realized_profit

    def record_arbitrage_profit(self, transaction: Transaction, realized_profit: Decimal):
        self._get_position(transaction).realized_profit_from_arbitrage += realized_profit

    def get_available_quantity(self, currency: str) -> Decimal:
        position = self._positions.get(currency)
        return position.quantity if position else Decimal(0)

    def get_average_cost(self, currency: str) -> Decimal:
        position = self._positions.get(currency)
        return position.average_unit_cost if position else Decimal(0)

    def snapshot(self) -> Dict[str, PositionSnapshot]:
        return {currency: position.to_snapshot() for currency, position in self._positions.items()}
