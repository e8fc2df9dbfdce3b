# tests/conftest.py
from datetime import date
from decimal import Decimal

import pytest

from fx_inventory_engine.core.models.transaction import Transaction


@pytest.fixture
def make_transaction():
    """Factory for trading-category transactions with sensible defaults."""
    counter = {"n": 0}

    def _make(kind, quantity="0", total="0", txn_date=date(2024, 1, 1), currency="USD",
              valuation_currency="PESO", arbitrage_profit=None, transaction_id=None, **extra):
        counter["n"] += 1
        return Transaction(
            transaction_id=transaction_id or f"TXN{counter['n']:03d}",
            transaction_date=txn_date,
            kind=kind,
            asset_currency=currency,
            asset_quantity=Decimal(quantity),
            valuation_currency=valuation_currency,
            total_value=Decimal(total),
            arbitrage_profit=Decimal(arbitrage_profit) if arbitrage_profit is not None else None,
            **extra
        )

    return _make
