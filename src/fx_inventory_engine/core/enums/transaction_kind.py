# src/fx_inventory_engine/core/enums/transaction_kind.py
from enum import Enum


class TransactionKind(str, Enum):
    BUY = "BUY"
    SELL = "SELL"
    ARBITRAGE = "ARBITRAGE"

    @classmethod
    def list(cls):
        return [c.value for c in cls]


class ProfitSource(str, Enum):
    """Where a realized profit came from; used as the second half of a utility bucket key."""
    SALE = "SALE"
    ARBITRAGE = "ARBITRAGE"
