# src/fx_inventory_engine/logic/sorter.py
from datetime import date

from ..core.models.transaction import Transaction


class TransactionSorter:
    """
    Puts transactions in the order the weighted average cost must be replayed in.
    """
    def sort_transactions(self, transactions: list[Transaction]) -> list[Transaction]:
        """
        Returns a new list sorted by:
        1. transaction_date ascending (undated records first).
        2. sequence ascending, so same-day records keep their input order.
        """
        return sorted(
            transactions,
            key=lambda txn: (txn.transaction_date or date.min, txn.sequence)
        )
