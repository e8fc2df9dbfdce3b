# src/fx_inventory_engine/logic/parser.py

import logging
from decimal import Decimal
from typing import Any, Iterable, Mapping, Optional, Union

from pydantic import ValidationError

from .. import config
from ..constants import AMOUNT_FIELDS, FIELD_ALIASES, UNKNOWN_CURRENCY, UNKNOWN_ID_PREFIX
from ..core.enums.issue_type import IssueType
from ..core.models.transaction import Transaction
from ..exceptions import AmountParseError, DateParseError
from .amount_parser import parse_amount
from .date_helpers import coerce_date
from .issue_reporter import IssueReporter

logger = logging.getLogger(__name__)

RawTransaction = Union[Transaction, Mapping[str, Any]]


class TransactionParser:
    """
    Turns the back-office movement records into Transaction objects.
    Bad fields are zeroed and reported instead of rejecting the record.
    """
    def __init__(self, issue_reporter: IssueReporter, trading_category: Optional[str] = None):
        self._issue_reporter = issue_reporter
        self._trading_category = trading_category or config.TRADING_CATEGORY

    def parse_transactions(self, raw_transactions: Iterable[RawTransaction]) -> list[Transaction]:
        parsed_transactions: list[Transaction] = []
        for sequence, raw_txn in enumerate(raw_transactions):
            if isinstance(raw_txn, Transaction):
                parsed_transactions.append(self._copy_transaction(raw_txn, sequence))
            else:
                parsed_transactions.append(self._parse_mapping(raw_txn, sequence))
        return parsed_transactions

    def is_trading(self, transaction: Transaction) -> bool:
        return transaction.category == self._trading_category

    def _copy_transaction(self, transaction: Transaction, sequence: int) -> Transaction:
        copied = transaction.model_copy(update={"sequence": sequence})
        if copied.transaction_date is None and self.is_trading(copied):
            self._report_missing_date(copied.transaction_id)
        return copied

    def _parse_mapping(self, raw_data: Mapping[str, Any], sequence: int) -> Transaction:
        canonical = self._canonicalize(raw_data)

        transaction_id = canonical.get("transaction_id")
        if transaction_id is None or transaction_id == "":
            transaction_id = f"{UNKNOWN_ID_PREFIX}_{sequence}"
        canonical["transaction_id"] = transaction_id

        if canonical.get("category") in (None, ""):
            canonical["category"] = self._trading_category
        is_trading = str(canonical["category"]) == self._trading_category

        for field in AMOUNT_FIELDS:
            canonical[field] = self._read_amount(transaction_id, field, canonical.get(field), is_trading)

        canonical["transaction_date"] = self._read_date(transaction_id, canonical.get("transaction_date"), is_trading)
        canonical["sequence"] = sequence

        try:
            return Transaction.model_validate(canonical)
        except ValidationError as e:
            error_messages = "; ".join([f"{err.get('loc', ['unknown'])[0]}: {err['msg']}" for err in e.errors()])
            error_reason = f"Validation error: {error_messages}"
            logger.warning(f"Transaction {transaction_id} could not be validated and contributes zero: {error_reason}")
            self._issue_reporter.add_issue(str(transaction_id), IssueType.INVALID_RECORD, error_reason)
            return self._create_stub_transaction(canonical)

    def _canonicalize(self, raw_data: Mapping[str, Any]) -> dict[str, Any]:
        canonical: dict[str, Any] = {}
        for field, aliases in FIELD_ALIASES.items():
            for alias in aliases:
                if alias in raw_data:
                    canonical[field] = raw_data[alias]
                    break
        return canonical

    def _read_amount(self, transaction_id: Any, field: str, value: Any, is_trading: bool) -> Optional[Decimal]:
        try:
            amount = parse_amount(value)
        except AmountParseError as e:
            if is_trading:
                self._issue_reporter.add_issue(
                    str(transaction_id), IssueType.MALFORMED_AMOUNT, f"{field}: {e.message} Treated as zero."
                )
            amount = None

        if amount is None and field != "arbitrage_profit":
            return Decimal(0)
        return amount

    def _read_date(self, transaction_id: Any, value: Any, is_trading: bool):
        try:
            parsed_date = coerce_date(value)
        except DateParseError as e:
            if is_trading:
                self._issue_reporter.add_issue(str(transaction_id), IssueType.MISSING_DATE, e.message)
            return None

        if parsed_date is None and is_trading:
            self._report_missing_date(transaction_id)
        return parsed_date

    def _report_missing_date(self, transaction_id: Any):
        self._issue_reporter.add_issue(
            str(transaction_id), IssueType.MISSING_DATE,
            "Transaction has no date; replayed before all dated transactions."
        )

    def _create_stub_transaction(self, canonical: dict[str, Any]) -> Transaction:
        """Creates a zero-valued Transaction standing in for a record that failed validation."""
        category = canonical.get("category")
        asset_currency = canonical.get("asset_currency")
        return Transaction(
            transaction_id=str(canonical["transaction_id"]),
            transaction_date=canonical.get("transaction_date"),
            category=category if isinstance(category, str) else str(category),
            kind="INVALID",
            asset_currency=asset_currency if isinstance(asset_currency, str) and asset_currency else UNKNOWN_CURRENCY,
            sequence=canonical["sequence"],
        )
