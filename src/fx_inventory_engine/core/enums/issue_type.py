# src/fx_inventory_engine/core/enums/issue_type.py
from enum import Enum


class IssueType(str, Enum):
    OVERSELL = "OVERSELL"
    MALFORMED_AMOUNT = "MALFORMED_AMOUNT"
    MISSING_DATE = "MISSING_DATE"
    INVALID_RECORD = "INVALID_RECORD"
