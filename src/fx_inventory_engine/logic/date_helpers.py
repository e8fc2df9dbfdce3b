# src/fx_inventory_engine/logic/date_helpers.py
from datetime import date, datetime
from typing import Any, Optional, Tuple

from dateutil.relativedelta import relativedelta

from ..exceptions import DateParseError


def coerce_date(value: Any) -> Optional[date]:
    """
    Reads a calendar date from a date, datetime or ISO string.
    Returns None for empty values and raises DateParseError for anything else
    that is not a date.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            if len(text) == 10:
                return date.fromisoformat(text)
            return datetime.fromisoformat(text).date()
        except ValueError as e:
            raise DateParseError(f"Invalid date '{value}': {e}") from e
    raise DateParseError(f"Unsupported date value of type {type(value).__name__}.")


def month_key(value: date) -> str:
    return f"{value.year:04d}-{value.month:02d}"


def month_bounds(as_of: date) -> Tuple[date, date]:
    """Returns the first day of the month of `as_of` and the first day of the next month."""
    start = as_of.replace(day=1)
    return start, start + relativedelta(months=1)
