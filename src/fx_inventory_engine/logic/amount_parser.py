# src/fx_inventory_engine/logic/amount_parser.py
import re
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from ..exceptions import AmountParseError

_STRIP_PATTERN = re.compile(r"[$\s]")


def parse_amount(value: Any) -> Optional[Decimal]:
    """
    Reads a quantity or monetary amount typed into the back-office forms.

    Both Spanish ("1.000.000,50") and US ("1,000,000.50") separators are
    accepted. Returns None when the value is empty and raises AmountParseError
    when it is present but not a finite number.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        raise AmountParseError(f"Boolean '{value}' is not an amount.")
    if isinstance(value, Decimal):
        return _finite(value, value)
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, float):
        return _finite(Decimal(str(value)), value)

    text = _STRIP_PATTERN.sub("", str(value))
    if text == "":
        return None

    try:
        return _finite(Decimal(_normalize_separators(text)), value)
    except InvalidOperation as e:
        raise AmountParseError(f"Invalid amount '{value}'.") from e


def _finite(amount: Decimal, original: Any) -> Decimal:
    if not amount.is_finite():
        raise AmountParseError(f"Amount '{original}' is not a finite number.")
    return amount


def _normalize_separators(text: str) -> str:
    has_comma = "," in text
    has_dot = "." in text

    if has_comma and has_dot:
        # Right-most separator is the decimal one
        if text.rfind(",") > text.rfind("."):
            return text.replace(".", "").replace(",", ".")
        return text.replace(",", "")

    if has_comma:
        after_comma = text[text.index(",") + 1:]
        if 0 < len(after_comma) <= 4 and "," not in after_comma:
            return text.replace(",", ".")
        return text.replace(",", "")

    if has_dot:
        parts = text.split(".")
        if len(parts) == 2:
            before_dot, after_dot = parts
            digits_before = before_dot.lstrip("+-")
            if len(after_dot) == 3 and 1 <= len(digits_before) <= 3:
                try:
                    as_decimal = Decimal(text)
                    as_thousands = Decimal(before_dot + after_dot)
                except InvalidOperation:
                    return text
                if abs(as_decimal) < 100 and abs(as_thousands) >= 1000:
                    return before_dot + after_dot
            return text
        if len(parts[-1]) == 3:
            return "".join(parts)
        return "".join(parts[:-1]) + "." + parts[-1]

    return text
