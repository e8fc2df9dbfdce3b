# tests/unit/test_amount_parser.py
from decimal import Decimal

import pytest

from fx_inventory_engine.exceptions import AmountParseError
from fx_inventory_engine.logic.amount_parser import parse_amount


@pytest.mark.parametrize("raw, expected", [
    ("1.000.000,50", Decimal("1000000.50")),
    ("1,000,000.50", Decimal("1000000.50")),
    ("1500,5", Decimal("1500.5")),
    ("1,500000", Decimal("1500000")),
    ("10.000", Decimal("10000")),
    ("150.000", Decimal("150.000")),
    ("1.5", Decimal("1.5")),
    ("1.234.56", Decimal("1234.56")),
    ("1.000.000", Decimal("1000000")),
    ("$ 2 500", Decimal("2500")),
    ("-250,75", Decimal("-250.75")),
    (42, Decimal(42)),
    (12.5, Decimal("12.5")),
    (Decimal("7.25"), Decimal("7.25")),
])
def test_parse_amount_reads_localized_numbers(raw, expected):
    assert parse_amount(raw) == expected


@pytest.mark.parametrize("raw", [None, "", "   ", "$"])
def test_parse_amount_returns_none_for_empty_values(raw):
    assert parse_amount(raw) is None


@pytest.mark.parametrize("raw", ["abc", "12abc", "NaN", "Infinity", True, float("nan")])
def test_parse_amount_rejects_non_numeric_values(raw):
    with pytest.raises(AmountParseError):
        parse_amount(raw)
