# tests/unit/test_profit_calculator.py

from decimal import Decimal
from unittest.mock import MagicMock

import pytest
from prometheus_client import REGISTRY

from fx_inventory_engine.core.enums.issue_type import IssueType
from fx_inventory_engine.core.enums.transaction_kind import ProfitSource
from fx_inventory_engine.logic.cost_basis import SaleDisposition, WeightedAverageCostBook
from fx_inventory_engine.logic.issue_reporter import IssueReporter
from fx_inventory_engine.logic.profit_calculator import ProfitCalculator


@pytest.fixture
def mock_book():
    return MagicMock(spec=WeightedAverageCostBook)


@pytest.fixture
def issue_reporter():
    return IssueReporter()


@pytest.fixture
def profit_calculator(mock_book, issue_reporter):
    return ProfitCalculator(book=mock_book, issue_reporter=issue_reporter, default_valuation_currency="PESO")


def test_buy_strategy(profit_calculator, mock_book, make_transaction):
    buy = make_transaction("BUY", quantity="10", total="1500")

    profit_calculator.calculate_transaction_profit(buy)

    assert buy.realized_profit == Decimal(0)
    assert buy.profit_source is None
    mock_book.add_purchase.assert_called_once_with(buy)


def test_sell_strategy_gain(profit_calculator, mock_book, issue_reporter, make_transaction):
    sell = make_transaction("SELL", quantity="5", total="800")
    mock_book.consume_sale.return_value = SaleDisposition(
        cost_of_goods_sold=Decimal("500"),
        average_unit_cost=Decimal("100"),
        available_quantity=Decimal("10"),
        sold_quantity=Decimal("5"),
    )

    profit_calculator.calculate_transaction_profit(sell)

    assert sell.realized_profit == Decimal("300")
    assert sell.cost_of_goods_sold == Decimal("500")
    assert sell.average_cost_at_sale == Decimal("100")
    assert sell.realized_margin_pct == Decimal("60")
    assert sell.profit_source == ProfitSource.SALE
    assert sell.profit_currency == "PESO"
    assert not issue_reporter.has_issues()
    mock_book.consume_sale.assert_called_once_with(sell)
    mock_book.record_sale_profit.assert_called_once_with(sell, Decimal("300"))


def test_sell_strategy_reports_oversell(profit_calculator, mock_book, issue_reporter, make_transaction):
    sell = make_transaction("SELL", quantity="5", total="400", transaction_id="OVER")
    mock_book.consume_sale.return_value = SaleDisposition(
        cost_of_goods_sold=Decimal("500"),
        average_unit_cost=Decimal("100"),
        available_quantity=Decimal("2"),
        sold_quantity=Decimal("5"),
    )

    profit_calculator.calculate_transaction_profit(sell)

    assert sell.realized_profit == Decimal("-100")
    issues = issue_reporter.get_issues()
    assert [(i.transaction_id, i.issue_type) for i in issues] == [("OVER", IssueType.OVERSELL)]


def test_oversell_counter_is_not_labelled_by_currency(profit_calculator, mock_book, make_transaction):
    """
    GIVEN oversells of two free-form asset currencies
    WHEN they are processed
    THEN both increment the same unlabelled counter.
    """
    before = REGISTRY.get_sample_value("fx_inventory_oversell_total")
    mock_book.consume_sale.return_value = SaleDisposition(
        cost_of_goods_sold=Decimal("10"),
        average_unit_cost=Decimal("1"),
        available_quantity=Decimal("0"),
        sold_quantity=Decimal("10"),
    )

    for currency in ("USD", "XYZ-typo"):
        profit_calculator.calculate_transaction_profit(make_transaction("SELL", quantity="10", total="10", currency=currency))

    assert REGISTRY.get_sample_value("fx_inventory_oversell_total") == before + 2
    assert REGISTRY.get_sample_value("fx_inventory_oversell_total", {"currency": "USD"}) is None


def test_sell_without_cost_has_no_margin(profit_calculator, mock_book, make_transaction):
    sell = make_transaction("SELL", quantity="5", total="400")
    mock_book.consume_sale.return_value = SaleDisposition(
        cost_of_goods_sold=Decimal(0),
        average_unit_cost=Decimal(0),
        available_quantity=Decimal(0),
        sold_quantity=Decimal("5"),
    )

    profit_calculator.calculate_transaction_profit(sell)

    assert sell.realized_profit == Decimal("400")
    assert sell.realized_margin_pct is None


def test_sell_profit_currency_follows_the_sale(profit_calculator, mock_book, make_transaction):
    sell = make_transaction("SELL", quantity="1", total="1", valuation_currency="USDT")
    mock_book.consume_sale.return_value = SaleDisposition(Decimal(0), Decimal(0), Decimal(1), Decimal(1))

    profit_calculator.calculate_transaction_profit(sell)

    assert sell.profit_currency == "USDT"


def test_arbitrage_strategy(profit_calculator, mock_book, make_transaction):
    arbitrage = make_transaction("ARBITRAGE", quantity="1000", total="5000", arbitrage_profit="300")

    profit_calculator.calculate_transaction_profit(arbitrage)

    assert arbitrage.realized_profit == Decimal("300")
    assert arbitrage.profit_source == ProfitSource.ARBITRAGE
    assert arbitrage.profit_currency == "USD"
    mock_book.record_arbitrage_profit.assert_called_once_with(arbitrage, Decimal("300"))
    mock_book.add_purchase.assert_not_called()
    mock_book.consume_sale.assert_not_called()


def test_arbitrage_without_profit_counts_as_zero(profit_calculator, mock_book, make_transaction):
    arbitrage = make_transaction("ARBITRAGE")

    profit_calculator.calculate_transaction_profit(arbitrage)

    assert arbitrage.realized_profit == Decimal(0)


def test_unknown_kind_has_no_effect(profit_calculator, mock_book, issue_reporter, make_transaction):
    transfer = make_transaction("TRANSFER", quantity="10", total="100")

    profit_calculator.calculate_transaction_profit(transfer)

    assert transfer.realized_profit == Decimal(0)
    assert mock_book.method_calls == []
    assert not issue_reporter.has_issues()
