import logging

from ledger import config
from ledger.domain import Budget
from ledger.formatting import budget_label, format_amount, period_label, plural
from ledger.logging_setup import _parse_level, get_logger


def test_format_amount():
    assert format_amount(1234.5) == "₦1,234.50"
    assert format_amount("abc") == "₦0.00"


def test_format_amount_uses_configured_symbol(monkeypatch):
    monkeypatch.setattr(config, "CURRENCY_SYMBOL", "$")
    assert format_amount(3) == "$3.00"


def test_period_label():
    assert period_label(Budget("b1", "overall", None, "day", "2024-03-12", 1)) == "12 Mar 2024"
    assert period_label(Budget("b2", "overall", None, "week", "2024-03-11", 1)) == "Week of 11 Mar 2024"
    assert period_label(Budget("b3", "overall", None, "month", "2024-03-01", 1)) == "March 2024"
    assert period_label(Budget("b4", "overall", None, "year", "2024-03-01", 1)) == "2024-03-01"
    assert period_label(Budget("b5", "overall", None, "month", "", 1)) == "—"


def test_budget_label():
    assert budget_label(Budget("b1", "overall", None, "month", "2024-03-01", 1)) == "Overall"
    assert budget_label(Budget("b2", "category", "Food", "month", "2024-03-01", 1)) == "Food"
    assert budget_label(Budget("b3", "category", None, "month", "2024-03-01", 1)) == "Category"


def test_plural():
    assert plural(1, "day") == "1 day"
    assert plural(3, "day") == "3 days"


def test_log_level_parsing(monkeypatch):
    assert _parse_level("debug") == logging.DEBUG
    assert _parse_level(30) == logging.WARNING
    assert _parse_level("nonsense") == logging.INFO
    monkeypatch.setenv("LEDGER_LOG_LEVEL", "ERROR")
    assert _parse_level(None) == logging.ERROR


def test_get_logger_is_under_package():
    assert get_logger("ledger.budgets").name == "ledger.budgets"
    assert logging.getLogger("ledger").handlers
