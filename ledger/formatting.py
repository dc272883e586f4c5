from typing import Any

from ledger import config
from ledger.domain import Budget, PeriodType, Scope, parse_date, parse_period_type, parse_scope, to_amount


def format_amount(n: Any) -> str:
    return f"{config.CURRENCY_SYMBOL}{to_amount(n):,.2f}"


def format_day(value: Any) -> str:
    d = parse_date(value)
    return f"{d.day} {d.strftime('%b %Y')}" if d else ""


def period_label(budget: Budget) -> str:
    """Human label for a budget period, e.g. "Week of 11 Mar 2024"."""
    d = parse_date(budget.period_start)
    if d is None:
        return "—"

    period_type = parse_period_type(budget.period_type)
    if period_type is PeriodType.DAY:
        return format_day(d)
    if period_type is PeriodType.WEEK:
        return f"Week of {format_day(d)}"
    if period_type is PeriodType.MONTH:
        return d.strftime("%B %Y")
    return str(budget.period_start)


def budget_label(budget: Budget) -> str:
    if parse_scope(budget.scope) is Scope.OVERALL:
        return "Overall"
    return budget.category or "Category"


def plural(n: int, word: str) -> str:
    return f"{n} {word}{'' if n == 1 else 's'}"
