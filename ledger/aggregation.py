"""Bucket-and-sum rollups over expenses.

Amounts go through ``to_amount`` and categories through
``effective_category``, so none of these functions raise on junk records.
"""
from collections import defaultdict
from typing import Dict, Iterable, List

from ledger.domain import (
    CategoryTotal,
    DayTotal,
    Expense,
    MonthTotal,
    effective_category,
    parse_date,
    to_amount,
)
from ledger.periods import day_key, js_weekday, month_key


def total_spent(expenses: Iterable[Expense]) -> float:
    return sum((to_amount(e.amount) for e in expenses), 0.0)


def by_category(expenses: Iterable[Expense]) -> List[CategoryTotal]:
    # dicts keep insertion order, and sorted() is stable, so ties stay in
    # encounter order
    totals: Dict[str, float] = {}
    for e in expenses:
        cat = effective_category(e.category)
        totals[cat] = totals.get(cat, 0.0) + to_amount(e.amount)

    return sorted(
        (CategoryTotal(cat, total) for cat, total in totals.items()),
        key=lambda item: item.total,
        reverse=True,
    )


def by_month(expenses: Iterable[Expense]) -> List[MonthTotal]:
    totals: Dict[str, float] = defaultdict(float)
    for e in expenses:
        key = month_key(e.date)
        if not key:
            continue
        totals[key] += to_amount(e.amount)

    return [MonthTotal(month, totals[month]) for month in sorted(totals)]


def by_day(expenses: Iterable[Expense]) -> List[DayTotal]:
    totals: Dict[str, float] = defaultdict(float)
    for e in expenses:
        key = day_key(e.date)
        if not key:
            continue
        totals[key] += to_amount(e.amount)

    return [DayTotal(day, totals[day]) for day in sorted(totals)]


def by_weekday(expenses: Iterable[Expense]) -> Dict[int, float]:
    """Totals keyed by weekday, Sunday=0 .. Saturday=6, dated expenses only."""
    totals: Dict[int, float] = defaultdict(float)
    for e in expenses:
        d = parse_date(e.date)
        if d is None:
            continue
        totals[js_weekday(d)] += to_amount(e.amount)
    return dict(totals)
