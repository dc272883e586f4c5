"""Derived "smart insights" over the expense log.

Every builder takes the evaluation instant ``now`` as a parameter and
returns a ``Maybe[Insight]``; ``Nothing()`` means there was no qualifying
data and the insight is left out. ``derive_insights`` strings them together
in display order.

Busiest weekday ties go to the lowest weekday index, Sunday=0 first.
"""
import math
from datetime import date, timedelta
from typing import List, Sequence

from ledger import aggregation
from ledger.domain import (
    CategoryShare,
    Direction,
    Expense,
    Insight,
    InsightKind,
    Tone,
    effective_category,
    to_amount,
)
from ledger.filters import in_month, iter_expenses
from ledger.formatting import format_amount, plural
from ledger.functional import Maybe, Nothing, Some, collect, from_optional
from ledger.logging_setup import get_logger
from ledger.periods import Now, as_day, day_key, previous_month

logger = get_logger(__name__)

TOP_CATEGORY_COUNT = 3
STREAK_WINDOW_DAYS = 60
MIN_NO_SPEND_STREAK = 2
MIN_SPEND_STREAK = 3

WEEKDAY_NAMES = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")


def round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def _month_expenses(expenses: Sequence[Expense], year: int, month: int) -> List[Expense]:
    return list(iter_expenses(expenses, in_month(year, month)))


def top_categories(expenses: Sequence[Expense], now: Now) -> Maybe[Insight]:
    today = as_day(now)
    totals = aggregation.by_category(_month_expenses(expenses, today.year, today.month))
    if not totals:
        return Nothing()

    month_total = sum(t.total for t in totals)
    shares = [
        CategoryShare(
            t.category,
            t.total,
            round_half_up(t.total / month_total * 100) if month_total > 0 else 0,
        )
        for t in totals[:TOP_CATEGORY_COUNT]
    ]
    text = ", ".join(
        f"{s.category} {format_amount(s.amount)} ({s.percentage}%)" for s in shares
    )
    return Some(Insight(
        kind=InsightKind.TOP_CATEGORIES,
        label="Top categories this month",
        text=text,
        tone=Tone.NEUTRAL,
        data={"categories": shares, "total": month_total},
    ))


def biggest_expense(expenses: Sequence[Expense], now: Now) -> Maybe[Insight]:
    today = as_day(now)
    this_month = _month_expenses(expenses, today.year, today.month)
    # max keeps the first of equal amounts
    biggest = max(this_month, key=lambda e: to_amount(e.amount), default=None)

    def _insight(e: Expense) -> Insight:
        what = e.description or effective_category(e.category)
        return Insight(
            kind=InsightKind.BIGGEST_EXPENSE,
            label="Biggest expense this month",
            text=f"{format_amount(e.amount)} on {day_key(e.date)}: {what}",
            tone=Tone.NEUTRAL,
            data={"expense": e},
        )

    return from_optional(biggest).map(_insight)


def month_over_month(expenses: Sequence[Expense], now: Now) -> Maybe[Insight]:
    today = as_day(now)
    prev_year, prev_month = previous_month(today.year, today.month)
    current = aggregation.total_spent(iter_expenses(expenses, in_month(today.year, today.month)))
    previous = aggregation.total_spent(iter_expenses(expenses, in_month(prev_year, prev_month)))
    diff = current - previous

    if previous > 0:
        percent = round_half_up(abs(diff) / previous * 100)
        if diff > 0:
            direction, tone = Direction.UP, Tone.NEGATIVE
            text = f"Spending is up {percent}% ({format_amount(diff)} more)"
        elif diff < 0:
            direction, tone = Direction.DOWN, Tone.POSITIVE
            text = f"Spending is down {percent}% ({format_amount(abs(diff))} less)"
        else:
            direction, tone = Direction.SAME, Tone.NEUTRAL
            text = "Spending is exactly the same as last month"
    elif current > 0:
        percent = None
        direction, tone = Direction.NEW, Tone.NEUTRAL
        text = f"No spending recorded last month. This month: {format_amount(current)}"
    else:
        return Nothing()

    return Some(Insight(
        kind=InsightKind.MONTH_OVER_MONTH,
        label="vs last month",
        text=text,
        tone=tone,
        data={
            "current": current,
            "previous": previous,
            "difference": diff,
            "percent": percent,
            "direction": direction,
        },
    ))


def _run_length(days_with_spending: set, today: date, spending: bool) -> int:
    n = 0
    for i in range(STREAK_WINDOW_DAYS):
        key = (today - timedelta(days=i)).isoformat()
        if (key in days_with_spending) != spending:
            break
        n += 1
    return n


def spending_streak(expenses: Sequence[Expense], now: Now) -> Maybe[Insight]:
    """No-spend streak if there is one, otherwise a spend streak."""
    today = as_day(now)
    days_with_spending = {key for key in (day_key(e.date) for e in expenses) if key}

    no_spend = _run_length(days_with_spending, today, spending=False)
    if no_spend >= MIN_NO_SPEND_STREAK:
        return Some(Insight(
            kind=InsightKind.NO_SPEND_STREAK,
            label="No-spend streak",
            text=f"{plural(no_spend, 'day')} in a row with no expenses, keep it up!",
            tone=Tone.POSITIVE,
            data={"days": no_spend},
        ))
    if no_spend > 0:
        return Nothing()

    spend = _run_length(days_with_spending, today, spending=True)
    if spend >= MIN_SPEND_STREAK:
        return Some(Insight(
            kind=InsightKind.SPEND_STREAK,
            label="Spending streak",
            text=f"{plural(spend, 'day')} in a row with expenses",
            tone=Tone.NEGATIVE,
            data={"days": spend},
        ))
    return Nothing()


def busiest_weekday(expenses: Sequence[Expense], now: Now) -> Maybe[Insight]:
    totals = aggregation.by_weekday(expenses)
    if not totals:
        return Nothing()

    # max() keeps the first maximum, so iterate indices in ascending order
    index = max(sorted(totals), key=lambda i: totals[i])
    name = WEEKDAY_NAMES[index]
    return Some(Insight(
        kind=InsightKind.BUSIEST_WEEKDAY,
        label="Busiest spending day",
        text=f"Most of your expenses land on {name}s",
        tone=Tone.NEUTRAL,
        data={"weekday": index, "name": name, "total": totals[index]},
    ))


BUILDERS = (top_categories, biggest_expense, month_over_month, spending_streak, busiest_weekday)


def derive_insights(expenses: Sequence[Expense], now: Now) -> List[Insight]:
    if not expenses:
        return []
    insights = collect(build(expenses, now) for build in BUILDERS)
    logger.debug("derived %d insights for %s", len(insights), as_day(now))
    return insights
