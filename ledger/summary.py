from typing import Sequence

from ledger.domain import Expense, PeriodTotal, SpendingSummary, to_amount
from ledger.periods import Now, as_day, day_key, month_key, week_bounds


def spending_summary(expenses: Sequence[Expense], now: Now) -> SpendingSummary:
    """Totals and counts for today, this week, this month and all time."""
    today = day_key(as_day(now))
    week_first, week_last = week_bounds(today)
    this_month = month_key(today)

    sums = {"today": 0.0, "week": 0.0, "month": 0.0}
    counts = {"today": 0, "week": 0, "month": 0}
    total_all = 0.0

    for e in expenses:
        amt = to_amount(e.amount)
        total_all += amt
        key = day_key(e.date)
        if not key:
            continue
        if key == today:
            sums["today"] += amt
            counts["today"] += 1
        if week_first <= key <= week_last:
            sums["week"] += amt
            counts["week"] += 1
        if key[:7] == this_month:
            sums["month"] += amt
            counts["month"] += 1

    return SpendingSummary(
        today=PeriodTotal(sums["today"], counts["today"]),
        week=PeriodTotal(sums["week"], counts["week"]),
        month=PeriodTotal(sums["month"], counts["month"]),
        all_time=PeriodTotal(total_all, len(expenses)),
    )
