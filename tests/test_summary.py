from datetime import date

from ledger.domain import Expense, PeriodTotal
from ledger.summary import spending_summary


def make_sample():
    return (
        Expense("e1", "2024-03-13", "Food", "", 100),
        Expense("e2", "2024-03-11", "Food", "", 50),
        Expense("e3", "2024-03-10", "Food", "", 20),  # Sunday of the week before
        Expense("e4", "2024-03-01", "Bills", "", 30),
        Expense("e5", "2024-02-28", "Bills", "", 5),
        Expense("e6", "", "Other", "", 7),
        Expense("e7", "2024-03-14", "Food", "", "abc"),
    )


def test_spending_summary_buckets():
    summary = spending_summary(make_sample(), date(2024, 3, 13))
    assert summary.today == PeriodTotal(100.0, 1)
    assert summary.week == PeriodTotal(150.0, 3)
    assert summary.month == PeriodTotal(200.0, 5)
    assert summary.all_time == PeriodTotal(212.0, 7)


def test_spending_summary_empty():
    summary = spending_summary((), date(2024, 3, 13))
    assert summary.today == PeriodTotal(0.0, 0)
    assert summary.all_time == PeriodTotal(0.0, 0)
