"""pandas views of the rollups, shaped for plotly charts."""

from typing import Iterable, Sequence

import pandas as pd

from ledger import aggregation
from ledger.budgets import remaining
from ledger.domain import BudgetProgress, Expense, to_amount
from ledger.formatting import budget_label, period_label

CATEGORY_COLUMNS = ["category", "total"]
MONTH_COLUMNS = ["month", "total"]
DAY_COLUMNS = ["date", "total"]
PROGRESS_COLUMNS = ["budget", "period", "spent", "limit", "remaining", "progress", "state"]


def category_frame(expenses: Iterable[Expense]) -> pd.DataFrame:
    rows = aggregation.by_category(expenses)
    return pd.DataFrame([r._asdict() for r in rows], columns=CATEGORY_COLUMNS)


def monthly_frame(expenses: Iterable[Expense]) -> pd.DataFrame:
    rows = aggregation.by_month(expenses)
    return pd.DataFrame([r._asdict() for r in rows], columns=MONTH_COLUMNS)


def daily_frame(expenses: Iterable[Expense]) -> pd.DataFrame:
    rows = aggregation.by_day(expenses)
    df = pd.DataFrame([r._asdict() for r in rows], columns=DAY_COLUMNS)
    df["date"] = pd.to_datetime(df["date"], errors="coerce")
    return df


def progress_frame(progresses: Sequence[BudgetProgress]) -> pd.DataFrame:
    rows = [
        {
            "budget": budget_label(p.budget),
            "period": period_label(p.budget),
            "spent": p.spent,
            "limit": to_amount(p.budget.amount),
            "remaining": remaining(p),
            "progress": p.progress,
            "state": p.state.value,
        }
        for p in progresses
    ]
    return pd.DataFrame(rows, columns=PROGRESS_COLUMNS)
