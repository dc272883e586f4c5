from functools import lru_cache
from typing import Tuple

from ledger.budgets import progress_for_all
from ledger.domain import Budget, BudgetProgress, Expense, Insight
from ledger.insights import derive_insights
from ledger.periods import Now

# Arguments are tuples of frozen records, so an edited collection is a new
# key and stale results are never returned.


@lru_cache(maxsize=32)
def cached_progress(
    budgets: Tuple[Budget, ...], expenses: Tuple[Expense, ...]
) -> Tuple[BudgetProgress, ...]:
    return tuple(progress_for_all(budgets, expenses))


@lru_cache(maxsize=32)
def cached_insights(expenses: Tuple[Expense, ...], now: Now) -> Tuple[Insight, ...]:
    return tuple(derive_insights(expenses, now))
