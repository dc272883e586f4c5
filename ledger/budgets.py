"""Budget period matching and progress.

A budget covers one day, one Monday-Sunday week or one calendar month, for
either all spending (``overall``) or a single category. Progress is
recomputed from scratch on every call; nothing here is cached or stored.
"""
from typing import Iterable, List, Sequence

from ledger.domain import (
    Budget,
    BudgetProgress,
    BudgetState,
    Expense,
    PeriodType,
    Scope,
    effective_category,
    parse_period_type,
    parse_scope,
    to_amount,
)
from ledger.logging_setup import get_logger
from ledger.periods import day_key, month_start, week_start

logger = get_logger(__name__)

NEAR_THRESHOLD = 0.8
OVER_THRESHOLD = 1.0


def classify(ratio: float) -> BudgetState:
    if ratio >= OVER_THRESHOLD:
        return BudgetState.OVER
    if ratio >= NEAR_THRESHOLD:
        return BudgetState.NEAR
    return BudgetState.OK


def in_period(expense: Expense, budget: Budget) -> bool:
    date_key = day_key(expense.date)
    if not date_key or not budget.period_start:
        return False

    period_type = parse_period_type(budget.period_type)
    if period_type is PeriodType.DAY:
        return date_key == day_key(budget.period_start)
    if period_type is PeriodType.WEEK:
        return week_start(date_key) == day_key(budget.period_start)
    if period_type is PeriodType.MONTH:
        return month_start(date_key) == month_start(budget.period_start)
    return False


def matches(expense: Expense, budget: Budget) -> bool:
    """True if the expense falls in the budget's period and scope."""
    if not in_period(expense, budget):
        return False

    scope = parse_scope(budget.scope)
    if scope is Scope.OVERALL:
        return True
    if scope is Scope.CATEGORY:
        return effective_category(expense.category) == effective_category(budget.category)
    return False


def progress_for(budget: Budget, expenses: Iterable[Expense]) -> BudgetProgress:
    limit = to_amount(budget.amount)
    spent = sum((to_amount(e.amount) for e in expenses if matches(e, budget)), 0.0)
    ratio = spent / limit if limit > 0 else 0.0

    return BudgetProgress(
        budget=budget,
        spent=spent,
        ratio=ratio,
        progress=min(1.0, ratio),
        state=classify(ratio),
    )


def progress_for_all(
    budgets: Iterable[Budget], expenses: Sequence[Expense]
) -> List[BudgetProgress]:
    results = [progress_for(b, expenses) for b in budgets]
    logger.debug(
        "computed progress for %d budgets over %d expenses", len(results), len(expenses)
    )
    return results


def remaining(progress: BudgetProgress) -> float:
    return to_amount(progress.budget.amount) - progress.spent
