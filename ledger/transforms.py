import json
from dataclasses import replace
from typing import Any, Mapping, Tuple

from ledger.domain import Budget, Expense, PeriodType, Scope
from ledger.logging_setup import get_logger
from ledger.periods import day_key

logger = get_logger(__name__)

# Records are cached by value, so every stored field must be hashable.
_SCALARS = (str, int, float)


def _scalar(value: Any) -> Any:
    if value is None or isinstance(value, _SCALARS):
        return value
    return str(value)


def _category(value: Any) -> Any:
    # a list or object is not a category name
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return None


def _pick(row: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    for k in keys:
        if row.get(k) is not None:
            return _scalar(row[k])
    return default


def expense_from_row(row: Mapping[str, Any]) -> Expense:
    """Map a stored row (camelCase or snake_case keys) to an Expense."""
    return Expense(
        id=str(row["id"]),
        date=_pick(row, "date", default=""),
        category=_category(row.get("category")),
        description=_pick(row, "description", default=""),
        amount=_scalar(row.get("amount")),
        payment_method=_pick(row, "paymentMethod", "payment_method", default=""),
        notes=_pick(row, "notes", default=""),
        created_at=_pick(row, "createdAt", "created_at"),
    )


def budget_from_row(row: Mapping[str, Any]) -> Budget:
    return Budget(
        id=str(row["id"]),
        scope=_pick(row, "scope", default=Scope.OVERALL.value),
        category=_category(row.get("category")),
        period_type=_pick(row, "periodType", "period_type", default=PeriodType.MONTH.value),
        period_start=_pick(row, "periodStart", "period_start", default=""),
        amount=_scalar(row.get("amount")),
        created_at=_pick(row, "createdAt", "created_at"),
    )


def load_seed(path: str) -> Tuple[Tuple[Expense, ...], Tuple[Budget, ...]]:
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    expenses = tuple(expense_from_row(e) for e in data.get("expenses", []))
    budgets = tuple(budget_from_row(b) for b in data.get("budgets", []))
    logger.info("loaded %d expenses and %d budgets from %s", len(expenses), len(budgets), path)

    return expenses, budgets


def add_expense(expenses: Tuple[Expense, ...], e: Expense) -> Tuple[Expense, ...]:
    return expenses + (e,)


def update_expense(expenses: Tuple[Expense, ...], eid: str, **changes: Any) -> Tuple[Expense, ...]:
    return tuple(replace(e, **changes) if e.id == eid else e for e in expenses)


def remove_expense(expenses: Tuple[Expense, ...], eid: str) -> Tuple[Expense, ...]:
    return tuple(e for e in expenses if e.id != eid)


def add_budget(budgets: Tuple[Budget, ...], b: Budget) -> Tuple[Budget, ...]:
    return budgets + (b,)


def update_budget(budgets: Tuple[Budget, ...], bid: str, **changes: Any) -> Tuple[Budget, ...]:
    return tuple(replace(b, **changes) if b.id == bid else b for b in budgets)


def remove_budget(budgets: Tuple[Budget, ...], bid: str) -> Tuple[Budget, ...]:
    return tuple(b for b in budgets if b.id != bid)


def sort_expenses(expenses: Tuple[Expense, ...]) -> Tuple[Expense, ...]:
    """Newest first: by date, then by creation time."""
    return tuple(
        sorted(expenses, key=lambda e: (day_key(e.date), e.created_at or ""), reverse=True)
    )
