from abc import ABC, abstractmethod
from typing import Any, Callable, Generic, Iterable, TypeVar

from ledger.budgets import progress_for
from ledger.domain import (
    Budget,
    BudgetState,
    Expense,
    Scope,
    parse_date,
    parse_period_type,
    parse_scope,
    to_amount,
)

T = TypeVar('T')
U = TypeVar('U')
E = TypeVar('E')


class Maybe(Generic[T], ABC):

    @abstractmethod
    def map(self, f: Callable[[T], U]) -> 'Maybe[U]':
        pass

    @abstractmethod
    def get_or_else(self, default: T) -> T:
        pass

    @abstractmethod
    def is_some(self) -> bool:
        pass


class Some(Maybe[T]):

    def __init__(self, value: T):
        self._value = value

    def map(self, f: Callable[[T], U]) -> 'Maybe[U]':
        return Some(f(self._value))

    def get_or_else(self, default: T) -> T:
        return self._value

    def is_some(self) -> bool:
        return True

    def __repr__(self) -> str:
        return f"Some({self._value!r})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Some) and self._value == other._value


class Nothing(Maybe[T]):

    def map(self, f: Callable[[T], U]) -> 'Maybe[U]':
        return Nothing()

    def get_or_else(self, default: T) -> T:
        return default

    def is_some(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "Nothing()"

    def __eq__(self, other) -> bool:
        return isinstance(other, Nothing)


def from_optional(value) -> Maybe:
    return Nothing() if value is None else Some(value)


def collect(maybes: Iterable[Maybe[T]]) -> list:
    """Unwrap the Somes, dropping the Nothings."""
    return [m.get_or_else(None) for m in maybes if m.is_some()]


class Either(Generic[E, T], ABC):

    @abstractmethod
    def bind(self, f: Callable[[T], 'Either[E, U]']) -> 'Either[E, U]':
        pass

    @abstractmethod
    def get_or_else(self, default: T) -> T:
        pass

    @abstractmethod
    def is_right(self) -> bool:
        pass

    def is_left(self) -> bool:
        return not self.is_right()

    @abstractmethod
    def get_error(self) -> E:
        pass


class Right(Either[E, T]):

    def __init__(self, value: T):
        self._value = value

    def bind(self, f: Callable[[T], 'Either[E, U]']) -> 'Either[E, U]':
        return f(self._value)

    def get_or_else(self, default: T) -> T:
        return self._value

    def is_right(self) -> bool:
        return True

    def get_error(self) -> E:
        raise ValueError("Cannot get error from Right")

    def __repr__(self) -> str:
        return f"Right({self._value!r})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Right) and self._value == other._value


class Left(Either[E, T]):

    def __init__(self, error: E):
        self._error = error

    def bind(self, f: Callable[[T], 'Either[E, U]']) -> 'Either[E, U]':
        return Left(self._error)

    def get_or_else(self, default: T) -> T:
        return default

    def is_right(self) -> bool:
        return False

    def get_error(self) -> E:
        return self._error

    def __repr__(self) -> str:
        return f"Left({self._error!r})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Left) and self._error == other._error


def _is_number(value: Any) -> bool:
    if value is None or isinstance(value, bool):
        return False
    if isinstance(value, str) and "_" in value:
        return False
    try:
        float(value)
    except (TypeError, ValueError):
        return False
    return True


def _check_scope(b: Budget) -> Either[dict, Budget]:
    if parse_scope(b.scope) is None:
        return Left({
            "error": "invalid_scope",
            "message": f"Scope must be 'overall' or 'category', got {b.scope!r}",
            "budget_id": b.id,
        })
    return Right(b)


def _check_period_type(b: Budget) -> Either[dict, Budget]:
    if parse_period_type(b.period_type) is None:
        return Left({
            "error": "invalid_period_type",
            "message": f"Period type must be day, week or month, got {b.period_type!r}",
            "budget_id": b.id,
        })
    return Right(b)


def _check_period_start(b: Budget) -> Either[dict, Budget]:
    if parse_date(b.period_start) is None:
        return Left({
            "error": "invalid_period_start",
            "message": f"Period start {b.period_start!r} is not a date",
            "budget_id": b.id,
        })
    return Right(b)


def _check_budget_amount(b: Budget) -> Either[dict, Budget]:
    if not to_amount(b.amount) > 0:
        return Left({
            "error": "invalid_amount",
            "message": "Amount must be greater than 0.",
            "budget_id": b.id,
            "amount": b.amount,
        })
    return Right(b)


def _check_category(b: Budget) -> Either[dict, Budget]:
    if parse_scope(b.scope) is Scope.CATEGORY and not b.category:
        return Left({
            "error": "category_required",
            "message": "Select a category for per-category budgets.",
            "budget_id": b.id,
        })
    return Right(b)


def validate_budget(b: Budget) -> Either[dict, Budget]:
    """First failing check wins."""
    return (
        _check_scope(b)
        .bind(_check_period_type)
        .bind(_check_period_start)
        .bind(_check_budget_amount)
        .bind(_check_category)
    )


def validate_expense(e: Expense) -> Either[dict, Expense]:
    if not e.date:
        return Left({
            "error": "missing_date",
            "message": f"Expense {e.id} has no date",
            "expense_id": e.id,
        })

    if parse_date(e.date) is None:
        return Left({
            "error": "invalid_date",
            "message": f"Expense {e.id} has an invalid date {e.date!r}",
            "expense_id": e.id,
        })

    if not _is_number(e.amount) or to_amount(e.amount) < 0:
        return Left({
            "error": "invalid_amount",
            "message": f"Expense {e.id} amount must be a non-negative number",
            "expense_id": e.id,
            "amount": e.amount,
        })

    return Right(e)


def check_budget(b: Budget, expenses: Iterable[Expense]) -> Either[dict, Budget]:
    result = progress_for(b, expenses)
    if result.state is BudgetState.OVER:
        limit = to_amount(b.amount)
        return Left({
            "error": "budget_exceeded",
            "message": f"Budget limit exceeded for {b.category or 'overall'} spending",
            "budget_id": b.id,
            "limit": limit,
            "spent": result.spent,
            "over_budget": result.spent - limit,
        })

    return Right(b)
