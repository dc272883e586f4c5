from typing import Callable, Iterable, Iterator, Optional

from ledger.domain import Expense, effective_category, parse_date, to_amount
from ledger.periods import day_key


def iter_expenses(
    expenses: Iterable[Expense], pred: Callable[[Expense], bool]
) -> Iterator[Expense]:
    for e in expenses:
        if pred(e):
            yield e


def by_category(category: str):
    wanted = effective_category(category)

    def _filter(e: Expense) -> bool:
        return effective_category(e.category) == wanted

    return _filter


def by_date_range(start: str, end: str):
    def _filter(e: Expense) -> bool:
        key = day_key(e.date)
        return bool(key) and start <= key <= end

    return _filter


def by_keyword(query: str):
    """Case-insensitive substring match over the text fields of an expense."""
    q = (query or "").strip().lower()

    def _filter(e: Expense) -> bool:
        if not q:
            return True
        fields = (e.description, e.notes, e.category, e.payment_method)
        haystack = " ".join(str(f) for f in fields if f)
        return q in haystack.lower()

    return _filter


def by_amount_range(low: Optional[float] = None, high: Optional[float] = None):
    # either bound may be None for an open end
    def _filter(e: Expense) -> bool:
        amount = to_amount(e.amount)
        if low is not None and amount < to_amount(low):
            return False
        if high is not None and amount > to_amount(high):
            return False
        return True

    return _filter


def in_month(year: int, month: int):
    def _filter(e: Expense) -> bool:
        d = parse_date(e.date)
        return d is not None and d.year == year and d.month == month

    return _filter

