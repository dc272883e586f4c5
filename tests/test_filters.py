from itertools import islice

from ledger.domain import Expense
from ledger.filters import (
    by_amount_range,
    by_category,
    by_date_range,
    by_keyword,
    in_month,
    iter_expenses,
)


def make_sample():
    return (
        Expense("e1", "2024-03-01", "Food", "groceries", 100),
        Expense("e2", "2024-03-15", "", "misc", 20),
        Expense("e3", "2024-04-02", "Transport", "bus", 10),
        Expense("e4", "", "Food", "undated", 5),
    )


def test_by_category_treats_empty_as_other():
    assert [e.id for e in filter(by_category("Food"), make_sample())] == ["e1", "e4"]
    assert [e.id for e in filter(by_category(""), make_sample())] == ["e2"]


def test_by_date_range_is_inclusive_and_skips_undated():
    result = list(filter(by_date_range("2024-03-01", "2024-03-15"), make_sample()))
    assert [e.id for e in result] == ["e1", "e2"]


def test_in_month():
    assert [e.id for e in filter(in_month(2024, 4), make_sample())] == ["e3"]


def test_iter_expenses_is_lazy():
    calls = {"n": 0}

    def pred(e: Expense) -> bool:
        calls["n"] += 1
        return True

    first = list(islice(iter_expenses(make_sample(), pred), 1))
    assert len(first) == 1
    assert calls["n"] == 1


def test_by_keyword_searches_text_fields():
    expenses = (
        Expense("e1", "2024-03-01", "Food", "Groceries", 100),
        Expense("e2", "2024-03-02", "Bills", "", 20, notes="water bill"),
        Expense("e3", "2024-03-03", "Transport", "bus", 10, payment_method="Card"),
        Expense("e4", "2024-03-04", "", "", 5),
    )
    assert [e.id for e in filter(by_keyword("  GROC "), expenses)] == ["e1"]
    assert [e.id for e in filter(by_keyword("water"), expenses)] == ["e2"]
    assert [e.id for e in filter(by_keyword("card"), expenses)] == ["e3"]
    assert [e.id for e in filter(by_keyword("other"), expenses)] == []
    assert len(list(filter(by_keyword(" "), expenses))) == 4


def test_by_amount_range_coerces_amounts():
    expenses = (
        Expense("e1", "2024-03-01", "Food", "", 100),
        Expense("e2", "2024-03-02", "Food", "", "20"),
        Expense("e3", "2024-03-03", "Food", "", "abc"),
    )
    assert [e.id for e in filter(by_amount_range(20, 100), expenses)] == ["e1", "e2"]
    assert [e.id for e in filter(by_amount_range(high=50), expenses)] == ["e2", "e3"]
    assert [e.id for e in filter(by_amount_range(low=50), expenses)] == ["e1"]
