import json
from pathlib import Path

import pytest

from ledger.domain import Budget, Expense
from ledger.transforms import (
    add_budget,
    add_expense,
    budget_from_row,
    expense_from_row,
    load_seed,
    remove_budget,
    remove_expense,
    sort_expenses,
    update_budget,
    update_expense,
)

SEED = Path(__file__).resolve().parent.parent / "data" / "seed.json"


def test_expense_from_camel_case_row():
    e = expense_from_row({
        "id": 7, "date": "2024-03-01", "category": "Food", "description": "lunch",
        "amount": "12", "paymentMethod": "Card", "createdAt": "2024-03-01T10:00:00Z",
    })
    assert e == Expense("7", "2024-03-01", "Food", "lunch", "12", "Card", "", "2024-03-01T10:00:00Z")


def test_expense_from_snake_case_row_defaults():
    e = expense_from_row({"id": "e1", "date": "2024-03-01", "amount": 5, "payment_method": "Cash"})
    assert e.payment_method == "Cash"
    assert e.category is None
    assert e.description == ""
    assert e.created_at is None


def test_budget_from_row_defaults():
    b = budget_from_row({"id": "b1", "amount": 100})
    assert b == Budget("b1", "overall", None, "month", "", 100)

    b = budget_from_row({"id": "b2", "scope": "category", "category": "Food",
                         "period_type": "week", "period_start": "2024-03-11", "amount": 50})
    assert (b.scope, b.period_type, b.period_start) == ("category", "week", "2024-03-11")


def test_row_without_id_raises():
    with pytest.raises(KeyError):
        expense_from_row({"date": "2024-03-01"})


def test_load_seed(tmp_path):
    path = tmp_path / "seed.json"
    path.write_text(json.dumps({
        "expenses": [{"id": "e1", "date": "2024-03-01", "category": "Food", "amount": 10}],
        "budgets": [{"id": "b1", "scope": "overall", "periodType": "day", "periodStart": "2024-03-01", "amount": 5}],
    }), encoding="utf-8")

    expenses, budgets = load_seed(str(path))
    assert isinstance(expenses, tuple) and isinstance(budgets, tuple)
    assert expenses[0].amount == 10
    assert budgets[0].period_type == "day"


def test_load_shipped_seed():
    expenses, budgets = load_seed(str(SEED))
    assert len(expenses) == 7
    assert len(budgets) == 3


def test_load_seed_missing_file(tmp_path):
    with pytest.raises(OSError):
        load_seed(str(tmp_path / "nope.json"))


def test_collection_edits_do_not_mutate():
    e1 = Expense("e1", "2024-03-01", "Food", "", 10)
    e2 = Expense("e2", "2024-03-02", "Food", "", 20)
    expenses = (e1,)
    grown = add_expense(expenses, e2)
    assert grown == (e1, e2)
    assert expenses == (e1,)
    assert remove_expense(grown, "e1") == (e2,)


def test_update_and_remove_budget():
    b1 = Budget("b1", "overall", None, "month", "2024-03-01", 300)
    b2 = Budget("b2", "category", "Food", "month", "2024-03-01", 150)
    budgets = add_budget((b1,), b2)

    updated = update_budget(budgets, "b1", amount=500)
    assert updated[0].amount == 500
    assert budgets[0].amount == 300
    assert updated[1] is b2
    assert remove_budget(updated, "b2") == (updated[0],)


def test_sort_expenses_newest_first():
    expenses = (
        Expense("a", "2024-03-01", "Food", "", 1, created_at="2024-03-01T08:00:00"),
        Expense("b", "2024-03-02", "Food", "", 1),
        Expense("c", "2024-03-01", "Food", "", 1, created_at="2024-03-01T09:00:00"),
    )
    assert [e.id for e in sort_expenses(expenses)] == ["b", "c", "a"]


def test_update_expense_replaces_only_target():
    e1 = Expense("e1", "2024-03-01", "Food", "lunch", 10)
    e2 = Expense("e2", "2024-03-02", "Food", "", 20)
    expenses = (e1, e2)

    updated = update_expense(expenses, "e1", amount=15, category="Bills")
    assert updated[0] == Expense("e1", "2024-03-01", "Bills", "lunch", 15)
    assert updated[1] is e2
    assert expenses[0].amount == 10
    assert update_expense(expenses, "missing", amount=1) == expenses


def test_rows_with_nested_values_stay_hashable():
    e = expense_from_row({"id": "e1", "date": "2024-03-01", "category": ["Food"],
                          "amount": [5], "notes": {"k": 1}})
    assert e.category is None
    assert e.amount == "[5]"
    assert e.notes == "{'k': 1}"
    hash(e)

    b = budget_from_row({"id": "b1", "category": {"name": "Food"}, "amount": [100]})
    assert b.category is None
    hash(b)
