from ledger.domain import Budget, Expense
from ledger.functional import (
    Left,
    Nothing,
    Right,
    Some,
    check_budget,
    collect,
    from_optional,
    validate_budget,
    validate_expense,
)


def test_maybe_map():
    assert Some(5).map(lambda x: x * 2).get_or_else(0) == 10
    nothing = Nothing().map(lambda x: x * 2)
    assert not nothing.is_some()
    assert nothing.get_or_else(0) == 0


def test_from_optional_and_collect():
    assert from_optional(None) == Nothing()
    assert from_optional(3) == Some(3)
    assert collect([Some(1), Nothing(), Some(3)]) == [1, 3]


def test_either_bind():
    def halve(x: int):
        if x % 2:
            return Left("odd")
        return Right(x // 2)

    assert Right(8).bind(halve).bind(halve) == Right(2)
    result = Right(6).bind(halve).bind(halve)
    assert result.is_left()
    assert result.get_error() == "odd"
    assert Left("boom").bind(halve) == Left("boom")


def test_validate_budget_ok():
    budget = Budget("b1", "category", "Food", "month", "2024-03-01", 120)
    assert validate_budget(budget) == Right(budget)


def test_validate_budget_errors():
    cases = {
        "invalid_scope": Budget("b1", "household", None, "month", "2024-03-01", 100),
        "invalid_period_type": Budget("b2", "overall", None, "year", "2024-03-01", 100),
        "invalid_period_start": Budget("b3", "overall", None, "month", "", 100),
        "invalid_amount": Budget("b4", "overall", None, "month", "2024-03-01", 0),
        "category_required": Budget("b5", "category", "", "month", "2024-03-01", 100),
    }
    for error, budget in cases.items():
        result = validate_budget(budget)
        assert result.is_left()
        assert result.get_error()["error"] == error
        assert result.get_error()["budget_id"] == budget.id


def test_validate_budget_amount_message():
    result = validate_budget(Budget("b1", "overall", None, "month", "2024-03-01", "abc"))
    assert result.get_error()["message"] == "Amount must be greater than 0."


def test_validate_expense():
    ok = Expense("e1", "2024-03-01", "Food", "", "12.50")
    assert validate_expense(ok).is_right()

    assert validate_expense(Expense("e2", "", "Food", "", 1)).get_error()["error"] == "missing_date"
    assert validate_expense(Expense("e3", "yesterday", "Food", "", 1)).get_error()["error"] == "invalid_date"
    assert validate_expense(Expense("e4", "2024-03-01", "Food", "", "abc")).get_error()["error"] == "invalid_amount"
    assert validate_expense(Expense("e5", "2024-03-01", "Food", "", -3)).get_error()["error"] == "invalid_amount"


def test_check_budget_exceeded():
    budget = Budget("b1", "category", "Food", "month", "2024-03-01", 120)
    expenses = (
        Expense("e1", "2024-03-01", "Food", "", 100),
        Expense("e2", "2024-03-02", "Food", "", 50),
    )
    result = check_budget(budget, expenses)
    assert result.is_left()
    error = result.get_error()
    assert error["error"] == "budget_exceeded"
    assert error["limit"] == 120
    assert error["spent"] == 150
    assert error["over_budget"] == 30


def test_check_budget_near_is_still_fine():
    budget = Budget("b1", "overall", None, "month", "2024-03-01", 100)
    expenses = (Expense("e1", "2024-03-01", "Food", "", 90),)
    assert check_budget(budget, expenses) == Right(budget)


def test_validate_budget_reports_first_failure_only():
    result = validate_budget(Budget("b1", "household", None, "year", "", 0))
    assert result.get_error()["error"] == "invalid_scope"

    result = validate_budget(Budget("b2", "category", None, "month", "2024-03-01", 0))
    assert result.get_error()["error"] == "invalid_amount"


def test_validate_expense_rejects_separated_amount():
    result = validate_expense(Expense("e1", "2024-03-01", "Food", "", "1_000"))
    assert result.get_error()["error"] == "invalid_amount"
