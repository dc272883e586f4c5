from typing import Any, Callable, Dict, Sequence

from ledger import aggregation
from ledger.budgets import progress_for_all
from ledger.domain import Budget, Expense
from ledger.events import publish_budget_alerts
from ledger.functional import validate_budget, validate_expense
from ledger.insights import derive_insights
from ledger.logging_setup import get_logger
from ledger.periods import Now, as_day
from ledger.summary import spending_summary

logger = get_logger(__name__)


class BudgetService:
    """Facade for budget operations built from injected validators and calculators.

    validators: functions taking (now, expenses, budgets) -> Sequence[str]
    calculators: functions taking (now, expenses, budgets, acc) -> dict (partial results)
    """

    def __init__(self, validators: Sequence[Callable[..., Sequence[str]]], calculators: Sequence[Callable[..., Dict[str, Any]]]):
        self.validators = validators
        self.calculators = calculators

    def budget_report(self, now: Now, expenses: Sequence[Expense], budgets: Sequence[Budget]) -> Dict[str, Any]:
        """Run validators and calculators, keeping every intermediate step."""
        report = {
            "date": as_day(now).isoformat(),
            "validation": [],
            "steps": [],
            "result": {},
        }

        for v in self.validators:
            try:
                msgs = v(now, expenses, budgets)
            except Exception as e:
                logger.exception("validator %s failed", getattr(v, "__name__", v))
                msgs = [f"validator_error: {e}"]
            report["validation"].append({"validator": getattr(v, "__name__", str(v)), "messages": list(msgs)})

        acc: Dict[str, Any] = {}
        for calc in self.calculators:
            out = calc(now, expenses, budgets, acc)
            report["steps"].append({"calculator": getattr(calc, "__name__", str(calc)), "output": out})
            if isinstance(out, dict):
                acc.update(out)

        report["result"] = acc
        return report


class ReportService:
    """Facade for spending reports built from injected aggregators."""

    def __init__(self, aggregators: Sequence[Callable[..., Dict[str, Any]]]):
        self.aggregators = aggregators

    def spending_report(self, now: Now, expenses: Sequence[Expense]) -> Dict[str, Any]:
        report = {"date": as_day(now).isoformat(), "steps": [], "result": {}}
        acc: Dict[str, Any] = {}
        for agg in self.aggregators:
            out = agg(now, expenses, acc)
            report["steps"].append({"aggregator": getattr(agg, "__name__", str(agg)), "output": out})
            if isinstance(out, dict):
                acc.update(out)
        report["result"] = acc
        return report


def invalid_budgets(now, expenses, budgets):
    return [r.get_error()["message"] for r in map(validate_budget, budgets) if r.is_left()]


def invalid_expenses(now, expenses, budgets):
    return [r.get_error()["message"] for r in map(validate_expense, expenses) if r.is_left()]


def budget_progress(now, expenses, budgets, acc):
    return {"progress": progress_for_all(budgets, expenses)}


def budget_alerts(now, expenses, budgets, acc):
    return {"alerts": publish_budget_alerts(acc.get("progress", []))}


def summary_totals(now, expenses, acc):
    return {"summary": spending_summary(expenses, now)}


def category_totals(now, expenses, acc):
    return {"by_category": aggregation.by_category(expenses)}


def monthly_totals(now, expenses, acc):
    return {"by_month": aggregation.by_month(expenses)}


def daily_totals(now, expenses, acc):
    return {"by_day": aggregation.by_day(expenses)}


def insights(now, expenses, acc):
    return {"insights": derive_insights(expenses, now)}


def default_budget_service() -> BudgetService:
    return BudgetService(
        validators=[invalid_budgets, invalid_expenses],
        calculators=[budget_progress, budget_alerts],
    )


def default_report_service() -> ReportService:
    return ReportService(
        aggregators=[summary_totals, category_totals, monthly_totals, daily_totals, insights]
    )
