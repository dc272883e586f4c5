import math
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, NamedTuple, Optional

OTHER_CATEGORY = "Other"


class Scope(str, Enum):
    OVERALL = "overall"
    CATEGORY = "category"


class PeriodType(str, Enum):
    DAY = "day"
    WEEK = "week"
    MONTH = "month"


class BudgetState(str, Enum):
    OK = "ok"
    NEAR = "near"
    OVER = "over"


@dataclass(frozen=True)
class Expense:
    id: str
    date: Any          # "YYYY-MM-DD" or datetime.date
    category: Optional[str]
    description: str
    amount: Any        # coerced with to_amount, may be junk
    payment_method: str = ""
    notes: str = ""
    created_at: Optional[str] = None


# A spending limit for one day, week or month
@dataclass(frozen=True)
class Budget:
    id: str
    scope: Any         # Scope or its string value
    category: Optional[str]
    period_type: Any   # PeriodType or its string value
    period_start: str  # first day of the period
    amount: Any
    created_at: Optional[str] = None


@dataclass(frozen=True)
class BudgetProgress:
    budget: Budget
    spent: float
    ratio: float       # unclamped
    progress: float    # min(1, ratio)
    state: BudgetState


class CategoryTotal(NamedTuple):
    category: str
    total: float


class MonthTotal(NamedTuple):
    month: str
    total: float


class DayTotal(NamedTuple):
    date: str
    total: float


class CategoryShare(NamedTuple):
    category: str
    amount: float
    percentage: int


class InsightKind(str, Enum):
    TOP_CATEGORIES = "top_categories"
    BIGGEST_EXPENSE = "biggest_expense"
    MONTH_OVER_MONTH = "month_over_month"
    NO_SPEND_STREAK = "no_spend_streak"
    SPEND_STREAK = "spend_streak"
    BUSIEST_WEEKDAY = "busiest_weekday"


class Tone(str, Enum):
    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"


class Direction(str, Enum):
    UP = "up"
    DOWN = "down"
    SAME = "same"
    NEW = "new"


@dataclass(frozen=True)
class Insight:
    kind: InsightKind
    label: str
    text: str
    tone: Tone
    data: dict = field(default_factory=dict, compare=False, hash=False)


class PeriodTotal(NamedTuple):
    total: float
    count: int


@dataclass(frozen=True)
class SpendingSummary:
    today: PeriodTotal
    week: PeriodTotal
    month: PeriodTotal
    all_time: PeriodTotal


def to_amount(value: Any) -> float:
    """Coerce anything to a finite float; junk counts as 0."""
    if value is None or isinstance(value, bool):
        return 0.0
    # float() accepts digit separators, stored amounts never carry them
    if isinstance(value, str) and "_" in value:
        return 0.0
    try:
        amount = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(amount):
        return 0.0
    return amount


def effective_category(category: Optional[str]) -> str:
    if not category:
        return OTHER_CATEGORY
    return str(category)


def parse_date(value: Any) -> Optional[date]:
    """Return the calendar date of value, or None when it isn't one."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value:
        return None
    try:
        return date.fromisoformat(value[:10])
    except ValueError:
        return None


def parse_scope(value: Any) -> Optional[Scope]:
    try:
        return Scope(value)
    except ValueError:
        return None


def parse_period_type(value: Any) -> Optional[PeriodType]:
    try:
        return PeriodType(value)
    except ValueError:
        return None
