"""Canonical period keys for days, Monday-based weeks and calendar months.

Every function works on ``datetime.date`` values only, so there is no time
of day and no daylight-saving shift to worry about. Input that is not a
date yields ``""``, which never equals a real key.
"""
from datetime import date, datetime, timedelta
from typing import Any, Tuple, Union

from ledger.domain import parse_date

Now = Union[date, datetime]


def as_day(now: Now) -> date:
    """The calendar day of an evaluation instant."""
    return now.date() if isinstance(now, datetime) else now


def js_weekday(d: date) -> int:
    """Weekday index with Sunday=0 .. Saturday=6."""
    return (d.weekday() + 1) % 7


def day_key(value: Any) -> str:
    d = parse_date(value)
    return d.isoformat() if d else ""


def month_key(value: Any) -> str:
    d = parse_date(value)
    return f"{d.year:04d}-{d.month:02d}" if d else ""


def week_start_date(d: date) -> date:
    weekday = js_weekday(d)
    offset = 6 if weekday == 0 else weekday - 1
    return d - timedelta(days=offset)


def week_start(value: Any) -> str:
    d = parse_date(value)
    return week_start_date(d).isoformat() if d else ""


def week_bounds(value: Any) -> Tuple[str, str]:
    d = parse_date(value)
    if d is None:
        return "", ""
    start = week_start_date(d)
    return start.isoformat(), (start + timedelta(days=6)).isoformat()


def month_start(value: Any) -> str:
    d = parse_date(value)
    return d.replace(day=1).isoformat() if d else ""


def previous_month(year: int, month: int) -> Tuple[int, int]:
    if month == 1:
        return year - 1, 12
    return year, month - 1
