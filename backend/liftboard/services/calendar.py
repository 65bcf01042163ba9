# liftboard/services/calendar.py
"""
Calendar-date normalization.

Every date-equality check in the system (program days, athlete "today" lookups,
workout-log keys) goes through ``calendar_date`` so that time-of-day never leaks
into a comparison.
"""
from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Any

from liftboard.errors import ValidationError

DAY_NAMES = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")


def calendar_date(value: Any) -> date:
    """
    Strip time-of-day from ``value``.

    Accepts ``date``, ``datetime`` or an ISO-8601 string (``2024-06-10`` or
    ``2024-06-10T17:45:00``). A datetime keeps its own calendar day; no timezone
    conversion is applied.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if len(text) > 10:
            return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
        return date.fromisoformat(text)
    raise ValueError(f"cannot interpret {value!r} as a calendar date")


def day_of_week_label(value: Any) -> str:
    return DAY_NAMES[calendar_date(value).weekday()]


def today() -> date:
    return date.today()


def shift(value: Any, days: int) -> date:
    return calendar_date(value) + timedelta(days=days)


def month_bounds(value: Any) -> tuple[date, date]:
    """First and last calendar day of the month containing ``value``."""
    d = calendar_date(value)
    first = d.replace(day=1)
    next_first = (first + timedelta(days=32)).replace(day=1)
    return first, next_first - timedelta(days=1)


def parse_day(text: str) -> date:
    """``calendar_date`` for request input: malformed text is a ValidationError."""
    try:
        return calendar_date(text)
    except ValueError:
        raise ValidationError(f"Invalid date: {text!r}")
