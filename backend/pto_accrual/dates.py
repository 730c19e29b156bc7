"""Calendar-date parsing and display helpers shared by the pay-period code."""

from __future__ import annotations

from calendar import monthrange
from datetime import date, datetime
from zoneinfo import ZoneInfo

from pto_accrual.exceptions import InvalidDateError


def parse_calendar_date(value: date | datetime | str) -> date:
    """Coerce an ISO string, datetime or date to a calendar date.

    Time-of-day is discarded. Anything unparseable raises InvalidDateError
    rather than being coerced to some default.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            return date.fromisoformat(text)
        except ValueError:
            pass
        try:
            return datetime.fromisoformat(text).date()
        except ValueError:
            pass
    msg = f"Invalid calendar date: {value!r}"
    raise InvalidDateError(msg)


def last_day_of_month(year: int, month: int) -> int:
    return monthrange(year, month)[1]


def format_label_date(day: date) -> str:
    """Render a date as ``Jan 5, 2025``."""
    return f"{day:%b} {day.day}, {day.year}"


def js_weekday(day: date) -> int:
    """Day of week with Sunday as 0, matching the stored ``dayOfWeek`` values."""
    return (day.weekday() + 1) % 7


def today_in_timezone(timezone_name: str) -> date:
    """Current calendar date in the named IANA timezone."""
    return datetime.now(ZoneInfo(timezone_name)).date()
