"""Calendar-day helpers shared by the date-rule calculators and the projector.

All calculations work on ``datetime.date`` values, which are immutable, so a
helper can never change a date owned by the caller.
"""

import calendar
from datetime import date, datetime, timedelta

from dateutil.relativedelta import relativedelta

from cashtrack.domain.errors import ValidationError

SATURDAY = 5
SUNDAY = 6


def as_day(value, field_name: str = "date") -> date:
    """Normalize a date-like value to a calendar day.

    Accepts ``date``, ``datetime`` (time of day is dropped) and ISO
    ``YYYY-MM-DD`` strings.

    Raises:
        ValidationError: If the value is not a valid date
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip()[:10])
        except ValueError as e:
            raise ValidationError(f"Malformed {field_name} '{value}': {e}") from e
    raise ValidationError(f"Malformed {field_name}: expected a date, got {value!r}")


def add_days(day: date, days: int) -> date:
    return day + timedelta(days=days)


def start_of_month(day: date) -> date:
    return day.replace(day=1)


def day_of_week(day: date) -> int:
    """Monday is 0, Sunday is 6."""
    return day.weekday()


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def clamped_day(year: int, month: int, day: int) -> date:
    """Build a date, clamping ``day`` to the month's last day."""
    return date(year, month, min(day, days_in_month(year, month)))


def add_months(day: date, months: int) -> date:
    """Shift by whole months, clamping to the end of shorter months."""
    return day + relativedelta(months=months)


def days_between(start: date, end: date) -> int:
    """Number of calendar days from ``start`` to ``end`` (negative if reversed)."""
    return (end - start).days
