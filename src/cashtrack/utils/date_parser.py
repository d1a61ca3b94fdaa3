"""Date parsing utilities."""

import re
from datetime import date, timedelta
from typing import Optional

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

_OFFSET_PATTERN = re.compile(r"^(?:in\s+)?([+-]?\d+)\s*(day|days|d|week|weeks|w|month|months|m)(?:\s+ago)?$")


def _offset(amount: int, unit: str) -> relativedelta:
    if unit.startswith("d"):
        return relativedelta(days=amount)
    if unit.startswith("w"):
        return relativedelta(weeks=amount)
    return relativedelta(months=amount)


def parse_date(date_str: str, today: Optional[date] = None) -> date:
    """Parse a date string into a date object.

    Supports various formats including relative dates:
    - Absolute dates: "2024-01-15", "January 15, 2024", etc.
    - Relative days: "today", "yesterday", "tomorrow"
    - Offsets: "in 10 days", "+2 weeks", "3 months ago", "-5d"
    - Period starts: "this month", "next month", "last month", "this week", "this year"

    Args:
        date_str: Date string in various formats
        today: Reference day for relative dates (defaults to the system date)

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = today or date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
        "this week": today - timedelta(days=today.weekday()),
        "this month": today.replace(day=1),
        "next month": (today + relativedelta(months=1)).replace(day=1),
        "last month": (today - relativedelta(months=1)).replace(day=1),
        "this year": today.replace(month=1, day=1),
    }
    if date_str in relative_dates:
        return relative_dates[date_str]

    match = _OFFSET_PATTERN.match(date_str)
    if match:
        amount = int(match.group(1))
        if date_str.endswith("ago"):
            amount = -amount
        return today + _offset(amount, match.group(2))

    # Try parsing as absolute date
    try:
        dt = date_parser.parse(date_str)
        return dt.date()
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def get_date_range(period: str, today: Optional[date] = None) -> tuple[date, date]:
    """Get start and end dates for a named period.

    Args:
        period: this-month, last-month, next-month, this-week or this-year
        today: Reference day (defaults to the system date)

    Returns:
        Tuple of (start_date, end_date), both inclusive

    Raises:
        ValueError: If period string is not recognized
    """
    period = period.strip().lower()
    today = today or date.today()
    month_start = today.replace(day=1)

    if period == "this-month":
        return month_start, month_start + relativedelta(months=1) - timedelta(days=1)

    elif period == "last-month":
        start_date = month_start - relativedelta(months=1)
        return start_date, month_start - timedelta(days=1)

    elif period == "next-month":
        start_date = month_start + relativedelta(months=1)
        return start_date, start_date + relativedelta(months=1) - timedelta(days=1)

    elif period == "this-week":
        start_date = today - timedelta(days=today.weekday())
        return start_date, start_date + timedelta(days=6)

    elif period == "this-year":
        return today.replace(month=1, day=1), today.replace(month=12, day=31)

    else:
        raise ValueError(
            f"Unknown period: '{period}'. Supported periods: "
            "this-month, last-month, next-month, this-week, this-year"
        )
