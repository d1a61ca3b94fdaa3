"""Credit card statement and due date rules.

A card closes its billing cycle on a fixed day of the month (the statement
day). The payment is due ten days after the statement, moved to Monday when
that lands on a weekend.

Months shorter than the statement day clamp to their last day: a card with
statement day 31 closes on Feb 28 (or 29), Apr 30 and so on.
"""

from datetime import date

from cashtrack.domain.dates import (
    SATURDAY,
    SUNDAY,
    add_days,
    as_day,
    clamped_day,
    day_of_week,
    start_of_month,
    add_months,
)
from cashtrack.domain.errors import ValidationError

DUE_DATE_OFFSET_DAYS = 10


def validate_statement_day(statement_day) -> int:
    """Return the statement day if it is an integer between 1 and 31.

    Raises:
        ValidationError: If the statement day is out of range or not an integer
    """
    if isinstance(statement_day, bool) or not isinstance(statement_day, int):
        raise ValidationError(
            f"Statement day must be an integer between 1 and 31, got {statement_day!r}"
        )
    if not 1 <= statement_day <= 31:
        raise ValidationError(
            f"Statement day must be between 1 and 31, got {statement_day}"
        )
    return statement_day


def _statement_in_month(statement_day: int, month_of: date, roll_forward: bool) -> date:
    month_start = start_of_month(month_of)
    if roll_forward:
        month_start = add_months(month_start, 1)
    return clamped_day(month_start.year, month_start.month, statement_day)


def next_statement_date(statement_day: int, reference_date) -> date:
    """Return the next statement date on or after the reference date's cycle.

    When the reference date is on or past the statement day, this month's
    statement has already closed and the next one is in the following month.
    """
    statement_day = validate_statement_day(statement_day)
    reference = as_day(reference_date, "reference date")
    return _statement_in_month(
        statement_day, reference, roll_forward=reference.day >= statement_day
    )


def statement_date_for_transaction(statement_day: int, transaction_date) -> date:
    """Return the statement a purchase made on ``transaction_date`` appears on.

    A purchase on the statement day itself is still captured by that day's
    statement; only later days roll into the next month.
    """
    statement_day = validate_statement_day(statement_day)
    transaction_day = as_day(transaction_date, "transaction date")
    return _statement_in_month(
        statement_day, transaction_day, roll_forward=transaction_day.day > statement_day
    )


def shift_off_weekend(day: date) -> date:
    """Move a Saturday or Sunday to the following Monday."""
    weekday = day_of_week(day)
    if weekday == SATURDAY:
        return add_days(day, 2)
    if weekday == SUNDAY:
        return add_days(day, 1)
    return day


def due_date_for_statement(statement_date: date) -> date:
    """Statement date plus the payment window, shifted off weekends."""
    return shift_off_weekend(add_days(as_day(statement_date, "statement date"), DUE_DATE_OFFSET_DAYS))


def due_date(statement_day: int, reference_date) -> date:
    """Return the due date of the next statement after ``reference_date``."""
    return due_date_for_statement(next_statement_date(statement_day, reference_date))
