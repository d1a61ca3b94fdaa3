"""Scheduled payment domain service."""

import logging
from datetime import date
from decimal import Decimal
from typing import Optional

from dateutil.relativedelta import relativedelta

from cashtrack.database.base import Database
from cashtrack.domain.calculations import to_decimal
from cashtrack.domain.entities import EventKind, RecurringPeriod, ScheduledPayment
from cashtrack.domain.errors import (
    NotFoundError,
    ValidationError,
    account_not_found,
    payment_not_found,
)

logger = logging.getLogger(__name__)

PAYMENT_FILTERS = ("upcoming", "completed", "all")

_PERIOD_STEPS = {
    RecurringPeriod.WEEKLY: relativedelta(weeks=1),
    RecurringPeriod.MONTHLY: relativedelta(months=1),
    RecurringPeriod.YEARLY: relativedelta(years=1),
}


def next_occurrence(payment_date: date, period: RecurringPeriod | str) -> date:
    """Date of the next repetition of a recurring payment.

    Month and year steps clamp to the end of shorter months (Jan 31 is
    followed by Feb 28).
    """
    try:
        return payment_date + _PERIOD_STEPS[RecurringPeriod(period)]
    except ValueError as e:
        raise ValidationError(
            f"Recurring period must be weekly, monthly or yearly, got {period!r}"
        ) from e


class ScheduledPaymentService:
    """Service for planned income and expenses."""

    def __init__(self, db: Database):
        """Initialize scheduled payment service.

        Args:
            db: Database instance
        """
        self.db = db

    def _require(self, payment_id: int) -> ScheduledPayment:
        payment = self.db.get_scheduled_payment(payment_id)
        if payment is None:
            raise NotFoundError(payment_not_found(payment_id))
        return payment

    def create_payment(
        self,
        description: str,
        amount,
        payment_date: date,
        payment_type: EventKind | str = EventKind.EXPENSE,
        account_id: Optional[int] = None,
        recurring_period: Optional[RecurringPeriod | str] = None,
    ) -> int:
        """Schedule a payment.

        Args:
            description: What the payment is for
            amount: Positive amount
            payment_date: When it is due
            payment_type: 'income' or 'expense'
            account_id: Optional account the payment settles against
            recurring_period: weekly, monthly or yearly for repeating payments

        Returns:
            Payment ID

        Raises:
            ValidationError: If the amount, type or period is invalid
            NotFoundError: If the linked account does not exist
        """
        amount = to_decimal(amount)
        if amount <= 0:
            raise ValidationError("Payment amount must be positive")
        try:
            payment_type = EventKind(payment_type)
        except ValueError as e:
            raise ValidationError(
                f"Payment type must be 'income' or 'expense', got {payment_type!r}"
            ) from e
        period = None
        if recurring_period is not None:
            try:
                period = RecurringPeriod(recurring_period)
            except ValueError as e:
                raise ValidationError(
                    f"Recurring period must be weekly, monthly or yearly, got {recurring_period!r}"
                ) from e
        if account_id is not None and self.db.get_bank_account(account_id) is None:
            raise NotFoundError(account_not_found(account_id))

        payment_id = self.db.create_scheduled_payment(
            description=description,
            amount=amount,
            payment_date=payment_date,
            payment_type=payment_type,
            account_id=account_id,
            is_recurring=period is not None,
            recurring_period=period,
        )
        logger.info("Scheduled %s '%s' on %s (ID: %s)", payment_type.value, description, payment_date, payment_id)
        return payment_id

    def get_payment(self, payment_id: int) -> Optional[ScheduledPayment]:
        """Get payment by ID."""
        return self.db.get_scheduled_payment(payment_id)

    def list_payments(self, status: str = "upcoming") -> list[ScheduledPayment]:
        """List payments by status.

        Args:
            status: 'upcoming' (pending), 'completed' or 'all'
        """
        if status not in PAYMENT_FILTERS:
            raise ValidationError(f"Unknown payment filter '{status}'. Use one of: {', '.join(PAYMENT_FILTERS)}")
        is_completed = {"upcoming": False, "completed": True, "all": None}[status]
        return self.db.list_scheduled_payments(is_completed=is_completed)

    def update_payment(
        self,
        payment_id: int,
        description: Optional[str] = None,
        amount=None,
        payment_date: Optional[date] = None,
        payment_type: Optional[EventKind | str] = None,
    ) -> None:
        """Update payment details."""
        self._require(payment_id)
        if amount is not None:
            amount = to_decimal(amount)
            if amount <= 0:
                raise ValidationError("Payment amount must be positive")
        self.db.update_scheduled_payment(
            payment_id,
            description=description,
            amount=amount,
            payment_date=payment_date,
            payment_type=EventKind(payment_type) if payment_type else None,
        )

    def complete_payment(self, payment_id: int) -> Optional[int]:
        """Mark a payment completed and settle it.

        A recurring payment schedules its next occurrence. A payment linked to
        an account credits (income) or debits (expense) the account balance.
        These are independent writes.

        Returns:
            ID of the next occurrence for recurring payments, else None

        Raises:
            NotFoundError: If payment not found
            ValidationError: If the payment is already completed
        """
        payment = self._require(payment_id)
        if payment.is_completed:
            raise ValidationError(f"Scheduled payment {payment_id} is already completed")

        self.db.update_scheduled_payment(payment_id, is_completed=True)

        next_id = None
        if payment.is_recurring and payment.recurring_period is not None:
            next_id = self.db.create_scheduled_payment(
                description=payment.description,
                amount=payment.amount,
                payment_date=next_occurrence(payment.payment_date, payment.recurring_period),
                payment_type=payment.payment_type,
                account_id=payment.account_id,
                is_recurring=True,
                recurring_period=payment.recurring_period,
            )

        if payment.account_id is not None:
            account = self.db.get_bank_account(payment.account_id)
            if account is None:
                logger.warning(
                    "Payment %s refers to missing account %s; balance not updated",
                    payment_id,
                    payment.account_id,
                )
            else:
                delta = payment.amount if payment.payment_type == EventKind.INCOME else -payment.amount
                self.db.update_account_balance(account.id, account.balance + delta)

        logger.info("Completed scheduled payment %s", payment_id)
        return next_id

    def delete_payment(self, payment_id: int) -> None:
        """Delete a payment."""
        self._require(payment_id)
        self.db.delete_scheduled_payment(payment_id)

    def upcoming_totals(self) -> tuple[Decimal, Decimal]:
        """Total pending (income, expense)."""
        income = Decimal("0")
        expense = Decimal("0")
        for payment in self.db.list_scheduled_payments(is_completed=False):
            if payment.payment_type == EventKind.INCOME:
                income += payment.amount
            else:
                expense += payment.amount
        return income, expense
