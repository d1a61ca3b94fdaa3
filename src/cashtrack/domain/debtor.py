"""Receivables domain service."""

import logging
from datetime import date
from decimal import Decimal
from typing import Optional

from cashtrack.database.base import Database
from cashtrack.domain.calculations import to_decimal
from cashtrack.domain.entities import Debtor, DebtorPayment, EventKind
from cashtrack.domain.errors import (
    NotFoundError,
    ValidationError,
    account_not_found,
    debtor_not_found,
)

logger = logging.getLogger(__name__)


class DebtorService:
    """Service for tracking money owed to the user."""

    def __init__(self, db: Database):
        """Initialize debtor service.

        Args:
            db: Database instance
        """
        self.db = db

    def _require(self, debtor_id: int) -> Debtor:
        debtor = self.db.get_debtor(debtor_id)
        if debtor is None:
            raise NotFoundError(debtor_not_found(debtor_id))
        return debtor

    def create_debtor(
        self,
        name: str,
        total_amount,
        phone: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> int:
        """Create a debtor owing ``total_amount``."""
        total_amount = to_decimal(total_amount)
        if total_amount < 0:
            raise ValidationError("Debt amount cannot be negative")
        return self.db.create_debtor(
            name=name,
            total_amount=total_amount,
            remaining_amount=total_amount,
            phone=phone,
            notes=notes,
        )

    def get_debtor(self, debtor_id: int) -> Optional[Debtor]:
        """Get debtor by ID."""
        return self.db.get_debtor(debtor_id)

    def list_debtors(self) -> list[Debtor]:
        """List debtors, newest first."""
        return self.db.list_debtors()

    def total_receivable(self) -> Decimal:
        """Sum of what every debtor still owes."""
        return sum((d.remaining_amount for d in self.db.list_debtors()), Decimal("0"))

    def update_debtor(
        self,
        debtor_id: int,
        name: Optional[str] = None,
        total_amount=None,
        phone: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> None:
        """Update a debtor.

        Changing the total moves the remaining amount by the same difference,
        never below zero.
        """
        debtor = self._require(debtor_id)
        remaining = None
        if total_amount is not None:
            total_amount = to_decimal(total_amount)
            if total_amount < 0:
                raise ValidationError("Debt amount cannot be negative")
            difference = total_amount - debtor.total_amount
            remaining = max(Decimal("0"), debtor.remaining_amount + difference)
        self.db.update_debtor(
            debtor_id,
            name=name,
            phone=phone,
            notes=notes,
            total_amount=total_amount,
            remaining_amount=remaining,
        )

    def delete_debtor(self, debtor_id: int) -> None:
        """Delete a debtor and its payment history."""
        self._require(debtor_id)
        self.db.delete_debtor(debtor_id)

    def record_payment(
        self,
        debtor_id: int,
        account_id: int,
        amount,
        payment_date: Optional[date] = None,
        description: Optional[str] = None,
        today: Optional[date] = None,
    ) -> int:
        """Record money received from a debtor into a bank account.

        Writes the payment, lowers the remaining debt, adds an income ledger
        transaction and, for payments dated today or earlier, credits the
        account balance. Each of these is an independent write.

        Returns:
            Debtor payment ID

        Raises:
            ValidationError: If the amount is not positive or exceeds what is owed
            NotFoundError: If the debtor or account does not exist
        """
        debtor = self._require(debtor_id)
        amount = to_decimal(amount)
        if amount <= 0:
            raise ValidationError("Payment amount must be positive")
        if amount > debtor.remaining_amount:
            raise ValidationError(
                f"Payment of {amount:,.2f} exceeds the remaining {debtor.remaining_amount:,.2f}"
            )
        account = self.db.get_bank_account(account_id)
        if account is None:
            raise NotFoundError(account_not_found(account_id))

        today = today or date.today()
        payment_date = payment_date or today
        description = description or f"Payment from {debtor.name}"

        payment_id = self.db.create_debtor_payment(
            debtor_id=debtor_id,
            account_id=account_id,
            amount=amount,
            payment_date=payment_date,
            description=description,
        )
        self.db.update_debtor(debtor_id, remaining_amount=debtor.remaining_amount - amount)
        self.db.create_ledger_transaction(
            account_id=account_id,
            kind=EventKind.INCOME,
            description=description,
            amount=amount,
            transaction_date=payment_date,
        )
        if payment_date <= today:
            self.db.update_account_balance(account_id, account.balance + amount)

        logger.info("Recorded %s from debtor %s into account %s", amount, debtor.name, account.name)
        return payment_id

    def payment_history(self, debtor_id: int) -> list[DebtorPayment]:
        """Payments received from a debtor, newest first."""
        self._require(debtor_id)
        return self.db.list_debtor_payments(debtor_id)
