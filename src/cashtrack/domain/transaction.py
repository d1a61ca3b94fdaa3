"""Ledger transaction domain service."""

import logging
from typing import Optional
from datetime import date

from cashtrack.database.base import Database
from cashtrack.domain.calculations import to_decimal
from cashtrack.domain.entities import EventKind, LedgerTransaction
from cashtrack.domain.errors import NotFoundError, ValidationError, account_not_found

logger = logging.getLogger(__name__)


class TransactionService:
    """Service for recording dated income and expenses."""

    def __init__(self, db: Database):
        """Initialize transaction service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_transaction(
        self,
        kind: EventKind | str,
        amount,
        transaction_date: date,
        description: str = "",
        account_id: Optional[int] = None,
    ) -> int:
        """Record an income or expense.

        The account balance is not touched; balances are maintained by the
        operation that caused the movement.

        Args:
            kind: 'income' or 'expense'
            amount: Positive amount
            transaction_date: Date of the movement (may be in the future)
            description: Free text
            account_id: Optional linked bank account

        Returns:
            Transaction ID

        Raises:
            ValidationError: If the kind is unknown or the amount is not positive
            NotFoundError: If the account does not exist
        """
        try:
            kind = EventKind(kind)
        except ValueError as e:
            raise ValidationError(f"Transaction type must be 'income' or 'expense', got {kind!r}") from e

        amount = to_decimal(amount)
        if amount <= 0:
            raise ValidationError("Transaction amount must be positive")

        if account_id is not None and self.db.get_bank_account(account_id) is None:
            raise NotFoundError(account_not_found(account_id))

        transaction_id = self.db.create_ledger_transaction(
            account_id=account_id,
            kind=kind,
            description=description,
            amount=amount,
            transaction_date=transaction_date,
        )
        logger.debug("Recorded %s of %s on %s", kind.value, amount, transaction_date)
        return transaction_id

    def get_transaction(self, transaction_id: int) -> Optional[LedgerTransaction]:
        """Get transaction by ID."""
        return self.db.get_ledger_transaction(transaction_id)

    def list_transactions(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        account_id: Optional[int] = None,
    ) -> list[LedgerTransaction]:
        """List transactions with optional filters, oldest first."""
        return self.db.list_ledger_transactions(
            start_date=start_date, end_date=end_date, account_id=account_id
        )

    def delete_transaction(self, transaction_id: int) -> None:
        """Delete a transaction.

        Raises:
            NotFoundError: If transaction not found
        """
        if self.db.get_ledger_transaction(transaction_id) is None:
            raise NotFoundError(f"Transaction {transaction_id} not found")
        self.db.delete_ledger_transaction(transaction_id)
