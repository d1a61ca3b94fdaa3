"""Bank account domain service."""

import logging
from datetime import date
from decimal import Decimal
from typing import Optional

from cashtrack.database.base import Database
from cashtrack.domain.calculations import to_decimal
from cashtrack.domain.entities import BankAccount, Transfer
from cashtrack.domain.errors import (
    ConflictError,
    DependencyError,
    NotFoundError,
    ValidationError,
    account_not_found,
    duplicate_name,
    insufficient_balance,
)

logger = logging.getLogger(__name__)

DEFAULT_TRANSFER_DESCRIPTION = "Transfer between accounts"


class AccountService:
    """Service for managing bank accounts and transfers."""

    def __init__(self, db: Database):
        """Initialize account service.

        Args:
            db: Database instance
        """
        self.db = db

    def _require(self, account_id: int) -> BankAccount:
        account = self.db.get_bank_account(account_id)
        if account is None:
            raise NotFoundError(account_not_found(account_id))
        return account

    def _check_name_free(self, name: str, exclude_id: Optional[int] = None) -> None:
        for acc in self.db.list_bank_accounts():
            if acc.name == name and acc.id != exclude_id:
                raise ConflictError(duplicate_name("Account", name))

    def create_account(
        self,
        name: str,
        bank_name: Optional[str] = None,
        iban: Optional[str] = None,
        balance=Decimal("0"),
        currency: str = "TRY",
        is_favorite: bool = False,
    ) -> int:
        """Create a new bank account.

        Args:
            name: Account name (unique)
            bank_name: Bank name
            iban: Optional IBAN
            balance: Opening balance
            currency: ISO currency code
            is_favorite: Whether the account is listed first

        Returns:
            Account ID

        Raises:
            ConflictError: If account name already exists
        """
        if not name or not name.strip():
            raise ValidationError("Account name cannot be empty")
        self._check_name_free(name)

        account_id = self.db.create_bank_account(
            name=name,
            bank_name=bank_name,
            iban=iban,
            balance=to_decimal(balance),
            currency=currency.upper(),
            is_favorite=is_favorite,
        )
        logger.info("Created account %s (ID: %s)", name, account_id)
        return account_id

    def get_account(self, account_id: int) -> Optional[BankAccount]:
        """Get account by ID."""
        return self.db.get_bank_account(account_id)

    def list_accounts(self) -> list[BankAccount]:
        """List all accounts, favorites first."""
        return self.db.list_bank_accounts()

    def total_balance(self) -> Decimal:
        """Sum of all account balances."""
        return sum((acc.balance for acc in self.db.list_bank_accounts()), Decimal("0"))

    def update_account(
        self,
        account_id: int,
        name: Optional[str] = None,
        bank_name: Optional[str] = None,
        iban: Optional[str] = None,
        currency: Optional[str] = None,
    ) -> None:
        """Update account details.

        Raises:
            NotFoundError: If account not found
            ConflictError: If the new name is taken by another account
        """
        self._require(account_id)
        if name is not None:
            self._check_name_free(name, exclude_id=account_id)
        self.db.update_bank_account(
            account_id,
            name=name,
            bank_name=bank_name,
            iban=iban,
            currency=currency.upper() if currency else None,
        )

    def set_balance(self, account_id: int, balance) -> None:
        """Overwrite an account's balance."""
        self._require(account_id)
        self.db.update_account_balance(account_id, to_decimal(balance))

    def adjust_balance(self, account_id: int, delta) -> Decimal:
        """Add ``delta`` to an account's balance and return the new balance."""
        account = self._require(account_id)
        new_balance = account.balance + to_decimal(delta)
        self.db.update_account_balance(account_id, new_balance)
        return new_balance

    def toggle_favorite(self, account_id: int) -> bool:
        """Flip the favorite flag and return the new value."""
        account = self._require(account_id)
        self.db.update_bank_account(account_id, is_favorite=not account.is_favorite)
        return not account.is_favorite

    def delete_account(self, account_id: int) -> None:
        """Delete an account.

        Raises:
            NotFoundError: If account not found
            DependencyError: If transactions, transfers or payments refer to it
        """
        self._require(account_id)
        references = self.db.get_account_reference_count(account_id)
        if references > 0:
            raise DependencyError(
                f"Cannot delete account {account_id}: it has {references} "
                f"linked record{'s' if references != 1 else ''}."
            )
        self.db.delete_bank_account(account_id)
        logger.info("Deleted account %s", account_id)

    def transfer(
        self,
        from_account_id: int,
        to_account_id: int,
        amount,
        description: Optional[str] = None,
        transfer_date: Optional[date] = None,
    ) -> int:
        """Move money between two accounts.

        The transfer record and the two balance updates are separate writes.

        Returns:
            Transfer ID

        Raises:
            ValidationError: If the amount is not positive, the accounts are
                the same, or the source balance is too low
            NotFoundError: If either account does not exist
        """
        amount = to_decimal(amount)
        if amount <= 0:
            raise ValidationError("Transfer amount must be positive")
        if from_account_id == to_account_id:
            raise ValidationError("Cannot transfer to the same account")

        source = self._require(from_account_id)
        target = self._require(to_account_id)
        if source.balance < amount:
            raise ValidationError(insufficient_balance(source.name, source.balance, amount))

        transfer_id = self.db.create_transfer(
            from_account_id=from_account_id,
            to_account_id=to_account_id,
            amount=amount,
            description=description or DEFAULT_TRANSFER_DESCRIPTION,
            transfer_date=transfer_date or date.today(),
        )
        self.db.update_account_balance(source.id, source.balance - amount)
        self.db.update_account_balance(target.id, target.balance + amount)
        logger.info("Transferred %s from %s to %s", amount, source.name, target.name)
        return transfer_id

    def list_transfers(self, account_id: Optional[int] = None) -> list[Transfer]:
        """List transfers, optionally those touching one account."""
        return self.db.list_transfers(account_id)
