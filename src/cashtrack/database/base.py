"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional
from datetime import date
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from cashtrack.domain.entities import (
    BankAccount,
    LedgerTransaction,
    Transfer,
    CreditCard,
    CardCharge,
    ScheduledPayment,
    Debtor,
    DebtorPayment,
    InvestmentAccount,
    InvestmentTransaction,
    EventKind,
    RecurringPeriod,
    TradeType,
)


class Database(ABC):
    """Abstract database interface for cashtrack (the ledger store)."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Bank account operations
    @abstractmethod
    def create_bank_account(
        self,
        name: str,
        bank_name: Optional[str] = None,
        iban: Optional[str] = None,
        balance: Decimal = Decimal("0"),
        currency: str = "TRY",
        is_favorite: bool = False,
    ) -> int:
        """Create a bank account. Returns account ID."""
        pass

    @abstractmethod
    def get_bank_account(self, account_id: int) -> Optional[BankAccount]:
        """Get bank account by ID."""
        pass

    @abstractmethod
    def list_bank_accounts(self) -> list[BankAccount]:
        """List bank accounts, favorites first, then by name."""
        pass

    @abstractmethod
    def update_bank_account(
        self,
        account_id: int,
        name: Optional[str] = None,
        bank_name: Optional[str] = None,
        iban: Optional[str] = None,
        currency: Optional[str] = None,
        is_favorite: Optional[bool] = None,
    ) -> None:
        """Update bank account fields that are not None."""
        pass

    @abstractmethod
    def update_account_balance(self, account_id: int, balance: Decimal) -> None:
        """Overwrite an account's balance."""
        pass

    @abstractmethod
    def delete_bank_account(self, account_id: int) -> None:
        """Delete a bank account."""
        pass

    @abstractmethod
    def get_account_reference_count(self, account_id: int) -> int:
        """Count ledger transactions, transfers and payments referring to an account."""
        pass

    # Ledger transaction operations
    @abstractmethod
    def create_ledger_transaction(
        self,
        account_id: Optional[int],
        kind: EventKind,
        description: str,
        amount: Decimal,
        transaction_date: date,
    ) -> int:
        """Create a ledger transaction. Returns transaction ID."""
        pass

    @abstractmethod
    def get_ledger_transaction(self, transaction_id: int) -> Optional[LedgerTransaction]:
        """Get ledger transaction by ID."""
        pass

    @abstractmethod
    def list_ledger_transactions(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        account_id: Optional[int] = None,
    ) -> list[LedgerTransaction]:
        """List ledger transactions by date (ascending) with optional filters."""
        pass

    @abstractmethod
    def delete_ledger_transaction(self, transaction_id: int) -> None:
        """Delete a ledger transaction."""
        pass

    # Transfer operations
    @abstractmethod
    def create_transfer(
        self,
        from_account_id: int,
        to_account_id: int,
        amount: Decimal,
        description: str,
        transfer_date: date,
    ) -> int:
        """Record a transfer. Returns transfer ID."""
        pass

    @abstractmethod
    def list_transfers(self, account_id: Optional[int] = None) -> list[Transfer]:
        """List transfers, optionally those touching one account."""
        pass

    # Credit card operations
    @abstractmethod
    def create_credit_card(
        self,
        name: str,
        statement_day: int,
        bank_name: Optional[str] = None,
        total_limit: Decimal = Decimal("0"),
        currency: str = "TRY",
    ) -> int:
        """Create a credit card. Returns card ID."""
        pass

    @abstractmethod
    def get_credit_card(self, card_id: int) -> Optional[CreditCard]:
        """Get credit card by ID."""
        pass

    @abstractmethod
    def list_credit_cards(self) -> list[CreditCard]:
        """List credit cards by name."""
        pass

    @abstractmethod
    def update_credit_card(
        self,
        card_id: int,
        name: Optional[str] = None,
        bank_name: Optional[str] = None,
        total_limit: Optional[Decimal] = None,
        statement_day: Optional[int] = None,
        currency: Optional[str] = None,
    ) -> None:
        """Update credit card fields that are not None."""
        pass

    @abstractmethod
    def delete_credit_card(self, card_id: int) -> None:
        """Delete a credit card and its charges."""
        pass

    @abstractmethod
    def create_card_charge(
        self,
        card_id: int,
        description: str,
        amount: Decimal,
        transaction_date: date,
        installments: int = 1,
        current_installment: int = 1,
    ) -> int:
        """Record an unpaid card charge. Returns charge ID."""
        pass

    @abstractmethod
    def get_card_charge(self, charge_id: int) -> Optional[CardCharge]:
        """Get card charge by ID."""
        pass

    @abstractmethod
    def list_card_charges(self, card_id: int) -> list[CardCharge]:
        """List a card's charges, newest first."""
        pass

    @abstractmethod
    def list_cards_with_charges(self) -> list[tuple[CreditCard, list[CardCharge]]]:
        """List every card together with its charges."""
        pass

    @abstractmethod
    def set_card_charge_paid(self, charge_id: int, is_paid: bool = True) -> None:
        """Mark a card charge paid or unpaid."""
        pass

    @abstractmethod
    def delete_card_charge(self, charge_id: int) -> None:
        """Delete a card charge."""
        pass

    # Scheduled payment operations
    @abstractmethod
    def create_scheduled_payment(
        self,
        description: str,
        amount: Decimal,
        payment_date: date,
        payment_type: EventKind,
        account_id: Optional[int] = None,
        is_recurring: bool = False,
        recurring_period: Optional[RecurringPeriod] = None,
    ) -> int:
        """Create a pending scheduled payment. Returns payment ID."""
        pass

    @abstractmethod
    def get_scheduled_payment(self, payment_id: int) -> Optional[ScheduledPayment]:
        """Get scheduled payment by ID."""
        pass

    @abstractmethod
    def list_scheduled_payments(
        self,
        is_completed: Optional[bool] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[ScheduledPayment]:
        """List scheduled payments by payment date with optional filters."""
        pass

    @abstractmethod
    def update_scheduled_payment(
        self,
        payment_id: int,
        description: Optional[str] = None,
        amount: Optional[Decimal] = None,
        payment_date: Optional[date] = None,
        payment_type: Optional[EventKind] = None,
        is_completed: Optional[bool] = None,
    ) -> None:
        """Update scheduled payment fields that are not None."""
        pass

    @abstractmethod
    def delete_scheduled_payment(self, payment_id: int) -> None:
        """Delete a scheduled payment."""
        pass

    # Debtor operations
    @abstractmethod
    def create_debtor(
        self,
        name: str,
        total_amount: Decimal,
        remaining_amount: Decimal,
        phone: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> int:
        """Create a debtor. Returns debtor ID."""
        pass

    @abstractmethod
    def get_debtor(self, debtor_id: int) -> Optional[Debtor]:
        """Get debtor by ID."""
        pass

    @abstractmethod
    def list_debtors(self) -> list[Debtor]:
        """List debtors, newest first."""
        pass

    @abstractmethod
    def update_debtor(
        self,
        debtor_id: int,
        name: Optional[str] = None,
        phone: Optional[str] = None,
        notes: Optional[str] = None,
        total_amount: Optional[Decimal] = None,
        remaining_amount: Optional[Decimal] = None,
    ) -> None:
        """Update debtor fields that are not None."""
        pass

    @abstractmethod
    def delete_debtor(self, debtor_id: int) -> None:
        """Delete a debtor and its payment history."""
        pass

    @abstractmethod
    def create_debtor_payment(
        self,
        debtor_id: int,
        account_id: int,
        amount: Decimal,
        payment_date: date,
        description: Optional[str] = None,
    ) -> int:
        """Record a collection from a debtor. Returns payment ID."""
        pass

    @abstractmethod
    def list_debtor_payments(self, debtor_id: int) -> list[DebtorPayment]:
        """List a debtor's payments, newest first."""
        pass

    # Investment operations
    @abstractmethod
    def create_investment_account(
        self,
        name: str,
        instrument: str,
        bank_name: Optional[str] = None,
        location: Optional[str] = None,
        is_physical: bool = False,
    ) -> int:
        """Create an empty investment account. Returns account ID."""
        pass

    @abstractmethod
    def get_investment_account(self, account_id: int) -> Optional[InvestmentAccount]:
        """Get investment account by ID."""
        pass

    @abstractmethod
    def list_investment_accounts(self) -> list[InvestmentAccount]:
        """List investment accounts by instrument, then name."""
        pass

    @abstractmethod
    def update_investment_position(
        self, account_id: int, quantity: Decimal, average_cost: Decimal
    ) -> None:
        """Overwrite an investment account's quantity and average cost."""
        pass

    @abstractmethod
    def delete_investment_account(self, account_id: int) -> None:
        """Delete an investment account and its transactions."""
        pass

    @abstractmethod
    def create_investment_transaction(
        self,
        account_id: int,
        trade_type: TradeType,
        quantity: Decimal,
        price_per_unit: Decimal,
        total_amount: Decimal,
        transaction_date: date,
        notes: Optional[str] = None,
    ) -> int:
        """Record a buy or sell. Returns transaction ID."""
        pass

    @abstractmethod
    def get_investment_transaction(self, transaction_id: int) -> Optional[InvestmentTransaction]:
        """Get investment transaction by ID."""
        pass

    @abstractmethod
    def list_investment_transactions(
        self, account_id: Optional[int] = None, limit: Optional[int] = None
    ) -> list[InvestmentTransaction]:
        """List investment transactions, newest first."""
        pass

    @abstractmethod
    def delete_investment_transaction(self, transaction_id: int) -> None:
        """Delete an investment transaction."""
        pass
