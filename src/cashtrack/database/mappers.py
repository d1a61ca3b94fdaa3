"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, so the projector and services never
see ORM objects.
"""

from decimal import Decimal

from cashtrack.domain import entities as domain
from cashtrack.database.models import (
    BankAccount as ORMBankAccount,
    LedgerTransaction as ORMLedgerTransaction,
    Transfer as ORMTransfer,
    CreditCard as ORMCreditCard,
    CardCharge as ORMCardCharge,
    ScheduledPayment as ORMScheduledPayment,
    Debtor as ORMDebtor,
    DebtorPayment as ORMDebtorPayment,
    InvestmentAccount as ORMInvestmentAccount,
    InvestmentTransaction as ORMInvestmentTransaction,
)


def _money(value) -> Decimal:
    return Decimal("0") if value is None else Decimal(value)


def bank_account_to_domain(orm_account: ORMBankAccount) -> domain.BankAccount:
    """Convert SQLAlchemy BankAccount model to domain BankAccount entity."""
    return domain.BankAccount(
        id=orm_account.id,
        name=orm_account.name,
        bank_name=orm_account.bank_name,
        iban=orm_account.iban,
        balance=_money(orm_account.balance),
        currency=orm_account.currency,
        is_favorite=bool(orm_account.is_favorite),
        created_at=orm_account.created_at,
    )


def ledger_transaction_to_domain(orm_txn: ORMLedgerTransaction) -> domain.LedgerTransaction:
    """Convert SQLAlchemy LedgerTransaction model to domain entity."""
    return domain.LedgerTransaction(
        id=orm_txn.id,
        account_id=orm_txn.account_id,
        kind=domain.EventKind(orm_txn.type),
        description=orm_txn.description,
        amount=_money(orm_txn.amount),
        transaction_date=orm_txn.transaction_date,
        created_at=orm_txn.created_at,
    )


def transfer_to_domain(orm_transfer: ORMTransfer) -> domain.Transfer:
    """Convert SQLAlchemy Transfer model to domain Transfer entity."""
    return domain.Transfer(
        id=orm_transfer.id,
        from_account_id=orm_transfer.from_account_id,
        to_account_id=orm_transfer.to_account_id,
        amount=_money(orm_transfer.amount),
        description=orm_transfer.description,
        transfer_date=orm_transfer.transfer_date,
    )


def credit_card_to_domain(orm_card: ORMCreditCard) -> domain.CreditCard:
    """Convert SQLAlchemy CreditCard model to domain CreditCard entity."""
    return domain.CreditCard(
        id=orm_card.id,
        name=orm_card.name,
        bank_name=orm_card.bank_name,
        total_limit=_money(orm_card.total_limit),
        statement_day=orm_card.statement_day,
        currency=orm_card.currency,
        created_at=orm_card.created_at,
    )


def card_charge_to_domain(orm_charge: ORMCardCharge) -> domain.CardCharge:
    """Convert SQLAlchemy CardCharge model to domain CardCharge entity."""
    return domain.CardCharge(
        id=orm_charge.id,
        card_id=orm_charge.card_id,
        description=orm_charge.description,
        amount=_money(orm_charge.amount),
        transaction_date=orm_charge.transaction_date,
        installments=orm_charge.installments,
        current_installment=orm_charge.current_installment,
        is_paid=bool(orm_charge.is_paid),
    )


def scheduled_payment_to_domain(orm_payment: ORMScheduledPayment) -> domain.ScheduledPayment:
    """Convert SQLAlchemy ScheduledPayment model to domain entity."""
    period = orm_payment.recurring_period
    return domain.ScheduledPayment(
        id=orm_payment.id,
        account_id=orm_payment.account_id,
        description=orm_payment.description,
        amount=_money(orm_payment.amount),
        payment_date=orm_payment.payment_date,
        payment_type=domain.EventKind(orm_payment.payment_type),
        is_recurring=bool(orm_payment.is_recurring),
        recurring_period=domain.RecurringPeriod(period) if period else None,
        is_completed=bool(orm_payment.is_completed),
    )


def debtor_to_domain(orm_debtor: ORMDebtor) -> domain.Debtor:
    """Convert SQLAlchemy Debtor model to domain Debtor entity."""
    return domain.Debtor(
        id=orm_debtor.id,
        name=orm_debtor.name,
        phone=orm_debtor.phone,
        notes=orm_debtor.notes,
        total_amount=_money(orm_debtor.total_amount),
        remaining_amount=_money(orm_debtor.remaining_amount),
        created_at=orm_debtor.created_at,
    )


def debtor_payment_to_domain(orm_payment: ORMDebtorPayment) -> domain.DebtorPayment:
    """Convert SQLAlchemy DebtorPayment model to domain entity."""
    return domain.DebtorPayment(
        id=orm_payment.id,
        debtor_id=orm_payment.debtor_id,
        account_id=orm_payment.account_id,
        amount=_money(orm_payment.amount),
        payment_date=orm_payment.payment_date,
        description=orm_payment.description,
    )


def investment_account_to_domain(orm_account: ORMInvestmentAccount) -> domain.InvestmentAccount:
    """Convert SQLAlchemy InvestmentAccount model to domain entity."""
    return domain.InvestmentAccount(
        id=orm_account.id,
        name=orm_account.name,
        instrument=orm_account.type,
        bank_name=orm_account.bank_name,
        location=orm_account.location,
        is_physical=bool(orm_account.is_physical),
        quantity=_money(orm_account.quantity),
        average_cost=_money(orm_account.average_cost),
    )


def investment_transaction_to_domain(orm_txn: ORMInvestmentTransaction) -> domain.InvestmentTransaction:
    """Convert SQLAlchemy InvestmentTransaction model to domain entity."""
    return domain.InvestmentTransaction(
        id=orm_txn.id,
        account_id=orm_txn.account_id,
        trade_type=domain.TradeType(orm_txn.type),
        quantity=_money(orm_txn.quantity),
        price_per_unit=_money(orm_txn.price_per_unit),
        total_amount=_money(orm_txn.total_amount),
        transaction_date=orm_txn.transaction_date,
        notes=orm_txn.notes,
    )
