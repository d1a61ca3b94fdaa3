"""SQLAlchemy models for cashtrack database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    Boolean,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()

MONEY = Numeric(14, 2)
QUANTITY = Numeric(18, 6)


class BankAccount(Base):
    """Bank account model."""

    __tablename__ = "bank_accounts"

    id = Column(Integer, primary_key=True)
    name = Column(String, unique=True, nullable=False)
    bank_name = Column(String, nullable=True)
    iban = Column(String, nullable=True)
    balance = Column(MONEY, default=0, nullable=False)
    currency = Column(String(3), default="TRY", nullable=False)
    is_favorite = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    transactions = relationship("LedgerTransaction", back_populates="account")


class LedgerTransaction(Base):
    """Dated income/expense model."""

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True)
    account_id = Column(Integer, ForeignKey("bank_accounts.id"), nullable=True)
    type = Column(String, nullable=False)
    description = Column(String, nullable=False, default="")
    amount = Column(MONEY, nullable=False)
    transaction_date = Column(Date, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    account = relationship("BankAccount", back_populates="transactions")


class Transfer(Base):
    """Transfer between two bank accounts."""

    __tablename__ = "transfers"

    id = Column(Integer, primary_key=True)
    from_account_id = Column(Integer, ForeignKey("bank_accounts.id"), nullable=False)
    to_account_id = Column(Integer, ForeignKey("bank_accounts.id"), nullable=False)
    amount = Column(MONEY, nullable=False)
    description = Column(String, nullable=False)
    transfer_date = Column(Date, nullable=False)


class CreditCard(Base):
    """Credit card model."""

    __tablename__ = "credit_cards"

    id = Column(Integer, primary_key=True)
    name = Column(String, unique=True, nullable=False)
    bank_name = Column(String, nullable=True)
    total_limit = Column(MONEY, default=0, nullable=False)
    statement_day = Column(Integer, nullable=False)
    currency = Column(String(3), default="TRY", nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    charges = relationship("CardCharge", back_populates="card", cascade="all, delete-orphan")


class CardCharge(Base):
    """Credit card purchase model."""

    __tablename__ = "card_transactions"

    id = Column(Integer, primary_key=True)
    card_id = Column(Integer, ForeignKey("credit_cards.id"), nullable=False)
    description = Column(String, nullable=False)
    amount = Column(MONEY, nullable=False)
    transaction_date = Column(Date, nullable=False)
    installments = Column(Integer, default=1, nullable=False)
    current_installment = Column(Integer, default=1, nullable=False)
    is_paid = Column(Boolean, default=False, nullable=False)

    # Relationships
    card = relationship("CreditCard", back_populates="charges")


class ScheduledPayment(Base):
    """Planned income/expense model."""

    __tablename__ = "scheduled_payments"

    id = Column(Integer, primary_key=True)
    account_id = Column(Integer, ForeignKey("bank_accounts.id"), nullable=True)
    description = Column(String, nullable=False)
    amount = Column(MONEY, nullable=False)
    payment_date = Column(Date, nullable=False)
    payment_type = Column(String, nullable=False)
    is_recurring = Column(Boolean, default=False, nullable=False)
    recurring_period = Column(String, nullable=True)
    is_completed = Column(Boolean, default=False, nullable=False)


class Debtor(Base):
    """Receivable model."""

    __tablename__ = "debtors"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    phone = Column(String, nullable=True)
    notes = Column(String, nullable=True)
    total_amount = Column(MONEY, nullable=False)
    remaining_amount = Column(MONEY, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    payments = relationship("DebtorPayment", back_populates="debtor", cascade="all, delete-orphan")


class DebtorPayment(Base):
    """Collection received from a debtor."""

    __tablename__ = "debtor_payments"

    id = Column(Integer, primary_key=True)
    debtor_id = Column(Integer, ForeignKey("debtors.id"), nullable=False)
    account_id = Column(Integer, ForeignKey("bank_accounts.id"), nullable=False)
    amount = Column(MONEY, nullable=False)
    payment_date = Column(Date, nullable=False)
    description = Column(String, nullable=True)

    # Relationships
    debtor = relationship("Debtor", back_populates="payments")


class InvestmentAccount(Base):
    """Investment holding model."""

    __tablename__ = "investment_accounts"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    type = Column(String, nullable=False)
    bank_name = Column(String, nullable=True)
    location = Column(String, nullable=True)
    is_physical = Column(Boolean, default=False, nullable=False)
    quantity = Column(QUANTITY, default=0, nullable=False)
    average_cost = Column(QUANTITY, default=0, nullable=False)

    # Relationships
    transactions = relationship(
        "InvestmentTransaction", back_populates="account", cascade="all, delete-orphan"
    )


class InvestmentTransaction(Base):
    """Buy/sell of an investment holding."""

    __tablename__ = "investment_transactions"

    id = Column(Integer, primary_key=True)
    account_id = Column(Integer, ForeignKey("investment_accounts.id"), nullable=False)
    type = Column(String, nullable=False)
    quantity = Column(QUANTITY, nullable=False)
    price_per_unit = Column(QUANTITY, nullable=False)
    total_amount = Column(MONEY, nullable=False)
    transaction_date = Column(Date, nullable=False)
    notes = Column(String, nullable=True)

    # Relationships
    account = relationship("InvestmentAccount", back_populates="transactions")


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
