"""Domain model entities for cashtrack.

These are pure data classes representing business concepts, independent of
database schema. The ledger store maps its rows onto them, and the cash-flow
projector only ever sees these types.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional


class EventKind(str, Enum):
    """Direction of a cash movement."""

    INCOME = "income"
    EXPENSE = "expense"


class RecurringPeriod(str, Enum):
    """How often a recurring scheduled payment repeats."""

    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


class TradeType(str, Enum):
    """Side of an investment transaction."""

    BUY = "buy"
    SELL = "sell"


@dataclass(frozen=True)
class BankAccount:
    """Bank account domain entity."""

    id: int
    name: str
    bank_name: Optional[str]
    iban: Optional[str]
    balance: Decimal
    currency: str
    is_favorite: bool
    created_at: datetime


@dataclass(frozen=True)
class LedgerTransaction:
    """Dated income or expense recorded against a bank account."""

    id: int
    account_id: Optional[int]
    kind: EventKind
    description: str
    amount: Decimal
    transaction_date: date
    created_at: datetime


@dataclass(frozen=True)
class Transfer:
    """Money moved between two bank accounts."""

    id: int
    from_account_id: int
    to_account_id: int
    amount: Decimal
    description: str
    transfer_date: date


@dataclass(frozen=True)
class CreditCard:
    """Credit card with a fixed statement day."""

    id: int
    name: str
    bank_name: Optional[str]
    total_limit: Decimal
    statement_day: int
    currency: str
    created_at: datetime


@dataclass(frozen=True)
class CardCharge:
    """A purchase on a credit card, possibly split into installments."""

    id: int
    card_id: int
    description: str
    amount: Decimal
    transaction_date: date
    installments: int = 1
    current_installment: int = 1
    is_paid: bool = False


@dataclass(frozen=True)
class ScheduledPayment:
    """Planned income or expense, optionally recurring."""

    id: int
    account_id: Optional[int]
    description: str
    amount: Decimal
    payment_date: date
    payment_type: EventKind
    is_recurring: bool = False
    recurring_period: Optional[RecurringPeriod] = None
    is_completed: bool = False


@dataclass(frozen=True)
class Debtor:
    """Someone who owes the user money."""

    id: int
    name: str
    phone: Optional[str]
    notes: Optional[str]
    total_amount: Decimal
    remaining_amount: Decimal
    created_at: datetime


@dataclass(frozen=True)
class DebtorPayment:
    """A collection received from a debtor."""

    id: int
    debtor_id: int
    account_id: int
    amount: Decimal
    payment_date: date
    description: Optional[str]


@dataclass(frozen=True)
class InvestmentAccount:
    """Holding of a single instrument with its weighted average cost."""

    id: int
    name: str
    instrument: str
    bank_name: Optional[str]
    location: Optional[str]
    is_physical: bool
    quantity: Decimal
    average_cost: Decimal


@dataclass(frozen=True)
class InvestmentTransaction:
    """Buy or sell of an investment account's instrument."""

    id: int
    account_id: int
    trade_type: TradeType
    quantity: Decimal
    price_per_unit: Decimal
    total_amount: Decimal
    transaction_date: date
    notes: Optional[str]


@dataclass(frozen=True)
class ScheduledEvent:
    """A dated cash movement fed into the projector."""

    date: date
    description: str
    amount: Decimal
    kind: EventKind

    @property
    def signed_amount(self) -> Decimal:
        return self.amount if self.kind == EventKind.INCOME else -self.amount


@dataclass(frozen=True)
class CardObligation:
    """Aggregated amount a card requires on its due date."""

    card_name: str
    due_date: date
    amount: Decimal


@dataclass(frozen=True)
class ProjectionEvent:
    """One event listed on a projection day."""

    description: str
    amount: Decimal
    kind: EventKind


@dataclass(frozen=True)
class ProjectionDay:
    """One entry of the cash-flow forecast."""

    date: date
    events: tuple[ProjectionEvent, ...] = field(default_factory=tuple)
    change: Decimal = Decimal("0")
    balance: Decimal = Decimal("0")

    @property
    def date_str(self) -> str:
        return self.date.isoformat()

    @property
    def formatted_date(self) -> str:
        return self.date.strftime("%d %b")


@dataclass(frozen=True)
class ProjectionSummary:
    """Extremes and warnings derived from a projection."""

    min_balance: Decimal
    max_balance: Decimal
    final_balance: Decimal
    negative_days: tuple[ProjectionDay, ...]


@dataclass(frozen=True)
class InstallmentDetails:
    """Payment progress of an installment purchase."""

    monthly_payment: Decimal
    remaining_count: int
    remaining_total: Decimal
    paid_total: Decimal
    progress_percent: Decimal


@dataclass(frozen=True)
class ProfitLoss:
    """Valuation of a holding against its cost basis."""

    total_cost: Decimal
    current_value: Decimal
    profit: Decimal
    profit_percent: Decimal
    is_profit: bool


@dataclass(frozen=True)
class CardOverview:
    """Derived figures shown for a card."""

    card: CreditCard
    charges: tuple[CardCharge, ...]
    used_limit: Decimal
    available_limit: Decimal
    period_debt: Decimal
    statement_date: date
    due_date: date


@dataclass(frozen=True)
class HoldingValuation:
    """An investment account valued at the current price, when one is known."""

    account: InvestmentAccount
    price: Optional[Decimal]
    valuation: Optional[ProfitLoss]
