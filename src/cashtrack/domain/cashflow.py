"""Cash-flow domain service.

Gathers balances, scheduled payments, ledger transactions and card
obligations from the ledger store and hands them to the projector.
"""

from datetime import date
from decimal import Decimal
from typing import Optional

from cashtrack.database.base import Database
from cashtrack.domain.entities import (
    CardObligation,
    LedgerTransaction,
    ProjectionDay,
    ScheduledEvent,
    ScheduledPayment,
)
from cashtrack.domain.obligations import card_obligations
from cashtrack.domain.projection import generate_projection, salary_period_window


def payment_to_event(payment: ScheduledPayment) -> ScheduledEvent:
    return ScheduledEvent(
        date=payment.payment_date,
        description=payment.description,
        amount=payment.amount,
        kind=payment.payment_type,
    )


def transaction_to_event(txn: LedgerTransaction) -> ScheduledEvent:
    return ScheduledEvent(
        date=txn.transaction_date,
        description=txn.description,
        amount=txn.amount,
        kind=txn.kind,
    )


class ProjectionService:
    """Service that assembles projector input from stored records."""

    def __init__(self, db: Database):
        """Initialize projection service.

        Args:
            db: Database instance
        """
        self.db = db

    def current_balance(self) -> Decimal:
        """Sum of all bank account balances."""
        return sum((acc.balance for acc in self.db.list_bank_accounts()), Decimal("0"))

    def card_obligations(self, today: date) -> list[CardObligation]:
        """Obligations of every card with something due."""
        return card_obligations(self.db.list_cards_with_charges(), today)

    def build_period_projection(
        self,
        start_date: date,
        end_date: date,
        today: Optional[date] = None,
    ) -> list[ProjectionDay]:
        """Project an explicit window, rewinding the balance for past days.

        Pending payments dated from today to ``end_date`` and ledger
        transactions dated today or later are applied as scheduled events.
        Ledger transactions before today rebuild the balance at ``start_date``
        and are replayed on their day, including those after a window that
        ends in the past.
        """
        today = today or date.today()
        payments = self.db.list_scheduled_payments(
            is_completed=False, start_date=today, end_date=end_date
        )
        # Everything from start_date up to today is needed to rewind the balance
        transactions = self.db.list_ledger_transactions(
            start_date=start_date, end_date=max(end_date, today)
        )

        past = [transaction_to_event(t) for t in transactions if t.transaction_date < today]
        future = [
            transaction_to_event(t)
            for t in transactions
            if today <= t.transaction_date <= end_date
        ]
        events = [payment_to_event(p) for p in payments] + future

        return generate_projection(
            self.current_balance(),
            events,
            self.card_obligations(today),
            start_date=start_date,
            end_date=end_date,
            past_transactions=past,
            today=today,
        )

    def build_salary_period_projection(
        self, today: Optional[date] = None, pay_day: int = 15
    ) -> list[ProjectionDay]:
        """Project the two pay periods around today."""
        today = today or date.today()
        start, end = salary_period_window(today, pay_day)
        return self.build_period_projection(start, end, today=today)

    def build_dashboard_projection(self, today: Optional[date] = None) -> list[ProjectionDay]:
        """Project the default 30-day window from today.

        Uses pending payments dated today or later and ledger transactions
        dated strictly after today; nothing is rewound.
        """
        today = today or date.today()
        payments = self.db.list_scheduled_payments(is_completed=False, start_date=today)
        transactions = [
            t for t in self.db.list_ledger_transactions(start_date=today) if t.transaction_date > today
        ]
        events = [payment_to_event(p) for p in payments] + [
            transaction_to_event(t) for t in transactions
        ]
        return generate_projection(
            self.current_balance(),
            events,
            self.card_obligations(today),
            today=today,
        )
