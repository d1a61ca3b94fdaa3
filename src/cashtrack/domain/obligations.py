"""Credit card obligations derived from a card's unpaid charges."""

from datetime import date
from decimal import Decimal
from typing import Iterable, Sequence

from cashtrack.domain.dates import as_day
from cashtrack.domain.entities import CardCharge, CardObligation, CreditCard
from cashtrack.domain.statement import (
    due_date,
    due_date_for_statement,
    next_statement_date,
    statement_date_for_transaction,
)


def unpaid_charges(charges: Iterable[CardCharge]) -> list[CardCharge]:
    return [charge for charge in charges if not charge.is_paid]


def charge_period_amount(charge: CardCharge) -> Decimal:
    """Share of a charge billed on one statement."""
    if charge.installments > 1:
        return charge.amount / charge.installments
    return charge.amount


def period_debt(charges: Iterable[CardCharge]) -> Decimal:
    """Amount the unpaid charges add to the current statement."""
    return sum((charge_period_amount(c) for c in unpaid_charges(charges)), Decimal("0"))


def used_limit(charges: Iterable[CardCharge]) -> Decimal:
    """Full amount of unpaid charges held against the card limit."""
    return sum((c.amount for c in unpaid_charges(charges)), Decimal("0"))


def _earliest_unpaid_date(charges: Sequence[CardCharge]) -> date:
    return min(as_day(c.transaction_date, "transaction date") for c in charges)


def card_statement_date(statement_day: int, charges: Iterable[CardCharge], today) -> date:
    """Statement the oldest unpaid charge lands on, else the next statement."""
    unpaid = unpaid_charges(charges)
    if not unpaid:
        return next_statement_date(statement_day, today)
    return statement_date_for_transaction(statement_day, _earliest_unpaid_date(unpaid))


def card_due_date(statement_day: int, charges: Iterable[CardCharge], today) -> date:
    """Due date of the statement holding the oldest unpaid charge.

    Without unpaid charges this is the due date of the next statement after
    ``today``. Both paths apply the weekend shift.
    """
    unpaid = unpaid_charges(charges)
    if not unpaid:
        return due_date(statement_day, today)
    statement = statement_date_for_transaction(statement_day, _earliest_unpaid_date(unpaid))
    return due_date_for_statement(statement)


def card_obligation(card: CreditCard, charges: Sequence[CardCharge], today) -> CardObligation:
    """Aggregate a card's unpaid charges into one dated obligation."""
    return CardObligation(
        card_name=card.name,
        due_date=card_due_date(card.statement_day, charges, today),
        amount=period_debt(charges),
    )


def card_obligations(
    cards_with_charges: Iterable[tuple[CreditCard, Sequence[CardCharge]]], today
) -> list[CardObligation]:
    """Build obligations for every card, dropping cards with nothing due."""
    obligations = []
    for card, charges in cards_with_charges:
        obligation = card_obligation(card, charges, today)
        if obligation.amount > 0:
            obligations.append(obligation)
    return obligations
