"""Tests for card obligation aggregation."""

from datetime import date, datetime
from decimal import Decimal

from cashtrack.domain.entities import CardCharge, CreditCard
from cashtrack.domain.obligations import (
    card_due_date,
    card_obligation,
    card_obligations,
    card_statement_date,
    period_debt,
    used_limit,
)


def make_card(statement_day=15, name="Bonus"):
    return CreditCard(
        id=1,
        name=name,
        bank_name="Test Bank",
        total_limit=Decimal("10000"),
        statement_day=statement_day,
        currency="TRY",
        created_at=datetime(2024, 1, 1),
    )


def make_charge(amount, day, installments=1, is_paid=False, charge_id=1):
    return CardCharge(
        id=charge_id,
        card_id=1,
        description=f"Charge {charge_id}",
        amount=Decimal(amount),
        transaction_date=day,
        installments=installments,
        is_paid=is_paid,
    )


def sample_charges():
    return [
        make_charge("600", date(2024, 3, 10), charge_id=1),
        make_charge("1200", date(2024, 3, 12), installments=6, charge_id=2),
        make_charge("500", date(2024, 3, 1), is_paid=True, charge_id=3),
    ]


def test_period_debt_divides_installments_and_skips_paid():
    assert period_debt(sample_charges()) == Decimal("800")


def test_used_limit_counts_full_unpaid_amounts():
    assert used_limit(sample_charges()) == Decimal("1800")


def test_due_date_follows_earliest_unpaid_charge():
    # Earliest unpaid is 2024-03-10 (the paid charge on 03-01 is ignored)
    charges = sample_charges()
    assert card_statement_date(15, charges, date(2024, 3, 15)) == date(2024, 3, 15)
    assert card_due_date(15, charges, date(2024, 3, 15)) == date(2024, 3, 25)


def test_due_date_from_charges_is_shifted_off_weekend():
    # Statement 2024-03-20, +10 lands on Saturday 2024-03-30
    charges = [make_charge("100", date(2024, 3, 5))]
    assert card_due_date(20, charges, date(2024, 3, 6)) == date(2024, 4, 1)


def test_due_date_from_clamped_statement():
    # Statement day 31 in February 2024 closes on the 29th, due Sunday 03-10 -> Monday
    charges = [make_charge("100", date(2024, 2, 10))]
    assert card_due_date(31, charges, date(2024, 2, 12)) == date(2024, 3, 11)


def test_due_date_without_unpaid_charges_uses_next_statement():
    paid = [make_charge("100", date(2024, 3, 1), is_paid=True)]
    assert card_due_date(15, paid, date(2024, 3, 1)) == date(2024, 3, 25)
    assert card_statement_date(15, [], date(2024, 3, 15)) == date(2024, 4, 15)


def test_card_obligation_aggregates_card():
    obligation = card_obligation(make_card(), sample_charges(), date(2024, 3, 15))

    assert obligation.card_name == "Bonus"
    assert obligation.amount == Decimal("800")
    assert obligation.due_date == date(2024, 3, 25)


def test_card_obligations_drop_cards_with_nothing_due():
    cards = [
        (make_card(name="Bonus"), sample_charges()),
        (make_card(name="Empty"), []),
        (make_card(name="Settled"), [make_charge("90", date(2024, 3, 2), is_paid=True)]),
    ]

    obligations = card_obligations(cards, date(2024, 3, 15))

    assert [o.card_name for o in obligations] == ["Bonus"]
