"""Tests for credit cards, charges and card commands."""

from datetime import date
from decimal import Decimal

import pytest

from cashtrack.domain.errors import ConflictError, NotFoundError, ValidationError


def test_create_card_validates_statement_day(card_service):
    with pytest.raises(ValidationError):
        card_service.create_card("Bad", statement_day=32)
    with pytest.raises(ValidationError):
        card_service.create_card("Bad", statement_day=0)


def test_create_card_rejects_duplicate_name(card_service, sample_card):
    with pytest.raises(ConflictError):
        card_service.create_card(sample_card.name, statement_day=1)


def test_add_charge_validation(card_service, sample_card):
    with pytest.raises(ValidationError):
        card_service.add_charge(sample_card.id, "Zero", 0, date(2024, 3, 1))
    with pytest.raises(ValidationError):
        card_service.add_charge(sample_card.id, "No plan", 10, date(2024, 3, 1), installments=0)
    with pytest.raises(NotFoundError):
        card_service.add_charge(999, "Nowhere", 10, date(2024, 3, 1))


def test_overview(card_service, sample_card):
    card_service.add_charge(sample_card.id, "Groceries", "600", date(2024, 3, 10))
    card_service.add_charge(sample_card.id, "Laptop", "1200", date(2024, 3, 12), installments=6)
    paid = card_service.add_charge(sample_card.id, "Old", "500", date(2024, 3, 1))
    card_service.mark_charge_paid(paid)

    [overview] = card_service.list_overviews(date(2024, 3, 15))

    assert overview.used_limit == Decimal("1800")
    assert overview.available_limit == Decimal("8200")
    assert overview.period_debt == Decimal("800")
    assert overview.statement_date == date(2024, 3, 15)
    assert overview.due_date == date(2024, 3, 25)
    assert card_service.total_debt() == Decimal("1800")


def test_charge_installments(card_service, sample_card):
    single = card_service.add_charge(sample_card.id, "Coffee", "80", date(2024, 3, 1))
    split = card_service.add_charge(sample_card.id, "Phone", "1200", date(2024, 3, 2), installments=12)
    charges = {c.id: c for c in card_service.list_charges(sample_card.id)}

    assert card_service.charge_installments(charges[single]) is None
    details = card_service.charge_installments(charges[split])
    assert details.monthly_payment == Decimal("100")
    assert details.remaining_total == Decimal("1200")


def test_delete_card_removes_charges(card_service, sample_card, temp_db):
    charge_id = card_service.add_charge(sample_card.id, "Coffee", "80", date(2024, 3, 1))

    card_service.delete_card(sample_card.id)

    assert card_service.get_card(sample_card.id) is None
    assert temp_db.get_card_charge(charge_id) is None


def test_update_card(card_service, sample_card):
    card_service.update_card(sample_card.id, statement_day=31, total_limit="25000")

    card = card_service.get_card(sample_card.id)
    assert card.statement_day == 31
    assert card.total_limit == Decimal("25000")
    with pytest.raises(ValidationError):
        card_service.update_card(sample_card.id, statement_day=40)


def test_card_create_and_list_commands(run_cli):
    result = run_cli("card", "create", "Bonus", "--statement-day", "15", "--limit", "40000")
    assert result.exit_code == 0
    assert "Created card 'Bonus'" in result.output

    result = run_cli("card", "list")
    assert result.exit_code == 0
    assert "Bonus" in result.output
    assert "Limit: ₺40,000.00" in result.output
    assert "Total card debt: ₺0.00" in result.output


def test_card_create_rejects_bad_statement_day(run_cli):
    result = run_cli("card", "create", "Bonus", "--statement-day", "45")

    assert result.exit_code == 1
    assert "Statement day must be between 1 and 31" in result.output


def test_card_charge_show_and_pay_commands(run_cli, card_service, sample_card):
    result = run_cli(
        "card", "charge", "Test Card", "1200",
        "--description", "Phone", "--date", "2024-03-02", "--installments", "6",
    )
    assert result.exit_code == 0
    assert "Split into 6 installments of ₺200.00" in result.output

    result = run_cli("card", "show", "Test Card")
    assert result.exit_code == 0
    assert "Phone" in result.output
    assert "1/6 (0%)" in result.output

    [charge] = card_service.list_charges(sample_card.id)
    result = run_cli("card", "pay", str(charge.id))
    assert result.exit_code == 0
    assert card_service.list_charges(sample_card.id)[0].is_paid is True

    result = run_cli("card", "show", "Test Card")
    assert "No charges." in result.output


def test_card_unknown(run_cli):
    result = run_cli("card", "show", "Nope")

    assert result.exit_code == 1
    assert "Card 'Nope' not found" in result.output


def test_card_delete_command(run_cli, card_service, sample_card):
    result = run_cli("card", "delete", "Test Card", "--yes")

    assert result.exit_code == 0
    assert card_service.list_cards() == []
