"""Tests for Database interface returning domain models."""

import pytest
from datetime import date, datetime
from decimal import Decimal

from cashtrack.domain import entities
from cashtrack.domain.errors import NotFoundError


class TestDatabaseInterface:
    """Tests to verify Database interface returns domain models."""

    def test_get_bank_account_returns_domain_model(self, temp_db):
        """Test that get_bank_account returns a domain BankAccount entity."""
        account_id = temp_db.create_bank_account(name="Salary", bank_name="Garanti", balance=Decimal("12.34"))

        account = temp_db.get_bank_account(account_id)

        assert isinstance(account, entities.BankAccount)
        assert account.id == account_id
        assert account.balance == Decimal("12.34")
        assert account.currency == "TRY"
        assert account.is_favorite is False
        assert isinstance(account.created_at, datetime)

    def test_get_missing_rows_return_none(self, temp_db):
        assert temp_db.get_bank_account(99) is None
        assert temp_db.get_credit_card(99) is None
        assert temp_db.get_scheduled_payment(99) is None
        assert temp_db.get_debtor(99) is None

    def test_list_bank_accounts_puts_favorites_first(self, temp_db):
        temp_db.create_bank_account(name="Alpha")
        temp_db.create_bank_account(name="Zeta", is_favorite=True)
        temp_db.create_bank_account(name="Beta")

        assert [a.name for a in temp_db.list_bank_accounts()] == ["Zeta", "Alpha", "Beta"]

    def test_money_keeps_two_decimals(self, temp_db):
        account_id = temp_db.create_bank_account(name="Cash")

        temp_db.update_account_balance(account_id, Decimal("1234.5"))

        assert temp_db.get_bank_account(account_id).balance == Decimal("1234.50")

    def test_update_missing_account_raises(self, temp_db):
        with pytest.raises(NotFoundError):
            temp_db.update_account_balance(42, Decimal("1"))

    def test_reference_count(self, temp_db):
        first = temp_db.create_bank_account(name="First")
        second = temp_db.create_bank_account(name="Second")
        temp_db.create_ledger_transaction(first, entities.EventKind.INCOME, "Salary", Decimal("10"), date(2024, 3, 1))
        temp_db.create_transfer(first, second, Decimal("5"), "Move", date(2024, 3, 2))
        temp_db.create_scheduled_payment(
            "Rent", Decimal("7"), date(2024, 4, 1), entities.EventKind.EXPENSE, account_id=second
        )

        assert temp_db.get_account_reference_count(first) == 2
        assert temp_db.get_account_reference_count(second) == 2

    def test_cards_with_charges(self, temp_db):
        card_id = temp_db.create_credit_card(name="Bonus", statement_day=15, total_limit=Decimal("5000"))
        temp_db.create_card_charge(card_id, "Phone", Decimal("1200"), date(2024, 3, 2), installments=6)
        temp_db.create_credit_card(name="Axess", statement_day=1)

        pairs = temp_db.list_cards_with_charges()

        assert [card.name for card, _ in pairs] == ["Axess", "Bonus"]
        assert pairs[0][1] == []
        [charge] = pairs[1][1]
        assert isinstance(charge, entities.CardCharge)
        assert charge.installments == 6
        assert charge.is_paid is False

    def test_delete_card_cascades_to_charges(self, temp_db):
        card_id = temp_db.create_credit_card(name="Bonus", statement_day=15)
        charge_id = temp_db.create_card_charge(card_id, "Coffee", Decimal("80"), date(2024, 3, 2))

        temp_db.delete_credit_card(card_id)

        assert temp_db.get_card_charge(charge_id) is None

    def test_scheduled_payment_filters(self, temp_db):
        expense = entities.EventKind.EXPENSE
        march = temp_db.create_scheduled_payment("Gym", Decimal("50"), date(2024, 3, 20), expense)
        april = temp_db.create_scheduled_payment("Rent", Decimal("700"), date(2024, 4, 1), expense)
        temp_db.update_scheduled_payment(march, is_completed=True)

        pending = temp_db.list_scheduled_payments(is_completed=False)
        in_march = temp_db.list_scheduled_payments(start_date=date(2024, 3, 1), end_date=date(2024, 3, 31))

        assert [p.id for p in pending] == [april]
        assert [p.id for p in in_march] == [march]
        assert in_march[0].is_completed is True

    def test_investment_position_round_trip(self, temp_db):
        account_id = temp_db.create_investment_account(name="Gold", instrument="XAU", is_physical=True)

        temp_db.update_investment_position(account_id, Decimal("12.345678"), Decimal("2100.5"))

        account = temp_db.get_investment_account(account_id)
        assert isinstance(account, entities.InvestmentAccount)
        assert account.quantity == Decimal("12.345678")
        assert account.average_cost == Decimal("2100.5")
