"""Tests for the projection service and the cashflow command."""

from datetime import date, timedelta
from decimal import Decimal

import pytest

TODAY = date(2024, 3, 15)


@pytest.fixture
def scheduled(payment_service, transaction_service, card_service, sample_account, sample_card):
    payment_service.create_payment("Rent", "700", date(2024, 3, 20))
    payment_service.create_payment("Salary", "3000", date(2024, 4, 15), payment_type="income")
    transaction_service.create_transaction("expense", "200", date(2024, 3, 10), description="Market")
    transaction_service.create_transaction("income", "50", date(2024, 3, 18), description="Refund")
    card_service.add_charge(sample_card.id, "Groceries", "600", date(2024, 3, 10))


def _balances(days):
    return {day.date: day.balance for day in days}


def test_current_balance_sums_accounts(projection_service, account_service, sample_account):
    account_service.create_account("Savings", balance="250.50")

    assert projection_service.current_balance() == Decimal("1250.50")


def test_card_obligations_skip_settled_cards(projection_service, card_service, sample_card):
    charge = card_service.add_charge(sample_card.id, "Coffee", "80", date(2024, 3, 1))
    card_service.mark_charge_paid(charge)

    assert projection_service.card_obligations(TODAY) == []


def test_dashboard_projection(projection_service, scheduled):
    days = projection_service.build_dashboard_projection(TODAY)
    balances = _balances(days)

    assert len(days) == 30
    assert days[0].date == TODAY
    assert days[-1].date == date(2024, 4, 13)
    assert balances[date(2024, 3, 17)] == Decimal("1000")
    assert balances[date(2024, 3, 18)] == Decimal("1050")
    assert balances[date(2024, 3, 20)] == Decimal("350")
    assert balances[date(2024, 3, 25)] == Decimal("-250")
    assert days[-1].balance == Decimal("-250")

    [card_day] = [day for day in days if day.date == date(2024, 3, 25)]
    assert [e.description for e in card_day.events] == ["Test Card card payment"]


def test_period_projection_rewinds_past_transactions(projection_service, scheduled):
    days = projection_service.build_period_projection(date(2024, 3, 1), date(2024, 3, 31), today=TODAY)
    balances = _balances(days)

    assert len(days) == 31
    assert balances[date(2024, 3, 1)] == Decimal("1200")
    assert balances[date(2024, 3, 9)] == Decimal("1200")
    assert balances[date(2024, 3, 10)] == Decimal("1000")
    assert balances[date(2024, 3, 18)] == Decimal("1050")
    assert balances[date(2024, 3, 31)] == Decimal("-250")


def test_past_window_rewinds_transactions_after_window_end(projection_service, transaction_service, sample_account):
    transaction_service.create_transaction("income", "200", date(2024, 3, 13), description="Bonus")
    transaction_service.create_transaction("expense", "50", date(2024, 3, 5), description="Taxi")

    days = projection_service.build_period_projection(date(2024, 3, 1), date(2024, 3, 10), today=TODAY)
    balances = _balances(days)

    assert len(days) == 10
    assert balances[date(2024, 3, 1)] == Decimal("850")
    assert balances[date(2024, 3, 5)] == Decimal("800")
    assert balances[date(2024, 3, 10)] == Decimal("800")
    assert all(e.description != "Bonus" for day in days for e in day.events)


def test_salary_period_projection(projection_service, scheduled):
    days = projection_service.build_salary_period_projection(TODAY, pay_day=15)

    assert days[0].date == date(2024, 3, 15)
    assert days[-1].date == date(2024, 5, 14)
    assert len(days) == 61
    # Salary lands on the next pay day
    assert _balances(days)[date(2024, 4, 15)] == Decimal("2750")


def test_cashflow_command_without_events(run_cli, sample_account):
    result = run_cli("cashflow")

    assert result.exit_code == 0
    assert "current balance ₺1,000.00" in result.output
    assert "End of period: ₺1,000.00" in result.output
    assert "Warning" not in result.output


def test_cashflow_command_warns_on_negative_balance(run_cli, payment_service, sample_account):
    payment_service.create_payment("Tuition", "1500", date.today() + timedelta(days=5))

    result = run_cli("cashflow")

    assert result.exit_code == 0
    assert "Tuition (-₺1,500.00)" in result.output
    assert "Lowest: -₺500.00" in result.output
    assert "Warning: balance goes negative on 25 day(s)" in result.output


def test_cashflow_command_all_days(run_cli, sample_account):
    result = run_cli("cashflow", "--all-days")

    assert result.exit_code == 0
    first = date.today().strftime("%d %b")
    assert first in result.output


def test_cashflow_command_rejects_reversed_window(run_cli):
    result = run_cli("cashflow", "--start-date", "2024-03-10", "--end-date", "2024-03-01")

    assert result.exit_code == 1
    assert "End date must not be before start date" in result.output


def test_cashflow_command_salary_period_conflict(run_cli):
    result = run_cli("cashflow", "--salary-period", "--this-month")

    assert result.exit_code == 1
    assert "--salary-period cannot be combined" in result.output


def test_cashflow_help_explains_future_window_start(run_cli):
    result = run_cli("cashflow", "--help")

    text = " ".join(result.output.split())
    assert result.exit_code == 0
    assert "open with the current balance; payments due before the window starts are not deducted" in text


def test_next_month_starts_from_current_balance(projection_service, payment_service, sample_account):
    payment_service.create_payment("Rent", "700", date(2024, 3, 20))

    days = projection_service.build_period_projection(date(2024, 4, 1), date(2024, 4, 30), today=TODAY)

    assert days[0].balance == Decimal("1000")
    assert all(not day.events for day in days)


def test_cashflow_command_explicit_window(run_cli, sample_account):
    result = run_cli("cashflow", "--start-date", "2024-03-01", "--end-date", "2024-03-10")

    assert result.exit_code == 0
    assert "Cash flow 2024-03-01 to 2024-03-10" in result.output
