"""Tests for ledger transactions and transaction commands."""

from datetime import date
from decimal import Decimal

import pytest

from cashtrack.domain.entities import EventKind
from cashtrack.domain.errors import NotFoundError, ValidationError


def test_create_transaction(transaction_service, sample_account, account_service):
    txn_id = transaction_service.create_transaction(
        "expense", "45.90", date(2024, 3, 20), description="Internet", account_id=sample_account.id
    )

    txn = transaction_service.get_transaction(txn_id)
    assert txn.kind == EventKind.EXPENSE
    assert txn.amount == Decimal("45.90")
    assert txn.transaction_date == date(2024, 3, 20)
    assert txn.description == "Internet"
    # Recording a transaction leaves the balance alone
    assert account_service.get_account(sample_account.id).balance == Decimal("1000")


@pytest.mark.parametrize(
    "kind, amount",
    [("refund", "10"), ("income", "0"), ("expense", "-5")],
)
def test_create_transaction_validation(transaction_service, kind, amount):
    with pytest.raises(ValidationError):
        transaction_service.create_transaction(kind, amount, date(2024, 3, 1))


def test_create_transaction_unknown_account(transaction_service):
    with pytest.raises(NotFoundError):
        transaction_service.create_transaction("income", 10, date(2024, 3, 1), account_id=42)


def test_list_transactions_filters(transaction_service, sample_account):
    transaction_service.create_transaction("income", 100, date(2024, 2, 28))
    in_range = transaction_service.create_transaction(
        "expense", 20, date(2024, 3, 5), account_id=sample_account.id
    )
    transaction_service.create_transaction("expense", 30, date(2024, 3, 6))

    march = transaction_service.list_transactions(start_date=date(2024, 3, 1), end_date=date(2024, 3, 31))
    assert [t.amount for t in march] == [Decimal("20"), Decimal("30")]

    by_account = transaction_service.list_transactions(account_id=sample_account.id)
    assert [t.id for t in by_account] == [in_range]


def test_delete_transaction(transaction_service):
    txn_id = transaction_service.create_transaction("income", 10, date(2024, 3, 1))
    transaction_service.delete_transaction(txn_id)

    assert transaction_service.get_transaction(txn_id) is None
    with pytest.raises(NotFoundError):
        transaction_service.delete_transaction(txn_id)


def test_transaction_add_and_list_commands(run_cli, sample_account):
    result = run_cli(
        "transaction", "add", "expense", "₺1,200.00",
        "--date", "2024-03-05", "--description", "Phone bill", "--account", "Test Account",
    )
    assert result.exit_code == 0
    assert "Recorded expense of ₺1,200.00 on 2024-03-05" in result.output

    run_cli("transaction", "add", "income", "300", "--date", "2024-03-06")

    result = run_cli("transaction", "list", "--start-date", "2024-03-01", "--end-date", "2024-03-31")
    assert result.exit_code == 0
    assert "Found 2 transaction(s)" in result.output
    assert "Phone bill" in result.output
    assert "Expenses: ₺1,200.00 | Income: ₺300.00" in result.output


def test_transaction_add_rejects_bad_amount(run_cli):
    result = run_cli("transaction", "add", "expense", "abc")

    assert result.exit_code == 1
    assert "Invalid amount" in result.output


def test_transaction_list_rejects_conflicting_periods(run_cli):
    result = run_cli("transaction", "list", "--this-month", "--last-month")

    assert result.exit_code == 1
    assert "Only one period option" in result.output


def test_transaction_list_empty(run_cli):
    result = run_cli("transaction", "list")

    assert result.exit_code == 0
    assert "No transactions found" in result.output


def test_transaction_delete_command(run_cli, transaction_service):
    txn_id = transaction_service.create_transaction("income", 10, date(2024, 3, 1))

    result = run_cli("transaction", "delete", str(txn_id), "--yes")

    assert result.exit_code == 0
    assert transaction_service.get_transaction(txn_id) is None

    result = run_cli("transaction", "delete", str(txn_id), "--yes")
    assert result.exit_code == 1
    assert "not found" in result.output
