"""Shared pytest fixtures for cashtrack tests."""

import os
import tempfile
from datetime import date
from decimal import Decimal

import pytest

from cashtrack.database.factories import create_sqlite_database
from cashtrack.domain.account import AccountService
from cashtrack.domain.card import CardService
from cashtrack.domain.cashflow import ProjectionService
from cashtrack.domain.debtor import DebtorService
from cashtrack.domain.investment import InvestmentService
from cashtrack.domain.payment import ScheduledPaymentService
from cashtrack.domain.transaction import TransactionService


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def account_service(temp_db):
    """Create an AccountService with a temporary database."""
    return AccountService(temp_db)


@pytest.fixture
def transaction_service(temp_db):
    """Create a TransactionService with a temporary database."""
    return TransactionService(temp_db)


@pytest.fixture
def card_service(temp_db):
    """Create a CardService with a temporary database."""
    return CardService(temp_db)


@pytest.fixture
def payment_service(temp_db):
    """Create a ScheduledPaymentService with a temporary database."""
    return ScheduledPaymentService(temp_db)


@pytest.fixture
def debtor_service(temp_db):
    """Create a DebtorService with a temporary database."""
    return DebtorService(temp_db)


@pytest.fixture
def investment_service(temp_db):
    """Create an InvestmentService with a temporary database."""
    return InvestmentService(temp_db)


@pytest.fixture
def projection_service(temp_db):
    """Create a ProjectionService with a temporary database."""
    return ProjectionService(temp_db)


@pytest.fixture
def sample_account(account_service):
    """Create a sample account holding 1000."""
    account_id = account_service.create_account(
        name="Test Account", bank_name="Test Bank", balance=Decimal("1000.00")
    )
    return account_service.get_account(account_id)


@pytest.fixture
def sample_card(card_service):
    """Create a sample card with statement day 15 and a 10000 limit."""
    card_id = card_service.create_card(
        name="Test Card", statement_day=15, bank_name="Test Bank", total_limit=Decimal("10000")
    )
    return card_service.get_card(card_id)


@pytest.fixture
def today():
    """A fixed Friday used as the reference day."""
    return date(2024, 3, 15)


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def session_path(tmp_path):
    """Path for a throwaway session file."""
    return str(tmp_path / "session.json")


@pytest.fixture
def cli_args(temp_db, session_path, monkeypatch):
    """Leading CLI arguments pointing at the temporary database and session."""
    monkeypatch.delenv("CASHTRACK_PASSWORD", raising=False)
    return ["--db-path", temp_db.database_path, "--session-path", session_path]


@pytest.fixture
def run_cli(cli_runner, cli_args, temp_db):
    """Invoke the CLI sharing the test database session, so writes are visible to the test."""
    from cashtrack.cli.main import cli

    def run(*args, input=None, **extra_obj):
        return cli_runner.invoke(cli, cli_args + list(args), input=input, obj={"db": temp_db, **extra_obj})

    return run
