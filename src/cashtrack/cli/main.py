"""Main CLI entry point."""

import logging
import os
from pathlib import Path

import click
from cashtrack.database.factories import create_sqlite_database, default_data_dir
from cashtrack.domain.session import FileSessionStorage, Session

# Import and register all commands at module level
from cashtrack.cli.commands import (
    account,
    card,
    cashflow,
    debtor,
    investment,
    payment,
    session,
    transaction,
)

OPEN_COMMANDS = {"login", "logout"}


def default_session_path() -> Path:
    return default_data_dir() / "session.json"


def build_session(session_path: str | None) -> Session:
    """Session bound to CASHTRACK_PASSWORD and a session file."""
    path = session_path or os.environ.get("CASHTRACK_SESSION_PATH") or default_session_path()
    return Session(os.environ.get("CASHTRACK_PASSWORD"), FileSessionStorage(path))


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides CASHTRACK_DB_PATH environment variable)",
    envvar="CASHTRACK_DB_PATH",
)
@click.option(
    "--session-path",
    type=click.Path(),
    help="Path to session file (overrides CASHTRACK_SESSION_PATH environment variable)",
    envvar="CASHTRACK_SESSION_PATH",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx, db_path: str | None, session_path: str | None, verbose: bool):
    """Cashtrack - Personal cash-flow tracking.

    Keep bank balances, credit cards, scheduled payments, receivables and
    investments in one place, and project the balance day by day.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if ctx.invoked_subcommand is None:
        return

    user_session = build_session(session_path)
    ctx.obj["session"] = user_session
    if ctx.invoked_subcommand not in OPEN_COMMANDS:
        if not user_session.is_authenticated():
            click.echo("Error: Not logged in. Run 'cashtrack login' first.", err=True)
            ctx.exit(1)
        if user_session.password_required:
            user_session.touch()

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if "db" not in ctx.obj:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
account.register_commands(cli)
transaction.register_commands(cli)
card.register_commands(cli)
payment.register_commands(cli)
debtor.register_commands(cli)
investment.register_commands(cli)
cashflow.register_commands(cli)
session.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
