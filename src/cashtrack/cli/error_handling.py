"""CLI error handling helpers."""

from datetime import date
from decimal import Decimal

import click

from cashtrack.domain.errors import DomainError
from cashtrack.utils.amount_parser import parse_amount
from cashtrack.utils.date_parser import parse_date


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a domain error and exit with failure."""
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)


def amount_or_exit(ctx: click.Context, value: str, label: str = "amount") -> Decimal:
    """Parse an amount argument, or exit with a CLI error."""
    try:
        return parse_amount(value)
    except ValueError as e:
        click.echo(f"Error: Invalid {label}: {e}", err=True)
        ctx.exit(1)


def date_or_exit(ctx: click.Context, value: str | None, label: str = "date") -> date | None:
    """Parse an optional date argument, or exit with a CLI error."""
    if value is None:
        return None
    try:
        return parse_date(value)
    except ValueError as e:
        click.echo(f"Error: Invalid {label}: {e}", err=True)
        ctx.exit(1)
