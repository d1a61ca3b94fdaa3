"""CLI helpers for account and card resolution."""

from __future__ import annotations

import click
from cashtrack.domain.account import AccountService
from cashtrack.domain.card import CardService
from cashtrack.utils.account_resolver import resolve_account, resolve_card


def resolve_account_or_exit(
    ctx: click.Context, account_service: AccountService, account: str | int
) -> int:
    """Resolve account name or ID, or exit with a CLI error.

    This keeps error messaging and exit behavior consistent across commands.
    """
    try:
        return resolve_account(account_service, account)
    except ValueError as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(1)


def resolve_card_or_exit(ctx: click.Context, card_service: CardService, card: str | int) -> int:
    """Resolve card name or ID, or exit with a CLI error."""
    try:
        return resolve_card(card_service, card)
    except ValueError as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(1)
