"""Credit card commands."""

from datetime import date

import click
from cashtrack.cli.account_resolution import resolve_card_or_exit
from cashtrack.cli.error_handling import amount_or_exit, date_or_exit, handle_domain_error
from cashtrack.domain.calculations import installment_details
from cashtrack.domain.card import CardService
from cashtrack.domain.entities import CardOverview
from cashtrack.domain.errors import DomainError
from cashtrack.utils.formatting import format_money


@click.group()
def card_group():
    """Manage credit cards and their charges."""
    pass


@card_group.command("create")
@click.argument("name", metavar="CARD_NAME")
@click.option("--statement-day", type=int, required=True, help="Day of month the statement is cut (1-31)")
@click.option("--limit", "total_limit", default="0", help="Credit limit")
@click.option("--bank", help="Issuing bank")
@click.option("--currency", default="TRY", show_default=True, help="Currency code")
@click.pass_context
def create_card(
    ctx, name: str, statement_day: int, total_limit: str, bank: str | None, currency: str
) -> None:
    """Create a credit card.

    Examples:
        cashtrack card create "Bonus" --statement-day 15 --limit 40000
    """
    service = CardService(ctx.obj["db"])
    limit = amount_or_exit(ctx, total_limit, "limit")

    try:
        card_id = service.create_card(
            name=name,
            statement_day=statement_day,
            bank_name=bank,
            total_limit=limit,
            currency=currency,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created card '{name}' (ID: {card_id})")


def _echo_overview(overview: CardOverview) -> None:
    card = overview.card
    click.echo(
        f"ID: {card.id:3d} | {card.name:15s} | Limit: {format_money(card.total_limit, card.currency)} | "
        f"Used: {format_money(overview.used_limit, card.currency)} | "
        f"Available: {format_money(overview.available_limit, card.currency)}"
    )
    click.echo(
        f"         Statement: {overview.statement_date} | Due: {overview.due_date} | "
        f"Period debt: {format_money(overview.period_debt, card.currency)}"
    )


@card_group.command("list")
@click.pass_context
def list_cards(ctx) -> None:
    """List cards with limits, debts and the next due date."""
    service = CardService(ctx.obj["db"])

    overviews = service.list_overviews(date.today())
    if not overviews:
        click.echo("No cards found.")
        return

    click.echo("\nCards:")
    click.echo("-" * 90)
    for overview in overviews:
        _echo_overview(overview)
    click.echo("-" * 90)
    click.echo(f"Total card debt: {format_money(service.total_debt())}")


@card_group.command("show")
@click.argument("card", metavar="CARD")
@click.option("--all", "show_all", is_flag=True, help="Include paid charges")
@click.pass_context
def show_card(ctx, card: str, show_all: bool) -> None:
    """Show a card and its charges.

    CARD can be a card name or ID.
    """
    service = CardService(ctx.obj["db"])
    card_id = resolve_card_or_exit(ctx, service, card)
    card_obj = service.get_card(card_id)
    charges = service.list_charges(card_id)
    _echo_overview(service.overview(card_obj, charges, date.today()))

    visible = [c for c in charges if show_all or not c.is_paid]
    if not visible:
        click.echo("\nNo charges.")
        return

    click.echo(f"\n{'ID':<6} {'Date':<12} {'Amount':>14} {'Installment':<14} {'Description':<30}")
    click.echo("-" * 80)
    for charge in visible:
        details = service.charge_installments(charge)
        if details is None:
            plan = "single"
        else:
            plan = f"{charge.current_installment}/{charge.installments} ({details.progress_percent:.0f}%)"
        status = " (paid)" if charge.is_paid else ""
        click.echo(
            f"{charge.id:<6} {str(charge.transaction_date):<12} {format_money(charge.amount):>14} "
            f"{plan:<14} {charge.description[:30]}{status}"
        )


@card_group.command("charge")
@click.argument("card", metavar="CARD")
@click.argument("amount", metavar="AMOUNT")
@click.option("--description", required=True, help="What was bought")
@click.option("--date", "charge_date", default="today", show_default=True, help="Purchase date")
@click.option("--installments", type=int, default=1, show_default=True, help="Number of monthly installments")
@click.pass_context
def add_charge(
    ctx, card: str, amount: str, description: str, charge_date: str, installments: int
) -> None:
    """Record a purchase on a card.

    Examples:
        cashtrack card charge "Bonus" 1200 --description "Phone" --installments 6
    """
    service = CardService(ctx.obj["db"])
    card_id = resolve_card_or_exit(ctx, service, card)
    value = amount_or_exit(ctx, amount)
    when = date_or_exit(ctx, charge_date)

    try:
        charge_id = service.add_charge(card_id, description, value, when, installments=installments)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Added charge of {format_money(value)} (ID: {charge_id})")
    if installments > 1:
        details = installment_details(value, installments, 1)
        click.echo(f"Split into {installments} installments of {format_money(details.monthly_payment)}")


@card_group.command("pay")
@click.argument("charge_id", type=int)
@click.pass_context
def pay_charge(ctx, charge_id: int) -> None:
    """Mark a charge as paid."""
    service = CardService(ctx.obj["db"])
    try:
        service.mark_charge_paid(charge_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Marked charge {charge_id} as paid")


@card_group.command("delete-charge")
@click.argument("charge_id", type=int)
@click.pass_context
def delete_charge(ctx, charge_id: int) -> None:
    """Delete a charge."""
    service = CardService(ctx.obj["db"])
    try:
        service.delete_charge(charge_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted charge {charge_id}")


@card_group.command("delete")
@click.argument("card", metavar="CARD")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_card(ctx, card: str, yes: bool) -> None:
    """Delete a card and all of its charges."""
    service = CardService(ctx.obj["db"])
    card_id = resolve_card_or_exit(ctx, service, card)
    card_obj = service.get_card(card_id)

    if not yes and not click.confirm(
        f"Are you sure you want to delete card '{card_obj.name}' and its charges?"
    ):
        click.echo("Deletion cancelled.")
        return

    service.delete_card(card_id)
    click.echo(f"Deleted card '{card_obj.name}'")


def register_commands(cli: click.Group) -> None:
    """Register card commands with main CLI."""
    cli.add_command(card_group, name="card")
