"""Receivable (debtor) commands."""

import click
from cashtrack.cli.account_resolution import resolve_account_or_exit
from cashtrack.cli.error_handling import amount_or_exit, date_or_exit, handle_domain_error
from cashtrack.domain.account import AccountService
from cashtrack.domain.debtor import DebtorService
from cashtrack.domain.errors import DomainError
from cashtrack.utils.formatting import format_money


@click.group()
def debtor_group():
    """Track money owed to you."""
    pass


@debtor_group.command("add")
@click.argument("name")
@click.argument("amount")
@click.option("--phone", help="Phone number")
@click.option("--notes", help="Notes")
@click.pass_context
def add_debtor(ctx, name: str, amount: str, phone: str | None, notes: str | None) -> None:
    """Record that NAME owes AMOUNT.

    Examples:
        cashtrack debtor add "Ali" 1500 --notes "Concert tickets"
    """
    service = DebtorService(ctx.obj["db"])
    value = amount_or_exit(ctx, amount)
    try:
        debtor_id = service.create_debtor(name, value, phone=phone, notes=notes)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Added debtor '{name}' owing {format_money(value)} (ID: {debtor_id})")


@debtor_group.command("list")
@click.pass_context
def list_debtors(ctx) -> None:
    """List debtors and what they still owe."""
    service = DebtorService(ctx.obj["db"])

    debtors = service.list_debtors()
    if not debtors:
        click.echo("No debtors found.")
        return

    click.echo(f"\n{'ID':<6} {'Name':<20} {'Total':>14} {'Remaining':>14}")
    click.echo("-" * 58)
    for d in debtors:
        click.echo(
            f"{d.id:<6} {d.name:<20} {format_money(d.total_amount):>14} {format_money(d.remaining_amount):>14}"
        )
    click.echo("-" * 58)
    click.echo(f"Total receivable: {format_money(service.total_receivable())}")


@debtor_group.command("collect")
@click.argument("debtor_id", type=int)
@click.argument("amount")
@click.option("--account", required=True, help="Account receiving the money (name or ID)")
@click.option("--date", "payment_date", help="Payment date (defaults to today)")
@click.option("--description", help="Description of the income transaction")
@click.pass_context
def collect_payment(
    ctx,
    debtor_id: int,
    amount: str,
    account: str,
    payment_date: str | None,
    description: str | None,
) -> None:
    """Record a payment received from a debtor.

    Payments dated in the future are recorded as upcoming income and do not
    change the account balance yet.

    Examples:
        cashtrack debtor collect 1 500 --account "Salary"
    """
    db = ctx.obj["db"]
    service = DebtorService(db)
    account_id = resolve_account_or_exit(ctx, AccountService(db), account)
    value = amount_or_exit(ctx, amount)
    when = date_or_exit(ctx, payment_date)

    try:
        service.record_payment(
            debtor_id, account_id, value, payment_date=when, description=description
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    debtor = service.get_debtor(debtor_id)
    click.echo(
        f"Received {format_money(value)} from {debtor.name}; "
        f"{format_money(debtor.remaining_amount)} remaining"
    )


@debtor_group.command("history")
@click.argument("debtor_id", type=int)
@click.pass_context
def payment_history(ctx, debtor_id: int) -> None:
    """Show payments received from a debtor."""
    service = DebtorService(ctx.obj["db"])
    try:
        payments = service.payment_history(debtor_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not payments:
        click.echo("No payments recorded.")
        return

    for p in payments:
        click.echo(f"{str(p.payment_date):<12} {format_money(p.amount):>14}  {p.description or ''}")


@debtor_group.command("delete")
@click.argument("debtor_id", type=int)
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_debtor(ctx, debtor_id: int, yes: bool) -> None:
    """Delete a debtor and its payment history."""
    service = DebtorService(ctx.obj["db"])
    debtor = service.get_debtor(debtor_id)
    if debtor is None:
        click.echo(f"Error: Debtor {debtor_id} not found", err=True)
        ctx.exit(1)

    if not yes and not click.confirm(f"Are you sure you want to delete debtor '{debtor.name}'?"):
        click.echo("Deletion cancelled.")
        return

    service.delete_debtor(debtor_id)
    click.echo(f"Deleted debtor '{debtor.name}'")


def register_commands(cli: click.Group) -> None:
    """Register debtor commands with main CLI."""
    cli.add_command(debtor_group, name="debtor")
