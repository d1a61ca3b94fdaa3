"""Scheduled payment commands."""

import click
from cashtrack.cli.account_resolution import resolve_account_or_exit
from cashtrack.cli.error_handling import amount_or_exit, date_or_exit, handle_domain_error
from cashtrack.domain.account import AccountService
from cashtrack.domain.entities import EventKind, RecurringPeriod
from cashtrack.domain.errors import DomainError
from cashtrack.domain.payment import PAYMENT_FILTERS, ScheduledPaymentService
from cashtrack.utils.formatting import format_money


@click.group()
def payment_group():
    """Manage scheduled income and expenses."""
    pass


@payment_group.command("add")
@click.argument("description")
@click.argument("amount")
@click.option("--date", "payment_date", required=True, help="Due date (YYYY-MM-DD or relative like 'in 10 days')")
@click.option(
    "--type",
    "payment_type",
    type=click.Choice([k.value for k in EventKind]),
    default=EventKind.EXPENSE.value,
    show_default=True,
    help="Income or expense",
)
@click.option("--account", help="Account the payment settles against (name or ID)")
@click.option(
    "--recurring",
    type=click.Choice([p.value for p in RecurringPeriod]),
    help="Repeat the payment every week, month or year",
)
@click.pass_context
def add_payment(
    ctx,
    description: str,
    amount: str,
    payment_date: str,
    payment_type: str,
    account: str | None,
    recurring: str | None,
) -> None:
    """Schedule a payment.

    Examples:
        cashtrack payment add "Rent" 8500 --date 2024-04-01 --recurring monthly --account "Salary"
        cashtrack payment add "Bonus" 5000 --date "in 2 weeks" --type income
    """
    db = ctx.obj["db"]
    service = ScheduledPaymentService(db)
    account_id = resolve_account_or_exit(ctx, AccountService(db), account) if account else None
    value = amount_or_exit(ctx, amount)
    when = date_or_exit(ctx, payment_date)

    try:
        payment_id = service.create_payment(
            description=description,
            amount=value,
            payment_date=when,
            payment_type=payment_type,
            account_id=account_id,
            recurring_period=recurring,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Scheduled '{description}' for {when} (ID: {payment_id})")


@payment_group.command("list")
@click.option(
    "--status",
    type=click.Choice(PAYMENT_FILTERS),
    default="upcoming",
    show_default=True,
    help="Which payments to show",
)
@click.pass_context
def list_payments(ctx, status: str) -> None:
    """List scheduled payments by due date."""
    service = ScheduledPaymentService(ctx.obj["db"])

    payments = service.list_payments(status)
    if not payments:
        click.echo("No payments found.")
        return

    click.echo(f"\n{'ID':<6} {'Date':<12} {'Type':<8} {'Amount':>14} {'Repeats':<8} {'Description'}")
    click.echo("-" * 80)
    for p in payments:
        repeats = p.recurring_period.value if p.recurring_period else "-"
        done = " (done)" if p.is_completed else ""
        click.echo(
            f"{p.id:<6} {str(p.payment_date):<12} {p.payment_type.value:<8} "
            f"{format_money(p.amount):>14} {repeats:<8} {p.description}{done}"
        )

    if status == "upcoming":
        income, expense = service.upcoming_totals()
        click.echo("-" * 80)
        click.echo(f"Upcoming income: {format_money(income)} | Upcoming expenses: {format_money(expense)}")


@payment_group.command("complete")
@click.argument("payment_id", type=int)
@click.pass_context
def complete_payment(ctx, payment_id: int) -> None:
    """Mark a payment as done.

    Linked accounts are credited or debited. Recurring payments get their
    next occurrence scheduled.
    """
    service = ScheduledPaymentService(ctx.obj["db"])
    try:
        next_id = service.complete_payment(payment_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Completed payment {payment_id}")
    if next_id is not None:
        upcoming = service.get_payment(next_id)
        click.echo(f"Next occurrence scheduled for {upcoming.payment_date} (ID: {next_id})")


@payment_group.command("delete")
@click.argument("payment_id", type=int)
@click.pass_context
def delete_payment(ctx, payment_id: int) -> None:
    """Delete a scheduled payment."""
    service = ScheduledPaymentService(ctx.obj["db"])
    try:
        service.delete_payment(payment_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted payment {payment_id}")


def register_commands(cli: click.Group) -> None:
    """Register payment commands with main CLI."""
    cli.add_command(payment_group, name="payment")
