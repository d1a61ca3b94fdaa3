"""Income and expense transaction commands."""

import click
from cashtrack.cli.account_resolution import resolve_account_or_exit
from cashtrack.cli.date_filters import resolve_cli_date_range
from cashtrack.cli.error_handling import amount_or_exit, date_or_exit, handle_domain_error
from cashtrack.domain.account import AccountService
from cashtrack.domain.entities import EventKind
from cashtrack.domain.errors import DomainError
from cashtrack.domain.transaction import TransactionService
from cashtrack.utils.formatting import format_money


@click.group()
def transaction_group():
    """Manage income and expense transactions."""
    pass


@transaction_group.command("add")
@click.argument("kind", type=click.Choice([k.value for k in EventKind]))
@click.argument("amount")
@click.option("--date", "txn_date", default="today", show_default=True, help="Transaction date")
@click.option("--description", default="", help="Transaction description")
@click.option("--account", help="Account name or ID")
@click.pass_context
def add_transaction(
    ctx, kind: str, amount: str, txn_date: str, description: str, account: str | None
) -> None:
    """Record an income or expense.

    Future-dated transactions show up in the cash-flow projection on their
    day. Account balances are not changed.

    Examples:
        cashtrack transaction add expense 450 --description "Groceries"
        cashtrack transaction add income 3000 --date 2024-04-01 --account "Salary"
    """
    db = ctx.obj["db"]
    service = TransactionService(db)
    account_id = resolve_account_or_exit(ctx, AccountService(db), account) if account else None
    value = amount_or_exit(ctx, amount)
    when = date_or_exit(ctx, txn_date)

    try:
        transaction_id = service.create_transaction(
            kind=kind,
            amount=value,
            transaction_date=when,
            description=description,
            account_id=account_id,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Recorded {kind} of {format_money(value)} on {when} (ID: {transaction_id})")


@transaction_group.command("list")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'last month', 'this year')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today', 'in 30 days')")
@click.option("--this-week", is_flag=True, help="Transactions of the current week")
@click.option("--this-month", is_flag=True, help="Transactions of the current month")
@click.option("--last-month", is_flag=True, help="Transactions of the previous month")
@click.option("--next-month", is_flag=True, help="Transactions of the next month")
@click.option("--this-year", is_flag=True, help="Transactions of the current year")
@click.option("--account", help="Account name or ID")
@click.pass_context
def list_transactions(
    ctx,
    start_date: str | None,
    end_date: str | None,
    this_week: bool,
    this_month: bool,
    last_month: bool,
    next_month: bool,
    this_year: bool,
    account: str | None,
):
    """View transactions with optional filters.

    Account can be specified by name or ID.
    """
    db = ctx.obj["db"]
    service = TransactionService(db)
    account_service = AccountService(db)

    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags={
            "this-week": this_week,
            "this-month": this_month,
            "last-month": last_month,
            "next-month": next_month,
            "this-year": this_year,
        },
    )
    account_id = resolve_account_or_exit(ctx, account_service, account) if account else None

    transactions = service.list_transactions(start_date=start, end_date=end, account_id=account_id)
    if not transactions:
        click.echo("No transactions found.")
        return

    # Get account names for display
    accounts = {acc.id: acc.name for acc in account_service.list_accounts()}

    click.echo(f"\nFound {len(transactions)} transaction(s):")
    click.echo("-" * 96)
    click.echo(
        f"{'ID':<6} {'Date':<12} {'Type':<8} {'Amount':>14} {'Account':<20} {'Description':<30}"
    )
    click.echo("-" * 96)
    for txn in transactions:
        account_name = accounts.get(txn.account_id, "") if txn.account_id else ""
        click.echo(
            f"{txn.id:<6} {str(txn.transaction_date):<12} {txn.kind.value:<8} "
            f"{format_money(txn.amount):>14} {account_name:<20} {(txn.description or '')[:30]:<30}"
        )

    total_expenses = sum(t.amount for t in transactions if t.kind == EventKind.EXPENSE)
    total_income = sum(t.amount for t in transactions if t.kind == EventKind.INCOME)
    click.echo("-" * 96)
    click.echo(
        f"{'TOTAL':<6} Expenses: {format_money(total_expenses)} | "
        f"Income: {format_money(total_income)} | Count: {len(transactions)}"
    )


@transaction_group.command("delete")
@click.argument("transaction_id", type=int)
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_transaction(ctx, transaction_id: int, yes: bool) -> None:
    """Delete a transaction.

    Examples:
        cashtrack transaction delete 1
    """
    service = TransactionService(ctx.obj["db"])

    if service.get_transaction(transaction_id) is None:
        click.echo(f"Error: Transaction {transaction_id} not found", err=True)
        ctx.exit(1)

    # Confirm deletion
    if not yes and not click.confirm(f"Are you sure you want to delete transaction {transaction_id}?"):
        click.echo("Deletion cancelled.")
        return

    service.delete_transaction(transaction_id)
    click.echo(f"Deleted transaction {transaction_id}")


def register_commands(cli: click.Group) -> None:
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")
