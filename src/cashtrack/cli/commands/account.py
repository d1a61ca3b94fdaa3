"""Bank account management commands."""

import click
from cashtrack.cli.account_resolution import resolve_account_or_exit
from cashtrack.cli.error_handling import amount_or_exit, date_or_exit, handle_domain_error
from cashtrack.domain.account import AccountService
from cashtrack.domain.errors import DomainError
from cashtrack.utils.formatting import format_money


@click.group()
def account_group():
    """Manage bank accounts."""
    pass


@account_group.command("create")
@click.argument("name", metavar="ACCOUNT_NAME")
@click.option("--bank", help="Bank name (defaults to account name if not provided)")
@click.option("--iban", help="IBAN")
@click.option("--balance", default="0", help="Opening balance")
@click.option("--currency", default="TRY", show_default=True, help="Currency code")
@click.option("--favorite", is_flag=True, help="List this account first")
@click.pass_context
def create_account(
    ctx, name: str, bank: str | None, iban: str | None, balance: str, currency: str, favorite: bool
):
    """Create a new bank account.

    If --bank is not provided, the bank name will be set to the account name.

    Examples:
        cashtrack account create "Salary" --bank "Garanti" --balance 12500
        cashtrack account create "Savings" --iban TR000000000000000000000000 --favorite
    """
    service = AccountService(ctx.obj["db"])
    opening = amount_or_exit(ctx, balance, "balance")

    # If bank not provided, use account name as bank name
    bank_name = bank if bank is not None else name

    try:
        account_id = service.create_account(
            name=name,
            bank_name=bank_name,
            iban=iban,
            balance=opening,
            currency=currency,
            is_favorite=favorite,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created account '{name}' (ID: {account_id})")
    if bank is None:
        click.echo(f"Bank name set to '{bank_name}'")


@account_group.command("list")
@click.pass_context
def list_accounts(ctx):
    """List all accounts with their balances."""
    service = AccountService(ctx.obj["db"])

    accounts = service.list_accounts()
    if not accounts:
        click.echo("No accounts found.")
        return

    click.echo("\nAccounts:")
    click.echo("-" * 72)
    for acc in accounts:
        star = "*" if acc.is_favorite else " "
        click.echo(
            f"{star} ID: {acc.id:3d} | {acc.name:20s} | Bank: {(acc.bank_name or ''):15s} | "
            f"{format_money(acc.balance, acc.currency):>14s}"
        )
    click.echo("-" * 72)
    click.echo(f"Total balance: {format_money(service.total_balance())}")


@account_group.command("rename")
@click.argument("account", metavar="ACCOUNT")
@click.argument("new_name", metavar="NEW_NAME")
@click.option("--bank", help="New bank name (optional)")
@click.pass_context
def rename_account(ctx, account: str, new_name: str, bank: str | None) -> None:
    """Rename an account.

    ACCOUNT can be an account name or ID.

    Examples:
        cashtrack account rename "Salary" "Main"
        cashtrack account rename 1 "Main" --bank "Akbank"
    """
    service = AccountService(ctx.obj["db"])
    account_id = resolve_account_or_exit(ctx, service, account)

    try:
        service.update_account(account_id, name=new_name, bank_name=bank)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Renamed account to '{new_name}'")
    if bank is not None:
        click.echo(f"Bank name updated to '{bank}'")


@account_group.command("set-balance")
@click.argument("account", metavar="ACCOUNT")
@click.argument("balance", metavar="BALANCE")
@click.pass_context
def set_balance(ctx, account: str, balance: str) -> None:
    """Overwrite the balance of an account.

    Examples:
        cashtrack account set-balance "Salary" 15250.40
    """
    service = AccountService(ctx.obj["db"])
    account_id = resolve_account_or_exit(ctx, service, account)
    amount = amount_or_exit(ctx, balance, "balance")
    service.set_balance(account_id, amount)
    click.echo(f"Balance set to {format_money(amount)}")


@account_group.command("favorite")
@click.argument("account", metavar="ACCOUNT")
@click.pass_context
def toggle_favorite(ctx, account: str) -> None:
    """Mark or unmark an account as favorite."""
    service = AccountService(ctx.obj["db"])
    account_id = resolve_account_or_exit(ctx, service, account)
    if service.toggle_favorite(account_id):
        click.echo("Account marked as favorite")
    else:
        click.echo("Account removed from favorites")


@account_group.command("delete")
@click.argument("account", metavar="ACCOUNT")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_account(ctx, account: str, yes: bool) -> None:
    """Delete an account.

    ACCOUNT can be an account name or ID.

    The account can only be deleted if no transactions, transfers, scheduled
    payments or debtor payments refer to it.

    Examples:
        cashtrack account delete "Old Account"
        cashtrack account delete 3 --yes
    """
    service = AccountService(ctx.obj["db"])
    account_id = resolve_account_or_exit(ctx, service, account)
    account_obj = service.get_account(account_id)

    # Confirm deletion
    if not yes and not click.confirm(
        f"Are you sure you want to delete account '{account_obj.name}' (ID: {account_id})?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_account(account_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted account '{account_obj.name}'")


@account_group.command("transfer")
@click.argument("source", metavar="FROM_ACCOUNT")
@click.argument("target", metavar="TO_ACCOUNT")
@click.argument("amount", metavar="AMOUNT")
@click.option("--description", help="Transfer description")
@click.option("--date", "transfer_date", help="Transfer date (defaults to today)")
@click.pass_context
def transfer(
    ctx, source: str, target: str, amount: str, description: str | None, transfer_date: str | None
) -> None:
    """Move money from one account to another.

    Examples:
        cashtrack account transfer "Salary" "Savings" 2500
    """
    service = AccountService(ctx.obj["db"])
    source_id = resolve_account_or_exit(ctx, service, source)
    target_id = resolve_account_or_exit(ctx, service, target)
    value = amount_or_exit(ctx, amount)
    when = date_or_exit(ctx, transfer_date)

    try:
        transfer_id = service.transfer(
            source_id, target_id, value, description=description, transfer_date=when
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Transferred {format_money(value)} (transfer ID: {transfer_id})")


@account_group.command("transfers")
@click.option("--account", help="Only transfers touching this account (name or ID)")
@click.pass_context
def list_transfers(ctx, account: str | None) -> None:
    """List transfers between accounts."""
    service = AccountService(ctx.obj["db"])
    account_id = resolve_account_or_exit(ctx, service, account) if account else None

    transfers = service.list_transfers(account_id)
    if not transfers:
        click.echo("No transfers found.")
        return

    names = {acc.id: acc.name for acc in service.list_accounts()}
    click.echo(f"\n{'ID':<6} {'Date':<12} {'From':<20} {'To':<20} {'Amount':>14}")
    click.echo("-" * 76)
    for t in transfers:
        click.echo(
            f"{t.id:<6} {str(t.transfer_date):<12} {names.get(t.from_account_id, '?'):<20} "
            f"{names.get(t.to_account_id, '?'):<20} {format_money(t.amount):>14}"
        )


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
