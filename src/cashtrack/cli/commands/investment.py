"""Investment account commands."""

import click
from cashtrack.cli.error_handling import amount_or_exit, date_or_exit, handle_domain_error
from cashtrack.domain.entities import TradeType
from cashtrack.domain.errors import DomainError
from cashtrack.domain.instruments import Instrument
from cashtrack.domain.investment import InvestmentService
from cashtrack.pricing import create_price_feed
from cashtrack.utils.formatting import format_money


def _price_feed(ctx: click.Context):
    feed = ctx.obj.get("price_feed")
    if feed is None:
        feed = create_price_feed()
        ctx.obj["price_feed"] = feed
    return feed


@click.group()
def investment_group():
    """Manage investment accounts (gold, silver, foreign currency)."""
    pass


@investment_group.command("instruments")
def list_instruments() -> None:
    """List the instruments that can be held."""
    for instrument in Instrument:
        click.echo(f"{instrument.code:<6} {instrument.display_name} (per {instrument.unit})")


@investment_group.command("create")
@click.argument("name")
@click.argument("instrument", metavar="INSTRUMENT")
@click.option("--bank", help="Bank holding the account")
@click.option("--location", help="Where physical holdings are kept")
@click.option("--physical", is_flag=True, help="Holding is physical (coins, bars, cash)")
@click.pass_context
def create_account(
    ctx, name: str, instrument: str, bank: str | None, location: str | None, physical: bool
) -> None:
    """Create an investment account for INSTRUMENT (e.g. XAU, USD).

    Examples:
        cashtrack investment create "Gold savings" XAU --bank "Ziraat"
        cashtrack investment create "Bracelets" XAU22 --physical --location "Safe"
    """
    service = InvestmentService(ctx.obj["db"])
    try:
        account_id = service.create_account(
            name, instrument, bank_name=bank, location=location, is_physical=physical
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created investment account '{name}' (ID: {account_id})")


@investment_group.command("list")
@click.pass_context
def list_accounts(ctx) -> None:
    """List investment accounts with their positions."""
    service = InvestmentService(ctx.obj["db"])

    accounts = service.list_accounts()
    if not accounts:
        click.echo("No investment accounts found.")
        return

    click.echo(f"\n{'ID':<6} {'Name':<20} {'Instrument':<10} {'Quantity':>14} {'Avg. cost':>14}")
    click.echo("-" * 68)
    for acc in accounts:
        click.echo(
            f"{acc.id:<6} {acc.name:<20} {acc.instrument:<10} {acc.quantity:>14,.4f} "
            f"{format_money(acc.average_cost):>14}"
        )


def _record_trade(ctx, trade_type: TradeType, account_id: int, quantity: str, price: str,
                  trade_date: str | None, notes: str | None) -> None:
    service = InvestmentService(ctx.obj["db"])
    qty = amount_or_exit(ctx, quantity, "quantity")
    unit_price = amount_or_exit(ctx, price, "price")
    when = date_or_exit(ctx, trade_date)
    try:
        trade_id = service.record_trade(
            account_id, trade_type, qty, unit_price, transaction_date=when, notes=notes
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    account = service.get_account(account_id)
    click.echo(
        f"Recorded {trade_type.value} of {qty} at {format_money(unit_price)} (ID: {trade_id}); "
        f"now holding {account.quantity:,.4f}"
    )


@investment_group.command("buy")
@click.argument("account_id", type=int)
@click.argument("quantity")
@click.argument("price", metavar="PRICE_PER_UNIT")
@click.option("--date", "trade_date", help="Trade date (defaults to today)")
@click.option("--notes", help="Notes")
@click.pass_context
def buy(ctx, account_id: int, quantity: str, price: str, trade_date: str | None, notes: str | None) -> None:
    """Record a purchase.

    Examples:
        cashtrack investment buy 1 10 2450.50
    """
    _record_trade(ctx, TradeType.BUY, account_id, quantity, price, trade_date, notes)


@investment_group.command("sell")
@click.argument("account_id", type=int)
@click.argument("quantity")
@click.argument("price", metavar="PRICE_PER_UNIT")
@click.option("--date", "trade_date", help="Trade date (defaults to today)")
@click.option("--notes", help="Notes")
@click.pass_context
def sell(ctx, account_id: int, quantity: str, price: str, trade_date: str | None, notes: str | None) -> None:
    """Record a sale."""
    _record_trade(ctx, TradeType.SELL, account_id, quantity, price, trade_date, notes)


@investment_group.command("trades")
@click.option("--account", "account_id", type=int, help="Only trades of this investment account")
@click.option("--limit", type=int, default=50, show_default=True, help="Number of trades to show")
@click.pass_context
def list_trades(ctx, account_id: int | None, limit: int) -> None:
    """List the most recent trades."""
    service = InvestmentService(ctx.obj["db"])
    trades = service.list_trades(account_id=account_id, limit=limit)
    if not trades:
        click.echo("No trades found.")
        return

    for t in trades:
        click.echo(
            f"{t.id:<6} {str(t.transaction_date):<12} {t.trade_type.value:<5} {t.quantity:>12,.4f} "
            f"x {format_money(t.price_per_unit):>12} = {format_money(t.total_amount):>14}"
        )


@investment_group.command("delete-trade")
@click.argument("trade_id", type=int)
@click.pass_context
def delete_trade(ctx, trade_id: int) -> None:
    """Delete a trade and undo its effect on the position."""
    service = InvestmentService(ctx.obj["db"])
    try:
        service.delete_trade(trade_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted trade {trade_id}")


@investment_group.command("delete")
@click.argument("account_id", type=int)
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_account(ctx, account_id: int, yes: bool) -> None:
    """Delete an investment account and its trades."""
    service = InvestmentService(ctx.obj["db"])
    account = service.get_account(account_id)
    if account is None:
        click.echo(f"Error: Investment account {account_id} not found", err=True)
        ctx.exit(1)

    if not yes and not click.confirm(f"Are you sure you want to delete '{account.name}'?"):
        click.echo("Deletion cancelled.")
        return

    service.delete_account(account_id)
    click.echo(f"Deleted investment account '{account.name}'")


@investment_group.command("prices")
@click.argument("codes", nargs=-1)
@click.pass_context
def show_prices(ctx, codes: tuple[str, ...]) -> None:
    """Show current prices in lira.

    Without CODES, prices of every instrument are shown.

    Examples:
        cashtrack investment prices XAU USD
    """
    codes = codes or tuple(i.code for i in Instrument)
    prices = _price_feed(ctx).fetch_prices(codes)
    for code, price in prices.items():
        instrument = Instrument.lookup(code)
        unit = f"/{instrument.unit}" if instrument is not None else ""
        shown = f"{format_money(price)}{unit}" if price is not None else "unavailable"
        click.echo(f"{code:<6} {shown}")


@investment_group.command("portfolio")
@click.pass_context
def show_portfolio(ctx) -> None:
    """Value every holding at current prices."""
    service = InvestmentService(ctx.obj["db"])
    codes = service.instrument_codes()
    if not codes:
        click.echo("No investment accounts found.")
        return

    prices = _price_feed(ctx).fetch_prices(codes)
    total_cost = 0
    total_value = 0
    for holding in service.valuations(prices):
        account = holding.account
        if holding.valuation is None:
            click.echo(f"{account.name:<20} {account.quantity:>12,.4f} {account.instrument:<6} price unavailable")
            continue
        pl = holding.valuation
        total_cost += pl.total_cost
        total_value += pl.current_value
        sign = "+" if pl.is_profit else "-"
        click.echo(
            f"{account.name:<20} {account.quantity:>12,.4f} {account.instrument:<6} "
            f"value {format_money(pl.current_value):>14} | {sign}{format_money(abs(pl.profit))} "
            f"({pl.profit_percent:+.2f}%)"
        )
    click.echo("-" * 80)
    click.echo(f"Total cost: {format_money(total_cost)} | Total value: {format_money(total_value)}")


def register_commands(cli: click.Group) -> None:
    """Register investment commands with main CLI."""
    cli.add_command(investment_group, name="investment")
