"""Cash-flow projection command."""

from datetime import date
from typing import Sequence

import click
from cashtrack.cli.date_filters import resolve_cli_date_range
from cashtrack.cli.error_handling import handle_domain_error
from cashtrack.domain.cashflow import ProjectionService
from cashtrack.domain.entities import EventKind, ProjectionDay, ProjectionEvent
from cashtrack.domain.errors import DomainError
from cashtrack.domain.projection import DEFAULT_PAY_DAY, resolve_window, summarize_projection
from cashtrack.utils.formatting import format_money


def _signed(amount) -> str:
    text = format_money(abs(amount))
    if amount > 0:
        return f"+{text}"
    if amount < 0:
        return f"-{text}"
    return text


def _event_amount(event: ProjectionEvent):
    return abs(event.amount) if event.kind == EventKind.INCOME else -abs(event.amount)


def render_projection(days: Sequence[ProjectionDay], show_quiet_days: bool) -> None:
    """Print the projection as a table followed by its summary."""
    click.echo(f"\n{'Date':<8} {'Change':>14} {'Balance':>16}  Events")
    click.echo("-" * 90)
    for day in days:
        if not show_quiet_days and not day.events:
            continue
        events = ", ".join(f"{e.description} ({_signed(_event_amount(e))})" for e in day.events)
        marker = " !" if day.balance < 0 else ""
        click.echo(
            f"{day.formatted_date:<8} {_signed(day.change):>14} {format_money(day.balance):>16}  {events}{marker}"
        )

    summary = summarize_projection(days)
    click.echo("-" * 90)
    click.echo(
        f"Lowest: {format_money(summary.min_balance)} | Highest: {format_money(summary.max_balance)} | "
        f"End of period: {format_money(summary.final_balance)}"
    )
    if summary.negative_days:
        first = summary.negative_days[0]
        click.echo(
            f"Warning: balance goes negative on {len(summary.negative_days)} day(s), "
            f"first on {first.date_str} ({format_money(first.balance)})"
        )


@click.command("cashflow")
@click.option("--start-date", help="First projected day (YYYY-MM-DD or relative like 'yesterday')")
@click.option("--end-date", help="Last projected day (YYYY-MM-DD or relative like 'in 60 days')")
@click.option("--this-month", is_flag=True, help="Project the current month")
@click.option("--next-month", is_flag=True, help="Project the next month")
@click.option("--salary-period", is_flag=True, help="Project the two pay periods around today")
@click.option("--pay-day", type=click.IntRange(1, 31), default=DEFAULT_PAY_DAY, show_default=True, help="Day of month salary arrives")
@click.option("--all-days", is_flag=True, help="Show days without events")
@click.pass_context
def cashflow(
    ctx,
    start_date: str | None,
    end_date: str | None,
    this_month: bool,
    next_month: bool,
    salary_period: bool,
    pay_day: int,
    all_days: bool,
) -> None:
    """Project the balance day by day.

    Without options, the next 30 days from today are projected from
    pending scheduled payments, future transactions and card payments.
    Windows that start in the past are rebuilt from recorded transactions.
    Windows that start after today (such as --next-month) open with the
    current balance; payments due before the window starts are not
    deducted.

    Examples:
        cashtrack cashflow
        cashtrack cashflow --next-month --all-days
        cashtrack cashflow --start-date 2024-03-01 --end-date 2024-04-30
        cashtrack cashflow --salary-period --pay-day 25
    """
    service = ProjectionService(ctx.obj["db"])
    today = date.today()

    if salary_period and (start_date or end_date or this_month or next_month):
        click.echo("Error: --salary-period cannot be combined with other date options.", err=True)
        ctx.exit(1)

    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags={"this-month": this_month, "next-month": next_month},
        today=today,
    )

    try:
        if salary_period:
            days = service.build_salary_period_projection(today, pay_day=pay_day)
        elif start is None and end is None:
            days = service.build_dashboard_projection(today)
        else:
            start, end = resolve_window(today, start, end)
            days = service.build_period_projection(start, end, today=today)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not days:
        click.echo("No days in the selected range.")
        return

    click.echo(
        f"Cash flow {days[0].date_str} to {days[-1].date_str} "
        f"(current balance {format_money(service.current_balance())})"
    )
    render_projection(days, show_quiet_days=all_days)


def register_commands(cli: click.Group) -> None:
    """Register the cashflow command with main CLI."""
    cli.add_command(cashflow)
