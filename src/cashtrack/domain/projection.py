"""Day-by-day cash-flow projection.

The projector is a pure function of its arguments: it reads no storage and
keeps no state, so identical inputs always give identical output.
"""

from collections import defaultdict
from datetime import date
from decimal import Decimal
from typing import Any, Iterable, Mapping, Optional, Sequence, Union

from cashtrack.domain.calculations import to_decimal
from cashtrack.domain.dates import add_days, add_months, as_day, clamped_day, days_between
from cashtrack.domain.entities import (
    CardObligation,
    EventKind,
    ProjectionDay,
    ProjectionEvent,
    ProjectionSummary,
    ScheduledEvent,
)
from cashtrack.domain.errors import ValidationError

DEFAULT_WINDOW_DAYS = 30
DEFAULT_PAY_DAY = 15

EventLike = Union[ScheduledEvent, Mapping[str, Any]]
ObligationLike = Union[CardObligation, Mapping[str, Any]]


def coerce_kind(value) -> EventKind:
    try:
        return EventKind(value)
    except ValueError as e:
        raise ValidationError(
            f"Event kind must be 'income' or 'expense', got {value!r}"
        ) from e


def coerce_event(event: EventLike) -> ScheduledEvent:
    """Turn a ScheduledEvent or a plain mapping into a validated ScheduledEvent.

    Mappings use the keys ``date``, ``description``, ``amount`` and ``kind``
    (``type`` is accepted as an alias of ``kind``).
    """
    if isinstance(event, ScheduledEvent):
        return ScheduledEvent(
            date=as_day(event.date, "event date"),
            description=event.description,
            amount=to_decimal(event.amount),
            kind=coerce_kind(event.kind),
        )
    try:
        raw_date = event["date"]
        amount = event["amount"]
    except KeyError as e:
        raise ValidationError(f"Event is missing field {e.args[0]!r}: {event!r}") from e
    return ScheduledEvent(
        date=as_day(raw_date, "event date"),
        description=event.get("description") or "",
        amount=to_decimal(amount),
        kind=coerce_kind(event.get("kind", event.get("type"))),
    )


def coerce_obligation(obligation: ObligationLike) -> CardObligation:
    if isinstance(obligation, CardObligation):
        return CardObligation(
            card_name=obligation.card_name,
            due_date=as_day(obligation.due_date, "due date"),
            amount=to_decimal(obligation.amount),
        )
    try:
        return CardObligation(
            card_name=obligation["card_name"],
            due_date=as_day(obligation["due_date"], "due date"),
            amount=to_decimal(obligation["amount"]),
        )
    except KeyError as e:
        raise ValidationError(
            f"Card obligation is missing field {e.args[0]!r}: {obligation!r}"
        ) from e


def resolve_window(
    today: date,
    start_date=None,
    end_date=None,
) -> tuple[date, date]:
    """Fill in missing window bounds from the 30-day default."""
    start = as_day(start_date, "start date") if start_date is not None else today
    if end_date is None:
        return start, add_days(start, DEFAULT_WINDOW_DAYS - 1)
    return start, as_day(end_date, "end date")


def balance_at(
    current_balance: Decimal,
    past_transactions: Iterable[ScheduledEvent],
    start: date,
    today: date,
) -> Decimal:
    """Rewind ``current_balance`` to the start of ``start`` by undoing
    every transaction dated in ``[start, today)``."""
    balance = current_balance
    for tx in past_transactions:
        if start <= tx.date < today:
            balance -= tx.signed_amount
    return balance


def _by_day(items, key) -> dict[date, list]:
    grouped = defaultdict(list)
    for item in items:
        grouped[key(item)].append(item)
    return grouped


def generate_projection(
    current_balance,
    scheduled_events: Sequence[EventLike] = (),
    card_obligations: Sequence[ObligationLike] = (),
    start_date=None,
    end_date=None,
    past_transactions: Optional[Sequence[EventLike]] = None,
    today=None,
) -> list[ProjectionDay]:
    """Project the balance for every day of ``[start_date, end_date]``.

    Args:
        current_balance: Balance as of the start of ``today``'s activity
        scheduled_events: Dated events (pending payments, recorded future
            transactions) applied on their day
        card_obligations: Card payments, applied as expenses on their due date
        start_date: First projected day (defaults to today)
        end_date: Last projected day, inclusive (defaults to start + 29 days)
        past_transactions: Events before today; used to rewind the balance to
            ``start_date`` and replayed on their day
        today: Reference day (defaults to the system date)

    Returns:
        One ProjectionDay per calendar day, in chronological order. An empty
        list when ``end_date`` is before ``start_date``.

    Raises:
        ValidationError: If any event has a malformed date, kind or amount
    """
    today = as_day(today, "today") if today is not None else date.today()
    start, end = resolve_window(today, start_date, end_date)

    events = [coerce_event(e) for e in scheduled_events]
    past = [coerce_event(e) for e in past_transactions or ()]
    obligations = [coerce_obligation(o) for o in card_obligations]

    running_balance = to_decimal(current_balance)
    if start < today:
        running_balance = balance_at(running_balance, past, start, today)

    events_by_day = _by_day(events, lambda e: e.date)
    past_by_day = _by_day(past, lambda e: e.date)
    obligations_by_day = _by_day(obligations, lambda o: o.due_date)

    projection = []
    for offset in range(days_between(start, end) + 1):
        day = add_days(start, offset)
        day_events: list[ProjectionEvent] = []
        change = Decimal("0")

        for event in events_by_day.get(day, ()):
            day_events.append(ProjectionEvent(event.description, event.amount, event.kind))
            change += event.signed_amount

        if day < today:
            scheduled = list(day_events)
            for tx in past_by_day.get(day, ()):
                # Same event may come in through both lists
                if any(e.description == tx.description and e.amount == tx.amount for e in scheduled):
                    continue
                day_events.append(ProjectionEvent(tx.description, tx.amount, tx.kind))
                change += tx.signed_amount

        for obligation in obligations_by_day.get(day, ()):
            day_events.append(
                ProjectionEvent(
                    f"{obligation.card_name} card payment",
                    -obligation.amount,
                    EventKind.EXPENSE,
                )
            )
            change -= obligation.amount

        running_balance += change
        projection.append(
            ProjectionDay(
                date=day,
                events=tuple(day_events),
                change=change,
                balance=running_balance,
            )
        )

    return projection


def summarize_projection(days: Sequence[ProjectionDay]) -> Optional[ProjectionSummary]:
    """Return balance extremes and negative days, or None for an empty projection."""
    if not days:
        return None
    balances = [day.balance for day in days]
    return ProjectionSummary(
        min_balance=min(balances),
        max_balance=max(balances),
        final_balance=days[-1].balance,
        negative_days=tuple(day for day in days if day.balance < 0),
    )


def salary_period_window(today, pay_day: int = DEFAULT_PAY_DAY) -> tuple[date, date]:
    """Window covering two pay periods around ``today``.

    From the current period's pay day up to the day before the pay day two
    months later. Before this month's pay day the current period started on
    last month's pay day.
    """
    today = as_day(today, "today")
    first_month = today.replace(day=1)
    if today.day < pay_day:
        first_month = add_months(first_month, -1)
    last_month = add_months(first_month, 2)
    start = clamped_day(first_month.year, first_month.month, pay_day)
    end = add_days(clamped_day(last_month.year, last_month.month, pay_day), -1)
    return start, end
