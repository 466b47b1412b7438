"""
Recurrence Calculator

Derives due dates from a subscription's start date and billing cycle.

DESIGN DECISION: Stepping ROLLS OVER, it never clamps.
A date is built from (year, month, day) and any overflow is carried
forward, exactly like constructing a date with an out-of-range day:

    2024-01-31 + 1 month  ->  "2024-02-31"  ->  2024-03-02
    2024-02-29 + 1 year   ->  "2025-02-29"  ->  2025-03-01

Due dates are found by repeated stepping from the start date, so every
due date is reachable from the start by a whole number of steps and the
drift introduced by a rollover carries into later cycles
(Jan 31 -> Mar 2 -> Apr 2 -> ...).

All comparisons are by calendar date. "now" is always an argument and
is read exactly once per call.
"""

from datetime import date, datetime, timedelta
from itertools import takewhile
from typing import Iterator, Union

from subtracker.models.subscription import BillingCycle


DEFAULT_HORIZON = timedelta(days=365)

DayLike = Union[date, datetime]


def as_calendar_day(value: DayLike) -> date:
    """Reduce a datetime to its calendar date; dates pass through."""
    if isinstance(value, datetime):
        return value.date()
    return value


def _rolled_date(year: int, month: int, day: int) -> date:
    # Month overflow carries into years, day overflow into later months.
    year += (month - 1) // 12
    month = (month - 1) % 12 + 1
    return date(year, month, 1) + timedelta(days=day - 1)


def step(day: date, cycle: BillingCycle) -> date:
    """
    Advance a date by exactly one billing cycle, with rollover.

    Monthly keeps the day-of-month number and adds one month.
    Annual keeps month and day-of-month and adds one year.
    """
    if cycle == BillingCycle.MONTHLY:
        return _rolled_date(day.year, day.month + 1, day.day)
    if cycle == BillingCycle.ANNUAL:
        return _rolled_date(day.year + 1, day.month, day.day)
    raise ValueError(f"Unsupported billing cycle: {cycle!r}")


def iter_due_dates(
    start_date: DayLike,
    cycle: BillingCycle,
    now: DayLike,
) -> Iterator[date]:
    """
    Yield due dates forever, starting at the next due date.

    Dates before `now` are stepped over without being yielded.
    """
    today = as_calendar_day(now)
    current = as_calendar_day(start_date)
    while current < today:
        current = step(current, cycle)
    while True:
        yield current
        current = step(current, cycle)


def next_due_date(
    start_date: DayLike,
    cycle: BillingCycle,
    now: DayLike,
) -> date:
    """
    Get the next due date on or after `now`.

    A start date that is today or later is returned unchanged;
    being due today counts as the next due date.
    """
    return next(iter_due_dates(start_date, cycle, now))


def upcoming_due_dates(
    start_date: DayLike,
    cycle: BillingCycle,
    now: DayLike,
    horizon: timedelta = DEFAULT_HORIZON,
) -> list[date]:
    """
    Get every due date in [next due date, now + horizon).

    The result is strictly increasing and recomputed on each call.
    A zero or negative horizon yields an empty list.
    """
    limit = as_calendar_day(now) + horizon
    return list(takewhile(
        lambda due: due < limit,
        iter_due_dates(start_date, cycle, now),
    ))
