"""
Calendar Event Index

Answers "which subscriptions charge on day D" for a calendar view.

Two ways to ask:
- events_on_day(): re-enumerates every subscription's upcoming due dates
  per query. Fine for a personal list of tens of items.
- EventIndex: enumerates once for a given (now, horizon) and answers any
  number of day queries from a dict. Both give identical answers.

IMPORTANT: Enumeration is horizon-bounded, so a day outside
[now, now + horizon) always has no events. That is defined behavior,
not an error.
"""

from collections import defaultdict
from collections.abc import Iterable
from datetime import date, timedelta

from subtracker.models.subscription import Subscription
from subtracker.recurrence.calculator import (
    DEFAULT_HORIZON,
    DayLike,
    as_calendar_day,
    upcoming_due_dates,
)


def events_on_day(
    subscriptions: Iterable[Subscription],
    day: DayLike,
    now: DayLike,
    horizon: timedelta = DEFAULT_HORIZON,
) -> list[Subscription]:
    """
    Get the subscriptions with a due date on `day`.

    Input order is preserved. Comparison is by calendar date only.
    """
    target = as_calendar_day(day)
    return [
        sub for sub in subscriptions
        if target in upcoming_due_dates(sub.start_date, sub.cycle, now, horizon)
    ]


class EventIndex:
    """
    Day -> subscriptions map built once per (now, horizon).

    Rebuild it whenever the collection changes or "today" moves.
    """

    def __init__(
        self,
        subscriptions: Iterable[Subscription],
        now: DayLike,
        horizon: timedelta = DEFAULT_HORIZON,
    ):
        self._now = as_calendar_day(now)
        self._horizon = horizon
        self._by_day: dict[date, list[Subscription]] = defaultdict(list)

        for sub in subscriptions:
            for due in upcoming_due_dates(sub.start_date, sub.cycle, self._now, horizon):
                self._by_day[due].append(sub)

    @property
    def now(self) -> date:
        return self._now

    @property
    def horizon(self) -> timedelta:
        return self._horizon

    def events_on(self, day: DayLike) -> list[Subscription]:
        """Subscriptions due on `day`, in the order they were indexed."""
        return list(self._by_day.get(as_calendar_day(day), ()))

    def days(self) -> list[date]:
        """All days carrying at least one payment, ascending."""
        return sorted(self._by_day)

    def days_in_month(self, year: int, month: int) -> list[date]:
        """Marker days for one calendar month page."""
        return [
            day for day in self.days()
            if day.year == year and day.month == month
        ]

    def __contains__(self, day: object) -> bool:
        if not isinstance(day, date):
            return False
        return as_calendar_day(day) in self._by_day

    def __len__(self) -> int:
        return len(self._by_day)
