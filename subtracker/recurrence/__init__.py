"""Recurrence calculation package."""

from subtracker.recurrence.calculator import (
    DEFAULT_HORIZON,
    as_calendar_day,
    iter_due_dates,
    next_due_date,
    step,
    upcoming_due_dates,
)

__all__ = [
    "DEFAULT_HORIZON",
    "as_calendar_day",
    "iter_due_dates",
    "next_due_date",
    "step",
    "upcoming_due_dates",
]
