"""Calendar event index package."""

from subtracker.schedule.index import EventIndex, events_on_day

__all__ = ["EventIndex", "events_on_day"]
