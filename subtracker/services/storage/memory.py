"""
In-memory audit storage.

Holds the audit trail for the lifetime of the process. Used by the
default tracker wiring and by tests.
"""

from typing import Optional
from uuid import UUID

from subtracker.models.audit import AuditEvent
from subtracker.services.storage.interface import AuditStorageInterface, StorageError


class InMemoryAuditStorage(AuditStorageInterface):
    """Append-only list of audit events, optionally capped."""

    def __init__(self, max_events: Optional[int] = None):
        if max_events is not None and max_events < 1:
            raise StorageError("max_events must be >= 1 when set")
        self._events: list[AuditEvent] = []
        self._max_events = max_events

    def append_event(self, event: AuditEvent) -> bool:
        self._events.append(event)
        if self._max_events is not None and len(self._events) > self._max_events:
            # Oldest entries fall off first
            del self._events[: len(self._events) - self._max_events]
        return True

    def get_events_by_correlation_id(
        self,
        correlation_id: UUID,
    ) -> list[AuditEvent]:
        return [e for e in self._events if e.correlation_id == correlation_id]

    def get_events_by_entity(
        self,
        entity_type: str,
        entity_id: str,
    ) -> list[AuditEvent]:
        return [
            e for e in self._events
            if e.entity_type == entity_type and e.entity_id == entity_id
        ]

    def get_recent_events(
        self,
        limit: int = 100,
    ) -> list[AuditEvent]:
        return list(reversed(self._events[-limit:])) if limit > 0 else []

    def __len__(self) -> int:
        return len(self._events)
