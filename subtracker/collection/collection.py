"""
Subscription Collection

The shared, ordered set of subscriptions the other components read.

DESIGN DECISION: Storage identity and display order are kept apart.
Records live in a dict keyed by id (which remembers insertion order);
the visible order is a separate list of ids recomputed from the
next due date at sort time. The sort key is never stored, so sorting
again after "today" moves reorders items whose due dates have passed.

Not safe for concurrent writers: add() is append-then-sort.
"""

from collections.abc import Iterable, Iterator
from typing import Optional
from uuid import UUID

from subtracker.audit import AuditLogger
from subtracker.models.subscription import Subscription
from subtracker.recurrence.calculator import DayLike, next_due_date


class DuplicateSubscriptionError(ValueError):
    """A subscription with the same id is already in the collection."""
    pass


class SubscriptionCollection:
    """
    Subscriptions sorted ascending by computed next due date.

    Mutated only by add() and remove_by_id(). Ties on the next due date
    keep insertion order.
    """

    def __init__(
        self,
        subscriptions: Iterable[Subscription] = (),
        *,
        now: Optional[DayLike] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        """
        Initialize the collection, optionally with seed records.

        Args:
            subscriptions: Seed records, kept in the given order until sorted.
            now: If given, sort the seed records against this date.
            audit_logger: Receives add/remove events. Seed records are not logged.
        """
        self._records: dict[str, Subscription] = {}
        self._order: list[str] = []
        self._audit_logger = audit_logger

        for sub in subscriptions:
            self._insert(sub)

        if now is not None:
            self.sort(now)

    def _insert(self, subscription: Subscription) -> None:
        if subscription.id in self._records:
            raise DuplicateSubscriptionError(
                f"Subscription id already present: {subscription.id}"
            )
        self._records[subscription.id] = subscription
        self._order.append(subscription.id)

    def add(
        self,
        subscription: Subscription,
        now: DayLike,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """
        Append a subscription, then re-sort against `now`.

        Args:
            subscription: The record to add
            now: Reference date for the new order
            correlation_id: Ties the audit event to the user action

        Raises:
            DuplicateSubscriptionError: If the id is already present
        """
        self._insert(subscription)
        self.sort(now)

        if self._audit_logger:
            self._audit_logger.log_subscription_added(
                subscription_id=subscription.id,
                name=subscription.name,
                cost=str(subscription.cost),
                currency=subscription.currency,
                cycle=subscription.cycle.value,
                correlation_id=correlation_id,
            )

    def remove_by_id(
        self,
        subscription_id: str,
        correlation_id: Optional[UUID] = None,
    ) -> bool:
        """
        Remove the subscription with this id.

        Returns False, without raising, when no such id exists.
        """
        removed = self._records.pop(subscription_id, None)
        if removed is None:
            if self._audit_logger:
                self._audit_logger.log_remove_skipped(subscription_id, correlation_id)
            return False

        # Removal keeps the remaining ids in sorted order
        self._order.remove(subscription_id)

        if self._audit_logger:
            self._audit_logger.log_subscription_removed(
                subscription_id=removed.id,
                name=removed.name,
                correlation_id=correlation_id,
            )
        return True

    def sort(self, now: DayLike) -> None:
        """
        Recompute the order from each record's next due date at `now`.

        Sorting starts from insertion order, and sorted() is stable, so
        ties always fall back to insertion order.
        """
        self._order = sorted(
            self._records,
            key=lambda sub_id: next_due_date(
                self._records[sub_id].start_date,
                self._records[sub_id].cycle,
                now,
            ),
        )

    def get(self, subscription_id: str) -> Optional[Subscription]:
        return self._records.get(subscription_id)

    @property
    def items(self) -> list[Subscription]:
        """Snapshot of the records in their current order."""
        return [self._records[sub_id] for sub_id in self._order]

    @property
    def ids(self) -> list[str]:
        return list(self._order)

    def __iter__(self) -> Iterator[Subscription]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, item: object) -> bool:
        if isinstance(item, Subscription):
            return self._records.get(item.id) == item
        return isinstance(item, str) and item in self._records

    def __repr__(self) -> str:
        return f"SubscriptionCollection({len(self)} subscriptions)"
