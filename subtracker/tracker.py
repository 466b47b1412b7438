"""
Subscription Tracker Facade

This module ties together all the components and defines what a
presentation layer calls:
1. Add / remove (form -> validate -> build -> add to collection)
2. Read (sorted list, next due dates, totals, calendar events)

DESIGN DECISION: The facade owns the clock. It samples "today" once per
public call and passes that same date to every engine function in the
call, so a batch never straddles midnight. The engine modules never
read the clock themselves.
"""

from collections.abc import Callable, Iterable
from datetime import date, timedelta
from decimal import Decimal
from typing import Optional

from subtracker.aggregation import annual_equivalent, monthly_equivalent, summarize_costs
from subtracker.audit import AuditLogger, configure_logging, create_correlation_id
from subtracker.collection import SubscriptionCollection
from subtracker.config import TrackerSettings, get_settings
from subtracker.formatting import format_due_date
from subtracker.models.subscription import (
    BillingCycle,
    CostSummary,
    Subscription,
    SubscriptionForm,
    ValidationResult,
)
from subtracker.recurrence import next_due_date, upcoming_due_dates
from subtracker.recurrence.calculator import DayLike
from subtracker.schedule import EventIndex, events_on_day
from subtracker.services.storage import InMemoryAuditStorage
from subtracker.validation import SubscriptionValidator


def demo_subscriptions() -> list[Subscription]:
    """The two sample records the app starts with in demo mode."""
    return [
        Subscription(
            id="1",
            name="Netflix",
            cost=Decimal("330"),
            currency="TWD",
            cycle=BillingCycle.MONTHLY,
            start_date=date(2024, 10, 15),
        ),
        Subscription(
            id="2",
            name="Google One (2TB)",
            cost=Decimal("3300"),
            currency="TWD",
            cycle=BillingCycle.ANNUAL,
            start_date=date(2024, 7, 1),
        ),
    ]


class SubscriptionTracker:
    """
    Read and write access to one user's subscriptions.

    Every read re-derives from the records: nothing computed from
    "today" is cached between calls.
    """

    def __init__(
        self,
        collection: Optional[SubscriptionCollection] = None,
        validator: Optional[SubscriptionValidator] = None,
        audit_logger: Optional[AuditLogger] = None,
        settings: Optional[TrackerSettings] = None,
        clock: Callable[[], date] = date.today,
    ):
        self._settings = settings or get_settings().tracker
        self._audit_logger = audit_logger
        # An empty collection is falsy, so test for None explicitly
        if collection is None:
            collection = SubscriptionCollection(audit_logger=audit_logger)
        self._collection = collection
        self._validator = validator or SubscriptionValidator(self._settings)
        self._clock = clock

    # ── Clock and configuration ──────────────────────────────

    def today(self) -> date:
        """Sample the clock once."""
        return self._clock()

    @property
    def horizon(self) -> timedelta:
        return timedelta(days=self._settings.horizon_days)

    @property
    def settings(self) -> TrackerSettings:
        return self._settings

    @property
    def audit_logger(self) -> Optional[AuditLogger]:
        return self._audit_logger

    # ── Writes ───────────────────────────────────────────────

    def add(self, subscription: Subscription) -> Subscription:
        """
        Add an already-built subscription.

        Raises:
            DuplicateSubscriptionError: If the id is already tracked
        """
        self._collection.add(subscription, self.today())
        return subscription

    def add_from_form(
        self,
        form: SubscriptionForm,
    ) -> tuple[Optional[Subscription], ValidationResult]:
        """
        Validate raw form input and add it when valid.

        Returns:
            (subscription or None, validation_result)
        """
        correlation_id = create_correlation_id()
        today = self.today()

        result = self._validator.validate(form, today)
        if not result.is_valid:
            if self._audit_logger:
                stage = "schema" if not result.schema_valid else "semantic"
                self._audit_logger.log_validation_failed(
                    stage=stage,
                    issues=[issue.model_dump() for issue in result.issues],
                    correlation_id=correlation_id,
                )
            return None, result

        if self._audit_logger:
            self._audit_logger.log_validation_passed(
                warnings=result.warnings,
                correlation_id=correlation_id,
            )

        subscription = self._validator.build(form, today)
        self._collection.add(subscription, today, correlation_id=correlation_id)
        return subscription, result

    def remove(self, subscription_id: str) -> bool:
        """Remove by id. Unknown ids are ignored and return False."""
        return self._collection.remove_by_id(
            subscription_id,
            correlation_id=create_correlation_id(),
        )

    # ── Reads ────────────────────────────────────────────────

    def subscriptions(self) -> list[Subscription]:
        """All subscriptions, re-sorted by next due date as of today."""
        self._collection.sort(self.today())
        return self._collection.items

    def get(self, subscription_id: str) -> Optional[Subscription]:
        return self._collection.get(subscription_id)

    def next_due_date(self, subscription: Subscription) -> date:
        return next_due_date(subscription.start_date, subscription.cycle, self.today())

    def formatted_next_due_date(self, subscription: Subscription) -> str:
        """Next due date in the configured display format (YYYY/MM/DD)."""
        return format_due_date(
            self.next_due_date(subscription),
            self._settings.date_display_format,
        )

    def upcoming_due_dates(self, subscription: Subscription) -> list[date]:
        return upcoming_due_dates(
            subscription.start_date,
            subscription.cycle,
            self.today(),
            self.horizon,
        )

    def monthly_total(self) -> Decimal:
        return monthly_equivalent(self._collection, self.today())

    def annual_total(self) -> Decimal:
        return annual_equivalent(self._collection, self.today())

    def cost_summary(self) -> CostSummary:
        return summarize_costs(self._collection, self.today())

    def events_on_day(self, day: DayLike) -> list[Subscription]:
        """Subscriptions charging on `day`, in list order."""
        today = self.today()
        self._collection.sort(today)
        return events_on_day(self._collection, day, today, self.horizon)

    def event_index(self) -> EventIndex:
        """Day -> subscriptions index for a whole calendar view."""
        today = self.today()
        self._collection.sort(today)
        return EventIndex(self._collection, today, self.horizon)

    def __len__(self) -> int:
        return len(self._collection)


def create_tracker(
    subscriptions: Iterable[Subscription] = (),
    seed_demo_data: Optional[bool] = None,
    clock: Callable[[], date] = date.today,
) -> SubscriptionTracker:
    """
    Factory function to create a fully wired tracker.

    Args:
        subscriptions: Initial records.
        seed_demo_data: Add the demo records too. None defers to
                        the TRACKER_SEED_DEMO_DATA setting.
        clock: Source of "today".

    Returns:
        A tracker with in-memory audit storage and configured logging.
    """
    settings = get_settings()
    configure_logging(settings.logging)
    tracker_settings = settings.tracker

    audit_logger = AuditLogger(InMemoryAuditStorage())

    seeds = list(subscriptions)
    if seed_demo_data is None:
        seed_demo_data = tracker_settings.seed_demo_data
    if seed_demo_data:
        seeds.extend(demo_subscriptions())

    collection = SubscriptionCollection(
        seeds,
        now=clock(),
        audit_logger=audit_logger,
    )

    return SubscriptionTracker(
        collection=collection,
        audit_logger=audit_logger,
        settings=tracker_settings,
        clock=clock,
    )
