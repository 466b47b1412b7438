"""
Tests for Subscription Tracker

Test strategy:
1. Unit tests for individual components (models, calculator, validator)
2. Integration tests for the tracker facade with a pinned clock
3. No real clock reads in assertions (always pass "now" explicitly)
"""

import pytest
from datetime import date
from decimal import Decimal
from uuid import uuid4

from pydantic import ValidationError

from subtracker.models.subscription import (
    BillingCycle,
    Subscription,
    SubscriptionForm,
    ValidationIssue,
    ValidationResult,
)
from subtracker.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)


class TestSubscriptionModel:
    """Tests for the Subscription Pydantic model."""

    def test_subscription_creation(self):
        """Test Subscription model creation."""
        sub = Subscription(
            name="Netflix",
            cost=Decimal("330"),
            currency="TWD",
            cycle=BillingCycle.MONTHLY,
            start_date=date(2024, 10, 15),
        )
        assert sub.name == "Netflix"
        assert sub.cycle == BillingCycle.MONTHLY
        assert sub.id

    def test_ids_are_unique_by_default(self):
        """Test each record gets its own generated id."""
        kwargs = dict(name="A", cost=1, currency="USD", cycle="monthly", start_date=date(2025, 1, 1))
        assert Subscription(**kwargs).id != Subscription(**kwargs).id

    def test_name_strips_whitespace(self):
        """Test that whitespace is stripped from the name."""
        sub = Subscription(
            name="  Spotify  ",
            cost=Decimal("10"),
            currency="USD",
            cycle=BillingCycle.MONTHLY,
            start_date=date(2025, 1, 1),
        )
        assert sub.name == "Spotify"

    def test_empty_name_rejected(self):
        """Test that a blank name is rejected."""
        with pytest.raises(ValueError):
            Subscription(
                name="   ",
                cost=Decimal("10"),
                currency="USD",
                cycle=BillingCycle.MONTHLY,
                start_date=date(2025, 1, 1),
            )

    @pytest.mark.parametrize("cost", [Decimal("0"), Decimal("-1"), -0.01])
    def test_non_positive_cost_rejected(self, cost):
        """Test that cost must be strictly positive."""
        with pytest.raises(ValidationError):
            Subscription(
                name="Test",
                cost=cost,
                currency="USD",
                cycle=BillingCycle.MONTHLY,
                start_date=date(2025, 1, 1),
            )

    def test_unknown_cycle_rejected(self):
        """Test that only monthly and annual cycles exist."""
        with pytest.raises(ValidationError):
            Subscription(
                name="Test",
                cost=Decimal("1"),
                currency="USD",
                cycle="weekly",
                start_date=date(2025, 1, 1),
            )

    def test_subscription_is_frozen(self, netflix):
        """Test records cannot be edited in place."""
        with pytest.raises(ValidationError):
            netflix.cost = Decimal("390")

    def test_subscription_is_hashable(self, netflix, google_one):
        """Test frozen records can live in sets."""
        assert len({netflix, google_one, netflix}) == 2

    def test_currency_not_checked_against_iso(self):
        """Test any non-empty currency symbol is allowed."""
        sub = Subscription(
            name="Arcade",
            cost=Decimal("5"),
            currency="NT$",
            cycle=BillingCycle.ANNUAL,
            start_date=date(2023, 5, 5),
        )
        assert sub.currency == "NT$"


class TestBillingCycle:
    """Tests for the billing cycle enum."""

    def test_cycle_values(self):
        """Test cycle string values."""
        assert BillingCycle("monthly") is BillingCycle.MONTHLY
        assert BillingCycle("annual") is BillingCycle.ANNUAL
        assert len(BillingCycle) == 2

    def test_display_names(self):
        """Test human-readable cycle labels."""
        assert BillingCycle.MONTHLY.display_name == "Monthly"
        assert BillingCycle.ANNUAL.display_name == "Annual"


class TestSubscriptionForm:
    """Tests for the raw form model."""

    def test_all_fields_optional(self):
        """Test an empty form can be represented."""
        form = SubscriptionForm()
        assert form.name is None
        assert form.start_date is None

    def test_form_strips_whitespace(self):
        """Test typed values are stripped."""
        form = SubscriptionForm(name="  Netflix ", cost=" 330 ")
        assert form.name == "Netflix"
        assert form.cost == "330"


class TestAuditModels:
    """Tests for audit-related models."""

    def test_audit_event_creation(self):
        """Test AuditEvent model creation."""
        event = AuditEvent(
            event_type=AuditEventType.SUBSCRIPTION_ADDED,
            description="Test subscription added",
        )
        assert event.event_type == AuditEventType.SUBSCRIPTION_ADDED
        assert event.severity == AuditSeverity.INFO

    def test_audit_event_to_log_dict(self):
        """Test conversion to log dictionary."""
        event = AuditEvent(
            event_type=AuditEventType.SUBSCRIPTION_REMOVED,
            description="Subscription removed",
            details={"name": "Netflix"},
        )
        log_dict = event.to_log_dict()
        assert "event_id" in log_dict
        assert log_dict["event_type"] == "subscription_removed"
        assert log_dict["details"]["name"] == "Netflix"

    def test_audit_event_builder_subscription_added(self):
        """Test AuditEventBuilder.subscription_added."""
        correlation_id = uuid4()

        event = AuditEventBuilder.subscription_added(
            subscription_id="netflix",
            name="Netflix",
            cost="330",
            currency="TWD",
            cycle="monthly",
            correlation_id=correlation_id,
        )

        assert event.event_type == AuditEventType.SUBSCRIPTION_ADDED
        assert event.entity_id == "netflix"
        assert event.correlation_id == correlation_id
        assert event.is_user_action is True

    def test_audit_event_builder_remove_skipped(self):
        """Test a skipped remove is a debug-level event."""
        event = AuditEventBuilder.subscription_remove_skipped("missing")
        assert event.severity == AuditSeverity.DEBUG
        assert "missing" in event.description

    def test_audit_event_builder_validation_failed(self):
        """Test AuditEventBuilder.form_validation_failed."""
        event = AuditEventBuilder.form_validation_failed(
            stage="schema",
            issues=[{"field": "name"}],
            correlation_id=uuid4(),
        )
        assert event.severity == AuditSeverity.WARNING
        assert event.description.startswith("Schema validation failed with 1 issues")


class TestValidationResult:
    """Tests for ValidationResult model."""

    def test_validation_result_has_errors(self):
        """Test has_errors property."""
        result = ValidationResult(
            schema_valid=False,
            semantic_valid=False,
            is_valid=False,
            issues=[
                ValidationIssue(
                    field="cost",
                    issue_type="missing",
                    message="Cost is required",
                    severity="error",
                ),
            ],
        )
        assert result.has_errors is True
        assert result.error_count == 1

    def test_validation_result_warnings_only(self):
        """Test that warnings don't count as errors."""
        result = ValidationResult(
            schema_valid=True,
            semantic_valid=True,
            is_valid=True,
            issues=[
                ValidationIssue(
                    field="start_date",
                    issue_type="suspicious_date",
                    message="Start date is more than 5 years ago",
                    severity="warning",
                ),
            ],
        )
        assert result.has_errors is False
        assert result.error_count == 0

    def test_invalid_severity_rejected(self):
        """Test severity is restricted to error, warning or info."""
        with pytest.raises(ValidationError):
            ValidationIssue(field="x", issue_type="y", message="z", severity="fatal")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
