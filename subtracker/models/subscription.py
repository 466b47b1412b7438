"""
Core Data Models for Subscription Tracker

These models define the strict schemas for subscription data.
They are designed to:
1. Enforce the record invariants at construction time
2. Be immutable once created (edits replace the whole record)
3. Be serializable for logging and the audit trail

DESIGN DECISION: Derived values (next due date, equivalents, calendar
membership) are NOT fields. They are recomputed against an explicit
reference date by the recurrence and aggregation modules.
"""

from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional, Union
from uuid import uuid4

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
)


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class BillingCycle(str, Enum):
    """
    Supported billing cycles.

    DESIGN DECISION: Only fixed monthly and annual cycles exist.
    No weekly, no custom N-day intervals, no end dates.
    """
    MONTHLY = "monthly"
    ANNUAL = "annual"

    @property
    def display_name(self) -> str:
        return "Monthly" if self is BillingCycle.MONTHLY else "Annual"


# =============================================================================
# CORE SUBSCRIPTION MODEL
# =============================================================================

MAX_NAME_LENGTH = 100


def _new_subscription_id() -> str:
    return str(uuid4())


class Subscription(BaseModel):
    """
    A single recurring subscription.

    CRITICAL: Instances are frozen. The surrounding layer models an edit
    as remove + insert of a new record.

    The cost is in the record's own currency. Nothing in the system
    converts between currencies.
    """
    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    # Identity
    id: str = Field(
        default_factory=_new_subscription_id,
        min_length=1,
        description="Opaque identifier, stable for the record's lifetime"
    )

    name: str = Field(
        ...,
        min_length=1,
        max_length=MAX_NAME_LENGTH,
        description="Display label (required)"
    )
    cost: Decimal = Field(
        ...,
        gt=0,
        description="Amount charged per cycle, in the record's currency"
    )
    currency: str = Field(
        ...,
        min_length=1,
        max_length=10,
        description="Currency code or symbol (not validated against ISO)"
    )
    cycle: BillingCycle = Field(
        ...,
        description="Billing cycle"
    )
    start_date: date = Field(
        ...,
        description="Date of the first payment; may be past or future"
    )

    def __str__(self) -> str:
        return (
            f"{self.name}: {self.cost} {self.currency} "
            f"({self.cycle.value}) since {self.start_date.isoformat()}"
        )


# =============================================================================
# FORM INPUT MODEL
# =============================================================================

class SubscriptionForm(BaseModel):
    """
    Raw subscription fields as a form collects them.

    CRITICAL: This is UNVERIFIED input. It must pass through
    SubscriptionValidator before a Subscription is built from it.

    All fields are optional because the user may leave any of them blank.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    name: Optional[str] = Field(
        default=None,
        description="Subscription name as typed"
    )
    cost: Optional[str] = Field(
        default=None,
        description="Cost as typed (dot or comma decimal separator)"
    )
    currency: Optional[str] = Field(
        default=None,
        description="Selected currency code"
    )
    cycle: Optional[str] = Field(
        default=None,
        description="Selected billing cycle"
    )
    start_date: Optional[Union[date, str]] = Field(
        default=None,
        description="Picked start date, or an ISO string"
    )


# =============================================================================
# VALIDATION MODELS
# =============================================================================

class ValidationIssue(BaseModel):
    """A single validation issue found."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'invalid_format', 'future_date')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        ...,
        pattern="^(error|warning|info)$",
        description="Issue severity"
    )
    suggested_fix: Optional[str] = Field(
        default=None,
        description="Suggested fix if available"
    )


class ValidationResult(BaseModel):
    """
    Result of the two-stage form validation.

    Stage 1: Schema validation (presence, parseability)
    Stage 2: Semantic validation (positive cost, supported currency, dates)
    """

    schema_valid: bool = Field(
        ...,
        description="Did schema validation pass?"
    )
    semantic_valid: bool = Field(
        ...,
        description="Did semantic validation pass?"
    )
    is_valid: bool = Field(
        ...,
        description="Overall validation result"
    )

    issues: list[ValidationIssue] = Field(
        default_factory=list,
        description="All validation issues found"
    )

    # Warnings don't block but should be shown
    warnings: list[str] = Field(
        default_factory=list,
        description="Non-blocking warnings"
    )

    @property
    def has_errors(self) -> bool:
        """Check if there are any error-level issues."""
        return any(issue.severity == "error" for issue in self.issues)

    @property
    def error_count(self) -> int:
        """Count error-level issues."""
        return sum(1 for issue in self.issues if issue.severity == "error")

    def issues_for(self, field: str) -> list[ValidationIssue]:
        return [issue for issue in self.issues if issue.field == field]


# =============================================================================
# AGGREGATION MODELS
# =============================================================================

class CostSummary(BaseModel):
    """
    Portfolio-wide cost totals.

    IMPORTANT: Totals are raw numeric sums across currencies.
    `currencies` lets a presentation layer notice when that happens.
    """

    monthly_total: Decimal = Field(
        ...,
        ge=0,
        description="Sum of monthly-equivalent costs"
    )
    annual_total: Decimal = Field(
        ...,
        ge=0,
        description="Sum of annual-equivalent costs"
    )
    subscription_count: int = Field(
        ...,
        ge=0
    )
    currencies: list[str] = Field(
        default_factory=list,
        description="Distinct currencies present, sorted"
    )

    @property
    def is_mixed_currency(self) -> bool:
        return len(self.currencies) > 1
