"""
Two-Stage Subscription Form Validation

The recurrence engine assumes well-formed subscriptions. Turning raw form
input into one is the caller's job; this module is that caller-side check.

STAGE 1 - SCHEMA VALIDATION:
- Name present
- Cost present and parseable (comma or dot decimal separator)
- Cycle is monthly or annual
- Start date present and parseable

STAGE 2 - SEMANTIC VALIDATION:
- Cost strictly positive, at most two decimal places
- Currency is one of the offered codes
- Start date not after today
- Very old start dates are flagged (warning only)

IMPORTANT: Validation NEVER silently fixes issues beyond normalizing the
decimal separator. It reports them for the user to correct.
"""

import re
from datetime import date, datetime, timedelta
from decimal import Decimal, InvalidOperation
from typing import Optional

from subtracker.config import TrackerSettings, get_settings
from subtracker.models.subscription import (
    MAX_NAME_LENGTH,
    BillingCycle,
    Subscription,
    SubscriptionForm,
    ValidationIssue,
    ValidationResult,
)
from subtracker.recurrence.calculator import DayLike, as_calendar_day


_PLAIN_NUMBER = re.compile(r"^-?\d+(\.\d+)?$")
MAX_COST_DECIMALS = 2


class SubscriptionValidationError(ValueError):
    """Raised by SubscriptionValidator.build() when the form is invalid."""

    def __init__(self, result: ValidationResult):
        self.result = result
        messages = "; ".join(
            issue.message for issue in result.issues if issue.severity == "error"
        )
        super().__init__(f"Invalid subscription form: {messages}")


def normalize_decimal_input(value: str) -> str:
    """
    Normalize a typed amount: comma becomes a dot.

    Example:
        >>> normalize_decimal_input("9,99")
        '9.99'
    """
    return value.strip().replace(",", ".")


def _parse_cost(raw: Optional[str]) -> Optional[Decimal]:
    if raw is None or not raw.strip():
        return None
    text = normalize_decimal_input(raw)
    # Decimal() also takes exponents, underscores and NaN; a form does not
    if not _PLAIN_NUMBER.match(text):
        return None
    try:
        return Decimal(text)
    except InvalidOperation:
        return None


def _parse_cycle(raw: Optional[str]) -> Optional[BillingCycle]:
    if raw is None:
        return None
    try:
        return BillingCycle(raw.strip().lower())
    except ValueError:
        return None


def _parse_start_date(raw) -> Optional[date]:
    if raw is None:
        return None
    if isinstance(raw, date):
        return as_calendar_day(raw)
    text = raw.strip()
    try:
        # A time suffix is allowed; anything else after the date is not
        if "T" in text:
            return datetime.fromisoformat(text).date()
        return date.fromisoformat(text)
    except ValueError:
        return None


class SubscriptionValidator:
    """
    Validates subscription form input through a two-stage pipeline.

    Stage 1: Schema validation
    Stage 2: Semantic validation (only when stage 1 passes)
    """

    def __init__(
        self,
        settings: Optional[TrackerSettings] = None,
    ):
        """
        Initialize validator.

        Args:
            settings: Tracker settings (currencies, start date lookback).
                     Defaults to the cached application settings.
        """
        self._settings = settings or get_settings().tracker

    def _validate_schema(
        self,
        form: SubscriptionForm,
    ) -> tuple[bool, list[ValidationIssue]]:
        """
        Stage 1: Schema validation.

        Returns: (is_valid, list_of_issues)
        """
        issues = []

        if not form.name:
            issues.append(ValidationIssue(
                field="name",
                issue_type="missing",
                message="Subscription name is required",
                severity="error",
                suggested_fix="Enter a name such as 'Netflix'",
            ))
        elif len(form.name) > MAX_NAME_LENGTH:
            issues.append(ValidationIssue(
                field="name",
                issue_type="too_long",
                message=f"Subscription name is longer than {MAX_NAME_LENGTH} characters",
                severity="error",
            ))

        if form.cost is None or not form.cost.strip():
            issues.append(ValidationIssue(
                field="cost",
                issue_type="missing",
                message="Cost is required",
                severity="error",
            ))
        elif _parse_cost(form.cost) is None:
            issues.append(ValidationIssue(
                field="cost",
                issue_type="invalid_format",
                message=f"Cost '{form.cost}' is not a plain number",
                severity="error",
                suggested_fix="Use digits with an optional decimal point, e.g. 9.99",
            ))

        if not form.currency:
            issues.append(ValidationIssue(
                field="currency",
                issue_type="missing",
                message="Currency is required",
                severity="error",
            ))

        if _parse_cycle(form.cycle) is None:
            issues.append(ValidationIssue(
                field="cycle",
                issue_type="invalid_value",
                message=f"Billing cycle must be monthly or annual (got {form.cycle!r})",
                severity="error",
            ))

        if form.start_date is None:
            issues.append(ValidationIssue(
                field="start_date",
                issue_type="missing",
                message="Start date is required",
                severity="error",
            ))
        elif _parse_start_date(form.start_date) is None:
            issues.append(ValidationIssue(
                field="start_date",
                issue_type="invalid_format",
                message=f"Start date '{form.start_date}' is not a valid date",
                severity="error",
                suggested_fix="Use the YYYY-MM-DD format",
            ))

        is_valid = not any(issue.severity == "error" for issue in issues)

        return is_valid, issues

    def _validate_semantic(
        self,
        form: SubscriptionForm,
        today: date,
    ) -> tuple[bool, list[ValidationIssue]]:
        """
        Stage 2: Semantic validation.

        Assumes stage 1 passed, so every field parses.

        Returns: (is_valid, list_of_issues)
        """
        issues = []

        cost = _parse_cost(form.cost)
        if cost <= 0:
            issues.append(ValidationIssue(
                field="cost",
                issue_type="invalid_value",
                message="Cost must be greater than zero",
                severity="error",
            ))
        elif -cost.as_tuple().exponent > MAX_COST_DECIMALS:
            issues.append(ValidationIssue(
                field="cost",
                issue_type="invalid_format",
                message=f"Cost can have at most {MAX_COST_DECIMALS} decimal places",
                severity="error",
            ))

        supported = self._settings.supported_currencies_list
        if form.currency.upper() not in supported:
            issues.append(ValidationIssue(
                field="currency",
                issue_type="unsupported",
                message=f"Currency {form.currency} is not offered",
                severity="error",
                suggested_fix=f"Pick one of: {', '.join(supported)}",
            ))

        start = _parse_start_date(form.start_date)
        if start > today:
            issues.append(ValidationIssue(
                field="start_date",
                issue_type="future_date",
                message=f"Start date ({start}) is after today",
                severity="error",
                suggested_fix="Use the date of the first payment already made",
            ))

        years = self._settings.max_start_date_age_years
        oldest_expected = today - timedelta(days=365 * years)
        if start < oldest_expected:
            issues.append(ValidationIssue(
                field="start_date",
                issue_type="suspicious_date",
                message=f"Start date ({start}) is more than {years} years ago",
                severity="warning",
                suggested_fix="Please verify the date is correct",
            ))

        is_valid = not any(issue.severity == "error" for issue in issues)

        return is_valid, issues

    def validate(
        self,
        form: SubscriptionForm,
        today: DayLike,
    ) -> ValidationResult:
        """
        Run full two-stage validation pipeline.

        Args:
            form: The raw form input
            today: Reference date for the "not after today" rule

        Returns:
            ValidationResult with all issues found
        """
        all_issues = []

        schema_valid, schema_issues = self._validate_schema(form)
        all_issues.extend(schema_issues)

        # Only run stage 2 if stage 1 passes
        semantic_valid = False
        if schema_valid:
            semantic_valid, semantic_issues = self._validate_semantic(
                form, as_calendar_day(today)
            )
            all_issues.extend(semantic_issues)

        warnings = [
            issue.message for issue in all_issues if issue.severity == "warning"
        ]

        return ValidationResult(
            schema_valid=schema_valid,
            semantic_valid=semantic_valid,
            is_valid=schema_valid and semantic_valid,
            issues=all_issues,
            warnings=warnings,
        )

    def build(
        self,
        form: SubscriptionForm,
        today: DayLike,
        subscription_id: Optional[str] = None,
    ) -> Subscription:
        """
        Validate the form and construct a Subscription from it.

        Args:
            form: The raw form input
            today: Reference date for validation
            subscription_id: Keep an existing id (edit as replace);
                            a fresh id is generated when None

        Raises:
            SubscriptionValidationError: If validation finds any error
        """
        result = self.validate(form, today)
        if not result.is_valid:
            raise SubscriptionValidationError(result)

        fields = {
            "name": form.name,
            "cost": _parse_cost(form.cost),
            "currency": form.currency.upper(),
            "cycle": _parse_cycle(form.cycle),
            "start_date": _parse_start_date(form.start_date),
        }
        if subscription_id is not None:
            fields["id"] = subscription_id
        return Subscription(**fields)

    def get_user_friendly_summary(
        self,
        result: ValidationResult,
    ) -> str:
        """
        Generate a user-friendly summary of validation results.
        """
        if result.is_valid and not result.warnings:
            return "All checks passed."

        lines = []

        if result.has_errors:
            lines.append("Please fix the following:")
            for issue in result.issues:
                if issue.severity == "error":
                    lines.append(f"   - {issue.message}")
                    if issue.suggested_fix:
                        lines.append(f"     Hint: {issue.suggested_fix}")

        if result.warnings:
            if lines:
                lines.append("")
            lines.append("Please verify the following:")
            for warning in result.warnings:
                lines.append(f"   - {warning}")

        return "\n".join(lines)
