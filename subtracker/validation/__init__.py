"""Form validation package."""

from subtracker.validation.validator import (
    SubscriptionValidationError,
    SubscriptionValidator,
    normalize_decimal_input,
)

__all__ = [
    "SubscriptionValidationError",
    "SubscriptionValidator",
    "normalize_decimal_input",
]
