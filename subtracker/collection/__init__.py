"""Subscription collection package."""

from subtracker.collection.collection import (
    DuplicateSubscriptionError,
    SubscriptionCollection,
)

__all__ = ["DuplicateSubscriptionError", "SubscriptionCollection"]
