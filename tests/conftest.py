"""
Pytest fixtures for testing
"""

import pytest
from datetime import date
from decimal import Decimal

from subtracker.audit import AuditLogger
from subtracker.config import TrackerSettings
from subtracker.models.subscription import BillingCycle, Subscription
from subtracker.services.storage import InMemoryAuditStorage


@pytest.fixture
def today():
    """Pinned reference date used across tests."""
    return date(2025, 1, 1)


@pytest.fixture
def netflix():
    """Monthly subscription, next due 2025-01-15 as of 2025-01-01."""
    return Subscription(
        id="netflix",
        name="Netflix",
        cost=Decimal("330"),
        currency="TWD",
        cycle=BillingCycle.MONTHLY,
        start_date=date(2024, 10, 15),
    )


@pytest.fixture
def google_one():
    """Annual subscription, next due 2025-07-01 as of 2025-01-01."""
    return Subscription(
        id="google-one",
        name="Google One (2TB)",
        cost=Decimal("3300"),
        currency="TWD",
        cycle=BillingCycle.ANNUAL,
        start_date=date(2024, 7, 1),
    )


@pytest.fixture
def spotify():
    """Monthly subscription in USD, next due 2025-01-20 as of 2025-01-01."""
    return Subscription(
        id="spotify",
        name="Spotify",
        cost=Decimal("10.99"),
        currency="USD",
        cycle=BillingCycle.MONTHLY,
        start_date=date(2024, 12, 20),
    )


@pytest.fixture
def tracker_settings():
    """Settings independent of the environment."""
    return TrackerSettings(
        horizon_days=365,
        supported_currencies="TWD,USD,JPY,EUR",
        default_currency="TWD",
        date_display_format="%Y/%m/%d",
        max_start_date_age_years=5,
        seed_demo_data=False,
    )


@pytest.fixture
def audit_storage():
    return InMemoryAuditStorage()


@pytest.fixture
def audit_logger(audit_storage):
    return AuditLogger(audit_storage)
