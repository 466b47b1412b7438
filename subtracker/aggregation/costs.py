"""
Cost Aggregator

Normalizes subscription costs across mixed billing cycles.

DESIGN DECISION: Normalization is FLAT, not calendar-accurate.
An annual subscription costs cost / 12 per month regardless of which
month it is. The aggregate functions accept a `now` argument only so
every engine function shares the same signature shape; it is unused.

Mixed currencies are summed as raw numbers. No conversion happens here.
"""

from collections.abc import Iterable
from decimal import Decimal
from typing import Optional

from subtracker.models.subscription import BillingCycle, CostSummary, Subscription
from subtracker.recurrence.calculator import DayLike


MONTHS_PER_YEAR = Decimal(12)


def monthly_cost(subscription: Subscription) -> Decimal:
    """Monthly-equivalent cost of one subscription."""
    if subscription.cycle == BillingCycle.MONTHLY:
        return subscription.cost
    return subscription.cost / MONTHS_PER_YEAR


def annual_cost(subscription: Subscription) -> Decimal:
    """Annual-equivalent cost of one subscription."""
    if subscription.cycle == BillingCycle.MONTHLY:
        return subscription.cost * MONTHS_PER_YEAR
    return subscription.cost


def monthly_equivalent(
    subscriptions: Iterable[Subscription],
    now: Optional[DayLike] = None,
) -> Decimal:
    """
    Sum of monthly-equivalent costs.

    `now` is ignored; the result has no date dependence.
    An empty collection totals to 0.
    """
    return sum((monthly_cost(sub) for sub in subscriptions), Decimal(0))


def annual_equivalent(
    subscriptions: Iterable[Subscription],
    now: Optional[DayLike] = None,
) -> Decimal:
    """
    Sum of annual-equivalent costs.

    `now` is ignored; the result has no date dependence.
    An empty collection totals to 0.
    """
    return sum((annual_cost(sub) for sub in subscriptions), Decimal(0))


def summarize_costs(
    subscriptions: Iterable[Subscription],
    now: Optional[DayLike] = None,
) -> CostSummary:
    """Build both totals plus the distinct currencies seen."""
    subs = list(subscriptions)
    return CostSummary(
        monthly_total=monthly_equivalent(subs, now),
        annual_total=annual_equivalent(subs, now),
        subscription_count=len(subs),
        currencies=sorted({sub.currency for sub in subs}),
    )
