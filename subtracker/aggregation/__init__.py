"""Cost aggregation package."""

from subtracker.aggregation.costs import (
    annual_cost,
    annual_equivalent,
    monthly_cost,
    monthly_equivalent,
    summarize_costs,
)

__all__ = [
    "annual_cost",
    "annual_equivalent",
    "monthly_cost",
    "monthly_equivalent",
    "summarize_costs",
]
