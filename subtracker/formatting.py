"""
Display formatting for dates and amounts.

Usage:
    format_due_date(date(2025, 3, 2))      -> "2025/03/02"
    format_cost(Decimal("330"), "TWD")      -> "TWD 330"
    format_cost(Decimal("9.5"), "USD")      -> "USD 9.50"
    format_total(Decimal("605.4"), "TWD")   -> "TWD 605"
"""

from datetime import date
from decimal import ROUND_HALF_UP, Decimal


DEFAULT_DATE_FORMAT = "%Y/%m/%d"


def format_due_date(day: date, fmt: str = DEFAULT_DATE_FORMAT) -> str:
    """Format a due date for display, YYYY/MM/DD by default."""
    return day.strftime(fmt)


def format_cost(amount, currency: str) -> str:
    """
    Format a per-subscription cost.

    Whole amounts show no decimals, anything else shows two.
    Thousands are separated with commas.
    """
    value = Decimal(str(amount))
    decimals = 0 if value == value.to_integral_value() else 2
    return f"{currency} {value:,.{decimals}f}"


def format_total(amount, currency: str) -> str:
    """Format a portfolio total, rounded half-up to whole units."""
    value = Decimal(str(amount)).quantize(Decimal(1), rounding=ROUND_HALF_UP)
    return f"{currency} {value:,.0f}"
