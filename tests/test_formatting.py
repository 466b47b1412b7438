"""
Tests for display formatting helpers.
"""

import pytest
from datetime import date
from decimal import Decimal

from subtracker.formatting import format_cost, format_due_date, format_total


class TestFormatDueDate:
    """Tests for due date display."""

    def test_default_format(self):
        """Test zero-padded YYYY/MM/DD."""
        assert format_due_date(date(2025, 3, 2)) == "2025/03/02"

    def test_custom_format(self):
        """Test an alternative strftime pattern."""
        assert format_due_date(date(2025, 3, 2), "%d.%m.%Y") == "02.03.2025"


class TestFormatCost:
    """Tests for per-subscription cost display."""

    @pytest.mark.parametrize(
        "amount,currency,expected",
        [
            (Decimal("330"), "TWD", "TWD 330"),
            (Decimal("330.00"), "TWD", "TWD 330"),
            (Decimal("9.5"), "USD", "USD 9.50"),
            (Decimal("10.99"), "USD", "USD 10.99"),
            (Decimal("1234567"), "JPY", "JPY 1,234,567"),
            (3300, "TWD", "TWD 3,300"),
        ],
    )
    def test_cost_display(self, amount, currency, expected):
        """Test whole amounts drop decimals and others keep two."""
        assert format_cost(amount, currency) == expected


class TestFormatTotal:
    """Tests for portfolio total display."""

    def test_rounds_down(self):
        assert format_total(Decimal("605.4"), "TWD") == "TWD 605"

    def test_rounds_half_up(self):
        assert format_total(Decimal("605.5"), "TWD") == "TWD 606"

    def test_thousands_separator(self):
        assert format_total(Decimal("7260"), "TWD") == "TWD 7,260"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
