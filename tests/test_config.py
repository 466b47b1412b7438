"""
Tests for configuration loading.
"""

import pytest
from pydantic import ValidationError

from subtracker.config import LoggingSettings, TrackerSettings, validate_all_settings


class TestTrackerSettings:
    """Tests for TrackerSettings."""

    def test_defaults(self, monkeypatch):
        """Test defaults without any environment overrides."""
        for var in ("TRACKER_HORIZON_DAYS", "TRACKER_SUPPORTED_CURRENCIES", "TRACKER_DEFAULT_CURRENCY"):
            monkeypatch.delenv(var, raising=False)
        settings = TrackerSettings()
        assert settings.horizon_days == 365
        assert settings.supported_currencies_list == ["TWD", "USD", "JPY", "EUR"]
        assert settings.default_currency == "TWD"
        assert settings.date_display_format == "%Y/%m/%d"

    def test_currency_list_parsing(self):
        """Test the comma-separated list is trimmed and uppercased."""
        settings = TrackerSettings(supported_currencies=" twd, usd ,,")
        assert settings.supported_currencies_list == ["TWD", "USD"]

    def test_default_currency_normalized(self):
        assert TrackerSettings(default_currency=" usd ").default_currency == "USD"

    @pytest.mark.parametrize("days", [0, -1, 5000])
    def test_horizon_bounds(self, days):
        """Test horizon_days outside 1..3660 is rejected."""
        with pytest.raises(ValidationError):
            TrackerSettings(horizon_days=days)

    def test_env_override(self, monkeypatch):
        """Test values are read from TRACKER_ environment variables."""
        monkeypatch.setenv("TRACKER_HORIZON_DAYS", "30")
        monkeypatch.setenv("TRACKER_SEED_DEMO_DATA", "true")
        settings = TrackerSettings()
        assert settings.horizon_days == 30
        assert settings.seed_demo_data is True


class TestLoggingSettings:
    """Tests for LoggingSettings."""

    def test_level_uppercased(self):
        assert LoggingSettings(level="debug").level == "DEBUG"

    def test_unknown_level_rejected(self):
        with pytest.raises(ValidationError):
            LoggingSettings(level="verbose")


class TestValidateAllSettings:
    """Tests for validate_all_settings."""

    def test_all_valid(self, monkeypatch):
        """Test a clean environment validates."""
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        monkeypatch.delenv("TRACKER_HORIZON_DAYS", raising=False)
        results = validate_all_settings()
        assert results["tracker"] is True
        assert results["logging"] is True
        assert results["app"] is True

    def test_bad_env_reported(self, monkeypatch):
        """Test an invalid variable is reported instead of raised."""
        monkeypatch.setenv("LOG_LEVEL", "verbose")
        results = validate_all_settings()
        assert results["logging"] is False
        assert "Unsupported log level" in results["logging_error"]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
