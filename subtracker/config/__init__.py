"""Configuration package."""

from subtracker.config.settings import (
    AppSettings,
    LoggingSettings,
    Settings,
    TrackerSettings,
    get_settings,
    validate_all_settings,
)

__all__ = [
    "AppSettings",
    "LoggingSettings",
    "Settings",
    "TrackerSettings",
    "get_settings",
    "validate_all_settings",
]
