"""Adapters - I/O implementations of ports."""

from .google_auth import AuthenticationError, GoogleCredentials
from .google_calendar import CalendarError, GoogleCalendarAdapter
from .google_sheets import GoogleSheetsSettingsStore, SettingsStoreError
from .config_settings import ConfigSettingsStore

__all__ = [
    "AuthenticationError",
    "GoogleCredentials",
    "CalendarError",
    "GoogleCalendarAdapter",
    "GoogleSheetsSettingsStore",
    "SettingsStoreError",
    "ConfigSettingsStore",
]
