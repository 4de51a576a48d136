"""Ports - interfaces/protocols for external dependencies."""

from .calendar_repo import CalendarRepository
from .settings_store import SettingsStore

__all__ = [
    "CalendarRepository",
    "SettingsStore",
]
