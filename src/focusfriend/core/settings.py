"""Planning settings - resolving raw settings store values."""

import logging
from dataclasses import dataclass
from datetime import datetime, time
from typing import Mapping
from zoneinfo import ZoneInfo

logger = logging.getLogger(__name__)

WORKDAY_START_HOUR_KEY = "workday_start_hour"
WORKDAY_END_HOUR_KEY = "workday_end_hour"
LUNCHTIME_START_HOUR_KEY = "lunchtime_start_hour"
LUNCHTIME_END_HOUR_KEY = "lunchtime_end_hour"

SETTING_KEYS = (
    WORKDAY_START_HOUR_KEY,
    WORKDAY_END_HOUR_KEY,
    LUNCHTIME_START_HOUR_KEY,
    LUNCHTIME_END_HOUR_KEY,
)

# Hours are in the reference time zone
DEFAULT_TIMEZONE = "America/New_York"
DEFAULT_WORKDAY_START_HOUR = 12
DEFAULT_WORKDAY_END_HOUR = 20
DEFAULT_LUNCHTIME_START_HOUR = 15
DEFAULT_LUNCHTIME_END_HOUR = 17

_HOUR_FORMATS = ("%H:%M", "%H:%M:%S", "%I %p", "%I%p", "%I:%M %p", "%I:%M:%S %p")


@dataclass(frozen=True)
class Settings:
    """Hour-of-day settings for one planning run."""

    workday_start_hour: int = DEFAULT_WORKDAY_START_HOUR
    workday_end_hour: int = DEFAULT_WORKDAY_END_HOUR
    lunchtime_start_hour: int = DEFAULT_LUNCHTIME_START_HOUR
    lunchtime_end_hour: int = DEFAULT_LUNCHTIME_END_HOUR
    timezone: str = DEFAULT_TIMEZONE

    @property
    def tz(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)

    @classmethod
    def from_values(cls, values: Mapping[str, object], timezone: str = DEFAULT_TIMEZONE) -> "Settings":
        """Build settings from raw store values, falling back to defaults."""

        def _resolve(key: str, default: int) -> int:
            hour = parse_hour(values.get(key))
            return default if hour is None else hour

        return cls(
            workday_start_hour=_resolve(WORKDAY_START_HOUR_KEY, DEFAULT_WORKDAY_START_HOUR),
            workday_end_hour=_resolve(WORKDAY_END_HOUR_KEY, DEFAULT_WORKDAY_END_HOUR),
            lunchtime_start_hour=_resolve(LUNCHTIME_START_HOUR_KEY, DEFAULT_LUNCHTIME_START_HOUR),
            lunchtime_end_hour=_resolve(LUNCHTIME_END_HOUR_KEY, DEFAULT_LUNCHTIME_END_HOUR),
            timezone=timezone or DEFAULT_TIMEZONE,
        )


def parse_hour(value: object) -> int | None:
    """
    Parse an hour-of-day setting.

    Accepts ints, "14", "14:00", "14:00:00", "2 PM", "2:00 PM" and
    datetime/time objects. Returns None for missing, blank or malformed
    values.
    """
    if value is None:
        return None

    if isinstance(value, (datetime, time)):
        return value.hour

    if isinstance(value, bool):
        logger.warning(f"Ignoring malformed hour setting: {value!r}")
        return None

    if isinstance(value, int):
        hour = value
    else:
        text = str(value).strip()
        if not text:
            return None
        hour = _parse_hour_text(text)
        if hour is None:
            logger.warning(f"Ignoring malformed hour setting: {value!r}")
            return None

    if not 0 <= hour <= 23:
        logger.warning(f"Ignoring out-of-range hour setting: {value!r}")
        return None
    return hour


def _parse_hour_text(text: str) -> int | None:
    if text.isdigit():
        return int(text)
    for fmt in _HOUR_FORMATS:
        try:
            return datetime.strptime(text.upper(), fmt).hour
        except ValueError:
            continue
    return None
