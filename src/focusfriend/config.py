"""Configuration management for Focusfriend."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .core.settings import DEFAULT_TIMEZONE, SETTING_KEYS

logger = logging.getLogger(__name__)

FOCUSFRIEND_HOME = Path(os.environ.get("FOCUSFRIEND_HOME", Path.home() / "focusfriend"))
CONFIG_FILE = FOCUSFRIEND_HOME / "config" / "focusfriend.conf"
GOOGLE_CONFIG_FOLDER = FOCUSFRIEND_HOME / "config" / "google"

DEFAULT_SETTINGS_RANGE = "A1:B100"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass
class Config:
    """Focusfriend configuration."""

    timezone: str = DEFAULT_TIMEZONE
    calendar_id: str = "primary"
    google_config_folder: str = str(GOOGLE_CONFIG_FOLDER)
    google_client_secret_file: str = ""
    # Planning settings come from this sheet when set, otherwise from this file
    settings_sheet_id: str = ""
    settings_range: str = DEFAULT_SETTINGS_RANGE
    settings: dict[str, str] = field(default_factory=dict)
    # When false, blocks are only logged, never written to the calendar
    persist_to_calendar: bool = True
    daemon_time: str = "06:00"


def _parse_bool(key: str, value: str, default: bool) -> bool:
    lowered = value.lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    logger.warning(f"Invalid boolean for {key.upper()}: {value!r}, using {default}")
    return default


def _parse_timezone(value: str) -> str:
    if not value:
        return DEFAULT_TIMEZONE
    try:
        ZoneInfo(value)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning(f"Unknown TIMEZONE {value!r}, using {DEFAULT_TIMEZONE}")
        return DEFAULT_TIMEZONE
    return value


def _unquote(value: str) -> str:
    # Handle quoted values with inline comments: "value" # comment
    if value.startswith(('"', "'")):
        quote = value[0]
        end_quote = value.find(quote, 1)
        if end_quote != -1:
            return value[1:end_quote]
        return value[1:]
    # Unquoted: strip inline comments
    if "#" in value:
        value = value.split("#")[0].strip()
    return value


def load_config() -> Config:
    """Load configuration from focusfriend.conf file."""
    config = Config()

    if not CONFIG_FILE.exists():
        return config

    for line in CONFIG_FILE.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip().lower()
        value = _unquote(value.strip())

        if key in SETTING_KEYS:
            config.settings[key] = value
            continue

        match key:
            case "timezone":
                config.timezone = _parse_timezone(value)
            case "calendar_id":
                config.calendar_id = value or "primary"
            case "google_config_folder":
                config.google_config_folder = value
            case "google_client_secret_file":
                config.google_client_secret_file = value
            case "settings_sheet_id":
                config.settings_sheet_id = value
            case "settings_range":
                config.settings_range = value or DEFAULT_SETTINGS_RANGE
            case "persist_to_calendar":
                config.persist_to_calendar = _parse_bool(key, value, True)
            case "daemon_time":
                config.daemon_time = value
            case _:
                logger.debug(f"Ignoring unknown config key: {key.upper()}")

    return config
