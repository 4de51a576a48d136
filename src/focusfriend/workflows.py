"""Shared workflow layer between the CLI commands and the daemon.

Each scheduling pass resolves settings once, then for every remaining day of
the week fetches commitments, plans blocks and replaces the blocks that
earlier passes created.
"""

import logging
from datetime import date, datetime, time, timedelta

from .adapters.config_settings import ConfigSettingsStore
from .adapters.google_auth import GoogleCredentials
from .adapters.google_calendar import CalendarError, GoogleCalendarAdapter
from .adapters.google_sheets import GoogleSheetsSettingsStore
from .config import Config
from .core.intervals import BusyInterval
from .core.planner import DayPlan, plan_day, plan_week, week_dates
from .core.settings import Settings
from .ports import CalendarRepository, SettingsStore

logger = logging.getLogger(__name__)


def get_credentials(config: Config) -> GoogleCredentials:
    return GoogleCredentials(config.google_config_folder, config.google_client_secret_file)


def get_calendar(config: Config) -> GoogleCalendarAdapter:
    """Build the calendar adapter from config."""
    return GoogleCalendarAdapter(
        get_credentials(config),
        calendar_id=config.calendar_id,
        timezone=config.timezone,
    )


def get_settings_store(config: Config) -> SettingsStore:
    """Use the settings sheet when one is configured, else the config file."""
    if config.settings_sheet_id:
        return GoogleSheetsSettingsStore(
            get_credentials(config),
            config.settings_sheet_id,
            config.settings_range,
        )
    return ConfigSettingsStore(config)


def load_settings(config: Config, store: SettingsStore | None = None) -> Settings:
    """Read settings once for a planning run."""
    store = store or get_settings_store(config)
    return Settings.from_values(store.read_values(), timezone=config.timezone)


def fetch_day(calendar: CalendarRepository, settings: Settings, day: date) -> list[BusyInterval]:
    """Fetch commitments from midnight to midnight in the settings time zone."""
    start = datetime.combine(day, time(0, 0), tzinfo=settings.tz)
    end = datetime.combine(day + timedelta(days=1), time(0, 0), tzinfo=settings.tz)
    return calendar.fetch_commitments(start, end)


def schedule_day(
    calendar: CalendarRepository,
    settings: Settings,
    day: date,
    persist: bool = True,
) -> DayPlan:
    """
    Plan one day and write it to the calendar.

    Blocks created by earlier passes are deleted before the new ones are
    created. With persist=False the plan is only logged.
    """
    logger.info(f"Scheduling blocks for {day.isoformat()}")

    busy = fetch_day(calendar, settings, day)
    plan = plan_day(settings, day, busy)

    if persist:
        for stale in busy:
            if stale.is_own:
                calendar.delete_event(stale.event_id)

    for block in plan.blocks:
        if persist:
            calendar.create_event(block)
        logger.info(
            f"Scheduled {block.kind.display_name}: {block.start.isoformat()} - {block.end.isoformat()}"
        )

    return plan


def schedule_week(
    config: Config,
    calendar: CalendarRepository | None = None,
    settings_store: SettingsStore | None = None,
    today: date | None = None,
) -> dict[date, DayPlan]:
    """
    Schedule today through Saturday.

    A calendar failure aborts only the day it happened on; the error is
    recorded on that day's plan.
    """
    settings = load_settings(config, settings_store)
    calendar = calendar or get_calendar(config)
    today = today or datetime.now(settings.tz).date()

    plans = {}
    for day in week_dates(today):
        try:
            plans[day] = schedule_day(calendar, settings, day, persist=config.persist_to_calendar)
        except CalendarError as e:
            logger.error(f"Aborted scheduling for {day.isoformat()}: {e}")
            plans[day] = DayPlan(day=day, errors=[e])
    return plans


def preview_week(
    config: Config,
    calendar: CalendarRepository | None = None,
    settings_store: SettingsStore | None = None,
    today: date | None = None,
) -> dict[date, DayPlan]:
    """Plan today through Saturday against live commitments without writing anything."""
    settings = load_settings(config, settings_store)
    calendar = calendar or get_calendar(config)
    today = today or datetime.now(settings.tz).date()
    return plan_week(settings, today, lambda day: fetch_day(calendar, settings, day))


def preview_day(
    config: Config,
    day: date,
    calendar: CalendarRepository | None = None,
    settings_store: SettingsStore | None = None,
) -> DayPlan:
    """Plan a single day without writing anything."""
    settings = load_settings(config, settings_store)
    calendar = calendar or get_calendar(config)
    return plan_day(settings, day, fetch_day(calendar, settings, day))
