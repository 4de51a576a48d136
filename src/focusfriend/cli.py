"""Focusfriend CLI - protects lunch and focus time on your calendar."""

import json
import logging
import sys
from datetime import datetime

import click

from .adapters.google_calendar import CalendarError
from .adapters.google_sheets import SettingsStoreError
from .config import load_config
from .core.planner import DayPlan
from .workflows import (
    get_calendar,
    get_credentials,
    load_settings,
    preview_day,
    preview_week,
    schedule_week,
)

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@click.group()
@click.version_option(package_name="focusfriend")
@click.option("--debug", is_flag=True, help="Enable debug logging")
def main(debug: bool):
    """Focusfriend - schedules lunch and focus time around your meetings."""
    logging.basicConfig(format=LOG_FORMAT, level=logging.DEBUG if debug else logging.INFO)


def _plan_to_dict(plan: DayPlan) -> dict:
    return {
        "date": plan.day.isoformat(),
        "blocks": [
            {
                "kind": b.kind.value,
                "label": b.label,
                "start": b.start.isoformat(),
                "end": b.end.isoformat(),
            }
            for b in plan.blocks
        ],
        "errors": [str(e) for e in plan.errors],
    }


def _show_plans(plans: list[DayPlan], as_json: bool) -> None:
    """Shared plan display logic."""
    if as_json:
        click.echo(json.dumps([_plan_to_dict(p) for p in plans], indent=2))
        return

    for i, plan in enumerate(plans):
        if i:
            click.echo()
        click.echo(f"### {plan.day.strftime('%A, %B %d')}")
        if not plan.blocks and plan.ok:
            click.echo("  No free slots.")
        for block in plan.blocks:
            click.echo(f"  {block.kind.display_name:11} {block.format()}")
        for error in plan.errors:
            click.echo(f"  ✗ {error}", err=True)


def _exit_on_errors(plans: list[DayPlan]) -> None:
    failed = [p.day.isoformat() for p in plans if not p.ok]
    if failed:
        click.echo(f"Error: planning failed for {', '.join(failed)}", err=True)
        sys.exit(1)


@main.command()
def schedule():
    """Schedule lunch and focus time for the rest of the week."""
    config = load_config()
    try:
        plans = schedule_week(config)
    except (CalendarError, SettingsStoreError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if not config.persist_to_calendar:
        click.echo("PERSIST_TO_CALENDAR is off - nothing was written.\n")
    _show_plans(list(plans.values()), as_json=False)
    _exit_on_errors(list(plans.values()))


@main.command()
@click.option("--date", "-d", "target_date", default=None, type=click.DateTime(formats=["%Y-%m-%d"]),
              help="Single date to plan (YYYY-MM-DD), defaults to the rest of the week")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def preview(target_date: datetime | None, as_json: bool):
    """Show the blocks that would be scheduled, without writing them."""
    config = load_config()
    try:
        if target_date:
            plans = [preview_day(config, target_date.date())]
        else:
            plans = list(preview_week(config).values())
    except (CalendarError, SettingsStoreError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    _show_plans(plans, as_json)
    _exit_on_errors(plans)


@main.command("settings")
def show_settings():
    """Show the resolved planning settings."""
    config = load_config()
    try:
        settings = load_settings(config)
    except SettingsStoreError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    source = f"sheet {config.settings_sheet_id}" if config.settings_sheet_id else "focusfriend.conf"
    click.echo(f"Settings (from {source}, {settings.timezone}):")
    click.echo(f"  Workday:      {settings.workday_start_hour:02d}:00-{settings.workday_end_hour:02d}:00")
    click.echo(f"  Lunch window: {settings.lunchtime_start_hour:02d}:00-{settings.lunchtime_end_hour:02d}:00")


@main.command()
def auth():
    """Authenticate with Google Calendar and Sheets."""
    config = load_config()

    if not config.google_client_secret_file:
        click.echo("GOOGLE_CLIENT_SECRET_FILE not set in focusfriend.conf", err=True)
        sys.exit(1)

    credentials = get_credentials(config)
    if credentials.authenticate():
        click.echo(f"✓ Token saved to {credentials.token_path}")
    else:
        click.echo("✗ Authentication failed", err=True)
        sys.exit(1)


@main.command()
def calendars():
    """List the calendars available to CALENDAR_ID."""
    config = load_config()
    try:
        entries = get_calendar(config).list_calendars()
    except CalendarError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    for access, name, cal_id in entries:
        click.echo(f"  {access:16} {name} ({cal_id})")


def _parse_daemon_time(value: str) -> tuple[int, int]:
    hour_str, _, minute_str = value.partition(":")
    hour, minute = int(hour_str), int(minute_str or 0)
    if not (0 <= hour <= 23 and 0 <= minute <= 59):
        raise ValueError(value)
    return hour, minute


def run_scheduled_pass() -> None:
    """One daemon pass. Failures are logged so the daemon keeps running."""
    config = load_config()
    try:
        plans = schedule_week(config)
    except (CalendarError, SettingsStoreError) as e:
        logger.error(f"Scheduling pass failed: {e}")
        return

    failed = [d.isoformat() for d, p in plans.items() if not p.ok]
    if failed:
        logger.error(f"Scheduling pass finished with errors for {', '.join(failed)}")
    else:
        logger.info(f"Scheduling pass finished for {len(plans)} days")


@main.command()
def daemon():
    """Run a scheduling pass every day at DAEMON_TIME."""
    from apscheduler.schedulers.blocking import BlockingScheduler
    from apscheduler.triggers.cron import CronTrigger

    config = load_config()
    try:
        hour, minute = _parse_daemon_time(config.daemon_time)
    except ValueError:
        click.echo(f"Error: invalid DAEMON_TIME {config.daemon_time!r}, expected HH:MM", err=True)
        sys.exit(1)

    scheduler = BlockingScheduler(timezone=config.timezone)
    scheduler.add_job(
        run_scheduled_pass,
        CronTrigger(hour=hour, minute=minute),
        max_instances=1,
        coalesce=True,
    )
    logger.info(f"Scheduling pass runs daily at {hour:02d}:{minute:02d} ({config.timezone})")

    click.echo("Press Ctrl+C to stop")
    try:
        scheduler.start()
    except KeyboardInterrupt:
        click.echo("\nDaemon stopped.")


if __name__ == "__main__":
    main()
