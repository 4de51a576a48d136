"""Day and week planning - pure, no I/O dependencies."""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta
from typing import Callable, Iterable

from .intervals import BusyInterval, InvalidBoundError, TimeInterval
from .settings import Settings
from .slots import Block, BlockKind, all_qualifying_slots, best_single_slot

logger = logging.getLogger(__name__)

FOCUS_MIN_DURATION = timedelta(hours=2)
BREAK_MIN_DURATION = timedelta(minutes=20)
BREAK_MAX_DURATION = timedelta(minutes=60)

# date.weekday() numbering; weeks run Sunday to Saturday
REST_DAY = 6
LAST_DAY_OF_WEEK = 5


@dataclass
class DayPlan:
    """Blocks planned for one day, break block first."""

    day: date
    blocks: list[Block] = field(default_factory=list)
    errors: list[Exception] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    @property
    def break_block(self) -> Block | None:
        for block in self.blocks:
            if block.kind is BlockKind.BREAK:
                return block
        return None

    @property
    def focus_blocks(self) -> list[Block]:
        return [b for b in self.blocks if b.kind is BlockKind.FOCUS]


def _at_hour(day: date, hour: int, settings: Settings) -> datetime:
    return datetime.combine(day, time(hour, 0), tzinfo=settings.tz)


def workday_bound(settings: Settings, day: date) -> TimeInterval:
    """Working hours for a day. Raises InvalidBoundError if they are inverted."""
    return TimeInterval(
        _at_hour(day, settings.workday_start_hour, settings),
        _at_hour(day, settings.workday_end_hour, settings),
    )


def break_window_bound(settings: Settings, day: date) -> TimeInterval:
    """Window the break may be placed in. Raises InvalidBoundError if inverted."""
    return TimeInterval(
        _at_hour(day, settings.lunchtime_start_hour, settings),
        _at_hour(day, settings.lunchtime_end_hour, settings),
    )


def plan_day(
    settings: Settings,
    day: date,
    busy: Iterable[BusyInterval],
    *,
    break_min: timedelta = BREAK_MIN_DURATION,
    break_max: timedelta = BREAK_MAX_DURATION,
    focus_min: timedelta = FOCUS_MIN_DURATION,
) -> DayPlan:
    """
    Plan the break block and focus blocks for one day.

    Pure function - no I/O.

    Blocks focusfriend created on earlier runs are ignored, so planning the
    same day twice against the same commitments gives the same result. The
    break is placed first and focus blocks are planned around it.

    An inverted workday yields a plan with no blocks; an inverted break
    window skips only the break. Either way the InvalidBoundError is
    recorded on the plan's errors.
    """
    plan = DayPlan(day=day)

    try:
        workday = workday_bound(settings, day)
    except InvalidBoundError as e:
        logger.error(f"Invalid workday for {day.isoformat()}: {e}")
        plan.errors.append(e)
        return plan

    occupied: list[TimeInterval] = [b for b in busy if not b.is_own]

    try:
        window = break_window_bound(settings, day)
    except InvalidBoundError as e:
        logger.error(f"Invalid break window for {day.isoformat()}: {e}")
        plan.errors.append(e)
    else:
        break_block = best_single_slot(window, occupied, break_min, break_max, BlockKind.BREAK)
        if break_block:
            plan.blocks.append(break_block)
            # focus time must not overlap the break
            occupied.append(break_block)

    plan.blocks.extend(all_qualifying_slots(workday, occupied, focus_min, BlockKind.FOCUS))
    return plan


def week_dates(today: date) -> list[date]:
    """Dates from today through Saturday, skipping Sunday."""
    days_left = (LAST_DAY_OF_WEEK - today.weekday()) % 7
    dates = [today + timedelta(days=i) for i in range(days_left + 1)]
    return [d for d in dates if d.weekday() != REST_DAY]


def plan_week(
    settings: Settings,
    today: date,
    busy_for: Callable[[date], Iterable[BusyInterval]],
) -> dict[date, DayPlan]:
    """Plan every remaining day of the week, fetching each day's commitments via busy_for."""
    return {day: plan_day(settings, day, busy_for(day)) for day in week_dates(today)}
