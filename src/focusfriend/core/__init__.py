"""Functional core - pure planning logic with no I/O."""

from .intervals import BusyInterval, Gap, InvalidBoundError, TimeInterval, find_gaps, merge_intervals
from .slots import ORIGIN_MARKER, Block, BlockKind, all_qualifying_slots, best_single_slot
from .settings import SETTING_KEYS, Settings, parse_hour
from .planner import DayPlan, plan_day, plan_week, week_dates

__all__ = [
    # Intervals
    "TimeInterval",
    "BusyInterval",
    "Gap",
    "InvalidBoundError",
    "find_gaps",
    "merge_intervals",
    # Slots
    "ORIGIN_MARKER",
    "Block",
    "BlockKind",
    "best_single_slot",
    "all_qualifying_slots",
    # Settings
    "SETTING_KEYS",
    "Settings",
    "parse_hour",
    # Planning
    "DayPlan",
    "plan_day",
    "plan_week",
    "week_dates",
]
