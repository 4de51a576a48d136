"""Pure interval logic - gap finding, no I/O dependencies."""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Iterable


class InvalidBoundError(ValueError):
    """Raised when an interval ends before it starts."""

    pass


@dataclass(frozen=True)
class TimeInterval:
    """A span of time between two timezone-aware instants."""

    start: datetime
    end: datetime

    def __post_init__(self):
        if self.end < self.start:
            raise InvalidBoundError(
                f"Interval ends before it starts: {self.start.isoformat()} > {self.end.isoformat()}"
            )

    @property
    def duration(self) -> timedelta:
        return self.end - self.start

    def duration_minutes(self) -> int:
        return int(self.duration.total_seconds() / 60)

    @property
    def is_empty(self) -> bool:
        return self.start == self.end

    def format(self) -> str:
        return f"{self.start.strftime('%H:%M')}-{self.end.strftime('%H:%M')} ({self.duration_minutes()} min)"

    def overlaps(self, other: "TimeInterval") -> bool:
        """Check if the two intervals share a positive stretch of time."""
        return self.start < other.end and other.start < self.end

    def clip(self, bound: "TimeInterval") -> "TimeInterval":
        """Clamp this interval to a bound it overlaps."""
        return TimeInterval(max(self.start, bound.start), min(self.end, bound.end))


@dataclass(frozen=True)
class BusyInterval(TimeInterval):
    """
    A commitment occupying time.

    origin is the block kind tag when the event was created by focusfriend,
    None for anything else on the calendar.
    """

    origin: str | None = None
    event_id: str = ""
    title: str = ""

    @property
    def is_own(self) -> bool:
        return self.origin is not None


# Free time is just an interval; the alias documents intent at call sites.
Gap = TimeInterval


def merge_intervals(intervals: Iterable[TimeInterval]) -> list[TimeInterval]:
    """
    Merge overlapping or touching intervals into maximal disjoint blocks.

    Returns the merged blocks sorted by start.
    """
    items = sorted(intervals, key=lambda i: (i.start, i.end))
    if not items:
        return []

    merged: list[TimeInterval] = []
    cur_start, cur_end = items[0].start, items[0].end

    for item in items[1:]:
        if item.start <= cur_end:
            cur_end = max(cur_end, item.end)
        else:
            merged.append(TimeInterval(cur_start, cur_end))
            cur_start, cur_end = item.start, item.end

    merged.append(TimeInterval(cur_start, cur_end))
    return merged


def find_gaps(bound: TimeInterval, busy: Iterable[TimeInterval]) -> list[Gap]:
    """
    Find the free sub-intervals of a bound.

    Pure function - no I/O.

    Args:
        bound: Outer interval to search within
        busy: Busy intervals, in any order; they may overlap, touch each
              other or extend past the bound

    Returns:
        Gaps sorted by start, pairwise disjoint, each of positive length
        and contained in bound
    """
    # Busy intervals without a positive overlap with the bound occupy nothing
    clipped = [b.clip(bound) for b in busy if not b.is_empty and b.overlaps(bound)]

    gaps: list[Gap] = []
    cursor = bound.start

    for block in merge_intervals(clipped):
        if block.start > cursor:
            gaps.append(TimeInterval(cursor, block.start))
        cursor = max(cursor, block.end)

    if cursor < bound.end:
        gaps.append(TimeInterval(cursor, bound.end))

    return gaps
