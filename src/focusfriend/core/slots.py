"""Slot allocation policies built on gap finding."""

from dataclasses import dataclass
from datetime import timedelta
from enum import Enum
from typing import Iterable

from .intervals import TimeInterval, find_gaps

# Tag key stored on every event focusfriend creates. Changing it (or the
# BlockKind values) orphans events created by earlier runs: they would no
# longer be found and replaced when a day is rescheduled.
ORIGIN_MARKER = "focusfriend"


class BlockKind(Enum):
    """Kind of protected block. Values are the persisted tag values."""

    BREAK = "lunch"
    FOCUS = "focus"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]


_DISPLAY_NAMES = {
    BlockKind.BREAK: "Lunch",
    BlockKind.FOCUS: "Focus Time",
}


@dataclass(frozen=True)
class Block(TimeInterval):
    """A protected block to be put on the calendar."""

    kind: BlockKind = BlockKind.FOCUS

    @property
    def label(self) -> str:
        return f"⏰ {self.kind.display_name} ⏰ (via Focusfriend)"


def _qualifying_gaps(
    bound: TimeInterval,
    busy: Iterable[TimeInterval],
    min_duration: timedelta,
) -> list[TimeInterval]:
    return [g for g in find_gaps(bound, busy) if g.duration >= min_duration]


def best_single_slot(
    bound: TimeInterval,
    busy: Iterable[TimeInterval],
    min_duration: timedelta,
    max_duration: timedelta,
    kind: BlockKind = BlockKind.BREAK,
) -> Block | None:
    """
    Pick the longest free gap in bound, capped to max_duration.

    Gaps shorter than min_duration never qualify. When several gaps share the
    longest duration the earliest one wins. A gap longer than max_duration is
    truncated from its start.

    Returns None when nothing qualifies.
    """
    longest = None
    for gap in _qualifying_gaps(bound, busy, min_duration):
        if longest is None or gap.duration > longest.duration:
            longest = gap

    if longest is None:
        return None

    end = min(longest.end, longest.start + max_duration)
    return Block(longest.start, end, kind)


def all_qualifying_slots(
    bound: TimeInterval,
    busy: Iterable[TimeInterval],
    min_duration: timedelta,
    kind: BlockKind = BlockKind.FOCUS,
) -> list[Block]:
    """One block per free gap of at least min_duration, untruncated, in order."""
    return [Block(g.start, g.end, kind) for g in _qualifying_gaps(bound, busy, min_duration)]
