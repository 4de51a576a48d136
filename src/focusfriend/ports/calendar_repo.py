"""Calendar repository interface."""

from datetime import datetime
from typing import Protocol

from focusfriend.core.intervals import BusyInterval
from focusfriend.core.slots import Block


class CalendarRepository(Protocol):
    """Interface for reading commitments and writing blocks to any calendar backend."""

    def fetch_commitments(self, start: datetime, end: datetime) -> list[BusyInterval]:
        """Fetch non-declined timed events between start and end."""
        ...

    def create_event(self, block: Block) -> str:
        """Create a tagged event for a block. Returns the event id."""
        ...

    def delete_event(self, event_id: str) -> None:
        """Delete a previously created event."""
        ...
