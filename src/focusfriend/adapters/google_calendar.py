"""Google Calendar API adapter."""

import logging
from datetime import datetime

from focusfriend.core.intervals import BusyInterval, InvalidBoundError
from focusfriend.core.settings import DEFAULT_TIMEZONE
from focusfriend.core.slots import ORIGIN_MARKER, Block

from .google_auth import AuthenticationError, GoogleCredentials, transport_errors

logger = logging.getLogger(__name__)


class CalendarError(RuntimeError):
    """Raised when the calendar backend cannot be read or written."""

    pass


def _is_declined(item: dict) -> bool:
    for attendee in item.get("attendees", []):
        if attendee.get("self") and attendee.get("responseStatus") == "declined":
            return True
    return False


class GoogleCalendarAdapter:
    """
    Reads commitments from and writes blocks to Google Calendar.

    Implements CalendarRepository protocol. Events created here carry a
    private extended property (ORIGIN_MARKER -> block kind) so later runs
    can find and replace them.
    """

    def __init__(
        self,
        credentials: GoogleCredentials,
        calendar_id: str = "primary",
        timezone: str = DEFAULT_TIMEZONE,
    ):
        self.credentials = credentials
        self.calendar_id = calendar_id
        self.timezone = timezone
        self._service = None

    def _build_service(self):
        """Build (once) a Google Calendar API service."""
        if self._service is None:
            try:
                self._service = self.credentials.build_service("calendar", "v3")
            except (AuthenticationError, *transport_errors()) as e:
                raise CalendarError(str(e)) from e
        return self._service

    def fetch_commitments(self, start: datetime, end: datetime) -> list[BusyInterval]:
        """Fetch non-declined timed events between start and end."""
        from googleapiclient.errors import HttpError

        service = self._build_service()
        items = []
        page_token = None
        try:
            while True:
                result = (
                    service.events()
                    .list(
                        calendarId=self.calendar_id,
                        timeMin=start.isoformat(),
                        timeMax=end.isoformat(),
                        singleEvents=True,
                        orderBy="startTime",
                        timeZone=self.timezone,
                        pageToken=page_token,
                    )
                    .execute()
                )
                items.extend(result.get("items", []))
                page_token = result.get("nextPageToken")
                if not page_token:
                    break
        except (HttpError, *transport_errors()) as e:
            raise CalendarError(f"Failed to fetch events from {self.calendar_id}: {e}") from e

        commitments = []
        for item in items:
            busy = self._parse_item(item)
            if busy is not None:
                commitments.append(busy)
        return commitments

    def _parse_item(self, item: dict) -> BusyInterval | None:
        if item.get("status") == "cancelled" or _is_declined(item):
            return None

        start_raw = item.get("start", {})
        end_raw = item.get("end", {})
        # All-day events carry "date" instead of "dateTime" and don't occupy working time
        if "dateTime" not in start_raw or "dateTime" not in end_raw:
            return None

        private = item.get("extendedProperties", {}).get("private", {})
        try:
            return BusyInterval(
                start=datetime.fromisoformat(start_raw["dateTime"]),
                end=datetime.fromisoformat(end_raw["dateTime"]),
                origin=private.get(ORIGIN_MARKER),
                event_id=item.get("id", ""),
                title=item.get("summary", "Untitled"),
            )
        except (ValueError, InvalidBoundError) as e:
            logger.debug(f"Skipping malformed event {item.get('id')}: {e}")
            return None

    def create_event(self, block: Block) -> str:
        """Create a tagged event for a block. Returns the event id."""
        from googleapiclient.errors import HttpError

        body = {
            "summary": block.label,
            "start": {"dateTime": block.start.isoformat(), "timeZone": self.timezone},
            "end": {"dateTime": block.end.isoformat(), "timeZone": self.timezone},
            "extendedProperties": {"private": {ORIGIN_MARKER: block.kind.value}},
        }
        service = self._build_service()
        try:
            created = service.events().insert(calendarId=self.calendar_id, body=body).execute()
        except (HttpError, *transport_errors()) as e:
            raise CalendarError(f"Failed to create '{block.label}': {e}") from e
        return created["id"]

    def delete_event(self, event_id: str) -> None:
        """Delete a previously created event. Already-deleted events are ignored."""
        from googleapiclient.errors import HttpError

        service = self._build_service()
        try:
            service.events().delete(calendarId=self.calendar_id, eventId=event_id).execute()
        except HttpError as e:
            if e.resp.status in (404, 410):
                logger.warning(f"Event {event_id} already deleted")
                return
            raise CalendarError(f"Failed to delete event {event_id}: {e}") from e
        except transport_errors() as e:
            raise CalendarError(f"Failed to delete event {event_id}: {e}") from e

    def list_calendars(self) -> list[tuple[str, str, str]]:
        """List calendars as (accessRole, summary, id) tuples."""
        from googleapiclient.errors import HttpError

        service = self._build_service()
        try:
            result = service.calendarList().list().execute()
        except (HttpError, *transport_errors()) as e:
            raise CalendarError(f"Failed to list calendars: {e}") from e
        return [
            (entry.get("accessRole", ""), entry.get("summary", ""), entry.get("id", ""))
            for entry in result.get("items", [])
        ]
