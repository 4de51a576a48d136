"""Google Sheets settings store adapter."""

import logging

from focusfriend.config import DEFAULT_SETTINGS_RANGE

from .google_auth import AuthenticationError, GoogleCredentials, transport_errors

logger = logging.getLogger(__name__)


class SettingsStoreError(RuntimeError):
    """Raised when settings cannot be read from the store."""

    pass


class GoogleSheetsSettingsStore:
    """
    Reads settings from a two-column key/value range of a spreadsheet.

    Implements SettingsStore protocol. Rows with a blank key are ignored;
    rows without a value read as blank.
    """

    def __init__(
        self,
        credentials: GoogleCredentials,
        spreadsheet_id: str,
        cell_range: str = DEFAULT_SETTINGS_RANGE,
    ):
        self.credentials = credentials
        self.spreadsheet_id = spreadsheet_id
        self.cell_range = cell_range

    def _build_service(self):
        try:
            return self.credentials.build_service("sheets", "v4")
        except (AuthenticationError, *transport_errors()) as e:
            raise SettingsStoreError(str(e)) from e

    def read_values(self) -> dict[str, str]:
        """Read setting rows from the sheet."""
        from googleapiclient.errors import HttpError

        service = self._build_service()
        try:
            result = (
                service.spreadsheets()
                .values()
                .get(spreadsheetId=self.spreadsheet_id, range=self.cell_range)
                .execute()
            )
        except (HttpError, *transport_errors()) as e:
            raise SettingsStoreError(f"Failed to read settings sheet: {e}") from e

        values = {}
        for row in result.get("values", []):
            if not row:
                continue
            key = str(row[0]).strip()
            if not key:
                continue
            values[key] = str(row[1]).strip() if len(row) > 1 else ""

        logger.debug(f"Read {len(values)} settings from sheet {self.spreadsheet_id}")
        return values
