"""Tests for settings store adapters."""

from unittest.mock import patch, MagicMock

import httplib2
import pytest
from googleapiclient.errors import HttpError

from focusfriend.adapters.config_settings import ConfigSettingsStore
from focusfriend.adapters.google_auth import AuthenticationError, GoogleCredentials
from focusfriend.adapters.google_sheets import GoogleSheetsSettingsStore, SettingsStoreError
from focusfriend.config import Config


@pytest.fixture
def store():
    return GoogleSheetsSettingsStore(GoogleCredentials("/tmp/test"), "sheet-123")


class TestGoogleSheetsSettingsStore:
    @patch("focusfriend.adapters.google_sheets.GoogleSheetsSettingsStore._build_service")
    def test_reads_key_value_rows(self, mock_build, store):
        service = MagicMock()
        mock_build.return_value = service
        service.spreadsheets().values().get().execute.return_value = {
            "values": [
                ["workday_start_hour", "9:00:00 AM"],
                ["workday_end_hour", "17"],
                ["", "ignored"],
                [],
                ["lunchtime_start_hour"],
            ]
        }

        values = store.read_values()

        assert values == {
            "workday_start_hour": "9:00:00 AM",
            "workday_end_hour": "17",
            "lunchtime_start_hour": "",
        }
        kwargs = service.spreadsheets().values().get.call_args.kwargs
        assert kwargs == {"spreadsheetId": "sheet-123", "range": "A1:B100"}

    @patch("focusfriend.adapters.google_sheets.GoogleSheetsSettingsStore._build_service")
    def test_empty_sheet(self, mock_build, store):
        service = MagicMock()
        mock_build.return_value = service
        service.spreadsheets().values().get().execute.return_value = {}

        assert store.read_values() == {}

    @patch("focusfriend.adapters.google_sheets.GoogleSheetsSettingsStore._build_service")
    def test_api_error_raises(self, mock_build, store):
        service = MagicMock()
        mock_build.return_value = service
        service.spreadsheets().values().get().execute.side_effect = HttpError(
            httplib2.Response({"status": 404}), b""
        )

        with pytest.raises(SettingsStoreError):
            store.read_values()

    @patch("focusfriend.adapters.google_sheets.GoogleSheetsSettingsStore._build_service")
    def test_timeout_raises(self, mock_build, store):
        service = MagicMock()
        mock_build.return_value = service
        service.spreadsheets().values().get().execute.side_effect = TimeoutError("read timed out")

        with pytest.raises(SettingsStoreError, match="read timed out"):
            store.read_values()

    def test_missing_credentials_raise(self, store):
        with patch.object(GoogleCredentials, "build_service", side_effect=AuthenticationError("no token")):
            with pytest.raises(SettingsStoreError, match="no token"):
                store.read_values()


class TestConfigSettingsStore:
    def test_reads_config_settings(self):
        config = Config(settings={"workday_start_hour": "10"})
        assert ConfigSettingsStore(config).read_values() == {"workday_start_hour": "10"}

    def test_returns_copy(self):
        config = Config(settings={"workday_start_hour": "10"})
        ConfigSettingsStore(config).read_values()["workday_start_hour"] = "11"
        assert config.settings["workday_start_hour"] == "10"
