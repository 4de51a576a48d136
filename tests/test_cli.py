"""Tests for the CLI commands."""

import json
from datetime import date, datetime
from unittest.mock import patch, MagicMock
from zoneinfo import ZoneInfo

import httplib2
import pytest
from click.testing import CliRunner
from googleapiclient.errors import HttpError

from focusfriend.adapters.google_calendar import CalendarError
from focusfriend.cli import _parse_daemon_time, main, run_scheduled_pass
from focusfriend.config import Config
from focusfriend.core.intervals import InvalidBoundError
from focusfriend.core.planner import DayPlan
from focusfriend.core.slots import Block, BlockKind

TZ = ZoneInfo("America/New_York")


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def good_plan():
    day = date(2025, 1, 15)
    return DayPlan(
        day=day,
        blocks=[
            Block(datetime(2025, 1, 15, 15, tzinfo=TZ), datetime(2025, 1, 15, 16, tzinfo=TZ), BlockKind.BREAK),
            Block(datetime(2025, 1, 15, 16, tzinfo=TZ), datetime(2025, 1, 15, 20, tzinfo=TZ), BlockKind.FOCUS),
        ],
    )


class TestSchedule:
    @patch("focusfriend.cli.load_config")
    @patch("focusfriend.cli.schedule_week")
    def test_prints_plans(self, mock_schedule, mock_config, runner, good_plan):
        mock_config.return_value = Config()
        mock_schedule.return_value = {good_plan.day: good_plan}

        result = runner.invoke(main, ["schedule"])

        assert result.exit_code == 0
        assert "Wednesday, January 15" in result.output
        assert "Lunch" in result.output
        assert "16:00-20:00 (240 min)" in result.output

    @patch("focusfriend.cli.load_config")
    @patch("focusfriend.cli.schedule_week")
    def test_exits_nonzero_on_day_errors(self, mock_schedule, mock_config, runner):
        mock_config.return_value = Config()
        bad = DayPlan(day=date(2025, 1, 15), errors=[InvalidBoundError("ends before it starts")])
        mock_schedule.return_value = {bad.day: bad}

        result = runner.invoke(main, ["schedule"])

        assert result.exit_code == 1
        assert "planning failed for 2025-01-15" in result.output

    @patch("focusfriend.cli.load_config")
    @patch("focusfriend.cli.schedule_week")
    def test_calendar_error(self, mock_schedule, mock_config, runner):
        mock_config.return_value = Config()
        mock_schedule.side_effect = CalendarError("No token")

        result = runner.invoke(main, ["schedule"])

        assert result.exit_code == 1
        assert "Error: No token" in result.output

    @patch("focusfriend.cli.load_config")
    @patch("focusfriend.cli.schedule_week")
    def test_mentions_dry_run(self, mock_schedule, mock_config, runner, good_plan):
        mock_config.return_value = Config(persist_to_calendar=False)
        mock_schedule.return_value = {good_plan.day: good_plan}

        result = runner.invoke(main, ["schedule"])

        assert "nothing was written" in result.output


class TestPreview:
    @patch("focusfriend.cli.load_config")
    @patch("focusfriend.cli.preview_day")
    def test_single_day_json(self, mock_preview, mock_config, runner, good_plan):
        mock_config.return_value = Config()
        mock_preview.return_value = good_plan

        result = runner.invoke(main, ["preview", "--date", "2025-01-15", "--json"])

        assert result.exit_code == 0
        assert mock_preview.call_args.args[1] == date(2025, 1, 15)
        data = json.loads(result.output)
        assert data[0]["date"] == "2025-01-15"
        assert [b["kind"] for b in data[0]["blocks"]] == ["lunch", "focus"]
        assert data[0]["blocks"][0]["start"] == "2025-01-15T15:00:00-05:00"

    @patch("focusfriend.cli.load_config")
    @patch("focusfriend.cli.preview_day")
    def test_invalid_date_is_usage_error(self, mock_preview, mock_config, runner):
        mock_config.return_value = Config()

        result = runner.invoke(main, ["preview", "--date", "2025-13-40"])

        assert result.exit_code == 2
        assert "Invalid value" in result.output
        mock_preview.assert_not_called()

    @patch("focusfriend.cli.load_config")
    @patch("focusfriend.cli.preview_week")
    def test_week_with_no_slots(self, mock_preview, mock_config, runner):
        mock_config.return_value = Config()
        mock_preview.return_value = {date(2025, 1, 18): DayPlan(day=date(2025, 1, 18))}

        result = runner.invoke(main, ["preview"])

        assert result.exit_code == 0
        assert "No free slots." in result.output


class TestSettingsCommand:
    @patch("focusfriend.cli.load_config")
    def test_shows_resolved_settings(self, mock_config, runner):
        mock_config.return_value = Config(settings={"workday_start_hour": "9"})

        result = runner.invoke(main, ["settings"])

        assert result.exit_code == 0
        assert "Workday:      09:00-20:00" in result.output
        assert "Lunch window: 15:00-17:00" in result.output


class TestAuth:
    @patch("focusfriend.cli.load_config")
    def test_requires_client_secret(self, mock_config, runner):
        mock_config.return_value = Config()
        result = runner.invoke(main, ["auth"])
        assert result.exit_code == 1
        assert "GOOGLE_CLIENT_SECRET_FILE" in result.output


class TestCalendars:
    @patch("focusfriend.cli.load_config")
    @patch("focusfriend.adapters.google_calendar.GoogleCalendarAdapter._build_service")
    def test_lists_calendars(self, mock_build, mock_config, runner):
        mock_config.return_value = Config()
        service = MagicMock()
        mock_build.return_value = service
        service.calendarList().list().execute.return_value = {
            "items": [{"accessRole": "owner", "summary": "me@gmail.com", "id": "primary-id"}]
        }

        result = runner.invoke(main, ["calendars"])

        assert result.exit_code == 0
        assert "me@gmail.com (primary-id)" in result.output

    @patch("focusfriend.cli.load_config")
    @patch("focusfriend.adapters.google_calendar.GoogleCalendarAdapter._build_service")
    def test_forbidden_prints_error(self, mock_build, mock_config, runner):
        mock_config.return_value = Config()
        service = MagicMock()
        mock_build.return_value = service
        service.calendarList().list().execute.side_effect = HttpError(httplib2.Response({"status": 403}), b"")

        result = runner.invoke(main, ["calendars"])

        assert result.exit_code == 1
        assert "Error: Failed to list calendars" in result.output


class TestDaemon:
    def test_parse_daemon_time(self):
        assert _parse_daemon_time("06:00") == (6, 0)
        assert _parse_daemon_time("7") == (7, 0)

    @pytest.mark.parametrize("value", ["25:00", "6:75", "six", ""])
    def test_parse_daemon_time_rejects(self, value):
        with pytest.raises(ValueError):
            _parse_daemon_time(value)

    @patch("focusfriend.cli.load_config")
    def test_invalid_time_exits(self, mock_config, runner):
        mock_config.return_value = Config(daemon_time="later")
        result = runner.invoke(main, ["daemon"])
        assert result.exit_code == 1
        assert "invalid DAEMON_TIME" in result.output

    @patch("focusfriend.cli.load_config")
    @patch("focusfriend.cli.schedule_week")
    def test_scheduled_pass_logs_failures(self, mock_schedule, mock_config, caplog):
        mock_config.return_value = Config()
        mock_schedule.side_effect = CalendarError("boom")

        run_scheduled_pass()

        assert "Scheduling pass failed: boom" in caplog.text
