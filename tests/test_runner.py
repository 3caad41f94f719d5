"""End-to-end tests for a synchronization run."""

from datetime import datetime, timedelta

import pytest

from conftest import EASTERN, FakeCalendar, FakeSpreadsheet, foreign_body, managed_body
from sports_sync.errors import BackendError, HeaderError
from sports_sync.runner import run_sync


class TestRunSync:
    """Tests for reading both sources and reconciling."""

    def test_first_run_creates_future_events(self, settings, spreadsheet, calendar, now):
        result = run_sync(settings, spreadsheet, calendar, now=now)

        assert result.summary() == "Missing: 3, Extra: 0, Updated: 0"
        assert result.created == 3
        assert sorted(body["summary"] for body in calendar.entries.values()) == [
            "Baseball",
            "Men's Ice Hockey",
            "Softball",
        ]

    def test_second_run_is_idempotent(self, settings, spreadsheet, calendar, now):
        run_sync(settings, spreadsheet, calendar, now=now)
        calendar.calls.clear()

        result = run_sync(settings, spreadsheet, calendar, now=now)

        assert calendar.calls == []
        assert result.summary() == "Missing: 0, Extra: 0, Updated: 0"
        assert result.unchanged == 3

    def test_spreadsheet_edit_updates_entry(self, settings, spreadsheet, calendar, now):
        run_sync(settings, spreadsheet, calendar, now=now)
        calendar.calls.clear()

        spreadsheet.ranges["September!A:ZZ"][1][4] = "Carol"
        result = run_sync(settings, spreadsheet, calendar, now=now)

        assert result.changed == 1
        assert [op for op, _ in calendar.calls] == ["update"]

    def test_removed_row_deletes_entry(self, settings, spreadsheet, calendar, now):
        run_sync(settings, spreadsheet, calendar, now=now)
        calendar.calls.clear()

        del spreadsheet.ranges["September!A:ZZ"][2]
        result = run_sync(settings, spreadsheet, calendar, now=now)

        assert result.extra == 1
        assert [op for op, _ in calendar.calls] == ["delete"]
        assert "Men's Ice Hockey" not in {b["summary"] for b in calendar.entries.values()}

    def test_rescheduled_row_is_delete_plus_create(self, settings, spreadsheet, calendar, now):
        """Test that a time change moves the event to a new identity key."""
        run_sync(settings, spreadsheet, calendar, now=now)
        calendar.calls.clear()

        spreadsheet.ranges["September!A:ZZ"][1][1] = "3 p.m."
        result = run_sync(settings, spreadsheet, calendar, now=now)

        assert result.missing == 1
        assert result.extra == 1
        assert [op for op, _ in calendar.calls] == ["create", "delete"]

    def test_foreign_entries_untouched(self, settings, spreadsheet, calendar, now):
        start = datetime(2024, 9, 9, 13, 0, tzinfo=EASTERN)
        foreign_id = calendar.add(foreign_body("Baseball", start, start + timedelta(hours=2)))

        run_sync(settings, spreadsheet, calendar, now=now)

        assert foreign_id in calendar.entries
        assert all(entry_id != foreign_id for _, entry_id in calendar.calls)

    def test_in_progress_entry_survives(self, settings, spreadsheet, calendar, now):
        """Test that an entry running at the reference instant is not deleted."""
        started = now - timedelta(minutes=30)
        running_id = calendar.add(managed_body(settings, "Baseball", started, ["Umpire: Alice"]))

        result = run_sync(settings, spreadsheet, calendar, now=now)

        assert running_id in calendar.entries
        assert result.extra == 0

    def test_past_rows_not_created(self, settings, spreadsheet, calendar, now):
        run_sync(settings, spreadsheet, calendar, now=now)
        starts = {body["start"]["dateTime"] for body in calendar.entries.values()}
        assert "2024-08-31T13:00:00-04:00" not in starts

    def test_dry_run_leaves_calendar_alone(self, settings, spreadsheet, calendar, now):
        result = run_sync(settings, spreadsheet, calendar, now=now, dry_run=True)

        assert calendar.entries == {}
        assert result.missing == 3
        assert result.dry_run

    def test_spreadsheet_read_failure_writes_nothing(self, settings, calendar, now):
        spreadsheet = FakeSpreadsheet({})
        calendar.add(
            managed_body(settings, "Baseball", datetime(2024, 9, 9, 13, 0, tzinfo=EASTERN), [])
        )

        with pytest.raises(BackendError):
            run_sync(settings, spreadsheet, calendar, now=now)

        assert calendar.calls == []
        assert len(calendar.entries) == 1

    def test_calendar_read_failure_writes_nothing(self, settings, spreadsheet, now):
        calendar = FakeCalendar()
        calendar.fail_list = True

        with pytest.raises(BackendError):
            run_sync(settings, spreadsheet, calendar, now=now)

        assert calendar.calls == []

    def test_malformed_tab_aborts(self, settings, spreadsheet, calendar, now):
        spreadsheet.ranges["September!A:ZZ"][0] = ["When", "Time", "Sport"]

        with pytest.raises(HeaderError):
            run_sync(settings, spreadsheet, calendar, now=now)

        assert calendar.calls == []

    def test_defaults_to_current_time(self, settings, spreadsheet, calendar):
        """Test that omitting `now` uses the clock (2024 games are all past)."""
        result = run_sync(settings, spreadsheet, calendar)
        assert result.missing == 0
