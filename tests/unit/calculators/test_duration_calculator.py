"""Unit tests for entry normalization."""

from timesheet_extractor.calculators.duration_calculator import (
    normalize_entry,
    process_entries,
    recalculate_entry,
)
from timesheet_extractor.models.timesheet import RawEntry, TimesheetEntry


def _raw(date="01.01.24", start="09:00", end="17:00"):
    return RawEntry(date=date, start_time=start, end_time=end)


class TestProcessEntries:
    """Test attaching durations to extracted entries."""

    def test_attaches_duration(self):
        """Test that each entry gets its computed duration."""
        result = process_entries([_raw(start="09:00", end="17:30")])

        assert len(result) == 1
        assert isinstance(result[0], TimesheetEntry)
        assert result[0].duration == "8:30"

    def test_preserves_fields_and_order(self):
        """Test that date, times and order are unchanged."""
        raw = [_raw("01.01.24", "08:00", "12:00"), _raw("02.01.24", "13:00", "18:15")]

        result = process_entries(raw)

        assert [e.date for e in result] == ["01.01.24", "02.01.24"]
        assert [e.start_time for e in result] == ["08:00", "13:00"]
        assert [e.duration for e in result] == ["4:00", "5:15"]

    def test_no_filtering_of_malformed_entries(self):
        """Test that malformed entries are kept with a 0:00 duration."""
        result = process_entries([_raw(start="??", end="17:00"), _raw()])

        assert len(result) == 2
        assert result[0].duration == "0:00"

    def test_accepts_wire_format_dicts(self):
        """Test that dicts with camelCase keys are accepted."""
        result = process_entries(
            [{"date": "01.01.24", "startTime": "22:00", "endTime": "06:00"}]
        )

        assert result[0].start_time == "22:00"
        assert result[0].duration == "8:00"

    def test_idempotent(self):
        """Test that normalizing twice gives the same result."""
        once = process_entries([_raw(start="07:45", end="16:10")])
        twice = process_entries(once)

        assert twice == once

    def test_recomputes_stale_duration(self):
        """Test that a wrong stored duration is replaced."""
        entry = TimesheetEntry(
            date="01.01.24", start_time="09:00", end_time="10:00", duration="5:00"
        )

        assert normalize_entry(entry).duration == "1:00"

    def test_keeps_employee_tag(self):
        """Test that the employee tag survives normalization."""
        entry = TimesheetEntry(
            date="01.01.24", start_time="09:00", end_time="10:00", employee="Anna"
        )

        assert normalize_entry(entry).employee == "Anna"

    def test_empty_input(self):
        """Test that no entries give no entries."""
        assert process_entries([]) == []


class TestRecalculateEntry:
    """Test applying a user edit to one entry."""

    def test_edit_end_time(self):
        """Test that changing the end time updates the duration."""
        entry = process_entries([_raw(start="09:00", end="17:00")])[0]

        updated = recalculate_entry(entry, end_time="18:15")

        assert updated.end_time == "18:15"
        assert updated.duration == "9:15"

    def test_original_unchanged(self):
        """Test that the edited entry is a new object."""
        entry = process_entries([_raw()])[0]

        recalculate_entry(entry, start_time="10:00")

        assert entry.start_time == "09:00"
        assert entry.duration == "8:00"

    def test_none_keeps_current_values(self):
        """Test that fields passed as None are not changed."""
        entry = process_entries([_raw("05.02.24", "08:00", "12:00")])[0]

        updated = recalculate_entry(entry, date=None, start_time="07:00")

        assert updated.date == "05.02.24"
        assert updated.duration == "5:00"

    def test_edit_to_malformed_time(self):
        """Test that an invalid edit degrades to 0:00 instead of failing."""
        entry = process_entries([_raw()])[0]

        assert recalculate_entry(entry, start_time="nine").duration == "0:00"
