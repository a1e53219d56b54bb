"""Unit tests for time utility functions.

This module tests the low-level time arithmetic used to derive entry
durations from extracted start and end times.
"""

import pytest

from timesheet_extractor.calculators.time_utils import (
    ParsedTime,
    calculate_duration,
    convert_time_to_minutes,
    format_duration,
    parse_duration_to_hours,
    parse_time,
)


class TestParseTime:
    """Test parsing of HH:MM clock times."""

    def test_valid_time(self):
        """Test a regular zero-padded time."""
        assert parse_time("09:30") == ParsedTime(9, 30)

    def test_single_digit_hour(self):
        """Test that a single-digit hour is accepted."""
        assert parse_time("9:05") == ParsedTime(9, 5)

    def test_strips_non_time_characters(self):
        """Test that whitespace and suffixes like 'Uhr' are ignored."""
        assert parse_time(" 17:45 Uhr") == ParsedTime(17, 45)

    def test_midnight_and_end_of_day(self):
        """Test the bounds of the 24-hour clock."""
        assert parse_time("00:00") == ParsedTime(0, 0)
        assert parse_time("23:59") == ParsedTime(23, 59)

    def test_hour_out_of_range(self):
        """Test that 24:00 is rejected."""
        assert parse_time("24:00") is None

    def test_minute_out_of_range(self):
        """Test that 12:60 is rejected."""
        assert parse_time("12:60") is None

    @pytest.mark.parametrize("value", ["", "9", "930", "9:5", "123:00", "abc", "12:345"])
    def test_malformed_values(self, value):
        """Test that malformed strings return None instead of raising."""
        assert parse_time(value) is None

    def test_non_ascii_digits_rejected(self):
        """Test that only ASCII digits count as time digits."""
        assert parse_time("٠٩:٣٠") is None
        assert parse_time("０９:30") is None

    def test_non_string_input(self):
        """Test that non-string input returns None."""
        assert parse_time(None) is None
        assert parse_time(930) is None


class TestFormatting:
    """Test minute conversions and H:MM formatting."""

    def test_convert_time_to_minutes(self):
        """Test conversion to minutes since midnight."""
        assert convert_time_to_minutes(ParsedTime(9, 30)) == 570
        assert convert_time_to_minutes(ParsedTime(23, 59)) == 1439

    def test_format_duration_pads_minutes_only(self):
        """Test that hours are unpadded and minutes have two digits."""
        assert format_duration(510) == "8:30"
        assert format_duration(5) == "0:05"
        assert format_duration(0) == "0:00"


class TestCalculateDuration:
    """Test duration calculation between two times."""

    def test_day_shift(self):
        """Test a normal day shift."""
        assert calculate_duration("09:00", "17:30") == "8:30"

    def test_overnight_shift(self):
        """Test that an end before the start crosses midnight."""
        assert calculate_duration("22:00", "06:00") == "8:00"

    def test_overnight_ending_at_midnight(self):
        """Test an overnight shift ending exactly at midnight."""
        assert calculate_duration("22:00", "00:00") == "2:00"

    def test_same_start_and_end(self):
        """Test that identical times give a zero duration."""
        assert calculate_duration("09:00", "09:00") == "0:00"

    def test_malformed_start(self):
        """Test that an unparseable start gives 0:00."""
        assert calculate_duration("garbage", "06:00") == "0:00"

    def test_malformed_end(self):
        """Test that an unparseable end gives 0:00."""
        assert calculate_duration("09:00", "25:00") == "0:00"


class TestParseDurationToHours:
    """Test H:MM duration to fractional hours conversion."""

    def test_half_hour(self):
        """Test a duration with minutes."""
        assert parse_duration_to_hours("1:30") == 1.5

    def test_whole_hours(self):
        """Test a duration without minutes."""
        assert parse_duration_to_hours("2:00") == 2.0

    def test_large_duration_not_clamped(self):
        """Test that durations of 24 hours and more are returned as-is."""
        assert parse_duration_to_hours("24:00") == 24.0
        assert parse_duration_to_hours("30:15") == 30.25

    def test_each_half_parsed_independently(self):
        """Test that an invalid half counts as 0."""
        assert parse_duration_to_hours("x:30") == 0.5
        assert parse_duration_to_hours("2:xx") == 2.0

    def test_trailing_text_ignored(self):
        """Test that each half is read from its leading digits."""
        assert parse_duration_to_hours("1:30min") == 1.5
        assert parse_duration_to_hours("2h:15") == 2.25
        assert parse_duration_to_hours(" 3 : 45") == 3.75

    def test_non_ascii_digits_count_as_zero(self):
        """Test that non-ASCII digits are not parsed as numbers."""
        assert parse_duration_to_hours("٢:30") == 0.5

    def test_missing_minutes(self):
        """Test that a value without a colon is read as hours."""
        assert parse_duration_to_hours("3") == 3.0

    @pytest.mark.parametrize(
        "start,end",
        [("09:00", "17:30"), ("22:00", "06:00"), ("00:00", "23:59"), ("13:07", "13:08")],
    )
    def test_round_trip_with_calculate_duration(self, start, end):
        """Test that the hours match the minute difference of the times."""
        start_minutes = convert_time_to_minutes(parse_time(start))
        end_minutes = convert_time_to_minutes(parse_time(end))
        expected_minutes = (end_minutes - start_minutes) % (24 * 60)

        hours = parse_duration_to_hours(calculate_duration(start, end))

        assert hours == pytest.approx(expected_minutes / 60)
