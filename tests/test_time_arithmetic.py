"""
Time Arithmetic Tests

Clock parsing, the two minute scales used for ranking, and elapsed hours
across midnight.
"""

import pytest
from datetime import datetime

from sleepcircle.core.exceptions import InvalidTimeError, InvalidDateError
from sleepcircle.utils.constants import ABSENT_TIME
from sleepcircle.utils.time_arithmetic import (
    parse_clock_time,
    to_minutes_since_reference_evening,
    to_minutes_since_midnight,
    elapsed_hours,
    format_clock_time,
    validate_date,
)


class TestParseClockTime:

    def test_parses_zero_padded_time(self):
        assert parse_clock_time("07:05") == (7, 5)
        assert parse_clock_time("23:59") == (23, 59)
        assert parse_clock_time("00:00") == (0, 0)

    @pytest.mark.parametrize("value", ["7:05", "24:00", "12:60", "1230", "ab:cd", "", " 07:05", None, 705])
    def test_rejects_malformed_time(self, value):
        with pytest.raises(InvalidTimeError):
            parse_clock_time(value)

    def test_invalid_time_is_a_value_error(self):
        with pytest.raises(ValueError):
            parse_clock_time("25:00")


class TestMinuteScales:

    def test_evening_times_are_not_rolled_over(self):
        assert to_minutes_since_reference_evening("23:30") == 23 * 60 + 30
        assert to_minutes_since_reference_evening("12:00") == 12 * 60

    def test_morning_times_roll_past_midnight(self):
        assert to_minutes_since_reference_evening("00:45") == (0 + 24) * 60 + 45
        assert to_minutes_since_reference_evening("11:59") == (11 + 24) * 60 + 59

    def test_later_bedtime_is_larger(self):
        assert to_minutes_since_reference_evening("00:45") > to_minutes_since_reference_evening("23:30")

    def test_midnight_scale_has_no_rollover(self):
        assert to_minutes_since_midnight("06:30") == 390
        assert to_minutes_since_midnight("00:45") == 45

    @pytest.mark.parametrize("value", [None, ""])
    def test_absent_time_is_sentinel(self, value):
        assert to_minutes_since_reference_evening(value) == ABSENT_TIME
        assert to_minutes_since_midnight(value) == ABSENT_TIME


class TestElapsedHours:

    def test_crossing_midnight_adds_24(self):
        # 7.25 - 23.5 = -16.25, plus 24
        assert elapsed_hours("23:30", "07:15") == 7.8

    def test_same_day_interval(self):
        assert elapsed_hours("13:00", "15:30") == 2.5

    def test_overnight_whole_hours(self):
        assert elapsed_hours("22:00", "06:00") == 8.0

    def test_equal_times_are_zero(self):
        assert elapsed_hours("23:00", "23:00") == 0.0

    def test_end_just_before_start_wraps(self):
        assert elapsed_hours("07:00", "06:00") == 23.0

    def test_nearly_a_full_day_is_capped(self):
        assert elapsed_hours("00:00", "23:58") == 23.9
        assert elapsed_hours("07:00", "06:59") == 23.9

    @pytest.mark.parametrize("start,end", [
        ("22:00", "06:00"), ("00:30", "08:45"), ("12:00", "11:00"), ("18:20", "18:21"),
        ("00:00", "23:58"), ("07:00", "06:59"),
    ])
    def test_result_is_within_a_day(self, start, end):
        hours = elapsed_hours(start, end)
        assert 0 <= hours < 24

    def test_rejects_malformed_input(self):
        with pytest.raises(InvalidTimeError):
            elapsed_hours("23:30", "7:15")


class TestFormatting:

    def test_format_clock_time_is_zero_padded(self):
        assert format_clock_time(datetime(2024, 1, 1, 6, 5)) == "06:05"

    def test_validate_date(self):
        assert validate_date("2024-03-10") == "2024-03-10"

    @pytest.mark.parametrize("value", ["2024-3-10", "2024-02-30", "10/03/2024", ""])
    def test_validate_date_rejects_bad_dates(self, value):
        with pytest.raises(InvalidDateError):
            validate_date(value)
