"""Tests for time and date labels."""

from datetime import date, datetime
from zoneinfo import ZoneInfo

import pytest

from tzoverlap.output.formatting import (
    day_abbreviation,
    format_date_label,
    format_decimal_time,
    format_duration,
    format_slot,
    get_time_options,
    timezone_offset_label,
)


class TestFormatSlot:
    """Tests for format_slot."""

    @pytest.mark.parametrize(
        "hour,minutes,expected",
        [
            (0, 0, "12AM"),
            (0, 30, "12:30AM"),
            (9, 0, "9AM"),
            (9, 30, "9:30AM"),
            (12, 0, "12PM"),
            (13, 45, "1:45PM"),
            (23, 30, "11:30PM"),
        ],
    )
    def test_labels(self, hour, minutes, expected):
        assert format_slot(hour, minutes) == expected

    def test_single_digit_minutes_are_padded(self):
        assert format_slot(9, 5) == "9:05AM"


class TestTimeOptions:
    """Tests for get_time_options and format_decimal_time."""

    def test_forty_eight_options(self):
        options = get_time_options()
        assert len(options) == 48
        assert [o.value for o in options] == [i * 0.5 for i in range(48)]

    def test_first_and_last(self):
        options = get_time_options()
        assert options[0].label == "12:00 AM"
        assert options[-1].value == 23.5
        assert options[-1].label == "11:30 PM"

    @pytest.mark.parametrize(
        "value,expected",
        [(9, "9:00 AM"), (12, "12:00 PM"), (17.5, "5:30 PM"), (0.5, "12:30 AM")],
    )
    def test_decimal_labels(self, value, expected):
        assert format_decimal_time(value) == expected


class TestDateLabels:
    """Tests for date formatting."""

    def test_day_abbreviation(self):
        assert day_abbreviation(date(2025, 1, 7)) == "Tue"

    def test_date_label(self):
        assert format_date_label(date(2025, 1, 7)) == "Tue, Jan 7"
        assert format_date_label(date(2025, 12, 25)) == "Thu, Dec 25"


class TestFormatDuration:
    """Tests for format_duration."""

    @pytest.mark.parametrize(
        "minutes,expected",
        [(30, "30m"), (60, "1h"), (90, "1h 30m"), (1440, "24h")],
    )
    def test_durations(self, minutes, expected):
        assert format_duration(minutes) == expected


class TestTimezoneOffsetLabel:
    """Tests for timezone_offset_label."""

    WINTER = datetime(2025, 1, 7, 12, 0, tzinfo=ZoneInfo("UTC"))

    @pytest.mark.parametrize(
        "timezone,expected",
        [
            ("UTC", "UTC+00:00"),
            ("Asia/Tokyo", "UTC+09:00"),
            ("America/New_York", "UTC-05:00"),
            ("Asia/Kolkata", "UTC+05:30"),
            ("Pacific/Chatham", "UTC+13:45"),
        ],
    )
    def test_offsets(self, timezone, expected):
        assert timezone_offset_label(timezone, self.WINTER) == expected

    def test_daylight_saving(self):
        summer = datetime(2025, 7, 7, 12, 0, tzinfo=ZoneInfo("UTC"))
        assert timezone_offset_label("America/New_York", summer) == "UTC-04:00"

    def test_naive_datetime_is_utc(self):
        naive = datetime(2025, 1, 7, 12, 0)
        assert timezone_offset_label("Asia/Tokyo", naive) == "UTC+09:00"
