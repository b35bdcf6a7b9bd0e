"""Tests for wall-clock helpers."""

from datetime import date, datetime, time

from app.utils.time_utils import (
    format_minutes,
    minutes_of,
    parse_clock,
    parse_date,
    to_time,
    weekday_index,
)


class TestParseDate:
    """Tests for parse_date."""

    def test_iso_string(self):
        """Should parse YYYY-MM-DD."""
        assert parse_date("2030-01-07") == date(2030, 1, 7)

    def test_passes_dates_through(self):
        """Should accept date and datetime values."""
        assert parse_date(date(2030, 1, 7)) == date(2030, 1, 7)
        assert parse_date(datetime(2030, 1, 7, 15, 30)) == date(2030, 1, 7)

    def test_invalid_returns_none(self):
        """Should return None instead of raising."""
        assert parse_date("2030-13-40") is None
        assert parse_date("not a date") is None
        assert parse_date("") is None
        assert parse_date(None) is None


class TestParseClock:
    """Tests for parse_clock."""

    def test_hours_and_minutes(self):
        """Should return minutes since midnight."""
        assert parse_clock("00:00") == 0
        assert parse_clock("09:15") == 555
        assert parse_clock("23:59") == 1439

    def test_seconds_are_dropped(self):
        """Should accept the HH:MM:SS form stored by databases."""
        assert parse_clock("10:30:45") == 630

    def test_time_value(self):
        """Should accept datetime.time."""
        assert parse_clock(time(13, 5)) == 785

    def test_invalid_returns_none(self):
        """Should return None for malformed or out of range text."""
        for value in ("24:00", "12:60", "9", "ab:cd", "12:30:99", "", None, 930):
            assert parse_clock(value) is None


class TestConversions:
    """Tests for minute/time conversions."""

    def test_format_is_zero_padded(self):
        """Should produce HH:MM."""
        assert format_minutes(0) == "00:00"
        assert format_minutes(545) == "09:05"
        assert format_minutes(1020) == "17:00"

    def test_to_time_inverts_minutes_of(self):
        """Should map minutes back onto time values."""
        assert to_time(555) == time(9, 15)
        assert minutes_of(to_time(1439)) == 1439


class TestWeekdayIndex:
    """Tests for weekday_index."""

    def test_sunday_is_zero(self):
        """Should number days 0=Sunday .. 6=Saturday."""
        assert weekday_index(date(2030, 1, 6)) == 0  # Sunday
        assert weekday_index(date(2030, 1, 7)) == 1  # Monday
        assert weekday_index(date(2030, 1, 12)) == 6  # Saturday
