# app/utils/time_utils.py
"""
Wall-clock helpers shared by the availability engine and the booking flow.

All times are minutes since local midnight. No timezone is modelled: a
barber's dates and times are compared only against that barber's own
calendar.
"""
from datetime import date, datetime, time
from typing import Optional, Union

MINUTES_PER_DAY = 24 * 60


def parse_date(value: Union[str, date, None]) -> Optional[date]:
    """Parse "YYYY-MM-DD" (or pass a date through). Returns None when invalid."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return datetime.strptime(value.strip(), "%Y-%m-%d").date()
    except (ValueError, AttributeError):
        return None


def parse_clock(value: Union[str, time, None]) -> Optional[int]:
    """Parse "HH:MM" or "HH:MM:SS" into minutes since midnight. None when invalid."""
    if value is None:
        return None
    if isinstance(value, time):
        return minutes_of(value)
    if not isinstance(value, str):
        return None

    parts = value.strip().split(":")
    if len(parts) not in (2, 3) or not all(p.isdigit() for p in parts):
        return None

    hour, minute = int(parts[0]), int(parts[1])
    second = int(parts[2]) if len(parts) == 3 else 0
    if hour > 23 or minute > 59 or second > 59:
        return None
    return hour * 60 + minute


def minutes_of(value: time) -> int:
    """Minutes since midnight for a time value (seconds are dropped)"""
    return value.hour * 60 + value.minute


def to_time(minutes: int) -> time:
    """Inverse of minutes_of for values within a single day"""
    return time(minutes // 60, minutes % 60)


def format_minutes(minutes: int) -> str:
    """Format minutes since midnight as zero-padded 24h "HH:MM" """
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def weekday_index(value: date) -> int:
    """Day of week with 0=Sunday .. 6=Saturday (stored working hours use this)"""
    return value.isoweekday() % 7

