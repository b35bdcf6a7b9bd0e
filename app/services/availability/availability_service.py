# app/services/availability/availability_service.py
"""
Slot generation and conflict checks for a barber's day.

Everything here is a pure function of what the CalendarStore returns: no
writes, no caching, no ambient clock. Invalid input yields an empty slot list
(or False) instead of an exception.
"""
from datetime import date, datetime
from typing import Iterable, List, Optional, Set, Union
from uuid import UUID

from sqlalchemy.orm import Session

from app.services.appointment.duration_resolver import DurationResolver
from app.services.availability.calendar_store import (
    BookedAppointment,
    BreakWindow,
    CalendarStore,
    WorkingWindow,
    coerce_uuid,
)
from app.utils.time_utils import format_minutes, parse_clock, parse_date, weekday_index
import logging

logger = logging.getLogger(__name__)

# Candidate starts are always on this grid, anchored at the opening time
SLOT_STEP_MINUTES = 15


def build_occupied_minutes(
        appointments: Iterable[BookedAppointment],
        breaks: Iterable[BreakWindow]
) -> Set[int]:
    """Every minute of the day taken by an appointment or a recurring break"""
    occupied: Set[int] = set()

    for appointment in appointments:
        duration = DurationResolver.resolve(appointment)
        # A zero/negative duration (bad bundle data) still blocks its start minute
        occupied.update(range(appointment.start, appointment.start + max(duration, 1)))

    for brk in breaks:
        occupied.update(range(brk.start, brk.end))

    return occupied


def _valid_duration(duration: object) -> bool:
    return isinstance(duration, int) and not isinstance(duration, bool) and duration > 0


def is_range_free(occupied: Set[int], start: int, duration: int) -> bool:
    """True when [start, start + duration) has no occupied minute"""
    return all(minute not in occupied for minute in range(start, start + duration))


def slots_for_window(window: WorkingWindow, occupied: Set[int], duration: int) -> List[str]:
    """Grid starts inside the window where the whole duration is free"""
    if duration <= 0:
        return []

    return [
        format_minutes(candidate)
        for candidate in range(window.start, window.end - duration + 1, SLOT_STEP_MINUTES)
        if is_range_free(occupied, candidate, duration)
    ]


def filter_future(slots: List[str], target_date: Union[str, date], now: datetime) -> List[str]:
    """
    Same-day cutoff applied by presentation layers.

    Past days have no bookable slots, today keeps only starts strictly after
    now, and later days are returned unchanged.
    """
    day = parse_date(target_date)
    if day is None:
        return []

    today = now.date()
    if day < today:
        return []
    if day > today:
        return list(slots)

    cutoff = now.hour * 60 + now.minute
    return [slot for slot in slots if (parse_clock(slot) or 0) > cutoff]


class AvailabilityService:
    """Availability engine and conflict validator over the calendar store"""

    @staticmethod
    def generate_slots(
            db: Session,
            barber_id: Union[str, UUID],
            target_date: Union[str, date],
            duration_minutes: int
    ) -> List[str]:
        """Ordered "HH:MM" starts at which duration_minutes fits on that day"""
        barber_uuid = coerce_uuid(barber_id)
        day = parse_date(target_date)
        if barber_uuid is None or day is None or not _valid_duration(duration_minutes):
            return []

        store = CalendarStore(db)
        weekday = weekday_index(day)

        window = store.get_working_hours(barber_uuid, weekday)
        if window is None:
            logger.debug(f"Barber {barber_uuid} closed on {day} (weekday {weekday})")
            return []

        if duration_minutes > window.end - window.start:
            return []

        occupied = AvailabilityService._occupied_minutes(store, barber_uuid, day)
        slots = slots_for_window(window, occupied, duration_minutes)

        logger.debug(f"{len(slots)} slots of {duration_minutes}min for barber {barber_uuid} on {day}")
        return slots

    @staticmethod
    def is_still_available(
            db: Session,
            barber_id: Union[str, UUID],
            target_date: Union[str, date],
            start_time: str,
            duration_minutes: int,
            exclude_appointment_id: Optional[UUID] = None
    ) -> bool:
        """
        Fresh re-check of a single proposed interval against breaks and live
        appointments. Call it right before writing the appointment.
        """
        barber_uuid = coerce_uuid(barber_id)
        day = parse_date(target_date)
        start = parse_clock(start_time)
        if barber_uuid is None or day is None or start is None or not _valid_duration(duration_minutes):
            return False

        store = CalendarStore(db)
        occupied = AvailabilityService._occupied_minutes(store, barber_uuid, day, exclude_appointment_id)
        return is_range_free(occupied, start, duration_minutes)

    @staticmethod
    def fits_working_hours(
            db: Session,
            barber_id: Union[str, UUID],
            target_date: Union[str, date],
            start_time: str,
            duration_minutes: int
    ) -> bool:
        """True when [start, start + duration) sits inside the active opening window"""
        barber_uuid = coerce_uuid(barber_id)
        day = parse_date(target_date)
        start = parse_clock(start_time)
        if barber_uuid is None or day is None or start is None or not _valid_duration(duration_minutes):
            return False

        window = CalendarStore(db).get_working_hours(barber_uuid, weekday_index(day))
        if window is None:
            return False
        return window.start <= start and start + duration_minutes <= window.end

    @staticmethod
    def _occupied_minutes(
            store: CalendarStore,
            barber_id: UUID,
            day: date,
            exclude_appointment_id: Optional[UUID] = None
    ) -> Set[int]:
        appointments = store.get_appointments(barber_id, day, exclude_appointment_id)
        breaks = store.get_breaks(barber_id, weekday_index(day))
        return build_occupied_minutes(appointments, breaks)
