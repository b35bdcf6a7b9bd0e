# app/services/availability/calendar_store.py
"""
Read-only view of a barber's calendar for the availability engine.

Rows are converted into small immutable snapshots expressed in minutes since
midnight, so the slot arithmetic never touches ORM objects or the session.
"""
from dataclasses import dataclass
from datetime import date
from typing import Any, List, Optional, Union
from uuid import UUID

from sqlalchemy.orm import Session

from app.models.appointment import Appointment, ACTIVE_STATUSES
from app.models.schedule import WorkingHour, ScheduleBreak
from app.models.service import Service
from app.utils.time_utils import minutes_of


@dataclass(frozen=True)
class WorkingWindow:
    start: int
    end: int


@dataclass(frozen=True)
class BreakWindow:
    start: int
    end: int


@dataclass(frozen=True)
class BookedAppointment:
    """Existing non-cancelled appointment; duration is resolved later"""
    id: Any
    start: int
    services_data: Optional[list] = None
    service_duration: Optional[int] = None


def coerce_uuid(value: Union[str, UUID, None]) -> Optional[UUID]:
    """UUID from str/UUID, None when the value is not a valid id"""
    if value is None:
        return None
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except ValueError:
        return None


class CalendarStore:
    """Keyed lookups over working hours, breaks and appointments"""

    def __init__(self, db: Session):
        self.db = db

    def get_working_hours(self, barber_id: UUID, weekday: int) -> Optional[WorkingWindow]:
        row = self.db.query(WorkingHour).filter(
            WorkingHour.barber_id == barber_id,
            WorkingHour.day_of_week == weekday,
            WorkingHour.active == True
        ).first()

        if not row:
            return None
        return WorkingWindow(start=minutes_of(row.start_time), end=minutes_of(row.end_time))

    def get_breaks(self, barber_id: UUID, weekday: int) -> List[BreakWindow]:
        rows = self.db.query(ScheduleBreak).filter(
            ScheduleBreak.barber_id == barber_id,
            ScheduleBreak.day_of_week == weekday
        ).order_by(ScheduleBreak.start_time.asc()).all()

        return [BreakWindow(start=minutes_of(r.start_time), end=minutes_of(r.end_time)) for r in rows]

    def get_appointments(
            self,
            barber_id: UUID,
            day: date,
            exclude_appointment_id: Optional[UUID] = None
    ) -> List[BookedAppointment]:
        query = self.db.query(Appointment, Service.duration).outerjoin(
            Service, Appointment.service_id == Service.id
        ).filter(
            Appointment.barber_id == barber_id,
            Appointment.appointment_date == day,
            Appointment.status.in_(ACTIVE_STATUSES)
        )

        if exclude_appointment_id is not None:
            query = query.filter(Appointment.id != exclude_appointment_id)

        return [
            BookedAppointment(
                id=appt.id,
                start=minutes_of(appt.appointment_time),
                services_data=appt.services_data,
                service_duration=service_duration,
            )
            for appt, service_duration in query.order_by(Appointment.appointment_time.asc()).all()
        ]
