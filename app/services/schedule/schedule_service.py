# app/services/schedule/schedule_service.py
"""Owner-facing editing of weekly working hours and recurring breaks"""
from datetime import time
from typing import Dict, Iterable, List, Optional, Tuple, Union
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.exceptions import ScheduleValidationError
from app.models.schedule import WorkingHour, ScheduleBreak
from app.services.availability.calendar_store import coerce_uuid
from app.utils.time_utils import parse_clock, to_time
import logging

logger = logging.getLogger(__name__)

DAY_NAMES = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]

TimeInput = Union[str, time]


class ScheduleService:
    """Handles schedule operations"""

    @staticmethod
    def validate_day(day_of_week: int) -> int:
        if not isinstance(day_of_week, int) or not 0 <= day_of_week <= 6:
            raise ScheduleValidationError(f"day_of_week must be between 0 (Sunday) and 6 (Saturday), got {day_of_week}")
        return day_of_week

    @staticmethod
    def validate_window(start: TimeInput, end: TimeInput) -> Tuple[time, time]:
        """Parse both ends and require start < end"""
        start_minutes = parse_clock(start)
        end_minutes = parse_clock(end)

        if start_minutes is None or end_minutes is None:
            raise ScheduleValidationError("Start and end times must be HH:MM")
        if start_minutes >= end_minutes:
            raise ScheduleValidationError("End time must be after start time")

        return to_time(start_minutes), to_time(end_minutes)

    @staticmethod
    def get_week(db: Session, barber_id: Union[str, UUID]) -> Dict:
        """Working hours and breaks for all seven days, Sunday first"""
        barber_uuid = coerce_uuid(barber_id)
        hours = db.query(WorkingHour).filter(WorkingHour.barber_id == barber_uuid).all()
        breaks = ScheduleService.list_breaks(db, barber_uuid)

        hours_by_day = {h.day_of_week: h for h in hours}
        days = []
        for day, name in enumerate(DAY_NAMES):
            working = hours_by_day.get(day)
            days.append({
                "day_of_week": day,
                "day_name": name,
                "working_hours": working.to_dict() if working else None,
                "breaks": [b.to_dict() for b in breaks if b.day_of_week == day],
            })

        return {"barber_id": str(barber_uuid), "days": days}

    @staticmethod
    def save_working_hour(
            db: Session,
            barber_id: Union[str, UUID],
            day_of_week: int,
            start_time: TimeInput,
            end_time: TimeInput,
            active: bool = True
    ) -> WorkingHour:
        """Create or replace the working window for one weekday"""
        ScheduleService.validate_day(day_of_week)
        start, end = ScheduleService.validate_window(start_time, end_time)
        barber_uuid = coerce_uuid(barber_id)

        working = ScheduleService._upsert_working_hour(db, barber_uuid, day_of_week, start, end, active)
        ScheduleService._commit(db)
        db.refresh(working)

        logger.info(f"Saved {DAY_NAMES[day_of_week]} hours {start}-{end} (active={active}) for barber {barber_uuid}")
        return working

    @staticmethod
    def set_day_active(
            db: Session,
            barber_id: Union[str, UUID],
            day_of_week: int,
            active: bool
    ) -> WorkingHour:
        """Open or close a weekday without losing its saved hours"""
        ScheduleService.validate_day(day_of_week)
        working = db.query(WorkingHour).filter(
            WorkingHour.barber_id == coerce_uuid(barber_id),
            WorkingHour.day_of_week == day_of_week
        ).first()

        if not working:
            raise ScheduleValidationError(f"No working hours saved for {DAY_NAMES[day_of_week]}")

        working.active = active
        ScheduleService._commit(db)
        db.refresh(working)
        return working

    @staticmethod
    def copy_day(
            db: Session,
            barber_id: Union[str, UUID],
            source_day: int,
            target_days: Iterable[int]
    ) -> List[WorkingHour]:
        """
        Copy one weekday's hours and breaks onto other weekdays.

        Target days get the source window and active flag; their existing
        breaks are replaced by copies of the source breaks.
        """
        ScheduleService.validate_day(source_day)
        targets = sorted({ScheduleService.validate_day(day) for day in target_days} - {source_day})
        barber_uuid = coerce_uuid(barber_id)

        source = db.query(WorkingHour).filter(
            WorkingHour.barber_id == barber_uuid,
            WorkingHour.day_of_week == source_day
        ).first()
        if not source:
            raise ScheduleValidationError(f"No working hours saved for {DAY_NAMES[source_day]}")

        source_breaks = db.query(ScheduleBreak).filter(
            ScheduleBreak.barber_id == barber_uuid,
            ScheduleBreak.day_of_week == source_day
        ).all()

        copied = []
        for day in targets:
            copied.append(ScheduleService._upsert_working_hour(
                db, barber_uuid, day, source.start_time, source.end_time, source.active
            ))

            db.query(ScheduleBreak).filter(
                ScheduleBreak.barber_id == barber_uuid,
                ScheduleBreak.day_of_week == day
            ).delete(synchronize_session=False)

            for brk in source_breaks:
                db.add(ScheduleBreak(
                    barber_id=barber_uuid,
                    day_of_week=day,
                    start_time=brk.start_time,
                    end_time=brk.end_time,
                    label=brk.label,
                ))

        ScheduleService._commit(db)
        for working in copied:
            db.refresh(working)

        logger.info(f"Copied {DAY_NAMES[source_day]} schedule to days {targets} for barber {barber_uuid}")
        return copied

    @staticmethod
    def add_break(
            db: Session,
            barber_id: Union[str, UUID],
            day_of_week: int,
            start_time: TimeInput,
            end_time: TimeInput,
            label: Optional[str] = None
    ) -> ScheduleBreak:
        ScheduleService.validate_day(day_of_week)
        start, end = ScheduleService.validate_window(start_time, end_time)

        brk = ScheduleBreak(
            barber_id=coerce_uuid(barber_id),
            day_of_week=day_of_week,
            start_time=start,
            end_time=end,
            label=label,
        )
        db.add(brk)
        ScheduleService._commit(db)
        db.refresh(brk)
        return brk

    @staticmethod
    def delete_break(db: Session, barber_id: Union[str, UUID], break_id: Union[str, UUID]) -> bool:
        """Returns False when the break does not exist for that barber"""
        brk = db.query(ScheduleBreak).filter(
            ScheduleBreak.id == coerce_uuid(break_id),
            ScheduleBreak.barber_id == coerce_uuid(barber_id)
        ).first()

        if not brk:
            return False

        db.delete(brk)
        ScheduleService._commit(db)
        return True

    @staticmethod
    def list_breaks(
            db: Session,
            barber_id: Union[str, UUID],
            day_of_week: Optional[int] = None
    ) -> List[ScheduleBreak]:
        query = db.query(ScheduleBreak).filter(ScheduleBreak.barber_id == coerce_uuid(barber_id))
        if day_of_week is not None:
            query = query.filter(ScheduleBreak.day_of_week == day_of_week)
        return query.order_by(ScheduleBreak.day_of_week.asc(), ScheduleBreak.start_time.asc()).all()

    @staticmethod
    def _upsert_working_hour(
            db: Session,
            barber_id: UUID,
            day_of_week: int,
            start: time,
            end: time,
            active: bool
    ) -> WorkingHour:
        working = db.query(WorkingHour).filter(
            WorkingHour.barber_id == barber_id,
            WorkingHour.day_of_week == day_of_week
        ).first()

        if working:
            working.start_time = start
            working.end_time = end
            working.active = active
        else:
            working = WorkingHour(
                barber_id=barber_id,
                day_of_week=day_of_week,
                start_time=start,
                end_time=end,
                active=active,
            )
            db.add(working)

        return working

    @staticmethod
    def _commit(db: Session) -> None:
        try:
            db.commit()
        except IntegrityError as e:
            db.rollback()
            raise ScheduleValidationError(f"Schedule change rejected by the database: {e.orig}")
