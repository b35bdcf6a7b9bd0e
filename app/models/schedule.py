# app/models/schedule.py
"""Weekly working hours and recurring breaks of a barber"""
from sqlalchemy import (
    Column, String, Integer, Boolean, Time, ForeignKey, Uuid,
    CheckConstraint, UniqueConstraint, Index,
)
from sqlalchemy.orm import relationship
import uuid
from app.models.base import Base


class WorkingHour(Base):
    """Opening window for one weekday; at most one row per barber and weekday"""
    __tablename__ = "working_hours"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    barber_id = Column(Uuid(as_uuid=True), ForeignKey("barbers.id", ondelete="CASCADE"), nullable=False)

    day_of_week = Column(Integer, nullable=False)  # 0=Sunday, 6=Saturday
    start_time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=False)

    active = Column(Boolean, default=True, nullable=False)

    barber = relationship("Barber", back_populates="working_hours")

    __table_args__ = (
        UniqueConstraint("barber_id", "day_of_week", name="uq_working_hours_barber_day"),
        CheckConstraint("start_time < end_time", name="ck_working_hours_window"),
        CheckConstraint("day_of_week BETWEEN 0 AND 6", name="ck_working_hours_weekday"),
    )

    def to_dict(self):
        return {
            "id": str(self.id),
            "day_of_week": self.day_of_week,
            "start_time": self.start_time.strftime("%H:%M"),
            "end_time": self.end_time.strftime("%H:%M"),
            "active": self.active,
        }


class ScheduleBreak(Base):
    """Recurring unavailable window (lunch, ...) applied to every occurrence of the weekday"""
    __tablename__ = "schedule_breaks"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    barber_id = Column(Uuid(as_uuid=True), ForeignKey("barbers.id", ondelete="CASCADE"), nullable=False)

    day_of_week = Column(Integer, nullable=False)  # 0=Sunday, 6=Saturday
    start_time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=False)
    label = Column(String(100), nullable=True)  # "Lunch", "Gym", ...

    barber = relationship("Barber", back_populates="breaks")

    __table_args__ = (
        CheckConstraint("start_time < end_time", name="ck_schedule_breaks_window"),
        CheckConstraint("day_of_week BETWEEN 0 AND 6", name="ck_schedule_breaks_weekday"),
        Index("ix_schedule_breaks_barber_day", "barber_id", "day_of_week"),
    )

    def to_dict(self):
        return {
            "id": str(self.id),
            "day_of_week": self.day_of_week,
            "start_time": self.start_time.strftime("%H:%M"),
            "end_time": self.end_time.strftime("%H:%M"),
            "label": self.label,
        }
