# app/models/__init__.py
from .base import Base
from .barber import Barber
from .service import Service
from .schedule import WorkingHour, ScheduleBreak
from .appointment import Appointment

__all__ = [
    "Base",
    "Barber",
    "Service",
    "WorkingHour",
    "ScheduleBreak",
    "Appointment",
]
