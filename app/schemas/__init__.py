# app/schemas/__init__.py
from .booking import (
    ServiceLineRequest,
    ServiceLine,
    BookingRequest,
    AgentBookingRequest,
    ManualBookingRequest,
    WalkInRequest,
    RescheduleRequest,
    StatusUpdate,
    SlotsResponse,
    AppointmentResponse
)

from .schedule import (
    WorkingHourUpdate,
    DayToggle,
    CopyDayRequest,
    BreakCreate
)

__all__ = [
    # Booking
    "ServiceLineRequest",
    "ServiceLine",
    "BookingRequest",
    "AgentBookingRequest",
    "ManualBookingRequest",
    "WalkInRequest",
    "RescheduleRequest",
    "StatusUpdate",
    "SlotsResponse",
    "AppointmentResponse",

    # Schedule
    "WorkingHourUpdate",
    "DayToggle",
    "CopyDayRequest",
    "BreakCreate",
]
