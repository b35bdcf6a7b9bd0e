# app/schemas/booking.py
"""Request/response models for slot queries and bookings"""
from datetime import date as date_type
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from app.utils.time_utils import format_minutes, parse_clock


class ServiceLineRequest(BaseModel):
    """One service of a requested bundle; price and duration come from the catalogue"""
    service_id: str
    quantity: int = Field(default=1, ge=1)


class ServiceLine(BaseModel):
    """Priced bundle line as stored on the appointment"""
    service_id: str
    service_name: str
    price: float
    duration: int
    quantity: int = Field(default=1, ge=1)


class _ClockMixin(BaseModel):
    @field_validator("start_time", check_fields=False)
    @classmethod
    def validate_clock(cls, value: str) -> str:
        if parse_clock(value) is None:
            raise ValueError("start_time must be HH:MM")
        return format_minutes(parse_clock(value))


class BookingRequest(_ClockMixin):
    """Customer booking from the public page or an integration"""
    date: date_type
    start_time: str = Field(..., description="HH:MM, 24h")
    services: List[ServiceLineRequest] = Field(..., min_length=1)
    client_name: str = Field(..., min_length=1, max_length=200)
    client_whatsapp: str = Field(..., min_length=8, max_length=30)
    client_email: Optional[str] = Field(None, max_length=200)
    notes: Optional[str] = None


class AgentBookingRequest(BookingRequest):
    """Integration booking; the barber is named in the body"""
    barber_id: str


class ManualBookingRequest(BookingRequest):
    """Owner-entered appointment, may fall outside the published opening hours"""
    client_whatsapp: Optional[str] = Field(None, max_length=30)


class WalkInRequest(BaseModel):
    """Customer already served in the chair"""
    services: List[ServiceLineRequest] = Field(..., min_length=1)
    client_name: str = Field(..., min_length=1, max_length=200)
    client_whatsapp: Optional[str] = Field(None, max_length=30)
    client_email: Optional[str] = Field(None, max_length=200)


class RescheduleRequest(_ClockMixin):
    date: date_type
    start_time: str


class StatusUpdate(BaseModel):
    status: str = Field(..., description="confirmed, completed or cancelled")


class SlotsResponse(BaseModel):
    barber_id: str
    date: str
    duration_minutes: int
    available_slots: List[str]


class AppointmentResponse(BaseModel):
    id: str
    barber_id: str
    date: str
    start_time: str
    end_time: str
    duration_minutes: int
    services: List[ServiceLine]
    price: float
    client_name: str
    client_whatsapp: Optional[str]
    client_email: Optional[str]
    status: str
    booking_source: Optional[str]
    notes: Optional[str]
