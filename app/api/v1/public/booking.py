# ============================================================================
# app/api/v1/public/booking.py
# Public booking page endpoints - no authentication
# ============================================================================
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from app.api.dependencies import get_barber
from app.config.database import get_db
from app.models.barber import Barber
from app.schemas.booking import (
    AppointmentResponse,
    BookingRequest,
    ServiceLineRequest,
    SlotsResponse,
)
from app.services.appointment.appointment_query_service import AppointmentQueryService
from app.services.appointment.duration_resolver import bundle_totals
from app.services.availability.availability_service import AvailabilityService, filter_future
from app.services.booking.booking_service import BookingService

router = APIRouter(prefix="/barbers/{barber_id}", tags=["public-booking"])


@router.get("/services")
async def list_services(
        barber: Barber = Depends(get_barber),
        db: Session = Depends(get_db)
):
    """Active services shown on the booking page."""
    return {
        "barber_id": str(barber.id),
        "barbershop_name": barber.barbershop_name,
        "services": AppointmentQueryService.list_services(db, barber.id)
    }


@router.get("/slots", response_model=SlotsResponse)
async def get_available_slots(
        date: str = Query(..., description="Day to query, YYYY-MM-DD"),
        duration_minutes: Optional[int] = Query(None, description="Total duration of the requested bundle"),
        service_id: Optional[List[str]] = Query(None, description="Services of the bundle, repeatable"),
        barber: Barber = Depends(get_barber),
        db: Session = Depends(get_db)
):
    """
    Start times ("HH:MM") at which the bundle fits on that day.
    Starts at or before the current time are hidden for today.
    An empty list means no availability.
    """
    if duration_minutes is None:
        if not service_id:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail="Provide duration_minutes or at least one service_id"
            )
        lines = BookingService.price_bundle(
            db, barber.id, [ServiceLineRequest(service_id=sid) for sid in service_id]
        )
        duration_minutes, _ = bundle_totals(lines)

    slots = AvailabilityService.generate_slots(db, barber.id, date, duration_minutes)

    return SlotsResponse(
        barber_id=str(barber.id),
        date=date,
        duration_minutes=duration_minutes,
        available_slots=filter_future(slots, date, datetime.now())
    )


@router.post("/appointments", response_model=AppointmentResponse, status_code=status.HTTP_201_CREATED)
async def book_appointment(
        request: BookingRequest,
        barber: Barber = Depends(get_barber),
        db: Session = Depends(get_db)
):
    """
    Book a confirmed appointment.
    409 means the time was taken meanwhile: fetch slots again and let the customer re-pick.
    """
    if not filter_future([request.start_time], request.date, datetime.now()):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="This time has already passed, please pick another"
        )

    appointment = BookingService.book_appointment(
        db=db,
        barber_id=barber.id,
        appointment_date=request.date,
        start_time=request.start_time,
        services=request.services,
        client_name=request.client_name,
        client_whatsapp=request.client_whatsapp,
        client_email=request.client_email,
        notes=request.notes,
        source="online"
    )
    return AppointmentQueryService.serialize_appointment(appointment)
