# ============================================================================
# FILE 3: app/api/v1/dashboard/appointments.py
# Owner endpoints - thin HTTP layer
# ============================================================================
from fastapi import APIRouter, Depends, Query, Path, status
from sqlalchemy.orm import Session
from datetime import date, datetime
from typing import Optional

from app.config.database import get_db
from app.models.barber import Barber
from app.api.dependencies import get_barber, require_api_key
from app.schemas.booking import ManualBookingRequest, RescheduleRequest, StatusUpdate, WalkInRequest
from app.services.appointment.appointment_query_service import AppointmentQueryService
from app.services.booking.booking_service import BookingService

router = APIRouter(
    prefix="/barbers/{barber_id}/appointments",
    tags=["dashboard-appointments"],
    dependencies=[Depends(require_api_key)]
)


@router.get("")
async def list_appointments(
        on_date: Optional[date] = Query(None, alias="date", description="Only this day"),
        status_filter: Optional[str] = Query(None, alias="status",
                                             description="Filter by status (confirmed, completed, cancelled)"),
        skip: int = Query(0, ge=0),
        limit: int = Query(100, ge=1, le=500),
        barber: Barber = Depends(get_barber),
        db: Session = Depends(get_db)
):
    """Calendar listing for the owner"""
    return AppointmentQueryService.list_appointments(
        db=db,
        barber_id=barber.id,
        on_date=on_date,
        status=status_filter,
        skip=skip,
        limit=limit
    )


@router.get("/stats")
async def get_appointment_stats(
        start_date: Optional[date] = Query(None),
        end_date: Optional[date] = Query(None),
        barber: Barber = Depends(get_barber),
        db: Session = Depends(get_db)
):
    return AppointmentQueryService.get_appointment_stats(db, barber.id, start_date, end_date)


@router.post("/manual", status_code=status.HTTP_201_CREATED)
async def create_manual_appointment(
        request: ManualBookingRequest,
        barber: Barber = Depends(get_barber),
        db: Session = Depends(get_db)
):
    """
    Owner-entered booking. Opening hours are not enforced,
    overlaps with breaks and other appointments still are (409).
    """
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
        source="manual"
    )
    return AppointmentQueryService.serialize_appointment(appointment)


@router.post("/walk-in", status_code=status.HTTP_201_CREATED)
async def register_walk_in(
        request: WalkInRequest,
        barber: Barber = Depends(get_barber),
        db: Session = Depends(get_db)
):
    """Customer served right now without a booking; stored as completed"""
    appointment = BookingService.register_walk_in(
        db=db,
        barber_id=barber.id,
        services=request.services,
        client_name=request.client_name,
        served_at=datetime.now(),
        client_whatsapp=request.client_whatsapp,
        client_email=request.client_email
    )
    return AppointmentQueryService.serialize_appointment(appointment)


@router.patch("/{appointment_id}/status")
async def update_status(
        request: StatusUpdate,
        appointment_id: str = Path(...),
        barber: Barber = Depends(get_barber),
        db: Session = Depends(get_db)
):
    appointment = BookingService.update_status(db, appointment_id, request.status, barber_id=barber.id)
    return AppointmentQueryService.serialize_appointment(appointment)


@router.patch("/{appointment_id}/reschedule")
async def reschedule(
        request: RescheduleRequest,
        appointment_id: str = Path(...),
        barber: Barber = Depends(get_barber),
        db: Session = Depends(get_db)
):
    """Move an appointment; 409 when the new time overlaps anything"""
    appointment = BookingService.reschedule(
        db, appointment_id, request.date, request.start_time, barber_id=barber.id
    )
    return AppointmentQueryService.serialize_appointment(appointment)
