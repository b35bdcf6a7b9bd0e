# ============================================================================
# FILE 2: app/api/v1/api_key/appointments.py
# API key authenticated endpoints for agents/integrations - thin HTTP layer
# ============================================================================
from fastapi import APIRouter, Depends, Query, Path, status
from sqlalchemy.orm import Session
from datetime import date
from typing import Optional

from app.config.database import get_db
from app.api.dependencies import require_api_key
from app.schemas.booking import AgentBookingRequest, StatusUpdate
from app.services.appointment.appointment_query_service import AppointmentQueryService
from app.services.booking.booking_service import BookingService

router = APIRouter(prefix="/appointments", tags=["agent-appointments"], dependencies=[Depends(require_api_key)])


@router.get("")
async def list_appointments(
        barber_id: str = Query(..., description="Barber whose calendar is listed"),
        on_date: Optional[date] = Query(None, alias="date", description="Only this day (YYYY-MM-DD)"),
        status_filter: Optional[str] = Query(None, alias="status",
                                             description="Filter by status (confirmed, completed, cancelled)"),
        skip: int = Query(0, ge=0, description="Number of records to skip"),
        limit: int = Query(100, ge=1, le=500, description="Number of records to return"),
        db: Session = Depends(get_db)
):
    """
    Appointments of a barber ordered by date and time.
    Requires x-api-key.
    """
    return AppointmentQueryService.list_appointments(
        db=db,
        barber_id=barber_id,
        on_date=on_date,
        status=status_filter,
        skip=skip,
        limit=limit
    )


@router.get("/today")
async def get_todays_appointments(
        barber_id: str = Query(...),
        db: Session = Depends(get_db)
):
    """
    All appointments of today, any status.
    Requires x-api-key.
    """
    return AppointmentQueryService.get_todays_appointments(db=db, barber_id=barber_id)


@router.get("/stats")
async def get_appointment_stats(
        barber_id: str = Query(...),
        start_date: Optional[date] = Query(None, description="Stats from this date"),
        end_date: Optional[date] = Query(None, description="Stats until this date"),
        db: Session = Depends(get_db)
):
    """
    Summary counts and completed revenue.
    Requires x-api-key.
    """
    return AppointmentQueryService.get_appointment_stats(
        db=db,
        barber_id=barber_id,
        start_date=start_date,
        end_date=end_date
    )


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_appointment(
        request: AgentBookingRequest,
        db: Session = Depends(get_db)
):
    """
    Book on behalf of a customer. Same validation as the public page:
    inside opening hours and free at write time, else 409.
    Requires x-api-key.
    """
    appointment = BookingService.book_appointment(
        db=db,
        barber_id=request.barber_id,
        appointment_date=request.date,
        start_time=request.start_time,
        services=request.services,
        client_name=request.client_name,
        client_whatsapp=request.client_whatsapp,
        client_email=request.client_email,
        notes=request.notes,
        source="agent"
    )
    return {"appointment": AppointmentQueryService.serialize_appointment(appointment)}


@router.patch("/{appointment_id}/status")
async def update_appointment_status(
        request: StatusUpdate,
        appointment_id: str = Path(..., description="The appointment ID"),
        db: Session = Depends(get_db)
):
    """
    Confirm, complete or cancel an appointment. Cancelling frees the slot.
    Requires x-api-key.
    """
    appointment = BookingService.update_status(db, appointment_id, request.status)
    return {"appointment": AppointmentQueryService.serialize_appointment(appointment)}
