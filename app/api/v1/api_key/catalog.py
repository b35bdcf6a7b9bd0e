# ============================================================================
# app/api/v1/api_key/catalog.py
# API key authenticated availability and service lookups
# ============================================================================
from datetime import datetime

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.api.dependencies import require_api_key
from app.config.database import get_db
from app.services.appointment.appointment_query_service import AppointmentQueryService
from app.services.availability.availability_service import AvailabilityService, filter_future
from app.services.booking.booking_service import BookingService

router = APIRouter(tags=["agent-catalog"], dependencies=[Depends(require_api_key)])


@router.get("/available-slots")
async def get_available_slots(
        barber_id: str = Query(...),
        date: str = Query(..., description="YYYY-MM-DD"),
        duration: int = Query(30, description="Requested duration in minutes"),
        db: Session = Depends(get_db)
):
    """
    Bookable start times for a duration on that day.
    404 for unknown or inactive barbers.
    Requires x-api-key.
    """
    barber = BookingService.get_active_barber(db, barber_id)
    slots = AvailabilityService.generate_slots(db, barber.id, date, duration)
    response = {"date": date, "available_slots": filter_future(slots, date, datetime.now())}
    if not response["available_slots"]:
        response["message"] = "No availability on this day"
    return response


@router.get("/services")
async def list_services(
        barber_id: str = Query(...),
        db: Session = Depends(get_db)
):
    """
    Active services with price and duration.
    Requires x-api-key.
    """
    return {"services": AppointmentQueryService.list_services(db, barber_id)}
