# ============================================================================
# app/services/appointment/appointment_query_service.py
# Pure business logic - no FastAPI dependencies, fully testable
# ============================================================================
from sqlalchemy.orm import Session
from datetime import date
from typing import Optional, Dict, Any, List, Union
from uuid import UUID

from app.models.appointment import Appointment
from app.models.service import Service
from app.services.appointment.duration_resolver import DurationResolver
from app.services.availability.calendar_store import coerce_uuid
from app.utils.time_utils import MINUTES_PER_DAY, format_minutes, minutes_of


class AppointmentQueryService:
    """Read side of appointments and the service catalogue."""

    @staticmethod
    def list_appointments(
            db: Session,
            barber_id: Union[str, UUID],
            on_date: Optional[date] = None,
            status: Optional[str] = None,
            skip: int = 0,
            limit: int = 100
    ) -> Dict[str, Any]:
        """Appointments of a barber ordered by date and time, optionally filtered."""
        barber_uuid = coerce_uuid(barber_id)
        query = db.query(Appointment).filter(Appointment.barber_id == barber_uuid)

        if on_date:
            query = query.filter(Appointment.appointment_date == on_date)
        if status:
            query = query.filter(Appointment.status == status)

        query = query.order_by(Appointment.appointment_date.asc(), Appointment.appointment_time.asc())
        total = query.count()
        appointments = query.offset(skip).limit(limit).all()

        return {
            "barber_id": str(barber_uuid),
            "total": total,
            "filters": {
                "date": on_date.isoformat() if on_date else None,
                "status": status
            },
            "appointments": [AppointmentQueryService.serialize_appointment(appt) for appt in appointments]
        }

    @staticmethod
    def get_todays_appointments(
            db: Session,
            barber_id: Union[str, UUID],
            today: Optional[date] = None
    ) -> Dict[str, Any]:
        """All appointments of the given (default: current) day, any status."""
        today = today or date.today()
        appointments = db.query(Appointment).filter(
            Appointment.barber_id == coerce_uuid(barber_id),
            Appointment.appointment_date == today
        ).order_by(Appointment.appointment_time.asc()).all()

        return {
            "date": today.isoformat(),
            "total": len(appointments),
            "appointments": [AppointmentQueryService.serialize_appointment(appt) for appt in appointments]
        }

    @staticmethod
    def get_appointment_stats(
            db: Session,
            barber_id: Union[str, UUID],
            start_date: Optional[date] = None,
            end_date: Optional[date] = None
    ) -> Dict[str, Any]:
        """Counts per status/source and revenue of completed appointments."""
        query = db.query(Appointment).filter(Appointment.barber_id == coerce_uuid(barber_id))

        if start_date:
            query = query.filter(Appointment.appointment_date >= start_date)
        if end_date:
            query = query.filter(Appointment.appointment_date <= end_date)

        appointments = query.all()

        by_status = {}
        by_source = {}
        for appt in appointments:
            by_status[appt.status] = by_status.get(appt.status, 0) + 1
            source = appt.booking_source or "unknown"
            by_source[source] = by_source.get(source, 0) + 1

        completed_revenue = sum(float(appt.price or 0) for appt in appointments if appt.status == "completed")
        unique_clients = len(set(appt.client_whatsapp for appt in appointments if appt.client_whatsapp))

        return {
            "barber_id": str(barber_id),
            "period": {
                "start": start_date.isoformat() if start_date else None,
                "end": end_date.isoformat() if end_date else None
            },
            "total_appointments": len(appointments),
            "by_status": by_status,
            "by_source": by_source,
            "completed_revenue": round(completed_revenue, 2),
            "unique_clients": unique_clients
        }

    @staticmethod
    def list_services(db: Session, barber_id: Union[str, UUID]) -> List[Dict[str, Any]]:
        """Active services of a barber, cheapest first."""
        services = db.query(Service).filter(
            Service.barber_id == coerce_uuid(barber_id),
            Service.active == True
        ).order_by(Service.price.asc(), Service.name.asc()).all()

        return [service.to_dict() for service in services]

    @staticmethod
    def serialize_appointment(appointment: Appointment) -> Dict[str, Any]:
        """Convert Appointment model to dictionary."""
        duration = DurationResolver.resolve(appointment)
        start = minutes_of(appointment.appointment_time)

        if appointment.services_data:
            services = appointment.services_data
        elif appointment.service is not None:
            # Legacy single-service booking
            services = [{
                "service_id": str(appointment.service.id),
                "service_name": appointment.service.name,
                "price": float(appointment.service.price or 0),
                "duration": duration,
                "quantity": 1,
            }]
        else:
            services = []

        return {
            "id": str(appointment.id),
            "barber_id": str(appointment.barber_id),
            "date": appointment.appointment_date.isoformat(),
            "start_time": format_minutes(start),
            # Manual bookings late in the evening may run past midnight
            "end_time": format_minutes(min(start + max(duration, 0), MINUTES_PER_DAY - 1)),
            "duration_minutes": duration,
            "services": services,
            "price": float(appointment.price or 0),
            "client_name": appointment.client_name,
            "client_whatsapp": appointment.client_whatsapp,
            "client_email": appointment.client_email,
            "status": appointment.status,
            "booking_source": appointment.booking_source,
            "notes": appointment.notes,
        }
