# ============================================================================
# app/services/booking/booking_service.py
# Validated appointment writes - no FastAPI dependencies
# ============================================================================
"""
Booking writer.

Every write that can collide with another booking runs inside the
per-barber/day booking lock, re-checks the interval against a fresh read and
commits in one transaction. The partial unique index on
(barber_id, appointment_date, appointment_time) backs this up at the storage
layer.
"""
from datetime import date, datetime, timezone
from typing import Dict, List, Optional, Union
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.exceptions import (
    AppointmentNotFoundError,
    BarberNotFoundError,
    BookingError,
    InvalidStatusError,
    ServiceNotFoundError,
    SlotUnavailableError,
)
from app.models.appointment import Appointment, VALID_STATUSES
from app.models.barber import Barber
from app.models.service import Service
from app.schemas.booking import ServiceLineRequest
from app.services.appointment.duration_resolver import (
    DEFAULT_DURATION_MINUTES,
    DurationResolver,
    bundle_totals,
)
from app.services.availability.availability_service import AvailabilityService
from app.services.availability.calendar_store import coerce_uuid
from app.services.booking.booking_lock import booking_lock
from app.utils.time_utils import format_minutes, minutes_of, parse_clock, parse_date, to_time
import logging

logger = logging.getLogger(__name__)

# Sources that must stay inside the published opening hours
CUSTOMER_SOURCES = ("online", "agent")


class BookingService:
    """Handles appointment writes"""

    @staticmethod
    def get_active_barber(db: Session, barber_id: Union[str, UUID]) -> Barber:
        barber_uuid = coerce_uuid(barber_id)
        barber = None
        if barber_uuid is not None:
            barber = db.query(Barber).filter(
                Barber.id == barber_uuid,
                Barber.is_active == True
            ).first()

        if not barber:
            raise BarberNotFoundError(f"Barber {barber_id} not found")
        return barber

    @staticmethod
    def price_bundle(
            db: Session,
            barber_id: UUID,
            requested: List[ServiceLineRequest]
    ) -> List[Dict]:
        """Resolve requested lines against the barber's active catalogue"""
        if not requested:
            raise BookingError("At least one service is required")

        wanted = {coerce_uuid(line.service_id) for line in requested}
        wanted.discard(None)

        services = db.query(Service).filter(
            Service.barber_id == barber_id,
            Service.id.in_(wanted),
            Service.active == True
        ).all() if wanted else []
        by_id = {service.id: service for service in services}

        lines = []
        for line in requested:
            service = by_id.get(coerce_uuid(line.service_id))
            if service is None:
                raise ServiceNotFoundError(f"Service {line.service_id} is not available")

            lines.append({
                "service_id": str(service.id),
                "service_name": service.name,
                "price": float(service.price or 0),
                "duration": service.duration or DEFAULT_DURATION_MINUTES,
                "quantity": line.quantity,
            })

        return lines

    @staticmethod
    def book_appointment(
            db: Session,
            barber_id: Union[str, UUID],
            appointment_date: Union[str, date],
            start_time: str,
            services: List[ServiceLineRequest],
            client_name: str,
            client_whatsapp: Optional[str] = None,
            client_email: Optional[str] = None,
            notes: Optional[str] = None,
            source: str = "online"
    ) -> Appointment:
        """
        Validate and persist a confirmed appointment.

        Raises SlotUnavailableError when the interval is taken (or, for
        customer sources, outside opening hours). Nothing is written then.
        """
        day = parse_date(appointment_date)
        start = parse_clock(start_time)
        if day is None or start is None:
            raise BookingError("Invalid date or start time")

        barber = BookingService.get_active_barber(db, barber_id)
        lines = BookingService.price_bundle(db, barber.id, services)
        duration, price = bundle_totals(lines)
        slot = format_minutes(start)

        with booking_lock(barber.id, day):
            try:
                BookingService._lock_barber_row(db, barber.id)

                if source in CUSTOMER_SOURCES and not AvailabilityService.fits_working_hours(
                        db, barber.id, day, slot, duration):
                    raise SlotUnavailableError("The barber is not working at this time, please pick another")

                if not AvailabilityService.is_still_available(db, barber.id, day, slot, duration):
                    raise SlotUnavailableError()

                appointment = Appointment(
                    barber_id=barber.id,
                    service_id=UUID(lines[0]["service_id"]),
                    appointment_date=day,
                    appointment_time=to_time(start),
                    services_data=lines,
                    price=price,
                    client_name=client_name,
                    client_whatsapp=client_whatsapp,
                    client_email=client_email,
                    notes=notes,
                    status="confirmed",
                    booking_source=source,
                )
                db.add(appointment)
                db.commit()

            except IntegrityError:
                db.rollback()
                logger.warning(f"Lost booking race for barber {barber.id} at {day} {slot}")
                raise SlotUnavailableError()
            except SlotUnavailableError:
                db.rollback()
                logger.warning(f"Rejected stale slot for barber {barber.id} at {day} {slot} ({duration}min)")
                raise
            except Exception:
                db.rollback()
                raise

        db.refresh(appointment)
        logger.info(f"Booked appointment {appointment.id} for barber {barber.id} at {day} {slot} ({duration}min, {source})")
        return appointment

    @staticmethod
    def register_walk_in(
            db: Session,
            barber_id: Union[str, UUID],
            services: List[ServiceLineRequest],
            client_name: str,
            served_at: datetime,
            client_whatsapp: Optional[str] = None,
            client_email: Optional[str] = None
    ) -> Appointment:
        """Record a customer served without a booking as a completed appointment"""
        barber = BookingService.get_active_barber(db, barber_id)
        lines = BookingService.price_bundle(db, barber.id, services)
        _, price = bundle_totals(lines)

        appointment = Appointment(
            barber_id=barber.id,
            service_id=UUID(lines[0]["service_id"]),
            appointment_date=served_at.date(),
            appointment_time=to_time(minutes_of(served_at.time())),
            services_data=lines,
            price=price,
            client_name=client_name,
            client_whatsapp=client_whatsapp,
            client_email=client_email,
            status="completed",
            booking_source="walk_in",
        )

        db.add(appointment)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            raise SlotUnavailableError("Another appointment already starts at this minute")

        db.refresh(appointment)
        logger.info(f"Registered walk-in {appointment.id} for barber {barber.id}")
        return appointment

    @staticmethod
    def _lock_barber_row(db: Session, barber_id: UUID) -> None:
        """Row lock on the barber serializes writers across processes on Postgres"""
        db.query(Barber).filter(Barber.id == barber_id).with_for_update().first()

    @staticmethod
    def get_appointment(
            db: Session,
            appointment_id: Union[str, UUID],
            barber_id: Optional[Union[str, UUID]] = None
    ) -> Appointment:
        appointment_uuid = coerce_uuid(appointment_id)
        query = db.query(Appointment).filter(Appointment.id == appointment_uuid)
        if barber_id is not None:
            query = query.filter(Appointment.barber_id == coerce_uuid(barber_id))

        appointment = query.first() if appointment_uuid is not None else None
        if not appointment:
            raise AppointmentNotFoundError(f"Appointment {appointment_id} not found")
        return appointment

    @staticmethod
    def update_status(
            db: Session,
            appointment_id: Union[str, UUID],
            status: str,
            barber_id: Optional[Union[str, UUID]] = None
    ) -> Appointment:
        """Move an appointment through confirmed / completed / cancelled"""
        if status not in VALID_STATUSES:
            raise InvalidStatusError(f"Invalid status '{status}'")

        appointment = BookingService.get_appointment(db, appointment_id, barber_id)

        if appointment.status == "cancelled" and status != "cancelled":
            # Re-activating must not resurrect a slot someone else took meanwhile
            with booking_lock(appointment.barber_id, appointment.appointment_date):
                BookingService._lock_barber_row(db, appointment.barber_id)
                if not AvailabilityService.is_still_available(
                        db,
                        appointment.barber_id,
                        appointment.appointment_date,
                        format_minutes(minutes_of(appointment.appointment_time)),
                        max(DurationResolver.resolve(appointment), 1),
                        exclude_appointment_id=appointment.id):
                    db.rollback()
                    raise SlotUnavailableError()
                BookingService._apply_status(db, appointment, status)
        else:
            BookingService._apply_status(db, appointment, status)

        logger.info(f"Appointment {appointment.id} -> {status}")
        return appointment

    @staticmethod
    def _apply_status(db: Session, appointment: Appointment, status: str) -> None:
        appointment.status = status
        appointment.cancelled_at = datetime.now(timezone.utc) if status == "cancelled" else None
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            raise SlotUnavailableError()
        db.refresh(appointment)

    @staticmethod
    def reschedule(
            db: Session,
            appointment_id: Union[str, UUID],
            appointment_date: Union[str, date],
            start_time: str,
            barber_id: Optional[Union[str, UUID]] = None
    ) -> Appointment:
        """Move a live appointment to another start, keeping its services"""
        day = parse_date(appointment_date)
        start = parse_clock(start_time)
        if day is None or start is None:
            raise BookingError("Invalid date or start time")

        appointment = BookingService.get_appointment(db, appointment_id, barber_id)
        if appointment.status == "cancelled":
            raise BookingError("Cancelled appointments cannot be rescheduled")

        duration = max(DurationResolver.resolve(appointment), 1)
        slot = format_minutes(start)

        with booking_lock(appointment.barber_id, day):
            try:
                BookingService._lock_barber_row(db, appointment.barber_id)

                if not AvailabilityService.is_still_available(
                        db, appointment.barber_id, day, slot, duration,
                        exclude_appointment_id=appointment.id):
                    raise SlotUnavailableError()

                appointment.appointment_date = day
                appointment.appointment_time = to_time(start)
                db.commit()

            except IntegrityError:
                db.rollback()
                raise SlotUnavailableError()
            except Exception:
                db.rollback()
                raise

        db.refresh(appointment)
        logger.info(f"Rescheduled appointment {appointment.id} to {day} {slot}")
        return appointment
