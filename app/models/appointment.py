# app/models/appointment.py
from sqlalchemy import (
    Column, String, Numeric, Text, Date, Time, DateTime, JSON, ForeignKey, Uuid, Index, text,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.models.base import Base
import uuid

# Statuses that still occupy the barber's time
ACTIVE_STATUSES = ("confirmed", "completed")
VALID_STATUSES = ("confirmed", "completed", "cancelled")


class Appointment(Base):
    __tablename__ = "appointments"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    # References
    barber_id = Column(Uuid(as_uuid=True), ForeignKey("barbers.id", ondelete="CASCADE"), nullable=False)
    # Legacy single-service link, kept as duration fallback when services_data is absent
    service_id = Column(Uuid(as_uuid=True), ForeignKey("services.id", ondelete="SET NULL"), nullable=True)

    # Wall-clock slot, no timezone
    appointment_date = Column(Date, nullable=False)
    appointment_time = Column(Time, nullable=False)

    # Bundle: [{"service_id", "service_name", "price", "duration", "quantity"}, ...]
    services_data = Column(JSON, nullable=True)
    price = Column(Numeric(10, 2), nullable=False, default=0)

    # Customer info
    client_name = Column(String(200), nullable=False)
    client_whatsapp = Column(String(30), nullable=True)
    client_email = Column(String(200), nullable=True)
    notes = Column(Text, nullable=True)

    # Status tracking
    status = Column(String(20), nullable=False, default="confirmed")  # confirmed, completed, cancelled
    booking_source = Column(String(20), default="online")  # online, agent, manual, walk_in

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
    cancelled_at = Column(DateTime(timezone=True), nullable=True)

    service = relationship("Service")

    __table_args__ = (
        # Two live appointments can never start at the same minute for one barber
        Index(
            "uq_appointments_barber_slot_active",
            "barber_id", "appointment_date", "appointment_time",
            unique=True,
            postgresql_where=text("status <> 'cancelled'"),
            sqlite_where=text("status <> 'cancelled'"),
        ),
        Index("ix_appointments_barber_date", "barber_id", "appointment_date"),
    )

    def __repr__(self):
        return (
            f"<Appointment(id={self.id}, barber_id={self.barber_id}, "
            f"{self.appointment_date} {self.appointment_time}, status={self.status})>"
        )
