# app/models/barber.py
"""
Barber Model - the bookable resource.
Every schedule row, service and appointment hangs off a barber.
"""
from sqlalchemy import Column, String, Boolean, DateTime, Uuid
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import uuid
from app.models.base import Base


class Barber(Base):
    __tablename__ = "barbers"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(200), nullable=False)
    barbershop_name = Column(String(200), nullable=True)
    slug = Column(String(120), nullable=False, unique=True, index=True)  # public booking link

    is_active = Column(Boolean, default=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    services = relationship("Service", back_populates="barber", cascade="all, delete-orphan")
    working_hours = relationship("WorkingHour", back_populates="barber", cascade="all, delete-orphan")
    breaks = relationship("ScheduleBreak", back_populates="barber", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Barber(id={self.id}, slug={self.slug})>"
