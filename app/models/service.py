# app/models/service.py
"""
Service Model - what a barber sells.
Source of truth for price and duration when a booking bundle is priced.
"""
from sqlalchemy import Column, String, Numeric, Integer, ForeignKey, Boolean, DateTime, Text, Uuid
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import uuid
from app.models.base import Base


class Service(Base):
    """Single catalogue entry (haircut, beard trim, ...)"""
    __tablename__ = "services"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    barber_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("barbers.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    # Core service details
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)

    price = Column(Numeric(10, 2), nullable=False, default=0)

    # Duration in minutes (nullable - legacy rows may not have one)
    duration = Column(Integer, nullable=True)

    active = Column(Boolean, default=True, index=True)

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now()
    )

    # Relationships
    barber = relationship("Barber", back_populates="services")

    def __repr__(self):
        return f"<Service(id={self.id}, name={self.name}, barber_id={self.barber_id})>"

    def to_dict(self):
        """Convert to dictionary for API responses"""
        return {
            "id": str(self.id),
            "barber_id": str(self.barber_id),
            "name": self.name,
            "description": self.description,
            "price": float(self.price) if self.price is not None else 0.0,
            "formatted_price": self.formatted_price,
            "duration": self.duration,
            "formatted_duration": self.formatted_duration,
            "active": self.active,
        }

    @property
    def formatted_price(self) -> str:
        """Return human-readable price string"""
        return f"R$ {float(self.price or 0):.2f}"

    @property
    def formatted_duration(self) -> str:
        """Return human-readable duration string"""
        if not self.duration:
            return "Duration varies"

        hours = self.duration // 60
        minutes = self.duration % 60

        if hours > 0 and minutes > 0:
            return f"{hours}h {minutes}m"
        elif hours > 0:
            return f"{hours}h"
        else:
            return f"{minutes}m"
