"""Shared fixtures: in-memory SQLite database, a barber with services and a schedule."""

import os

# Must be set before app.config.* is imported (engine and settings are built at import time)
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["AGENT_API_KEY"] = "test-agent-key"
os.environ["BOOKING_LOCK_BACKEND"] = "local"

from datetime import date, time, timedelta
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from app.config.database import SessionLocal, engine
from app.models import Appointment, Barber, Base, ScheduleBreak, Service, WorkingHour

API_KEY = "test-agent-key"

# A day safely in the future so same-day filtering never interferes
FUTURE_DAY = date.today() + timedelta(days=30)


@pytest.fixture
def db():
    """Fresh schema per test."""
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def barber(db):
    barber = Barber(name="Joao Silva", barbershop_name="Barbearia Centro", slug="joao")
    db.add(barber)
    db.commit()
    db.refresh(barber)
    return barber


@pytest.fixture
def services(db, barber):
    """Catalogue keyed by a short name."""
    catalogue = {
        "haircut": Service(barber_id=barber.id, name="Haircut", price=Decimal("40.00"), duration=30),
        "beard": Service(barber_id=barber.id, name="Beard trim", price=Decimal("25.00"), duration=15),
        "coloring": Service(barber_id=barber.id, name="Hair coloring", price=Decimal("90.00"), duration=60),
        "legacy": Service(barber_id=barber.id, name="Legacy", price=Decimal("10.00"), duration=None),
        "retired": Service(barber_id=barber.id, name="Retired", price=Decimal("5.00"), duration=20, active=False),
    }
    db.add_all(catalogue.values())
    db.commit()
    for service in catalogue.values():
        db.refresh(service)
    return catalogue


def add_schedule(db, barber, start=time(9, 0), end=time(18, 0), days=range(7), active=True):
    for day in days:
        db.add(WorkingHour(
            barber_id=barber.id,
            day_of_week=day,
            start_time=start,
            end_time=end,
            active=active,
        ))
    db.commit()


def add_break(db, barber, day_of_week, start, end, label="Lunch"):
    brk = ScheduleBreak(
        barber_id=barber.id,
        day_of_week=day_of_week,
        start_time=start,
        end_time=end,
        label=label,
    )
    db.add(brk)
    db.commit()
    return brk


def add_appointment(db, barber, on_date, start, services_data=None, service=None, status="confirmed", **extra):
    appointment = Appointment(
        barber_id=barber.id,
        service_id=service.id if service is not None else None,
        appointment_date=on_date,
        appointment_time=start,
        services_data=services_data,
        price=Decimal("0"),
        client_name=extra.pop("client_name", "Client"),
        status=status,
        **extra,
    )
    db.add(appointment)
    db.commit()
    db.refresh(appointment)
    return appointment


@pytest.fixture
def schedule(db, barber):
    """09:00-18:00 every day of the week."""
    add_schedule(db, barber)


@pytest.fixture
def client(db):
    """Test client on a fresh app so rate limit state never leaks between tests."""
    from app.main import create_app

    with TestClient(create_app()) as test_client:
        yield test_client


@pytest.fixture
def auth_headers():
    return {"x-api-key": API_KEY}
