#!/usr/bin/env python3
"""
Script to create a barber with services, working hours and a lunch break
Usage: python -m app.scripts.create_barber [slug]
"""
import sys
from datetime import time
from decimal import Decimal

from sqlalchemy.orm import Session

from app.config.database import SessionLocal
from app.models import Barber, Service, WorkingHour, ScheduleBreak
from app.services.schedule.schedule_service import DAY_NAMES


def create_barber_with_schedule(slug: str = "demo-barber"):
    """Create a demo barber open Monday-Saturday"""
    db: Session = SessionLocal()

    try:
        barber = Barber(
            name="Demo Barber",
            barbershop_name="Demo Barbershop",
            slug=slug,
        )
        db.add(barber)
        db.flush()  # Get the ID without committing

        services = [
            {"name": "Haircut", "price": Decimal("40.00"), "duration": 30},
            {"name": "Beard trim", "price": Decimal("25.00"), "duration": 15},
            {"name": "Haircut + beard", "price": Decimal("60.00"), "duration": 45},
            {"name": "Hair coloring", "price": Decimal("90.00"), "duration": 60},
        ]
        for service_data in services:
            db.add(Service(barber_id=barber.id, **service_data))

        # 0=Sunday (closed), Saturday shorter
        for day in range(1, 7):
            end = time(14, 0) if day == 6 else time(19, 0)
            db.add(WorkingHour(
                barber_id=barber.id,
                day_of_week=day,
                start_time=time(9, 0),
                end_time=end,
                active=True,
            ))
            if day != 6:
                db.add(ScheduleBreak(
                    barber_id=barber.id,
                    day_of_week=day,
                    start_time=time(12, 0),
                    end_time=time(13, 0),
                    label="Lunch",
                ))

        db.commit()

        print(f"\n✅ Created barber: {barber.name}")
        print(f"   Barber ID: {barber.id}")
        print(f"   Booking link slug: {barber.slug}")
        print(f"\nServices:")
        for service_data in services:
            print(f"  - {service_data['name']} ({service_data['duration']}m, R$ {service_data['price']})")
        print(f"\nWorking hours:")
        for day in range(7):
            if day == 0:
                print(f"  {DAY_NAMES[day]}: CLOSED")
            else:
                print(f"  {DAY_NAMES[day]}: 09:00 - {'14:00' if day == 6 else '19:00'}")
        print()

        return str(barber.id)

    except Exception as e:
        db.rollback()
        print(f"\n❌ Error creating barber: {e}")
        import traceback
        traceback.print_exc()
        sys.exit(1)
    finally:
        db.close()


if __name__ == "__main__":
    create_barber_with_schedule(*sys.argv[1:2])
