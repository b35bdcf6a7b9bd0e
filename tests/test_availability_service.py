"""Tests for slot generation, conflict checks and same-day filtering."""

from datetime import date, datetime, time

import pytest

from app.services.availability.availability_service import (
    SLOT_STEP_MINUTES,
    AvailabilityService,
    build_occupied_minutes,
    filter_future,
    slots_for_window,
)
from app.services.availability.calendar_store import BookedAppointment, BreakWindow, WorkingWindow
from app.utils.time_utils import parse_clock, weekday_index
from tests.conftest import add_appointment, add_break, add_schedule

# Monday
DAY = date(2030, 1, 7)
WEEKDAY = weekday_index(DAY)


class TestPureHelpers:
    """Tests for the store-independent helpers."""

    def test_occupied_minutes_cover_appointments_and_breaks(self):
        """Should mark [start, start+duration) and break windows as taken."""
        occupied = build_occupied_minutes(
            [BookedAppointment(id=1, start=600, service_duration=60)],
            [BreakWindow(start=720, end=780)],
        )
        assert 600 in occupied and 659 in occupied and 660 not in occupied
        assert 720 in occupied and 779 in occupied and 780 not in occupied

    def test_zero_duration_blocks_start_minute(self):
        """Should occupy exactly the start minute for a bundle summing to zero."""
        occupied = build_occupied_minutes(
            [BookedAppointment(id=1, start=600, services_data=[{"duration": 0, "quantity": 1}])],
            [],
        )
        assert occupied == {600}

    def test_window_respects_end(self):
        """Should only return starts whose interval ends by the closing time."""
        slots = slots_for_window(WorkingWindow(start=540, end=600), set(), 30)
        assert slots == ["09:00", "09:15", "09:30"]

    def test_non_positive_duration_yields_nothing(self):
        """Should return no slots for a zero duration."""
        assert slots_for_window(WorkingWindow(start=540, end=600), set(), 0) == []


class TestGenerateSlots:
    """Tests for AvailabilityService.generate_slots."""

    def test_lunch_break_and_booking_scenario(self, db, barber, services):
        """Should skip the 10:00 booking and the 12:00 break for 30 minute requests."""
        add_schedule(db, barber, time(9, 0), time(18, 0), days=[WEEKDAY])
        add_break(db, barber, WEEKDAY, time(12, 0), time(13, 0))
        add_appointment(db, barber, DAY, time(10, 0), service=services["coloring"])

        slots = AvailabilityService.generate_slots(db, barber.id, DAY, 30)

        for expected in ("09:00", "09:15", "09:30", "11:00", "11:15", "11:30", "13:00"):
            assert expected in slots
        for excluded in ("09:45", "10:00", "10:15", "10:30", "10:45", "11:45", "12:00", "12:30"):
            assert excluded not in slots
        assert slots[-1] == "17:30"
        assert slots == sorted(slots)

    def test_long_bundle_stays_on_grid(self, db, barber):
        """Should end at 15:45 for 65 minutes on 09:00-17:00; 16:00 would overrun."""
        add_schedule(db, barber, time(9, 0), time(17, 0), days=[WEEKDAY])

        slots = AvailabilityService.generate_slots(db, barber.id, DAY, 65)

        assert slots[0] == "09:00"
        assert slots[-1] == "15:45"
        assert "16:00" not in slots
        assert "15:55" not in slots

    def test_off_grid_start_still_validates(self, db, barber):
        """Should accept 15:55 for 65 minutes when checked directly."""
        add_schedule(db, barber, time(9, 0), time(17, 0), days=[WEEKDAY])

        assert AvailabilityService.is_still_available(db, barber.id, DAY, "15:55", 65)
        assert AvailabilityService.fits_working_hours(db, barber.id, DAY, "15:55", 65)
        assert not AvailabilityService.fits_working_hours(db, barber.id, DAY, "16:00", 65)

    def test_closed_weekday_is_empty(self, db, barber):
        """Should return nothing on a weekday without working hours."""
        add_schedule(db, barber, days=[(WEEKDAY + 1) % 7])
        assert AvailabilityService.generate_slots(db, barber.id, DAY, 30) == []

    def test_inactive_day_is_empty(self, db, barber):
        """Should ignore working hours that are switched off."""
        add_schedule(db, barber, days=[WEEKDAY], active=False)
        assert AvailabilityService.generate_slots(db, barber.id, DAY, 30) == []

    def test_duration_longer_than_day(self, db, barber):
        """Should return nothing when the request exceeds the working window."""
        add_schedule(db, barber, time(9, 0), time(12, 0), days=[WEEKDAY])
        assert AvailabilityService.generate_slots(db, barber.id, DAY, 181) == []
        assert AvailabilityService.generate_slots(db, barber.id, DAY, 180) == ["09:00"]

    @pytest.mark.parametrize("bad_date,duration", [
        ("2030-02-30", 30),
        ("tomorrow", 30),
        ("2030-01-07", 0),
        ("2030-01-07", -15),
        ("2030-01-07", True),
    ])
    def test_invalid_input_is_empty(self, db, barber, bad_date, duration):
        """Should return an empty list instead of raising."""
        add_schedule(db, barber, days=[WEEKDAY])
        assert AvailabilityService.generate_slots(db, barber.id, bad_date, duration) == []

    def test_unknown_barber_id_is_empty(self, db):
        """Should tolerate ids that are not UUIDs."""
        assert AvailabilityService.generate_slots(db, "not-a-uuid", DAY, 30) == []

    def test_grid_is_anchored_at_opening_time(self, db, barber):
        """Should align every slot with the opening minute modulo 15."""
        add_schedule(db, barber, time(9, 10), time(13, 0), days=[WEEKDAY])
        add_appointment(db, barber, DAY, time(10, 3),
                        services_data=[{"duration": 7, "quantity": 1}])

        slots = AvailabilityService.generate_slots(db, barber.id, DAY, 20)

        assert slots[0] == "09:10"
        assert all(parse_clock(s) % SLOT_STEP_MINUTES == (9 * 60 + 10) % SLOT_STEP_MINUTES for s in slots)

    def test_slots_never_overlap_anything(self, db, barber, services):
        """Should keep every returned interval clear of breaks and live appointments."""
        add_schedule(db, barber, time(8, 0), time(20, 0), days=[WEEKDAY])
        add_break(db, barber, WEEKDAY, time(12, 0), time(13, 30))
        add_break(db, barber, WEEKDAY, time(16, 0), time(16, 20), label="Coffee")
        add_appointment(db, barber, DAY, time(9, 20), service=services["haircut"])
        add_appointment(db, barber, DAY, time(14, 5),
                        services_data=[{"duration": 20, "quantity": 2}, {"duration": 15, "quantity": 1}])
        add_appointment(db, barber, DAY, time(18, 0), service=services["legacy"], status="completed")

        busy = [(560, 590), (845, 900), (1080, 1110), (720, 810), (960, 980)]
        duration = 45
        for slot in AvailabilityService.generate_slots(db, barber.id, DAY, duration):
            start = parse_clock(slot)
            assert all(start + duration <= b_start or b_end <= start for b_start, b_end in busy)

    def test_breaks_recur_every_week(self, db, barber):
        """Should apply a weekday break to every date on that weekday."""
        add_schedule(db, barber, time(9, 0), time(11, 0), days=[WEEKDAY])
        add_break(db, barber, WEEKDAY, time(9, 0), time(10, 0))

        for week in range(3):
            day = date.fromordinal(DAY.toordinal() + 7 * week)
            assert AvailabilityService.generate_slots(db, barber.id, day, 60) == ["10:00"]

    def test_idempotent(self, db, barber, services):
        """Should return identical output for identical input."""
        add_schedule(db, barber, days=[WEEKDAY])
        add_appointment(db, barber, DAY, time(11, 0), service=services["haircut"])

        first = AvailabilityService.generate_slots(db, barber.id, DAY, 30)
        second = AvailabilityService.generate_slots(db, barber.id, DAY, 30)
        assert first == second

    def test_cancelling_frees_the_slot(self, db, barber, services):
        """Should offer the interval again once its appointment is cancelled."""
        add_schedule(db, barber, days=[WEEKDAY])
        appointment = add_appointment(db, barber, DAY, time(10, 0), service=services["haircut"])

        assert "10:00" not in AvailabilityService.generate_slots(db, barber.id, DAY, 30)

        appointment.status = "cancelled"
        db.commit()

        assert "10:00" in AvailabilityService.generate_slots(db, barber.id, DAY, 30)

    def test_other_days_and_barbers_do_not_interfere(self, db, barber, services):
        """Should only consider appointments of this barber on this date."""
        from app.models import Barber

        other = Barber(name="Other", slug="other")
        db.add(other)
        db.commit()
        add_schedule(db, barber, days=[WEEKDAY])
        add_appointment(db, other, DAY, time(10, 0), service=services["haircut"])
        add_appointment(db, barber, date(2030, 1, 14), time(10, 0), service=services["haircut"])

        assert "10:00" in AvailabilityService.generate_slots(db, barber.id, DAY, 30)


class TestIsStillAvailable:
    """Tests for the write-time conflict validator."""

    def test_detects_overlap(self, db, barber, services):
        """Should reject any interval touching a live appointment."""
        add_schedule(db, barber, days=[WEEKDAY])
        add_appointment(db, barber, DAY, time(10, 0), service=services["haircut"])

        assert not AvailabilityService.is_still_available(db, barber.id, DAY, "09:45", 30)
        assert not AvailabilityService.is_still_available(db, barber.id, DAY, "10:29", 15)
        assert AvailabilityService.is_still_available(db, barber.id, DAY, "09:30", 30)
        assert AvailabilityService.is_still_available(db, barber.id, DAY, "10:30", 30)

    def test_detects_break(self, db, barber):
        """Should reject intervals running into a break."""
        add_schedule(db, barber, days=[WEEKDAY])
        add_break(db, barber, WEEKDAY, time(12, 0), time(13, 0))

        assert not AvailabilityService.is_still_available(db, barber.id, DAY, "11:45", 30)
        assert AvailabilityService.is_still_available(db, barber.id, DAY, "13:00", 30)

    def test_ignores_cancelled(self, db, barber, services):
        """Should not count cancelled appointments as occupied."""
        add_schedule(db, barber, days=[WEEKDAY])
        add_appointment(db, barber, DAY, time(10, 0), service=services["haircut"], status="cancelled")

        assert AvailabilityService.is_still_available(db, barber.id, DAY, "10:00", 30)

    def test_excluding_itself(self, db, barber, services):
        """Should allow an appointment to be moved onto its own interval."""
        add_schedule(db, barber, days=[WEEKDAY])
        appointment = add_appointment(db, barber, DAY, time(10, 0), service=services["haircut"])

        assert not AvailabilityService.is_still_available(db, barber.id, DAY, "10:15", 30)
        assert AvailabilityService.is_still_available(
            db, barber.id, DAY, "10:15", 30, exclude_appointment_id=appointment.id
        )

    def test_invalid_input_is_rejected(self, db, barber):
        """Should answer False for malformed input."""
        assert not AvailabilityService.is_still_available(db, barber.id, DAY, "25:00", 30)
        assert not AvailabilityService.is_still_available(db, barber.id, "bad", "10:00", 30)
        assert not AvailabilityService.is_still_available(db, barber.id, DAY, "10:00", 0)


class TestFilterFuture:
    """Tests for the same-day cutoff."""

    SLOTS = ["09:00", "14:00", "14:15", "14:30"]

    def test_today_keeps_strictly_later_starts(self):
        """Should drop starts at or before the current minute."""
        now = datetime(2030, 1, 7, 14, 15, 30)
        assert filter_future(self.SLOTS, "2030-01-07", now) == ["14:30"]

    def test_future_day_unchanged(self):
        """Should keep every slot on later days."""
        now = datetime(2030, 1, 7, 23, 59)
        assert filter_future(self.SLOTS, date(2030, 1, 8), now) == self.SLOTS

    def test_past_day_is_empty(self):
        """Should offer nothing on days already gone."""
        now = datetime(2030, 1, 7, 8, 0)
        assert filter_future(self.SLOTS, "2030-01-06", now) == []

    def test_invalid_date_is_empty(self):
        """Should not raise for an unparseable date."""
        assert filter_future(self.SLOTS, "07/01/2030", datetime(2030, 1, 7)) == []
