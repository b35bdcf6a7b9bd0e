"""Tests for the duration resolver and bundle totals."""

from decimal import Decimal
from types import SimpleNamespace

from app.services.appointment.duration_resolver import (
    DEFAULT_DURATION_MINUTES,
    DurationResolver,
    bundle_totals,
    resolve_duration,
)
from app.services.availability.calendar_store import BookedAppointment


class TestResolveDuration:
    """Tests for resolve_duration precedence."""

    def test_bundle_sum_wins_over_linked_service(self):
        """Should resolve [20x2, 15x1] to 55, ignoring the linked service."""
        bundle = [{"duration": 20, "quantity": 2}, {"duration": 15, "quantity": 1}]
        assert resolve_duration(bundle, service_duration=90) == 55

    def test_linked_service_when_no_bundle(self):
        """Should use the linked service duration."""
        assert resolve_duration(None, 45) == 45
        assert resolve_duration([], 45) == 45

    def test_default_when_nothing_known(self):
        """Should fall back to 30 minutes for dangling references."""
        assert resolve_duration(None, None) == DEFAULT_DURATION_MINUTES == 30

    def test_missing_quantity_counts_once(self):
        """Should treat a line without quantity as quantity 1."""
        assert resolve_duration([{"duration": 25}], None) == 25

    def test_missing_line_duration_adds_nothing(self):
        """Should not clamp a bundle whose lines carry no duration."""
        assert resolve_duration([{"quantity": 2}], 40) == 0

    def test_malformed_values_are_tolerated(self):
        """Should never raise on garbage in a stored bundle."""
        bundle = [{"duration": "abc", "quantity": None}, {"duration": "10", "quantity": "3"}]
        assert resolve_duration(bundle, None) == 30


class TestDurationResolver:
    """Tests for DurationResolver.resolve on snapshots and rows."""

    def test_snapshot(self):
        """Should read service_duration from a calendar snapshot."""
        snapshot = BookedAppointment(id=1, start=600, services_data=None, service_duration=60)
        assert DurationResolver.resolve(snapshot) == 60

    def test_row_with_linked_service(self):
        """Should read the duration through the service relationship."""
        row = SimpleNamespace(services_data=None, service=SimpleNamespace(duration=45))
        assert DurationResolver.resolve(row) == 45

    def test_row_with_deleted_service(self):
        """Should degrade to the default when the service is gone."""
        row = SimpleNamespace(services_data=None, service=None)
        assert DurationResolver.resolve(row) == DEFAULT_DURATION_MINUTES


class TestBundleTotals:
    """Tests for bundle_totals."""

    def test_duration_and_price(self):
        """Should multiply unit values by quantity."""
        lines = [
            {"duration": 30, "price": 40.0, "quantity": 1},
            {"duration": 15, "price": "25.50", "quantity": 2},
        ]
        assert bundle_totals(lines) == (60, Decimal("91.00"))

    def test_objects_are_accepted(self):
        """Should read attributes from objects as well as dict keys."""
        lines = [SimpleNamespace(duration=20, price=10, quantity=3)]
        assert bundle_totals(lines) == (60, Decimal("30"))
