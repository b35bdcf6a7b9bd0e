# app/services/appointment/duration_resolver.py
"""How long an appointment really occupies the chair"""
from decimal import Decimal, InvalidOperation
from typing import Any, Iterable, Optional, Tuple

DEFAULT_DURATION_MINUTES = 30


def _as_int(value: Any, default: int) -> int:
    if value is None:
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _as_decimal(value: Any) -> Decimal:
    try:
        return Decimal(str(value)) if value is not None else Decimal("0")
    except (InvalidOperation, ValueError):
        return Decimal("0")


def _field(line: Any, name: str) -> Any:
    if isinstance(line, dict):
        return line.get(name)
    return getattr(line, name, None)


def bundle_totals(lines: Iterable[Any]) -> Tuple[int, Decimal]:
    """
    Sum duration and price over service lines (dicts or objects).

    A line without quantity counts once; a line without duration adds nothing.
    """
    total_duration = 0
    total_price = Decimal("0")
    for line in lines:
        quantity = _as_int(_field(line, "quantity"), 1)
        total_duration += _as_int(_field(line, "duration"), 0) * quantity
        total_price += _as_decimal(_field(line, "price")) * quantity
    return total_duration, total_price


def resolve_duration(services_data: Optional[list], service_duration: Optional[int]) -> int:
    """
    Bundle total when a bundle is present, else the linked service's duration,
    else DEFAULT_DURATION_MINUTES. Never raises and never clamps: a malformed
    bundle summing to 0 or less is returned as is.
    """
    if services_data:
        duration, _ = bundle_totals(services_data)
        return duration

    if service_duration:
        return _as_int(service_duration, DEFAULT_DURATION_MINUTES)

    return DEFAULT_DURATION_MINUTES


class DurationResolver:
    """Resolves durations for ORM appointments and calendar snapshots alike"""

    @staticmethod
    def resolve(appointment: Any) -> int:
        if hasattr(appointment, "service_duration"):
            service_duration = appointment.service_duration
        else:
            service = getattr(appointment, "service", None)
            service_duration = service.duration if service is not None else None

        return resolve_duration(getattr(appointment, "services_data", None), service_duration)
