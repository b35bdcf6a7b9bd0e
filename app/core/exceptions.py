# app/core/exceptions.py
"""Domain errors raised by the service layer and mapped to HTTP codes by the API"""


class BookingError(Exception):
    """Base class for booking flow failures"""


class SlotUnavailableError(BookingError):
    """The requested time is no longer free. Re-run availability and re-prompt."""

    def __init__(self, message: str = "This time is no longer available, please pick another"):
        super().__init__(message)


class BookingLockTimeout(SlotUnavailableError):
    """Could not serialize the write for this barber/day within the wait budget"""

    def __init__(self, message: str = "Calendar is busy, please try again"):
        super().__init__(message)


class BarberNotFoundError(BookingError):
    """Unknown or deactivated barber"""


class ServiceNotFoundError(BookingError):
    """A requested service does not exist, is inactive, or belongs to another barber"""


class AppointmentNotFoundError(BookingError):
    """No appointment with that id (for that barber)"""


class InvalidStatusError(ValueError):
    """Status outside the allowed appointment lifecycle values"""


class ScheduleValidationError(ValueError):
    """Working hour or break would be stored with an empty/inverted window"""
