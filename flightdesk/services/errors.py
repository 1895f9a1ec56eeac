"""Domain errors raised by the flight catalog and booking ledger."""

from __future__ import annotations

from fastapi import status


class FlightDeskError(Exception):
    """Base class for business-rule violations surfaced to API callers."""

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidScheduleError(FlightDeskError):
    """Raised when a flight would arrive at or before its departure."""


class ScheduleConflictError(FlightDeskError):
    """Raised when a flight number already departs on the same UTC day."""


class CapacityExceededError(FlightDeskError):
    """Raised when a flight has no seats left to admit a booking."""


class CapacityBelowBookingsError(FlightDeskError):
    """Raised when a flight would hold fewer seats than it has confirmed."""


class NotFoundError(FlightDeskError):
    status_code = status.HTTP_404_NOT_FOUND


class FlightNotFoundError(NotFoundError):
    def __init__(self, flight_id: int) -> None:
        super().__init__(f"Flight ID {flight_id} not found")
        self.flight_id = flight_id


class BookingNotFoundError(NotFoundError):
    def __init__(self, flight_id: int, booking_id: int) -> None:
        super().__init__(f"Booking ID {booking_id} on flight {flight_id} not found")
        self.flight_id = flight_id
        self.booking_id = booking_id


__all__ = [
    "FlightDeskError",
    "InvalidScheduleError",
    "ScheduleConflictError",
    "CapacityExceededError",
    "CapacityBelowBookingsError",
    "NotFoundError",
    "FlightNotFoundError",
    "BookingNotFoundError",
]
