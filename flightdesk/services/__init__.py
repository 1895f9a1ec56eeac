"""Service layer: flight catalog and booking ledger."""

from .catalog import FlightCatalog
from .errors import (
    BookingNotFoundError,
    CapacityBelowBookingsError,
    CapacityExceededError,
    FlightDeskError,
    FlightNotFoundError,
    InvalidScheduleError,
    NotFoundError,
    ScheduleConflictError,
)
from .ledger import BookingLedger
from .locks import KeyedLockRegistry, flight_locks

__all__ = [
    "FlightCatalog",
    "BookingLedger",
    "KeyedLockRegistry",
    "flight_locks",
    "FlightDeskError",
    "InvalidScheduleError",
    "ScheduleConflictError",
    "CapacityExceededError",
    "CapacityBelowBookingsError",
    "NotFoundError",
    "FlightNotFoundError",
    "BookingNotFoundError",
]
