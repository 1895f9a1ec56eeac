"""SQLAlchemy models for the MVC architecture."""

from .base import Base
from .booking import Booking, BookingStatus, SeatClass  # noqa: F401
from .flight import Flight, FlightStatus  # noqa: F401
from .log import RequestLog  # noqa: F401

__all__ = [
    "Base",
    "Flight",
    "FlightStatus",
    "Booking",
    "BookingStatus",
    "SeatClass",
    "RequestLog",
]
