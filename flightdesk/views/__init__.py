"""Pydantic schemas used as views in the MVC architecture."""

from .bookings import BookingCreateRequest, BookingResponse
from .common import ErrorResponse, MessageResponse
from .flights import (
    FlightCreateRequest,
    FlightResponse,
    FlightSearchQuery,
    FlightStatusUpdateRequest,
    FlightUpdateRequest,
)

__all__ = [
    "FlightCreateRequest",
    "FlightUpdateRequest",
    "FlightStatusUpdateRequest",
    "FlightSearchQuery",
    "FlightResponse",
    "BookingCreateRequest",
    "BookingResponse",
    "ErrorResponse",
    "MessageResponse",
]
