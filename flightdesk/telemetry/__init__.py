"""Telemetry helpers and metrics."""

from .metrics import (
    BOOKING_COUNTER,
    ERROR_COUNTER,
    FLIGHTS_CREATED_COUNTER,
    REQUEST_COUNT,
    REQUEST_LATENCY,
    increment_booking_outcome,
    increment_flights_created,
    observe_request,
)

__all__ = [
    "BOOKING_COUNTER",
    "ERROR_COUNTER",
    "FLIGHTS_CREATED_COUNTER",
    "REQUEST_COUNT",
    "REQUEST_LATENCY",
    "increment_booking_outcome",
    "increment_flights_created",
    "observe_request",
]
