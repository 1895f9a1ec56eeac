"""Per-client request-rate ceilings for the write endpoints."""

from __future__ import annotations

from slowapi import Limiter
from slowapi.util import get_remote_address

from flightdesk.config.settings import settings

limiter = Limiter(
    key_func=get_remote_address,
    enabled=settings.rate_limit.enabled,
)

FLIGHT_CREATE_LIMIT = settings.rate_limit.flight_create
BOOKING_CREATE_LIMIT = settings.rate_limit.booking_create

__all__ = ["limiter", "FLIGHT_CREATE_LIMIT", "BOOKING_CREATE_LIMIT"]
