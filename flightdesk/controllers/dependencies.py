"""Common FastAPI dependencies reused across controllers."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from flightdesk.database import get_session
from flightdesk.services import BookingLedger, FlightCatalog, KeyedLockRegistry
from flightdesk.services.locks import flight_locks

SessionDep = Annotated[AsyncSession, Depends(get_session)]


def get_lock_registry() -> KeyedLockRegistry:
    """Return the process-wide lock registry shared by every request."""

    return flight_locks


LockRegistryDep = Annotated[KeyedLockRegistry, Depends(get_lock_registry)]


async def get_flight_catalog(
    session: SessionDep,
    locks: LockRegistryDep,
) -> FlightCatalog:
    return FlightCatalog(session, locks)


async def get_booking_ledger(
    session: SessionDep,
    locks: LockRegistryDep,
) -> BookingLedger:
    return BookingLedger(session, locks)


CatalogDep = Annotated[FlightCatalog, Depends(get_flight_catalog)]
LedgerDep = Annotated[BookingLedger, Depends(get_booking_ledger)]


__all__ = [
    "SessionDep",
    "LockRegistryDep",
    "CatalogDep",
    "LedgerDep",
    "get_lock_registry",
    "get_flight_catalog",
    "get_booking_ledger",
]
