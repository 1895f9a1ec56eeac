"""Booking ledger: capacity admission and scoped cancellation.

Admitting a booking is a check-then-act sequence: count the confirmed
bookings, compare against capacity, insert. Two requests that both observe
``capacity - 1`` confirmed seats must not both be admitted, so every
admission and cancellation for a flight runs

* under that flight's entry in the process-wide lock registry, and
* inside one transaction that first takes a row lock on the flight
  (``SELECT ... FOR UPDATE``), which serializes writers across processes on
  databases that support it. SQLite ignores the clause and relies on the
  registry alone.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from flightdesk.models.booking import Booking, BookingStatus, SeatClass
from flightdesk.models.flight import Flight
from flightdesk.services.errors import (
    BookingNotFoundError,
    CapacityExceededError,
    FlightNotFoundError,
)
from flightdesk.services.locks import KeyedLockRegistry, flight_key, flight_locks
from flightdesk.telemetry import increment_booking_outcome

logger = logging.getLogger(__name__)


class BookingLedger:
    """Owns booking records for the lifetime of one database session."""

    def __init__(
        self,
        session: AsyncSession,
        locks: KeyedLockRegistry = flight_locks,
    ) -> None:
        self.session = session
        self.locks = locks

    async def _lock_flight(self, flight_id: int) -> Flight:
        flight = await self.session.get(
            Flight,
            flight_id,
            with_for_update=True,
            populate_existing=True,
        )
        if flight is None:
            raise FlightNotFoundError(flight_id)
        return flight

    async def count_confirmed(self, flight_id: int) -> int:
        result = await self.session.execute(
            select(func.count(Booking.id)).where(
                Booking.flight_id == flight_id,
                Booking.status == BookingStatus.CONFIRMED.value,
            )
        )
        return result.scalar_one()

    async def create_booking(
        self,
        flight_id: int,
        *,
        passenger_name: str,
        seat_class: SeatClass,
    ) -> Booking:
        """Admit one passenger onto the flight or raise ``CapacityExceededError``."""

        async with self.locks.hold(flight_key(flight_id)):
            try:
                flight = await self._lock_flight(flight_id)
                # Rollback expires loaded rows; keep plain values for logging.
                capacity = flight.capacity
                confirmed = await self.count_confirmed(flight_id)
                if confirmed >= capacity:
                    raise CapacityExceededError(
                        f"Flight {flight_id} is at full capacity."
                    )

                booking = Booking(
                    flight_id=flight_id,
                    passenger_name=passenger_name,
                    seat_class=SeatClass(seat_class).value,
                    status=BookingStatus.CONFIRMED.value,
                )
                self.session.add(booking)
                await self.session.commit()
            except CapacityExceededError:
                await self.session.rollback()
                increment_booking_outcome("rejected_capacity")
                logger.info(
                    "Rejected booking on flight id=%s: %s/%s seats confirmed",
                    flight_id,
                    confirmed,
                    capacity,
                )
                raise
            except Exception:
                await self.session.rollback()
                raise

        await self.session.refresh(booking)
        increment_booking_outcome("admitted")
        logger.info(
            "Admitted booking id=%s on flight id=%s (%s/%s)",
            booking.id,
            flight_id,
            confirmed + 1,
            capacity,
        )
        return booking

    async def get_bookings_for_flight(self, flight_id: int) -> List[Booking]:
        """Return the flight's bookings in creation order."""

        if await self.session.get(Flight, flight_id) is None:
            raise FlightNotFoundError(flight_id)

        result = await self.session.execute(
            select(Booking)
            .where(Booking.flight_id == flight_id)
            .order_by(Booking.id.asc())
        )
        return list(result.scalars().all())

    async def find_booking(
        self, flight_id: int, booking_id: int
    ) -> Optional[Booking]:
        result = await self.session.execute(
            select(Booking).where(
                Booking.id == booking_id,
                Booking.flight_id == flight_id,
            )
        )
        return result.scalar_one_or_none()

    async def get_booking(self, flight_id: int, booking_id: int) -> Booking:
        booking = await self.find_booking(flight_id, booking_id)
        if booking is None:
            raise BookingNotFoundError(flight_id, booking_id)
        return booking

    async def cancel_booking(self, flight_id: int, booking_id: int) -> None:
        """Delete the booking, freeing its seat for the next admission."""

        async with self.locks.hold(flight_key(flight_id)):
            try:
                flight = await self.session.get(
                    Flight, flight_id, with_for_update=True
                )
                booking = (
                    await self.find_booking(flight_id, booking_id)
                    if flight is not None
                    else None
                )
                if booking is None:
                    raise BookingNotFoundError(flight_id, booking_id)
                await self.session.delete(booking)
                await self.session.commit()
            except Exception:
                await self.session.rollback()
                raise

        increment_booking_outcome("cancelled")
        logger.info("Cancelled booking id=%s on flight id=%s", booking_id, flight_id)


__all__ = ["BookingLedger"]
