"""Flight catalog: schedule validation, duplicate detection and search."""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, List, Mapping, Optional

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from flightdesk.models.booking import Booking, BookingStatus
from flightdesk.models.flight import Flight, FlightStatus
from flightdesk.services.errors import (
    CapacityBelowBookingsError,
    FlightNotFoundError,
    InvalidScheduleError,
    ScheduleConflictError,
)
from flightdesk.services.locks import (
    KeyedLockRegistry,
    flight_key,
    flight_locks,
    schedule_key,
)
from flightdesk.telemetry import increment_flights_created
from flightdesk.utils.dates import search_day_bounds, to_naive_utc, utc_day_window

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = (
    "flight_number",
    "origin",
    "destination",
    "departure_time",
    "arrival_time",
    "capacity",
    "status",
)


def _ensure_schedule(departure_time: datetime, arrival_time: datetime) -> None:
    if arrival_time <= departure_time:
        raise InvalidScheduleError("arrivalTime must be after departureTime")


class FlightCatalog:
    """Owns flight records for the lifetime of one database session."""

    def __init__(
        self,
        session: AsyncSession,
        locks: KeyedLockRegistry = flight_locks,
    ) -> None:
        self.session = session
        self.locks = locks

    async def find_all(self) -> List[Flight]:
        result = await self.session.execute(select(Flight).order_by(Flight.id))
        return list(result.scalars().all())

    async def find_one(self, flight_id: int) -> Optional[Flight]:
        return await self.session.get(Flight, flight_id)

    async def get(self, flight_id: int) -> Flight:
        flight = await self.find_one(flight_id)
        if flight is None:
            raise FlightNotFoundError(flight_id)
        return flight

    async def _find_same_day(
        self,
        flight_number: str,
        departure_time: datetime,
        *,
        exclude_id: Optional[int] = None,
    ) -> Optional[Flight]:
        """Return a flight with this number departing on the same UTC day."""

        start, end = utc_day_window(departure_time)
        stmt = select(Flight).where(
            Flight.flight_number == flight_number,
            Flight.departure_time >= start,
            Flight.departure_time < end,
        )
        if exclude_id is not None:
            stmt = stmt.where(Flight.id != exclude_id)
        result = await self.session.execute(stmt.limit(1))
        return result.scalar_one_or_none()

    async def _ensure_unique_day(
        self,
        flight_number: str,
        departure_time: datetime,
        *,
        exclude_id: Optional[int] = None,
    ) -> None:
        existing = await self._find_same_day(
            flight_number, departure_time, exclude_id=exclude_id
        )
        if existing is not None:
            day = utc_day_window(departure_time)[0].date().isoformat()
            logger.info(
                "Rejected flight %s on %s: conflicts with flight id=%s",
                flight_number,
                day,
                existing.id,
            )
            raise ScheduleConflictError(
                f"Flight number {flight_number} already exists on {day}."
            )

    async def create(
        self,
        *,
        flight_number: str,
        origin: str,
        destination: str,
        departure_time: datetime,
        arrival_time: datetime,
        capacity: int,
    ) -> Flight:
        """Schedule a new flight in the ``Scheduled`` state."""

        departure_time = to_naive_utc(departure_time)
        arrival_time = to_naive_utc(arrival_time)
        _ensure_schedule(departure_time, arrival_time)

        async with self.locks.hold(schedule_key(flight_number)):
            await self._ensure_unique_day(flight_number, departure_time)
            flight = Flight(
                flight_number=flight_number,
                origin=origin,
                destination=destination,
                departure_time=departure_time,
                arrival_time=arrival_time,
                capacity=capacity,
                status=FlightStatus.SCHEDULED.value,
            )
            self.session.add(flight)
            await self.session.commit()

        await self.session.refresh(flight)
        increment_flights_created()
        logger.info(
            "Scheduled flight %s id=%s %s->%s departing %s",
            flight.flight_number,
            flight.id,
            flight.origin,
            flight.destination,
            flight.departure_time.isoformat(),
        )
        return flight

    async def update(self, flight_id: int, changes: Mapping[str, Any]) -> Flight:
        """Apply a partial update, revalidating schedule rules on merged values."""

        unknown = set(changes) - set(UPDATABLE_FIELDS)
        if unknown:
            raise ValueError(f"Unsupported flight fields: {', '.join(sorted(unknown))}")

        supplied = {key: value for key, value in changes.items() if value is not None}
        for key in ("departure_time", "arrival_time"):
            if key in supplied:
                supplied[key] = to_naive_utc(supplied[key])

        if "capacity" not in supplied:
            flight = await self.get(flight_id)
            return await self._update_schedule(flight, supplied)

        # Resizing races admissions, so it takes the same flight lock and row
        # lock the booking ledger does.
        async with self.locks.hold(flight_key(flight_id)):
            try:
                flight = await self.session.get(
                    Flight,
                    flight_id,
                    with_for_update=True,
                    populate_existing=True,
                )
                if flight is None:
                    raise FlightNotFoundError(flight_id)
                await self._ensure_capacity_covers(flight_id, supplied["capacity"])
                return await self._update_schedule(flight, supplied)
            except Exception:
                await self.session.rollback()
                raise

    async def _ensure_capacity_covers(self, flight_id: int, capacity: int) -> None:
        result = await self.session.execute(
            select(func.count(Booking.id)).where(
                Booking.flight_id == flight_id,
                Booking.status == BookingStatus.CONFIRMED.value,
            )
        )
        confirmed = result.scalar_one()
        if capacity < confirmed:
            logger.info(
                "Rejected resize of flight id=%s to %s seats: %s confirmed",
                flight_id,
                capacity,
                confirmed,
            )
            raise CapacityBelowBookingsError(
                f"Flight {flight_id} has {confirmed} confirmed bookings; "
                f"capacity cannot be reduced to {capacity}."
            )

    async def _update_schedule(
        self, flight: Flight, supplied: Mapping[str, Any]
    ) -> Flight:
        merged_number = supplied.get("flight_number", flight.flight_number)
        merged_departure = supplied.get("departure_time", flight.departure_time)
        merged_arrival = supplied.get("arrival_time", flight.arrival_time)

        if "departure_time" in supplied or "arrival_time" in supplied:
            _ensure_schedule(merged_departure, merged_arrival)

        if "flight_number" in supplied or "departure_time" in supplied:
            async with self.locks.hold(schedule_key(merged_number)):
                await self._ensure_unique_day(
                    merged_number, merged_departure, exclude_id=flight.id
                )
                await self._apply(flight, supplied)
        else:
            await self._apply(flight, supplied)

        logger.info("Updated flight id=%s fields=%s", flight.id, sorted(supplied))
        return flight

    async def _apply(self, flight: Flight, supplied: Mapping[str, Any]) -> None:
        for key, value in supplied.items():
            if isinstance(value, FlightStatus):
                value = value.value
            setattr(flight, key, value)
        await self.session.commit()
        await self.session.refresh(flight)

    async def update_status(self, flight_id: int, new_status: FlightStatus) -> Flight:
        """Move a flight to another operational state without other checks."""

        flight = await self.get(flight_id)
        previous = flight.status
        flight.status = FlightStatus(new_status).value
        await self.session.commit()
        await self.session.refresh(flight)
        logger.info(
            "Flight id=%s status %s -> %s", flight.id, previous, flight.status
        )
        return flight

    async def search(
        self,
        *,
        origin: Optional[str] = None,
        destination: Optional[str] = None,
        departure_date: Optional[date] = None,
        flight_number: Optional[str] = None,
        status: Optional[FlightStatus] = None,
    ) -> List[Flight]:
        """Return flights matching every supplied filter."""

        stmt: Select[tuple[Flight]] = select(Flight)
        if origin:
            stmt = stmt.where(Flight.origin == origin)
        if destination:
            stmt = stmt.where(Flight.destination == destination)
        if flight_number:
            stmt = stmt.where(Flight.flight_number == flight_number)
        if status:
            stmt = stmt.where(Flight.status == FlightStatus(status).value)
        if departure_date:
            start, end = search_day_bounds(departure_date)
            stmt = stmt.where(
                Flight.departure_time >= start,
                Flight.departure_time <= end,
            )
        result = await self.session.execute(stmt.order_by(Flight.id))
        return list(result.scalars().all())


__all__ = ["FlightCatalog", "UPDATABLE_FIELDS"]
