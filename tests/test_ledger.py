"""Booking ledger behaviour under concurrent admissions."""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone

import pytest

from flightdesk.models import SeatClass
from flightdesk.services import (
    BookingLedger,
    BookingNotFoundError,
    CapacityExceededError,
    FlightCatalog,
    FlightNotFoundError,
    KeyedLockRegistry,
)


async def _schedule(factory, locks, *, capacity, flight_number="JB-101"):
    async with factory() as session:
        flight = await FlightCatalog(session, locks).create(
            flight_number=flight_number,
            origin="JFK",
            destination="LAX",
            departure_time=datetime(2025, 3, 15, 14, tzinfo=timezone.utc),
            arrival_time=datetime(2025, 3, 15, 18, tzinfo=timezone.utc),
            capacity=capacity,
        )
        return flight.id


async def _attempt(factory, locks, flight_id, name):
    async with factory() as session:
        ledger = BookingLedger(session, locks)
        try:
            booking = await ledger.create_booking(
                flight_id, passenger_name=name, seat_class=SeatClass.ECONOMY
            )
        except CapacityExceededError:
            return None
        return booking.id


def test_concurrent_admissions_never_exceed_capacity(run_scenario):
    locks = KeyedLockRegistry()

    async def scenario(factory):
        flight_id = await _schedule(factory, locks, capacity=3)
        results = await asyncio.gather(
            *(
                _attempt(factory, locks, flight_id, f"Passenger {chr(65 + i)}")
                for i in range(10)
            )
        )
        async with factory() as session:
            confirmed = await BookingLedger(session, locks).count_confirmed(flight_id)
        return results, confirmed

    results, confirmed = run_scenario(scenario)

    admitted = [booking_id for booking_id in results if booking_id is not None]
    assert len(admitted) == 3
    assert results.count(None) == 7
    assert confirmed == 3


def test_cancelled_seat_is_rebooked_exactly_once(run_scenario):
    locks = KeyedLockRegistry()

    async def scenario(factory):
        flight_id = await _schedule(factory, locks, capacity=2)
        first = await _attempt(factory, locks, flight_id, "Ann Lee")
        await _attempt(factory, locks, flight_id, "Ben Cho")

        async with factory() as session:
            await BookingLedger(session, locks).cancel_booking(flight_id, first)

        results = await asyncio.gather(
            *(
                _attempt(factory, locks, flight_id, f"Standby {chr(65 + i)}")
                for i in range(5)
            )
        )
        async with factory() as session:
            bookings = await BookingLedger(session, locks).get_bookings_for_flight(
                flight_id
            )
        return results, bookings

    results, bookings = run_scenario(scenario)

    assert len([r for r in results if r is not None]) == 1
    assert len(bookings) == 2
    assert bookings[0].passenger_name == "Ben Cho"


def test_cancel_requires_matching_flight(run_scenario):
    locks = KeyedLockRegistry()

    async def scenario(factory):
        flight_a = await _schedule(factory, locks, capacity=5, flight_number="JB-1A")
        flight_b = await _schedule(factory, locks, capacity=5, flight_number="JB-1B")
        booking_id = await _attempt(factory, locks, flight_a, "Ann Lee")

        async with factory() as session:
            ledger = BookingLedger(session, locks)
            with pytest.raises(BookingNotFoundError):
                await ledger.cancel_booking(flight_b, booking_id)
            with pytest.raises(BookingNotFoundError):
                await ledger.cancel_booking(404, booking_id)
            remaining = await ledger.get_bookings_for_flight(flight_a)
        return booking_id, remaining

    booking_id, remaining = run_scenario(scenario)

    assert [booking.id for booking in remaining] == [booking_id]


def test_unknown_flight_is_reported(run_scenario):
    locks = KeyedLockRegistry()

    async def scenario(factory):
        async with factory() as session:
            ledger = BookingLedger(session, locks)
            with pytest.raises(FlightNotFoundError):
                await ledger.create_booking(
                    77, passenger_name="Ann Lee", seat_class=SeatClass.BUSINESS
                )
            with pytest.raises(FlightNotFoundError):
                await ledger.get_bookings_for_flight(77)

    run_scenario(scenario)


def test_full_flight_raises_capacity_exceeded(run_scenario):
    locks = KeyedLockRegistry()

    async def scenario(factory):
        flight_id = await _schedule(factory, locks, capacity=1)
        await _attempt(factory, locks, flight_id, "Ann Lee")

        async with factory() as session:
            ledger = BookingLedger(session, locks)
            with pytest.raises(CapacityExceededError) as excinfo:
                await ledger.create_booking(
                    flight_id, passenger_name="Ben Cho", seat_class=SeatClass.ECONOMY
                )
            # The session stays usable after the rejected admission.
            confirmed = await ledger.count_confirmed(flight_id)
        return flight_id, excinfo.value, confirmed

    flight_id, error, confirmed = run_scenario(scenario)

    assert error.status_code == 400
    assert error.message == f"Flight {flight_id} is at full capacity."
    assert confirmed == 1
