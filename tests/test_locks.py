"""Keyed lock registry semantics."""

from __future__ import annotations

import asyncio
import gc

from flightdesk.services.locks import KeyedLockRegistry, flight_key, schedule_key


async def _record(registry, key, label, events, delay=0.01):
    async with registry.hold(key):
        events.append(f"{label}:enter")
        await asyncio.sleep(delay)
        events.append(f"{label}:exit")


def test_same_key_is_serialized():
    registry = KeyedLockRegistry()
    events: list[str] = []

    async def main():
        await asyncio.gather(
            _record(registry, flight_key(1), "a", events),
            _record(registry, flight_key(1), "b", events),
        )

    asyncio.run(main())

    assert events == ["a:enter", "a:exit", "b:enter", "b:exit"]


def test_different_keys_interleave():
    registry = KeyedLockRegistry()
    events: list[str] = []

    async def main():
        await asyncio.gather(
            _record(registry, flight_key(1), "a", events),
            _record(registry, flight_key(2), "b", events),
        )

    asyncio.run(main())

    assert events[:2] == ["a:enter", "b:enter"]


def test_flight_and_schedule_keys_do_not_collide():
    assert flight_key(7) != schedule_key("7")
    assert schedule_key("JB-101") == ("schedule", "JB-101")


def test_registry_forgets_released_locks():
    registry = KeyedLockRegistry()

    async def main():
        async with registry.hold(flight_key(1)):
            assert len(registry) == 1

    asyncio.run(main())
    gc.collect()

    assert len(registry) == 0
