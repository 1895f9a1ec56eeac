"""Process-local keyed locks used to serialize check-then-act sequences."""

from __future__ import annotations

import asyncio
import logging
import weakref
from contextlib import asynccontextmanager
from typing import AsyncIterator, Hashable

logger = logging.getLogger(__name__)


class KeyedLockRegistry:
    """Hand out one ``asyncio.Lock`` per key.

    Locks are held weakly: an entry disappears as soon as no coroutine is
    holding or waiting on it, so the registry does not grow with the number
    of flights ever touched.
    """

    def __init__(self) -> None:
        self._locks: weakref.WeakValueDictionary[Hashable, asyncio.Lock] = (
            weakref.WeakValueDictionary()
        )

    def _lock_for(self, key: Hashable) -> asyncio.Lock:
        lock = self._locks.get(key)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[key] = lock
        return lock

    @asynccontextmanager
    async def hold(self, key: Hashable) -> AsyncIterator[None]:
        """Acquire the lock for ``key`` for the duration of the block."""

        lock = self._lock_for(key)
        if lock.locked():
            logger.debug("Waiting for lock %r", key)
        async with lock:
            yield

    def __len__(self) -> int:
        return len(self._locks)


def flight_key(flight_id: int) -> tuple[str, int]:
    return ("flight", flight_id)


def schedule_key(flight_number: str) -> tuple[str, str]:
    return ("schedule", flight_number)


# Shared by every request handled by this process.
flight_locks = KeyedLockRegistry()


__all__ = ["KeyedLockRegistry", "flight_key", "schedule_key", "flight_locks"]
