"""
Keyed Locks

Per-key asyncio locks used to serialize read-modify-write cycles on a
single record (one enrollment pair) without blocking unrelated keys.
"""

import asyncio
import weakref
from contextlib import asynccontextmanager
from typing import AsyncIterator, Hashable


class KeyedLock:
    """
    Registry of asyncio.Lock objects, one per key.

    Locks are held in a WeakValueDictionary so a key's lock disappears
    once no coroutine holds or waits on it.
    """

    def __init__(self) -> None:
        self._locks: "weakref.WeakValueDictionary[Hashable, asyncio.Lock]" = (
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
        """
        Acquire the lock for ``key`` for the duration of the block.

        Usage:
            async with pair_locks.hold((user_id, course_id)):
                ...
        """
        lock = self._lock_for(key)
        async with lock:
            yield

    def is_locked(self, key: Hashable) -> bool:
        """Check whether some coroutine currently holds the key."""
        lock = self._locks.get(key)
        return lock is not None and lock.locked()

    def __len__(self) -> int:
        return len(self._locks)
