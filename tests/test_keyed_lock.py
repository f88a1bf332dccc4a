"""
Keyed Lock Unit Tests

Tests for per-key serialization.
"""

import asyncio

import pytest


class TestKeyedLock:
    """Tests for KeyedLock."""

    @pytest.mark.asyncio
    async def test_same_key_is_serialized(self):
        """Two holders of one key never overlap."""
        from dynamix.core.locks import KeyedLock

        locks = KeyedLock()
        events = []

        async def worker(name: str):
            async with locks.hold(("s1", "c1")):
                events.append(f"{name}-start")
                await asyncio.sleep(0.01)
                events.append(f"{name}-end")

        await asyncio.gather(worker("a"), worker("b"))

        assert events in (
            ["a-start", "a-end", "b-start", "b-end"],
            ["b-start", "b-end", "a-start", "a-end"],
        )

    @pytest.mark.asyncio
    async def test_different_keys_run_concurrently(self):
        from dynamix.core.locks import KeyedLock

        locks = KeyedLock()
        inside = asyncio.Event()
        release = asyncio.Event()

        async def holder():
            async with locks.hold(("s1", "c1")):
                inside.set()
                await release.wait()

        task = asyncio.create_task(holder())
        await inside.wait()

        assert locks.is_locked(("s1", "c1"))
        assert not locks.is_locked(("s1", "c2"))

        # Another key is free while the first is held
        async with locks.hold(("s1", "c2")):
            assert locks.is_locked(("s1", "c2"))

        release.set()
        await task

    @pytest.mark.asyncio
    async def test_unused_locks_are_released(self):
        import gc

        from dynamix.core.locks import KeyedLock

        locks = KeyedLock()
        async with locks.hold("key"):
            assert len(locks) == 1

        gc.collect()
        assert len(locks) == 0
