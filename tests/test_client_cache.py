"""
Entity Cache Unit Tests

Tests for the client-side TTL/LRU cache.
"""

import time
from unittest.mock import patch


class TestEntityCache:
    """Tests for the EntityCache implementation."""

    def test_set_and_get(self):
        from dynamix.client.cache import EntityCache

        cache: EntityCache[dict] = EntityCache(max_size=10, default_ttl=60)

        cache.set("c1", {"id": "c1"})
        assert cache.get("c1") == {"id": "c1"}
        assert "c1" in cache

    def test_returns_none_for_missing_key(self):
        from dynamix.client.cache import EntityCache

        cache: EntityCache[dict] = EntityCache(max_size=10, default_ttl=60)

        assert cache.get("missing") is None

    def test_expires_after_ttl(self):
        """Entries are gone once their TTL has passed."""
        from dynamix.client.cache import EntityCache

        cache: EntityCache[str] = EntityCache(max_size=10, default_ttl=60)
        cache.set("c1", "course")

        with patch("dynamix.client.cache.time.time", return_value=time.time() + 61):
            assert cache.get("c1") is None
            assert cache.values() == []

    def test_lru_eviction(self):
        """Verify LRU eviction when at capacity."""
        from dynamix.client.cache import EntityCache

        cache: EntityCache[str] = EntityCache(max_size=3, default_ttl=60)

        cache.set("c1", "one")
        cache.set("c2", "two")
        cache.set("c3", "three")

        # Access c1 to make it recently used
        cache.get("c1")

        # Adding c4 evicts c2 (least recently used)
        cache.set("c4", "four")

        assert cache.get("c1") == "one"
        assert cache.get("c2") is None
        assert cache.get("c3") == "three"
        assert cache.get("c4") == "four"

    def test_overwrite_does_not_evict(self):
        from dynamix.client.cache import EntityCache

        cache: EntityCache[str] = EntityCache(max_size=2, default_ttl=60)
        cache.set("c1", "one")
        cache.set("c2", "two")

        cache.set("c1", "uno")

        assert len(cache) == 2
        assert cache.get("c1") == "uno"
        assert cache.get("c2") == "two"

    def test_replace_all_drops_stale_entries(self):
        """A re-fetched collection fully replaces what was cached."""
        from dynamix.client.cache import EntityCache

        cache: EntityCache[str] = EntityCache(max_size=10, default_ttl=60)
        cache.set("old", "stale")

        cache.replace_all({"c1": "one", "c2": "two"})

        assert cache.get("old") is None
        assert cache.values() == ["one", "two"]

    def test_delete(self):
        from dynamix.client.cache import EntityCache

        cache: EntityCache[str] = EntityCache()
        cache.set("c1", "one")

        assert cache.delete("c1") is True
        assert cache.delete("c1") is False

    def test_stats_tracking(self):
        """Verify cache statistics are tracked correctly."""
        from dynamix.client.cache import EntityCache

        cache: EntityCache[str] = EntityCache(max_size=10, default_ttl=60)
        cache.set("c1", "one")

        cache.get("c1")  # Hit
        cache.get("c1")  # Hit
        cache.get("c2")  # Miss

        stats = cache.stats()
        assert stats["hits"] == 2
        assert stats["misses"] == 1
        assert stats["size"] == 1
        assert stats["hit_rate_percent"] == 66.67

    def test_clear_resets_stats(self):
        from dynamix.client.cache import EntityCache

        cache: EntityCache[str] = EntityCache()
        cache.set("c1", "one")
        cache.get("c1")

        cache.clear()

        assert len(cache) == 0
        assert cache.stats()["hits"] == 0
