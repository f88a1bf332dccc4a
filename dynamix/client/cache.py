"""
Entity Cache

In-memory TTL cache with LRU eviction, keyed by entity id. The client
store keeps courses and enrollments here between refreshes; the server
stays the source of truth.
"""

import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Dict, Generic, List, Mapping, Optional, TypeVar


T = TypeVar('T')


@dataclass
class CacheEntry(Generic[T]):
    """A single cache entry with TTL support."""
    value: T
    expires_at: float

    def is_expired(self) -> bool:
        return time.time() > self.expires_at


class EntityCache(Generic[T]):
    """
    TTL cache with LRU eviction.

    Features:
    - Time-based expiration
    - Maximum size limit with LRU eviction
    - Bulk replacement after a collection re-fetch
    - Hit/miss statistics
    """

    def __init__(
        self,
        max_size: int = 1000,
        default_ttl: int = 300,  # 5 minutes
    ):
        """
        Initialize the cache.

        Args:
            max_size: Maximum number of entries.
            default_ttl: Default time-to-live in seconds.
        """
        self._cache: OrderedDict[str, CacheEntry[T]] = OrderedDict()
        self._max_size = max_size
        self._default_ttl = default_ttl
        self._hits = 0
        self._misses = 0

    def __len__(self) -> int:
        return len(self._cache)

    def __contains__(self, key: str) -> bool:
        entry = self._cache.get(key)
        return entry is not None and not entry.is_expired()

    def get(self, key: str) -> Optional[T]:
        """
        Get a value from the cache.

        Returns:
            Cached value or None if not found/expired.
        """
        entry = self._cache.get(key)

        if entry is None:
            self._misses += 1
            return None

        if entry.is_expired():
            del self._cache[key]
            self._misses += 1
            return None

        # Move to end (most recently used)
        self._cache.move_to_end(key)
        self._hits += 1
        return entry.value

    def set(self, key: str, value: T, ttl: Optional[int] = None) -> None:
        """
        Set a value in the cache.

        Args:
            key: Entity id.
            value: Value to cache.
            ttl: Optional TTL override in seconds.
        """
        ttl = ttl or self._default_ttl

        if key in self._cache:
            del self._cache[key]

        # Remove oldest entries if at capacity
        while len(self._cache) >= self._max_size:
            self._cache.popitem(last=False)

        self._cache[key] = CacheEntry(value=value, expires_at=time.time() + ttl)

    def delete(self, key: str) -> bool:
        """
        Delete a key from the cache.

        Returns:
            True if deleted, False if not found.
        """
        if key in self._cache:
            del self._cache[key]
            return True
        return False

    def replace_all(self, items: Mapping[str, T]) -> None:
        """Drop every entry and load ``items`` in their given order."""
        self._cache.clear()
        for key, value in items.items():
            self.set(key, value)

    def values(self) -> List[T]:
        """Unexpired values, least recently used first. Does not touch stats."""
        now = time.time()
        return [entry.value for entry in self._cache.values() if entry.expires_at >= now]

    def clear(self) -> None:
        """Clear all entries from the cache."""
        self._cache.clear()
        self._hits = 0
        self._misses = 0

    def stats(self) -> Dict[str, Any]:
        """
        Get cache statistics.

        Returns:
            Dict with hit/miss counts and hit rate.
        """
        total = self._hits + self._misses
        hit_rate = (self._hits / total * 100) if total > 0 else 0.0
        return {
            "size": len(self._cache),
            "max_size": self._max_size,
            "hits": self._hits,
            "misses": self._misses,
            "hit_rate_percent": round(hit_rate, 2),
        }
