"""Generic LRU cache with TTL and statistics.

Used by the export packager to memoize results for unchanged
(tree, options) pairs. Keys are hashed so callers can pass long
canonical JSON strings.
"""

import threading
import time
from typing import Callable, Generic, TypeVar, Any
from collections import OrderedDict
from dataclasses import dataclass

from .hash import hash_string, Algorithm

T = TypeVar("T")


@dataclass
class Stats:
    """Cache statistics."""

    size: int = 0
    max_size: int = 0
    hits: int = 0
    misses: int = 0
    evictions: int = 0

    @property
    def hit_rate(self) -> float:
        """Calculate hit rate (0.0 to 1.0)."""
        total = self.hits + self.misses
        return self.hits / total if total > 0 else 0.0

    def to_dict(self) -> dict[str, Any]:
        """Export as dictionary."""
        return {
            "size": self.size,
            "max_size": self.max_size,
            "hits": self.hits,
            "misses": self.misses,
            "evictions": self.evictions,
            "hit_rate": self.hit_rate,
        }


class LRUCache(Generic[T]):
    """
    LRU cache with TTL support and statistics tracking.

    Examples:
        >>> cache = LRUCache[str](max_size=100, ttl_seconds=600)
        >>> cache.set("key", "value")
        >>> cache.get("key")
        'value'
    """

    def __init__(
        self,
        max_size: int = 100,
        ttl_seconds: int | None = None,
        hash_algorithm: Algorithm = Algorithm.XXHASH64,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize LRU cache.

        Args:
            max_size: Maximum number of entries
            ttl_seconds: Time-to-live in seconds (None = no expiration)
            hash_algorithm: Algorithm for computing cache keys
            clock: Time source (seconds)
        """
        if max_size <= 0:
            raise ValueError("max_size must be positive")

        self.max_size = max_size
        self.ttl_seconds = ttl_seconds
        self.hash_algorithm = hash_algorithm
        self._clock = clock

        self._cache: OrderedDict[str, tuple[T, float]] = OrderedDict()
        self._stats = Stats(max_size=max_size)
        self._lock = threading.Lock()

    def _key(self, key: str) -> str:
        return hash_string(key, self.hash_algorithm, truncate=16)

    def _expired(self, stored_at: float) -> bool:
        if self.ttl_seconds is None:
            return False
        return self._clock() - stored_at >= self.ttl_seconds

    def get(self, key: str) -> T | None:
        """Get cached value if present and not expired."""
        cache_key = self._key(key)

        with self._lock:
            entry = self._cache.get(cache_key)
            if entry is None:
                self._stats.misses += 1
                return None

            value, stored_at = entry
            if self._expired(stored_at):
                del self._cache[cache_key]
                self._stats.size = len(self._cache)
                self._stats.misses += 1
                return None

            self._cache.move_to_end(cache_key)
            self._stats.hits += 1
            return value

    def set(self, key: str, value: T) -> None:
        """Cache value, evicting the least recently used entry when full."""
        cache_key = self._key(key)

        with self._lock:
            self._cache.pop(cache_key, None)
            self._cache[cache_key] = (value, self._clock())

            if len(self._cache) > self.max_size:
                self._cache.popitem(last=False)
                self._stats.evictions += 1

            self._stats.size = len(self._cache)

    def get_or_set(self, key: str, factory: Callable[[], T]) -> T:
        """Return the cached value or compute, store and return it."""
        cached = self.get(key)
        if cached is not None:
            return cached
        value = factory()
        self.set(key, value)
        return value

    def delete(self, key: str) -> bool:
        """Delete entry; True if it existed."""
        cache_key = self._key(key)
        with self._lock:
            if self._cache.pop(cache_key, None) is None:
                return False
            self._stats.size = len(self._cache)
            return True

    def clear(self) -> None:
        """Clear entire cache."""
        with self._lock:
            self._cache.clear()
            self._stats.size = 0

    @property
    def stats(self) -> Stats:
        return self._stats

    def __len__(self) -> int:
        return len(self._cache)

    def __contains__(self, key: str) -> bool:
        """Check if key exists (doesn't update LRU order)."""
        return self._key(key) in self._cache


__all__ = ["LRUCache", "Stats"]
