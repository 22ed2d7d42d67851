"""In-memory response cache with a fixed TTL and lazy eviction."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Optional

# Upstream stats change during live games; keep responses short-lived.
DEFAULT_TTL_SECONDS = 120


@dataclass
class CacheEntry:
    """A stored payload and the monotonic time it stops being served."""

    value: Any
    expires_at: float


class TTLCache:
    """
    Thread-safe in-memory cache with TTL.

    Entries are evicted lazily: an expired entry is removed by the lookup that
    finds it. There is no capacity bound, the key space is the set of distinct
    upstream requests made while the process is up.
    """

    def __init__(
        self,
        ttl: int = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize cache.

        Args:
            ttl: Time-to-live in seconds applied to every entry
            clock: Source of the current time in seconds (injectable for tests)
        """
        self._cache: dict[str, CacheEntry] = {}
        self._lock = threading.RLock()
        self._clock = clock
        self.ttl = ttl
        self._hits = 0
        self._misses = 0

    def get(self, key: str) -> Optional[Any]:
        """
        Get cached value if not expired.

        Returns:
            Cached value if present and not expired, None otherwise
        """
        with self._lock:
            entry = self._cache.get(key)
            if entry is None:
                self._misses += 1
                return None
            if self._clock() >= entry.expires_at:
                del self._cache[key]
                self._misses += 1
                return None
            self._hits += 1
            return entry.value

    def set(self, key: str, value: Any) -> None:
        """Store value under key, replacing any previous entry."""
        expires_at = self._clock() + self.ttl
        with self._lock:
            self._cache[key] = CacheEntry(value=value, expires_at=expires_at)

    def delete(self, key: str) -> None:
        with self._lock:
            self._cache.pop(key, None)

    def clear(self) -> None:
        """Clear all cached values."""
        with self._lock:
            self._cache.clear()

    def size(self) -> int:
        """Get number of stored entries (expired ones included until looked up)."""
        with self._lock:
            return len(self._cache)

    def cleanup_expired(self) -> int:
        """Remove all expired entries. Returns count of removed entries."""
        now = self._clock()
        with self._lock:
            expired_keys = [
                key for key, entry in self._cache.items() if now >= entry.expires_at
            ]
            for key in expired_keys:
                del self._cache[key]
        return len(expired_keys)

    def get_stats(self) -> dict[str, Any]:
        with self._lock:
            lookups = self._hits + self._misses
            return {
                "backend": "memory",
                "entries": len(self._cache),
                "ttl_seconds": self.ttl,
                "hits": self._hits,
                "misses": self._misses,
                "hit_rate": round(self._hits / lookups, 3) if lookups else 0.0,
            }
