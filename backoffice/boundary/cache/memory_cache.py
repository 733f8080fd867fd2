"""
In-memory TTL cache.

Thread-safe key/value store whose entries expire after a per-entry
time-to-live. Used to cache external data fetch results.

Dependencies: threading, time (stdlib)
System role: Process-local result cache for the data fetcher
"""

import threading
import time
from functools import lru_cache
from typing import Any, Callable


class MemoryTTLCache:
    """Dict-backed cache with per-entry expiry guarded by a lock."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        """
        Initialize an empty cache.

        Args:
            clock: Monotonic time source in seconds (injectable for tests)
        """
        self._store: dict[str, tuple[Any, float]] = {}
        self._lock = threading.Lock()
        self._clock = clock

    def get(self, key: str) -> Any | None:
        """
        Return a cached value, or None when missing or expired.

        Args:
            key: Cache key

        Returns:
            Cached value or None
        """
        now = self._clock()
        with self._lock:
            hit = self._store.get(key)
            if hit is None:
                return None
            value, expires_at = hit
            if now >= expires_at:
                self._store.pop(key, None)
                return None
            return value

    def set(self, key: str, value: Any, ttl_seconds: int) -> None:
        """
        Store a value for ttl_seconds. Non-positive TTLs are ignored.

        Args:
            key: Cache key
            value: Value to store
            ttl_seconds: Lifetime in seconds
        """
        if ttl_seconds <= 0:
            return
        with self._lock:
            self._store[key] = (value, self._clock() + ttl_seconds)

    def delete(self, key: str) -> None:
        with self._lock:
            self._store.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._store.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._store)


@lru_cache
def get_data_cache() -> MemoryTTLCache:
    """Process-wide cache shared by all data fetcher instances."""
    return MemoryTTLCache()
