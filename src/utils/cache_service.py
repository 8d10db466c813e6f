"""
In-Memory LRU Cache Service.

Holds fetched working sets keyed by filter fingerprint so warm Lambda
invocations can serve repeat queries and merge pushed changes in place.
"""

from collections import OrderedDict
from datetime import datetime, timedelta, timezone
from threading import Lock
from typing import Any, Callable, List, Optional, Tuple


class LRUCache:
    """Thread-safe LRU cache with TTL support."""

    def __init__(self, max_size: int = 100, ttl_seconds: int = 300):
        self.max_size = max_size
        self.ttl_seconds = ttl_seconds
        self._cache: OrderedDict[str, Tuple[Any, datetime]] = OrderedDict()
        self._lock = Lock()
        self._hits = 0
        self._misses = 0

    def _expired(self, stored_at: datetime) -> bool:
        return datetime.now(timezone.utc) - stored_at > timedelta(seconds=self.ttl_seconds)

    def get(self, key: str) -> Optional[Any]:
        """Get value from cache if exists and not expired."""
        with self._lock:
            entry = self._cache.get(key)
            if entry is None or self._expired(entry[1]):
                self._cache.pop(key, None)
                self._misses += 1
                return None

            self._hits += 1
            self._cache.move_to_end(key)
            return entry[0]

    def set(self, key: str, value: Any) -> None:
        """Set value in cache."""
        with self._lock:
            if key in self._cache:
                self._cache.move_to_end(key)
            self._cache[key] = (value, datetime.now(timezone.utc))

            while len(self._cache) > self.max_size:
                self._cache.popitem(last=False)

    def delete(self, key: str) -> bool:
        """Delete key from cache."""
        with self._lock:
            if key in self._cache:
                del self._cache[key]
                return True
            return False

    def transform(
        self, prefix: str, fn: Callable[[Any], Any], skip: Tuple[str, ...] = ()
    ) -> List[str]:
        """
        Replace every live entry whose key starts with ``prefix`` by ``fn(value)``.
        Keys listed in ``skip`` are left alone.

        The original timestamp is kept so merged entries still expire on
        schedule. Returns the keys that were rewritten.
        """
        touched: List[str] = []
        with self._lock:
            for key in list(self._cache.keys()):
                if not key.startswith(prefix) or key in skip:
                    continue
                value, stored_at = self._cache[key]
                if self._expired(stored_at):
                    del self._cache[key]
                    continue
                self._cache[key] = (fn(value), stored_at)
                touched.append(key)
        return touched

    def clear(self) -> None:
        """Clear all cache entries."""
        with self._lock:
            self._cache.clear()

    def stats(self) -> dict:
        """Return cache statistics."""
        with self._lock:
            return {
                "size": len(self._cache),
                "max_size": self.max_size,
                "ttl_seconds": self.ttl_seconds,
                "hits": self._hits,
                "misses": self._misses,
            }
