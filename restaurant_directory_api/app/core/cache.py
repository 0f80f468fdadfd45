"""
In-process read-through cache for restaurant point lookups.

Entries are keyed by restaurant name and expire after a fixed
time-to-live.  Writers (create, rating, delete) call ``invalidate`` so
a cached record never outlives the change that made it stale.  Ranked
queries are not cached.
"""

from __future__ import annotations

import threading
import time
from typing import Any, Callable


class RestaurantCache:
    """TTL cache of external restaurant records keyed by name."""

    def __init__(self, ttl_seconds: int = 300, clock: Callable[[], float] = time.monotonic) -> None:
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[str, dict[str, Any]] = {}
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0

    def get(self, name: str) -> dict | None:
        with self._lock:
            entry = self._entries.get(name)
            if entry and self._clock() - entry["created_at"] < self.ttl_seconds:
                self._hits += 1
                return dict(entry["value"])
            if entry:
                del self._entries[name]
            self._misses += 1
            return None

    def set(self, name: str, value: dict) -> None:
        with self._lock:
            self._entries[name] = {"value": dict(value), "created_at": self._clock()}

    def invalidate(self, name: str) -> None:
        with self._lock:
            self._entries.pop(name, None)

    def stats(self) -> dict:
        with self._lock:
            total = self._hits + self._misses
            return {
                "size": len(self._entries),
                "hits": self._hits,
                "misses": self._misses,
                "hit_rate": round(self._hits / total * 100, 1) if total > 0 else 0.0,
            }

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self._hits = 0
            self._misses = 0
