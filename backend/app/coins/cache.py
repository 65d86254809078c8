"""Thread-safe in-memory cache store with per-key TTL."""

from __future__ import annotations

import time
from collections.abc import Callable
from threading import Lock

from .interface import CacheStore


class InMemoryCacheStore(CacheStore):
    """Process-local stand-in for Redis, used when no REDIS_URL is configured.

    Writers: SnapshotBuilder (request-triggered or scheduled).
    Readers: CoinService.ensure_fresh.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._entries: dict[str, tuple[str, float]] = {}  # key -> (value, expires_at)
        self._lock = Lock()
        self._clock = clock
        self._writes: int = 0

    async def get(self, key: str) -> str | None:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            value, expires_at = entry
            if self._clock() >= expires_at:
                del self._entries[key]
                return None
            return value

    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        with self._lock:
            self._entries[key] = (value, self._clock() + ttl_seconds)
            self._writes += 1

    def ttl(self, key: str) -> float | None:
        """Seconds until `key` expires, or None if absent or already expired."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            remaining = entry[1] - self._clock()
            return remaining if remaining > 0 else None

    @property
    def writes(self) -> int:
        """Number of successful writes since creation."""
        return self._writes

    def __len__(self) -> int:
        with self._lock:
            now = self._clock()
            return sum(1 for _, expires_at in self._entries.values() if expires_at > now)

    def __contains__(self, key: str) -> bool:
        return self.ttl(key) is not None
