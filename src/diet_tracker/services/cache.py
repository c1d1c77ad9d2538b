"""TTL cache used by application services for slow-changing store data."""

import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol


class Cache(Protocol):
    """Key-value cache with per-entry expiry."""

    def get(self, key: str) -> object | None:
        """Return the cached value, or None when missing or expired."""

    def set(self, key: str, value: object, ttl_seconds: int) -> None:
        """Store a value for ``ttl_seconds``."""

    def invalidate(self, key: str) -> None:
        """Drop a cached value if present."""


@dataclass
class _Entry:
    value: object
    expires_at: float


@dataclass
class InMemoryCache(Cache):
    """Process-local cache keyed by string."""

    clock: Callable[[], float] = time.monotonic
    _entries: dict[str, _Entry] = field(default_factory=dict)

    def get(self, key: str) -> object | None:
        """Return a live entry, evicting it once expired."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self.clock() >= entry.expires_at:
            del self._entries[key]
            return None
        return entry.value

    def set(self, key: str, value: object, ttl_seconds: int) -> None:
        """Store a value that expires after ``ttl_seconds``."""
        self._entries[key] = _Entry(value=value, expires_at=self.clock() + ttl_seconds)

    def invalidate(self, key: str) -> None:
        """Remove an entry."""
        self._entries.pop(key, None)
