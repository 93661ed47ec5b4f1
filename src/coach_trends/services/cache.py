"""TTL cache for derived trend views."""

from collections.abc import Hashable
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Protocol

from coach_trends.services.date_ranges import Clock, system_clock


class Cache(Protocol):
    """Cache interface keyed by hashable tuples."""

    def get(self, key: Hashable) -> object | None:
        """Return a cached value if present and not expired."""

    def set(self, key: Hashable, value: object, ttl_seconds: int) -> None:
        """Store a cached value with a TTL in seconds."""


@dataclass
class _CacheEntry:
    value: object
    expires_at: datetime


@dataclass
class InMemoryCache(Cache):
    """Process-local cache. Results are recomputed once an entry expires."""

    clock: Clock = system_clock
    _entries: dict[Hashable, _CacheEntry] = field(default_factory=dict)

    def get(self, key: Hashable) -> object | None:
        """Return a cached value if it hasn't expired."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self.clock() >= entry.expires_at:
            self._entries.pop(key, None)
            return None
        return entry.value

    def set(self, key: Hashable, value: object, ttl_seconds: int) -> None:
        """Store a cached value with a TTL."""
        if ttl_seconds <= 0:
            return
        now = self.clock()
        self._entries = {
            stored_key: entry
            for stored_key, entry in self._entries.items()
            if entry.expires_at > now
        }
        expires_at = now + timedelta(seconds=ttl_seconds)
        self._entries[key] = _CacheEntry(value=value, expires_at=expires_at)
