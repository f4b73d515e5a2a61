"""Process-local TTL cache guarded by an :class:`asyncio.Lock`.

Every operation holds the instance lock for its whole duration, so reads,
writes and clears on one cache are serialised. There is no read-read
parallelism; call volume is driven by a user at a terminal.

Expiry is lazy. :meth:`InMemoryCache.get` removes the entry it finds stale
and reports a miss; nothing sweeps the map in the background. As a
consequence :meth:`InMemoryCache.size` counts stale entries that no ``get``
has touched yet.

See Also:
    :class:`~catalogcli.models.CacheConfig` -- the Pydantic model that
    holds ``default_ttl_seconds`` and ``long_ttl_seconds``.
"""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass
from typing import Callable, Generic, Hashable, Optional, TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")

DEFAULT_TTL = 5 * 60.0
"""Seconds an entry stays fresh unless ``put`` is given another TTL."""

LONG_TTL = 30 * 60.0
"""Seconds for data that rarely changes (the category list)."""


@dataclass(frozen=True, slots=True)
class CacheEntry(Generic[V]):
    """One cached value with the time it was stored and how long it lives."""

    value: V
    created_at: float
    ttl: float = DEFAULT_TTL

    def is_expired(self, now: float) -> bool:
        return now - self.created_at > self.ttl


class InMemoryCache(Generic[K, V]):
    """Generic in-memory cache with per-entry TTL and lazy eviction.

    Keys must implement ``__eq__`` and ``__hash__`` by value (strings, ints,
    tuples of those); identity is never used. Values are stored and returned
    as-is, without copying.

    Args:
        clock: Monotonic time source in seconds. Tests inject a fake clock
            to step over TTL boundaries without sleeping.

    Example::

        cache: InMemoryCache[str, int] = InMemoryCache()
        await cache.put("answer", 42, ttl=0.1)
        assert await cache.get("answer") == 42
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._entries: dict[K, CacheEntry[V]] = {}
        self._lock = asyncio.Lock()
        self._clock = clock

    async def get(self, key: K) -> Optional[V]:
        """Return the value stored under *key*, or ``None`` on a miss.

        A stale entry is removed before the miss is reported. A stored
        ``None`` reads the same as a miss, so read-through callers should
        not cache ``None`` values.
        """
        async with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if entry.is_expired(self._clock()):
                del self._entries[key]
                return None
            return entry.value

    async def put(self, key: K, value: V, ttl: float = DEFAULT_TTL) -> None:
        """Store *value* under *key*, replacing any entry and restarting its clock."""
        async with self._lock:
            self._entries[key] = CacheEntry(value=value, created_at=self._clock(), ttl=ttl)

    async def remove(self, key: K) -> None:
        """Drop the entry for *key*. Missing keys are ignored."""
        async with self._lock:
            self._entries.pop(key, None)

    async def clear(self) -> None:
        """Remove every entry."""
        async with self._lock:
            self._entries.clear()

    async def size(self) -> int:
        """Return the number of stored entries, stale ones included."""
        async with self._lock:
            return len(self._entries)
