"""In-memory read-through caching for catalogcli.

This package provides :class:`InMemoryCache`, a generic key/value store with
a per-entry time-to-live. Entries are evicted lazily: a stale entry stays in
the map until a :meth:`~InMemoryCache.get` for its key observes the expiry.

The cache is consumed by :class:`~catalogcli.repository.ProductRepository`,
which keeps one instance per query shape. TTLs come from the ``cache``
section of the global configuration (:class:`~catalogcli.models.CacheConfig`).
"""

from catalogcli.cache.cache import DEFAULT_TTL, LONG_TTL, CacheEntry, InMemoryCache

__all__ = ["InMemoryCache", "CacheEntry", "DEFAULT_TTL", "LONG_TTL"]
