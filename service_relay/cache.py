"""Cache-aside accessor and an in-memory TTL cache store.

The accessor checks the store first and only calls the fetcher on a miss.
Reads are not atomic: two concurrent readers of the same missing key may
both fetch, and the later write wins.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Awaitable, Callable, Protocol

from .models.cache import CacheEntry


class CacheStore(Protocol):
    """Key-value store with per-entry TTL. ``None`` from ``get`` means absent."""

    def get(self, key: str) -> Any: ...

    def set(self, key: str, value: Any, ttl: float | None = None) -> None: ...

    def delete(self, key: str) -> None: ...


class TtlCache:
    """Dict-backed CacheStore. Expired entries are dropped lazily on read."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}

    def get(self, key: str) -> Any:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if entry.is_expired(self._clock()):
            self._entries.pop(key, None)
            return None
        return entry.value

    def set(self, key: str, value: Any, ttl: float | None = None) -> None:
        if ttl is not None and ttl < 0:
            raise ValueError("ttl must be >= 0")
        expires_at = self._clock() + ttl if ttl is not None else None
        self._entries[key] = CacheEntry(value=value, expires_at=expires_at)

    def delete(self, key: str) -> None:
        self._entries.pop(key, None)

    def prune(self) -> int:
        """Drop every expired entry and return how many were removed."""
        now = self._clock()
        expired = [k for k, e in self._entries.items() if e.is_expired(now)]
        for key in expired:
            del self._entries[key]
        return len(expired)

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.get(key) is not None

    def __len__(self) -> int:
        return len(self._entries)


class CacheAside:
    """Read-through accessor over a CacheStore with a fixed TTL."""

    def __init__(
        self,
        store: CacheStore,
        ttl_s: float,
        logger: logging.Logger | None = None,
    ) -> None:
        if ttl_s < 0:
            raise ValueError("ttl_s must be >= 0")
        self.store = store
        self.ttl_s = ttl_s
        self.logger = logger or logging.getLogger(__name__)
        self.hits = 0
        self.misses = 0

    async def get(self, key: str, fetcher: Callable[[], Awaitable[Any]]) -> Any:
        """Return the cached value for ``key`` or fetch and store it.

        Fetcher errors propagate unchanged and nothing is cached for them.
        A fetched ``None`` is returned but not stored.
        """
        cached = self.store.get(key)
        if cached is not None:
            self.hits += 1
            self.logger.debug("Cache hit for %s", key)
            return cached

        self.misses += 1
        self.logger.debug("Cache miss for %s", key)
        value = await fetcher()
        if value is not None:
            self.store.set(key, value, self.ttl_s)
        return value

    def invalidate(self, key: str) -> None:
        self.store.delete(key)
        self.logger.debug("Invalidated cache entry %s", key)


__all__ = ["CacheAside", "CacheStore", "TtlCache"]
