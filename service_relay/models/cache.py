"""Cache-related dataclasses."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class CacheEntry:
    """Cached value with an optional monotonic expiry timestamp."""

    value: object
    expires_at: float | None = None

    def is_expired(self, now: float) -> bool:
        return self.expires_at is not None and now >= self.expires_at
