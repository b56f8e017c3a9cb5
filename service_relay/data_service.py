"""User data access with cache-aside reads and invalidate-on-write updates."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from . import config
from .api_client import HttpClient
from .cache import CacheAside, CacheStore

_USER_CACHE_TTL_S = 5 * 60


def user_cache_key(user_id: int) -> str:
    return f"user:{user_id}"


class DataService:
    """Reads user records through a cache and writes profiles to the API.

    ``get_user_data`` re-raises fetch failures after logging them.
    ``update_user_profile`` never raises; it returns ``False`` on failure.
    """

    def __init__(
        self,
        http_client: HttpClient,
        cache: CacheStore,
        logger: logging.Logger | None = None,
        ttl_s: float = _USER_CACHE_TTL_S,
    ) -> None:
        self.http_client = http_client
        self.logger = logger or logging.getLogger(__name__)
        self.cache = CacheAside(cache, ttl_s, logger=self.logger)

    @classmethod
    def from_config(cls, http_client: HttpClient, cache: CacheStore) -> DataService:
        return cls(http_client, cache, ttl_s=config.CACHE_TTL_S)

    async def get_user_data(self, user_id: int) -> Any:
        key = user_cache_key(user_id)
        fetched = False

        async def fetch() -> Any:
            nonlocal fetched
            fetched = True
            self.logger.info(f"Fetching user data from API for user {user_id}")
            try:
                return await self.http_client.get(f"/users/{user_id}")
            except Exception as exc:
                self.logger.error(
                    f"Failed to fetch user data for user {user_id}", exc_info=exc
                )
                raise

        data = await self.cache.get(key, fetch)
        if not fetched:
            self.logger.info(f"User data found in cache for user {user_id}")
        return data

    async def get_users_data(self, user_ids: list[int]) -> list[Any]:
        """Read several users concurrently; the first failure fails the call."""
        return list(await asyncio.gather(*(self.get_user_data(u) for u in user_ids)))

    async def update_user_profile(self, user_id: int, profile: Any) -> bool:
        try:
            await self.http_client.post(f"/users/{user_id}/profile", profile)
        except Exception as exc:
            self.logger.error(
                f"Failed to update user profile for user {user_id}", exc_info=exc
            )
            return False

        self.cache.invalidate(user_cache_key(user_id))
        self.logger.info(f"User profile updated for user {user_id}")
        return True


__all__ = ["DataService", "user_cache_key"]
