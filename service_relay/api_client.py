"""Async JSON API client."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Protocol

import httpx

from . import config
from .errors import TransportError
from .models.api import ApiResponse

logger = logging.getLogger(__name__)


class HttpClient(Protocol):
    """Backing-data fetcher used by the services."""

    async def get(self, path: str) -> Any: ...

    async def post(self, path: str, data: Any) -> Any: ...


class JsonHttpClient:
    """httpx-backed HttpClient speaking JSON.

    A fresh ``httpx.AsyncClient`` is opened per request. Non-2xx answers
    and httpx transport errors are raised as ``TransportError``.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout_s: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = (base_url or config.API_BASE_URL).rstrip("/")
        self.timeout_s = config.HTTP_TIMEOUT_S if timeout_s is None else timeout_s
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout_s,
            transport=self._transport,
            headers={"Accept": "application/json"},
        )

    async def _request(self, method: str, path: str, data: Any = None) -> Any:
        async with self._client() as client:
            try:
                resp = await client.request(method, path, json=data)
            except httpx.HTTPError as exc:
                logger.error("%s %s failed: %s", method, path, exc)
                raise TransportError(f"{method} {path} failed: {exc}") from exc
        if not resp.is_success:
            snippet = resp.text[:200].replace("\n", " ")
            raise TransportError(
                f"{method} {path} returned HTTP {resp.status_code}: {snippet}",
                status_code=resp.status_code,
            )
        if not resp.content:
            return None
        return resp.json()

    async def get(self, path: str) -> Any:
        return await self._request("GET", path)

    async def post(self, path: str, data: Any) -> Any:
        return await self._request("POST", path, data)


class ApiClient:
    """User and file endpoints on top of an HttpClient."""

    def __init__(self, http: HttpClient | None = None) -> None:
        self.http = http or JsonHttpClient()

    async def get_user(self, user_id: int) -> ApiResponse[dict[str, Any]]:
        data = await self.http.get(f"/users/{user_id}")
        return ApiResponse(data=data, status=200, message="Success")

    async def create_user(self, name: str, email: str) -> ApiResponse[dict[str, Any]]:
        data = await self.http.post("/users", {"name": name, "email": email})
        return ApiResponse(data=data, status=201, message="User created successfully")

    async def get_users(
        self, user_ids: list[int]
    ) -> ApiResponse[list[dict[str, Any]]]:
        """Fetch all users concurrently; the first failure fails the call."""
        results = await asyncio.gather(*(self.get_user(uid) for uid in user_ids))
        return ApiResponse(
            data=[r.data for r in results],
            status=200,
            message=f"Retrieved {len(results)} users",
        )


__all__ = ["ApiClient", "HttpClient", "JsonHttpClient"]
