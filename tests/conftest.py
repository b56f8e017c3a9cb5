"""Shared test fixtures and dummy classes."""

from __future__ import annotations

from typing import Any


class DummyHttpClient:
    """In-memory HttpClient recording every call."""

    def __init__(self, data: Any = None, error: Exception | None = None) -> None:
        self.data = data
        self.error = error
        self.gets: list[str] = []
        self.posts: list[tuple[str, Any]] = []

    async def get(self, path: str) -> Any:
        self.gets.append(path)
        if self.error is not None:
            raise self.error
        return self.data

    async def post(self, path: str, data: Any) -> Any:
        self.posts.append((path, data))
        if self.error is not None:
            raise self.error
        return {"success": True}


class DummyCache:
    """Dict-backed CacheStore recording set/delete calls."""

    def __init__(self, primed: dict[str, Any] | None = None) -> None:
        self.data: dict[str, Any] = dict(primed or {})
        self.sets: list[tuple[str, Any, float | None]] = []
        self.deletes: list[str] = []

    def get(self, key: str) -> Any:
        return self.data.get(key)

    def set(self, key: str, value: Any, ttl: float | None = None) -> None:
        self.sets.append((key, value, ttl))
        self.data[key] = value

    def delete(self, key: str) -> None:
        self.deletes.append(key)
        self.data.pop(key, None)


class DummyEmailSender:
    """Email sender with per-address results; exceptions are raised."""

    def __init__(self, results: dict[str, object] | None = None) -> None:
        self.results = results or {}
        self.sent: list[tuple[str, str, str]] = []

    async def send_email(self, to: str, subject: str, body: str) -> bool:
        self.sent.append((to, subject, body))
        result = self.results.get(to, True)
        if isinstance(result, Exception):
            raise result
        return bool(result)


class DummySmsSender:
    def __init__(self, result: object = True) -> None:
        self.result = result
        self.sent: list[tuple[str, str]] = []

    async def send_sms(self, phone_number: str, message: str) -> bool:
        self.sent.append((phone_number, message))
        if isinstance(self.result, Exception):
            raise self.result
        return bool(self.result)


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class RecordingSleep:
    """Awaitable sleep replacement that records requested delays."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)
