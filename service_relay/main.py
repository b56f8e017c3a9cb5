"""Entrypoint for the local demo.

Runs the cache-aside, fan-out, retry and bulk-dispatch helpers against
in-process fakes with simulated latency and logs what happened.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any

from .cache import TtlCache
from .data_service import DataService
from .dispatch import DispatchPolicy
from .errors import TransportError
from .logger import setup_logging
from .models.users import Recipient
from .notifications import NotificationService
from .processing import process_in_parallel, process_sequentially
from .retry import RetryPolicy, run_with_policy

logger = logging.getLogger(__name__)

_FAKE_LATENCY_S = 0.1


class _SimulatedApi:
    """HttpClient that answers from memory after a fixed delay."""

    def __init__(self, latency_s: float = _FAKE_LATENCY_S) -> None:
        self.latency_s = latency_s
        self.calls = 0

    async def get(self, path: str) -> Any:
        self.calls += 1
        await asyncio.sleep(self.latency_s)
        user_id = int(path.rsplit("/", 1)[-1])
        return {"id": user_id, "name": f"User {user_id}"}

    async def post(self, path: str, data: Any) -> Any:
        self.calls += 1
        await asyncio.sleep(self.latency_s)
        return {"ok": True}


class _FlakyMailer:
    """Email/SMS sender that rejects listed addresses."""

    def __init__(self, reject: set[str]) -> None:
        self.reject = reject

    async def send_email(self, to: str, subject: str, body: str) -> bool:
        await asyncio.sleep(_FAKE_LATENCY_S / 10)
        if to in self.reject:
            raise TransportError(f"mailbox unavailable: {to}")
        return True

    async def send_sms(self, phone_number: str, message: str) -> bool:
        return True


async def _demo_fan_out() -> None:
    api = _SimulatedApi()
    tasks = [lambda i=i: api.get(f"/users/{i}") for i in range(1, 6)]

    started = time.monotonic()
    await process_sequentially(tasks)
    sequential_s = time.monotonic() - started

    started = time.monotonic()
    await process_in_parallel(tasks)
    parallel_s = time.monotonic() - started

    logger.info(
        "Fetched %d users: sequential %.2fs, parallel %.2fs",
        len(tasks),
        sequential_s,
        parallel_s,
    )


async def _demo_cache() -> None:
    api = _SimulatedApi()
    service = DataService.from_config(api, TtlCache())
    await service.get_user_data(123)
    await service.get_user_data(123)
    await service.update_user_profile(123, {"bio": "Updated bio"})
    await service.get_user_data(123)
    logger.info("Cache demo made %d backend calls", api.calls)


async def _demo_retry() -> None:
    attempts = 0

    async def flaky() -> str:
        nonlocal attempts
        attempts += 1
        if attempts < 3:
            raise TransportError(f"transient failure #{attempts}")
        return "ok"

    result = await run_with_policy(flaky, RetryPolicy.from_config())
    logger.info("Retry demo returned %r after %d attempts", result, attempts)


async def _demo_bulk() -> None:
    recipients = [
        Recipient(email="alice@example.com", name="Alice"),
        Recipient(email="bob@example.com", name="Bob"),
        Recipient(email="carol@example.com", name="Carol", phone="+15550100"),
    ]
    mailer = _FlakyMailer(reject={"bob@example.com"})
    service = NotificationService(mailer, mailer)
    result = await service.send_bulk_notifications(
        recipients,
        "Service update",
        lambda name: f"Hi {name}, we shipped something new.",
        policy=DispatchPolicy.PARALLEL,
    )
    logger.info("Bulk demo result: %s", result.as_dict())


async def run_demo() -> None:
    await _demo_fan_out()
    await _demo_cache()
    await _demo_retry()
    await _demo_bulk()


def main() -> None:
    setup_logging()
    asyncio.run(run_demo())


if __name__ == "__main__":
    main()
