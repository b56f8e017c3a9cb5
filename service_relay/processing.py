"""Async task helpers: transform, parallel fan-out, sequential runs, retry.

The parallel helpers wait for every task and fail on the first exception
(``asyncio.gather`` semantics); tasks still running at that point are not
cancelled.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Awaitable, Callable, Iterable, TypeVar

from .retry import with_retry

logger = logging.getLogger(__name__)

T = TypeVar("T")
U = TypeVar("U")


async def transform_data(
    items: Iterable[T], transformer: Callable[[T], Awaitable[U]]
) -> list[U]:
    """Apply ``transformer`` to every item concurrently, keeping input order."""
    return list(await asyncio.gather(*(transformer(item) for item in items)))


async def process_in_parallel(tasks: Iterable[Callable[[], Awaitable[T]]]) -> list[T]:
    """Start every task before awaiting any; results follow input order."""
    started = time.monotonic()
    results = list(await asyncio.gather(*(task() for task in tasks)))
    logger.debug(
        "Ran %d tasks in parallel in %.3fs", len(results), time.monotonic() - started
    )
    return results


async def process_sequentially(
    tasks: Iterable[Callable[[], Awaitable[T]]],
) -> list[T]:
    """Run tasks one at a time; the first exception stops the run."""
    started = time.monotonic()
    results: list[T] = []
    for task in tasks:
        results.append(await task())
    logger.debug(
        "Ran %d tasks sequentially in %.3fs",
        len(results),
        time.monotonic() - started,
    )
    return results


__all__ = [
    "process_in_parallel",
    "process_sequentially",
    "transform_data",
    "with_retry",
]
