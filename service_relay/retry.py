"""Retry with exponential backoff for async operations.

Attempt ``i`` (0-indexed) that fails is followed by a pause of
``base_delay_s * 2 ** i`` before attempt ``i + 1``. When every attempt
fails, the exception from the final attempt is re-raised.
"""

from __future__ import annotations

import asyncio
import functools
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, TypeVar

from . import config

logger = logging.getLogger(__name__)

T = TypeVar("T")

Sleep = Callable[[float], Awaitable[Any]]


@dataclass(frozen=True)
class RetryPolicy:
    """Retry bounds and backoff timing."""

    max_retries: int = 3
    base_delay_s: float = 0.1
    max_delay_s: float | None = None

    def __post_init__(self) -> None:
        if self.max_retries < 0:
            raise ValueError("max_retries must be >= 0")
        if self.base_delay_s < 0:
            raise ValueError("base_delay_s must be >= 0")
        if self.max_delay_s is not None and self.max_delay_s < 0:
            raise ValueError("max_delay_s must be >= 0")

    @classmethod
    def from_config(cls) -> RetryPolicy:
        return cls(
            max_retries=config.RETRY_MAX_RETRIES,
            base_delay_s=config.RETRY_BASE_DELAY_S,
        )

    @property
    def total_attempts(self) -> int:
        return self.max_retries + 1

    def delay_for(self, attempt: int) -> float:
        """Delay after failed attempt ``attempt`` (0-indexed)."""
        delay = self.base_delay_s * (2**attempt)
        if self.max_delay_s is not None:
            delay = min(self.max_delay_s, delay)
        return delay


async def run_with_policy(
    operation: Callable[[], Awaitable[T]],
    policy: RetryPolicy,
    *,
    retry_on: tuple[type[BaseException], ...] = (Exception,),
    sleep: Sleep = asyncio.sleep,
    name: str | None = None,
) -> T:
    """Run ``operation`` under ``policy``; see ``with_retry``."""
    name = name or getattr(operation, "__name__", "operation")
    for attempt in range(policy.total_attempts):
        try:
            return await operation()
        except retry_on as exc:
            if attempt == policy.max_retries:
                if policy.max_retries:
                    logger.error(
                        "%s failed after %d attempts: %s",
                        name,
                        policy.total_attempts,
                        exc,
                    )
                raise
            delay = policy.delay_for(attempt)
            logger.warning(
                "%s failed on attempt %d/%d (%s); retrying in %.3fs",
                name,
                attempt + 1,
                policy.total_attempts,
                exc,
                delay,
            )
            await sleep(delay)
    raise AssertionError("retry loop exited without a result")


async def with_retry(
    operation: Callable[[], Awaitable[T]],
    max_retries: int = 3,
    *,
    base_delay_s: float = 0.1,
    retry_on: tuple[type[BaseException], ...] = (Exception,),
    sleep: Sleep = asyncio.sleep,
) -> T:
    """Await ``operation()`` up to ``max_retries + 1`` times.

    Returns the first successful result without further attempts or delays.
    Exceptions outside ``retry_on`` propagate immediately. With
    ``max_retries=0`` there is exactly one attempt and no delay.

    Args:
        operation: Zero-argument coroutine function.
        max_retries: Additional attempts after the first one.
        base_delay_s: Delay after the first failure; doubles each time.
        retry_on: Exception types that trigger another attempt.
        sleep: Awaitable sleep, replaceable in tests.

    Raises:
        ValueError: If ``max_retries`` or ``base_delay_s`` is negative.
        Exception: Whatever the final attempt raised.
    """
    policy = RetryPolicy(max_retries=max_retries, base_delay_s=base_delay_s)
    return await run_with_policy(operation, policy, retry_on=retry_on, sleep=sleep)


def retrying(
    policy: RetryPolicy | None = None,
    *,
    retry_on: tuple[type[BaseException], ...] = (Exception,),
    sleep: Sleep = asyncio.sleep,
):
    """Decorator form of ``with_retry`` for async functions."""
    policy = policy or RetryPolicy()

    def decorator(fn: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        @functools.wraps(fn)
        async def wrapper(*args: Any, **kwargs: Any) -> T:
            return await run_with_policy(
                functools.partial(fn, *args, **kwargs),
                policy,
                retry_on=retry_on,
                sleep=sleep,
                name=fn.__name__,
            )

        return wrapper

    return decorator


__all__ = ["RetryPolicy", "retrying", "run_with_policy", "with_retry"]
