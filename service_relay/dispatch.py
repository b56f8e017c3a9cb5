"""Bulk dispatch of independent operations with success/failure tallying.

Individual failures never abort the batch: a falsy return or a raised
``Exception`` counts as one failure and the remaining items still run.
"""

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Any, Awaitable, Callable, Iterable, TypeVar

from .models.dispatch import DispatchResult

logger = logging.getLogger(__name__)

T = TypeVar("T")

ErrorHook = Callable[[T, Exception], None]


class DispatchPolicy(str, Enum):
    SEQUENTIAL = "sequential"
    PARALLEL = "parallel"


async def _attempt(
    item: T,
    operation: Callable[[T], Awaitable[Any]],
    on_error: ErrorHook | None,
) -> bool:
    try:
        return bool(await operation(item))
    except Exception as exc:
        if on_error is not None:
            on_error(item, exc)
        else:
            logger.error("Dispatch failed for %r: %s", item, exc, exc_info=exc)
        return False


async def dispatch(
    items: Iterable[T],
    operation: Callable[[T], Awaitable[Any]],
    *,
    policy: DispatchPolicy = DispatchPolicy.SEQUENTIAL,
    on_error: ErrorHook | None = None,
) -> DispatchResult:
    """Run ``operation(item)`` for every item and tally the outcomes.

    Args:
        items: Units of work; consumed once.
        operation: Coroutine function returning a truthy value on success.
        policy: SEQUENTIAL awaits each item before starting the next in input
            order. PARALLEL starts every operation before awaiting any.
        on_error: Called with ``(item, exc)`` when an operation raises.
            Without it the failure is logged by this module.

    Returns:
        DispatchResult with ``successful + failed == len(items)``.
    """
    batch = list(items)
    if policy is DispatchPolicy.PARALLEL:
        outcomes = await asyncio.gather(
            *(_attempt(item, operation, on_error) for item in batch)
        )
    else:
        outcomes = [await _attempt(item, operation, on_error) for item in batch]
    return DispatchResult.from_outcomes(outcomes)


__all__ = ["DispatchPolicy", "DispatchResult", "dispatch"]
