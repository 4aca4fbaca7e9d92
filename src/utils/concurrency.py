"""Settled fan-out helpers for concurrent provider calls.

Two patterns are exposed:

1. **gather_settled** -- launch every awaitable together and wait for all
   of them.  A failure in one never cancels the others; each slot of the
   result holds either the value or the exception, in input order.  The
   search aggregator and the document listing enrichment both rely on
   this so output position never depends on completion order.

2. **settled_values** -- the fan-out-then-merge pattern: run a function
   over many argument sets, log failures, and substitute a default for
   each failed slot.
"""

from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable, TypeVar

import structlog

from src.utils.logging import get_logger

_T = TypeVar("_T")

_logger: structlog.BoundLogger = get_logger(__name__)


async def gather_settled(*awaitables: Awaitable[_T]) -> list[_T | BaseException]:
    """Run awaitables concurrently and return values or exceptions in order.

    Mirrors ``Promise.allSettled``: nothing is raised for individual
    failures.  With no awaitables it returns an empty list immediately.
    """
    if not awaitables:
        return []
    return await asyncio.gather(*awaitables, return_exceptions=True)


async def settled_values(
    fn: Callable[..., Awaitable[_T]],
    calls: list[dict[str, Any]],
    default: Callable[[], _T],
    logger: structlog.BoundLogger | None = None,
    error_msg: str = "fan_out_call_failed",
) -> list[_T]:
    """Call ``fn(**kwargs)`` for every entry in *calls* concurrently.

    Failed calls are logged and replaced with ``default()`` so the result
    always has one entry per input, in input order.
    """
    log = logger or _logger
    raw = await gather_settled(*(fn(**kwargs) for kwargs in calls))

    values: list[_T] = []
    for kwargs, result in zip(calls, raw):
        if isinstance(result, BaseException):
            log.warning(error_msg, call=kwargs, error=str(result))
            values.append(default())
        else:
            values.append(result)
    return values
