"""Async composition of Results.

These helpers let a chain suspend on an awaitable step and resume with the
resolved Result while keeping the synchronous short-circuit guarantee: once a
step fails, no later step is called or awaited.

Cancellation and timeouts belong to the caller; wrap the awaited work with
``asyncio.timeout`` or cancel the enclosing task as usual.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
import inspect
import logging
from typing import Any

from fallible.combinators import combine_all
from fallible.result import Failure, Result, Success

log = logging.getLogger(__name__)

type MaybeAwaitable[T] = T | Awaitable[T]


async def _resolve[T](value: MaybeAwaitable[T]) -> T:
    if inspect.isawaitable(value):
        return await value
    return value


async def flat_map_async[T, U, E](
    result: Result[T, E], fn: Callable[[T], Awaitable[Result[U, E]]]
) -> Result[U, E]:
    """Await ``fn(value)`` on success; return a failure untouched."""
    if isinstance(result, Failure):
        return result
    return await fn(result.value)


async def map_async[T, U, E](
    result: Result[T, E], fn: Callable[[T], Awaitable[U]]
) -> Result[U, E]:
    """Await ``fn(value)`` on success and wrap it; return a failure untouched."""
    if isinstance(result, Failure):
        return result
    return Success(await fn(result.value))


async def chain_async(
    initial: MaybeAwaitable[Result[Any, Any]],
    *steps: Callable[[Any], MaybeAwaitable[Result[Any, Any]]],
) -> Result[Any, Any]:
    """Run ``steps`` in order, feeding each success value to the next step.

    ``initial`` and every step's return value may be a Result or an
    awaitable resolving to one. The chain stops at the first ``Failure``.
    """
    current = await _resolve(initial)
    for step in steps:
        if isinstance(current, Failure):
            return current
        current = await _resolve(step(current.value))
    return current


async def attempt_async[T](
    fn: Callable[..., Awaitable[T]],
    *args: Any,
    catch: tuple[type[Exception], ...] = (Exception,),
    **kwargs: Any,
) -> Result[T, Exception]:
    """Await ``fn`` and capture a raised exception as a ``Failure``.

    ``asyncio.CancelledError`` is not an ``Exception`` subclass and always
    propagates.
    """
    try:
        return Success(await fn(*args, **kwargs))
    except catch as e:
        log.debug(
            "attempt_async(%s) captured %s: %s",
            getattr(fn, "__name__", repr(fn)),
            type(e).__name__,
            e,
        )
        return Failure(e)


async def gather_results[T, E](
    *awaitables: Awaitable[Result[T, E]],
) -> Result[list[T], E]:
    """Await independent Results concurrently and combine them.

    All awaitables run to completion; when several fail, the failure of the
    earliest argument is returned.

    If an awaitable raises instead of returning a Result, the remaining
    tasks are cancelled and the exception propagates.
    """
    tasks = [asyncio.ensure_future(aw) for aw in awaitables]
    try:
        results = await asyncio.gather(*tasks)
    except BaseException:
        for task in tasks:
            task.cancel()
        raise
    return combine_all(results)


__all__ = [
    "attempt_async",
    "chain_async",
    "flat_map_async",
    "gather_results",
    "map_async",
]
