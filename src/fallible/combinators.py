"""Free functions over one or more Results.

``combine`` and ``combine_all`` use left precedence: when several inputs
fail, the error of the first failing input (in argument order) is returned
and the others are discarded. Errors are never merged.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
import logging
from typing import Any, assert_never

from fallible.result import Failure, Result, Success

log = logging.getLogger(__name__)


def combine[T1, T2, E](
    first: Result[T1, E], second: Result[T2, E]
) -> Result[tuple[T1, T2], E]:
    """Pair two results.

    Returns ``Success((v1, v2))`` only when both inputs succeed. If both
    fail, the first argument's failure wins.
    """
    if isinstance(first, Failure):
        return first
    if isinstance(second, Failure):
        return second
    return Success((first.value, second.value))


def combine_all[T, E](results: Iterable[Result[T, E]]) -> Result[list[T], E]:
    """Collect every success value, or return the first failure.

    Iteration stops at the first ``Failure``, so a lazy iterable is not
    consumed past it.
    """
    values: list[T] = []
    for result in results:
        if isinstance(result, Failure):
            return result
        values.append(result.value)
    return Success(values)


def partition[T, E](results: Iterable[Result[T, E]]) -> tuple[list[T], list[E]]:
    """Split results into ``(values, errors)``, preserving order within each."""
    values: list[T] = []
    errors: list[E] = []
    for result in results:
        match result:
            case Success(value):
                values.append(value)
            case Failure(error):
                errors.append(error)
    return values, errors


def match[T, E, R](
    result: Result[T, E],
    on_success: Callable[[T], R],
    on_failure: Callable[[E], R],
) -> R:
    """Call exactly one handler depending on the variant and return its value.

    Raises:
        TypeError: If ``result`` is neither a ``Success`` nor a ``Failure``.
    """
    match result:
        case Success(value):
            return on_success(value)
        case Failure(error):
            return on_failure(error)
        case _:
            if not isinstance(result, Success | Failure):
                raise TypeError(
                    f"Expected Success or Failure, got {type(result).__name__}"
                )
            assert_never(result)


def attempt[T](
    fn: Callable[..., T],
    *args: Any,
    catch: tuple[type[Exception], ...] = (Exception,),
    **kwargs: Any,
) -> Result[T, Exception]:
    """Call ``fn`` and capture a raised exception as a ``Failure``.

    Only exceptions matching ``catch`` are captured; anything else
    propagates to the caller unchanged.
    """
    try:
        return Success(fn(*args, **kwargs))
    except catch as e:
        log.debug(
            "attempt(%s) captured %s: %s",
            getattr(fn, "__name__", repr(fn)),
            type(e).__name__,
            e,
        )
        return Failure(e)


def ensure[T, E](value: T, predicate: Callable[[T], bool], error: E) -> Result[T, E]:
    """Return ``Success(value)`` when ``predicate(value)`` holds.

    Otherwise return ``Failure(error)``. The predicate is called once.
    """
    if predicate(value):
        return Success(value)
    return Failure(error)


__all__ = ["attempt", "combine", "combine_all", "ensure", "match", "partition"]
