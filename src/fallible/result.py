"""Result type for explicit error handling.

A ``Result`` is either a ``Success`` holding a value or a ``Failure`` holding
an error, never both and never neither. Every combinator returns a new
Result (or the same instance when nothing changes), so chains of fallible
operations compose without a branch check at every step:

    parse(raw).flat_map(validate).map(normalize).get_or_else(DEFAULT)

Failures short-circuit: once a chain produces a ``Failure``, the remaining
``map``/``flat_map`` callbacks are skipped and the failure is carried through
unchanged. Recovery is opt-in via ``catch``; converting the error type is
opt-in via ``map_err``.

Dispatch on the variant with a ``match`` statement:

    match result:
        case Success(value):
            ...
        case Failure(error):
            ...
"""

from __future__ import annotations

from collections.abc import Callable
import dataclasses
from typing import Any, ClassVar, Literal, NoReturn, Self, TypeGuard

from fallible.errors import UnwrapError


@dataclasses.dataclass(frozen=True, slots=True)
class Success[T]:
    """The success variant, carrying ``value``."""

    value: T

    tag: ClassVar[Literal["success"]] = "success"

    def is_success(self) -> Literal[True]:
        return True

    def is_failure(self) -> Literal[False]:
        return False

    def map[U](self, fn: Callable[[T], U]) -> Success[U]:
        """Apply ``fn`` to the value and wrap the outcome."""
        return Success(fn(self.value))

    def flat_map[U, E](
        self, fn: Callable[[T], Success[U] | Failure[E]]
    ) -> Success[U] | Failure[E]:
        """Return ``fn(value)`` as-is, without re-wrapping."""
        return fn(self.value)

    def map_err(self, fn: Callable[[Any], object]) -> Self:  # noqa: ARG002
        return self

    def catch(self, fn: Callable[[Any], object]) -> Self:  # noqa: ARG002
        return self

    def unwrap(self) -> T:
        return self.value

    def get_or_else(self, default: object) -> T:  # noqa: ARG002
        return self.value

    def __repr__(self) -> str:
        return f"Success({self.value!r})"


@dataclasses.dataclass(frozen=True, slots=True)
class Failure[E]:
    """The failure variant, carrying ``error``."""

    error: E

    tag: ClassVar[Literal["failure"]] = "failure"

    def is_success(self) -> Literal[False]:
        return False

    def is_failure(self) -> Literal[True]:
        return True

    def map(self, fn: Callable[[Any], object]) -> Self:  # noqa: ARG002
        return self

    def flat_map(self, fn: Callable[[Any], object]) -> Self:  # noqa: ARG002
        return self

    def map_err[F](self, fn: Callable[[E], F]) -> Failure[F]:
        """Apply ``fn`` to the error and wrap the outcome."""
        return Failure(fn(self.error))

    def catch[U, F](
        self, fn: Callable[[E], Success[U] | Failure[F]]
    ) -> Success[U] | Failure[F]:
        """Recover from the failure by returning ``fn(error)``."""
        return fn(self.error)

    def unwrap(self) -> NoReturn:
        """Raise ``UnwrapError`` carrying this failure's error.

        Only call ``unwrap`` where success is already established; a failure
        here is a bug in the caller, not a recoverable condition.
        """
        cause = self.error if isinstance(self.error, BaseException) else None
        raise UnwrapError(
            self.error,
            hint="Check is_success() first, or use get_or_else()/match()",
        ) from cause

    def get_or_else[D](self, default: D) -> D:
        return default

    def __repr__(self) -> str:
        return f"Failure({self.error!r})"


type Result[T, E] = Success[T] | Failure[E]


def success[T](value: T) -> Success[T]:
    """Wrap ``value`` in a ``Success``."""
    return Success(value)


def failure[E](error: E) -> Failure[E]:
    """Wrap ``error`` in a ``Failure``."""
    return Failure(error)


def is_result(obj: object) -> TypeGuard[Result[Any, Any]]:
    """Return True when ``obj`` is a ``Success`` or a ``Failure``."""
    return isinstance(obj, Success | Failure)


__all__ = ["Failure", "Result", "Success", "failure", "is_result", "success"]
