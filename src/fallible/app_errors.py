"""Tagged error values for I/O-bound operations.

Use these as the ``E`` of a ``Result`` when a fetch can fail in distinct,
renderable ways. Each variant is a frozen dataclass with a ``kind`` tag, and
``AppError`` is the closed union of all of them.
"""

from __future__ import annotations

import dataclasses
from typing import Any, ClassVar, Literal, TypeGuard, assert_never

from fallible.result import Failure


@dataclasses.dataclass(frozen=True, slots=True)
class NetworkError:
    """The request never produced a response."""

    message: str

    kind: ClassVar[Literal["network"]] = "network"


@dataclasses.dataclass(frozen=True, slots=True)
class HTTPError:
    """The server answered with a non-success status."""

    status: int
    message: str

    kind: ClassVar[Literal["http"]] = "http"


@dataclasses.dataclass(frozen=True, slots=True)
class ParseError:
    """The payload could not be decoded."""

    message: str

    kind: ClassVar[Literal["parse"]] = "parse"


@dataclasses.dataclass(frozen=True, slots=True)
class ValidationError:
    """The payload was decoded but failed validation."""

    message: str

    kind: ClassVar[Literal["validation"]] = "validation"


type AppError = NetworkError | HTTPError | ParseError | ValidationError

_HTTP_ERROR_MESSAGES = {
    401: "Unauthorized",
    403: "Forbidden",
    404: "Not found",
    500: "Internal server error",
    503: "Service unavailable",
}


def http_error_message(status: int) -> str:
    """Return the standard message for an HTTP status code."""
    return _HTTP_ERROR_MESSAGES.get(status, f"HTTP Error: {status}")


def http_error(status: int) -> Failure[HTTPError]:
    """Build a ``Failure`` holding an ``HTTPError`` with the standard message."""
    return Failure(HTTPError(status=status, message=http_error_message(status)))


def is_app_error(obj: Any) -> TypeGuard[AppError]:
    """Return True when ``obj`` is one of the ``AppError`` variants."""
    return isinstance(obj, NetworkError | HTTPError | ParseError | ValidationError)


def describe_error(error: AppError) -> str:
    """Render a one-line, human-readable description of ``error``."""
    match error:
        case NetworkError(message):
            return f"Network error: {message}"
        case HTTPError(status, message):
            return f"HTTP {status}: {message}"
        case ParseError(message):
            return f"Parse error: {message}"
        case ValidationError(message):
            return f"Validation error: {message}"
        case _:
            assert_never(error)


__all__ = [
    "AppError",
    "HTTPError",
    "NetworkError",
    "ParseError",
    "ValidationError",
    "describe_error",
    "http_error",
    "http_error_message",
    "is_app_error",
]
