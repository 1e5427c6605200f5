"""Exception hierarchy for fallible.

Expected failures travel as ``Failure`` values. The exceptions here signal
programmer errors: unwrapping a failure, a misconfigured library, or a
mis-composed pipeline.
"""

from __future__ import annotations

from typing import Any


class FallibleError(Exception):
    """Base exception for all fallible errors."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint = hint

    def __str__(self) -> str:
        """Return the message followed by the hint, when one is set."""
        msg = super().__str__()
        return f"{msg}. {self.hint}" if self.hint else msg


class UnwrapError(FallibleError):
    """``unwrap()`` was called on a ``Failure``.

    The failure's payload is kept on ``error`` so the caller that crashed can
    still report what went wrong.
    """

    def __init__(self, error: Any, *, hint: str | None = None) -> None:
        super().__init__(f"Called unwrap() on Failure({error!r})", hint=hint)
        self.error = error


class ConfigurationError(FallibleError):
    """Configuration validation or resolution failed."""


class InvariantViolationError(FallibleError):
    """A pipeline step broke the Result contract.

    Raised for impossible states that indicate a bug in how a pipeline was
    composed, e.g. a step returning a plain value instead of a Result.
    """

    def __init__(
        self, message: str, stage_name: str | None = None, *, hint: str | None = None
    ) -> None:
        """Create an invariant violation error.

        Args:
            message: Human-readable description of the violated invariant.
            stage_name: Optional pipeline stage where the issue was detected.
            hint: Optional actionable hint for resolution.
        """
        self.stage_name = stage_name
        msg = message if stage_name is None else f"[{stage_name}] {message}"
        super().__init__(msg, hint=hint)


__all__ = [
    "ConfigurationError",
    "FallibleError",
    "InvariantViolationError",
    "UnwrapError",
]
