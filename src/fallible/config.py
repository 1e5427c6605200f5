"""Configuration: frozen Config resolved from overrides, environment and defaults."""

from __future__ import annotations

from dataclasses import dataclass, fields
import logging
import os
from typing import TYPE_CHECKING, Any

from dotenv import find_dotenv, load_dotenv

from fallible.errors import ConfigurationError

if TYPE_CHECKING:
    from collections.abc import Mapping

ENV_PREFIX = "FALLIBLE_"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _coerce_bool(v: str) -> bool:
    """Convert string to boolean using common conventions."""
    return v.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Config:
    """Immutable settings for pipelines built on Results.

    Example:
        config = Config(failure_log_level="WARNING")
        pipeline = Pipeline([parse, validate, persist], config=config)
    """

    #: Raise ``InvariantViolationError`` when a step returns a non-Result.
    #: When off, plain return values are wrapped in ``Success``.
    strict: bool = True
    record_durations: bool = True
    failure_log_level: str = "DEBUG"

    def __post_init__(self) -> None:
        """Normalize and validate fields."""
        for name in ("strict", "record_durations"):
            value = getattr(self, name)
            if isinstance(value, str):
                object.__setattr__(self, name, _coerce_bool(value))
            elif not isinstance(value, bool):
                raise ConfigurationError(
                    f"{name} must be a bool, got {type(value).__name__}",
                    hint="Use True/False or one of '1', 'true', 'yes', 'on'",
                )

        level = str(self.failure_log_level).strip().upper()
        if level not in _LOG_LEVELS:
            raise ConfigurationError(
                f"Unknown failure_log_level: {self.failure_log_level!r}",
                hint=f"Use one of: {', '.join(_LOG_LEVELS)}",
            )
        object.__setattr__(self, "failure_log_level", level)

    @property
    def failure_log_levelno(self) -> int:
        """Numeric ``logging`` level for pipeline failure messages."""
        return logging.getLevelNamesMapping()[self.failure_log_level]


def load_env() -> dict[str, Any]:
    """Read ``FALLIBLE_*`` variables for known Config fields.

    Boolean fields are coerced; unknown ``FALLIBLE_*`` variables are ignored.
    """
    config: dict[str, Any] = {}
    for f in fields(Config):
        raw = os.environ.get(f"{ENV_PREFIX}{f.name.upper()}")
        if raw is None:
            continue
        config[f.name] = _coerce_bool(raw) if f.type in ("bool", bool) else raw
    return config


def resolve_config(overrides: Mapping[str, Any] | None = None) -> Config:
    """Resolve configuration with precedence overrides > env (.env) > defaults.

    Raises:
        ConfigurationError: For unknown override keys or invalid values.
    """
    load_dotenv(find_dotenv(usecwd=True))
    known = {f.name for f in fields(Config)}
    unknown = sorted(set(overrides or {}) - known)
    if unknown:
        raise ConfigurationError(
            f"Unknown configuration keys: {', '.join(unknown)}",
            hint=f"Supported keys: {', '.join(sorted(known))}",
        )
    merged = {**load_env(), **(overrides or {})}
    return Config(**merged)


__all__ = ["ENV_PREFIX", "Config", "load_env", "resolve_config"]
