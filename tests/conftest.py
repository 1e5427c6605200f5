"""Pytest configuration and fixtures.

Provides environment isolation and logging configuration. All fixtures here
are autouse unless noted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
import os
from typing import Any

import pytest

from fallible import Config

# =============================================================================
# Test Doubles
# =============================================================================


@dataclass
class CallRecorder:
    """Callable test double that counts calls and returns a fixed response.

    Use to assert that short-circuited steps were never invoked.
    """

    response: Any = None
    calls: list[Any] = field(default_factory=list)

    def __call__(self, value: Any) -> Any:
        self.calls.append(value)
        return self.response

    @property
    def call_count(self) -> int:
        return len(self.calls)


# =============================================================================
# Environment Isolation (Autouse)
# =============================================================================


@pytest.fixture(autouse=True)
def block_dotenv(request, monkeypatch):
    """Prevent python-dotenv from loading project .env files during tests.

    Opt-out: @pytest.mark.allow_dotenv
    """
    if request.node.get_closest_marker("allow_dotenv"):
        return
    monkeypatch.setattr(
        "fallible.config.load_dotenv", lambda *_args, **_kwargs: False
    )


@pytest.fixture(autouse=True)
def isolate_fallible_env(monkeypatch):
    """Clear FALLIBLE_* env vars so each test starts from defaults."""
    for key in list(os.environ.keys()):
        if key.startswith("FALLIBLE_"):
            monkeypatch.delenv(key, raising=False)


# =============================================================================
# Shared Fixtures
# =============================================================================


@pytest.fixture
def config() -> Config:
    """Return a strict default Config without touching the environment."""
    return Config()


@pytest.fixture
def recorder():
    """Return a factory for CallRecorder doubles."""
    return CallRecorder


# =============================================================================
# Logging
# =============================================================================


@pytest.fixture(scope="session", autouse=True)
def quiet_noisy_libraries():
    """Suppress noisy third-party loggers."""
    logging.getLogger("asyncio").setLevel(logging.WARNING)
