"""Unit tests for configuration resolution."""

from __future__ import annotations

import logging

import pytest

from fallible import Config, ConfigurationError, resolve_config
from fallible.config import load_env

pytestmark = pytest.mark.unit


def test_defaults() -> None:
    config = resolve_config()
    assert config == Config(strict=True, record_durations=True, failure_log_level="DEBUG")


def test_log_level_is_normalized() -> None:
    config = Config(failure_log_level=" warning ")
    assert config.failure_log_level == "WARNING"
    assert config.failure_log_levelno == logging.WARNING


def test_unknown_log_level_has_hint() -> None:
    with pytest.raises(ConfigurationError) as exc:
        Config(failure_log_level="LOUD")
    assert "DEBUG" in (exc.value.hint or "")
    assert "LOUD" in str(exc.value)


def test_config_is_frozen() -> None:
    config = Config()
    with pytest.raises(AttributeError):
        config.strict = False  # type: ignore[misc]


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("1", True), ("true", True), ("YES", True), ("on", True), ("0", False), ("off", False)],
)
def test_env_booleans_are_coerced(monkeypatch, raw: str, expected: bool) -> None:
    monkeypatch.setenv("FALLIBLE_RECORD_DURATIONS", raw)
    assert load_env() == {"record_durations": expected}


def test_env_ignores_unknown_variables(monkeypatch) -> None:
    monkeypatch.setenv("FALLIBLE_SOMETHING_ELSE", "1")
    assert load_env() == {}


def test_overrides_win_over_env(monkeypatch) -> None:
    monkeypatch.setenv("FALLIBLE_STRICT", "false")
    monkeypatch.setenv("FALLIBLE_FAILURE_LOG_LEVEL", "error")
    config = resolve_config(overrides={"strict": True})
    assert config.strict is True
    assert config.failure_log_level == "ERROR"


def test_unknown_override_keys_rejected() -> None:
    with pytest.raises(ConfigurationError, match="Unknown configuration keys: retries"):
        resolve_config(overrides={"retries": 3})


def test_resolve_loads_dotenv(monkeypatch) -> None:
    calls: list[bool] = []
    monkeypatch.setattr(
        "fallible.config.load_dotenv", lambda *_args: calls.append(True)
    )
    resolve_config()
    assert calls == [True]


@pytest.mark.parametrize(("raw", "expected"), [("false", False), ("0", False), ("on", True)])
def test_string_booleans_in_overrides_are_coerced(raw: str, expected: bool) -> None:
    config = resolve_config(overrides={"record_durations": raw, "strict": raw})
    assert config.record_durations is expected
    assert config.strict is expected


def test_non_bool_flag_is_rejected() -> None:
    with pytest.raises(ConfigurationError, match="strict must be a bool") as exc:
        Config(strict=1)  # type: ignore[arg-type]
    assert exc.value.hint is not None


@pytest.mark.allow_dotenv
def test_dotenv_file_feeds_env(tmp_path, monkeypatch) -> None:
    (tmp_path / ".env").write_text(
        "FALLIBLE_STRICT=false\nFALLIBLE_FAILURE_LOG_LEVEL=info\n"
    )
    monkeypatch.chdir(tmp_path)
    config = resolve_config()
    assert config.strict is False
    assert config.failure_log_level == "INFO"
