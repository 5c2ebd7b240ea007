from __future__ import annotations

import pytest

from pyrtdb.config import DecodeConfig
from pyrtdb.exceptions import RtdbConfigError


def test_defaults() -> None:
    config = DecodeConfig()
    assert config.strict is False
    assert config.trace_payloads is False
    assert config.max_log_string == 512


def test_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RTDB_DECODE_STRICT", "yes")
    monkeypatch.setenv("RTDB_DECODE_TRACE", "1")
    monkeypatch.setenv("RTDB_DECODE_MAX_LOG_STRING", "64")

    config = DecodeConfig.from_env()

    assert config.strict is True
    assert config.trace_payloads is True
    assert config.max_log_string == 64


def test_from_env_unrecognized_bool_uses_default(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RTDB_DECODE_STRICT", "maybe")
    assert DecodeConfig.from_env().strict is False


def test_overrides_win(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RTDB_DECODE_TRACE", "true")
    monkeypatch.setenv("RTDB_DECODE_MAX_LOG_STRING", "64")

    config = DecodeConfig.from_env(trace_payloads=False, max_log_string=10)

    assert config.trace_payloads is False
    assert config.max_log_string == 10


def test_invalid_max_log_string(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RTDB_DECODE_MAX_LOG_STRING", "lots")
    with pytest.raises(RtdbConfigError):
        DecodeConfig.from_env()


def test_redact_keys_extend_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RTDB_DECODE_REDACT_KEYS", "email, phone,")

    config = DecodeConfig.from_env()

    assert {"email", "phone", "token"} <= config.redact_keys
    assert "" not in config.redact_keys
