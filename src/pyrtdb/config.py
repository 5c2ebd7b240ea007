"""Decoder configuration for pyrtdb."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from pyrtdb._trace import DEFAULT_REDACT_KEYS
from pyrtdb.exceptions import RtdbConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


@dataclasses.dataclass(frozen=True)
class DecodeConfig:
    """Decoder configuration.

    Parameters
    ----------
    strict : bool
        Force pydantic strict mode.  When off, each target type keeps its
        own ``strict`` setting (lax coercion unless it opts in).
    trace_payloads : bool
        Include the (redacted) payload in DEBUG log records.
    max_log_string : int
        Strings longer than this are truncated in traced payloads.
    redact_keys : frozenset of str
        Storage keys whose values are masked in traced payloads.  Matching
        ignores case, ``_`` and ``-``.
    """

    strict: bool = False
    trace_payloads: bool = False
    max_log_string: int = 512
    redact_keys: frozenset[str] = DEFAULT_REDACT_KEYS

    @classmethod
    def from_env(cls, **overrides: Any) -> DecodeConfig:
        """Create configuration from environment variables.

        Reads ``RTDB_DECODE_STRICT``, ``RTDB_DECODE_TRACE``,
        ``RTDB_DECODE_MAX_LOG_STRING`` and ``RTDB_DECODE_REDACT_KEYS``
        (comma-separated keys masked in addition to the defaults).
        Explicit keyword arguments override environment values.

        Raises
        ------
        RtdbConfigError
            If ``RTDB_DECODE_MAX_LOG_STRING`` is not an integer.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        if "strict" not in overrides:
            config_kwargs["strict"] = _env_bool(env.get("RTDB_DECODE_STRICT"), False)

        if "trace_payloads" not in overrides:
            config_kwargs["trace_payloads"] = _env_bool(env.get("RTDB_DECODE_TRACE"), False)

        max_env = env.get("RTDB_DECODE_MAX_LOG_STRING")
        if max_env is not None and "max_log_string" not in overrides:
            try:
                config_kwargs["max_log_string"] = int(max_env)
            except ValueError as exc:
                raise RtdbConfigError(f"RTDB_DECODE_MAX_LOG_STRING must be an integer, got {max_env!r}") from exc

        extra_keys = env.get("RTDB_DECODE_REDACT_KEYS")
        if extra_keys is not None and "redact_keys" not in overrides:
            config_kwargs["redact_keys"] = DEFAULT_REDACT_KEYS | {
                key.strip() for key in extra_keys.split(",") if key.strip()
            }

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
