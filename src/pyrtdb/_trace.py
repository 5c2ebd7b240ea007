"""Render snapshot payloads for DEBUG traces.

Payloads handed to the decoder are JSON trees, possibly completed with
default values that are arbitrary Python objects.  :func:`trace_view`
turns such a tree into something short and safe to log: values stored
under a redacted key are masked, long strings and long arrays are cut,
deep nesting is collapsed and non-JSON objects are shown by type name.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Any

DEFAULT_REDACT_KEYS: frozenset[str] = frozenset(
    {"password", "secret", "token", "idtoken", "accesstoken", "refreshtoken", "apikey", "privatekey"}
)

_MAX_DEPTH = 8
_MAX_ITEMS = 20


def normalize_key(key: Any) -> str:
    """Fold a storage key for matching: ``refresh_token`` == ``refreshToken``."""
    return str(key).lower().replace("_", "").replace("-", "")


def trace_view(
    value: Any,
    *,
    redact_keys: Iterable[str] = DEFAULT_REDACT_KEYS,
    max_string: int = 512,
) -> Any:
    """Return a loggable copy of the snapshot payload *value*."""
    folded = frozenset(normalize_key(key) for key in redact_keys)
    return _render(value, folded, max_string, 0)


def _render(value: Any, redact: frozenset[str], max_string: int, depth: int) -> Any:
    if value is None or isinstance(value, (bool, int, float)):
        return value

    if isinstance(value, str):
        if len(value) <= max_string:
            return value
        return f"{value[:max_string]}(+{len(value) - max_string} chars)"

    if isinstance(value, Mapping):
        if depth >= _MAX_DEPTH:
            return f"{{{len(value)} keys}}"
        return {
            str(key): "***" if normalize_key(key) in redact else _render(item, redact, max_string, depth + 1)
            for key, item in value.items()
        }

    if isinstance(value, Sequence) and not isinstance(value, (bytes, bytearray)):
        if depth >= _MAX_DEPTH:
            return f"[{len(value)} items]"
        rendered = [_render(item, redact, max_string, depth + 1) for item in value[:_MAX_ITEMS]]
        if len(value) > _MAX_ITEMS:
            rendered.append(f"... {len(value) - _MAX_ITEMS} more")
        return rendered

    # Filled defaults can be model or dataclass instances.
    return f"<{type(value).__name__}>"
