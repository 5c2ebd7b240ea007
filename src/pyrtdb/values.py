"""Dynamic snapshot values.

The Realtime Database hands back an already JSON-decoded tree.  Python's
``None`` is both JSON null and the "nothing stored here" marker: the
database never persists null, empty objects or empty arrays, so all three
read back as absent.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, TypeAlias

JsonValue: TypeAlias = None | bool | int | float | str | list["JsonValue"] | dict[str, "JsonValue"]
"""A snapshot value: a JSON node or ``None`` for absent."""


def is_record(value: Any) -> bool:
    """Return ``True`` when *value* is a mapping that default filling applies to."""
    return isinstance(value, Mapping)


def storage_view(value: Any) -> Any:
    """Return *value* the way the database hands it back after a write.

    - Mappings: keys whose value prunes to nothing are dropped; keys are
      stringified.
    - Sequences: elements are pruned in place and trailing ``None`` entries
      are trimmed (inner ``None`` holes survive, as in sparse arrays).
    - Empty mappings and sequences become ``None``.
    - Scalars are returned as-is.
    """
    if isinstance(value, Mapping):
        pruned: dict[str, Any] = {}
        for key, item in value.items():
            cleaned = storage_view(item)
            if cleaned is not None:
                pruned[str(key)] = cleaned
        return pruned or None

    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        items = [storage_view(item) for item in value]
        while items and items[-1] is None:
            items.pop()
        return items or None

    return value
