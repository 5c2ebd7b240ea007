"""Runtime introspection of a default instance's declared fields.

Default filling needs the field names (and the storage keys each field
accepts) together with the default instance's current values.  Most
record types expose these through reflection: pydantic models,
dataclasses, named tuples, plain mappings and ordinary objects.  Types
that can't be reflected, or that want to control exactly which fields
are filled, implement :class:`HasFieldDefaults`.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable

from pydantic import AliasChoices, BaseModel, RootModel


@runtime_checkable
class HasFieldDefaults(Protocol):
    """Explicit per-field defaults, keyed by storage key."""

    def __field_defaults__(self) -> Mapping[str, Any]: ...


@dataclasses.dataclass(frozen=True)
class DeclaredField:
    """One declared field of a default instance.

    ``keys`` lists every storage key the decoder accepts for the field.
    The first one is where a filled default is written.
    """

    name: str
    keys: tuple[str, ...]
    value: Any

    @property
    def primary_key(self) -> str:
        return self.keys[0]


def _dedupe(keys: list[str]) -> tuple[str, ...]:
    return tuple(dict.fromkeys(keys))


def _model_fields(value: BaseModel) -> list[DeclaredField]:
    model_cls = type(value)
    config = model_cls.model_config
    by_name = bool(config.get("populate_by_name") or config.get("validate_by_name"))

    declared: list[DeclaredField] = []
    for name, info in model_cls.model_fields.items():
        keys: list[str] = []
        alias = info.validation_alias
        if isinstance(alias, str):
            keys.append(alias)
        elif isinstance(alias, AliasChoices):
            keys.extend(choice for choice in alias.choices if isinstance(choice, str))
        elif alias is None and info.alias:
            keys.append(info.alias)
        # AliasPath-only fields fall back to the name, which pydantic ignores
        # without populate_by_name; the decoder then reports the gap.
        if by_name or not keys:
            keys.append(name)
        declared.append(DeclaredField(name=name, keys=_dedupe(keys), value=getattr(value, name)))
    return declared


def declared_fields(value: Any) -> list[DeclaredField]:
    """Enumerate the declared fields of *value* with their current values.

    Resolution order: :class:`HasFieldDefaults`, pydantic model,
    dataclass instance, named tuple, mapping, then public instance
    attributes (``__dict__`` and ``__slots__``).  Scalars, sequences and
    ``RootModel`` instances have no fields.
    """
    if isinstance(value, HasFieldDefaults):
        return [DeclaredField(name=key, keys=(key,), value=item) for key, item in value.__field_defaults__().items()]

    if isinstance(value, RootModel):
        # The root value is the whole payload, not a keyed field.
        return []

    if isinstance(value, BaseModel):
        return _model_fields(value)

    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return [
            DeclaredField(name=field.name, keys=(field.name,), value=getattr(value, field.name))
            for field in dataclasses.fields(value)
            if field.init
        ]

    if isinstance(value, tuple) and hasattr(value, "_asdict"):
        return [DeclaredField(name=key, keys=(key,), value=item) for key, item in value._asdict().items()]

    if isinstance(value, Mapping):
        return [DeclaredField(name=str(key), keys=(str(key),), value=item) for key, item in value.items()]

    if isinstance(value, (str, bytes, bytearray, int, float, bool, list, tuple, set, frozenset)) or value is None:
        return []

    attributes: dict[str, Any] = dict(getattr(value, "__dict__", {}))
    for klass in reversed(type(value).__mro__):
        slots = klass.__dict__.get("__slots__", ())
        for slot in (slots,) if isinstance(slots, str) else slots:
            if hasattr(value, slot):
                attributes.setdefault(slot, getattr(value, slot))
    return [
        DeclaredField(name=key, keys=(key,), value=item) for key, item in attributes.items() if not key.startswith("_")
    ]
