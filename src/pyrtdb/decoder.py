"""Structured decoders: generic snapshot value -> typed instance.

:class:`SnapshotDecoder` is the default decoder used when a caller does
not supply one.  It validates with a pydantic ``TypeAdapter`` per target
type, so any type pydantic can build a schema for works: models,
dataclasses, ``TypedDict``, named tuples, containers and ``Optional``
wrappers.  Validation failures are translated into the
:mod:`pyrtdb.exceptions` hierarchy.
"""

from __future__ import annotations

import functools
import logging
from typing import Any, Protocol, TypeVar, runtime_checkable

from pydantic import TypeAdapter, ValidationError
from pydantic.errors import PydanticSchemaGenerationError

from pyrtdb._trace import trace_view
from pyrtdb.config import DecodeConfig
from pyrtdb.exceptions import (
    RtdbConfigError,
    RtdbDecodeError,
    TypeMismatchError,
    ValueNotFoundError,
    format_path,
)

_logger = logging.getLogger(__name__)

T = TypeVar("T")


@runtime_checkable
class StructuredDecoder(Protocol):
    """Anything that turns a generic snapshot value into ``target_type``.

    Implementations raise :class:`~pyrtdb.exceptions.RtdbDecodeError`
    subclasses on failure.
    """

    def decode(self, target_type: Any, value: Any) -> Any: ...


def _type_name(target_type: Any) -> str:
    return getattr(target_type, "__name__", None) or repr(target_type)


def translate_validation_error(exc: ValidationError, target_type: Any) -> RtdbDecodeError:
    """Map the first pydantic error of *exc* onto a pyrtdb decode error.

    ``missing`` errors and ``None`` inputs for non-optional values become
    :class:`ValueNotFoundError`; everything else is a
    :class:`TypeMismatchError`.  All pydantic error dicts are kept in
    ``details``.
    """
    errors = exc.errors(include_url=False)
    first = errors[0]
    path = tuple(first.get("loc", ()))
    error_type = first.get("type", "")
    name = _type_name(target_type)

    if error_type == "missing" or first.get("input") is None:
        return ValueNotFoundError(
            f"No value found for {name} at {format_path(path)}",
            path=path,
            details=errors,
        )

    actual = type(first.get("input")).__name__
    return TypeMismatchError(
        f"Cannot decode {name} at {format_path(path)}: {first.get('msg', error_type)} (got {actual})",
        path=path,
        expected=error_type,
        actual=actual,
        details=errors,
    )


class SnapshotDecoder:
    """Default pydantic-backed :class:`StructuredDecoder`.

    Parameters
    ----------
    config : DecodeConfig or None
        Decoder configuration; defaults to ``DecodeConfig()``.
    context : dict or None
        Validation context handed to pydantic validators
        (``ValidationInfo.context``).
    """

    def __init__(self, config: DecodeConfig | None = None, *, context: dict[str, Any] | None = None) -> None:
        self._config = config or DecodeConfig()
        self._context = context
        self._adapters: dict[Any, TypeAdapter[Any]] = {}

    @property
    def config(self) -> DecodeConfig:
        return self._config

    def _build_adapter(self, target_type: Any) -> TypeAdapter[Any]:
        try:
            return TypeAdapter(target_type)
        except PydanticSchemaGenerationError as exc:
            raise RtdbConfigError(f"{_type_name(target_type)} is not a decodable type") from exc

    def _adapter(self, target_type: Any) -> TypeAdapter[Any]:
        try:
            cached = self._adapters.get(target_type)
        except TypeError:
            # Unhashable type expressions are rebuilt every call.
            return self._build_adapter(target_type)
        if cached is None:
            cached = self._build_adapter(target_type)
            self._adapters[target_type] = cached
        return cached

    def decode(self, target_type: type[T], value: Any) -> T:
        """Decode *value* into *target_type*.

        Raises
        ------
        ValueNotFoundError
            A required value is missing or null.
        TypeMismatchError
            A present value has the wrong shape.
        RtdbConfigError
            *target_type* is not something pydantic can validate.
        """
        adapter = self._adapter(target_type)
        if self._config.trace_payloads:
            _logger.debug(
                "Decoding %s from %s",
                _type_name(target_type),
                trace_view(value, redact_keys=self._config.redact_keys, max_string=self._config.max_log_string),
            )
        try:
            return adapter.validate_python(value, strict=self._config.strict or None, context=self._context)
        except ValidationError as exc:
            raise translate_validation_error(exc, target_type) from exc
        except PydanticSchemaGenerationError as exc:
            # Adapters with deferred schema building fail on first use.
            raise RtdbConfigError(f"{_type_name(target_type)} is not a decodable type") from exc


@functools.lru_cache(maxsize=1)
def default_decoder() -> SnapshotDecoder:
    """Shared ``SnapshotDecoder()`` used when callers don't pass a decoder."""
    return SnapshotDecoder()
