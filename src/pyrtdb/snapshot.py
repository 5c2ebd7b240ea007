"""Default-filling snapshot decoding.

The Realtime Database does not keep empty arrays or objects, so a record
written as ``{"values": [], "moreValues": []}`` reads back as ``{}`` and
a plain structured decode fails with "value not found".  The functions
here fill the top-level fields missing from the raw mapping with the
values of a caller-supplied default instance before decoding.

Usage::

    snapshot = Snapshot.from_reference(db.reference("samples/1"))
    sample = snapshot.data(SampleData(values=[], more_values=[]))

Only true absence triggers filling: a key that is present keeps its
value even when it is ``None`` or an empty collection.  Filling is
shallow; nested records are left to the decoder.
"""

from __future__ import annotations

import copy
import dataclasses
import logging
from collections.abc import Mapping
from typing import Any, Generic, TypeVar

from pyrtdb.decoder import StructuredDecoder, default_decoder
from pyrtdb.exceptions import RtdbDecodeError
from pyrtdb.fields import declared_fields
from pyrtdb.values import is_record

_logger = logging.getLogger(__name__)

T = TypeVar("T")


def fill_defaults(raw: Mapping[str, Any], default_value: Any) -> dict[str, Any]:
    """Return a copy of *raw* completed with *default_value*'s fields.

    A declared field is filled only when none of its storage keys is
    present in *raw*.  Filled values are deep copies, so neither *raw*
    nor *default_value* is shared with or changed by the result.
    """
    completed = dict(raw)
    filled: list[str] = []
    for field in declared_fields(default_value):
        if any(key in raw for key in field.keys):
            continue
        completed[field.primary_key] = copy.deepcopy(field.value)
        filled.append(field.primary_key)
    if filled:
        _logger.debug("Filled %d missing field(s) from defaults: %s", len(filled), ", ".join(filled))
    return completed


def decode_snapshot(
    raw: Any,
    default_value: T,
    decoder: StructuredDecoder | None = None,
    *,
    target_type: Any = None,
) -> T:
    """Decode a snapshot value, filling missing top-level fields from *default_value*.

    Parameters
    ----------
    raw : JsonValue
        The snapshot value; ``None`` when nothing is stored at the path.
    default_value : T
        Instance of the target type mined for per-field fallbacks.
    decoder : StructuredDecoder or None
        Decoder for the completed value.  Defaults to the shared
        :func:`~pyrtdb.decoder.default_decoder`.
    target_type : type or None
        Type to decode into.  Defaults to ``type(default_value)``; pass it
        for ``Optional`` targets or ``TypedDict`` defaults.

    Raises
    ------
    ValueNotFoundError
        *raw* is ``None`` and the target type is not optional, or a
        required field is still missing after filling.
    TypeMismatchError
        A present value has the wrong shape.
    """
    if decoder is None:
        decoder = default_decoder()
    if target_type is None:
        target_type = type(default_value)

    if is_record(raw):
        return decoder.decode(target_type, fill_defaults(raw, default_value))

    # Absent or non-record values go straight to the decoder so it can
    # report a missing required value instead of silently defaulting.
    return decoder.decode(target_type, raw)


@dataclasses.dataclass(frozen=True)
class DecodeResult(Generic[T]):
    """Outcome of :func:`try_decode_snapshot`: a value or a decode error."""

    value: T | None = None
    error: RtdbDecodeError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        """Return the decoded value, re-raising the stored error if any."""
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]


def try_decode_snapshot(
    raw: Any,
    default_value: T,
    decoder: StructuredDecoder | None = None,
    *,
    target_type: Any = None,
) -> DecodeResult[T]:
    """Like :func:`decode_snapshot`, but returns decode errors instead of raising them.

    Configuration errors still raise.
    """
    try:
        value = decode_snapshot(raw, default_value, decoder, target_type=target_type)
    except RtdbDecodeError as exc:
        return DecodeResult(error=exc)
    return DecodeResult(value=value)


@dataclasses.dataclass(frozen=True)
class Snapshot:
    """A value read from a database path.

    Parameters
    ----------
    key : str or None
        Last path segment of the location (``None`` for the root).
    value : JsonValue
        Deserialized value; ``None`` when nothing is stored.
    """

    key: str | None
    value: Any = None

    @classmethod
    def from_reference(cls, ref: Any) -> Snapshot:
        """Read the current value of *ref*.

        *ref* is any client reference exposing ``get()`` and ``key``,
        such as ``firebase_admin.db.Reference``.
        """
        return cls(key=getattr(ref, "key", None), value=ref.get())

    def exists(self) -> bool:
        return self.value is not None

    def data(
        self,
        default_value: T,
        decoder: StructuredDecoder | None = None,
        *,
        target_type: Any = None,
    ) -> T:
        """Decode the snapshot, filling fields the database dropped from *default_value*."""
        return decode_snapshot(self.value, default_value, decoder, target_type=target_type)

    def data_as(self, target_type: type[T], decoder: StructuredDecoder | None = None) -> T:
        """Decode the snapshot as-is, without default filling."""
        if decoder is None:
            decoder = default_decoder()
        return decoder.decode(target_type, self.value)
