"""Base model for records stored in the Realtime Database.

:class:`RtdbModel` provides:

* ``alias_generator=to_camel`` so camelCase storage keys map
  automatically to snake_case fields (either spelling is accepted).
* ``frozen=True`` and ``extra="ignore"``, so sibling keys written by
  other clients don't break decoding.
* :meth:`RtdbModel.from_snapshot`, a default-filling decode that uses the
  model's own field defaults when no default instance is given.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Annotated, Any, Self

from pydantic import BaseModel, BeforeValidator, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel

from pyrtdb.decoder import StructuredDecoder
from pyrtdb.exceptions import RtdbConfigError
from pyrtdb.snapshot import decode_snapshot

# Threshold to distinguish seconds from milliseconds.
_MS_THRESHOLD = 1_000_000_000_000


def parse_timestamp(value: Any) -> datetime | None:
    """Convert an epoch timestamp (seconds **or** milliseconds) to a UTC datetime.

    ``ServerValue.TIMESTAMP`` is written in milliseconds; hand-written
    records often use seconds.  Returns ``None`` when the value is ``None``.

    Raises ``ValueError`` (reported by pydantic as a validation error) for
    non-numeric, non-finite or out-of-range values.
    """
    if value is None:
        return value
    if isinstance(value, datetime):
        return value
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise ValueError(f"timestamp must be a number, got {type(value).__name__}")
    try:
        ts = int(float(value))
        if ts >= _MS_THRESHOLD:
            ts = ts // 1000
        return datetime.fromtimestamp(ts, tz=UTC)
    except (TypeError, OverflowError, OSError) as exc:
        raise ValueError(f"invalid timestamp {value!r}") from exc


RtdbTimestamp = Annotated[datetime | None, BeforeValidator(parse_timestamp)]
"""Annotated type that coerces epoch ints (seconds or ms) to UTC datetimes."""


class RtdbModel(BaseModel):
    """Base for records read from the Realtime Database."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    @classmethod
    def from_snapshot(
        cls,
        raw: Any,
        default: Self | None = None,
        decoder: StructuredDecoder | None = None,
    ) -> Self:
        """Decode *raw*, filling fields the database dropped.

        When *default* is omitted the model is constructed from its own
        field defaults, which requires every field to declare one.

        Raises
        ------
        RtdbConfigError
            *default* is omitted and the model has required fields.
        """
        if default is None:
            try:
                default = cls()
            except ValidationError as exc:
                raise RtdbConfigError(f"{cls.__name__} has required fields; pass an explicit default") from exc
        return decode_snapshot(raw, default, decoder, target_type=cls)
