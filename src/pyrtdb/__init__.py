"""pyrtdb - Default-filling decoding for Firebase Realtime Database snapshots."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pyrtdb")
except PackageNotFoundError:
    __version__ = "0+local"
from pyrtdb.config import DecodeConfig
from pyrtdb.decoder import SnapshotDecoder, StructuredDecoder
from pyrtdb.exceptions import (
    RtdbConfigError,
    RtdbDecodeError,
    RtdbError,
    TypeMismatchError,
    ValueNotFoundError,
)
from pyrtdb.fields import DeclaredField, HasFieldDefaults, declared_fields
from pyrtdb.models import RtdbModel, RtdbTimestamp
from pyrtdb.snapshot import (
    DecodeResult,
    Snapshot,
    decode_snapshot,
    fill_defaults,
    try_decode_snapshot,
)
from pyrtdb.values import JsonValue, is_record, storage_view

__all__ = [
    "__version__",
    "DecodeConfig",
    "DecodeResult",
    "DeclaredField",
    "HasFieldDefaults",
    "JsonValue",
    "RtdbConfigError",
    "RtdbDecodeError",
    "RtdbError",
    "RtdbModel",
    "RtdbTimestamp",
    "Snapshot",
    "SnapshotDecoder",
    "StructuredDecoder",
    "TypeMismatchError",
    "ValueNotFoundError",
    "declared_fields",
    "decode_snapshot",
    "fill_defaults",
    "is_record",
    "storage_view",
    "try_decode_snapshot",
]
