"""Base models for Realtime Database records."""

from pyrtdb.models._base import RtdbModel, RtdbTimestamp, parse_timestamp

__all__ = [
    "RtdbModel",
    "RtdbTimestamp",
    "parse_timestamp",
]
