"""Tests for RtdbModel and RtdbTimestamp."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest
from pydantic import Field

from pyrtdb.exceptions import RtdbConfigError, TypeMismatchError, ValueNotFoundError
from pyrtdb.models import RtdbModel, RtdbTimestamp, parse_timestamp
from pyrtdb.snapshot import decode_snapshot, try_decode_snapshot


class Profile(RtdbModel):
    display_name: str = ""
    favourite_ids: list[int] = Field(default_factory=list)
    updated_at: RtdbTimestamp = None


class Message(RtdbModel):
    body: str
    reactions: list[str]


class Event(RtdbModel):
    at: RtdbTimestamp = None


class TestParseTimestamp:
    def test_seconds(self) -> None:
        assert parse_timestamp(1_700_000_000) == datetime.fromtimestamp(1_700_000_000, tz=UTC)

    def test_milliseconds(self) -> None:
        assert parse_timestamp(1_700_000_000_123) == datetime.fromtimestamp(1_700_000_000, tz=UTC)

    def test_none_and_datetime_pass_through(self) -> None:
        now = datetime(2026, 1, 1, tzinfo=UTC)
        assert parse_timestamp(None) is None
        assert parse_timestamp(now) is now

    @pytest.mark.parametrize("value", [[1, 2], {"x": 1}, True, "inf", "nan", "soon", 10**25])
    def test_invalid_values_raise_value_error(self, value: object) -> None:
        with pytest.raises(ValueError):
            parse_timestamp(value)

    @pytest.mark.parametrize("value", [[1, 2], {"x": 1}, "inf", 10**25])
    def test_invalid_values_decode_as_type_mismatch(self, value: object) -> None:
        with pytest.raises(TypeMismatchError) as exc_info:
            decode_snapshot({"at": value}, Event())
        assert exc_info.value.path == ("at",)
        assert not try_decode_snapshot({"at": value}, Event()).ok


class TestRtdbModel:
    def test_camel_case_keys(self) -> None:
        profile = Profile.model_validate({"displayName": "Ada", "favouriteIds": ["3"]})
        assert profile.display_name == "Ada"
        assert profile.favourite_ids == [3]

    def test_extra_keys_ignored(self) -> None:
        profile = Profile.model_validate({"displayName": "Ada", "legacyField": True})
        assert profile == Profile(display_name="Ada")

    def test_from_snapshot_uses_field_defaults(self) -> None:
        profile = Profile.from_snapshot({"displayName": "Ada", "updatedAt": 1_700_000_000_000})

        assert profile.display_name == "Ada"
        assert profile.favourite_ids == []
        assert profile.updated_at == datetime.fromtimestamp(1_700_000_000, tz=UTC)

    def test_from_snapshot_with_explicit_default(self) -> None:
        message = Message.from_snapshot({"body": "hi"}, Message(body="", reactions=[]))
        assert message == Message(body="hi", reactions=[])

    def test_from_snapshot_requires_default_for_required_fields(self) -> None:
        with pytest.raises(RtdbConfigError):
            Message.from_snapshot({"body": "hi"})

    def test_from_snapshot_absent(self) -> None:
        with pytest.raises(ValueNotFoundError):
            Profile.from_snapshot(None)
