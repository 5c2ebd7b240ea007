from __future__ import annotations

from pyrtdb.values import is_record, storage_view


def test_is_record_only_for_mappings() -> None:
    assert is_record({})
    assert is_record({"a": 1})
    assert not is_record(None)
    assert not is_record([{"a": 1}])
    assert not is_record("a")


def test_storage_view_drops_empty_collections_and_nulls() -> None:
    written = {
        "name": "mix",
        "tracks": [],
        "tags": {},
        "owner": None,
        "nested": {"inner": [], "kept": 0},
    }
    assert storage_view(written) == {"name": "mix", "nested": {"kept": 0}}


def test_storage_view_keeps_falsy_scalars() -> None:
    assert storage_view({"count": 0, "enabled": False, "label": ""}) == {"count": 0, "enabled": False, "label": ""}


def test_storage_view_all_empty_record_is_absent() -> None:
    assert storage_view({"values": [], "moreValues": []}) is None
    assert storage_view({}) is None
    assert storage_view([]) is None


def test_storage_view_lists() -> None:
    assert storage_view([1, None, 3]) == [1, None, 3]
    assert storage_view([1, {}, None]) == [1]
    assert storage_view([[], {"a": []}, "x"]) == [None, None, "x"]


def test_storage_view_stringifies_keys() -> None:
    assert storage_view({1: "a", 2: "b"}) == {"1": "a", "2": "b"}
