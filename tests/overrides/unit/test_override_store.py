"""Override store tests."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Optional

import pytest
from schema_reflector.overrides import OverrideStore
from schema_reflector.reflection_errors import OverrideTargetInvalid
from schema_reflector.type_model import TypeKind, describe_type, primitive


@dataclass
class Human:
    Name: str
    Sex: str
    _age: int


@dataclass
class Alien:
    Blerp: str
    bloop: float


def test_set_accepts_record_type_and_existing_field() -> None:
    store = OverrideStore()

    assert store.set(Human, "Name", "required") is None


def test_set_rejects_optional_record_target() -> None:
    store = OverrideStore()

    rejection = store.set(Optional[Human], "Name", "required")

    assert isinstance(rejection, OverrideTargetInvalid)
    assert "expecting a record type" in str(rejection)
    assert len(store) == 0


def test_set_rejects_instances() -> None:
    rejection = OverrideStore().set(Human("a", "b", 1), "Name", "required")

    assert isinstance(rejection, OverrideTargetInvalid)


def test_set_rejects_missing_field() -> None:
    rejection = OverrideStore().set(Human, "name", "required")

    assert isinstance(rejection, OverrideTargetInvalid)
    assert str(rejection) == "record Human does not have field name"


def test_set_rejects_non_record_descriptor() -> None:
    rejection = OverrideStore().set(primitive(TypeKind.STRING), "Name", "required")

    assert isinstance(rejection, OverrideTargetInvalid)


def test_get_returns_exact_override() -> None:
    store = OverrideStore()
    store.set(Human, "Name", "required")

    assert store.get(Human, "Name") == "required"


def test_get_returns_empty_string_when_absent() -> None:
    store = OverrideStore()
    store.set(Human, "Name", "required")

    assert store.get(Human, "bloop") == ""
    assert store.get(Alien, "Name") == ""


def test_get_keeps_fields_and_records_apart() -> None:
    store = OverrideStore()
    store.set(Human, "Name", "required")
    store.set(Human, "Sex", "required,enum=male|female|neither|both")
    store.set(Alien, "bloop", "required,enum=3.1415926535897932384626")

    assert store.get(Human, "Name") == "required"
    assert store.get(Human, "Sex") == "required,enum=male|female|neither|both"
    assert store.get(Alien, "bloop") == "required,enum=3.1415926535897932384626"
    assert store.get(Human, "bloop") == ""


def test_descriptor_and_type_share_overrides() -> None:
    store = OverrideStore()
    store.set(describe_type(Human), "Sex", "enum=f|m")

    assert store.get(Human, "Sex") == "enum=f|m"


def test_snapshot_is_isolated_from_later_writes() -> None:
    store = OverrideStore()
    store.set(Human, "Name", "required")

    snapshot = store.snapshot()
    store.set(Human, "Sex", "required")

    assert dict(snapshot) == {(Human, "Name"): "required"}
    with pytest.raises(TypeError):
        snapshot[(Human, "Sex")] = "x"  # type: ignore[index]


def test_concurrent_writes_keep_store_consistent() -> None:
    store = OverrideStore()
    annotations = [f"title=writer {index}" for index in range(50)]

    threads = [
        threading.Thread(target=store.set, args=(Human, "Name", annotation))
        for annotation in annotations
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert store.get(Human, "Name") in annotations
    assert len(store) == 1
