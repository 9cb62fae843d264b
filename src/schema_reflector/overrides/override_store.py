"""Annotation overrides for record fields that cannot be edited in place."""

from __future__ import annotations

import dataclasses
import threading
from collections.abc import Mapping
from types import MappingProxyType

from schema_reflector.reflection_errors import OverrideTargetInvalid
from schema_reflector.type_model import TypeDescriptor, TypeKind

OverrideKey = tuple[object, str]


class OverrideStore:
    """Mapping of ``(record, field name)`` to a replacement annotation string.

    Targets are dataclass types or record descriptors. Registrations are
    validated in :meth:`set` so that lookups during reflection cannot fail.
    Writes are serialized with a lock; each reflection call reads from one
    :meth:`snapshot` taken when the call starts.
    """

    def __init__(self) -> None:
        self._entries: dict[OverrideKey, str] = {}
        self._lock = threading.Lock()

    def set(
        self, target: object, field_name: str, annotation: str
    ) -> OverrideTargetInvalid | None:
        """Register an override; returns the rejection instead of raising it."""
        if isinstance(target, TypeDescriptor):
            if target.kind is not TypeKind.RECORD:
                return OverrideTargetInvalid(
                    f"expecting a record type, got {target!r} instead"
                )
            if target.field_named(field_name) is None:
                return OverrideTargetInvalid(
                    f"record {target.name} does not have field {field_name}"
                )
        elif isinstance(target, type) and dataclasses.is_dataclass(target):
            declared = {item.name for item in dataclasses.fields(target)}
            if field_name not in declared:
                return OverrideTargetInvalid(
                    f"record {target.__name__} does not have field {field_name}"
                )
        else:
            return OverrideTargetInvalid(f"expecting a record type, got {target!r} instead")

        with self._lock:
            self._entries[(override_identity(target), field_name)] = annotation
        return None

    def get(self, target: object, field_name: str) -> str:
        """Return the override for ``field_name`` of ``target``, or ``""``."""
        with self._lock:
            return self._entries.get((override_identity(target), field_name), "")

    def snapshot(self) -> Mapping[OverrideKey, str]:
        with self._lock:
            return MappingProxyType(dict(self._entries))

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


def override_identity(target: object) -> object:
    """Key under which overrides for ``target`` are stored."""
    if isinstance(target, TypeDescriptor):
        return target.identity if target.identity is not None else target
    return target
