"""Capability discovery for Python classes.

A class opts into a schema capability by defining one of the classmethods
below. Classes that cannot be edited (third-party or generated code) can be
given the same capabilities through a :class:`CapabilityTable`.

- ``enum_descriptor()`` or subclassing :class:`enum.Enum`: value may be
  encoded as a string or an integer.
- ``json_schema_one_of()``: schema is an exclusive ``oneOf`` over the returned
  alternatives (types, or ``None`` for a literal null).
- ``json_schema_and_one_of()``: ``oneOf`` over the returned alternatives is
  merged into the structural schema of the class.
- ``json_schema_if_then_else()``: returns a :class:`SchemaCondition`.
- ``json_schema()``: returns a complete :class:`SchemaNode`.
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from enum import Enum
from typing import Any

from .type_descriptors import NO_CAPABILITIES, Capabilities

ENUM_DESCRIPTOR_HOOK = "enum_descriptor"
ONE_OF_HOOK = "json_schema_one_of"
AND_ONE_OF_HOOK = "json_schema_and_one_of"
IF_THEN_ELSE_HOOK = "json_schema_if_then_else"
CUSTOM_SCHEMA_HOOK = "json_schema"


class CapabilityTable:
    """Explicit capability registrations keyed by type identity."""

    def __init__(self) -> None:
        self._entries: dict[object, Capabilities] = {}
        self._lock = threading.Lock()

    def register(self, target: object, capabilities: Capabilities) -> None:
        with self._lock:
            self._entries[target] = capabilities

    def lookup(self, target: object) -> Capabilities | None:
        with self._lock:
            return self._entries.get(target)

    def __contains__(self, target: object) -> bool:
        return self.lookup(target) is not None


def discover_capabilities(
    py_type: object, table: CapabilityTable | None = None
) -> Capabilities:
    """Return the capabilities declared by ``py_type``.

    Table registrations win over hooks defined on the class itself.
    """
    if table is not None:
        registered = table.lookup(py_type)
        if registered is not None:
            return registered
    if not isinstance(py_type, type):
        return NO_CAPABILITIES

    enum_provider = issubclass(py_type, Enum) or _hook(py_type, ENUM_DESCRIPTOR_HOOK) is not None
    capabilities = Capabilities(
        enum_provider=enum_provider,
        one_of=_hook(py_type, ONE_OF_HOOK),
        and_one_of=_hook(py_type, AND_ONE_OF_HOOK),
        if_then_else=_hook(py_type, IF_THEN_ELSE_HOOK),
        custom_schema=_hook(py_type, CUSTOM_SCHEMA_HOOK),
    )
    return NO_CAPABILITIES if capabilities == NO_CAPABILITIES else capabilities


def _hook(py_type: type, name: str) -> Callable[[], Any] | None:
    candidate = getattr(py_type, name, None)
    return candidate if callable(candidate) else None
