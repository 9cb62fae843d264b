"""Per-call registry of named record definitions."""

from __future__ import annotations

import logging

from schema_reflector.schema_model import SchemaNode
from schema_reflector.type_model import TypeDescriptor

_LOGGER = logging.getLogger("schema_reflector.reflection")

ROOT_REFERENCE = "#"


class DefinitionRegistry:
    """Map of definition key to schema node for one reflection call.

    Each record is registered before its fields are walked, so a record that
    refers to itself resolves to a ``$ref`` instead of recursing forever.
    """

    def __init__(self, *, fully_qualify_names: bool = False) -> None:
        self._fully_qualify_names = fully_qualify_names
        self._definitions: dict[str, SchemaNode] = {}
        self._root_key: str | None = None

    @property
    def definitions(self) -> dict[str, SchemaNode]:
        return self._definitions

    def key_for(self, descriptor: TypeDescriptor) -> str:
        if self._fully_qualify_names:
            return descriptor.qualified_name
        return descriptor.name

    def contains(self, key: str) -> bool:
        return key in self._definitions or key == self._root_key

    def register(self, key: str, node: SchemaNode) -> None:
        _LOGGER.debug("Registering definition %s", key)
        self._definitions[key] = node

    def reserve_root(self, key: str) -> None:
        """Mark ``key`` as the inlined root; references to it point at ``#``."""
        self._root_key = key

    def reference(self, key: str) -> SchemaNode:
        if key == self._root_key:
            return SchemaNode(ref=ROOT_REFERENCE)
        return SchemaNode.reference(key)
