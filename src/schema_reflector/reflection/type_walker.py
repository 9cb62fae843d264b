"""Recursive type-to-schema reflection."""

from __future__ import annotations

import copy
import logging
from collections.abc import Mapping
from types import MappingProxyType

from schema_reflector.annotations import apply_constraints
from schema_reflector.configuration.reflector_options import ReflectorOptions
from schema_reflector.overrides import OverrideKey
from schema_reflector.reflection_errors import CyclicTypeError, UnsupportedTypeError
from schema_reflector.schema_model import Schema, SchemaNode
from schema_reflector.type_model import TypeDescriptor, TypeIntrospector, TypeKind

from .definition_registry import DefinitionRegistry
from .field_resolver import resolve_field
from .polymorphism import (
    attach_condition,
    custom_schema,
    enum_schema,
    exclusive_alternatives,
    merge_combined_alternatives,
)

_LOGGER = logging.getLogger("schema_reflector.reflection")

MATCH_ALL_PATTERN = ".*"
BASE64_ENCODING = "base64"

_PRIMITIVE_TYPES = {
    TypeKind.BOOLEAN: "boolean",
    TypeKind.INTEGER: "integer",
    TypeKind.NUMBER: "number",
    TypeKind.STRING: "string",
}


class TypeWalker:
    """Depth-first visitor holding the state of one reflection call."""

    def __init__(
        self,
        options: ReflectorOptions,
        *,
        registry: DefinitionRegistry | None = None,
        introspector: TypeIntrospector | None = None,
    ) -> None:
        self._options = options
        self._registry = registry or DefinitionRegistry(
            fully_qualify_names=options.fully_qualify_names
        )
        self._introspector = introspector or TypeIntrospector(options.capability_table)
        self._overrides: Mapping[OverrideKey, str] = (
            options.overrides.snapshot()
            if options.overrides is not None
            else MappingProxyType({})
        )
        self._path: list[TypeDescriptor] = []

    @property
    def registry(self) -> DefinitionRegistry:
        return self._registry

    def reflect_root(self, target: object) -> Schema:
        """Reflect ``target`` into a complete schema document."""
        descriptor = self._introspector.describe(target)
        root_record = descriptor.unwrapped()
        if self._options.expand_top_level and self._expandable(root_record):
            root = self._expand_root(root_record)
        else:
            root = self.reflect_type(descriptor)
        return Schema(
            root=root,
            definitions=self._registry.definitions,
            version=self._options.schema_version,
        )

    def reflect_type(self, target: object) -> SchemaNode:
        """Return the schema node for ``target``, registering records on the way."""
        descriptor = self._introspector.describe(target)
        if len(self._path) >= self._options.max_depth:
            raise CyclicTypeError(
                f"Type graph exceeds {self._options.max_depth} levels at {_label(descriptor)}"
            )
        self._path.append(descriptor)
        try:
            return self._reflect(descriptor)
        finally:
            self._path.pop()

    def _reflect(self, descriptor: TypeDescriptor) -> SchemaNode:
        override = self._type_override(descriptor)
        if override is not None:
            return override
        if descriptor.identity is not None and descriptor.identity in self._options.ignored_types:
            return SchemaNode(type="object", additional_properties=True)

        if descriptor.kind is TypeKind.RECORD and not self._options.do_not_reference:
            key = self._registry.key_for(descriptor)
            if self._registry.contains(key):
                return self._registry.reference(key)

        # Past this point nothing breaks a cycle through the registry.
        if any(_same_type(entry, descriptor) for entry in self._path[:-1]):
            raise CyclicTypeError(f"{_label(descriptor)} refers to itself without a reference")

        capabilities = descriptor.capabilities
        if capabilities.enum_provider:
            return enum_schema()
        if capabilities.custom_schema is not None:
            return custom_schema(descriptor)
        if capabilities.one_of is not None:
            return self._reflect_alternatives(descriptor)
        if descriptor.kind is TypeKind.RECORD:
            return self._reflect_record(descriptor)

        node = self._reflect_structural(descriptor)
        merge_combined_alternatives(node, descriptor, self.reflect_type)
        return node

    def _reflect_structural(self, descriptor: TypeDescriptor) -> SchemaNode:
        kind = descriptor.kind
        if kind in _PRIMITIVE_TYPES:
            return SchemaNode(type=_PRIMITIVE_TYPES[kind])
        if kind is TypeKind.FORMATTED:
            return SchemaNode(type="string", format=descriptor.format)
        if kind is TypeKind.BYTES:
            return SchemaNode(type="string", media=SchemaNode(binary_encoding=BASE64_ENCODING))
        if kind is TypeKind.ANY:
            return SchemaNode(type="object", additional_properties=True)
        if kind is TypeKind.OPTIONAL and descriptor.element is not None:
            return self.reflect_type(descriptor.element)
        if kind is TypeKind.MAP:
            node = SchemaNode(type="object")
            value = descriptor.element
            if value is not None and value.unwrapped().kind is not TypeKind.ANY:
                node.pattern_properties = {MATCH_ALL_PATTERN: self.reflect_type(value)}
            return node
        if kind is TypeKind.ARRAY and descriptor.element is not None:
            node = SchemaNode(type="array", items=self.reflect_type(descriptor.element))
            if descriptor.length is not None:
                node.min_items = descriptor.length
                node.max_items = descriptor.length
            return node
        raise UnsupportedTypeError(_label(descriptor))

    def _reflect_record(self, descriptor: TypeDescriptor) -> SchemaNode:
        node = self._new_object_node()
        if self._options.do_not_reference:
            self._populate_record(node, descriptor)
            return node

        key = self._registry.key_for(descriptor)
        self._registry.register(key, node)
        self._populate_record(node, descriptor)
        return self._registry.reference(key)

    def _reflect_alternatives(self, descriptor: TypeDescriptor) -> SchemaNode:
        if descriptor.kind is not TypeKind.RECORD or self._options.do_not_reference:
            return exclusive_alternatives(descriptor, self.reflect_type)
        # Named alternatives get a definition holding nothing but the oneOf list.
        key = self._registry.key_for(descriptor)
        node = SchemaNode()
        self._registry.register(key, node)
        node.one_of = exclusive_alternatives(descriptor, self.reflect_type).one_of
        return self._registry.reference(key)

    def _expand_root(self, descriptor: TypeDescriptor) -> SchemaNode:
        node = self._new_object_node()
        if not self._options.do_not_reference:
            self._registry.reserve_root(self._registry.key_for(descriptor))
        self._path.append(descriptor)
        try:
            self._populate_record(node, descriptor)
        finally:
            self._path.pop()
        return node

    def _populate_record(self, node: SchemaNode, descriptor: TypeDescriptor) -> None:
        _LOGGER.debug("Reflecting record %s", _label(descriptor))
        self._reflect_fields(node, descriptor, embedding=())
        merge_combined_alternatives(node, descriptor, self.reflect_type)
        attach_condition(node, descriptor, self.reflect_type)

    def _reflect_fields(
        self,
        node: SchemaNode,
        descriptor: TypeDescriptor,
        *,
        embedding: tuple[TypeDescriptor, ...],
    ) -> None:
        properties = node.properties if node.properties is not None else {}
        node.properties = properties
        for field in descriptor.fields:
            if field.embedded and field.exported:
                embedded = field.type.unwrapped()
                if embedded.kind is TypeKind.RECORD:
                    if embedded is descriptor or embedded in embedding:
                        raise CyclicTypeError(f"{_label(embedded)} embeds itself")
                    self._reflect_fields(node, embedded, embedding=(*embedding, descriptor))
                    continue

            resolved = resolve_field(descriptor, field, self._options, self._overrides)
            if resolved is None:
                continue
            property_node = self.reflect_type(field.type)
            apply_constraints(
                property_node,
                resolved.directives,
                parent=node,
                property_name=resolved.name,
            )
            properties[resolved.name] = property_node
            if resolved.required and resolved.name not in node.required:
                node.required.append(resolved.name)

    def _new_object_node(self) -> SchemaNode:
        return SchemaNode(
            type="object",
            properties={},
            additional_properties=self._options.allow_additional_properties,
        )

    def _expandable(self, descriptor: TypeDescriptor) -> bool:
        capabilities = descriptor.capabilities
        return (
            descriptor.kind is TypeKind.RECORD
            and not capabilities.enum_provider
            and capabilities.custom_schema is None
            and capabilities.one_of is None
            and self._type_override(descriptor) is None
        )

    def _type_override(self, descriptor: TypeDescriptor) -> SchemaNode | None:
        hook = self._options.type_override
        if hook is None:
            return None
        replacement = hook(descriptor)
        return copy.deepcopy(replacement) if replacement is not None else None


class Reflector:
    """Reflects types into JSON Schema documents.

    A reflector is cheap and reusable; every :meth:`reflect` call starts with
    an empty definitions registry.
    """

    def __init__(self, options: ReflectorOptions | None = None) -> None:
        self.options = options or ReflectorOptions()

    def reflect(self, target: object) -> Schema:
        return TypeWalker(self.options).reflect_root(target)

    def reflect_type(self, target: object, registry: DefinitionRegistry) -> SchemaNode:
        """Reflect one type into ``registry`` without building a root document."""
        return TypeWalker(self.options, registry=registry).reflect_type(target)


def reflect(target: object, options: ReflectorOptions | None = None) -> Schema:
    """Reflect ``target`` with ``options`` (defaults when omitted)."""
    return Reflector(options).reflect(target)


def _label(descriptor: TypeDescriptor) -> str:
    identity = descriptor.identity
    if isinstance(identity, type):
        return f"{identity.__module__}.{identity.__qualname__}"
    return descriptor.qualified_name or descriptor.kind.value


def _same_type(left: TypeDescriptor, right: TypeDescriptor) -> bool:
    if left is right:
        return True
    return left.identity is not None and left.identity is right.identity and left.kind is right.kind
