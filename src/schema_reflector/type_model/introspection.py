"""Derive type descriptors from live Python types."""

from __future__ import annotations

import collections.abc
import dataclasses
import datetime
import decimal
import ipaddress
import types
import typing
import urllib.parse
from collections.abc import Callable, Sequence
from enum import Enum
from typing import Any

from schema_reflector.reflection_errors import UnsupportedTypeError

from .capabilities import CapabilityTable, discover_capabilities
from .type_descriptors import (
    ANY,
    NO_CAPABILITIES,
    Alternative,
    AlternativesHook,
    Capabilities,
    FieldDescriptor,
    SchemaCondition,
    TypeDescriptor,
    TypeKind,
    array_of,
    map_of,
    optional_of,
)

SERIALIZATION_METADATA_KEY = "json"
ANNOTATION_METADATA_KEY = "jsonschema"
EMBEDDED_METADATA_KEY = "embedded"

_NONE_TYPE = type(None)

_FORMATTED_TYPES: dict[object, str] = {
    datetime.datetime: "date-time",
    ipaddress.IPv4Address: "ipv4",
    ipaddress.IPv6Address: "ipv6",
    urllib.parse.ParseResult: "uri",
    urllib.parse.SplitResult: "uri",
}
_BYTES_TYPES = (bytes, bytearray, memoryview)
_SEQUENCE_ORIGINS = (
    list,
    set,
    frozenset,
    collections.abc.Sequence,
    collections.abc.MutableSequence,
    collections.abc.Set,
    collections.abc.MutableSet,
    collections.abc.Collection,
    collections.abc.Iterable,
)
_MAPPING_ORIGINS = (dict, collections.abc.Mapping, collections.abc.MutableMapping)


def schema_field(
    *,
    json: str = "",
    jsonschema: str = "",
    embedded: bool = False,
    **kwargs: Any,
) -> Any:
    """Declare a dataclass field with serialization and schema directives.

    Example::

        @dataclass
        class User:
            name: str = schema_field(json="name", jsonschema="minLength=1")
    """
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[SERIALIZATION_METADATA_KEY] = json
    metadata[ANNOTATION_METADATA_KEY] = jsonschema
    metadata[EMBEDDED_METADATA_KEY] = embedded
    return dataclasses.field(metadata=metadata, **kwargs)


class TypeIntrospector:
    """Build descriptors for Python types, caching one descriptor per type."""

    def __init__(self, capability_table: CapabilityTable | None = None) -> None:
        self._capability_table = capability_table
        self._cache: dict[object, TypeDescriptor] = {}

    def describe(self, target: object) -> TypeDescriptor:
        """Return the descriptor of ``target``; descriptors pass through unchanged."""
        if isinstance(target, TypeDescriptor):
            return target
        try:
            cached = self._cache.get(target)
        except TypeError:
            return self._describe(target)
        if cached is None:
            cached = self._describe(target)
            self._cache[target] = cached
        return cached

    def field_of(self, owner: object, field_name: str) -> FieldDescriptor:
        """Return the descriptor of one declared field of a record type."""
        descriptor = self.describe(owner)
        found = descriptor.field_named(field_name) if descriptor.kind is TypeKind.RECORD else None
        if found is None:
            raise KeyError(f"{_label(owner)} does not have field {field_name}")
        return found

    def _describe(self, target: object) -> TypeDescriptor:
        if target is Any or target is object:
            return ANY
        origin = typing.get_origin(target)
        if origin is not None:
            return self._describe_generic(target, origin, typing.get_args(target))
        if target in (list, set, frozenset, tuple):
            return array_of(ANY)
        if target is dict:
            return map_of(ANY)
        if isinstance(target, type):
            return self._describe_class(target)
        raise UnsupportedTypeError(_label(target))

    def _describe_generic(
        self, target: object, origin: object, args: tuple[Any, ...]
    ) -> TypeDescriptor:
        if origin is typing.Annotated:
            return self.describe(args[0])
        if origin in (typing.Union, types.UnionType):
            members = [arg for arg in args if arg is not _NONE_TYPE]
            if len(members) == 1 and len(args) == 2:
                return optional_of(self.describe(members[0]))
            raise UnsupportedTypeError(_label(target), "only optional unions are supported")
        if origin is tuple:
            return self._describe_tuple(target, args)
        if origin in _SEQUENCE_ORIGINS:
            return array_of(self.describe(args[0]) if args else ANY)
        if origin in _MAPPING_ORIGINS:
            return map_of(self.describe(args[1]) if len(args) == 2 else ANY)
        raise UnsupportedTypeError(_label(target))

    def _describe_tuple(self, target: object, args: tuple[Any, ...]) -> TypeDescriptor:
        if not args:
            return array_of(ANY)
        if len(args) == 2 and args[1] is Ellipsis:
            return array_of(self.describe(args[0]))
        if all(arg == args[0] for arg in args):
            return array_of(self.describe(args[0]), length=len(args))
        raise UnsupportedTypeError(_label(target), "heterogeneous tuples have no array mapping")

    def _describe_class(self, target: type) -> TypeDescriptor:
        if target in _FORMATTED_TYPES:
            return TypeDescriptor(
                kind=TypeKind.FORMATTED,
                name=target.__name__,
                namespace=target.__module__,
                identity=target,
                format=_FORMATTED_TYPES[target],
            )
        capabilities = self._bind(discover_capabilities(target, self._capability_table))
        if dataclasses.is_dataclass(target):
            return TypeDescriptor(
                kind=TypeKind.RECORD,
                name=target.__name__,
                namespace=target.__module__,
                identity=target,
                capabilities=capabilities,
                field_source=lambda: self._record_fields(target),
            )
        kind = _primitive_kind(target)
        if kind is None:
            # Classes without a structural mapping still reach type_override and
            # ignored_types; reflecting them otherwise fails.
            kind = TypeKind.OPAQUE if capabilities is NO_CAPABILITIES else TypeKind.RECORD
        return TypeDescriptor(
            kind=kind,
            name=target.__name__,
            namespace=target.__module__,
            identity=target,
            capabilities=capabilities,
        )

    def _record_fields(self, target: type) -> tuple[FieldDescriptor, ...]:
        try:
            hints = typing.get_type_hints(target, include_extras=True)
        except (NameError, TypeError) as exc:
            reason = f"unresolvable annotations: {exc}"
            raise UnsupportedTypeError(_label(target), reason) from exc

        fields: list[FieldDescriptor] = []
        for item in dataclasses.fields(target):
            metadata = item.metadata
            declared = hints.get(item.name, item.type)
            fields.append(
                FieldDescriptor(
                    name=item.name,
                    type_source=self._lazy(declared),
                    serialization=metadata.get(SERIALIZATION_METADATA_KEY, ""),
                    annotation=metadata.get(ANNOTATION_METADATA_KEY, ""),
                    exported=not item.name.startswith("_"),
                    embedded=bool(metadata.get(EMBEDDED_METADATA_KEY, False)),
                )
            )
        return tuple(fields)

    def _lazy(self, declared: object) -> Callable[[], TypeDescriptor]:
        return lambda: self.describe(declared)

    def _bind(self, capabilities: Capabilities) -> Capabilities:
        """Wrap class-level hooks so they yield descriptors."""
        if capabilities is NO_CAPABILITIES:
            return capabilities
        return dataclasses.replace(
            capabilities,
            one_of=self._bind_alternatives(capabilities.one_of),
            and_one_of=self._bind_alternatives(capabilities.and_one_of),
            if_then_else=self._bind_condition(capabilities.if_then_else),
        )

    def _bind_alternatives(self, hook: AlternativesHook | None) -> AlternativesHook | None:
        if hook is None:
            return None

        def alternatives() -> Sequence[Alternative]:
            return [self._alternative(candidate) for candidate in hook()]

        return alternatives

    def _alternative(self, candidate: object) -> Alternative:
        if candidate is None or candidate is _NONE_TYPE:
            return None
        if isinstance(candidate, FieldDescriptor):
            return candidate.type
        return self.describe(candidate)

    def _bind_condition(
        self, hook: Callable[[], SchemaCondition] | None
    ) -> Callable[[], SchemaCondition] | None:
        if hook is None:
            return None

        def condition() -> SchemaCondition:
            declared = hook()
            return SchemaCondition(
                if_field=declared.if_field,
                then=None if declared.then is None else self.describe(declared.then),
                else_=None if declared.else_ is None else self.describe(declared.else_),
            )

        return condition


def describe_type(
    target: object, capability_table: CapabilityTable | None = None
) -> TypeDescriptor:
    """Describe ``target`` with a fresh introspector."""
    return TypeIntrospector(capability_table).describe(target)


def field_of(owner: object, field_name: str) -> FieldDescriptor:
    """Return one field descriptor of a dataclass, for use in conditions."""
    return TypeIntrospector().field_of(owner, field_name)


def _primitive_kind(target: type) -> TypeKind | None:
    # Order matters: bool is an int subclass and enums may mix in str or int.
    if issubclass(target, bool):
        return TypeKind.BOOLEAN
    if issubclass(target, Enum):
        return TypeKind.INTEGER if issubclass(target, int) else TypeKind.STRING
    if issubclass(target, int):
        return TypeKind.INTEGER
    if issubclass(target, (float, decimal.Decimal)):
        return TypeKind.NUMBER
    if issubclass(target, str):
        return TypeKind.STRING
    if issubclass(target, _BYTES_TYPES):
        return TypeKind.BYTES
    return None


def _label(target: object) -> str:
    if isinstance(target, type):
        return f"{target.__module__}.{target.__qualname__}"
    return repr(target)
