"""Type descriptor entities consumed by the reflection engine."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from enum import Enum
from functools import cached_property
from typing import TYPE_CHECKING, Union

if TYPE_CHECKING:
    from schema_reflector.schema_model import SchemaNode


class TypeKind(str, Enum):
    """Structural kinds the walker knows how to map."""

    BOOLEAN = "boolean"
    INTEGER = "integer"
    NUMBER = "number"
    STRING = "string"
    BYTES = "bytes"
    FORMATTED = "formatted"
    ARRAY = "array"
    MAP = "map"
    ANY = "any"
    OPTIONAL = "optional"
    RECORD = "record"
    OPAQUE = "opaque"


Alternative = Union["TypeDescriptor", None]
AlternativesHook = Callable[[], Sequence[Alternative]]


@dataclass(frozen=True)
class SchemaCondition:
    """Condition field plus the schemas applied when it matches or not.

    ``then`` and ``else_`` may be given as Python types; introspection turns
    them into descriptors before the walker sees them.
    """

    if_field: FieldDescriptor
    then: TypeDescriptor | type | None = None
    else_: TypeDescriptor | type | None = None


@dataclass(frozen=True)
class Capabilities:
    """Schema hooks a type opts into."""

    enum_provider: bool = False
    one_of: AlternativesHook | None = None
    and_one_of: AlternativesHook | None = None
    if_then_else: Callable[[], SchemaCondition] | None = None
    custom_schema: Callable[[], SchemaNode] | None = None


NO_CAPABILITIES = Capabilities()


@dataclass(frozen=True, eq=False)
class TypeDescriptor:  # pylint: disable=too-many-instance-attributes
    """Language-neutral description of one type.

    Record fields are loaded lazily through ``field_source`` so that a record
    can refer to itself without building an infinite descriptor graph.
    """

    kind: TypeKind
    name: str = ""
    namespace: str = ""
    identity: object = None
    element: TypeDescriptor | None = None
    length: int | None = None
    format: str | None = None
    capabilities: Capabilities = NO_CAPABILITIES
    field_source: Callable[[], Sequence[FieldDescriptor]] | Sequence[FieldDescriptor] = ()

    @cached_property
    def fields(self) -> tuple[FieldDescriptor, ...]:
        source = self.field_source
        return tuple(source() if callable(source) else source)

    @property
    def qualified_name(self) -> str:
        return f"{self.namespace}.{self.name}" if self.namespace else self.name

    def unwrapped(self) -> TypeDescriptor:
        """Return the descriptor behind any optional wrappers."""
        current = self
        while current.kind is TypeKind.OPTIONAL and current.element is not None:
            current = current.element
        return current

    def field_named(self, name: str) -> FieldDescriptor | None:
        for candidate in self.fields:
            if candidate.name == name:
                return candidate
        return None

    def __repr__(self) -> str:
        label = self.qualified_name or self.kind.value
        return f"TypeDescriptor({self.kind.value}, {label!r})"


@dataclass(frozen=True, eq=False)
class FieldDescriptor:
    """One declared field of a record.

    ``serialization`` holds the raw serialization directive (``"id,omitempty"``,
    ``"-"``) and ``annotation`` the raw schema directives
    (``"required,minLength=1"``).
    """

    name: str
    type_source: TypeDescriptor | Callable[[], TypeDescriptor]
    serialization: str = ""
    annotation: str = ""
    exported: bool = True
    embedded: bool = False

    @cached_property
    def type(self) -> TypeDescriptor:
        source = self.type_source
        return source if isinstance(source, TypeDescriptor) else source()


def record(
    name: str,
    fields: Sequence[FieldDescriptor] | Callable[[], Sequence[FieldDescriptor]] = (),
    *,
    namespace: str = "",
    identity: object = None,
    capabilities: Capabilities = NO_CAPABILITIES,
) -> TypeDescriptor:
    """Build a record descriptor by hand."""
    return TypeDescriptor(
        kind=TypeKind.RECORD,
        name=name,
        namespace=namespace,
        identity=identity,
        capabilities=capabilities,
        field_source=fields,
    )


def primitive(
    kind: TypeKind, *, name: str = "", capabilities: Capabilities = NO_CAPABILITIES
) -> TypeDescriptor:
    return TypeDescriptor(kind=kind, name=name or kind.value, capabilities=capabilities)


def array_of(element: TypeDescriptor, *, length: int | None = None) -> TypeDescriptor:
    return TypeDescriptor(kind=TypeKind.ARRAY, element=element, length=length)


def map_of(value: TypeDescriptor) -> TypeDescriptor:
    return TypeDescriptor(kind=TypeKind.MAP, element=value)


def optional_of(target: TypeDescriptor) -> TypeDescriptor:
    return TypeDescriptor(kind=TypeKind.OPTIONAL, element=target)


def formatted(format_name: str, *, name: str = "") -> TypeDescriptor:
    return TypeDescriptor(kind=TypeKind.FORMATTED, name=name or format_name, format=format_name)


ANY = TypeDescriptor(kind=TypeKind.ANY, name="any")
