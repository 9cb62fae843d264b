"""Type descriptor exports."""

from .capabilities import CapabilityTable, discover_capabilities
from .introspection import TypeIntrospector, describe_type, field_of, schema_field
from .type_descriptors import (
    ANY,
    NO_CAPABILITIES,
    Capabilities,
    FieldDescriptor,
    SchemaCondition,
    TypeDescriptor,
    TypeKind,
    array_of,
    formatted,
    map_of,
    optional_of,
    primitive,
    record,
)

__all__ = [
    "ANY",
    "NO_CAPABILITIES",
    "Capabilities",
    "CapabilityTable",
    "FieldDescriptor",
    "SchemaCondition",
    "TypeDescriptor",
    "TypeIntrospector",
    "TypeKind",
    "array_of",
    "describe_type",
    "discover_capabilities",
    "field_of",
    "formatted",
    "map_of",
    "optional_of",
    "primitive",
    "record",
    "schema_field",
]
