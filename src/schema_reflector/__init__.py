"""Generate JSON Schema documents from Python types."""

import logging

from .configuration.reflector_options import ReflectorOptions
from .overrides import OverrideStore
from .reflection import DefinitionRegistry, Reflector, reflect
from .reflection_errors import (
    CyclicTypeError,
    OverrideTargetInvalid,
    SchemaReflectionError,
    UnsupportedTypeError,
)
from .schema_model import DRAFT_04_VERSION, Schema, SchemaNode
from .type_model import (
    Capabilities,
    CapabilityTable,
    FieldDescriptor,
    SchemaCondition,
    TypeDescriptor,
    TypeKind,
    field_of,
    schema_field,
)

logging.getLogger("schema_reflector").addHandler(logging.NullHandler())

__all__ = [
    "DRAFT_04_VERSION",
    "Capabilities",
    "CapabilityTable",
    "CyclicTypeError",
    "DefinitionRegistry",
    "FieldDescriptor",
    "OverrideStore",
    "OverrideTargetInvalid",
    "Reflector",
    "ReflectorOptions",
    "Schema",
    "SchemaCondition",
    "SchemaNode",
    "SchemaReflectionError",
    "TypeDescriptor",
    "TypeKind",
    "UnsupportedTypeError",
    "field_of",
    "reflect",
    "schema_field",
]
