"""Schema document exports."""

from .schema_nodes import DEFINITIONS_PREFIX, DRAFT_04_VERSION, Schema, SchemaNode

__all__ = [
    "DEFINITIONS_PREFIX",
    "DRAFT_04_VERSION",
    "Schema",
    "SchemaNode",
]
