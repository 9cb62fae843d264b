"""Reflection engine exports."""

from .definition_registry import DefinitionRegistry
from .field_resolver import ResolvedField, resolve_field
from .type_walker import Reflector, TypeWalker, reflect

__all__ = [
    "DefinitionRegistry",
    "Reflector",
    "ResolvedField",
    "TypeWalker",
    "reflect",
    "resolve_field",
]
