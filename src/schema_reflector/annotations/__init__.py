"""Annotation grammar and constraint exports."""

from .constraint_applier import ALLOWED_FORMATS, allow_null, apply_constraints
from .tag_grammar import (
    Directive,
    SerializationTag,
    has_bare_keyword,
    is_ignored_annotation,
    parse_directives,
    parse_serialization_tag,
)

__all__ = [
    "ALLOWED_FORMATS",
    "Directive",
    "SerializationTag",
    "allow_null",
    "apply_constraints",
    "has_bare_keyword",
    "is_ignored_annotation",
    "parse_directives",
    "parse_serialization_tag",
]
