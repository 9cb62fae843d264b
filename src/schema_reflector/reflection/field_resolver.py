"""Exported name and requiredness of record fields."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from schema_reflector.annotations import (
    Directive,
    has_bare_keyword,
    is_ignored_annotation,
    parse_directives,
    parse_serialization_tag,
)
from schema_reflector.configuration.reflector_options import ReflectorOptions
from schema_reflector.overrides import OverrideKey, override_identity
from schema_reflector.type_model import FieldDescriptor, TypeDescriptor

REQUIRED_KEYWORD = "required"


@dataclass(frozen=True)
class ResolvedField:
    """A field that appears in the schema."""

    name: str
    required: bool
    directives: tuple[Directive, ...]


def resolve_field(
    owner: TypeDescriptor,
    field: FieldDescriptor,
    options: ReflectorOptions,
    overrides: Mapping[OverrideKey, str],
) -> ResolvedField | None:
    """Return the schema name, requiredness and directives of ``field``.

    ``None`` means the field is left out of the schema.
    """
    if not field.exported:
        return None
    serialization = parse_serialization_tag(field.serialization)
    if serialization.ignored:
        return None
    override = overrides.get((override_identity(owner), field.name))
    annotation = field.annotation if override is None else override
    if is_ignored_annotation(annotation):
        return None
    if options.ignored_types and field.type.unwrapped().identity in options.ignored_types:
        return None

    directives = parse_directives(annotation)
    if options.required_from_annotations_only:
        required = has_bare_keyword(directives, REQUIRED_KEYWORD)
    else:
        required = not serialization.omit_empty
    return ResolvedField(
        name=serialization.name or field.name,
        required=required,
        directives=directives,
    )
