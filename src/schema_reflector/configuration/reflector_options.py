"""Reflection configuration entities."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from schema_reflector.schema_model import DRAFT_04_VERSION, SchemaNode

if TYPE_CHECKING:
    from schema_reflector.overrides import OverrideStore
    from schema_reflector.type_model import CapabilityTable, TypeDescriptor

TypeOverride = Callable[["TypeDescriptor"], "SchemaNode | None"]

DEFAULT_MAX_DEPTH = 64


@dataclass(frozen=True)
class ReflectorOptions:  # pylint: disable=too-many-instance-attributes
    """Options for one reflection call.

    ``ignored_types`` holds type identities (Python types for introspected
    descriptors). ``type_override`` is consulted before structural inference
    for every type and may return a replacement node or ``None``.
    """

    allow_additional_properties: bool = False
    required_from_annotations_only: bool = False
    expand_top_level: bool = False
    do_not_reference: bool = False
    fully_qualify_names: bool = False
    ignored_types: frozenset[object] = field(default_factory=frozenset)
    type_override: TypeOverride | None = None
    overrides: OverrideStore | None = None
    capability_table: CapabilityTable | None = None
    schema_version: str = DRAFT_04_VERSION
    max_depth: int = DEFAULT_MAX_DEPTH
