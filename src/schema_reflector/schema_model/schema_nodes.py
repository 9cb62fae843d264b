"""Schema document entities."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

DRAFT_04_VERSION = "http://json-schema.org/draft-04/schema#"
DEFINITIONS_PREFIX = "#/definitions/"


@dataclass
class SchemaNode:  # pylint: disable=too-many-instance-attributes
    """One node of a generated JSON Schema graph.

    Unset keywords are ``None`` (or empty containers) and are left out of the
    rendered document. Boolean keywords are only rendered when true.
    """

    ref: str | None = None
    multiple_of: int | float | None = None
    maximum: int | float | None = None
    exclusive_maximum: bool = False
    minimum: int | float | None = None
    exclusive_minimum: bool = False
    max_length: int | None = None
    min_length: int | None = None
    pattern: str | None = None
    items: SchemaNode | None = None
    max_items: int | None = None
    min_items: int | None = None
    unique_items: bool = False
    required: list[str] = field(default_factory=list)
    properties: dict[str, SchemaNode] | None = None
    pattern_properties: dict[str, SchemaNode] | None = None
    additional_properties: bool | SchemaNode | None = None
    enum: list[Any] | None = None
    type: str | None = None
    all_of: list[SchemaNode] | None = None
    any_of: list[SchemaNode] | None = None
    one_of: list[SchemaNode] | None = None
    if_: SchemaNode | None = None
    then: SchemaNode | None = None
    else_: SchemaNode | None = None
    title: str | None = None
    description: str | None = None
    default: Any = None
    examples: list[Any] | None = None
    format: str | None = None
    media: SchemaNode | None = None
    binary_encoding: str | None = None

    @staticmethod
    def reference(key: str) -> SchemaNode:
        """Return a node pointing at a named definition."""
        return SchemaNode(ref=f"{DEFINITIONS_PREFIX}{key}")

    def to_dict(self) -> dict[str, Any]:
        """Render the node with JSON Schema keyword names."""
        rendered: dict[str, Any] = {}
        _put(rendered, "$ref", self.ref)
        _put(rendered, "multipleOf", self.multiple_of)
        _put(rendered, "maximum", self.maximum)
        _put_flag(rendered, "exclusiveMaximum", self.exclusive_maximum)
        _put(rendered, "minimum", self.minimum)
        _put_flag(rendered, "exclusiveMinimum", self.exclusive_minimum)
        _put(rendered, "maxLength", self.max_length)
        _put(rendered, "minLength", self.min_length)
        _put(rendered, "pattern", self.pattern)
        _put_node(rendered, "items", self.items)
        _put(rendered, "maxItems", self.max_items)
        _put(rendered, "minItems", self.min_items)
        _put_flag(rendered, "uniqueItems", self.unique_items)
        if self.required:
            rendered["required"] = list(self.required)
        _put_mapping(rendered, "properties", self.properties)
        _put_mapping(rendered, "patternProperties", self.pattern_properties)
        if isinstance(self.additional_properties, SchemaNode):
            rendered["additionalProperties"] = self.additional_properties.to_dict()
        else:
            _put(rendered, "additionalProperties", self.additional_properties)
        if self.enum is not None:
            rendered["enum"] = list(self.enum)
        _put(rendered, "type", self.type)
        _put_sequence(rendered, "allOf", self.all_of)
        _put_sequence(rendered, "anyOf", self.any_of)
        _put_sequence(rendered, "oneOf", self.one_of)
        _put_node(rendered, "if", self.if_)
        _put_node(rendered, "then", self.then)
        _put_node(rendered, "else", self.else_)
        _put(rendered, "title", self.title)
        _put(rendered, "description", self.description)
        _put(rendered, "default", self.default)
        if self.examples:
            rendered["examples"] = list(self.examples)
        _put(rendered, "format", self.format)
        _put_node(rendered, "media", self.media)
        _put(rendered, "binaryEncoding", self.binary_encoding)
        return rendered


@dataclass
class Schema:
    """Root schema document: root node, definitions and version URI."""

    root: SchemaNode
    definitions: dict[str, SchemaNode] = field(default_factory=dict)
    version: str = DRAFT_04_VERSION

    def to_dict(self) -> dict[str, Any]:
        rendered: dict[str, Any] = {"$schema": self.version}
        rendered.update(self.root.to_dict())
        if self.definitions:
            rendered["definitions"] = {
                key: node.to_dict() for key, node in self.definitions.items()
            }
        return rendered

    def to_json(self, *, indent: int | None = 2) -> str:
        """Render the document as deterministic JSON text."""
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)


def _put(rendered: dict[str, Any], key: str, value: Any) -> None:
    if value is not None:
        rendered[key] = value


def _put_flag(rendered: dict[str, Any], key: str, value: bool) -> None:
    if value:
        rendered[key] = True


def _put_node(rendered: dict[str, Any], key: str, node: SchemaNode | None) -> None:
    if node is not None:
        rendered[key] = node.to_dict()


def _put_sequence(rendered: dict[str, Any], key: str, nodes: list[SchemaNode] | None) -> None:
    if nodes is not None:
        rendered[key] = [node.to_dict() for node in nodes]


def _put_mapping(
    rendered: dict[str, Any], key: str, nodes: dict[str, SchemaNode] | None
) -> None:
    if nodes:
        rendered[key] = {name: node.to_dict() for name, node in nodes.items()}
