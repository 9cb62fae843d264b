"""Constraint application tests."""

from __future__ import annotations

import logging

import pytest
from schema_reflector.annotations import allow_null, apply_constraints, parse_directives
from schema_reflector.schema_model import SchemaNode


def _apply(node: SchemaNode, annotation: str, **kwargs) -> dict:
    apply_constraints(node, parse_directives(annotation), **kwargs)
    return node.to_dict()


def test_string_keywords() -> None:
    rendered = _apply(
        SchemaNode(type="string"),
        "minLength=1,maxLength=20,pattern=^[a-z]+$,format=email",
    )

    assert rendered == {
        "maxLength": 20,
        "minLength": 1,
        "pattern": "^[a-z]+$",
        "type": "string",
        "format": "email",
    }


def test_string_enum_splits_on_pipe() -> None:
    rendered = _apply(SchemaNode(type="string"), "enum=red|green|blue")

    assert rendered["enum"] == ["red", "green", "blue"]


def test_unknown_format_is_dropped(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.DEBUG, logger="schema_reflector.annotations"):
        rendered = _apply(SchemaNode(type="string"), "format=uuid")

    assert "format" not in rendered
    assert "unsupported format" in caplog.text


def test_not_empty_sets_non_whitespace_pattern() -> None:
    rendered = _apply(SchemaNode(type="string"), "notEmpty")

    assert rendered["pattern"] == "^\\S"


def test_integer_keywords_and_enum() -> None:
    rendered = _apply(
        SchemaNode(type="integer"),
        "minimum=1,maximum=10,multipleOf=2,exclusiveMaximum=true,enum=2|4|6",
    )

    assert rendered == {
        "multipleOf": 2,
        "maximum": 10,
        "exclusiveMaximum": True,
        "minimum": 1,
        "enum": [2, 4, 6],
        "type": "integer",
    }


def test_invalid_numbers_default_to_zero() -> None:
    rendered = _apply(SchemaNode(type="integer"), "minimum=abc,enum=1|x")

    assert rendered["minimum"] == 0
    assert rendered["enum"] == [1, 0]


def test_invalid_boolean_defaults_to_false() -> None:
    rendered = _apply(SchemaNode(type="integer"), "exclusiveMinimum=maybe")

    assert "exclusiveMinimum" not in rendered


def test_number_keywords_parse_floats() -> None:
    rendered = _apply(SchemaNode(type="number"), "minimum=0.5,enum=1.5|2")

    assert rendered["minimum"] == 0.5
    assert rendered["enum"] == [1.5, 2.0]


def test_array_keywords() -> None:
    rendered = _apply(
        SchemaNode(type="array", items=SchemaNode(type="string")),
        "minItems=1,maxItems=3,uniqueItems",
    )

    assert rendered["minItems"] == 1
    assert rendered["maxItems"] == 3
    assert rendered["uniqueItems"] is True


def test_keywords_of_other_kinds_are_ignored() -> None:
    rendered = _apply(SchemaNode(type="boolean"), "minLength=3,minimum=2,minItems=1")

    assert rendered == {"type": "boolean"}


def test_node_without_type_uses_string_keywords() -> None:
    rendered = _apply(SchemaNode(), "enum=web|mobile")

    assert rendered == {"enum": ["web", "mobile"]}


def test_generic_keywords_apply_to_every_kind() -> None:
    rendered = _apply(
        SchemaNode(type="integer"),
        "title=Count,description=How many,default=3,example=1,example=2",
    )

    assert rendered["title"] == "Count"
    assert rendered["description"] == "How many"
    assert rendered["default"] == 3
    assert rendered["examples"] == [1, 2]


def test_boolean_default_is_typed() -> None:
    rendered = _apply(SchemaNode(type="boolean"), "default=true")

    assert rendered["default"] is True


def test_allow_null_moves_type_into_one_of() -> None:
    rendered = _apply(SchemaNode(type="string"), "minLength=2,allowNull")

    assert rendered == {
        "minLength": 2,
        "oneOf": [{"type": "string"}, {"type": "null"}],
    }


def test_allow_null_moves_reference_into_one_of() -> None:
    node = SchemaNode.reference("Address")

    allow_null(node)

    assert node.to_dict() == {
        "oneOf": [{"$ref": "#/definitions/Address"}, {"type": "null"}]
    }


def test_allow_null_extends_existing_one_of_once() -> None:
    node = SchemaNode(one_of=[SchemaNode(type="string"), SchemaNode(type="integer")])

    allow_null(node)
    allow_null(node)

    assert [branch.type for branch in node.one_of or []] == ["string", "integer", "null"]


def test_allow_null_keeps_alternatives_of_typed_node() -> None:
    node = SchemaNode(
        type="string",
        one_of=[SchemaNode(pattern="^[A-Z]+$"), SchemaNode(pattern="^[0-9]+$")],
    )

    allow_null(node)

    assert node.to_dict() == {
        "oneOf": [
            {
                "type": "string",
                "oneOf": [{"pattern": "^[A-Z]+$"}, {"pattern": "^[0-9]+$"}],
            },
            {"type": "null"},
        ]
    }


def test_oneof_required_adds_group_to_parent() -> None:
    parent = SchemaNode(type="object", properties={})

    apply_constraints(
        SchemaNode(type="string"),
        parse_directives("oneof_required=by_mail"),
        parent=parent,
        property_name="email",
    )
    apply_constraints(
        SchemaNode(type="string"),
        parse_directives("oneof_required=by_phone"),
        parent=parent,
        property_name="phone",
    )
    apply_constraints(
        SchemaNode(type="string"),
        parse_directives("oneof_required=by_mail"),
        parent=parent,
        property_name="address",
    )

    assert parent.to_dict()["oneOf"] == [
        {"required": ["email", "address"], "title": "by_mail"},
        {"required": ["phone"], "title": "by_phone"},
    ]


def test_anyof_required_without_parent_is_dropped() -> None:
    rendered = _apply(SchemaNode(type="string"), "anyof_required=group")

    assert rendered == {"type": "string"}


def test_oneof_type_replaces_direct_type() -> None:
    rendered = _apply(SchemaNode(type="string"), "oneof_type=string;integer")

    assert rendered == {"oneOf": [{"type": "string"}, {"type": "integer"}]}


def test_anyof_type_replaces_direct_type() -> None:
    rendered = _apply(SchemaNode(type="number"), "anyof_type=number;null")

    assert rendered == {"anyOf": [{"type": "number"}, {"type": "null"}]}
