"""Schema shapes for types that declare capabilities."""

from __future__ import annotations

import copy
from collections.abc import Callable, Sequence

from schema_reflector.annotations import (
    apply_constraints,
    parse_directives,
    parse_serialization_tag,
)
from schema_reflector.reflection_errors import SchemaReflectionError
from schema_reflector.schema_model import SchemaNode
from schema_reflector.type_model import TypeDescriptor
from schema_reflector.type_model.type_descriptors import Alternative

ReflectFn = Callable[[TypeDescriptor], SchemaNode]


def enum_schema() -> SchemaNode:
    """Enumerated values are accepted in textual and numeric encodings."""
    return SchemaNode(one_of=[SchemaNode(type="string"), SchemaNode(type="integer")])


def custom_schema(descriptor: TypeDescriptor) -> SchemaNode:
    hook = descriptor.capabilities.custom_schema
    assert hook is not None
    provided = hook()
    if not isinstance(provided, SchemaNode):
        raise SchemaReflectionError(
            f"Custom schema of {descriptor!r} must be a SchemaNode, "
            f"got {type(provided).__name__}"
        )
    return copy.deepcopy(provided)


def exclusive_alternatives(descriptor: TypeDescriptor, reflect: ReflectFn) -> SchemaNode:
    hook = descriptor.capabilities.one_of
    assert hook is not None
    return SchemaNode(one_of=alternative_nodes(hook(), reflect))


def merge_combined_alternatives(
    node: SchemaNode, descriptor: TypeDescriptor, reflect: ReflectFn
) -> None:
    """Add the declared ``oneOf`` alternatives to an existing structural node."""
    hook = descriptor.capabilities.and_one_of
    if hook is None:
        return
    node.one_of = [*(node.one_of or []), *alternative_nodes(hook(), reflect)]


def attach_condition(node: SchemaNode, descriptor: TypeDescriptor, reflect: ReflectFn) -> None:
    """Attach ``if``/``then``/``else`` built from the declared condition."""
    hook = descriptor.capabilities.if_then_else
    if hook is None:
        return
    condition = hook()
    condition_field = condition.if_field
    condition_node = SchemaNode()
    apply_constraints(condition_node, parse_directives(condition_field.annotation))
    name = parse_serialization_tag(condition_field.serialization).name or condition_field.name
    node.if_ = SchemaNode(properties={name: condition_node})
    if isinstance(condition.then, TypeDescriptor):
        node.then = reflect(condition.then)
    if isinstance(condition.else_, TypeDescriptor):
        node.else_ = reflect(condition.else_)


def alternative_nodes(
    alternatives: Sequence[Alternative], reflect: ReflectFn
) -> list[SchemaNode]:
    return [
        SchemaNode(type="null") if alternative is None else reflect(alternative)
        for alternative in alternatives
    ]
