"""Apply parsed annotation directives to schema nodes.

Malformed directive values never abort reflection: numbers that do not parse
become zero, booleans become false and unknown ``format`` values are dropped.
Each such case is logged at debug level.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import Any

from schema_reflector.schema_model import SchemaNode

from .tag_grammar import Directive, split_enum_values, split_type_list

_LOGGER = logging.getLogger("schema_reflector.annotations")

ALLOWED_FORMATS = frozenset({"date-time", "email", "hostname", "ipv4", "ipv6", "uri"})
NOT_EMPTY_PATTERN = "^\\S"

_TRUE_VALUES = frozenset({"1", "t", "true"})
_FALSE_VALUES = frozenset({"0", "f", "false"})


def apply_constraints(
    node: SchemaNode,
    directives: Sequence[Directive],
    *,
    parent: SchemaNode | None = None,
    property_name: str | None = None,
) -> None:
    """Mutate ``node`` according to ``directives``.

    Keywords are chosen by the node's primitive kind as it was before any
    directive ran. ``parent`` and ``property_name`` are needed for the group
    keywords (``oneof_required``/``anyof_required``), which edit the enclosing
    record rather than the property itself.
    """
    kind = node.type
    kind_handler = _KIND_HANDLERS.get(kind)
    for directive in directives:
        if _apply_generic(node, directive, kind, parent, property_name):
            continue
        if kind_handler is not None and kind_handler(node, directive):
            continue
        if directive.is_bare and directive.name == "allowNull":
            allow_null(node)


def allow_null(node: SchemaNode) -> None:
    """Rewrite ``node`` so that ``null`` is accepted as well."""
    null_branch = SchemaNode(type="null")
    if node.type is not None:
        # Existing alternatives still constrain the typed branch.
        node.one_of = [SchemaNode(type=node.type, one_of=node.one_of), null_branch]
        node.type = None
    elif node.ref is not None:
        node.one_of = [SchemaNode(ref=node.ref, one_of=node.one_of), null_branch]
        node.ref = None
    elif node.one_of:
        if not any(branch.type == "null" for branch in node.one_of):
            node.one_of.append(null_branch)
    else:
        node.one_of = [SchemaNode(), null_branch]


def _apply_generic(
    node: SchemaNode,
    directive: Directive,
    kind: str | None,
    parent: SchemaNode | None,
    property_name: str | None,
) -> bool:
    name, value = directive.name, directive.value
    if value is None:
        return name == "required"
    if name == "title":
        node.title = value
    elif name == "description":
        node.description = value
    elif name == "default":
        node.default = _typed_value(kind, value)
    elif name == "example":
        node.examples = [*(node.examples or []), _typed_value(kind, value)]
    elif name in ("oneof_required", "anyof_required"):
        if parent is None or property_name is None:
            _LOGGER.debug("Dropping %s outside of a record property", name)
        else:
            _add_group_requirement(parent, _composition_attribute(name), value, property_name)
    elif name in ("oneof_type", "anyof_type"):
        attribute = _composition_attribute(name)
        branches = [SchemaNode(type=type_name) for type_name in split_type_list(value)]
        setattr(node, attribute, [*(getattr(node, attribute) or []), *branches])
        node.type = None
    else:
        return False
    return True


def _string_keywords(node: SchemaNode, directive: Directive) -> bool:
    name, value = directive.name, directive.value
    if value is None:
        if name == "notEmpty":
            node.pattern = NOT_EMPTY_PATTERN
            return True
        return False
    if name == "minLength":
        node.min_length = _parse_int(name, value)
    elif name == "maxLength":
        node.max_length = _parse_int(name, value)
    elif name == "pattern":
        node.pattern = value
    elif name == "enum":
        node.enum = list(split_enum_values(value))
    elif name == "format":
        if value in ALLOWED_FORMATS:
            node.format = value
        else:
            _LOGGER.debug("Dropping unsupported format %r", value)
    else:
        return False
    return True


def _integer_keywords(node: SchemaNode, directive: Directive) -> bool:
    return _numeric_keywords(node, directive, _parse_int)


def _number_keywords(node: SchemaNode, directive: Directive) -> bool:
    return _numeric_keywords(node, directive, _parse_float)


def _numeric_keywords(
    node: SchemaNode, directive: Directive, parse: Callable[[str, str], Any]
) -> bool:
    name, value = directive.name, directive.value
    if value is None:
        return False
    if name == "multipleOf":
        node.multiple_of = parse(name, value)
    elif name == "minimum":
        node.minimum = parse(name, value)
    elif name == "maximum":
        node.maximum = parse(name, value)
    elif name == "exclusiveMinimum":
        node.exclusive_minimum = _parse_bool(name, value)
    elif name == "exclusiveMaximum":
        node.exclusive_maximum = _parse_bool(name, value)
    elif name == "enum":
        node.enum = [parse(name, item) for item in split_enum_values(value)]
    else:
        return False
    return True


def _array_keywords(node: SchemaNode, directive: Directive) -> bool:
    name, value = directive.name, directive.value
    if name == "uniqueItems":
        node.unique_items = True if value is None else _parse_bool(name, value)
    elif value is None:
        return False
    elif name == "minItems":
        node.min_items = _parse_int(name, value)
    elif name == "maxItems":
        node.max_items = _parse_int(name, value)
    else:
        return False
    return True


_KIND_HANDLERS: dict[str | None, Callable[[SchemaNode, Directive], bool]] = {
    None: _string_keywords,
    "string": _string_keywords,
    "integer": _integer_keywords,
    "number": _number_keywords,
    "array": _array_keywords,
}


def _add_group_requirement(
    parent: SchemaNode, attribute: str, group: str, property_name: str
) -> None:
    entries: list[SchemaNode] = getattr(parent, attribute) or []
    for entry in entries:
        if entry.title == group:
            entry.required.append(property_name)
            break
    else:
        entries.append(SchemaNode(title=group, required=[property_name]))
    setattr(parent, attribute, entries)


def _composition_attribute(directive_name: str) -> str:
    return "one_of" if directive_name.startswith("oneof") else "any_of"


def _typed_value(kind: str | None, value: str) -> Any:
    if kind == "integer":
        return _parse_int("value", value)
    if kind == "number":
        return _parse_float("value", value)
    if kind == "boolean":
        return _parse_bool("value", value)
    return value


def _parse_int(name: str, value: str) -> int:
    try:
        return int(value.strip())
    except ValueError:
        _LOGGER.debug("Invalid integer %r for %s, using 0", value, name)
        return 0


def _parse_float(name: str, value: str) -> float:
    try:
        return float(value.strip())
    except ValueError:
        _LOGGER.debug("Invalid number %r for %s, using 0", value, name)
        return 0.0


def _parse_bool(name: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered not in _FALSE_VALUES:
        _LOGGER.debug("Invalid boolean %r for %s, using false", value, name)
    return False
