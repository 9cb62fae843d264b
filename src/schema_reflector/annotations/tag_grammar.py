"""Annotation string grammar.

Schema annotations are directive lists separated by ``,``. Each directive is a
bare keyword (``required``) or a ``name=value`` pair split on the first ``=``
(``pattern=a=b`` keeps ``a=b`` as the value). List-valued directives split
their value again: ``enum`` on ``|`` and ``oneof_type``/``anyof_type`` on
``;``.

Serialization directives use the same separator: the first token is the
exported name (empty keeps the declared name, ``-`` drops the field) and the
remaining tokens are options such as ``omitempty``.
"""

from __future__ import annotations

from dataclasses import dataclass

DIRECTIVE_SEPARATOR = ","
VALUE_SEPARATOR = "="
ENUM_SEPARATOR = "|"
TYPE_LIST_SEPARATOR = ";"
IGNORE_MARKER = "-"
OMIT_EMPTY_OPTION = "omitempty"


@dataclass(frozen=True)
class Directive:
    """One parsed annotation directive."""

    name: str
    value: str | None = None

    @property
    def is_bare(self) -> bool:
        return self.value is None


@dataclass(frozen=True)
class SerializationTag:
    """Parsed serialization directive of one field."""

    name: str
    options: tuple[str, ...]

    @property
    def ignored(self) -> bool:
        return self.name == IGNORE_MARKER

    @property
    def omit_empty(self) -> bool:
        return OMIT_EMPTY_OPTION in self.options


def parse_directives(annotation: str) -> tuple[Directive, ...]:
    """Split an annotation string into ordered directives."""
    directives: list[Directive] = []
    for token in annotation.split(DIRECTIVE_SEPARATOR):
        token = token.strip()
        if not token:
            continue
        name, separator, value = token.partition(VALUE_SEPARATOR)
        directives.append(Directive(name=name, value=value if separator else None))
    return tuple(directives)


def parse_serialization_tag(tag: str) -> SerializationTag:
    name, *options = tag.split(DIRECTIVE_SEPARATOR)
    return SerializationTag(
        name=name.strip(),
        options=tuple(option.strip() for option in options if option.strip()),
    )


def is_ignored_annotation(annotation: str) -> bool:
    """Return True when the first annotation token is the ignore marker."""
    return annotation.split(DIRECTIVE_SEPARATOR, 1)[0].strip() == IGNORE_MARKER


def has_bare_keyword(directives: tuple[Directive, ...], keyword: str) -> bool:
    return any(directive.is_bare and directive.name == keyword for directive in directives)


def split_enum_values(value: str) -> list[str]:
    return value.split(ENUM_SEPARATOR)


def split_type_list(value: str) -> list[str]:
    return [item.strip() for item in value.split(TYPE_LIST_SEPARATOR) if item.strip()]
