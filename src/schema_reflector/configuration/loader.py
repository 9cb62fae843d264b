"""Reflector options file loader."""

from __future__ import annotations

import importlib
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import yaml

from schema_reflector.overrides import OverrideStore
from schema_reflector.schema_model import DRAFT_04_VERSION

from .reflector_options import DEFAULT_MAX_DEPTH, ReflectorOptions

_BOOLEAN_OPTIONS = (
    "allow_additional_properties",
    "required_from_annotations_only",
    "expand_top_level",
    "do_not_reference",
    "fully_qualify_names",
)


class ConfigurationError(Exception):
    """Raised when the options file is invalid."""


def load_reflector_options(config_path: Path | str) -> ReflectorOptions:
    """Load and validate a YAML or JSON options file."""
    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc

    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")

    return build_reflector_options(parsed)


def build_reflector_options(parsed: Mapping[str, Any]) -> ReflectorOptions:
    """Convert an already parsed options mapping into :class:`ReflectorOptions`."""
    reflector = parsed.get("reflector")
    section = {} if reflector is None else _require_mapping(reflector, "reflector")

    flags = {
        name: _require_bool(section.get(name, False), f"reflector.{name}")
        for name in _BOOLEAN_OPTIONS
    }
    schema_version = _require_non_empty_string(
        section.get("schema_version", DRAFT_04_VERSION), "reflector.schema_version"
    )
    max_depth = _require_positive_int(
        section.get("max_depth", DEFAULT_MAX_DEPTH), "reflector.max_depth"
    )
    ignored_types = frozenset(
        resolve_type_reference(reference, "reflector.ignored_types")
        for reference in _normalize_string_sequence(
            section.get("ignored_types"), "reflector.ignored_types"
        )
    )
    overrides = _parse_overrides_section(parsed.get("overrides"))

    return ReflectorOptions(
        **flags,
        ignored_types=ignored_types,
        overrides=overrides,
        schema_version=schema_version,
        max_depth=max_depth,
    )


def resolve_type_reference(reference: str, field_name: str = "type") -> Any:
    """Import the object named by ``package.module:Qualified.Name``."""
    module_name, separator, qualified_name = reference.partition(":")
    if not separator or not module_name.strip() or not qualified_name.strip():
        raise ConfigurationError(
            f"{field_name} '{reference}' must use the form 'package.module:TypeName'."
        )
    try:
        target: Any = importlib.import_module(module_name.strip())
    except ImportError as exc:
        raise ConfigurationError(f"{field_name} module cannot be imported: {exc}") from exc
    for attribute in qualified_name.strip().split("."):
        try:
            target = getattr(target, attribute)
        except AttributeError as exc:
            raise ConfigurationError(
                f"{field_name} '{reference}' does not resolve: missing {attribute}"
            ) from exc
    return target


def _parse_overrides_section(value: Any) -> OverrideStore | None:
    if value is None:
        return None
    if not isinstance(value, Sequence) or isinstance(value, str):
        raise ConfigurationError("overrides must be a list of mappings.")
    store = OverrideStore()
    for index, entry in enumerate(value):
        label = f"overrides[{index}]"
        section = _require_mapping(entry, label)
        target = resolve_type_reference(
            _require_non_empty_string(section.get("type"), f"{label}.type"), f"{label}.type"
        )
        field_name = _require_non_empty_string(section.get("field"), f"{label}.field")
        annotation = section.get("annotation", "")
        if not isinstance(annotation, str):
            raise ConfigurationError(f"{label}.annotation must be a string.")
        rejection = store.set(target, field_name, annotation)
        if rejection is not None:
            raise ConfigurationError(f"{label}: {rejection}")
    return store


def _normalize_string_sequence(value: Any, field_name: str) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        stripped = value.strip()
        return (stripped,) if stripped else ()
    if isinstance(value, Sequence):
        normalized = []
        for item in value:
            if not isinstance(item, str):
                raise ConfigurationError(f"{field_name} entries must be strings.")
            stripped = item.strip()
            if stripped:
                normalized.append(stripped)
        return tuple(normalized)
    raise ConfigurationError(f"{field_name} must be a string or list of strings.")


def _require_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' must be a mapping.")
    return value


def _require_bool(value: Any, field_name: str) -> bool:
    if not isinstance(value, bool):
        raise ConfigurationError(f"{field_name} must be a boolean.")
    return value


def _require_non_empty_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    if not stripped:
        raise ConfigurationError(f"{field_name} must not be empty.")
    return stripped


def _require_positive_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if not isinstance(value, int):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if value <= 0:
        raise ConfigurationError(f"{field_name} must be greater than zero.")
    return value
