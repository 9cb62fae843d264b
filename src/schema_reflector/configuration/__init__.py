"""Configuration domain exports."""

from .config_scaffold_builder import (
    DEFAULT_CONFIG_FILENAME,
    build_placeholder_configuration,
    write_placeholder_configuration,
)
from .loader import (
    ConfigurationError,
    build_reflector_options,
    load_reflector_options,
    resolve_type_reference,
)
from .reflector_options import DEFAULT_MAX_DEPTH, ReflectorOptions, TypeOverride

__all__ = [
    "DEFAULT_CONFIG_FILENAME",
    "DEFAULT_MAX_DEPTH",
    "ConfigurationError",
    "ReflectorOptions",
    "TypeOverride",
    "build_placeholder_configuration",
    "build_reflector_options",
    "load_reflector_options",
    "resolve_type_reference",
    "write_placeholder_configuration",
]
