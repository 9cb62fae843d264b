"""Options file scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_FILENAME = "schema-reflector.yaml"

_CONFIG_SCAFFOLD_TEMPLATE = """# Reflector options for schema-reflector.
# Every key is optional; remove the ones you do not need.

reflector:
  # additionalProperties: true on every record instead of false.
  allow_additional_properties: false
  # Require only fields annotated with a bare `required` directive.
  required_from_annotations_only: false
  # Inline the root record instead of referencing it from definitions.
  expand_top_level: false
  # Inline every record occurrence; self-referential types then fail.
  do_not_reference: false
  # Use `module.Name` as definition keys when bare names collide.
  fully_qualify_names: false
  schema_version: "http://json-schema.org/draft-04/schema#"
  max_depth: 64
  # Fields of these types are left out of the schema.
  ignored_types: []
  #   - "package.module:TypeName"

# Replacement annotations for fields of records you cannot edit.
overrides: []
#  - type: "package.module:TypeName"
#    field: "field_name"
#    annotation: "required,enum=a|b"
"""


def build_placeholder_configuration() -> str:
    """Build a commented options file with every setting at its default."""
    return _CONFIG_SCAFFOLD_TEMPLATE


def write_placeholder_configuration(output_path: Path | str) -> Path:
    """Write the placeholder options file to the requested output path.

    Args:
      output_path: Destination file path for the scaffold.

    Returns:
      The resolved destination path.

    Raises:
      FileExistsError: If the destination file already exists.
      OSError: If writing the scaffold fails.
    """
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(f"Options file already exists: {destination.resolve()}")
    destination.write_text(build_placeholder_configuration(), encoding="utf-8")
    return destination.resolve()
