"""Command line interface entry point."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from schema_reflector.configuration import (
    DEFAULT_CONFIG_FILENAME,
    ConfigurationError,
    ReflectorOptions,
    load_reflector_options,
    resolve_type_reference,
    write_placeholder_configuration,
)
from schema_reflector.reflection import reflect
from schema_reflector.reflection_errors import SchemaReflectionError


class CliError(Exception):
    """Custom CLI error."""


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="schema-reflector")
def cli() -> None:
    """Generate JSON Schema documents from Python types."""


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML reflector options template to write",
)
def generate_config(output_path: str) -> None:
    """Generate a placeholder YAML options file with guidance comments."""
    try:
        resolved_output = write_placeholder_configuration(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="reflect")
@click.option(
    "--type",
    "type_reference",
    required=True,
    help="Type to reflect, as package.module:TypeName",
)
@click.option(
    "--config",
    "config_path",
    required=False,
    type=click.Path(path_type=str),
    help="Path to YAML/JSON reflector options file",
)
@click.option(
    "--output",
    "output_path",
    required=False,
    type=click.Path(path_type=str),
    help="Write the schema to this file instead of standard output",
)
@click.option(
    "--verbose",
    is_flag=True,
    default=False,
    help="Log reflection progress to standard error.",
)
def reflect_type(
    type_reference: str, config_path: str | None, output_path: str | None, verbose: bool
) -> None:
    """Reflect a type into a JSON Schema document."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    try:
        options = (
            load_reflector_options(config_path) if config_path is not None else ReflectorOptions()
        )
        target = resolve_type_reference(type_reference, "--type")
        document = reflect(target, options).to_json()
    except (ConfigurationError, SchemaReflectionError) as exc:
        raise CliError(str(exc)) from exc

    if output_path is None:
        click.echo(document)
        return
    destination = Path(output_path)
    try:
        destination.write_text(document + "\n", encoding="utf-8")
    except OSError as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(destination.resolve()))


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=list(argv), standalone_mode=False)
    except CliError as exc:
        click.echo(str(exc), err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
