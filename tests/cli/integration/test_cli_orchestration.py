"""CLI orchestration integration tests."""

from __future__ import annotations

import json
from pathlib import Path

from click.testing import CliRunner
from schema_reflector.cli import cli, main

DIRECTIVE_REFERENCE = "schema_reflector.annotations.tag_grammar:Directive"


def _write_config(tmp_path: Path) -> Path:
    config = {
        "reflector": {"expand_top_level": True},
        "overrides": [
            {"type": DIRECTIVE_REFERENCE, "field": "value", "annotation": "-"},
        ],
    }
    path = tmp_path / "options.json"
    path.write_text(json.dumps(config), encoding="utf-8")
    return path


def test_reflect_command_prints_schema() -> None:
    runner = CliRunner()

    result = runner.invoke(cli, ["reflect", "--type", "ipaddress:IPv4Address"])

    assert result.exit_code == 0
    assert json.loads(result.output) == {
        "$schema": "http://json-schema.org/draft-04/schema#",
        "type": "string",
        "format": "ipv4",
    }


def test_reflect_command_applies_options_file(tmp_path: Path) -> None:
    runner = CliRunner()
    config_path = _write_config(tmp_path)

    result = runner.invoke(
        cli, ["reflect", "--type", DIRECTIVE_REFERENCE, "--config", str(config_path)]
    )

    assert result.exit_code == 0
    assert json.loads(result.output) == {
        "$schema": "http://json-schema.org/draft-04/schema#",
        "required": ["name"],
        "properties": {"name": {"type": "string"}},
        "additionalProperties": False,
        "type": "object",
    }


def test_reflect_command_writes_output_file(tmp_path: Path) -> None:
    runner = CliRunner()
    output_path = tmp_path / "directive.schema.json"

    result = runner.invoke(
        cli, ["reflect", "--type", DIRECTIVE_REFERENCE, "--output", str(output_path)]
    )

    assert result.exit_code == 0
    assert result.output.strip() == str(output_path.resolve())
    written = json.loads(output_path.read_text(encoding="utf-8"))
    assert written["$ref"] == "#/definitions/Directive"
    assert written["definitions"]["Directive"]["required"] == ["name", "value"]


def test_reflect_command_verbose_logs_definitions(caplog) -> None:
    caplog.set_level("DEBUG", logger="schema_reflector")

    exit_code = main(["reflect", "--type", DIRECTIVE_REFERENCE, "--verbose"])

    assert exit_code == 0
    assert "Registering definition Directive" in caplog.text


def test_generate_config_command_writes_scaffold(tmp_path: Path) -> None:
    runner = CliRunner()
    output_path = tmp_path / "schema-reflector.yaml"

    result = runner.invoke(cli, ["generate-config", "--output", str(output_path)])

    assert result.exit_code == 0
    assert output_path.exists()
    assert "reflector:" in output_path.read_text(encoding="utf-8")
    assert result.output.strip() == str(output_path.resolve())
