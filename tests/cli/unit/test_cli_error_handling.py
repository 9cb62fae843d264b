"""CLI error-handling tests."""

from __future__ import annotations

from pathlib import Path

from schema_reflector.cli import main


def test_missing_required_option_returns_clean_click_error(capsys) -> None:
    exit_code = main(["reflect"])
    captured = capsys.readouterr()

    assert exit_code == 2
    assert "Missing option" in captured.err
    assert "--type" in captured.err
    assert "Traceback" not in captured.err


def test_unknown_option_returns_clean_click_error(capsys) -> None:
    exit_code = main(["reflect", "--bogus"])
    captured = capsys.readouterr()

    assert exit_code == 2
    assert "No such option: --bogus" in captured.err
    assert "Traceback" not in captured.err


def test_unresolvable_type_reference_returns_exit_code_one(capsys) -> None:
    exit_code = main(["reflect", "--type", "ipaddress:Nowhere"])
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "missing Nowhere" in captured.err
    assert "Traceback" not in captured.err


def test_unsupported_type_returns_exit_code_one(capsys) -> None:
    exit_code = main(["reflect", "--type", "schema_reflector.configuration:ReflectorOptions"])
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "Unsupported type" in captured.err


def test_invalid_config_returns_exit_code_one(tmp_path: Path, capsys) -> None:
    config_path = tmp_path / "options.yaml"
    config_path.write_text("reflector:\n  max_depth: -1\n", encoding="utf-8")

    exit_code = main(["reflect", "--type", "ipaddress:IPv4Address", "--config", str(config_path)])
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "max_depth must be greater than zero" in captured.err


def test_generate_config_refuses_to_overwrite(tmp_path: Path, capsys) -> None:
    output_path = tmp_path / "schema-reflector.yaml"
    output_path.write_text("existing", encoding="utf-8")

    exit_code = main(["generate-config", "--output", str(output_path)])
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "already exists" in captured.err
    assert output_path.read_text(encoding="utf-8") == "existing"
