"""CLI orchestration integration tests."""

from __future__ import annotations

import json
from pathlib import Path

from click.testing import CliRunner
from openpyxl import load_workbook
from simple_schema_builder.cli import cli, main
from simple_schema_builder.field_modeling import read_field_tree
from simple_schema_builder.workbook_export import FIELDS_SHEET_NAME


def _samples_dir() -> Path:
    return Path(__file__).resolve().parents[3] / "samples"


def _sample_schema() -> dict:
    return json.loads((_samples_dir() / "sample-json-schema.json").read_text(encoding="utf-8"))


def _write_config(tmp_path: Path, contents: str) -> Path:
    path = tmp_path / "schema-builder.yaml"
    path.write_text(contents, encoding="utf-8")
    return path


def test_generate_config_command_writes_scaffold(tmp_path: Path) -> None:
    runner = CliRunner()
    output_path = tmp_path / "schema-builder.yaml"

    first = runner.invoke(cli, ["generate-config", "--output", str(output_path)])
    second = runner.invoke(cli, ["generate-config", "--output", str(output_path)])

    assert first.exit_code == 0
    assert str(output_path.resolve()) in first.output
    assert "limits:" in output_path.read_text(encoding="utf-8")
    assert second.exit_code != 0


def test_generate_schema_command_prints_schema() -> None:
    runner = CliRunner()

    result = runner.invoke(
        cli, ["generate-schema", "--fields", str(_samples_dir() / "sample-field-tree.yaml")]
    )

    assert result.exit_code == 0
    assert json.loads(result.output) == _sample_schema()


def test_generate_schema_command_applies_title_indent_and_output(tmp_path: Path) -> None:
    runner = CliRunner()
    config_path = _write_config(tmp_path, "schema:\n  indent: 4\n")
    output_path = tmp_path / "out" / "schema.json"

    result = runner.invoke(
        cli,
        [
            "generate-schema",
            "--fields",
            str(_samples_dir() / "sample-field-tree.yaml"),
            "--title",
            "client",
            "--config",
            str(config_path),
            "--output",
            str(output_path),
        ],
    )

    assert result.exit_code == 0
    assert str(output_path.resolve()) in result.output
    text = output_path.read_text(encoding="utf-8")
    assert text.startswith('{\n    "title": "client",\n')
    assert text.endswith("}\n")
    assert json.loads(text)["properties"] == _sample_schema()["properties"]


def test_import_schema_then_generate_schema_reproduces_document(tmp_path: Path) -> None:
    runner = CliRunner()
    fields_path = tmp_path / "customer.yaml"

    imported = runner.invoke(
        cli,
        [
            "import-schema",
            "--input",
            str(_samples_dir() / "sample-json-schema.json"),
            "--output",
            str(fields_path),
        ],
    )
    regenerated = runner.invoke(cli, ["generate-schema", "--fields", str(fields_path)])

    assert imported.exit_code == 0
    assert read_field_tree(fields_path).title == "customer"
    assert regenerated.exit_code == 0
    assert json.loads(regenerated.output) == _sample_schema()


def test_generate_ddl_from_fields_uses_default_dialect() -> None:
    runner = CliRunner()

    result = runner.invoke(
        cli, ["generate-ddl", "--fields", str(_samples_dir() / "sample-field-tree.yaml")]
    )

    assert result.exit_code == 0
    assert result.output.startswith("CREATE TABLE customer (\nid INTEGER,\nname TEXT,\n")
    assert "created_at TIMESTAMP,\n" in result.output
    assert "\n-- Nested table for address\nCREATE TABLE address (\n" in result.output
    assert "CREATE TABLE orders_items (\n" in result.output
    assert result.output.endswith(");\n")


def test_generate_ddl_from_schema_for_several_dialects() -> None:
    runner = CliRunner()

    result = runner.invoke(
        cli,
        [
            "generate-ddl",
            "--schema",
            str(_samples_dir() / "sample-json-schema.json"),
            "--dialect",
            "MySQL",
            "--dialect",
            "sqlite",
            "--title",
            "client",
        ],
    )

    assert result.exit_code == 0
    mysql_part, sqlite_part = result.output.split("\n\n-- sqlite\n")
    assert mysql_part.startswith("-- mysql\nCREATE TABLE client (\nid INT,\nname VARCHAR(255),")
    assert sqlite_part.startswith("CREATE TABLE client (\nid NUMERIC,\nname TEXT,")


def test_generate_ddl_uses_configured_dialects(tmp_path: Path) -> None:
    runner = CliRunner()
    config_path = _write_config(tmp_path, "ddl:\n  dialects: [sqlite]\n")

    result = runner.invoke(
        cli,
        [
            "generate-ddl",
            "--fields",
            str(_samples_dir() / "sample-field-tree.yaml"),
            "--config",
            str(config_path),
        ],
    )

    assert result.exit_code == 0
    assert "active INTEGER,\n" in result.output
    assert "-- sqlite" not in result.output


def test_generate_ddl_reports_unknown_types_as_warnings(capsys, tmp_path: Path) -> None:
    schema_path = tmp_path / "blob.json"
    schema_path.write_text(
        json.dumps({"title": "blob", "type": "object", "properties": {"data": {"type": "binary"}}}),
        encoding="utf-8",
    )

    exit_code = main(["generate-ddl", "--schema", str(schema_path)])
    captured = capsys.readouterr()

    assert exit_code == 0
    assert captured.out == "CREATE TABLE blob (\ndata TEXT,\n\n);\n"
    assert "warning:" in captured.err
    assert "binary" in captured.err


def test_configured_depth_limit_rejects_deep_trees(capsys, tmp_path: Path) -> None:
    config_path = _write_config(tmp_path, "limits:\n  max_depth: 1\n")

    exit_code = main(
        [
            "generate-schema",
            "--fields",
            str(_samples_dir() / "sample-field-tree.yaml"),
            "--config",
            str(config_path),
        ]
    )
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "exceeds the maximum depth of 1" in captured.err


def test_export_workbook_command_writes_workbook(tmp_path: Path) -> None:
    runner = CliRunner()
    config_path = _write_config(tmp_path, "ddl:\n  dialects: [postgresql, mysql]\n")
    output_path = tmp_path / "customer.xlsx"

    result = runner.invoke(
        cli,
        [
            "export-workbook",
            "--fields",
            str(_samples_dir() / "sample-field-tree.yaml"),
            "--output",
            str(output_path),
            "--config",
            str(config_path),
        ],
    )

    assert result.exit_code == 0
    workbook = load_workbook(output_path)
    assert FIELDS_SHEET_NAME in workbook.sheetnames
    assert "postgresql" in workbook.sheetnames
    assert "mysql" in workbook.sheetnames
