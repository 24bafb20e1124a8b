"""Configuration scaffold builder tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from simple_schema_builder.configuration.config_scaffold_builder import (
    build_placeholder_configuration,
    write_placeholder_configuration,
)
from simple_schema_builder.configuration.loader import load_configuration
from simple_schema_builder.configuration.runtime_settings import Settings


def test_build_placeholder_configuration_contains_all_supported_sections() -> None:
    scaffold = build_placeholder_configuration()

    assert "Settings for simple-schema-builder" in scaffold
    assert "schema:" in scaffold
    assert "ddl:" in scaffold
    assert "limits:" in scaffold
    assert "postgresql, mysql, sqlite" in scaffold


def test_write_placeholder_configuration_writes_loadable_file(tmp_path: Path) -> None:
    output_path = tmp_path / "schema-builder.yaml"

    written_path = write_placeholder_configuration(output_path)

    assert written_path == output_path.resolve()
    assert load_configuration(output_path) == Settings(path=output_path)


def test_write_placeholder_configuration_fails_when_file_exists(tmp_path: Path) -> None:
    output_path = tmp_path / "schema-builder.yaml"
    output_path.write_text("existing", encoding="utf-8")

    with pytest.raises(FileExistsError):
        write_placeholder_configuration(output_path)
