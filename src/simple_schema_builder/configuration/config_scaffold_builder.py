"""Configuration scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_FILENAME = "schema-builder.yaml"

_CONFIG_SCAFFOLD_TEMPLATE = """# Settings for simple-schema-builder.
# Every section is optional; delete a key to fall back to its default.

schema:
  # Title written to the JSON schema and used as the root table name.
  # title: "person"
  # Indentation of exported JSON schema text (default 2).
  indent: 2

ddl:
  # Dialects generated when generate-ddl is called without --dialect.
  # Supported: postgresql, mysql, sqlite.
  dialects:
    - postgresql

limits:
  # Maximum nesting depth of objects and arrays (default 32).
  max_depth: 32
"""


def build_placeholder_configuration() -> str:
    """Build a YAML settings template with inline guidance."""
    return _CONFIG_SCAFFOLD_TEMPLATE


def write_placeholder_configuration(output_path: Path | str) -> Path:
    """Write the settings template to the requested output path.

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
        raise FileExistsError(f"Configuration file already exists: {destination.resolve()}")
    destination.write_text(build_placeholder_configuration(), encoding="utf-8")
    return destination.resolve()
