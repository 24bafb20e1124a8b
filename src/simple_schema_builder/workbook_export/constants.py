"""Shared workbook export constants."""

from __future__ import annotations

FIELDS_SHEET_NAME = "Fields"
JSON_SCHEMA_SHEET_NAME = "JSON Schema"
TABLES_SHEET_NAME = "Tables"

FIELD_COLUMNS: tuple[str, ...] = (
    "Path",
    "Type",
    "Required",
    "Description",
    "Format",
    "Constraints",
)
TABLE_COLUMNS: tuple[str, ...] = ("Dialect", "Table", "Columns", "Constraints")
