"""Workbook export exports."""

from .constants import FIELDS_SHEET_NAME, JSON_SCHEMA_SHEET_NAME, TABLES_SHEET_NAME
from .schema_workbook_builder import write_schema_workbook

__all__ = [
    "FIELDS_SHEET_NAME",
    "JSON_SCHEMA_SHEET_NAME",
    "TABLES_SHEET_NAME",
    "write_schema_workbook",
]
