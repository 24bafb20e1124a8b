"""Excel export of a field tree with its schema and DDL projections."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from pathlib import Path
from typing import Any

from openpyxl import Workbook
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from simple_schema_builder.ddl_generation import DDLGenerator, Dialect, render_table
from simple_schema_builder.field_modeling.field_models import FieldNode
from simple_schema_builder.schema_management import (
    DEFAULT_MAX_DEPTH,
    encode_schema_document,
    generate_schema,
)

from .constants import (
    FIELD_COLUMNS,
    FIELDS_SHEET_NAME,
    JSON_SCHEMA_SHEET_NAME,
    TABLE_COLUMNS,
    TABLES_SHEET_NAME,
)

_CONSTRAINT_LABELS: tuple[tuple[str, str], ...] = (
    ("minimum", "minimum"),
    ("maximum", "maximum"),
    ("min_length", "minLength"),
    ("max_length", "maxLength"),
    ("pattern", "pattern"),
    ("unique_items", "uniqueItems"),
)


def write_schema_workbook(
    fields: Sequence[FieldNode],
    output_path: Path | str,
    *,
    title: str | None = None,
    dialects: Sequence[Dialect] = (Dialect.POSTGRESQL,),
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> Path:
    """Write the field listing, JSON schema, table listing and per-dialect DDL sheets."""
    document = generate_schema(fields, title=title, max_depth=max_depth)
    tables = [
        (dialect, DDLGenerator(dialect, max_depth=max_depth).build(document))
        for dialect in dialects
    ]

    workbook = Workbook()
    sheet = workbook.active
    if sheet is None:
        raise RuntimeError("Workbook active sheet is not available.")
    assert isinstance(sheet, Worksheet)
    sheet.title = FIELDS_SHEET_NAME
    _write_header(sheet, FIELD_COLUMNS)
    for row_index, row in enumerate(_field_rows(fields, prefix=""), start=2):
        _write_row(sheet, row_index, row)

    json_sheet = workbook.create_sheet(JSON_SCHEMA_SHEET_NAME)
    _write_lines(json_sheet, encode_schema_document(document, indent=2))

    tables_sheet = workbook.create_sheet(TABLES_SHEET_NAME)
    _write_header(tables_sheet, TABLE_COLUMNS)
    row_index = 2
    for dialect, root_table in tables:
        for table in root_table.iter_tables():
            _write_row(
                tables_sheet,
                row_index,
                (
                    dialect.value,
                    table.name,
                    ", ".join(f"{column.name} {column.sql_type}" for column in table.columns),
                    "\n".join(constraint.render() for constraint in table.constraints),
                ),
            )
            row_index += 1

    for dialect, root_table in tables:
        _write_lines(workbook.create_sheet(dialect.value), render_table(root_table))

    destination = Path(output_path)
    destination.parent.mkdir(parents=True, exist_ok=True)
    workbook.save(destination)
    return destination.resolve()


def _field_rows(fields: Sequence[FieldNode], *, prefix: str) -> Iterator[tuple[Any, ...]]:
    for field in fields:
        path = field.name if not prefix else f"{prefix}.{field.name}"
        yield (
            path,
            field.type.value,
            "yes" if field.required else "no",
            field.description or "",
            field.format or "",
            _constraint_summary(field),
        )
        if field.children:
            yield from _field_rows(field.children, prefix=path)


def _constraint_summary(field: FieldNode) -> str:
    parts = [
        f"{label}={getattr(field, attribute)}"
        for attribute, label in _CONSTRAINT_LABELS
        if getattr(field, attribute) is not None
    ]
    if field.enum is not None:
        parts.append("enum=" + "|".join(str(value) for value in field.enum))
    return "; ".join(parts)


def _write_header(sheet: Worksheet, columns: Sequence[str]) -> None:
    for column_index, name in enumerate(columns, start=1):
        sheet.cell(row=1, column=column_index, value=name).style = "Headline 3"
        sheet.column_dimensions[get_column_letter(column_index)].width = max(
            12, min(len(name) + 6, 40)
        )
    sheet.freeze_panes = "A2"


def _write_row(sheet: Worksheet, row_index: int, values: Sequence[Any]) -> None:
    for column_index, value in enumerate(values, start=1):
        _write_text_cell(sheet, row_index, column_index, value)


def _write_lines(sheet: Worksheet, text: str) -> None:
    for row_index, line in enumerate(text.splitlines(), start=1):
        _write_text_cell(sheet, row_index, 1, line)
    sheet.column_dimensions["A"].width = 80


def _write_text_cell(sheet: Worksheet, row_index: int, column_index: int, value: str) -> None:
    # Stored as plain text; a leading "=" stays literal.
    cell = sheet.cell(row=row_index, column=column_index)
    cell.value = ILLEGAL_CHARACTERS_RE.sub("", value)
    cell.data_type = "s"
