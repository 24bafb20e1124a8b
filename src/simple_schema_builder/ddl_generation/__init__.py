"""DDL generation exports."""

from .ddl_formatter import render_table
from .dialects import Dialect, column_type, foreign_key_type, parse_dialect
from .table_builder import DEFAULT_TABLE_NAME, DDLGenerator, generate_ddl
from .table_models import (
    ColumnDefinition,
    EmbeddedTable,
    ForeignKeyConstraint,
    RelationComment,
    TableDefinition,
)

__all__ = [
    "DEFAULT_TABLE_NAME",
    "ColumnDefinition",
    "DDLGenerator",
    "Dialect",
    "EmbeddedTable",
    "ForeignKeyConstraint",
    "RelationComment",
    "TableDefinition",
    "column_type",
    "foreign_key_type",
    "generate_ddl",
    "parse_dialect",
    "render_table",
]
