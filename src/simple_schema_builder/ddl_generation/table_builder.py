"""Schema document to relational table decomposition service."""

from __future__ import annotations

import logging
from collections.abc import Mapping

from simple_schema_builder.schema_management.schema_errors import check_depth, join_path
from simple_schema_builder.schema_management.schema_models import (
    DEFAULT_MAX_DEPTH,
    PropertySchema,
    SchemaDocument,
)
from simple_schema_builder.schema_management.schema_projection import ITEMS_FIELD_NAME

from .ddl_formatter import render_table
from .dialects import Dialect, column_type, foreign_key_type
from .table_models import (
    ColumnDefinition,
    EmbeddedTable,
    ForeignKeyConstraint,
    RelationComment,
    TableConstraint,
    TableDefinition,
    TableMember,
)

_LOGGER = logging.getLogger(__name__)

DEFAULT_TABLE_NAME = "table_name"
PARENT_ID_COLUMN = "parent_id"
ITEMS_TABLE_SUFFIX = "_items"
FOREIGN_KEY_SUFFIX = "_id"


class DDLGenerator:
    """Builds CREATE TABLE definitions for one SQL dialect."""

    def __init__(self, dialect: Dialect, *, max_depth: int = DEFAULT_MAX_DEPTH) -> None:
        self._dialect = Dialect(dialect)
        self._max_depth = max_depth

    @property
    def dialect(self) -> Dialect:
        """Return the dialect this generator targets."""
        return self._dialect

    def build(self, document: SchemaDocument) -> TableDefinition:
        """Decompose ``document`` into a root table with embedded subordinate tables.

        Nested objects become their own table referenced by a ``<name>_id``
        foreign key column. Arrays of objects become a ``<name>_items`` table
        carrying a ``parent_id`` column. Everything else is a plain column.

        Raises:
          DepthExceededError: If nesting goes beyond the configured maximum depth.
        """
        table = self._build_table(
            document.title or DEFAULT_TABLE_NAME,
            document.properties,
            prefix="",
            depth=1,
        )
        _LOGGER.debug(
            "Built %d %s table(s) for %s",
            sum(1 for _ in table.iter_tables()),
            self._dialect.value,
            table.name,
        )
        return table

    def generate(self, document: SchemaDocument) -> str:
        """Return the DDL text for ``document``."""
        return render_table(self.build(document))

    def _build_table(
        self,
        name: str,
        properties: Mapping[str, PropertySchema],
        *,
        prefix: str,
        depth: int,
    ) -> TableDefinition:
        members: list[TableMember] = []
        constraints: list[TableConstraint] = []
        for property_name, prop in properties.items():
            path = join_path(prefix, property_name)
            check_depth(depth, self._max_depth, path)
            if prop.type == "object" and prop.properties is not None:
                foreign_key = f"{property_name}{FOREIGN_KEY_SUFFIX}"
                members.append(ColumnDefinition(foreign_key, foreign_key_type(self._dialect)))
                constraints.append(ForeignKeyConstraint(foreign_key, property_name))
                nested = self._build_table(
                    property_name, prop.properties, prefix=path, depth=depth + 1
                )
                members.append(EmbeddedTable(f"Nested table for {property_name}", nested))
            elif prop.type == "array" and prop.items is not None and prop.items.type == "object":
                constraints.append(RelationComment(property_name))
                item_properties = {
                    **(prop.items.properties or {}),
                    PARENT_ID_COLUMN: PropertySchema(type="integer"),
                }
                items_table = self._build_table(
                    f"{property_name}{ITEMS_TABLE_SUFFIX}",
                    item_properties,
                    prefix=join_path(path, ITEMS_FIELD_NAME),
                    depth=depth + 2,
                )
                members.append(EmbeddedTable(f"Items table for {property_name}", items_table))
            else:
                sql_type = column_type(self._dialect, prop.type, prop.format)
                members.append(ColumnDefinition(property_name, sql_type))
        return TableDefinition(
            name=name,
            dialect=self._dialect,
            members=tuple(members),
            constraints=tuple(constraints),
        )


def generate_ddl(
    document: SchemaDocument, dialect: Dialect | str, *, max_depth: int = DEFAULT_MAX_DEPTH
) -> str:
    """Return the DDL text for ``document`` in ``dialect``."""
    return DDLGenerator(Dialect(dialect), max_depth=max_depth).generate(document)
