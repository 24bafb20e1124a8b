"""Relational table definition entities."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from .dialects import Dialect


@dataclass(frozen=True)
class ColumnDefinition:
    """One column of a generated table."""

    name: str
    sql_type: str


@dataclass(frozen=True)
class EmbeddedTable:
    """Subordinate table emitted inline after its parent's preceding column."""

    caption: str
    table: TableDefinition


@dataclass(frozen=True)
class ForeignKeyConstraint:
    """Foreign key from a parent column to a nested table's id."""

    column: str
    referenced_table: str

    def render(self) -> str:
        """Return the constraint clause."""
        return f"FOREIGN KEY ({self.column}) REFERENCES {self.referenced_table}(id)"


@dataclass(frozen=True)
class RelationComment:
    """Commentary flagging a one-to-many relation held in a separate table."""

    related_property: str

    def render(self) -> str:
        """Return the SQL comment line."""
        return (
            f"-- One-to-Many relationship: Create a separate table for "
            f"{self.related_property} with a foreign key to this table"
        )


TableMember = ColumnDefinition | EmbeddedTable
TableConstraint = ForeignKeyConstraint | RelationComment


@dataclass(frozen=True)
class TableDefinition:
    """A generated table with its members in declaration order."""

    name: str
    dialect: Dialect
    members: tuple[TableMember, ...]
    constraints: tuple[TableConstraint, ...]

    @property
    def columns(self) -> tuple[ColumnDefinition, ...]:
        """Return this table's own columns."""
        return tuple(member for member in self.members if isinstance(member, ColumnDefinition))

    @property
    def embedded_tables(self) -> tuple[TableDefinition, ...]:
        """Return the directly embedded subordinate tables."""
        return tuple(member.table for member in self.members if isinstance(member, EmbeddedTable))

    def iter_tables(self) -> Iterator[TableDefinition]:
        """Yield this table followed by every subordinate table, depth first."""
        yield self
        for table in self.embedded_tables:
            yield from table.iter_tables()
