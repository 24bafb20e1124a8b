"""DDL text rendering."""

from __future__ import annotations

from .table_models import ColumnDefinition, TableDefinition, TableMember

CONSTRAINT_SEPARATOR = ",\n"


def render_table(table: TableDefinition) -> str:
    """Flatten a table definition, subordinate tables included, into DDL text."""
    body = "".join(_render_member(member) for member in table.members)
    constraints = CONSTRAINT_SEPARATOR.join(constraint.render() for constraint in table.constraints)
    return f"CREATE TABLE {table.name} (\n{body}{constraints}\n);"


def _render_member(member: TableMember) -> str:
    if isinstance(member, ColumnDefinition):
        return f"{member.name} {member.sql_type},\n"
    return f"\n-- {member.caption}\n{render_table(member.table)}\n"
