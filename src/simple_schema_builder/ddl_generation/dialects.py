"""SQL dialects and logical-type to column-type mapping."""

from __future__ import annotations

import logging
import warnings
from enum import Enum

from simple_schema_builder.schema_management.schema_errors import UnknownTypeWarning

_LOGGER = logging.getLogger(__name__)

FALLBACK_COLUMN_TYPE = "TEXT"
DATE_TIME_FORMAT = "date-time"

KNOWN_LOGICAL_TYPES = frozenset({"string", "number", "integer", "boolean", "object", "array"})


class Dialect(str, Enum):
    """Supported SQL dialects."""

    POSTGRESQL = "postgresql"
    MYSQL = "mysql"
    SQLITE = "sqlite"


# Keyed by (dialect, logical type, format); a None format is the default for the type.
_COLUMN_TYPES: dict[tuple[Dialect, str, str | None], str] = {
    (Dialect.POSTGRESQL, "string", None): "TEXT",
    (Dialect.POSTGRESQL, "string", DATE_TIME_FORMAT): "TIMESTAMP",
    (Dialect.POSTGRESQL, "number", None): "NUMERIC",
    (Dialect.POSTGRESQL, "integer", None): "INTEGER",
    (Dialect.POSTGRESQL, "boolean", None): "BOOLEAN",
    (Dialect.MYSQL, "string", None): "VARCHAR(255)",
    (Dialect.MYSQL, "string", DATE_TIME_FORMAT): "DATETIME",
    (Dialect.MYSQL, "number", None): "DECIMAL",
    (Dialect.MYSQL, "integer", None): "INT",
    (Dialect.MYSQL, "boolean", None): "BOOLEAN",
    (Dialect.SQLITE, "string", None): "TEXT",
    (Dialect.SQLITE, "number", None): "NUMERIC",
    (Dialect.SQLITE, "integer", None): "NUMERIC",
    (Dialect.SQLITE, "boolean", None): "INTEGER",
}

_DIALECT_ALIASES = {"postgres": "postgresql", "pg": "postgresql", "sqlite3": "sqlite"}

_FOREIGN_KEY_TYPES: dict[Dialect, str] = {
    Dialect.POSTGRESQL: "INTEGER",
    Dialect.MYSQL: "INT",
    Dialect.SQLITE: "INTEGER",
}


def column_type(
    dialect: Dialect, logical_type: str | None, string_format: str | None = None
) -> str:
    """Return the column type keyword for a logical type; never raises."""
    type_key = logical_type or ""
    resolved = _COLUMN_TYPES.get((dialect, type_key, string_format)) if string_format else None
    if resolved is None:
        resolved = _COLUMN_TYPES.get((dialect, type_key, None))
    if resolved is not None:
        return resolved
    if logical_type not in KNOWN_LOGICAL_TYPES:
        _LOGGER.debug("Unknown logical type %r mapped to %s", logical_type, FALLBACK_COLUMN_TYPE)
        warnings.warn(
            f"Unknown logical type {logical_type!r}; using {FALLBACK_COLUMN_TYPE}.",
            UnknownTypeWarning,
            stacklevel=2,
        )
    return FALLBACK_COLUMN_TYPE


def foreign_key_type(dialect: Dialect) -> str:
    """Return the integer type used for foreign-key columns."""
    return _FOREIGN_KEY_TYPES[dialect]


def parse_dialect(value: str) -> Dialect:
    """Resolve dialect text, accepting common aliases."""
    normalized = value.strip().lower()
    alias = _DIALECT_ALIASES.get(normalized, normalized)
    try:
        return Dialect(alias)
    except ValueError as exc:
        supported = ", ".join(member.value for member in Dialect)
        raise ValueError(
            f"Unsupported SQL dialect {value!r} (expected one of: {supported})."
        ) from exc
