"""Configuration domain entities."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from simple_schema_builder.ddl_generation.dialects import Dialect
from simple_schema_builder.schema_management.schema_models import DEFAULT_MAX_DEPTH

DEFAULT_JSON_INDENT = 2


@dataclass(frozen=True)
class SchemaSettings:
    """JSON schema output settings."""

    title: str | None = None
    indent: int = DEFAULT_JSON_INDENT


@dataclass(frozen=True)
class DdlSettings:
    """Dialects generated when none are requested explicitly."""

    dialects: tuple[Dialect, ...] = (Dialect.POSTGRESQL,)


@dataclass(frozen=True)
class LimitSettings:
    """Recursion limits applied to every projection."""

    max_depth: int = DEFAULT_MAX_DEPTH


@dataclass(frozen=True)
class Settings:
    """Top-level configuration aggregate."""

    path: Path | None = None
    schema: SchemaSettings = field(default_factory=SchemaSettings)
    ddl: DdlSettings = field(default_factory=DdlSettings)
    limits: LimitSettings = field(default_factory=LimitSettings)
