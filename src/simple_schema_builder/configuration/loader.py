"""Configuration loader service."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import yaml

from simple_schema_builder.ddl_generation.dialects import Dialect, parse_dialect

from .runtime_settings import (
    DEFAULT_JSON_INDENT,
    DdlSettings,
    LimitSettings,
    SchemaSettings,
    Settings,
)

_MAX_JSON_INDENT = 8
_MAX_DEPTH_LIMIT = 100


class ConfigurationError(Exception):
    """Raised when the configuration file is invalid."""


def load_configuration(config_path: Path | str | None = None) -> Settings:
    """Load and validate the configuration file; defaults apply when no path is given."""
    if config_path is None:
        return Settings()

    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc

    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")

    unknown = sorted(str(key) for key in parsed if key not in ("schema", "ddl", "limits"))
    if unknown:
        raise ConfigurationError(f"Unknown configuration sections: {', '.join(unknown)}")

    return Settings(
        path=path,
        schema=_parse_schema_section(parsed.get("schema")),
        ddl=_parse_ddl_section(parsed.get("ddl")),
        limits=_parse_limits_section(parsed.get("limits")),
    )


def _parse_schema_section(value: Any) -> SchemaSettings:
    section = _optional_mapping(value, "schema")
    title = _optional_string(section.get("title"), "schema.title")
    indent = _require_positive_int(section.get("indent", DEFAULT_JSON_INDENT), "schema.indent")
    if indent > _MAX_JSON_INDENT:
        raise ConfigurationError(f"schema.indent must not exceed {_MAX_JSON_INDENT}.")
    return SchemaSettings(title=title, indent=indent)


def _parse_ddl_section(value: Any) -> DdlSettings:
    section = _optional_mapping(value, "ddl")
    raw_dialects = section.get("dialects")
    if raw_dialects is None:
        return DdlSettings()
    return DdlSettings(dialects=_normalize_dialects(raw_dialects))


def _parse_limits_section(value: Any) -> LimitSettings:
    section = _optional_mapping(value, "limits")
    if "max_depth" not in section:
        return LimitSettings()
    max_depth = _require_positive_int(section["max_depth"], "limits.max_depth")
    if max_depth > _MAX_DEPTH_LIMIT:
        raise ConfigurationError(f"limits.max_depth must not exceed {_MAX_DEPTH_LIMIT}.")
    return LimitSettings(max_depth=max_depth)


def _normalize_dialects(value: Any) -> tuple[Dialect, ...]:
    if isinstance(value, str):
        entries: Sequence[Any] = [item for item in value.split(",") if item.strip()]
    elif isinstance(value, Sequence):
        entries = value
    else:
        raise ConfigurationError("ddl.dialects must be a string or list of strings.")

    dialects: list[Dialect] = []
    for item in entries:
        if not isinstance(item, str):
            raise ConfigurationError("ddl.dialects entries must be strings.")
        try:
            dialect = parse_dialect(item)
        except ValueError as exc:
            raise ConfigurationError(f"ddl.dialects: {exc}") from exc
        if dialect not in dialects:
            dialects.append(dialect)
    if not dialects:
        raise ConfigurationError("ddl.dialects must contain at least one dialect.")
    return tuple(dialects)


def _optional_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' must be a mapping.")
    return value


def _optional_string(value: Any, field_name: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    return stripped or None


def _require_positive_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if not isinstance(value, int):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if value <= 0:
        raise ConfigurationError(f"{field_name} must be greater than zero.")
    return value
