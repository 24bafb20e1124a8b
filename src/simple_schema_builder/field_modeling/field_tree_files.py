"""Field tree file reading and writing service."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from .field_models import FieldNode, FieldTreeError, FieldType, coerce_field_type
from .field_tree_editing import validate_field_tree

_ALLOWED_FIELD_KEYS = frozenset(
    {
        "name",
        "type",
        "required",
        "children",
        "minimum",
        "maximum",
        "min_length",
        "max_length",
        "pattern",
        "enum",
        "unique_items",
        "description",
        "default",
        "format",
    }
)
_NUMERIC_KEYS = ("minimum", "maximum")
_LENGTH_KEYS = ("min_length", "max_length")
_TEXT_KEYS = ("pattern", "description", "format")


class FieldTreeFileError(Exception):
    """Raised when a field tree file cannot be read or is malformed."""


@dataclass(frozen=True)
class FieldTreeFile:
    """Contents of one field tree file."""

    title: str | None
    fields: tuple[FieldNode, ...]


def read_field_tree(path: Path | str) -> FieldTreeFile:
    """Load a YAML/JSON field tree file."""
    source = Path(path)
    if not source.exists():
        raise FieldTreeFileError(f"Field tree file not found: {source}")
    try:
        parsed = yaml.safe_load(source.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise FieldTreeFileError(f"Failed to parse field tree file: {exc}") from exc
    except RecursionError as exc:
        raise FieldTreeFileError("Field tree file is nested too deeply to parse.") from exc
    return field_tree_from_mapping(parsed)


def field_tree_from_mapping(parsed: Any) -> FieldTreeFile:
    """Build a field tree from already decoded file contents."""
    if not isinstance(parsed, Mapping):
        raise FieldTreeFileError("Field tree file root must be a mapping.")
    title = parsed.get("title")
    if title is not None and not isinstance(title, str):
        raise FieldTreeFileError("title must be a string.")
    raw_fields = parsed.get("fields")
    if not isinstance(raw_fields, Sequence) or isinstance(raw_fields, str):
        raise FieldTreeFileError("fields must be a list of field mappings.")
    try:
        fields = validate_field_tree(
            [_field_from_mapping(raw, location="fields") for raw in raw_fields]
        )
    except FieldTreeError as exc:
        raise FieldTreeFileError(str(exc)) from exc
    return FieldTreeFile(title=title or None, fields=fields)


def write_field_tree(
    fields: Sequence[FieldNode], output_path: Path | str, *, title: str | None = None
) -> Path:
    """Write ``fields`` as a YAML field tree file and return the resolved path."""
    destination = Path(output_path)
    destination.parent.mkdir(parents=True, exist_ok=True)
    destination.write_text(dump_field_tree(fields, title=title), encoding="utf-8")
    return destination.resolve()


def dump_field_tree(fields: Sequence[FieldNode], *, title: str | None = None) -> str:
    """Render ``fields`` as YAML text."""
    document: dict[str, Any] = {}
    if title:
        document["title"] = title
    document["fields"] = [field_to_mapping(field) for field in fields]
    return yaml.safe_dump(document, sort_keys=False, allow_unicode=True)


def field_to_mapping(field: FieldNode) -> dict[str, Any]:
    """Convert one field to its file representation, omitting unset attributes."""
    mapping: dict[str, Any] = {
        "name": field.name,
        "type": field.type.value,
        "required": field.required,
    }
    for key in (*_NUMERIC_KEYS, *_LENGTH_KEYS, "pattern"):
        value = getattr(field, key)
        if value is not None:
            mapping[key] = value
    if field.enum is not None:
        mapping["enum"] = list(field.enum)
    if field.unique_items is not None:
        mapping["unique_items"] = field.unique_items
    if field.description:
        mapping["description"] = field.description
    if field.default is not None:
        mapping["default"] = field.default
    if field.format:
        mapping["format"] = field.format
    if field.children is not None:
        mapping["children"] = [field_to_mapping(child) for child in field.children]
    return mapping


def _field_from_mapping(raw: Any, *, location: str) -> FieldNode:
    if not isinstance(raw, Mapping):
        raise FieldTreeFileError(f"{location} entries must be mappings.")
    name = raw.get("name")
    if not isinstance(name, str):
        raise FieldTreeFileError(f"{location} entry is missing a string name.")
    path = f"{location}.{name}"
    unknown = sorted(set(raw) - _ALLOWED_FIELD_KEYS)
    if unknown:
        raise FieldTreeFileError(f"{path} has unknown keys: {', '.join(map(str, unknown))}")

    field_type = _require_type(raw.get("type"), path)
    required = raw.get("required", False)
    if not isinstance(required, bool):
        raise FieldTreeFileError(f"{path}.required must be true or false.")

    attributes: dict[str, Any] = {}
    for key in _NUMERIC_KEYS:
        attributes[key] = _optional_number(raw.get(key), f"{path}.{key}")
    for key in _LENGTH_KEYS:
        attributes[key] = _optional_length(raw.get(key), f"{path}.{key}")
    for key in _TEXT_KEYS:
        attributes[key] = _optional_text(raw.get(key), f"{path}.{key}")
    attributes["enum"] = _optional_enum(raw.get("enum"), f"{path}.enum")
    unique_items = raw.get("unique_items")
    if unique_items is not None and not isinstance(unique_items, bool):
        raise FieldTreeFileError(f"{path}.unique_items must be true or false.")

    children = None
    if "children" in raw and raw["children"] is not None:
        raw_children = raw["children"]
        if not isinstance(raw_children, Sequence) or isinstance(raw_children, str):
            raise FieldTreeFileError(f"{path}.children must be a list.")
        children = tuple(_field_from_mapping(child, location=path) for child in raw_children)
    elif field_type.is_container:
        children = ()

    return FieldNode(
        name=name,
        type=field_type,
        required=required,
        children=children,
        unique_items=unique_items,
        default=raw.get("default"),
        **attributes,
    )


def _require_type(value: Any, path: str) -> FieldType:
    if value is None:
        raise FieldTreeFileError(f"{path}.type is required.")
    try:
        return coerce_field_type(value, path)
    except FieldTreeError as exc:
        raise FieldTreeFileError(str(exc)) from exc


def _optional_number(value: Any, field_name: str) -> float | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise FieldTreeFileError(f"{field_name} must be a number.")
    return value


def _optional_length(value: Any, field_name: str) -> int | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise FieldTreeFileError(f"{field_name} must be an integer.")
    if value < 0:
        raise FieldTreeFileError(f"{field_name} must not be negative.")
    return value


def _optional_text(value: Any, field_name: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise FieldTreeFileError(f"{field_name} must be a string.")
    return value


def _optional_enum(value: Any, field_name: str) -> tuple[Any, ...] | None:
    if value is None:
        return None
    if not isinstance(value, Sequence) or isinstance(value, str):
        raise FieldTreeFileError(f"{field_name} must be a list.")
    return tuple(value)
