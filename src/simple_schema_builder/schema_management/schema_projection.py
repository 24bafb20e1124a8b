"""Field tree to JSON Schema projection service."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping, Sequence
from typing import Any

from simple_schema_builder.field_modeling.field_models import (
    FieldNode,
    FieldTreeError,
    FieldType,
)
from simple_schema_builder.field_modeling.field_tree_editing import validate_field_tree

from .schema_errors import InvalidSchemaError, SchemaError, check_depth, join_path
from .schema_models import DEFAULT_MAX_DEPTH, PropertySchema, SchemaDocument

_LOGGER = logging.getLogger(__name__)

ITEMS_FIELD_NAME = "items"


def generate_schema(
    fields: Sequence[FieldNode],
    *,
    title: str | None = None,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> SchemaDocument:
    """Project an ordered field tree into a schema document."""
    properties, required = _project_fields(
        validate_field_tree(fields), prefix="", depth=1, max_depth=max_depth
    )
    _LOGGER.debug("Generated schema with %d top-level properties", len(properties))
    return SchemaDocument(properties=properties, required=required, title=title)


def parse_schema(
    document: Mapping[str, Any] | SchemaDocument, *, max_depth: int = DEFAULT_MAX_DEPTH
) -> list[FieldNode]:
    """Rebuild the field tree from a schema document.

    Array items come back as a single child named ``items`` that is never
    required, whatever the original item field was called.

    Raises:
      InvalidSchemaError: If the root is not object-typed or the shape is unusable.
      DepthExceededError: If nesting goes beyond ``max_depth``.
    """
    if not isinstance(document, SchemaDocument):
        document = read_schema_document(document, max_depth=max_depth)
    fields = _fields_from_properties(
        document.properties, document.required, prefix="", depth=1, max_depth=max_depth
    )
    _LOGGER.debug("Parsed %d top-level fields", len(fields))
    return fields


def read_schema_document(
    raw: Mapping[str, Any], *, max_depth: int = DEFAULT_MAX_DEPTH
) -> SchemaDocument:
    """Validate a decoded JSON schema and convert it to a SchemaDocument."""
    if not isinstance(raw, Mapping) or raw.get("type") != "object":
        raise InvalidSchemaError("Root schema must be an object.")
    title = raw.get("title")
    if title is not None and not isinstance(title, str):
        raise InvalidSchemaError("Schema title must be a string.")
    properties = _read_properties(raw.get("properties"), prefix="", depth=1, max_depth=max_depth)
    return SchemaDocument(
        properties=properties if properties is not None else {},
        required=_read_required(raw.get("required"), "root") or (),
        title=title or None,
    )


def decode_schema_text(text: str) -> Any:
    """Decode JSON schema text."""
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise SchemaError(f"Invalid JSON schema: {exc}") from exc
    except RecursionError as exc:
        raise SchemaError("Invalid JSON schema: nesting is too deep to decode.") from exc


def encode_schema_document(document: SchemaDocument, *, indent: int = 2) -> str:
    """Serialize ``document`` as indented JSON text."""
    return json.dumps(document.to_dict(), indent=indent, ensure_ascii=False)


def _project_fields(
    fields: Sequence[FieldNode], *, prefix: str, depth: int, max_depth: int
) -> tuple[dict[str, PropertySchema], tuple[str, ...]]:
    properties: dict[str, PropertySchema] = {}
    required: list[str] = []
    for field in fields:
        path = join_path(prefix, field.name)
        properties[field.name] = _project_field(field, path=path, depth=depth, max_depth=max_depth)
        if field.required:
            required.append(field.name)
    return properties, tuple(required)


def _project_field(field: FieldNode, *, path: str, depth: int, max_depth: int) -> PropertySchema:
    check_depth(depth, max_depth, path)
    properties = None
    required = None
    items = None
    if field.type is FieldType.OBJECT and field.children is not None:
        properties, required = _project_fields(
            field.children, prefix=path, depth=depth + 1, max_depth=max_depth
        )
    elif field.item_template is not None:
        template = field.item_template
        items = _project_field(
            template, path=join_path(path, template.name), depth=depth + 1, max_depth=max_depth
        )
    return PropertySchema(
        type=field.type.value,
        properties=properties,
        required=required,
        items=items,
        minimum=field.minimum,
        maximum=field.maximum,
        min_length=field.min_length,
        max_length=field.max_length,
        pattern=field.pattern,
        enum=field.enum,
        description=field.description,
        default=field.default,
        format=field.format,
        unique_items=field.unique_items,
    )


def _fields_from_properties(
    properties: Mapping[str, PropertySchema],
    required: Sequence[str],
    *,
    prefix: str,
    depth: int,
    max_depth: int,
) -> list[FieldNode]:
    return [
        _field_from_property(
            name,
            prop,
            required=name in required,
            path=join_path(prefix, name),
            depth=depth,
            max_depth=max_depth,
        )
        for name, prop in properties.items()
    ]


def _field_from_property(
    name: str,
    prop: PropertySchema,
    *,
    required: bool,
    path: str,
    depth: int,
    max_depth: int,
) -> FieldNode:
    check_depth(depth, max_depth, path)
    field_type = _resolve_field_type(prop.type, path)
    children: tuple[FieldNode, ...] | None = None
    if field_type is FieldType.OBJECT and prop.properties is not None:
        children = tuple(
            _fields_from_properties(
                prop.properties,
                prop.required or (),
                prefix=path,
                depth=depth + 1,
                max_depth=max_depth,
            )
        )
    elif field_type is FieldType.ARRAY and prop.items is not None:
        children = (
            _field_from_property(
                ITEMS_FIELD_NAME,
                prop.items,
                required=False,
                path=join_path(path, ITEMS_FIELD_NAME),
                depth=depth + 1,
                max_depth=max_depth,
            ),
        )
    try:
        return FieldNode(
            name=name,
            type=field_type,
            required=required,
            children=children,
            minimum=prop.minimum,
            maximum=prop.maximum,
            min_length=prop.min_length,
            max_length=prop.max_length,
            pattern=prop.pattern,
            enum=prop.enum,
            unique_items=prop.unique_items,
            description=prop.description or None,
            default=prop.default,
            format=prop.format or None,
        )
    except FieldTreeError as exc:
        raise InvalidSchemaError(f"Property '{path}': {exc}") from exc


def _resolve_field_type(value: str | None, path: str) -> FieldType:
    if value is None:
        raise InvalidSchemaError(f"Property '{path}' does not declare a type.")
    try:
        return FieldType(value)
    except ValueError as exc:
        raise InvalidSchemaError(f"Property '{path}' has unsupported type {value!r}.") from exc


def _read_properties(
    value: Any, *, prefix: str, depth: int, max_depth: int
) -> dict[str, PropertySchema] | None:
    if value is None:
        return None
    if not isinstance(value, Mapping):
        raise InvalidSchemaError(f"'{prefix or 'root'}' properties must be an object.")
    properties: dict[str, PropertySchema] = {}
    for name, child in value.items():
        path = join_path(prefix, str(name))
        properties[str(name)] = _read_property(child, path=path, depth=depth, max_depth=max_depth)
    return properties


def _read_property(raw: Any, *, path: str, depth: int, max_depth: int) -> PropertySchema:
    check_depth(depth, max_depth, path)
    if not isinstance(raw, Mapping):
        raise InvalidSchemaError(f"Property '{path}' must be an object.")
    property_type = raw.get("type")
    if property_type is not None and not isinstance(property_type, str):
        raise InvalidSchemaError(f"Property '{path}' type must be a single string.")

    items = None
    raw_items = raw.get("items")
    if raw_items is not None:
        if not isinstance(raw_items, Mapping):
            raise InvalidSchemaError(f"Property '{path}' items must be a single schema object.")
        items = _read_property(
            raw_items,
            path=join_path(path, ITEMS_FIELD_NAME),
            depth=depth + 1,
            max_depth=max_depth,
        )

    enum = raw.get("enum")
    if enum is not None and (not isinstance(enum, Sequence) or isinstance(enum, str)):
        raise InvalidSchemaError(f"Property '{path}' enum must be a list.")

    return PropertySchema(
        type=property_type,
        properties=_read_properties(
            raw.get("properties"), prefix=path, depth=depth + 1, max_depth=max_depth
        ),
        required=_read_required(raw.get("required"), path),
        items=items,
        minimum=_optional_attribute(raw, "minimum", (int, float), path),
        maximum=_optional_attribute(raw, "maximum", (int, float), path),
        min_length=_optional_attribute(raw, "minLength", (int,), path),
        max_length=_optional_attribute(raw, "maxLength", (int,), path),
        pattern=_optional_attribute(raw, "pattern", (str,), path),
        enum=tuple(enum) if enum is not None else None,
        description=_optional_attribute(raw, "description", (str,), path),
        default=raw.get("default"),
        format=_optional_attribute(raw, "format", (str,), path),
        unique_items=_optional_attribute(raw, "uniqueItems", (bool,), path),
    )


def _read_required(value: Any, path: str) -> tuple[str, ...] | None:
    if value is None:
        return None
    if (
        not isinstance(value, Sequence)
        or isinstance(value, str)
        or not all(isinstance(item, str) for item in value)
    ):
        raise InvalidSchemaError(f"'{path}' required must be a list of property names.")
    return tuple(value)


def _optional_attribute(
    raw: Mapping[str, Any], key: str, kinds: tuple[type, ...], path: str
) -> Any:
    value = raw.get(key)
    if value is None:
        return None
    if bool not in kinds and isinstance(value, bool):
        raise InvalidSchemaError(f"Property '{path}' {key} has an invalid value.")
    if not isinstance(value, kinds):
        raise InvalidSchemaError(f"Property '{path}' {key} has an invalid value.")
    return value
