"""Pure editing operations over field trees."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import replace

from .field_models import FieldNode, FieldTreeError, FieldType, coerce_field_type


def new_field() -> FieldNode:
    """Return the blank field the editor starts from."""
    return FieldNode(name="", type=FieldType.STRING, required=False)


def validate_field_tree(fields: Sequence[FieldNode]) -> tuple[FieldNode, ...]:
    """Check top-level sibling names are unique and return the tree as a tuple."""
    seen: set[str] = set()
    for field in fields:
        if field.name in seen:
            raise FieldTreeError(f"Duplicate top-level field '{field.name}'.")
        seen.add(field.name)
    return tuple(fields)


def add_field(fields: Sequence[FieldNode], field: FieldNode) -> tuple[FieldNode, ...]:
    """Append one field to the top level."""
    return validate_field_tree((*fields, field))


def replace_field(
    fields: Sequence[FieldNode], index: int, field: FieldNode
) -> tuple[FieldNode, ...]:
    """Swap the field at ``index`` for an updated version."""
    _require_index(fields, index)
    updated = list(fields)
    updated[index] = field
    return validate_field_tree(updated)


def remove_field(fields: Sequence[FieldNode], index: int) -> tuple[FieldNode, ...]:
    """Drop the field at ``index``."""
    _require_index(fields, index)
    return tuple(field for position, field in enumerate(fields) if position != index)


def change_field_type(field: FieldNode, new_type: FieldType | str) -> FieldNode:
    """Return ``field`` retyped; containers restart with no children."""
    resolved = coerce_field_type(new_type, field.name)
    children: tuple[FieldNode, ...] | None = () if resolved.is_container else None
    return replace(field, type=resolved, children=children)


def add_child(field: FieldNode, child: FieldNode) -> FieldNode:
    """Append ``child`` to an object field or set an array field's item template."""
    if not field.type.is_container:
        raise FieldTreeError(f"Field '{field.name}' of type {field.type.value} has no children.")
    return replace(field, children=(*(field.children or ()), child))


def _require_index(fields: Sequence[FieldNode], index: int) -> None:
    if not 0 <= index < len(fields):
        raise FieldTreeError(f"Field index {index} is out of range.")
