"""Field tree domain entities."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class FieldTreeError(ValueError):
    """Raised when a field tree violates its structural invariants."""


class FieldType(str, Enum):
    """Logical field types offered by the field editor."""

    STRING = "string"
    NUMBER = "number"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    OBJECT = "object"
    ARRAY = "array"

    @property
    def is_container(self) -> bool:
        """Return True for types that may carry children."""
        return self in (FieldType.OBJECT, FieldType.ARRAY)


@dataclass(frozen=True)
class FieldNode:  # pylint: disable=too-many-instance-attributes
    """One editable field, possibly holding nested children."""

    name: str
    type: FieldType
    required: bool = False
    children: tuple[FieldNode, ...] | None = None
    minimum: float | None = None
    maximum: float | None = None
    min_length: int | None = None
    max_length: int | None = None
    pattern: str | None = None
    enum: tuple[Any, ...] | None = None
    unique_items: bool | None = None
    description: str | None = None
    default: Any = None
    format: str | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.type, FieldType):
            object.__setattr__(self, "type", coerce_field_type(self.type, self.name))
        if self.children is None:
            return
        if not isinstance(self.children, tuple):
            object.__setattr__(self, "children", tuple(self.children))
        if not self.type.is_container:
            raise FieldTreeError(
                f"Field '{self.name}' of type {self.type.value} cannot have children."
            )
        if self.type is FieldType.ARRAY and len(self.children) > 1:
            raise FieldTreeError(
                f"Array field '{self.name}' accepts a single item template, "
                f"got {len(self.children)}."
            )
        duplicate = _first_duplicate_name(self.children)
        if duplicate is not None:
            raise FieldTreeError(f"Duplicate child field '{duplicate}' in '{self.name}'.")

    @property
    def item_template(self) -> FieldNode | None:
        """Return the array item template when present."""
        if self.type is FieldType.ARRAY and self.children:
            return self.children[0]
        return None


def coerce_field_type(value: Any, field_name: str) -> FieldType:
    """Resolve raw type text to a FieldType."""
    try:
        return FieldType(value)
    except ValueError as exc:
        supported = ", ".join(member.value for member in FieldType)
        raise FieldTreeError(
            f"Field '{field_name}' has unsupported type {value!r} (expected one of: {supported})."
        ) from exc


def _first_duplicate_name(fields: tuple[FieldNode, ...]) -> str | None:
    seen: set[str] = set()
    for field in fields:
        if field.name in seen:
            return field.name
        seen.add(field.name)
    return None
