"""Schema management entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

DEFAULT_MAX_DEPTH = 32


@dataclass(frozen=True)
class PropertySchema:  # pylint: disable=too-many-instance-attributes
    """JSON Schema projection of one field."""

    type: str | None
    properties: Mapping[str, PropertySchema] | None = None
    required: tuple[str, ...] | None = None
    items: PropertySchema | None = None
    minimum: float | None = None
    maximum: float | None = None
    min_length: int | None = None
    max_length: int | None = None
    pattern: str | None = None
    enum: tuple[Any, ...] | None = None
    description: str | None = None
    default: Any = None
    format: str | None = None
    unique_items: bool | None = None

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-ready mapping, omitting unset attributes."""
        result: dict[str, Any] = {}
        if self.type is not None:
            result["type"] = self.type
        if self.properties is not None:
            result["properties"] = {
                name: prop.to_dict() for name, prop in self.properties.items()
            }
        if self.required is not None:
            result["required"] = list(self.required)
        if self.items is not None:
            result["items"] = self.items.to_dict()
        if self.minimum is not None:
            result["minimum"] = self.minimum
        if self.maximum is not None:
            result["maximum"] = self.maximum
        if self.min_length is not None:
            result["minLength"] = self.min_length
        if self.max_length is not None:
            result["maxLength"] = self.max_length
        if self.pattern is not None:
            result["pattern"] = self.pattern
        if self.enum is not None:
            result["enum"] = list(self.enum)
        if self.description:
            result["description"] = self.description
        if self.default is not None:
            result["default"] = self.default
        if self.format:
            result["format"] = self.format
        if self.unique_items is not None:
            result["uniqueItems"] = self.unique_items
        return result


@dataclass(frozen=True)
class SchemaDocument:
    """Root JSON Schema document; always object-typed."""

    properties: Mapping[str, PropertySchema] = field(default_factory=dict)
    required: tuple[str, ...] = ()
    title: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-ready mapping."""
        result: dict[str, Any] = {}
        if self.title:
            result["title"] = self.title
        result["type"] = "object"
        result["properties"] = {name: prop.to_dict() for name, prop in self.properties.items()}
        result["required"] = list(self.required)
        return result
