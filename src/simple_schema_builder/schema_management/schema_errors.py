"""Schema error taxonomy."""

from __future__ import annotations


class SchemaError(Exception):
    """Raised for schema parsing or projection failures."""


class InvalidSchemaError(SchemaError):
    """Raised when a schema document does not have a usable object shape."""


class DepthExceededError(SchemaError):
    """Raised when nesting goes beyond the configured maximum depth."""

    def __init__(self, path: str, max_depth: int) -> None:
        super().__init__(f"Nesting at '{path}' exceeds the maximum depth of {max_depth}.")
        self.path = path
        self.max_depth = max_depth


class UnknownTypeWarning(UserWarning):
    """Emitted when a property type has no column mapping and falls back to TEXT."""


def check_depth(depth: int, max_depth: int, path: str) -> None:
    """Raise DepthExceededError when ``depth`` is past ``max_depth``."""
    if depth > max_depth:
        raise DepthExceededError(path, max_depth)


def join_path(prefix: str, name: str) -> str:
    """Return the dotted path of ``name`` below ``prefix``."""
    return name if not prefix else f"{prefix}.{name}"
