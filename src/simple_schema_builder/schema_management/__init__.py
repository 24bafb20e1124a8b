"""Schema management exports."""

from .schema_errors import (
    DepthExceededError,
    InvalidSchemaError,
    SchemaError,
    UnknownTypeWarning,
)
from .schema_models import DEFAULT_MAX_DEPTH, PropertySchema, SchemaDocument
from .schema_projection import (
    decode_schema_text,
    encode_schema_document,
    generate_schema,
    parse_schema,
    read_schema_document,
)

__all__ = [
    "DEFAULT_MAX_DEPTH",
    "DepthExceededError",
    "InvalidSchemaError",
    "PropertySchema",
    "SchemaDocument",
    "SchemaError",
    "UnknownTypeWarning",
    "decode_schema_text",
    "encode_schema_document",
    "generate_schema",
    "parse_schema",
    "read_schema_document",
]
