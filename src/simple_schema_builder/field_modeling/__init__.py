"""Field modeling exports."""

from .field_models import FieldNode, FieldTreeError, FieldType
from .field_tree_editing import (
    add_child,
    add_field,
    change_field_type,
    new_field,
    remove_field,
    replace_field,
    validate_field_tree,
)
from .field_tree_files import (
    FieldTreeFile,
    FieldTreeFileError,
    dump_field_tree,
    read_field_tree,
    write_field_tree,
)

__all__ = [
    "FieldNode",
    "FieldTreeError",
    "FieldType",
    "FieldTreeFile",
    "FieldTreeFileError",
    "add_child",
    "add_field",
    "change_field_type",
    "dump_field_tree",
    "new_field",
    "read_field_tree",
    "remove_field",
    "replace_field",
    "validate_field_tree",
    "write_field_tree",
]
