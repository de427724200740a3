"""
Data type resolver for leaf nodes.

Turns a leaf's data type into the field entry written to the compiled
schema. References are kept as bare type names; nothing is looked up in a
type registry, which is the consuming runtime's job.
"""

from __future__ import annotations

import copy
from typing import Any

from ..errors import UnrecognizedDataTypeError
from ..schema_ast.data_types import DataType, DataTypeRef
from .ir_nodes import FieldEntry


class DataTypeResolver:
    """Resolves leaf data types to field entries."""

    def resolve(self, data_type: Any, path: tuple[str, ...] = (), is_array: bool = False) -> FieldEntry:
        """
        Resolve a leaf value.

        Args:
            data_type: A DataTypeRef or DataType
            path: Field-name chain leading to the leaf (for error messages)
            is_array: Whether the leaf was wrapped in an array node

        Returns:
            FieldEntry for the leaf
        """
        if isinstance(data_type, DataTypeRef):
            return self._resolve_reference(data_type, is_array)

        if isinstance(data_type, DataType):
            return self._resolve_definition(data_type, is_array)

        raise UnrecognizedDataTypeError(f"{type(data_type).__name__} is neither a reference nor a definition", path)

    def _resolve_reference(self, ref: DataTypeRef, is_array: bool) -> FieldEntry:
        """A reference contributes its type name only."""
        return FieldEntry(type=ref.type, is_array=is_array)

    def _resolve_definition(self, definition: DataType, is_array: bool) -> FieldEntry:
        """An inline definition is copied as given, rules kept in order."""
        validation = definition.validation
        return FieldEntry(
            type=definition.type,
            is_array=is_array,
            validation=copy.deepcopy(list(validation)) if validation is not None else None,
            format=copy.deepcopy(definition.format),
        )
