"""
Schema tree parser that builds an AST.

Phase 1 of the pipeline: turn the authored literal (Python values or a
decoded JSON document) into ``LeafNode`` / ``ObjectNode`` / ``ArrayNode``
values without naming or resolving anything.

Every helper works on a single level of the tree, so binding proxies can
inspect one node at a time while the compiler parses eagerly.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..errors import (
    ITEM_SEGMENT,
    AmbiguousNodeError,
    InvalidArrayShapeError,
    InvalidTypeNameError,
    UnrecognizedDataTypeError,
)
from .data_types import (
    FORMAT_KEY,
    LEAF_KEYS,
    NAME_KEY,
    REF_KEY,
    RESERVED_PREFIX,
    TYPE_KEY,
    TYPE_NAME,
    VALIDATION_KEY,
    DataType,
    DataTypeRef,
)
from .nodes import ArrayNode, LeafNode, NodeKind, ObjectNode, SchemaNode


class SchemaParser:
    """Parses authored schema trees into an AST."""

    def parse(self, value: Any, path: tuple[str, ...] = ()) -> SchemaNode:
        """
        Parse a tree value recursively.

        Args:
            value: The authored value (mapping, list, or leaf)
            path: Field-name chain leading to ``value``

        Returns:
            Appropriate SchemaNode subclass
        """
        kind = self.classify(value, path)

        if kind is NodeKind.LEAF:
            return LeafNode(data_type=self.leaf_value(value, path), source_path=path)

        if kind is NodeKind.ARRAY:
            item = self.array_item(value, path)
            return ArrayNode(items=self.parse(item, path + (ITEM_SEGMENT,)), source_path=path)

        fields, name_override = self.object_entries(value, path)
        return ObjectNode(
            fields={name: self.parse(child, path + (name,)) for name, child in fields.items()},
            name_override=name_override,
            source_path=path,
        )

    def classify(self, value: Any, path: tuple[str, ...] = ()) -> NodeKind:
        """Decide which node kind a raw value is, looking at this level only."""
        if isinstance(value, (DataTypeRef, DataType)):
            return NodeKind.LEAF

        if isinstance(value, (list, tuple)):
            return NodeKind.ARRAY

        if not isinstance(value, Mapping):
            raise UnrecognizedDataTypeError(
                f"expected a mapping, a one-element list or a data type, got {type(value).__name__}",
                path,
            )

        fields, markers, name_override = self._split_keys(value, path)
        if not markers:
            return NodeKind.OBJECT

        if fields:
            raise AmbiguousNodeError(
                f"node has data-type marker(s) {sorted(markers)} and fields {list(fields)}",
                path,
            )
        if name_override is not None:
            raise AmbiguousNodeError("a name override cannot be set on a leaf", path)
        return NodeKind.LEAF

    def object_entries(self, value: Mapping, path: tuple[str, ...] = ()) -> tuple[dict[str, Any], str | None]:
        """Return the authored fields of an object node and its name override."""
        fields, _, name_override = self._split_keys(value, path)

        if name_override is not None and (not isinstance(name_override, str) or not name_override.strip()):
            raise InvalidTypeNameError(f"name override must be a non-empty string, got {name_override!r}", path)

        return fields, name_override

    def array_item(self, value: list | tuple, path: tuple[str, ...] = ()) -> Any:
        """Return the element shape wrapped by an array node."""
        if len(value) != 1:
            raise InvalidArrayShapeError(f"array nodes wrap exactly one element shape, got {len(value)}", path)
        return value[0]

    def leaf_value(self, value: Any, path: tuple[str, ...] = ()) -> DataTypeRef | DataType:
        """Normalize a leaf to a ``DataTypeRef`` or ``DataType``."""
        if isinstance(value, DataTypeRef):
            self._check_type_name(value.type, path)
            return value

        if isinstance(value, DataType):
            self._check_type_name(value.type, path)
            self._check_validation(value.validation, path)
            return value

        if isinstance(value, Mapping):
            return self._parse_marker_leaf(value, path)

        raise UnrecognizedDataTypeError(f"{type(value).__name__} is not a data type", path)

    def _parse_marker_leaf(self, value: Mapping, path: tuple[str, ...]) -> DataTypeRef | DataType:
        """Parse the ``$ref`` / ``$type`` form used in JSON documents."""
        if REF_KEY in value:
            extra = sorted(key for key in value if key != REF_KEY)
            if extra:
                raise UnrecognizedDataTypeError(f"a reference carries only a type name, found {extra}", path)
            self._check_type_name(value[REF_KEY], path)
            return DataTypeRef(value[REF_KEY])

        if TYPE_KEY not in value:
            raise UnrecognizedDataTypeError(f"{VALIDATION_KEY} and {FORMAT_KEY} require {TYPE_KEY}", path)

        self._check_type_name(value[TYPE_KEY], path)
        validation = value.get(VALIDATION_KEY)
        self._check_validation(validation, path)

        return DataType(
            type=value[TYPE_KEY],
            validation=list(validation) if validation is not None else None,
            format=value.get(FORMAT_KEY),
        )

    def _split_keys(self, value: Mapping, path: tuple[str, ...]) -> tuple[dict[str, Any], dict[str, Any], Any]:
        """Split mapping keys into authored fields, leaf markers and the name override."""
        fields: dict[str, Any] = {}
        markers: dict[str, Any] = {}
        name_override = None
        has_override = False

        for key, child in value.items():
            if key is TYPE_NAME or key == NAME_KEY:
                if has_override:
                    raise InvalidTypeNameError("name override given more than once", path)
                name_override = child
                has_override = True
            elif not isinstance(key, str):
                raise UnrecognizedDataTypeError(f"field names must be strings, got {type(key).__name__}", path)
            elif key.startswith(RESERVED_PREFIX):
                if key not in LEAF_KEYS:
                    raise UnrecognizedDataTypeError(f"unknown reserved key {key!r}", path)
                markers[key] = child
            else:
                fields[key] = child

        return fields, markers, name_override

    def _check_type_name(self, type_name: Any, path: tuple[str, ...]) -> None:
        if not isinstance(type_name, str) or not type_name:
            raise UnrecognizedDataTypeError(f"type identifier must be a non-empty string, got {type_name!r}", path)

    def _check_validation(self, validation: Any, path: tuple[str, ...]) -> None:
        # Rule contents belong to the runtime; only the container is checked
        if validation is not None and not isinstance(validation, (list, tuple)):
            raise UnrecognizedDataTypeError(
                f"validation must be a list of rules, got {type(validation).__name__}",
                path,
            )
