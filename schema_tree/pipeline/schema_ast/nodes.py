"""
AST node definitions for schema trees.

A parsed tree is made of exactly three node kinds: leaves holding a data
type, objects mapping field names to child nodes, and arrays wrapping a
single element shape.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .data_types import DataType, DataTypeRef


class NodeKind(Enum):
    """Kind of a raw tree value, as decided by the parser."""

    LEAF = "leaf"
    OBJECT = "object"
    ARRAY = "array"


@dataclass
class SchemaNode:
    """Base class for all AST nodes."""

    # Field-name chain from the root (for error messages)
    source_path: tuple[str, ...] = ()


@dataclass
class LeafNode(SchemaNode):
    """A node holding a reference or an inline type definition."""

    data_type: DataTypeRef | DataType | None = None


@dataclass
class ObjectNode(SchemaNode):
    """A node mapping field names to child nodes."""

    fields: dict[str, SchemaNode] = field(default_factory=dict)

    # Explicit type name, kept apart from the authored fields
    name_override: str | None = None


@dataclass
class ArrayNode(SchemaNode):
    """A node wrapping the shape of its elements."""

    items: SchemaNode | None = None
