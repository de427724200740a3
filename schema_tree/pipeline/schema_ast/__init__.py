"""
Schema AST (Abstract Syntax Tree) module.

Contains the authoring vocabulary, the AST node definitions and the parser
for schema trees.
"""

from __future__ import annotations

from .data_types import TYPE_NAME, DataType, DataTypeRef, named
from .nodes import ArrayNode, LeafNode, NodeKind, ObjectNode, SchemaNode
from .parser import ITEM_SEGMENT, SchemaParser

__all__ = [
    "TYPE_NAME",
    "DataType",
    "DataTypeRef",
    "named",
    "SchemaNode",
    "LeafNode",
    "ObjectNode",
    "ArrayNode",
    "NodeKind",
    "SchemaParser",
    "ITEM_SEGMENT",
]
