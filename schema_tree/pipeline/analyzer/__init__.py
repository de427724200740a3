"""
Analyzer module.

Contains type naming, data type resolution and schema compilation.
"""

from __future__ import annotations

from .compiler import SchemaCompiler
from .ir_nodes import FieldEntry, Schema, TypeDefinition
from .name_resolver import TypeNamer
from .reference_resolver import DataTypeResolver

__all__ = [
    "FieldEntry",
    "TypeDefinition",
    "Schema",
    "TypeNamer",
    "DataTypeResolver",
    "SchemaCompiler",
]
