"""
Pipeline - schema tree compiler and binding builder.

Turns an author-friendly nested literal into a flat schema, and gives lazy
path references over the same literal:

1. Phase 1 (Parser): Parse the nested literal into Leaf/Object/Array nodes
2. Phase 2 (Analyzer): Name nested objects, resolve leaves, build the schema
3. Phase 3 (Serializer): Render the schema as JSON

Binding proxies read the literal directly and never consult the schema.
"""

from __future__ import annotations

from .analyzer import FieldEntry, Schema, SchemaCompiler, TypeDefinition
from .binding import BindingProxy, TemplateValue, make_proxy, render_bindings
from .config import BindingConfig, CompilerConfig
from .errors import (
    AmbiguousNodeError,
    DuplicateFieldError,
    InvalidArrayShapeError,
    InvalidRootError,
    InvalidTypeNameError,
    SchemaTreeError,
    TypeNameCollisionError,
    UnknownFieldError,
    UnrecognizedDataTypeError,
)
from .generator import SchemaTreePipeline
from .schema_ast import TYPE_NAME, DataType, DataTypeRef, named

__all__ = [
    "SchemaTreePipeline",
    "SchemaCompiler",
    "Schema",
    "TypeDefinition",
    "FieldEntry",
    "BindingProxy",
    "TemplateValue",
    "make_proxy",
    "render_bindings",
    "CompilerConfig",
    "BindingConfig",
    "TYPE_NAME",
    "DataType",
    "DataTypeRef",
    "named",
    "SchemaTreeError",
    "AmbiguousNodeError",
    "InvalidArrayShapeError",
    "UnrecognizedDataTypeError",
    "TypeNameCollisionError",
    "InvalidTypeNameError",
    "InvalidRootError",
    "DuplicateFieldError",
    "UnknownFieldError",
]
