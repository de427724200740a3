"""Schema Tree

Compile author-friendly nested schema literals into a flat type graph,
and build lazy binding proxies that turn tree positions into path strings.
"""

__version__ = "1.0.0"

from .pipeline import (
    TYPE_NAME,
    AmbiguousNodeError,
    BindingConfig,
    BindingProxy,
    CompilerConfig,
    DataType,
    DataTypeRef,
    DuplicateFieldError,
    InvalidArrayShapeError,
    InvalidRootError,
    InvalidTypeNameError,
    Schema,
    SchemaCompiler,
    SchemaTreeError,
    SchemaTreePipeline,
    TemplateValue,
    TypeNameCollisionError,
    UnknownFieldError,
    UnrecognizedDataTypeError,
    make_proxy,
    named,
    render_bindings,
)

__all__ = [
    "SchemaTreePipeline",
    "SchemaCompiler",
    "Schema",
    "CompilerConfig",
    "BindingConfig",
    "BindingProxy",
    "TemplateValue",
    "make_proxy",
    "render_bindings",
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
