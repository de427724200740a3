"""
Pipeline entry point.

Bundles parsing, compilation, serialization and binding for one authored
tree under one configuration.
"""

from __future__ import annotations

from typing import Any

from .analyzer import Schema, SchemaCompiler
from .binding import BindingProxy, make_proxy
from .config import CompilerConfig


class SchemaTreePipeline:
    """Compiles a schema tree and hands out binding proxies for it."""

    def __init__(self, tree: Any, config: CompilerConfig | None = None):
        """
        Initialize the pipeline.

        Args:
            tree: The authored tree (Python values or decoded JSON)
            config: Compilation and binding configuration
        """
        self.tree = tree
        self.config = config or CompilerConfig()

    def compile(self) -> Schema:
        """Compile the tree. Every call runs a fresh compilation."""
        return SchemaCompiler(self.config).compile(self.tree)

    def generate(self, indent: int | None = 2) -> str:
        """Compile the tree and serialize the schema to JSON."""
        return self.compile().to_json(indent=indent)

    def bindings(self) -> BindingProxy:
        """Return the root binding proxy for the tree."""
        return make_proxy(self.tree, self.config.binding)
