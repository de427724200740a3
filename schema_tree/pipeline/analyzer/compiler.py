"""
Schema compiler that transforms a tree AST into a flat schema.

Phase 2 of the pipeline: walk the object nodes, name every nested object,
resolve every leaf and collect the definitions under their type names.
"""

from __future__ import annotations

import logging
from typing import Any

from ..config import CompilerConfig
from ..errors import DuplicateFieldError, InvalidArrayShapeError, InvalidRootError
from ..schema_ast.nodes import ArrayNode, LeafNode, ObjectNode, SchemaNode
from ..schema_ast.parser import ITEM_SEGMENT, SchemaParser
from .ir_nodes import FieldEntry, Schema, TypeDefinition
from .name_resolver import TypeNamer
from .reference_resolver import DataTypeResolver

logger = logging.getLogger(__name__)


class SchemaCompiler:
    """Compiles schema trees into a ``Schema``."""

    def __init__(self, config: CompilerConfig | None = None):
        """
        Initialize the compiler.

        Args:
            config: Compilation configuration
        """
        self.config = config or CompilerConfig()
        self.parser = SchemaParser()
        self.resolver = DataTypeResolver()

    def compile(self, tree: Any) -> Schema:
        """
        Compile a tree into a schema.

        Args:
            tree: An authored tree (parsed on the fly) or an ObjectNode

        Returns:
            Schema holding the root type and every synthesized type
        """
        root = tree if isinstance(tree, SchemaNode) else self.parser.parse(tree)

        if not isinstance(root, ObjectNode):
            raise InvalidRootError(f"the root must be an object node, got {type(root).__name__}")
        if root.name_override is not None:
            raise InvalidRootError(f"the root type is always named {self.config.root_name!r}")

        # The collision table lives for this call only
        namer = TypeNamer(self.config)
        root_name = self.config.root_name

        namer.claim(root_name, ())
        namer.define(TypeDefinition(name=root_name, fields=self._compile_fields(root, (), namer)), ())

        schema = Schema(root_name=root_name, types=namer.definitions)
        logger.debug("Compiled schema with %d types: %s", len(schema.types), list(schema.types))
        return schema

    def _compile_fields(
        self,
        node: ObjectNode,
        path: tuple[str, ...],
        namer: TypeNamer,
    ) -> dict[str, FieldEntry]:
        """Compile the fields of an object node, in declared order."""
        fields: dict[str, FieldEntry] = {}

        for field_name, child in node.fields.items():
            field_path = path + (field_name,)
            rendered_name, entry = self._compile_field(field_name, child, field_path, namer)

            if rendered_name in fields:
                raise DuplicateFieldError(f"field {rendered_name!r} is defined twice", field_path)
            fields[rendered_name] = entry

        return fields

    def _compile_field(
        self,
        field_name: str,
        node: SchemaNode | None,
        path: tuple[str, ...],
        namer: TypeNamer,
    ) -> tuple[str, FieldEntry]:
        """
        Compile one field.

        Returns:
            The name the parent lists the field under, and its entry
        """
        is_array = False
        if isinstance(node, ArrayNode):
            is_array = True
            node = node.items
            path = path + (ITEM_SEGMENT,)
            if node is None:
                raise InvalidArrayShapeError("array node has no element shape", path)
            if isinstance(node, ArrayNode):
                raise InvalidArrayShapeError("arrays of arrays cannot be expressed in a schema", path)

        if isinstance(node, LeafNode):
            return field_name, self.resolver.resolve(node.data_type, path, is_array)

        if isinstance(node, ObjectNode):
            type_name = namer.name_for(node, path)
            namer.claim(type_name, path)

            definition = TypeDefinition(name=type_name, fields=self._compile_fields(node, path, namer))
            namer.define(definition, path)
            logger.debug("Synthesized type %s for %s", type_name, path)

            return namer.field_name_for(node, field_name), FieldEntry(type=type_name, is_array=is_array)

        raise TypeError(f"Unknown schema node {type(node).__name__} at {path}")
