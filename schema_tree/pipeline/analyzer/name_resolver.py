"""
Name resolver for synthesized types.

Converts field names (or explicit overrides) to PascalCase type names and
keeps the table of names handed out during one compilation, which is
where collisions are detected.
"""

from __future__ import annotations

import logging
import re

from ..config import CompilerConfig
from ..errors import ArrayStep, InvalidTypeNameError, TypeNameCollisionError
from ..schema_ast.nodes import ObjectNode
from .ir_nodes import TypeDefinition

logger = logging.getLogger(__name__)


class TypeNamer:
    """Assigns type names and tracks them for a single compilation run."""

    # Runs of letters or of digits, in any script
    _WORD_PATTERN = re.compile(r"[^\W\d_]+|\d+")

    def __init__(self, config: CompilerConfig | None = None):
        self.config = config or CompilerConfig()

        # Type name -> definition, None while the definition is being compiled.
        # Insertion order is the discovery order of the output schema.
        self._table: dict[str, TypeDefinition | None] = {}

    @property
    def definitions(self) -> dict[str, TypeDefinition]:
        """Completed definitions, in discovery order."""
        return {name: definition for name, definition in self._table.items() if definition is not None}

    def name_for(self, node: ObjectNode, path: tuple[str, ...]) -> str:
        """
        Return the type name for an object node.

        Args:
            node: The object node to name
            path: Field-name chain leading to the node; its last field
                name is used unless the node carries an override

        Returns:
            PascalCase name with the configured suffix
        """
        base = node.name_override or self._field_name(path)
        words = self._to_pascal_case(base)
        if not words:
            raise InvalidTypeNameError(f"cannot derive a type name from {base!r}", path)
        return words + self.config.type_suffix

    def field_name_for(self, node: ObjectNode, field_name: str) -> str:
        """Return the name under which the parent lists this node."""
        return node.name_override or field_name

    def claim(self, type_name: str, path: tuple[str, ...]) -> bool:
        """
        Reserve a type name before its definition is compiled.

        Returns:
            True if the name is new, False if it is already defined and the
            new definition must be checked against it in ``define``.
        """
        if type_name not in self._table:
            self._table[type_name] = None
            return True

        if type_name == self.config.root_name:
            raise TypeNameCollisionError(f"{type_name!r} is reserved for the root type", path)
        if self._table[type_name] is None:
            raise TypeNameCollisionError(f"{type_name!r} is used again inside its own definition", path)
        if not self.config.share_identical_types:
            raise TypeNameCollisionError(f"{type_name!r} is already defined", path)
        return False

    def define(self, definition: TypeDefinition, path: tuple[str, ...]) -> TypeDefinition:
        """Record a compiled definition under a claimed name."""
        existing = self._table.get(definition.name)
        if existing is None:
            self._table[definition.name] = definition
            return definition

        if existing.fields != definition.fields:
            raise TypeNameCollisionError(
                f"{definition.name!r} is already defined with different fields "
                f"({list(existing.fields)} vs {list(definition.fields)})",
                path,
            )

        logger.debug("Sharing identical type %s at %s", definition.name, path)
        return existing

    def _field_name(self, path: tuple[str, ...]) -> str:
        for segment in reversed(path):
            if not isinstance(segment, ArrayStep):
                return segment
        return ""

    def _to_pascal_case(self, text: str) -> str:
        """Convert text to PascalCase."""
        if not text:
            return ""

        # Normalize separators
        normalized = text.replace("_", " ").replace("-", " ")

        # Split into words, breaking letter runs before each uppercase letter
        words = []
        for run in self._WORD_PATTERN.findall(normalized):
            start = 0
            for index in range(1, len(run)):
                if run[index].isupper():
                    words.append(run[start:index])
                    start = index
            words.append(run[start:])

        # Capitalize and join
        return "".join(word.capitalize() for word in words if word)
