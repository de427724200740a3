"""
IR (Intermediate Representation) node definitions.

These nodes represent the compiled schema: a flat mapping from type name
to type definition, rooted at ``ROOT``. All names are assigned and every
leaf is normalized.
"""

from __future__ import annotations

import copy
import json
from dataclasses import dataclass, field
from typing import Any


@dataclass
class FieldEntry:
    """A field of a type definition."""

    type: str = ""
    is_array: bool = False

    # Only set for inline definitions
    validation: list[dict[str, Any]] | None = None
    format: Any = None

    def to_dict(self) -> dict[str, Any]:
        """Render the entry in output form (``{"type": ..., "isArray": true, ...}``)."""
        result: dict[str, Any] = {"type": self.type}
        if self.is_array:
            result["isArray"] = True
        if self.validation is not None:
            result["validation"] = copy.deepcopy(self.validation)
        if self.format is not None:
            result["format"] = copy.deepcopy(self.format)
        return result


@dataclass
class TypeDefinition:
    """A named type: field name -> field entry."""

    name: str = ""
    fields: dict[str, FieldEntry] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {name: entry.to_dict() for name, entry in self.fields.items()}


@dataclass
class Schema:
    """Complete compiled schema."""

    root_name: str = "ROOT"

    # Root first, then types in the order they were discovered
    types: dict[str, TypeDefinition] = field(default_factory=dict)

    @property
    def root(self) -> TypeDefinition:
        return self.types[self.root_name]

    def __getitem__(self, type_name: str) -> TypeDefinition:
        return self.types[type_name]

    def __contains__(self, type_name: object) -> bool:
        return type_name in self.types

    def referenced_names(self) -> set[str]:
        """Type names used by fields but not defined here (runtime references)."""
        used = {entry.type for definition in self.types.values() for entry in definition.fields.values()}
        return used - set(self.types)

    def to_dict(self) -> dict[str, Any]:
        return {name: definition.to_dict() for name, definition in self.types.items()}

    def to_json(self, indent: int | None = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)
