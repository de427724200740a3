"""
Authoring vocabulary for schema trees.

A schema tree is written as plain dicts and lists. Its leaves are either
references to types the consuming runtime already knows (``DataTypeRef``)
or self-contained definitions (``DataType``). ``TYPE_NAME`` is the key used
to give an object node an explicit type name.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


class _TypeNameKey:
    """Sentinel key type; never equal to a string field name."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "TYPE_NAME"


TYPE_NAME = _TypeNameKey()

# Reserved keys for trees decoded from JSON, where the sentinel cannot be used
REF_KEY = "$ref"
TYPE_KEY = "$type"
VALIDATION_KEY = "$validation"
FORMAT_KEY = "$format"
NAME_KEY = "$name"

RESERVED_PREFIX = "$"
LEAF_KEYS = frozenset({REF_KEY, TYPE_KEY, VALIDATION_KEY, FORMAT_KEY})


@dataclass(frozen=True)
class DataTypeRef:
    """A leaf that points at a type name known to the consuming runtime."""

    type: str


@dataclass
class DataType:
    """A leaf that fully defines its type.

    Attributes:
        type: Type identifier understood by the runtime
        validation: Ordered validation rules, each a mapping holding a
            ``kind``, a ``message`` and kind-specific parameters
        format: Optional formatting metadata, passed through untouched
    """

    type: str
    validation: list[dict[str, Any]] | None = None
    format: Any = None


def named(type_name: str, fields: dict[Any, Any]) -> dict[Any, Any]:
    """Return a copy of ``fields`` carrying an explicit type name."""
    result: dict[Any, Any] = {TYPE_NAME: type_name}
    result.update(fields)
    return result
