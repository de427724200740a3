"""
Errors raised while parsing, compiling or binding a schema tree.

Every error carries the field-name chain from the root to the offending
node so that authors can locate it in their tree.
"""

from __future__ import annotations

from collections.abc import Iterable


class ArrayStep(str):
    """Path segment for an array position.

    Field names are plain strings, so a field literally called ``[a]`` is
    never mistaken for an array step.
    """

    __slots__ = ()


ITEM_SEGMENT = ArrayStep("[*]")


def format_path(path: Iterable[str]) -> str:
    """Render a field-name chain as ``foo.bar[0].baz`` (``<root>`` when empty)."""
    rendered = ""
    for segment in path:
        if isinstance(segment, ArrayStep):
            rendered += segment
        elif rendered:
            rendered += "." + segment
        else:
            rendered = segment
    return rendered or "<root>"


class SchemaTreeError(Exception):
    """Base class for all schema tree errors.

    Attributes:
        path: Field-name chain from the root to the node that failed
        reason: Human readable description, without the path
    """

    def __init__(self, reason: str, path: Iterable[str] = ()):
        self.path = tuple(path)
        self.reason = reason
        super().__init__(f"{format_path(self.path)}: {reason}")


class AmbiguousNodeError(SchemaTreeError):
    """Raised when a node carries a data-type marker and child fields at once."""

    pass


class InvalidArrayShapeError(SchemaTreeError):
    """Raised when an array node does not wrap exactly one element shape."""

    pass


class UnrecognizedDataTypeError(SchemaTreeError):
    """Raised when a leaf value is neither a reference nor an inline definition."""

    pass


class TypeNameCollisionError(SchemaTreeError):
    """Raised when two different definitions would be emitted under one type name."""

    pass


class InvalidTypeNameError(SchemaTreeError):
    """Raised when a field name or name override yields no usable type name."""

    pass


class InvalidRootError(SchemaTreeError):
    """Raised when the root of a tree is not a plain object node."""

    pass


class DuplicateFieldError(SchemaTreeError):
    """Raised when a name override renames a field onto one of its siblings."""

    pass


class UnknownFieldError(SchemaTreeError):
    """Raised by strict binding proxies when descending into a field the tree lacks."""

    pass
