"""
Binding proxies: lazy path references mirroring a schema tree.

A proxy is a view over an accumulated path. Descending into a field looks
at that one field of the authored tree (to learn whether it is an array
and whether it carries a name override) and nothing below it. Path text is
only produced when a proxy is materialized.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..config import BindingConfig
from ..errors import ITEM_SEGMENT, ArrayStep, InvalidArrayShapeError, UnknownFieldError
from ..schema_ast.nodes import NodeKind
from ..schema_ast.parser import SchemaParser


class _Unknown:
    """Marks a proxy whose position has no counterpart in the tree."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "<unknown>"


UNKNOWN = _Unknown()


@dataclass(frozen=True)
class IndexSegment:
    """Array position in a path; ``None`` renders the placeholder."""

    index: int | None = None


class TemplateValue(str):
    """A binding rendered for embedding in templates.

    Behaves as a plain string holding ``{{path}}`` and declares itself safe
    markup so that autoescaping template engines leave it untouched.
    """

    path: str

    def __new__(cls, text: str, path: str) -> TemplateValue:
        value = super().__new__(cls, text)
        value.path = path
        return value

    def __html__(self) -> str:
        return str(self)


class BindingProxy:
    """Path reference into a schema tree.

    Descend with ``field(name)`` (or ``proxy["name"]``) and select array
    positions with ``at(index)`` (or ``proxy[0]``). Materialize with
    ``path()``, ``template()`` or ``backref()``.
    """

    __slots__ = ("_node", "_segments", "_config", "_parser")

    def __init__(
        self,
        node: Any,
        segments: tuple[str | IndexSegment, ...] = (),
        config: BindingConfig | None = None,
        parser: SchemaParser | None = None,
    ):
        self._node = node
        self._segments = segments
        self._config = config or BindingConfig()
        self._parser = parser or SchemaParser()

    @property
    def segments(self) -> tuple[str | IndexSegment, ...]:
        return self._segments

    def field(self, name: str) -> BindingProxy:
        """Return the proxy for ``name`` below this one."""
        if not isinstance(name, str):
            raise TypeError(f"field names must be strings, got {type(name).__name__}")

        error_path = self._error_path() + (name,)
        child = self._child_value(name)
        if child is UNKNOWN and self._config.strict:
            raise UnknownFieldError(f"no field {name!r} in the tree", error_path)

        if child is UNKNOWN:
            return self._derive(UNKNOWN, self._segments + (name,))

        kind = self._parser.classify(child, error_path)
        is_array = kind is NodeKind.ARRAY
        if is_array:
            child = self._parser.array_item(child, error_path)
            error_path = error_path + (ITEM_SEGMENT,)
            kind = self._parser.classify(child, error_path)
            if kind is NodeKind.ARRAY:
                raise InvalidArrayShapeError("arrays of arrays cannot be expressed in a schema", error_path)

        rendered_name = name
        if kind is NodeKind.OBJECT:
            # The compiled schema lists this field under its override
            _, name_override = self._parser.object_entries(child, error_path)
            rendered_name = name_override or name

        segments = self._segments + (rendered_name,)
        if is_array:
            segments = segments + (IndexSegment(),)
        return self._derive(child, segments)

    def at(self, index: int) -> BindingProxy:
        """Select a concrete array position."""
        if isinstance(index, bool) or not isinstance(index, int):
            raise TypeError(f"array indices must be integers, got {type(index).__name__}")
        if index < 0:
            raise ValueError(f"array indices must not be negative, got {index}")

        last = self._segments[-1] if self._segments else None
        if isinstance(last, IndexSegment) and last.index is None:
            return self._derive(self._node, self._segments[:-1] + (IndexSegment(index),))

        if self._config.strict:
            raise UnknownFieldError("not an array field", self._error_path())
        return self._derive(self._node, self._segments + (IndexSegment(index),))

    def path(self) -> str:
        """Render the plain path, e.g. ``items[*].name``."""
        config = self._config
        rendered = ""
        for segment in self._segments:
            if isinstance(segment, IndexSegment):
                if segment.index is None:
                    rendered += config.array_placeholder
                else:
                    rendered += config.index_format.format(index=segment.index)
            elif rendered:
                rendered += config.separator + segment
            else:
                rendered = segment
        return rendered

    def template(self) -> TemplateValue:
        """Render the path wrapped in template delimiters."""
        path = self.path()
        return TemplateValue(f"{self._config.template_open}{path}{self._config.template_close}", path)

    def backref(self) -> str:
        """Render the path qualified by the back-reference root, e.g. ``$.foo.bar``."""
        path = self.path()
        if not path:
            return self._config.backref_root
        return f"{self._config.backref_root}{self._config.separator}{path}"

    def __getitem__(self, key: str | int) -> BindingProxy:
        if isinstance(key, int) and not isinstance(key, bool):
            return self.at(key)
        return self.field(key)

    # Integer __getitem__ would otherwise make proxies endlessly iterable
    __iter__ = None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BindingProxy):
            return NotImplemented
        return self._segments == other._segments and self._config == other._config

    def __hash__(self) -> int:
        return hash(self._segments)

    def __str__(self) -> str:
        # Coercions such as the jinja2 ``~`` operator render the template form
        return str(self.template())

    def __repr__(self) -> str:
        return f"BindingProxy({self.path()!r})"

    def _derive(self, node: Any, segments: tuple[str | IndexSegment, ...]) -> BindingProxy:
        return BindingProxy(node, segments, self._config, self._parser)

    def _child_value(self, name: str) -> Any:
        """Look up ``name`` one level below this proxy, without touching deeper levels."""
        if self._node is UNKNOWN:
            return UNKNOWN
        if self._parser.classify(self._node, self._error_path()) is not NodeKind.OBJECT:
            return UNKNOWN

        fields, _ = self._parser.object_entries(self._node, self._error_path())
        return fields.get(name, UNKNOWN)

    def _error_path(self) -> tuple[str, ...]:
        error_path = []
        for segment in self._segments:
            if isinstance(segment, str):
                error_path.append(segment)
            elif segment.index is None:
                error_path.append(ITEM_SEGMENT)
            else:
                error_path.append(ArrayStep(f"[{segment.index}]"))
        return tuple(error_path)


def make_proxy(tree: Any, config: BindingConfig | None = None) -> BindingProxy:
    """
    Create the root binding proxy for a tree.

    Nothing below the root is inspected until fields are accessed.

    Args:
        tree: The authored tree
        config: Path rendering configuration

    Returns:
        BindingProxy for the empty path
    """
    return BindingProxy(tree, (), config)
