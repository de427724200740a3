"""
Template rendering with binding proxies.

Lets authored content be written against the tree shape
(``{{ data.user.name }}``) and rendered to binding placeholders
(``{{user.name}}``) for the consuming runtime.
"""

from __future__ import annotations

from typing import Any

import jinja2

from .proxy import BindingProxy


class BindingEnvironment(jinja2.Environment):
    """Jinja environment in which attribute and item access on proxies descends into fields.

    Proxy fields take precedence over proxy methods, so a field called
    ``path`` is reachable as ``data.path``.
    """

    def __init__(self, **options: Any):
        options.setdefault("lstrip_blocks", True)
        options.setdefault("trim_blocks", True)
        options.setdefault("keep_trailing_newline", True)
        options.setdefault("undefined", jinja2.StrictUndefined)
        options.setdefault("finalize", _finalize)
        super().__init__(**options)

        self.filters["path"] = lambda proxy: proxy.path()
        self.filters["backref"] = lambda proxy: proxy.backref()
        self.filters["template"] = lambda proxy: proxy.template()

    def getattr(self, obj: Any, attribute: str) -> Any:
        if isinstance(obj, BindingProxy):
            return obj.field(attribute)
        return super().getattr(obj, attribute)

    def getitem(self, obj: Any, argument: Any) -> Any:
        if isinstance(obj, BindingProxy):
            return obj[argument]
        return super().getitem(obj, argument)


def _finalize(value: Any) -> Any:
    """Render bare proxies in output expressions as template values."""
    if isinstance(value, BindingProxy):
        return value.template()
    return value


def render_bindings(source: str, **context: Any) -> str:
    """
    Render a template whose context holds binding proxies.

    Args:
        source: Jinja template source
        **context: Template variables, typically root proxies

    Returns:
        Rendered text, with every proxy expression replaced by its template value
    """
    environment = BindingEnvironment()
    return environment.from_string(source).render(**context)
