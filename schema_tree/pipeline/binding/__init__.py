"""
Binding module.

Lazy path references over schema trees and template rendering with them.
"""

from __future__ import annotations

from .proxy import BindingProxy, IndexSegment, TemplateValue, make_proxy
from .template import BindingEnvironment, render_bindings

__all__ = [
    "BindingProxy",
    "IndexSegment",
    "TemplateValue",
    "make_proxy",
    "BindingEnvironment",
    "render_bindings",
]
