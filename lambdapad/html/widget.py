"""Jinja2 tag for injecting pre-rendered widgets into page templates.

Templates place a widget with::

    {% widget "aside" %}

The tag takes exactly one string literal. When the template is rendered the
name is looked up in the ``widgets`` mapping of the render context, which
maps widget names to their already rendered HTML, and the content is
emitted verbatim. An unknown name fails the render; there is no fallback.
"""

from __future__ import annotations

import collections.abc as cabc
import typing as typ

from jinja2 import nodes
from jinja2.ext import Extension
from markupsafe import Markup

if typ.TYPE_CHECKING:
    from jinja2.parser import Parser
    from jinja2.runtime import Context

WIDGETS_CONTEXT_KEY = "widgets"


class WidgetNotFoundError(LookupError):
    """Raised when a template asks for a widget the context does not provide."""


def lookup_widget(
    widgets: cabc.Mapping[str, str] | cabc.Iterable[tuple[str, str]] | None, name: str
) -> str:
    """Return the rendered content registered for ``name``.

    Raises
    ------
    WidgetNotFoundError
        If ``widgets`` is missing or has no entry for ``name``.
    """
    table = widgets if isinstance(widgets, cabc.Mapping) else dict(widgets or ())
    try:
        return table[name]
    except KeyError as exc:
        msg = f"widget {name!r} not found!"
        raise WidgetNotFoundError(msg) from exc


class WidgetExtension(Extension):
    """Register the ``{% widget "name" %}`` tag on a Jinja2 environment."""

    tags = {"widget"}  # noqa: RUF012 - Jinja2 API

    def parse(self, parser: Parser) -> nodes.Node:
        """Parse the tag and its single string-literal argument."""
        lineno = next(parser.stream).lineno
        token = parser.stream.expect("string")
        call = self.call_method(
            "_render_widget",
            [nodes.ContextReference(), nodes.Const(token.value)],
            lineno=lineno,
        )
        return nodes.Output([call], lineno=lineno)

    def _render_widget(self, context: Context, name: str) -> Markup:
        return Markup(lookup_widget(context.get(WIDGETS_CONTEXT_KEY), name))  # noqa: S704 - widgets are pre-rendered HTML


__all__ = [
    "WIDGETS_CONTEXT_KEY",
    "WidgetExtension",
    "WidgetNotFoundError",
    "lookup_widget",
]
