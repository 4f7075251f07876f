"""Template-side helpers: the Jinja2 environment and the widget tag."""

from .environment import build_environment, find_template_problems
from .widget import (
    WIDGETS_CONTEXT_KEY,
    WidgetExtension,
    WidgetNotFoundError,
    lookup_widget,
)

__all__ = [
    "WIDGETS_CONTEXT_KEY",
    "WidgetExtension",
    "WidgetNotFoundError",
    "build_environment",
    "find_template_problems",
    "lookup_widget",
]
