"""Jinja2 environment shared by everything that loads site templates."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from jinja2 import (
    BaseLoader,
    Environment,
    FileSystemLoader,
    TemplateNotFound,
    TemplateSyntaxError,
    select_autoescape,
)

from .widget import WidgetExtension


def build_environment(
    templates_dir: Path | None = None, *, loader: BaseLoader | None = None
) -> Environment:
    """Return a Jinja2 environment with the widget tag registered.

    Parameters
    ----------
    templates_dir : Path, optional
        Directory holding the site templates; ignored when ``loader`` is
        given.
    loader : BaseLoader, optional
        Explicit loader, mostly useful for ``DictLoader`` in tests.
    """
    if loader is None and templates_dir is not None:
        loader = FileSystemLoader(str(templates_dir))
    return Environment(
        loader=loader,
        autoescape=select_autoescape(["html", "xml"]),
        trim_blocks=True,
        lstrip_blocks=True,
        extensions=[WidgetExtension],
    )


def find_template_problems(
    env: Environment, descriptors: typ.Iterable[typ.Mapping[str, typ.Any]]
) -> list[str]:
    """Load every template the descriptors name and describe the failures."""
    problems: list[str] = []
    for name in sorted({str(item["template"]) for item in descriptors}):
        try:
            env.get_template(name)
        except TemplateNotFound:
            problems.append(f"template {name!r} not found")
        except TemplateSyntaxError as exc:
            problems.append(f"template {name!r} line {exc.lineno}: {exc.message}")
    return problems


__all__ = ["build_environment", "find_template_problems"]
