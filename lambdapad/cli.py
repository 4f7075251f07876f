"""Cyclopts CLI entrypoint for inspecting lambdapad site definitions.

The ``lpad`` console script loads a site's backend (``index.py`` or a YAML
site definition), resolves its configuration files, and either prints the
normalized pages, widgets, and assets (``lpad describe``) or verifies that
the definition is usable (``lpad check``). Positional arguments are handed to
the backend's ``config`` entry point in order. Arguments that start with a
dash must follow ``--`` so cyclopts does not parse them as options::

    lpad describe --index index.py -- --draft

Examples
--------
Describe the site in the current directory:

>>> from lambdapad.cli import app
>>> app(["describe"])  # doctest: +SKIP

Check a YAML site definition and its templates:

>>> app(["check", "--index", "site.yaml", "--templates", "templates"])  # doctest: +SKIP
"""

from __future__ import annotations

import collections.abc as cabc
import sys
import typing as typ
from pathlib import Path

from cyclopts import App, Parameter
from ruamel.yaml import YAML

from ._constants import DEFAULT_INDEX_FILE
from .backends import BackendRegistry
from .html import build_environment, find_template_problems
from .pipeline import build_site_plan
from .reporting import print_error, print_info

DEFAULT_INDEX = Path(DEFAULT_INDEX_FILE)

app = App(name="lpad", help="Static website creator.")


def _plain(value: object) -> object:
    """Convert descriptors into values the safe YAML dumper accepts."""
    match value:
        case cabc.Mapping():
            return {str(key): _plain(item) for key, item in value.items()}
        case list() | tuple():
            return [_plain(item) for item in value]
        case str() | int() | float() | bool() | None:
            return value
        case _:
            return repr(value)


@app.command(help="Print the normalized pages, widgets and assets of a site.")
def describe(
    *rawargs: str,
    index: typ.Annotated[
        Path, Parameter(help="Path to the site definition", env_var="LPAD_INDEX")
    ] = DEFAULT_INDEX,
) -> None:
    """Load the backend and dump its descriptors as YAML.

    Parameters
    ----------
    *rawargs : str
        Raw arguments passed to the backend's ``config`` entry point.
        Dash-prefixed arguments must come after ``--``.
    index : Path, optional
        Site definition to load; defaults to ``index.py`` and can be
        overridden with ``LPAD_INDEX``.
    """
    registry = BackendRegistry()
    plan = build_site_plan(registry.load(index), rawargs)
    dumper = YAML(typ="safe")
    dumper.default_flow_style = False
    dumper.dump(
        _plain(
            {
                "pages": plan.pages,
                "widgets": plan.widgets,
                "assets": plan.assets,
            }
        ),
        sys.stdout,
    )


@app.command(help="Verify that a site definition loads and its templates parse.")
def check(
    *rawargs: str,
    index: typ.Annotated[
        Path, Parameter(help="Path to the site definition", env_var="LPAD_INDEX")
    ] = DEFAULT_INDEX,
    templates: typ.Annotated[
        Path | None, Parameter(help="Directory holding the site templates")
    ] = None,
) -> None:
    """Load the backend, normalize everything, and report a summary.

    Raises
    ------
    SystemExit
        With status 1 when a referenced template is missing or invalid.
    """
    registry = BackendRegistry()
    plan = build_site_plan(registry.load(index), rawargs)
    print_info(
        f"{len(plan.pages)} page(s), {len(plan.widgets)} widget(s), "
        f"{len(plan.assets)} asset group(s), {len(plan.checks)} check(s)"
    )
    if templates is None:
        return
    env = build_environment(templates)
    problems = find_template_problems(
        env, [*plan.pages.values(), *plan.widgets.values()]
    )
    for problem in problems:
        print_error(problem)
    if problems:
        raise SystemExit(1)


def main() -> None:
    """Invoke the Cyclopts application that powers the ``lpad`` command."""
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
