"""Configuration pipeline of the lambdapad static website creator.

A site is described by a backend: a Python ``index.py`` compiled on the fly
or a YAML site definition. This package loads the backend, normalizes the
config sources, pages, widgets, and assets it declares, and provides the
Jinja2 ``{% widget %}`` tag used while rendering.

Exports
-------
- ``app``: Cyclopts application behind the ``lpad`` command.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from lambdapad import main
>>> main()  # doctest: +SKIP
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
