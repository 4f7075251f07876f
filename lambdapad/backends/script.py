"""Compile and load a Python site definition on the fly.

The ``index.py`` of a site is an ordinary Python module whose top-level
functions are the backend capabilities::

    def config(args):
        return [("blog", ("toml", "blog.toml"))]

    def pages(config):
        return [
            ("/", ("template", "index.html", ("posts", "posts/*.md"), {})),
            ("/{{ post.slug }}", ("template_map", "post.html", ("post", "posts/*.md"), {})),
        ]

:meth:`ScriptBackend.compile` reads and compiles the file itself rather than
importing it, so no bytecode cache is written next to the site and compiler
warnings are reported on every run. Any module previously loaded from the
same file is purged first, which keeps repeated loads in a watch loop from
seeing stale definitions.
"""

from __future__ import annotations

import dataclasses as dc
import sys
import traceback
import types
import typing as typ
import warnings
from pathlib import Path

from lambdapad.reporting import (
    print_error,
    print_level2_error,
    print_level2_warn,
    print_separator,
)

from .base import CapabilityBackend

MODULE_PREFIX = "_lambdapad_backend_"


@dc.dataclass(slots=True, frozen=True)
class Diagnostic:
    """One compiler warning or error."""

    filename: str
    row: int | None
    col: int | None
    kind: str
    description: str


def module_name_for(path: Path) -> str:
    """Return the ``sys.modules`` key a backend loaded from ``path`` uses."""
    stem = "".join(char if char.isalnum() else "_" for char in path.stem)
    return f"{MODULE_PREFIX}{stem}"


def purge_module(name: str) -> None:
    """Drop a previously loaded backend module from the process."""
    sys.modules.pop(name, None)


def report_warnings(diagnostics: typ.Iterable[Diagnostic]) -> None:
    """Print every warning as a level-2 line."""
    for warn in diagnostics:
        print_level2_warn(warn.filename, warn.row, warn.kind, warn.description)


def report_failure(
    warns: typ.Sequence[Diagnostic], errors: typ.Sequence[Diagnostic]
) -> None:
    """Print the separator, the warnings, and the errors grouped per file."""
    print_separator()
    report_warnings(warns)
    by_file: dict[str, list[Diagnostic]] = {}
    for error in errors:
        by_file.setdefault(error.filename, []).append(error)
    for filename, lines in by_file.items():
        print_error(f"Found {len(lines)} error(s) in {filename}")
        for line in lines:
            print_level2_error(
                filename, line.row, line.col, line.kind, line.description
            )


def _warning_diagnostic(caught: warnings.WarningMessage) -> Diagnostic:
    return Diagnostic(
        filename=str(caught.filename),
        row=caught.lineno,
        col=None,
        kind=caught.category.__name__,
        description=str(caught.message),
    )


def _syntax_diagnostic(exc: SyntaxError, path: Path) -> Diagnostic:
    return Diagnostic(
        filename=exc.filename or str(path),
        row=exc.lineno,
        col=exc.offset,
        kind=type(exc).__name__,
        description=exc.msg,
    )


def _runtime_diagnostic(exc: BaseException, path: Path) -> Diagnostic:
    frames = [
        frame
        for frame in traceback.extract_tb(exc.__traceback__)
        if frame.filename == str(path)
    ]
    frame = frames[-1] if frames else None
    return Diagnostic(
        filename=str(path),
        row=frame.lineno if frame else None,
        col=frame.colno if frame else None,
        kind=type(exc).__name__,
        description=str(exc),
    )


def _execute(name: str, path: Path, code: types.CodeType) -> types.ModuleType:
    module = types.ModuleType(name)
    module.__file__ = str(path)
    sys.modules[name] = module
    try:
        exec(code, module.__dict__)  # noqa: S102 - the site definition is user code
    except BaseException:
        purge_module(name)
        raise
    return module


class ScriptBackend(CapabilityBackend):
    """Backend whose capabilities are the top-level functions of a Python file."""

    kind = "script"

    def __init__(self, path: Path, module: types.ModuleType) -> None:
        super().__init__(path, module)
        self.module = module

    @classmethod
    def compile(cls, path: Path) -> ScriptBackend:
        """Compile ``path`` and return a backend wrapping the loaded module.

        Warnings are printed and do not stop the load. A file that cannot be
        read, compiled, or executed has its diagnostics printed and ends the
        process with exit status 1.

        Raises
        ------
        SystemExit
            When the script has errors.
        """
        path = Path(path)
        name = module_name_for(path)
        purge_module(name)
        errors: list[Diagnostic] = []
        module: types.ModuleType | None = None
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            try:
                source = path.read_text(encoding="utf-8")
                code = compile(source, str(path), "exec", dont_inherit=True)
                module = _execute(name, path, code)
            except SyntaxError as exc:
                errors.append(_syntax_diagnostic(exc, path))
            except OSError as exc:
                errors.append(
                    Diagnostic(str(path), None, None, type(exc).__name__, str(exc))
                )
            except Exception as exc:  # noqa: BLE001 - reported, then the process exits
                errors.append(_runtime_diagnostic(exc, path))
        warns = [_warning_diagnostic(item) for item in caught]

        if errors or module is None:
            report_failure(warns, errors)
            raise SystemExit(1)

        report_warnings(warns)
        return cls(path, module)

    def purge(self) -> None:
        """Remove the loaded module from ``sys.modules``."""
        purge_module(self.module.__name__)


__all__ = [
    "Diagnostic",
    "MODULE_PREFIX",
    "ScriptBackend",
    "module_name_for",
    "purge_module",
    "report_failure",
    "report_warnings",
]
