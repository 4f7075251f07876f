"""Caller-owned holder for the currently loaded backend."""

from __future__ import annotations

import collections.abc as cabc
from pathlib import Path

from .base import Backend, BackendError
from .declarative import DeclarativeBackend
from .script import ScriptBackend

SCRIPT_SUFFIXES = frozenset({".py"})
DECLARATIVE_SUFFIXES = frozenset({".yaml", ".yml"})


def compile_backend(path: Path) -> Backend:
    """Load the backend at ``path``, picking the variant from its suffix.

    Raises
    ------
    BackendError
        If the suffix names no known backend variant.
    SystemExit
        If the backend has errors (see :meth:`ScriptBackend.compile`).
    """
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix in SCRIPT_SUFFIXES:
        return ScriptBackend.compile(path)
    if suffix in DECLARATIVE_SUFFIXES:
        return DeclarativeBackend.load(path)
    known = ", ".join(sorted(SCRIPT_SUFFIXES | DECLARATIVE_SUFFIXES))
    msg = f"Unsupported backend file '{path}'; expected one of: {known}"
    raise BackendError(msg)


class BackendRegistry:
    """Track the backend of one pipeline run, or one watch loop.

    The previous backend is purged before every load so a reloaded script
    never sees definitions left over from an earlier version of itself.

    Examples
    --------
    >>> registry = BackendRegistry()
    >>> handle = registry.load(Path("index.py"))  # doctest: +SKIP
    >>> handle = registry.reload()  # doctest: +SKIP
    """

    def __init__(
        self, loader: cabc.Callable[[Path], Backend] = compile_backend
    ) -> None:
        self._loader = loader
        self._handle: Backend | None = None
        self._path: Path | None = None

    @property
    def handle(self) -> Backend:
        """Return the loaded backend.

        Raises
        ------
        BackendError
            If nothing has been loaded.
        """
        if self._handle is None:
            msg = "No backend has been loaded."
            raise BackendError(msg)
        return self._handle

    @property
    def path(self) -> Path | None:
        return self._path

    @property
    def loaded(self) -> bool:
        return self._handle is not None

    def load(self, path: Path) -> Backend:
        """Purge the current backend, then load ``path``."""
        self.clear()
        handle = self._loader(Path(path))
        self._handle = handle
        self._path = Path(path)
        return handle

    def reload(self, path: Path | None = None) -> Backend:
        """Load ``path``, or the last loaded path, again."""
        target = path if path is not None else self._path
        if target is None:
            msg = "No backend path to reload."
            raise BackendError(msg)
        return self.load(target)

    def clear(self) -> None:
        """Purge the current backend without loading another."""
        if self._handle is not None:
            self._handle.purge()
        self._handle = None


__all__ = ["BackendRegistry", "compile_backend"]
