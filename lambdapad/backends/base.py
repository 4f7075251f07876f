"""Backend interface and optional-capability detection.

A backend is a loaded site definition. It may expose any of the capabilities
``config``, ``pages``, ``widgets`` and ``assets`` (plus the ``transform`` and
``checks`` hooks). :class:`Backend` implements every capability with its
documented fallback; :class:`CapabilityBackend` overrides them by looking up
entry points on a target object (a compiled module, a namespace built from a
YAML document) through :func:`call_capability`.
"""

from __future__ import annotations

import collections.abc as cabc
import functools
import inspect
import typing as typ
from pathlib import Path

from lambdapad._constants import (
    DEFAULT_CONFIG_FILE,
    DEFAULT_CONFIG_FORMAT,
    VALID_CONFIG_FORMATS,
)
from lambdapad.descriptors import (
    AssetDescriptor,
    ConfigSource,
    PageDescriptor,
    default_assets,
    translate_assets,
    translate_configs,
    translate_pages,
    translate_widgets,
)

T = typ.TypeVar("T")


class BackendError(RuntimeError):
    """Raised when a backend cannot be loaded or used."""


class MissingPagesError(BackendError):
    """Raised when a backend does not define the ``pages`` capability."""


def accepts_arity(func: cabc.Callable[..., typ.Any], arity: int) -> bool:
    """Return True when ``func`` can be called with ``arity`` positional args."""
    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError):
        return False
    try:
        signature.bind(*([None] * arity))
    except TypeError:
        return False
    return True


def call_capability(
    target: object,
    name: str,
    arity: int,
    args: cabc.Sequence[typ.Any],
    *,
    translate: cabc.Callable[[typ.Any], T],
    fallback: cabc.Callable[[], T],
) -> T:
    """Invoke the ``name`` entry point of ``target`` or fall back.

    The entry point is used only when it exists, is callable, and accepts
    exactly ``arity`` positional arguments. Its raw result is passed through
    ``translate``; otherwise ``fallback()`` supplies the value.
    """
    entry_point = getattr(target, name, None)
    if entry_point is None or not callable(entry_point):
        return fallback()
    if not accepts_arity(entry_point, arity):
        return fallback()
    return translate(entry_point(*args))


class Backend:
    """A site definition; every capability returns its default."""

    kind: typ.ClassVar[str] = "default"

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    @property
    def base_dir(self) -> Path:
        """Directory the backend's relative paths are resolved against."""
        return self.path.parent

    def get_configs(
        self,
        rawargs: cabc.Sequence[str],
        *,
        valid_formats: cabc.Collection[str] = VALID_CONFIG_FORMATS,
    ) -> list[ConfigSource]:
        """Return the config sources; defaults to ``lambdapad.yaml``."""
        return [ConfigSource(format=DEFAULT_CONFIG_FORMAT, from_=DEFAULT_CONFIG_FILE)]

    def get_pages(self, config: typ.Any) -> dict[str, PageDescriptor]:
        """Return the page descriptors keyed by uri.

        Raises
        ------
        MissingPagesError
            Always; a backend without pages cannot generate a site.
        """
        msg = f"pages is not defined in {self.path}"
        raise MissingPagesError(msg)

    def get_widgets(self, config: typ.Any) -> dict[str, PageDescriptor]:
        """Return the widget descriptors keyed by name; defaults to none."""
        return {}

    def get_assets(self, config: typ.Any) -> dict[str, AssetDescriptor]:
        """Return the asset groups; defaults to ``assets/**`` into ``site/``."""
        return default_assets()

    def apply_transform(self, items: T) -> T:
        """Post-process the page mapping; the default is the identity.

        The pipeline passes only the ``{uri: descriptor}`` pages. Widgets and
        assets are never handed to the transform.
        """
        return items

    def get_checks(self) -> list[typ.Any]:
        """Return backend-declared validation rules; defaults to none."""
        return []

    def purge(self) -> None:
        """Release whatever the backend loaded into the process."""

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.kind} {str(self.path)!r}>"


class CapabilityBackend(Backend):
    """A backend whose capabilities are entry points found on ``entry_points``."""

    def __init__(self, path: Path, entry_points: object) -> None:
        super().__init__(path)
        self.entry_points = entry_points

    def get_configs(
        self,
        rawargs: cabc.Sequence[str],
        *,
        valid_formats: cabc.Collection[str] = VALID_CONFIG_FORMATS,
    ) -> list[ConfigSource]:
        return call_capability(
            self.entry_points,
            "config",
            1,
            (list(rawargs),),
            translate=functools.partial(translate_configs, valid_formats=valid_formats),
            fallback=functools.partial(
                super().get_configs, rawargs, valid_formats=valid_formats
            ),
        )

    def get_pages(self, config: typ.Any) -> dict[str, PageDescriptor]:
        return call_capability(
            self.entry_points,
            "pages",
            1,
            (config,),
            translate=translate_pages,
            fallback=functools.partial(super().get_pages, config),
        )

    def get_widgets(self, config: typ.Any) -> dict[str, PageDescriptor]:
        return call_capability(
            self.entry_points,
            "widgets",
            1,
            (config,),
            translate=translate_widgets,
            fallback=functools.partial(super().get_widgets, config),
        )

    def get_assets(self, config: typ.Any) -> dict[str, AssetDescriptor]:
        return call_capability(
            self.entry_points,
            "assets",
            1,
            (config,),
            translate=translate_assets,
            fallback=functools.partial(super().get_assets, config),
        )

    def apply_transform(self, items: T) -> T:
        return call_capability(
            self.entry_points,
            "transform",
            1,
            (items,),
            translate=lambda transformed: transformed,
            fallback=functools.partial(super().apply_transform, items),
        )

    def get_checks(self) -> list[typ.Any]:
        return call_capability(
            self.entry_points,
            "checks",
            0,
            (),
            translate=list,
            fallback=super().get_checks,
        )


__all__ = [
    "Backend",
    "BackendError",
    "CapabilityBackend",
    "MissingPagesError",
    "accepts_arity",
    "call_capability",
]
