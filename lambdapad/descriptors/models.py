"""Typed records exchanged between backends and the rendering pipeline."""

from __future__ import annotations

import dataclasses as dc
import typing as typ


class InvalidConfigKindError(ValueError):
    """Raised when a config source names a format outside the valid set."""


class UnknownPageDataError(ValueError):
    """Raised when a backend returns a page or widget entry of unknown shape."""


class UnknownAssetDataError(ValueError):
    """Raised when a backend returns an asset entry that is not ``(name, (from, to))``."""


class DuplicatePageError(ValueError):
    """Raised when two pages resolve to the same uri."""


@dc.dataclass(slots=True, frozen=True)
class ConfigSource:
    """A configuration file the site configuration is resolved from.

    Attributes
    ----------
    format : str
        Parser identifier; always one of the valid config formats.
    from_ : str
        Path of the file, relative to the backend's directory.
    var_name : str or None
        Key the parsed document is stored under, or ``None`` to merge it
        into the top level of the site configuration.
    """

    format: str
    from_: str
    var_name: str | None = None


@dc.dataclass(slots=True, frozen=True)
class TemplatePage:
    """Render ``template`` once, as an index page, for the whole data source."""

    template: str
    var_spec: tuple[str, typ.Any] | None = None
    data: typ.Mapping[str, typ.Any] = dc.field(default_factory=dict)


@dc.dataclass(slots=True, frozen=True)
class TemplateMapPage:
    """Render ``template`` once per item of the data source."""

    template: str
    var_spec: tuple[str, typ.Any] | None = None
    data: typ.Mapping[str, typ.Any] = dc.field(default_factory=dict)


PageSpec = TemplatePage | TemplateMapPage

PAGE_KINDS: dict[str, type[TemplatePage] | type[TemplateMapPage]] = {
    "template": TemplatePage,
    "template_map": TemplateMapPage,
}


__all__ = [
    "PAGE_KINDS",
    "ConfigSource",
    "DuplicatePageError",
    "InvalidConfigKindError",
    "PageSpec",
    "TemplateMapPage",
    "TemplatePage",
    "UnknownAssetDataError",
    "UnknownPageDataError",
]
