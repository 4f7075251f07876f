"""Load a site definition from YAML without executing any code.

The document mirrors the capabilities of a script backend, one top-level
section per capability::

    config:
      - {format: toml, from: blog.toml, var_name: blog}
    pages:
      index:
        template: index.html
        var_name: posts
        from: posts/*.md
      "{{ post.slug }}":
        template_map: post.html
        var_name: post
        from: posts/*.md
        data: {format: jinja2}
    widgets:
      aside: {template: aside.html}
    assets:
      general: {from: "assets/**", to: "site/"}

Keys of a page entry other than ``template``/``template_map``, ``var_name``,
``from`` and ``data`` are inline page data; ``data`` wins when both set one.

Each section is turned into an entry point returning the same raw tuples a
script would, so both backends share one set of normalizers. A missing
section falls back to the default of that capability. A section of the wrong
shape raises the normalizers' error type when its entry point is called.
"""

from __future__ import annotations

import collections.abc as cabc
import types
import typing as typ
from pathlib import Path

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from lambdapad.descriptors import (
    InvalidConfigKindError,
    UnknownAssetDataError,
    UnknownPageDataError,
)

from .base import CapabilityBackend
from .script import Diagnostic, report_failure


PAGE_ENTRY_KEYS = frozenset({"template", "template_map", "var_name", "from", "data"})
ASSET_KEYS = frozenset({"from", "to"})
CONFIG_KEYS = frozenset({"format", "from", "var_name"})


def _config_entry(entry: object) -> object:
    """Turn ``{format, from, var_name}`` into the raw config tuple."""
    if not isinstance(entry, cabc.Mapping):
        return entry
    unknown = sorted(str(key) for key in entry if key not in CONFIG_KEYS)
    if unknown:
        msg = f"config source unknown: unexpected keys {unknown} in {dict(entry)!r}"
        raise InvalidConfigKindError(msg)
    raw = (entry.get("format"), entry.get("from"))
    var_name = entry.get("var_name")
    return raw if var_name is None else (var_name, raw)


def _page_entry(uri: object, entry: object) -> object:
    """Turn a page mapping into ``(uri, (kind, template, var_spec, data))``.

    Keys other than ``template``/``template_map``, ``var_name``, ``from`` and
    ``data`` are page data written inline; they are merged under ``data``.
    """
    if not isinstance(entry, cabc.Mapping):
        return (uri, entry)
    if "template" in entry and "template_map" in entry:
        msg = f"page data unknown: {uri!r} sets both 'template' and 'template_map'"
        raise UnknownPageDataError(msg)
    if "template" in entry:
        kind, template = "template", entry["template"]
    elif "template_map" in entry:
        kind, template = "template_map", entry["template_map"]
    else:
        return (uri, dict(entry))
    data = entry.get("data") or {}
    if not isinstance(data, cabc.Mapping):
        msg = f"page data unknown: 'data' of {uri!r} must be a mapping, got {data!r}"
        raise UnknownPageDataError(msg)
    var_spec = None
    if "var_name" in entry or "from" in entry:
        var_spec = (entry.get("var_name", "page"), entry.get("from"))
    inline = {key: value for key, value in entry.items() if key not in PAGE_ENTRY_KEYS}
    return (uri, (kind, template, var_spec, {**inline, **data}))


def _asset_entry(name: object, group: object) -> object:
    """Turn ``{from, to}`` into ``(name, (from, to))``."""
    if not isinstance(group, cabc.Mapping) or set(group) != ASSET_KEYS:
        msg = (
            f"asset data unknown: {name!r} must map exactly 'from' and 'to', "
            f"got {group!r}"
        )
        raise UnknownAssetDataError(msg)
    return (name, (group["from"], group["to"]))


def _section_items(
    name: str, section: object, error: type[ValueError]
) -> list[tuple[object, object]]:
    if section is None:
        return []
    if not isinstance(section, cabc.Mapping):
        msg = f"{name} section must be a mapping of names to entries, got {section!r}"
        raise error(msg)
    return list(section.items())


def _config_entry_point(section: object) -> cabc.Callable[[object], list[object]]:
    def config(_args: object) -> list[object]:
        if section is None:
            return []
        if not isinstance(section, list):
            msg = f"config section must be a list of sources, got {section!r}"
            raise InvalidConfigKindError(msg)
        return [_config_entry(entry) for entry in section]

    return config


def _page_entry_point(
    name: str, section: object
) -> cabc.Callable[[object], list[object]]:
    def pages(_config: object) -> list[object]:
        return [
            _page_entry(key, value)
            for key, value in _section_items(name, section, UnknownPageDataError)
        ]

    return pages


def _assets_entry_point(section: object) -> cabc.Callable[[object], list[object]]:
    def assets(_config: object) -> list[object]:
        return [
            _asset_entry(key, value)
            for key, value in _section_items("assets", section, UnknownAssetDataError)
        ]

    return assets


def build_entry_points(document: cabc.Mapping[str, typ.Any]) -> types.SimpleNamespace:
    """Build one entry point per section present in ``document``.

    Sections are decoded when their entry point is called, so a malformed
    section fails with the same error types a script backend's output would.
    """
    entry_points = types.SimpleNamespace()
    if "config" in document:
        entry_points.config = _config_entry_point(document["config"])
    for name in ("pages", "widgets"):
        if name in document:
            setattr(entry_points, name, _page_entry_point(name, document[name]))
    if "assets" in document:
        entry_points.assets = _assets_entry_point(document["assets"])
    return entry_points


class DeclarativeBackend(CapabilityBackend):
    """Backend read from a YAML site definition."""

    kind = "declarative"

    def __init__(self, path: Path, document: cabc.Mapping[str, typ.Any]) -> None:
        super().__init__(path, build_entry_points(document))
        self.document = document

    @classmethod
    def load(cls, path: Path) -> DeclarativeBackend:
        """Parse ``path`` and return a backend for it.

        Raises
        ------
        SystemExit
            When the file cannot be read or is not a YAML mapping.
        """
        path = Path(path)
        loader = YAML(typ="safe")
        loader.version = (1, 2)
        try:
            with path.open("r", encoding="utf-8") as handle:
                loaded = loader.load(handle) or {}
        except YAMLError as exc:
            mark = getattr(exc, "problem_mark", None)
            error = Diagnostic(
                str(path),
                mark.line + 1 if mark else None,
                mark.column + 1 if mark else None,
                type(exc).__name__,
                str(exc),
            )
            report_failure([], [error])
            raise SystemExit(1) from exc
        except OSError as exc:
            report_failure(
                [], [Diagnostic(str(path), None, None, type(exc).__name__, str(exc))]
            )
            raise SystemExit(1) from exc
        if not isinstance(loaded, dict):
            error = Diagnostic(
                str(path), None, None, "TypeError", "site definition must be a mapping"
            )
            report_failure([], [error])
            raise SystemExit(1)
        return cls(path, loaded)


__all__ = ["DeclarativeBackend", "build_entry_points"]
