"""Resolve config sources into the site configuration handed to backends."""

from __future__ import annotations

import collections.abc as cabc
import typing as typ
from pathlib import Path

import tomlkit
from ruamel.yaml import YAML

from lambdapad.descriptors import ConfigSource


class SiteConfigError(ValueError):
    """Raised when a config source cannot be turned into site configuration."""


def _load_yaml(path: Path) -> object:
    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        return loader.load(handle) or {}


def _load_toml(path: Path) -> object:
    return tomlkit.parse(path.read_text(encoding="utf-8")).unwrap()


READERS: dict[str, cabc.Callable[[Path], object]] = {
    "yaml": _load_yaml,
    "toml": _load_toml,
}


def read_config_source(source: ConfigSource, *, base_dir: Path) -> dict[str, typ.Any]:
    """Read one config source relative to ``base_dir``.

    Raises
    ------
    FileNotFoundError
        If the file does not exist.
    SiteConfigError
        If no reader handles the format or the document is not a mapping.
    """
    path = base_dir / source.from_
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)
    reader = READERS.get(source.format)
    if reader is None:
        msg = f"No reader for configuration format {source.format!r}."
        raise SiteConfigError(msg)
    loaded = reader(path)
    if not isinstance(loaded, dict):
        msg = f"Top-level structure of '{path}' must be a mapping."
        raise SiteConfigError(msg)
    return dict(loaded)


def load_site_config(
    sources: cabc.Iterable[ConfigSource], *, base_dir: Path
) -> dict[str, typ.Any]:
    """Merge every source into one site configuration mapping.

    Sources without a ``var_name`` are merged into the top level in order;
    later sources win. A source with a ``var_name`` is stored under that key.
    """
    config: dict[str, typ.Any] = {}
    for source in sources:
        document = read_config_source(source, base_dir=base_dir)
        if source.var_name is None:
            config.update(document)
        else:
            config[source.var_name] = document
    return config


__all__ = ["READERS", "SiteConfigError", "load_site_config", "read_config_source"]
