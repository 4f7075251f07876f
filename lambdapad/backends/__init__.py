"""Pluggable site-definition backends.

The functions below are the pipeline's view of a backend: each takes the
handle returned by :func:`compile_backend` (or held by a
:class:`BackendRegistry`) and returns normalized descriptors.

Examples
--------
>>> from pathlib import Path
>>> from lambdapad import backends
>>> handle = backends.compile_backend(Path("site/index.py"))  # doctest: +SKIP
>>> sources = backends.get_configs(handle, [])  # doctest: +SKIP
>>> pages = backends.get_pages(handle, {"blog": {}})  # doctest: +SKIP
"""

from __future__ import annotations

import collections.abc as cabc
import typing as typ

from lambdapad._constants import VALID_CONFIG_FORMATS

from .base import (
    Backend,
    BackendError,
    CapabilityBackend,
    MissingPagesError,
    accepts_arity,
    call_capability,
)
from .declarative import DeclarativeBackend
from .registry import BackendRegistry, compile_backend
from .script import ScriptBackend

if typ.TYPE_CHECKING:
    from lambdapad.descriptors import AssetDescriptor, ConfigSource, PageDescriptor

T = typ.TypeVar("T")


def get_configs(
    handle: Backend,
    rawargs: cabc.Sequence[str],
    *,
    valid_formats: cabc.Collection[str] = VALID_CONFIG_FORMATS,
) -> list[ConfigSource]:
    return handle.get_configs(rawargs, valid_formats=valid_formats)


def get_pages(handle: Backend, config: typ.Any) -> dict[str, PageDescriptor]:
    return handle.get_pages(config)


def get_widgets(handle: Backend, config: typ.Any) -> dict[str, PageDescriptor]:
    return handle.get_widgets(config)


def get_assets(handle: Backend, config: typ.Any) -> dict[str, AssetDescriptor]:
    return handle.get_assets(config)


def apply_transform(handle: Backend, items: T) -> T:
    return handle.apply_transform(items)


def get_checks(handle: Backend) -> list[typ.Any]:
    return handle.get_checks()


__all__ = [
    "Backend",
    "BackendError",
    "BackendRegistry",
    "CapabilityBackend",
    "DeclarativeBackend",
    "MissingPagesError",
    "ScriptBackend",
    "accepts_arity",
    "apply_transform",
    "call_capability",
    "compile_backend",
    "get_assets",
    "get_checks",
    "get_configs",
    "get_pages",
    "get_widgets",
]
