"""Run a loaded backend through the configuration pipeline.

The steps are: ask the backend for its config sources, read them into the
site configuration, then ask for pages, widgets, and assets against that
configuration and let the backend transform the page collection. Only the
pages go through the transform; widgets and assets are returned as
normalized. The result is a :class:`SitePlan`, which is everything the
rendering stage needs.
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import typing as typ

from lambdapad import backends
from lambdapad._constants import VALID_CONFIG_FORMATS
from lambdapad.config import load_site_config

if typ.TYPE_CHECKING:
    from lambdapad.backends import Backend
    from lambdapad.descriptors import AssetDescriptor, ConfigSource, PageDescriptor


@dc.dataclass(slots=True)
class SitePlan:
    """Normalized output of one pipeline run."""

    sources: list[ConfigSource]
    config: dict[str, typ.Any]
    pages: dict[str, PageDescriptor]
    widgets: dict[str, PageDescriptor]
    assets: dict[str, AssetDescriptor]
    checks: list[typ.Any]


def build_site_plan(
    handle: Backend,
    rawargs: cabc.Sequence[str] = (),
    *,
    valid_formats: cabc.Collection[str] = VALID_CONFIG_FORMATS,
) -> SitePlan:
    """Normalize everything ``handle`` describes into a :class:`SitePlan`."""
    sources = backends.get_configs(handle, rawargs, valid_formats=valid_formats)
    config = load_site_config(sources, base_dir=handle.base_dir)
    pages = backends.get_pages(handle, config)
    widgets = backends.get_widgets(handle, config)
    assets = backends.get_assets(handle, config)
    return SitePlan(
        sources=sources,
        config=config,
        pages=backends.apply_transform(handle, pages),
        widgets=widgets,
        assets=assets,
        checks=backends.get_checks(handle),
    )


__all__ = ["SitePlan", "build_site_plan"]
