"""Read the configuration files a backend names into a site configuration.

Each :class:`~lambdapad.descriptors.ConfigSource` points at a YAML or TOML
file. :func:`load_site_config` reads them in order and returns the merged
mapping that is passed to the backend's ``pages``, ``widgets`` and
``assets`` entry points.

Examples
--------
>>> from pathlib import Path
>>> from lambdapad.config import load_site_config
>>> from lambdapad.descriptors import ConfigSource
>>> sources = [ConfigSource("toml", "blog.toml", "blog")]
>>> load_site_config(sources, base_dir=Path("site"))  # doctest: +SKIP
{'blog': {'title': 'My blog'}}
"""

from .loader import READERS, SiteConfigError, load_site_config, read_config_source

__all__ = ["READERS", "SiteConfigError", "load_site_config", "read_config_source"]
