"""Common literal values used across lambdapad.

These constants keep default formats, filenames, and descriptor defaults
centralized so backends, normalizers, and tests can import the same values
without drifting. Intended for internal use within the lambdapad package.

Examples
--------
>>> from lambdapad import _constants
>>> _constants.DEFAULT_CONFIG_FORMAT in _constants.VALID_CONFIG_FORMATS
True
>>> _constants.DEFAULT_ASSETS["general"]["to"]
'site/'
"""

from __future__ import annotations

import types

VALID_CONFIG_FORMATS: tuple[str, ...] = ("yaml", "toml")
DEFAULT_CONFIG_FORMAT = "yaml"
DEFAULT_CONFIG_FILE = "lambdapad.yaml"

DEFAULT_TEMPLATE_FORMAT = "jinja2"
DEFAULT_INDEX_FILE = "index.py"

DEFAULT_ASSET_GROUP = "general"
DEFAULT_ASSETS = types.MappingProxyType(
    {DEFAULT_ASSET_GROUP: types.MappingProxyType({"from": "assets/**", "to": "site/"})}
)

PAGE_DEFAULTS = types.MappingProxyType(
    {
        "uri_type": "dir",
        "index": False,
        "paginated": False,
        "format": DEFAULT_TEMPLATE_FORMAT,
        "headers": True,
        "excerpt": True,
        "from": None,
        "var_name": "page",
        "env": types.MappingProxyType({}),
    }
)

ROUTING_ONLY_FIELDS: tuple[str, ...] = ("uri", "uri_type", "paginated")
