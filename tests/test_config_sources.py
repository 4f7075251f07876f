"""Unit tests for config source normalization.

These tests cover :func:`lambdapad.descriptors.translate_config`, which turns
the ``(key, (kind, file))`` and ``(kind, file)`` tuples returned by a
backend's ``config`` entry point into :class:`ConfigSource` records.

Usage
-----
Run ``pytest tests/test_config_sources.py -v``. No fixtures are required.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from lambdapad.descriptors import (
    ConfigSource,
    InvalidConfigKindError,
    translate_config,
    translate_configs,
)


@pytest.mark.parametrize("kind", ["yaml", "toml"])
def test_unkeyed_source_keeps_kind_and_omits_var_name(kind: str) -> None:
    """A ``(kind, file)`` tuple keeps its kind and has no var_name."""
    source = translate_config((kind, "site.conf"))
    assert source == ConfigSource(format=kind, from_="site.conf", var_name=None), (
        "Expected the kind to be preserved and var_name left unset"
    )


def test_keyed_source_sets_var_name() -> None:
    """A ``(key, (kind, file))`` tuple stores the key as var_name."""
    source = translate_config(("blog", ("toml", "blog.toml")))
    assert source.var_name == "blog"
    assert source.format == "toml"
    assert source.from_ == "blog.toml"


@pytest.mark.parametrize(
    "file",
    [Path("conf/blog.toml"), b"conf/blog.toml", [ord(char) for char in "conf/blog.toml"]],
)
def test_file_is_coerced_to_string(file: object) -> None:
    """Paths, bytes and code-point lists all become ``str``."""
    source = translate_config(("toml", file))
    assert source.from_ == "conf/blog.toml", f"Unexpected from_ for {file!r}"


@pytest.mark.parametrize(
    "raw", [("ini", "site.ini"), ("blog", ("json", "blog.json"))]
)
def test_unknown_kind_lists_valid_kinds(raw: object) -> None:
    """A kind outside the valid set fails and names the valid kinds."""
    with pytest.raises(InvalidConfigKindError) as excinfo:
        translate_config(raw)
    message = str(excinfo.value)
    assert "'yaml'" in message
    assert "'toml'" in message


def test_valid_formats_are_injectable() -> None:
    """Callers can replace the set of valid kinds."""
    source = translate_config(("ini", "site.ini"), valid_formats={"ini"})
    assert source.format == "ini"
    with pytest.raises(InvalidConfigKindError):
        translate_config(("toml", "site.toml"), valid_formats={"ini"})


def test_malformed_entry_is_rejected() -> None:
    """Values with neither accepted shape are rejected."""
    with pytest.raises(InvalidConfigKindError, match="config source unknown"):
        translate_config("toml")


def test_translate_configs_preserves_order() -> None:
    sources = translate_configs(
        [("yaml", "lambdapad.yaml"), ("blog", ("toml", "blog.toml"))]
    )
    assert [source.from_ for source in sources] == ["lambdapad.yaml", "blog.toml"]
