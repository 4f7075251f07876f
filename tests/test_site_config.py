"""Tests for resolving config sources into the site configuration."""

from __future__ import annotations

from pathlib import Path

import pytest

from lambdapad.config import SiteConfigError, load_site_config
from lambdapad.descriptors import ConfigSource


def _write(path: Path, content: str) -> Path:
    path.write_text(content.strip() + "\n", encoding="utf-8")
    return path


def test_unkeyed_sources_merge_into_top_level(tmp_path: Path) -> None:
    _write(tmp_path / "lambdapad.yaml", "title: Demo\nauthor: Ada\n")
    _write(tmp_path / "extra.toml", 'title = "Override"\n')
    config = load_site_config(
        [ConfigSource("yaml", "lambdapad.yaml"), ConfigSource("toml", "extra.toml")],
        base_dir=tmp_path,
    )
    assert config == {"title": "Override", "author": "Ada"}


def test_keyed_source_is_nested(tmp_path: Path) -> None:
    _write(tmp_path / "blog.toml", '[feed]\nitems = 10\n')
    config = load_site_config([ConfigSource("toml", "blog.toml", "blog")], base_dir=tmp_path)
    assert config == {"blog": {"feed": {"items": 10}}}
    assert type(config["blog"]["feed"]) is dict, "tomlkit containers must be unwrapped"


def test_missing_file_is_reported(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError, match="lambdapad.yaml"):
        load_site_config([ConfigSource("yaml", "lambdapad.yaml")], base_dir=tmp_path)


def test_non_mapping_document_is_rejected(tmp_path: Path) -> None:
    _write(tmp_path / "list.yaml", "- a\n- b\n")
    with pytest.raises(SiteConfigError, match="must be a mapping"):
        load_site_config([ConfigSource("yaml", "list.yaml")], base_dir=tmp_path)


def test_format_without_reader_is_rejected(tmp_path: Path) -> None:
    _write(tmp_path / "site.ini", "[site]\n")
    with pytest.raises(SiteConfigError, match="No reader"):
        load_site_config([ConfigSource("ini", "site.ini")], base_dir=tmp_path)
