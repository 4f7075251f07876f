"""Tests for :func:`lambdapad.pipeline.build_site_plan`.

The plan is built from an in-memory backend so each capability's input can
be recorded. The transform hook sees the normalized page mapping only;
widgets and assets reach the plan as their normalizers returned them.

Usage
-----
Run ``pytest tests/test_pipeline.py -v``.
"""

from __future__ import annotations

import typing as typ
from pathlib import Path
from types import SimpleNamespace

from lambdapad.backends import CapabilityBackend
from lambdapad.pipeline import build_site_plan


def test_transform_receives_pages_only(tmp_path: Path) -> None:
    seen: list[typ.Any] = []

    def transform(items: dict[str, dict[str, typ.Any]]) -> dict[str, typ.Any]:
        seen.append(items)
        return {uri: dict(page, draft=False) for uri, page in items.items()}

    handle = CapabilityBackend(
        tmp_path / "index.py",
        SimpleNamespace(
            config=lambda args: [],
            pages=lambda config: [("/", ("template", "index.html", None, {}))],
            widgets=lambda config: [("aside", ("template", "aside.html", None, {}))],
            assets=lambda config: [("css", ("static/*.css", "site/css/"))],
            transform=transform,
        ),
    )
    plan = build_site_plan(handle)
    assert len(seen) == 1, "the transform runs once per plan"
    assert list(seen[0]) == ["/"], "only page uris are handed to the transform"
    assert plan.pages["/"]["draft"] is False
    assert "draft" not in plan.widgets["aside"], "widgets bypass the transform"
    assert plan.assets == {"css": {"from": "static/*.css", "to": "site/css/"}}


def test_rawargs_reach_config_entry_point(tmp_path: Path) -> None:
    received: list[list[str]] = []

    def config(args: list[str]) -> list[object]:
        received.append(args)
        return []

    handle = CapabilityBackend(
        tmp_path / "index.py",
        SimpleNamespace(config=config, pages=lambda config: []),
    )
    plan = build_site_plan(handle, ["--draft", "posts"])
    assert received == [["--draft", "posts"]]
    assert plan.config == {}
    assert plan.checks == []
