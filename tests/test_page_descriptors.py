"""Unit tests for page descriptor normalization.

These tests exercise :func:`translate_page_data` and :func:`translate_pages`
across the ``template`` and ``template_map`` shapes, with and without an
explicit ``(var_name, from)`` data source, and check the default-merge
order: defaults, then backend data, then the shape's own overrides.

Usage
-----
Run ``pytest tests/test_page_descriptors.py -v``.
"""

from __future__ import annotations

import pytest

from lambdapad.descriptors import (
    DuplicatePageError,
    TemplateMapPage,
    TemplatePage,
    UnknownPageDataError,
    normalize_from,
    translate_page_data,
    translate_pages,
)

EXPECTED_KEYS = {
    "uri",
    "uri_type",
    "index",
    "paginated",
    "format",
    "headers",
    "excerpt",
    "from",
    "var_name",
    "env",
    "template",
}


def test_template_without_source_uses_defaults() -> None:
    uri, page = translate_page_data(("/", ("template", "index.html", None, {})))
    assert uri == "/"
    assert page == {
        "uri": "/",
        "uri_type": "dir",
        "index": True,
        "paginated": False,
        "format": "jinja2",
        "headers": True,
        "excerpt": True,
        "from": None,
        "var_name": "page",
        "env": {},
        "template": "index.html",
    }


def test_template_with_source_sets_var_name_and_from() -> None:
    _, page = translate_page_data(
        ("/", ("template", "index.html", ("posts", "posts/**/*.md"), {}))
    )
    assert page["index"] is True
    assert page["var_name"] == "posts"
    assert page["from"] == "posts/**/*.md"


def test_template_map_does_not_force_index() -> None:
    """``template_map`` pages keep the default ``index = False``."""
    _, page = translate_page_data(
        ("/{{ post.id }}", ("template_map", "post.html", ("post", "posts/*.md"), {}))
    )
    assert page["index"] is False, "template_map must not force an index page"
    assert page["var_name"] == "post"
    assert set(page) == EXPECTED_KEYS


def test_template_map_keeps_index_from_backend_data() -> None:
    _, page = translate_page_data(
        ("/tags", ("template_map", "tag.html", None, {"index": True}))
    )
    assert page["index"] is True


def test_template_forces_index_over_backend_data() -> None:
    _, page = translate_page_data(("/", ("template", "index.html", None, {"index": False})))
    assert page["index"] is True


def test_backend_data_overrides_defaults_but_not_shape_fields() -> None:
    data = {"paginated": True, "uri": "/ignored", "template": "ignored.html", "extra": 1}
    _, page = translate_page_data(("/blog", ("template_map", "post.html", None, data)))
    assert page["paginated"] is True
    assert page["extra"] == 1
    assert page["uri"] == "/blog", "the entry uri must win over backend data"
    assert page["template"] == "post.html"


def test_tagged_variants_match_tuple_form() -> None:
    from_tuple = translate_page_data(
        ("/", ("template", "index.html", ("posts", "posts/*.md"), {"headers": False}))
    )
    from_variant = translate_page_data(
        ("/", TemplatePage("index.html", ("posts", "posts/*.md"), {"headers": False}))
    )
    assert from_tuple == from_variant
    _, mapped = translate_page_data(("/p", TemplateMapPage("post.html")))
    assert mapped["index"] is False


def test_translation_is_pure() -> None:
    """Identical raw input gives equal descriptors that share no mappings."""
    env = {"site": "demo"}
    raw = ("/", ("template", "index.html", None, {"env": env}))
    _, first = translate_page_data(raw)
    _, second = translate_page_data(raw)
    assert first == second
    first["env"]["site"] = "changed"
    assert second["env"] == {"site": "demo"}
    assert env == {"site": "demo"}, "backend data must not be mutated"


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (None, None),
        ("file.md", "file.md"),
        (b"file.md", "file.md"),
        ([ord(char) for char in "file.md"], "file.md"),
    ],
)
def test_normalize_from_text_values(value: object, expected: object) -> None:
    assert normalize_from(value) == expected


def test_normalize_from_passes_other_values_through() -> None:
    placeholder = {"sources": ["a/*.md", "b/*.md"]}
    assert normalize_from(placeholder) is placeholder
    assert normalize_from(42) == 42


def test_normalize_from_keeps_lists_of_paths() -> None:
    assert normalize_from([]) == [], "an empty list is not a character sequence"
    paths = ["a.md", "b.md"]
    assert normalize_from(paths) is paths, "path lists are not joined"


def test_invalid_utf8_source_is_escaped_not_rejected() -> None:
    assert normalize_from(b"\xff.md") == "\udcff.md"
    _, page = translate_page_data(
        ("/", ("template", "index.html", ("page", b"posts/\xff.md"), {}))
    )
    assert page["from"] == "posts/\udcff.md"
    assert page["from"].encode("utf-8", "surrogateescape") == b"posts/\xff.md", (
        "the original bytes must be recoverable"
    )


@pytest.mark.parametrize(
    "raw",
    [
        ("/", ("page", "index.html", None, {})),
        ("/", ("template", "index.html", None)),
        ("/", ("template", "index.html", "posts", {})),
        ("/", "index.html"),
        "index.html",
    ],
)
def test_unknown_shapes_are_fatal(raw: object) -> None:
    with pytest.raises(UnknownPageDataError, match="page data unknown"):
        translate_page_data(raw)


def test_translate_pages_keys_by_uri_in_order() -> None:
    pages = translate_pages(
        [
            ("/", ("template", "index.html", None, {})),
            ("/about", ("template", "about.html", None, {})),
        ]
    )
    assert list(pages) == ["/", "/about"]


def test_translate_pages_rejects_duplicate_uris() -> None:
    with pytest.raises(DuplicatePageError):
        translate_pages(
            [
                ("/", ("template", "index.html", None, {})),
                ("/", ("template", "other.html", None, {})),
            ]
        )
