"""Translate raw backend output into canonical descriptors.

Backends hand back loosely shaped values: tuples, lists, byte strings, or
the :class:`~lambdapad.descriptors.models.TemplatePage` variants. The
functions here merge those values with the documented defaults and return
plain records the rendering pipeline can consume directly. None of them
perform I/O and all of them are pure: the same raw input always yields an
equal descriptor and no input mapping is ever shared with the output.

Examples
--------
>>> from lambdapad.descriptors.normalizers import translate_page_data
>>> uri, page = translate_page_data(("index", ("template", "index.html", None, {})))
>>> page["index"], page["template"], page["var_name"]
(True, 'index.html', 'page')
>>> uri, page = translate_page_data(
...     ("{{ post.id }}", ("template_map", "post.html", ("post", b"posts/*.md"), {}))
... )
>>> page["index"], page["from"]
(False, 'posts/*.md')
"""

from __future__ import annotations

import collections.abc as cabc
import copy
import typing as typ

from lambdapad._constants import (
    DEFAULT_ASSETS,
    PAGE_DEFAULTS,
    ROUTING_ONLY_FIELDS,
    VALID_CONFIG_FORMATS,
)

from .models import (
    PAGE_KINDS,
    ConfigSource,
    DuplicatePageError,
    InvalidConfigKindError,
    PageSpec,
    TemplateMapPage,
    TemplatePage,
    UnknownAssetDataError,
    UnknownPageDataError,
)

PageDescriptor = dict[str, typ.Any]
AssetDescriptor = dict[str, str]


def _is_char_sequence(value: object) -> bool:
    """Return True for a non-empty list or tuple made only of code points."""
    return (
        isinstance(value, list | tuple)
        and bool(value)
        and all(isinstance(item, int) and not isinstance(item, bool) for item in value)
    )


def _to_text(value: object) -> str:
    """Coerce a name, path, or character sequence into ``str``."""
    match value:
        case str():
            return value
        case bytes() | bytearray():
            return bytes(value).decode("utf-8", errors="surrogateescape")
        case _ if _is_char_sequence(value):
            return "".join(chr(item) for item in typ.cast("cabc.Sequence[int]", value))
        case _:
            return str(value)


def normalize_from(value: object) -> object:
    """Normalize the data source of a page.

    ``None`` stays ``None`` and character sequences (``str``, ``bytes`` or a
    list of code points) become ``str``. Anything else, such as a mapping
    describing several aggregated sources, passes through unchanged. That
    includes an empty list and a list of path strings, which are kept as
    lists rather than joined into one string. Bytes that are not valid UTF-8
    decode with ``surrogateescape``, the way ``os.fsdecode`` treats paths.
    """
    if value is None:
        return None
    if isinstance(value, str | bytes | bytearray) or _is_char_sequence(value):
        return _to_text(value)
    return value


def _format_formats(valid_formats: cabc.Iterable[str]) -> str:
    return ", ".join(repr(kind) for kind in valid_formats)


def _assert_config_kind(kind: object, valid_formats: cabc.Collection[str]) -> str:
    if kind not in valid_formats:
        msg = (
            f"The kind {kind!r} isn't a valid configuration type, the valid "
            f"configuration types are: {_format_formats(valid_formats)}"
        )
        raise InvalidConfigKindError(msg)
    return typ.cast("str", kind)


def translate_config(
    raw: object, *, valid_formats: cabc.Collection[str] = VALID_CONFIG_FORMATS
) -> ConfigSource:
    """Translate ``(key, (kind, file))`` or ``(kind, file)`` into a ConfigSource.

    Raises
    ------
    InvalidConfigKindError
        If ``kind`` is not one of ``valid_formats`` or ``raw`` has neither
        accepted shape.
    """
    match raw:
        case (key, (kind, file)):
            kind = _assert_config_kind(kind, valid_formats)
            return ConfigSource(format=kind, from_=_to_text(file), var_name=_to_text(key))
        case (kind, file):
            kind = _assert_config_kind(kind, valid_formats)
            return ConfigSource(format=kind, from_=_to_text(file))
        case _:
            msg = f"config source unknown: {raw!r}"
            raise InvalidConfigKindError(msg)


def translate_configs(
    entries: cabc.Iterable[object],
    *,
    valid_formats: cabc.Collection[str] = VALID_CONFIG_FORMATS,
) -> list[ConfigSource]:
    """Translate every raw config entry returned by a backend."""
    return [translate_config(entry, valid_formats=valid_formats) for entry in entries]


def _decode_var_spec(value: object) -> tuple[str, typ.Any] | None:
    match value:
        case None:
            return None
        case (var_name, source):
            return (_to_text(var_name), source)
        case _:
            msg = f"page data unknown: invalid variable spec {value!r}"
            raise UnknownPageDataError(msg)


def decode_page_entry(raw: object) -> tuple[str, PageSpec]:
    """Decode one raw page or widget entry into ``(uri, variant)``.

    Accepts ``(uri, TemplatePage(...))``, ``(uri, TemplateMapPage(...))`` and
    the tuple form ``(uri, (kind, template, var_spec, data))`` where ``kind``
    is ``"template"`` or ``"template_map"`` and ``var_spec`` is ``None`` or a
    ``(var_name, from)`` pair.

    Raises
    ------
    UnknownPageDataError
        If ``raw`` matches none of the accepted shapes.
    """
    match raw:
        case (uri, TemplatePage() | TemplateMapPage() as spec):
            return _to_text(uri), spec
        case (uri, (str() as kind, template, var_spec, cabc.Mapping() as data)) if (
            kind in PAGE_KINDS
        ):
            variant = PAGE_KINDS[kind]
            return _to_text(uri), variant(
                template=_to_text(template),
                var_spec=_decode_var_spec(var_spec),
                data=data,
            )
        case _:
            msg = f"page data unknown: {raw!r}"
            raise UnknownPageDataError(msg)


def _page_defaults() -> PageDescriptor:
    defaults = dict(PAGE_DEFAULTS)
    defaults["env"] = dict(PAGE_DEFAULTS["env"])
    return defaults


def build_page_descriptor(uri: str, spec: PageSpec) -> PageDescriptor:
    """Merge defaults, backend data, and the variant's overrides, in that order."""
    descriptor = _page_defaults()
    descriptor.update(copy.deepcopy(dict(spec.data)))
    overrides: dict[str, typ.Any] = {"uri": uri, "template": _to_text(spec.template)}
    if isinstance(spec, TemplatePage):
        overrides["index"] = True
    if spec.var_spec is not None:
        var_name, source = spec.var_spec
        overrides["var_name"] = _to_text(var_name)
        overrides["from"] = normalize_from(source)
    descriptor.update(overrides)
    return descriptor


def translate_page_data(raw: object) -> tuple[str, PageDescriptor]:
    """Translate one raw page entry into ``(uri, descriptor)``."""
    uri, spec = decode_page_entry(raw)
    return uri, build_page_descriptor(uri, spec)


def translate_pages(entries: cabc.Iterable[object]) -> dict[str, PageDescriptor]:
    """Translate every page entry, keyed by uri in backend order.

    Raises
    ------
    DuplicatePageError
        If two entries share the same uri.
    """
    pages: dict[str, PageDescriptor] = {}
    for entry in entries:
        uri, descriptor = translate_page_data(entry)
        if uri in pages:
            msg = f"page uri {uri!r} is defined more than once"
            raise DuplicatePageError(msg)
        pages[uri] = descriptor
    return pages


def translate_widget(raw: object) -> tuple[str, PageDescriptor]:
    """Translate one widget entry, dropping the page-routing fields."""
    name, descriptor = translate_page_data(raw)
    for field in ROUTING_ONLY_FIELDS:
        descriptor.pop(field, None)
    return name, descriptor


def translate_widgets(entries: cabc.Iterable[object]) -> dict[str, PageDescriptor]:
    """Translate every widget entry into a mapping keyed by widget name."""
    return dict(translate_widget(entry) for entry in entries)


def translate_assets(entries: cabc.Iterable[object]) -> dict[str, AssetDescriptor]:
    """Translate ``(name, (from, to))`` entries into asset groups.

    Raises
    ------
    UnknownAssetDataError
        If an entry does not have the ``(name, (from, to))`` shape.
    """
    assets: dict[str, AssetDescriptor] = {}
    for entry in entries:
        match entry:
            case (name, (source, destination)):
                assets[_to_text(name)] = {
                    "from": _to_text(source),
                    "to": _to_text(destination),
                }
            case _:
                msg = f"asset data unknown: {entry!r}"
                raise UnknownAssetDataError(msg)
    return assets


def default_assets() -> dict[str, AssetDescriptor]:
    """Return a fresh copy of the default ``general`` asset group."""
    return {name: dict(group) for name, group in DEFAULT_ASSETS.items()}


__all__ = [
    "AssetDescriptor",
    "PageDescriptor",
    "build_page_descriptor",
    "decode_page_entry",
    "default_assets",
    "normalize_from",
    "translate_assets",
    "translate_config",
    "translate_configs",
    "translate_page_data",
    "translate_pages",
    "translate_widget",
    "translate_widgets",
]
