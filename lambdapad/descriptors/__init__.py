"""Descriptor records and the normalizers that build them from backend output."""

from .models import (
    ConfigSource,
    DuplicatePageError,
    InvalidConfigKindError,
    PageSpec,
    TemplateMapPage,
    TemplatePage,
    UnknownAssetDataError,
    UnknownPageDataError,
)
from .normalizers import (
    AssetDescriptor,
    PageDescriptor,
    decode_page_entry,
    default_assets,
    normalize_from,
    translate_assets,
    translate_config,
    translate_configs,
    translate_page_data,
    translate_pages,
    translate_widget,
    translate_widgets,
)

__all__ = [
    "AssetDescriptor",
    "ConfigSource",
    "DuplicatePageError",
    "InvalidConfigKindError",
    "PageDescriptor",
    "PageSpec",
    "TemplateMapPage",
    "TemplatePage",
    "UnknownAssetDataError",
    "UnknownPageDataError",
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
