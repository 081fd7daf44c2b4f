"""Static asset serving for the bundled console UI."""

from .content_types import CONTENT_TYPES, DEFAULT_CONTENT_TYPE, content_type_for
from .resolver import AssetEntry, OpenedAsset, StaticAssetResolver

__all__ = [
    "CONTENT_TYPES",
    "DEFAULT_CONTENT_TYPE",
    "content_type_for",
    "AssetEntry",
    "OpenedAsset",
    "StaticAssetResolver",
]
