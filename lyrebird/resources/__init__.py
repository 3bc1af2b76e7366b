"""
Resources module - asset handles and loaders.
"""

from lyrebird.resources.assets import (
    AssetHandle,
    AssetKind,
    AssetLoader,
    LoadState,
    PygameAssetLoader,
    asset_kind,
)

__all__ = [
    "AssetHandle",
    "AssetKind",
    "AssetLoader",
    "LoadState",
    "PygameAssetLoader",
    "asset_kind",
]
