"""Sprite assets and load readiness."""

from .registry import AssetRegistry, AssetSpec, default_manifest, load_assets, load_sprite

__all__ = ["AssetRegistry", "AssetSpec", "default_manifest", "load_assets", "load_sprite"]
