"""Data models for packviz."""

from .package import PackageManifest, PackageRecord

__all__ = [
    "PackageManifest",
    "PackageRecord",
]
