"""Package record providers."""

from .manifest import load_manifest, load_packages

__all__ = ["load_manifest", "load_packages"]
