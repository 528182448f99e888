"""Package manifest loading.

A manifest is a JSON document listing already-resolved package records,
either as ``{"packages": [...]}`` or as a bare list of records.
"""

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from ..models.package import PackageManifest
from ..presenters import Package, present_all

logger = logging.getLogger(__name__)


def load_manifest(manifest_path: str | Path, root_path: Path | None = None) -> PackageManifest:
    """Load and validate a package manifest.

    Args:
        manifest_path: Manifest file, resolved against root_path when relative
        root_path: Application root directory

    Returns:
        PackageManifest: Validated records in file order

    Raises:
        FileNotFoundError: If the manifest does not exist
        ValueError: If the manifest is not valid JSON or has invalid records
    """
    manifest_path = Path(manifest_path)
    if root_path is not None and not manifest_path.is_absolute():
        manifest_path = root_path / manifest_path

    if not manifest_path.exists():
        raise FileNotFoundError(f"Package manifest not found: {manifest_path}")

    try:
        with open(manifest_path, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in package manifest {manifest_path}: {e}") from e

    if isinstance(data, list):
        data = {"packages": data}

    try:
        manifest = PackageManifest.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Invalid package manifest {manifest_path}: {e}") from e

    logger.info(f"Loaded {len(manifest.packages)} packages from {manifest_path}")
    return manifest


def load_packages(manifest_path: str | Path, root_path: Path | None = None) -> list[Package]:
    """Load a manifest and present its records for graph building."""
    manifest = load_manifest(manifest_path, root_path)
    return present_all(manifest.packages, root_path)
