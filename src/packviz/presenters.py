"""Presentation view of package records consumed by the graph builder."""

import hashlib
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from .models.package import PackageRecord

# Node colors assigned to packages without an explicit color
PACKAGE_PALETTE = (
    "#EF673E",
    "#3E8EEF",
    "#2FA36B",
    "#9B59B6",
    "#E6A117",
    "#16A5A5",
    "#D6456A",
    "#5D6D7E",
)


def color_for(name: str) -> str:
    """Pick a stable palette color for a package name."""
    digest = hashlib.sha256(name.encode("utf-8")).digest()
    return PACKAGE_PALETTE[digest[0] % len(PACKAGE_PALETTE)]


@dataclass(frozen=True)
class Package:
    """Resolved package as drawn on the graph."""
    name: str
    color: str
    dependencies: frozenset[str] = field(default_factory=frozenset)
    deprecated_references: frozenset[str] = field(default_factory=frozenset)
    package_todos: frozenset[str] = field(default_factory=frozenset)
    display_path: str = ""


def _display_path(record: PackageRecord, root_path: Path | None) -> str:
    if record.path is None:
        return record.name

    path = Path(record.path)
    if root_path is not None and path.is_absolute() and path.is_relative_to(root_path):
        return path.relative_to(root_path).as_posix()
    return path.as_posix()


def present(record: PackageRecord, root_path: Path | None = None) -> Package:
    """Build the presented package for a record."""
    return Package(
        name=record.name,
        color=record.color or color_for(record.name),
        dependencies=frozenset(record.dependencies),
        deprecated_references=frozenset(record.deprecated_references),
        package_todos=frozenset(record.package_todos),
        display_path=_display_path(record, root_path),
    )


def present_all(records: Iterable[PackageRecord], root_path: Path | None = None) -> list[Package]:
    """Present every record, keeping input order."""
    return [present(record, root_path) for record in records]
