"""Unit tests for package records, presenters and manifest loading."""

import json

import pytest

from packviz.models import PackageManifest, PackageRecord
from packviz.parser import load_manifest, load_packages
from packviz.presenters import PACKAGE_PALETTE, color_for, present, present_all


class TestPackageRecord:
    """Test PackageRecord model."""

    def test_minimal_record(self):
        record = PackageRecord(name="billing/invoices")
        assert record.color is None
        assert record.dependencies == set()
        assert record.deprecated_references == set()
        assert record.package_todos == set()

    def test_record_from_camel_case(self):
        record = PackageRecord.model_validate({
            "name": "billing",
            "dependencies": ["core", "core"],
            "deprecatedReferences": ["legacy"],
            "packageTodos": ["shared"],
        })
        assert record.dependencies == {"core"}
        assert record.deprecated_references == {"legacy"}
        assert record.package_todos == {"shared"}

    @pytest.mark.parametrize("name", ["", ".", "billing//invoices", "/billing", "billing/"])
    def test_invalid_names(self, name):
        with pytest.raises(ValueError):
            PackageRecord(name=name)


class TestPackageManifest:
    """Test PackageManifest model."""

    def test_keeps_order(self):
        manifest = PackageManifest(packages=[PackageRecord(name="b"), PackageRecord(name="a")])
        assert manifest.names == ["b", "a"]

    def test_duplicate_names_rejected(self):
        with pytest.raises(ValueError, match="duplicate package names: core"):
            PackageManifest(packages=[PackageRecord(name="core"), PackageRecord(name="core")])


class TestPresenters:
    """Test package presentation."""

    def test_explicit_color_kept(self):
        assert present(PackageRecord(name="core", color="teal")).color == "teal"

    def test_generated_color_is_stable(self):
        first = present(PackageRecord(name="billing/invoices")).color
        second = present(PackageRecord(name="billing/invoices")).color
        assert first == second == color_for("billing/invoices")
        assert first in PACKAGE_PALETTE

    def test_display_path_relative_to_root(self, tmp_path):
        record = PackageRecord(name="billing", path=str(tmp_path / "packs" / "billing"))
        assert present(record, tmp_path).display_path == "packs/billing"

    def test_display_path_outside_root(self, tmp_path):
        record = PackageRecord(name="billing", path="/elsewhere/billing")
        assert present(record, tmp_path / "app").display_path == "/elsewhere/billing"

    def test_display_path_defaults_to_name(self):
        assert present(PackageRecord(name="billing")).display_path == "billing"

    def test_relationships_frozen(self):
        package = present(PackageRecord(name="billing", dependencies={"core"}))
        assert package.dependencies == frozenset({"core"})

    def test_present_all_keeps_order(self):
        packages = present_all([PackageRecord(name="z"), PackageRecord(name="a")])
        assert [p.name for p in packages] == ["z", "a"]


class TestManifestLoading:
    """Test JSON manifest loading."""

    def test_load_wrapped_manifest(self, tmp_path):
        manifest_file = tmp_path / "packages.json"
        manifest_file.write_text(json.dumps({
            "packages": [
                {"name": "core"},
                {"name": "billing/invoices", "dependencies": ["core"]},
            ]
        }))

        manifest = load_manifest(manifest_file)
        assert manifest.names == ["core", "billing/invoices"]

    def test_load_bare_list_relative_to_root(self, tmp_path):
        (tmp_path / "packages.json").write_text(json.dumps([{"name": "core", "color": "teal"}]))

        packages = load_packages("packages.json", tmp_path)
        assert len(packages) == 1
        assert packages[0].color == "teal"

    def test_missing_manifest(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_manifest(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        manifest_file = tmp_path / "packages.json"
        manifest_file.write_text("[{")

        with pytest.raises(ValueError, match="Invalid JSON"):
            load_manifest(manifest_file)

    def test_invalid_record(self, tmp_path):
        manifest_file = tmp_path / "packages.json"
        manifest_file.write_text(json.dumps([{"name": ""}]))

        with pytest.raises(ValueError, match="Invalid package manifest"):
            load_manifest(manifest_file)
