#!/usr/bin/env python3
"""
Integration tests for mirroring single components into the export directory.
"""
import pytest

from compack.pipeline.component_exporter import ComponentExporter


@pytest.fixture
def sync_exporter(test_db, export_dir):
    return ComponentExporter(test_db, export_dir, sync_with_filesystem=True)


class TestExportToFile:
    """Tests for writing one component's files."""

    def test_form_with_privilege(self, sync_exporter, sample_components, export_dir):
        """A form's files are written along with its dynamic privilege."""
        written = sync_exporter.export_to_file(sample_components["form"])

        assert written == [
            "code/form/org_7/orders.js",
            "config/form/org_7/orders.yaml",
            "config/privilege/canSeeReports.yaml",
        ]
        assert (export_dir / "code/form/org_7/orders.js").read_text() == "a.text('total')"

    def test_resource_with_endpoints(self, sync_exporter, sample_components, export_dir):
        written = sync_exporter.export_to_file(sample_components["resource"])

        assert "code/endpoint/public/home-POST-/submit.js" in written
        assert (export_dir / "config/resource/public/home.yaml").is_file()

    def test_rewrite_reflects_changes(self, sync_exporter, sample_components, export_dir):
        """Exporting again after an edit replaces the file content."""
        script = sample_components["script"]
        sync_exporter.export_to_file(script)
        script.code = "return 0;"
        sync_exporter.export_to_file(script)

        assert (export_dir / "code/server-script/org_7/totals.js").read_text() == "return 0;"


class TestRemoveExportedFiles:
    """Tests for deleting one component's files."""

    def test_remove_form(self, sync_exporter, sample_components, export_dir):
        """Own files go; the shared privilege stays; emptied folders go."""
        form = sample_components["form"]
        sync_exporter.export_to_file(form)

        removed = sync_exporter.remove_exported_files(form)

        assert sorted(removed) == [
            "code/form/org_7/orders.js",
            "config/form/org_7/orders.yaml",
        ]
        assert not (export_dir / "code/form/org_7").exists()
        assert not (export_dir / "config/form/org_7").exists()
        assert (export_dir / "config/privilege/canSeeReports.yaml").is_file()

    def test_remove_resource_cascades(self, sync_exporter, sample_components, export_dir):
        """Removing a resource removes its endpoint scripts as well."""
        resource = sample_components["resource"]
        sync_exporter.export_to_file(resource)

        removed = sync_exporter.remove_exported_files(resource)

        assert "code/endpoint/public/home-POST-/submit.js" in removed
        assert not (export_dir / "code/endpoint/public/home-POST-").exists()
        assert not (export_dir / "resources/resource/public/home.html").exists()

    def test_remove_without_files(self, sync_exporter, sample_components):
        """Removing a component never exported is a no-op."""
        assert sync_exporter.remove_exported_files(sample_components["scheduler"]) == []


class TestSyncFlag:
    """The *_if_required methods act only when sync is enabled."""

    def test_disabled(self, test_db, sample_components, export_dir):
        exporter = ComponentExporter(test_db, export_dir, sync_with_filesystem=False)

        assert exporter.export_to_file_if_required(sample_components["form"]) == []
        assert exporter.remove_exported_files_if_required(sample_components["form"]) == []
        assert not export_dir.exists()

    def test_enabled(self, sync_exporter, sample_components, export_dir):
        scheduler = sample_components["scheduler"]

        assert sync_exporter.export_to_file_if_required(scheduler) == [
            "config/scheduler/nightly-report.yaml"
        ]
        assert sync_exporter.remove_exported_files_if_required(scheduler) == [
            "config/scheduler/nightly-report.yaml"
        ]
        assert not (export_dir / "config/scheduler/nightly-report.yaml").exists()
