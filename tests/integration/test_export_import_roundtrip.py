#!/usr/bin/env python3
"""
Integration tests for package export and import.

Exports a store holding one component of every kind, then imports the
package into an empty store and checks that components, their links
and their content survive the trip.
"""
import io
import zipfile

import pytest
import yaml

from compack.database.models import AccessScope, Form, HttpMethod, Scheduler, UIResource
from compack.pipeline.component_exporter import ComponentExporter
from compack.pipeline.component_importer import ComponentImporter
from compack.pipeline.converters import ConversionContext, ConverterRegistry

EXPECTED_FILES = {
    "config/privilege/canSeeReports.yaml",
    "migration/upgrade.sql",
    "code/server-script/org_7/totals.js",
    "config/server-script/org_7/totals.yaml",
    "code/form/org_7/orders.js",
    "config/form/org_7/orders.yaml",
    "config/event/org_7/ORDER_CREATED.yaml",
    "config/scheduler/nightly-report.yaml",
    "code/endpoint/public/home-POST-/submit.js",
    "resources/resource/public/home.html",
    "config/resource/public/home.yaml",
}


@pytest.fixture
def exporter(test_db, export_dir):
    return ComponentExporter(test_db, export_dir)


@pytest.fixture
def zip_package(exporter, sample_components):
    """Every sample component exported to archive bytes."""
    return exporter.export_to_zip(exporter.select_components())


@pytest.fixture
def dir_package(exporter, sample_components, export_dir):
    """Every sample component exported below export_dir."""
    exporter.export_to_directory(exporter.select_components())
    return export_dir


def _files(root):
    return {p.relative_to(root).as_posix() for p in root.rglob("*") if p.is_file()}


class TestExport:
    """Tests for the package layout produced by an export."""

    def test_zip_entries(self, zip_package):
        """The archive holds every expected entry and nothing else."""
        with zipfile.ZipFile(io.BytesIO(zip_package)) as archive:
            assert set(archive.namelist()) == EXPECTED_FILES

    def test_directory_files(self, dir_package):
        """A directory export lays out the same tree."""
        assert _files(dir_package) == EXPECTED_FILES

    def test_resource_document_embeds_endpoint(self, dir_package):
        """The resource document carries its endpoint descriptors."""
        document = yaml.safe_load(
            (dir_package / "config/resource/public/home.yaml").read_text()
        )
        assert document["kind"] == "ui-resource"
        assert document["module"] == "crm"
        assert document["include_in_sitemap"] is True
        assert len(document["endpoints"]) == 1
        assert document["endpoints"][0]["sub_path"] == "/submit"
        assert document["endpoints"][0]["model_attributes"] == ["order"]

    def test_content_files(self, dir_package):
        """Content bodies are written verbatim."""
        assert (dir_package / "resources/resource/public/home.html").read_text() == (
            "<h1>Home</h1>"
        )
        assert (dir_package / "code/endpoint/public/home-POST-/submit.js").read_text() == (
            "return save(form);"
        )

    def test_upgrade_script(self, dir_package):
        """The dynamic privilege is emitted once as upgrade SQL."""
        script = (dir_package / "migration/upgrade.sql").read_text()
        assert script.count("INSERT INTO dynamic_privileges") == 1
        assert "'canSeeReports'" in script

    def test_stats(self, exporter, sample_components):
        """The privilege reached through the form is written once."""
        stats = exporter.export_to_directory(exporter.select_components())
        assert stats.components_exported == 6
        assert stats.files_written == len(EXPECTED_FILES)
        assert stats.files_deduplicated == 1

    def test_select_by_kind_and_module(self, exporter, sample_components):
        """Selection filters by manager name and module."""
        forms = exporter.select_components(kinds=["forms"])
        assert [f.name for f in forms] == ["orders"]
        assert exporter.select_components(module="other") == []

    def test_form_only_export_carries_privilege(self, exporter, sample_components, export_dir):
        """Exporting just the form still ships its dynamic privilege."""
        exporter.export_to_directory(exporter.select_components(kinds=["forms"]))
        assert (export_dir / "config/privilege/canSeeReports.yaml").is_file()
        assert (export_dir / "migration/upgrade.sql").is_file()


class TestImport:
    """Tests for importing an exported package into an empty store."""

    def test_zip_roundtrip(self, zip_package, target_db):
        """Every component of the archive is recreated."""
        with target_db.session_scope():
            report = ComponentImporter(target_db).import_zip(zip_package)

            assert report.ok
            assert report.stats.documents_processed == 6
            assert report.stats.components_imported == 6

            home = target_db.resources.find(
                name="home", access_scope=AccessScope.PUBLIC, organization_id=None
            )
            assert home.content == "<h1>Home</h1>"
            assert home.include_in_sitemap is True
            assert home.module_name == "crm"

            form = target_db.forms.find(name="orders")
            assert form.organization_id == 7
            assert form.read_privilege == "canSeeReports"
            assert form.table_columns == ["id", "total"]
            assert target_db.dynamic_tables.table_exists("orders_records")

            listener = target_db.event_listeners.find(
                event_name="ORDER_CREATED", organization_id=7
            )
            assert listener.static_data_1 == "ops@example.com"

            assert target_db.privileges.find(name="canSeeReports") is not None
            assert target_db.server_scripts.find(name="totals", organization_id=7).code == (
                "return order.total;"
            )

    def test_endpoint_linked_to_new_resource(self, zip_package, target_db):
        """Embedded endpoints point at the resource's id in the new store."""
        with target_db.session_scope():
            ComponentImporter(target_db).import_zip(zip_package)

            home = target_db.resources.find(
                name="home", access_scope=AccessScope.PUBLIC, organization_id=None
            )
            assert len(home.endpoints) == 1
            endpoint = home.endpoints[0]
            assert endpoint.resource_id == home.id
            assert endpoint.http_method is HttpMethod.POST
            assert endpoint.code == "return save(form);"
            assert endpoint.http_headers == {"Cache-Control": "no-cache"}

    def test_directory_roundtrip(self, dir_package, target_db):
        """A directory package imports the same way as an archive."""
        with target_db.session_scope():
            report = ComponentImporter(target_db).import_directory(dir_package)

            assert report.ok
            assert report.stats.components_imported == 6
            assert target_db.schedulers.find(
                event_data="nightly-report", organization_id=None
            ).cron_expression == "0 0 2 * * *"

    def test_import_is_idempotent(self, zip_package, target_db):
        """Importing twice leaves a single copy of every component."""
        importer = ComponentImporter(target_db)
        with target_db.session_scope():
            importer.import_zip(zip_package)
        with target_db.session_scope():
            importer.import_zip(zip_package)

        with target_db.session_scope():
            counts = {
                name: manager.count()
                for name, manager in target_db.component_managers().items()
            }
        assert counts == {
            "resources": 1,
            "endpoints": 1,
            "forms": 1,
            "event_listeners": 1,
            "schedulers": 1,
            "privileges": 1,
            "server_scripts": 1,
        }

    def test_reimport_overwrites_changes(self, zip_package, target_db):
        """Components edited after an import are reset by the next import."""
        importer = ComponentImporter(target_db)
        with target_db.session_scope():
            importer.import_zip(zip_package)
            target_db.forms.find(name="orders").code = "changed"

        with target_db.session_scope():
            importer.import_zip(zip_package)
            assert target_db.forms.find(name="orders").code == "a.text('total')"

    def test_delete_existing_removes_stale(self, zip_package, target_db):
        """Components of the package's module absent from it are deleted."""
        with target_db.session_scope() as session:
            session.add(
                Scheduler(cron_expression="* * * * * *", event_data="stale", module_name="crm")
            )
            session.add(
                Scheduler(cron_expression="* * * * * *", event_data="other", module_name="billing")
            )

        with target_db.session_scope():
            report = ComponentImporter(target_db).import_zip(
                zip_package, delete_existing=True
            )
            assert report.ok
            assert report.stats.components_deleted == 1

            events = sorted(s.event_data for s in target_db.schedulers.list_all())
            assert events == ["nightly-report", "other"]


ROUNDTRIP_LOOKUPS = {
    "privilege": lambda db: db.privileges.find(name="canSeeReports"),
    "resource": lambda db: db.resources.find(
        name="home", access_scope=AccessScope.PUBLIC, organization_id=None
    ),
    "endpoint": lambda db: db.resources.find(
        name="home", access_scope=AccessScope.PUBLIC, organization_id=None
    ).endpoints[0],
    "form": lambda db: db.forms.find(name="orders"),
    "listener": lambda db: db.event_listeners.find(event_name="ORDER_CREATED", organization_id=7),
    "scheduler": lambda db: db.schedulers.find(event_data="nightly-report", organization_id=None),
    "script": lambda db: db.server_scripts.find(name="totals", organization_id=7),
}


def _describe(db, entity):
    registry = ConverterRegistry.build(ConversionContext.from_db(db))
    return registry.for_entity(entity).to_descriptor(entity)


class TestRoundTripFields:
    """Every exported field survives an import into an empty store."""

    @pytest.mark.parametrize("kind", sorted(ROUNDTRIP_LOOKUPS))
    def test_descriptor_preserved(self, kind, zip_package, sample_components, test_db, target_db):
        source = sample_components[kind]
        expected = _describe(test_db, source)

        with target_db.session_scope():
            ComponentImporter(target_db).import_zip(zip_package)
            imported = ROUNDTRIP_LOOKUPS[kind](target_db)

            assert _describe(target_db, imported) == expected
            for body in ("content", "code"):
                if hasattr(source, body):
                    assert getattr(imported, body) == getattr(source, body)


class TestLoadComponent:
    """Tests for loading a single component from a package directory."""

    @pytest.fixture
    def importer(self, dir_package, target_db):
        return ComponentImporter(target_db, components_dir=dir_package)

    def test_organization_document_first(self, importer, target_db):
        """The organization's own document is used when present."""
        with target_db.session_scope():
            importer.load_component("privilege", "canSeeReports")
            form = importer.load_component("form", "orders", organization_id=7)

            assert isinstance(form, Form)
            assert form.organization_id == 7
            assert form.code == "a.text('total')"

    def test_global_fallback(self, importer, target_db):
        """Without an organization document the global one is loaded."""
        with target_db.session_scope():
            scheduler = importer.load_component(
                "scheduler", "nightly-report", organization_id=7
            )
            assert scheduler.organization_id is None

    def test_scoped_resource(self, importer, target_db):
        with target_db.session_scope():
            home = importer.load_component(
                "resource", "home", access_scope=AccessScope.PUBLIC
            )
            assert isinstance(home, UIResource)
            assert [e.sub_path for e in home.endpoints] == ["/submit"]

    def test_missing_document(self, importer, target_db):
        with target_db.session_scope():
            assert importer.load_component("form", "missing", organization_id=3) is None
