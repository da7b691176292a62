"""
test_import_report.py
---------------------
Unit tests for import reports, natural key descriptions and ordering.
"""
from compack.core.exceptions import ResourceLoadError
from compack.dataclasses import (
    EndpointDescriptor,
    EventListenerDescriptor,
    FormDescriptor,
    PrivilegeDescriptor,
    SchedulerDescriptor,
    UIResourceDescriptor,
)
from compack.pipeline.component_importer import IMPORT_ORDER, ImportReport, describe_key


class TestDescribeKey:
    """Tests for describe_key()."""

    def test_named_component(self):
        assert describe_key(FormDescriptor(name="orders")) == "orders"

    def test_organization_suffix(self):
        descriptor = EventListenerDescriptor(event_name="ORDER_CREATED", organization_id=4)
        assert describe_key(descriptor) == "ORDER_CREATED (org 4)"

    def test_scheduler_uses_event_data(self):
        assert describe_key(SchedulerDescriptor(event_data="sync")) == "sync"

    def test_endpoint_uses_method_and_path(self):
        descriptor = EndpointDescriptor(http_method="POST", sub_path="/send")
        assert describe_key(descriptor) == "POST /send"


class TestImportReport:
    """Tests for ImportReport bookkeeping."""

    def test_empty_report_is_ok(self):
        report = ImportReport()
        assert report.ok
        assert report.to_note().startswith("Import: 0 documents processed")

    def test_record_success_and_failure(self):
        report = ImportReport()
        report.record_success("config/form/a.yaml", "a")
        report.record_failure("config/form/b.yaml", "b", ResourceLoadError("gone"))

        assert not report.ok
        assert report.stats.components_imported == 1
        assert report.stats.errors == 1
        assert report.failures[0].error == "ResourceLoadError: gone"

        note = report.to_note()
        assert "  + config/form/a.yaml [a]" in note
        assert "  ! config/form/b.yaml [b]: ResourceLoadError: gone" in note


class TestImportOrder:
    """Privileges come before the components naming them; resources last."""

    def test_order(self):
        assert IMPORT_ORDER[PrivilegeDescriptor.KIND] < IMPORT_ORDER[FormDescriptor.KIND]
        assert IMPORT_ORDER[FormDescriptor.KIND] < IMPORT_ORDER[UIResourceDescriptor.KIND]
        assert max(IMPORT_ORDER, key=IMPORT_ORDER.get) == EndpointDescriptor.KIND
