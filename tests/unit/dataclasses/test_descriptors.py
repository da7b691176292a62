"""
Tests for component descriptors.

Covers document serialization (kind first, transient fields dropped,
embedded endpoints), parsing with normalization, and kind dispatch.
"""
import pytest

from compack.core.exceptions import DescriptorError
from compack.dataclasses import (
    DESCRIPTOR_TYPES,
    EndpointDescriptor,
    FormDescriptor,
    PrivilegeDescriptor,
    SchedulerDescriptor,
    UIResourceDescriptor,
    descriptor_from_dict,
)
from compack.dataclasses.base import ComponentDescriptor


class TestToDict:
    """Tests for ComponentDescriptor.to_dict()."""

    def test_kind_comes_first(self):
        data = FormDescriptor(name="orders").to_dict()
        assert list(data)[0] == "kind"
        assert data["kind"] == "form"
        assert data["module"] == "core"
        assert data["organization_id"] is None

    def test_embedded_endpoints_serialized(self):
        """Endpoints should be nested documents without their resource id."""
        descriptor = UIResourceDescriptor(
            name="home",
            endpoints=[
                EndpointDescriptor(sub_path="/submit", http_method="POST", resource_id=3)
            ],
        )
        data = descriptor.to_dict()

        assert data["endpoints"] == [
            {
                "kind": "endpoint",
                "module": "core",
                "organization_id": None,
                "sub_path": "/submit",
                "http_method": "POST",
                "response_kind": "HTML",
                "http_headers": {},
                "model_attributes": [],
                "code": None,
            }
        ]

    def test_resource_id_ignored_in_equality(self):
        assert EndpointDescriptor(resource_id=1) == EndpointDescriptor(resource_id=2)


class TestFromDict:
    """Tests for parsing documents into descriptors."""

    def test_ui_resource_with_endpoints(self):
        descriptor = descriptor_from_dict(
            {
                "kind": "ui-resource",
                "name": " home ",
                "access_scope": "public",
                "include_in_sitemap": "yes",
                "endpoints": [{"sub_path": "/submit", "http_method": "POST"}],
            }
        )

        assert isinstance(descriptor, UIResourceDescriptor)
        assert descriptor.name == "home"
        assert descriptor.include_in_sitemap is True
        assert descriptor.endpoints == [
            EndpointDescriptor(sub_path="/submit", http_method="POST")
        ]

    def test_document_round_trip(self):
        """to_dict output should parse back into an equal descriptor."""
        original = FormDescriptor(
            module="crm",
            organization_id=7,
            name="orders",
            code="code/form/org_7/orders.js",
            read_privilege="canSeeReports",
            table_columns=["id", "total"],
            table_name="orders_records",
        )
        assert descriptor_from_dict(original.to_dict()) == original

    def test_defaults_applied(self):
        descriptor = descriptor_from_dict(
            {"kind": "scheduler", "cron_expression": "0 0 * * * *", "event_data": "job"}
        )
        assert descriptor == SchedulerDescriptor(
            cron_expression="0 0 * * * *", event_data="job", on_master_only=True
        )

    def test_privilege_is_always_global(self):
        descriptor = descriptor_from_dict(
            {"kind": "privilege", "name": "canSeeReports", "organization_id": 7}
        )
        assert isinstance(descriptor, PrivilegeDescriptor)
        assert descriptor.organization_id is None


class TestDescriptorErrors:
    """Tests for invalid documents."""

    def test_every_kind_registered(self):
        assert set(DESCRIPTOR_TYPES) == {
            "ui-resource",
            "endpoint",
            "form",
            "event-listener",
            "scheduler",
            "privilege",
            "server-script",
        }

    def test_every_kind_parses_itself(self):
        """Each registered class reads its own documents; the base does not."""
        assert "from_dict" not in vars(ComponentDescriptor)
        for descriptor_class in DESCRIPTOR_TYPES.values():
            assert "from_dict" in vars(descriptor_class)

    @pytest.mark.parametrize("data", [None, [], {"kind": "widget"}, {"name": "x"}])
    def test_unknown_kind(self, data):
        with pytest.raises(DescriptorError):
            descriptor_from_dict(data)

    def test_missing_required_field(self):
        with pytest.raises(DescriptorError, match="name"):
            descriptor_from_dict({"kind": "form"})

    def test_invalid_value(self):
        with pytest.raises(DescriptorError, match="organization_id|integer"):
            descriptor_from_dict({"kind": "form", "name": "a", "organization_id": "seven"})

    def test_wrong_kind_for_class(self):
        with pytest.raises(DescriptorError, match="cannot be read"):
            FormDescriptor.from_dict({"kind": "scheduler", "name": "a"})

    def test_endpoints_must_be_list(self):
        with pytest.raises(DescriptorError, match="endpoints"):
            descriptor_from_dict({"kind": "ui-resource", "name": "a", "endpoints": "GET"})

    def test_endpoint_items_must_be_mappings(self):
        with pytest.raises(DescriptorError, match="items must be mappings"):
            descriptor_from_dict(
                {"kind": "ui-resource", "name": "a", "endpoints": ["just-a-string"]}
            )
