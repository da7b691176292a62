#!/usr/bin/env python3
"""
ui_resource.py
-------------------
Descriptor for a UI resource (page, dashboard or UI component).

The resource document embeds the descriptors of every endpoint the
resource owns, so a single document restores the resource together
with its endpoints.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from compack.core.exceptions import DescriptorError
from compack.core.validators import DataValidator

from .base import ComponentDescriptor
from .endpoint import EndpointDescriptor


@dataclass
class UIResourceDescriptor(ComponentDescriptor):
    """
    Plain-data form of a UIResource.

    Attributes:
        name: Resource name
        access_scope: Access scope value ('public', 'global', ...)
        required_privilege: Privilege name needed to view the resource
        resource_kind: Content type value ('html', 'js', ...)
        category: Category value ('page', 'ui_component', 'dashboard')
        include_in_sitemap: Listed in the sitemap
        embeddable: May be embedded in other pages
        content: Package-relative reference to the content file
        endpoints: Embedded endpoint descriptors
    """

    KIND = "ui-resource"

    name: str = ""
    access_scope: str = "public"
    required_privilege: Optional[str] = None
    resource_kind: str = "html"
    category: str = "page"
    include_in_sitemap: bool = False
    embeddable: bool = False
    content: Optional[str] = None
    endpoints: List[EndpointDescriptor] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UIResourceDescriptor":
        cls._check_kind(data)
        DataValidator.validate_required_fields(data, ["name"])

        raw_endpoints = data.get("endpoints") or []
        if not isinstance(raw_endpoints, list):
            raise DescriptorError("'endpoints' must be a list")
        if not all(isinstance(item, dict) for item in raw_endpoints):
            raise DescriptorError("'endpoints' items must be mappings")

        return cls(
            **cls._ownership(data),
            name=str(data["name"]).strip(),
            access_scope=DataValidator.normalize_string(data.get("access_scope")) or "public",
            required_privilege=DataValidator.normalize_string(data.get("required_privilege")),
            resource_kind=DataValidator.normalize_string(data.get("resource_kind")) or "html",
            category=DataValidator.normalize_string(data.get("category")) or "page",
            include_in_sitemap=cls._flag(data, "include_in_sitemap"),
            embeddable=cls._flag(data, "embeddable"),
            content=DataValidator.normalize_string(data.get("content")),
            endpoints=[
                EndpointDescriptor.from_dict({"kind": EndpointDescriptor.KIND, **item})
                for item in raw_endpoints
            ],
        )
