#!/usr/bin/env python3
"""
ui_resource.py
--------------
Converter for UI resources (pages, dashboards, UI components).

Resources are the only cascading component: exporting one writes its
endpoints first and embeds their descriptors; importing one restores
every embedded endpoint against the resource's (new) id.
"""
from __future__ import annotations

from typing import Any, List, Optional

from compack.core.logging_manager import safe_logger
from compack.dataclasses import UIResourceDescriptor
from compack.database.models import (
    AccessScope,
    ResourceCategory,
    ResourceKind,
    UIResource,
)
from compack.pipeline.package import ResourceLoader
from compack.pipeline.path_codec import CONFIG_ROOT, RESOURCES_ROOT, encode

from .base import (
    ConversionContext,
    load_reference,
    parse_enum,
    prepare_ownership,
    resolve_scope,
)
from .endpoint import EndpointConverter


class UIResourceConverter:
    """Entity <-> descriptor conversion for UIResource, cascading to endpoints."""

    entity_type = UIResource
    descriptor_type = UIResourceDescriptor

    def __init__(self, context: ConversionContext, endpoints: EndpointConverter):
        self.context = context
        self.endpoints = endpoints

    # ---- Export ----

    def content_path(self, entity: UIResource) -> Optional[str]:
        return encode(
            RESOURCES_ROOT,
            entity.category.package_folder,
            entity.name,
            entity.resource_kind.extension,
            access_scope=entity.access_scope,
            organization_id=entity.organization_id,
        )

    def content(self, entity: UIResource) -> Optional[str]:
        return entity.content

    def metadata_path(self, entity: UIResource) -> Optional[str]:
        return encode(
            CONFIG_ROOT,
            entity.category.package_folder,
            entity.name,
            "yaml",
            access_scope=entity.access_scope,
            organization_id=entity.organization_id,
        )

    def children(self, entity: UIResource) -> List[Any]:
        return list(entity.endpoints)

    def to_descriptor(self, entity: UIResource) -> UIResourceDescriptor:
        return UIResourceDescriptor(
            module=entity.module_name,
            organization_id=entity.organization_id,
            name=entity.name,
            access_scope=entity.access_scope.value,
            required_privilege=entity.required_privilege,
            resource_kind=entity.resource_kind.value,
            category=entity.category.value,
            include_in_sitemap=entity.include_in_sitemap,
            embeddable=entity.embeddable,
            content=self.content_path(entity) if entity.content else None,
            endpoints=[self.endpoints.to_descriptor(e) for e in entity.endpoints],
        )

    # ---- Import ----

    def from_descriptor(
        self,
        descriptor: UIResourceDescriptor,
        path: Optional[str],
        resources: ResourceLoader,
    ) -> UIResource:
        """
        Create or update the resource, then import its endpoints.

        Access scope and organization come from the package path when
        one is given; otherwise from the descriptor.

        Raises:
            PathDecodeError: If scope, kind or category cannot be decoded
            UnknownPrivilegeError: If the required privilege is unknown
            ResourceLoadError: If a content reference cannot be read
        """
        category = parse_enum(descriptor.category, ResourceCategory, "resource category")
        scope = resolve_scope(
            path, category.package_folder, descriptor, fallback_scope=descriptor.access_scope
        )
        access_scope: AccessScope = scope.access_scope
        organization_id = scope.organization_id
        resource_kind = parse_enum(descriptor.resource_kind, ResourceKind, "resource kind")
        required_privilege = self.context.privileges.resolve_name(descriptor.required_privilege)
        content = load_reference(resources, descriptor.content)

        prepare_ownership(self.context, organization_id, descriptor.module)

        manager = self.context.manager("resources")
        entity: Any = manager.find(
            name=descriptor.name,
            access_scope=access_scope,
            organization_id=organization_id,
        )
        created = entity is None
        if created:
            entity = UIResource(
                name=descriptor.name,
                access_scope=access_scope,
                organization_id=organization_id,
            )

        entity.required_privilege = required_privilege
        entity.resource_kind = resource_kind
        entity.category = category
        entity.content = content
        entity.embeddable = descriptor.embeddable
        entity.include_in_sitemap = descriptor.include_in_sitemap
        entity.module_name = descriptor.module
        manager.save(entity)

        for endpoint in descriptor.endpoints:
            endpoint.resource_id = entity.id
            endpoint.organization_id = organization_id
            self.endpoints.from_descriptor(endpoint, None, resources)

        safe_logger(self.context.logger).log_debug(
            "UI resource imported",
            {
                "name": entity.name,
                "scope": access_scope.value,
                "organization_id": organization_id,
                "endpoints": len(descriptor.endpoints),
                "created": created,
            },
        )
        return entity
