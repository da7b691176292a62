#!/usr/bin/env python3
"""
endpoint.py
-----------
Converter for HTTP endpoints.

Endpoint scripts live next to their owning resource's scope:

    code/endpoint/<scope>/[org_<id>/]<resource>-<METHOD>-<sub_path>.js

Endpoints have no metadata document of their own; their descriptors are
embedded in the owning resource's document.
"""
from __future__ import annotations

from typing import Any, Optional

from compack.core.exceptions import DescriptorError
from compack.core.logging_manager import safe_logger
from compack.dataclasses import EndpointDescriptor
from compack.database.models import Endpoint, HttpMethod, ResponseKind, UIResource
from compack.pipeline.package import ResourceLoader
from compack.pipeline.path_codec import CODE_ROOT, ENDPOINT, encode

from .base import ConversionContext, load_reference, parse_enum, prepare_ownership


class EndpointConverter:
    """Entity <-> descriptor conversion for Endpoint."""

    entity_type = Endpoint
    descriptor_type = EndpointDescriptor

    def __init__(self, context: ConversionContext):
        self.context = context

    @staticmethod
    def script_name(resource_name: str, method: HttpMethod, sub_path: Optional[str]) -> str:
        return f"{resource_name}-{HttpMethod(method).value}-{sub_path or ''}"

    def content_path(self, entity: Endpoint) -> Optional[str]:
        resource = entity.resource
        return encode(
            CODE_ROOT,
            ENDPOINT,
            self.script_name(resource.name, entity.http_method, entity.sub_path),
            "js",
            access_scope=resource.access_scope,
            organization_id=entity.organization_id,
        )

    def content(self, entity: Endpoint) -> Optional[str]:
        return entity.code

    def metadata_path(self, entity: Endpoint) -> Optional[str]:
        return None

    def to_descriptor(self, entity: Endpoint) -> EndpointDescriptor:
        return EndpointDescriptor(
            module=entity.module_name,
            organization_id=entity.organization_id,
            sub_path=entity.sub_path or "",
            http_method=entity.http_method.value,
            response_kind=entity.response_kind.value,
            http_headers=dict(entity.http_headers or {}),
            model_attributes=list(entity.model_attributes or []),
            code=self.content_path(entity) if entity.code else None,
        )

    def from_descriptor(
        self,
        descriptor: EndpointDescriptor,
        path: Optional[str],
        resources: ResourceLoader,
    ) -> Endpoint:
        """
        Create or update the endpoint identified by the descriptor.

        The descriptor's ``resource_id`` must have been assigned by the
        owning resource's import.

        Raises:
            DescriptorError: If no owning resource is set or found
            PathDecodeError: If the method or response kind is unknown
            ResourceLoadError: If the script reference cannot be read
        """
        if descriptor.resource_id is None:
            raise DescriptorError("Endpoint descriptor has no owning resource")
        resource = self.context.session.get(UIResource, descriptor.resource_id)
        if resource is None:
            raise DescriptorError(f"Owning resource {descriptor.resource_id} not found")

        http_method = parse_enum(descriptor.http_method, HttpMethod, "http method")
        response_kind = parse_enum(descriptor.response_kind, ResponseKind, "response kind")
        sub_path = descriptor.sub_path or ""
        prepare_ownership(self.context, descriptor.organization_id, descriptor.module)

        manager = self.context.manager("endpoints")
        entity: Any = manager.find(
            resource_id=resource.id,
            sub_path=sub_path,
            http_method=http_method,
            organization_id=descriptor.organization_id,
        )
        created = entity is None
        if created:
            entity = Endpoint(
                sub_path=sub_path,
                http_method=http_method,
                organization_id=descriptor.organization_id,
            )
            entity.resource = resource

        entity.response_kind = response_kind
        entity.http_headers = dict(descriptor.http_headers)
        entity.model_attributes = list(descriptor.model_attributes)
        entity.code = load_reference(resources, descriptor.code)
        entity.module_name = descriptor.module

        manager.save(entity)
        safe_logger(self.context.logger).log_debug(
            "Endpoint imported",
            {
                "resource": resource.name,
                "method": http_method.value,
                "sub_path": sub_path,
                "created": created,
            },
        )
        return entity
