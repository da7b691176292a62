#!/usr/bin/env python3
"""
server_script.py
----------------
Converter for reusable server-side scripts.
"""
from __future__ import annotations

from typing import Any, Optional

from compack.dataclasses import ServerScriptDescriptor
from compack.database.models import ServerScript
from compack.pipeline.package import ResourceLoader
from compack.pipeline.path_codec import CODE_ROOT, CONFIG_ROOT, SERVER_SCRIPT, encode

from .base import ConversionContext, load_reference, prepare_ownership, resolve_scope


class ServerScriptConverter:
    """Entity <-> descriptor conversion for ServerScript."""

    entity_type = ServerScript
    descriptor_type = ServerScriptDescriptor

    def __init__(self, context: ConversionContext):
        self.context = context

    def content_path(self, entity: ServerScript) -> Optional[str]:
        return encode(
            CODE_ROOT, SERVER_SCRIPT, entity.name, "js",
            organization_id=entity.organization_id,
        )

    def content(self, entity: ServerScript) -> Optional[str]:
        return entity.code

    def metadata_path(self, entity: ServerScript) -> Optional[str]:
        return encode(
            CONFIG_ROOT, SERVER_SCRIPT, entity.name, "yaml",
            organization_id=entity.organization_id,
        )

    def to_descriptor(self, entity: ServerScript) -> ServerScriptDescriptor:
        return ServerScriptDescriptor(
            module=entity.module_name,
            organization_id=entity.organization_id,
            name=entity.name,
            arguments=entity.arguments,
            model=entity.model,
            code=self.content_path(entity) if entity.code else None,
        )

    def from_descriptor(
        self,
        descriptor: ServerScriptDescriptor,
        path: Optional[str],
        resources: ResourceLoader,
    ) -> ServerScript:
        organization_id = resolve_scope(path, SERVER_SCRIPT, descriptor).organization_id
        code = load_reference(resources, descriptor.code)
        prepare_ownership(self.context, organization_id, descriptor.module)

        manager = self.context.manager("server_scripts")
        entity: Any = manager.find(name=descriptor.name, organization_id=organization_id)
        if entity is None:
            entity = ServerScript(name=descriptor.name, organization_id=organization_id)

        entity.arguments = descriptor.arguments
        entity.model = descriptor.model
        entity.code = code
        entity.module_name = descriptor.module
        return manager.save(entity)
