#!/usr/bin/env python3
"""
event_listener.py
-----------------
Converter for event listeners (metadata document only, no content file).
"""
from __future__ import annotations

from typing import Any, Optional

from compack.dataclasses import EventListenerDescriptor
from compack.database.models import EventListener
from compack.pipeline.package import ResourceLoader
from compack.pipeline.path_codec import CONFIG_ROOT, EVENT, encode

from .base import ConversionContext, prepare_ownership, resolve_scope

# Fields copied verbatim between entity and descriptor
LISTENER_FIELDS = (
    "event_class_name",
    "event_object_type",
    "consumer_class_name",
    "consumer_method_name",
    "consumer_parameter_class_name",
    "static_data_1",
    "static_data_2",
    "static_data_3",
    "static_data_4",
    "index_string",
)


class EventListenerConverter:
    """Entity <-> descriptor conversion for EventListener."""

    entity_type = EventListener
    descriptor_type = EventListenerDescriptor

    def __init__(self, context: ConversionContext):
        self.context = context

    def content_path(self, entity: EventListener) -> Optional[str]:
        return None

    def content(self, entity: EventListener) -> Optional[str]:
        return None

    def metadata_path(self, entity: EventListener) -> Optional[str]:
        return encode(
            CONFIG_ROOT, EVENT, entity.event_name, "yaml",
            organization_id=entity.organization_id,
        )

    def to_descriptor(self, entity: EventListener) -> EventListenerDescriptor:
        return EventListenerDescriptor(
            module=entity.module_name,
            organization_id=entity.organization_id,
            event_name=entity.event_name,
            **{name: getattr(entity, name) for name in LISTENER_FIELDS},
        )

    def from_descriptor(
        self,
        descriptor: EventListenerDescriptor,
        path: Optional[str],
        resources: ResourceLoader,
    ) -> EventListener:
        organization_id = resolve_scope(path, EVENT, descriptor).organization_id
        prepare_ownership(self.context, organization_id, descriptor.module)

        manager = self.context.manager("event_listeners")
        entity: Any = manager.find(
            event_name=descriptor.event_name, organization_id=organization_id
        )
        if entity is None:
            entity = EventListener(
                event_name=descriptor.event_name, organization_id=organization_id
            )

        for name in LISTENER_FIELDS:
            setattr(entity, name, getattr(descriptor, name))
        entity.module_name = descriptor.module
        return manager.save(entity)
