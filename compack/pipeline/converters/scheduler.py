#!/usr/bin/env python3
"""
scheduler.py
------------
Converter for schedulers, identified by their event data.
"""
from __future__ import annotations

from typing import Any, Optional

from compack.dataclasses import SchedulerDescriptor
from compack.database.models import Scheduler
from compack.pipeline.package import ResourceLoader
from compack.pipeline.path_codec import CONFIG_ROOT, SCHEDULER, encode

from .base import ConversionContext, prepare_ownership, resolve_scope


class SchedulerConverter:
    """Entity <-> descriptor conversion for Scheduler."""

    entity_type = Scheduler
    descriptor_type = SchedulerDescriptor

    def __init__(self, context: ConversionContext):
        self.context = context

    def content_path(self, entity: Scheduler) -> Optional[str]:
        return None

    def content(self, entity: Scheduler) -> Optional[str]:
        return None

    def metadata_path(self, entity: Scheduler) -> Optional[str]:
        return encode(
            CONFIG_ROOT, SCHEDULER, entity.event_data, "yaml",
            organization_id=entity.organization_id,
        )

    def to_descriptor(self, entity: Scheduler) -> SchedulerDescriptor:
        return SchedulerDescriptor(
            module=entity.module_name,
            organization_id=entity.organization_id,
            cron_expression=entity.cron_expression,
            event_data=entity.event_data,
            on_master_only=entity.on_master_only,
        )

    def from_descriptor(
        self,
        descriptor: SchedulerDescriptor,
        path: Optional[str],
        resources: ResourceLoader,
    ) -> Scheduler:
        organization_id = resolve_scope(path, SCHEDULER, descriptor).organization_id
        prepare_ownership(self.context, organization_id, descriptor.module)

        manager = self.context.manager("schedulers")
        entity: Any = manager.find(
            event_data=descriptor.event_data, organization_id=organization_id
        )
        if entity is None:
            entity = Scheduler(
                event_data=descriptor.event_data, organization_id=organization_id
            )

        entity.cron_expression = descriptor.cron_expression
        entity.on_master_only = descriptor.on_master_only
        entity.module_name = descriptor.module
        return manager.save(entity)
