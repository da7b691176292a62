#!/usr/bin/env python3
"""
privilege.py
------------
Converter for dynamic privileges.

Privileges are global and have no content file. Besides the metadata
document, each exported privilege contributes an idempotent INSERT to
the package's upgrade SQL so the privilege can be created by a plain
database migration.
"""
from __future__ import annotations

from typing import Any, List, Optional

from compack.dataclasses import PrivilegeDescriptor
from compack.database.models import DynamicPrivilege, PrivilegeGroup
from compack.pipeline.package import ResourceLoader
from compack.pipeline.path_codec import CONFIG_ROOT, PRIVILEGE, encode

from .base import ConversionContext, parse_enum, prepare_ownership


def _sql_literal(value: Any) -> str:
    if value is None:
        return "NULL"
    if isinstance(value, bool):
        return "1" if value else "0"
    return "'" + str(value).replace("'", "''") + "'"


class PrivilegeConverter:
    """Entity <-> descriptor conversion for DynamicPrivilege."""

    entity_type = DynamicPrivilege
    descriptor_type = PrivilegeDescriptor

    def __init__(self, context: ConversionContext):
        self.context = context

    def content_path(self, entity: DynamicPrivilege) -> Optional[str]:
        return None

    def content(self, entity: DynamicPrivilege) -> Optional[str]:
        return None

    def metadata_path(self, entity: DynamicPrivilege) -> Optional[str]:
        return encode(CONFIG_ROOT, PRIVILEGE, entity.name, "yaml")

    def upgrade_statements(self, entity: DynamicPrivilege) -> List[str]:
        values = ", ".join(
            _sql_literal(v)
            for v in (
                entity.name,
                entity.category,
                entity.privilege_group.value,
                entity.label,
                entity.index_string,
                entity.removable,
                entity.module_name,
            )
        )
        return [
            "INSERT INTO dynamic_privileges "
            "(name, category, privilege_group, label, index_string, removable, module_name) "
            f"VALUES ({values}) ON CONFLICT (name) DO NOTHING;"
        ]

    def to_descriptor(self, entity: DynamicPrivilege) -> PrivilegeDescriptor:
        return PrivilegeDescriptor(
            module=entity.module_name,
            organization_id=None,
            name=entity.name,
            category=entity.category,
            privilege_group=entity.privilege_group.value,
            label=entity.label,
            index_string=entity.index_string,
            removable=entity.removable,
        )

    def from_descriptor(
        self,
        descriptor: PrivilegeDescriptor,
        path: Optional[str],
        resources: ResourceLoader,
    ) -> DynamicPrivilege:
        group = parse_enum(descriptor.privilege_group, PrivilegeGroup, "privilege group")
        prepare_ownership(self.context, None, descriptor.module)

        manager = self.context.manager("privileges")
        entity: Any = manager.find(name=descriptor.name)
        if entity is None:
            entity = DynamicPrivilege(name=descriptor.name)

        entity.category = descriptor.category
        entity.privilege_group = group
        entity.label = descriptor.label
        entity.index_string = descriptor.index_string
        entity.removable = descriptor.removable
        entity.module_name = descriptor.module
        return manager.save(entity)
