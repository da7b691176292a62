#!/usr/bin/env python3
"""
form.py
-------
Converter for forms.

A form's records live in a dynamic table, so importing a form makes
sure that table exists before the form row is saved. Exporting a form
also exports the dynamic privileges it references.
"""
from __future__ import annotations

from typing import Any, List, Optional

from compack.core.logging_manager import safe_logger
from compack.dataclasses import FormDescriptor
from compack.database.models import Form
from compack.pipeline.package import ResourceLoader
from compack.pipeline.path_codec import CODE_ROOT, CONFIG_ROOT, FORM, encode

from .base import ConversionContext, load_reference, prepare_ownership, resolve_scope


class FormConverter:
    """Entity <-> descriptor conversion for Form."""

    entity_type = Form
    descriptor_type = FormDescriptor

    def __init__(self, context: ConversionContext):
        self.context = context

    def content_path(self, entity: Form) -> Optional[str]:
        return encode(CODE_ROOT, FORM, entity.name, "js", organization_id=entity.organization_id)

    def content(self, entity: Form) -> Optional[str]:
        return entity.code

    def metadata_path(self, entity: Form) -> Optional[str]:
        return encode(CONFIG_ROOT, FORM, entity.name, "yaml", organization_id=entity.organization_id)

    def dependencies(self, entity: Form) -> List[Any]:
        """Dynamic privileges named by the form (built-in ones need no export)."""
        found = []
        for name in entity.privilege_names:
            token = self.context.privileges.find(name)
            if token is not None and self.context.privileges.is_dynamic(token):
                found.append(token)
        return found

    def to_descriptor(self, entity: Form) -> FormDescriptor:
        return FormDescriptor(
            module=entity.module_name,
            organization_id=entity.organization_id,
            name=entity.name,
            code=self.content_path(entity) if entity.code else None,
            read_privilege=entity.read_privilege,
            write_privilege=entity.write_privilege,
            register_api_crud_controller=entity.register_api_crud_controller,
            register_html_crud_controller=entity.register_html_crud_controller,
            show_on_organization_dashboard=entity.show_on_organization_dashboard,
            table_columns=list(entity.table_columns or []),
            filter_columns=list(entity.filter_columns or []),
            table_name=entity.table_name,
            table_view=entity.table_view,
        )

    def from_descriptor(
        self,
        descriptor: FormDescriptor,
        path: Optional[str],
        resources: ResourceLoader,
    ) -> Form:
        """
        Create or update the form named by the descriptor.

        Privileges are resolved first, then the record table is created
        if missing, and only then is the form saved.

        Raises:
            UnknownPrivilegeError: If a privilege name is unknown
            ResourceLoadError: If the script reference cannot be read
        """
        organization_id = resolve_scope(path, FORM, descriptor).organization_id
        read_privilege = self.context.privileges.resolve_name(descriptor.read_privilege)
        write_privilege = self.context.privileges.resolve_name(descriptor.write_privilege)
        code = load_reference(resources, descriptor.code)

        prepare_ownership(self.context, organization_id, descriptor.module)

        manager = self.context.manager("forms")
        entity: Any = manager.find(name=descriptor.name)
        created = entity is None
        if created:
            entity = Form(name=descriptor.name)

        entity.organization_id = organization_id
        entity.read_privilege = read_privilege
        entity.write_privilege = write_privilege
        entity.code = code
        entity.register_api_crud_controller = descriptor.register_api_crud_controller
        entity.register_html_crud_controller = descriptor.register_html_crud_controller
        entity.show_on_organization_dashboard = descriptor.show_on_organization_dashboard
        entity.table_columns = list(descriptor.table_columns)
        entity.filter_columns = list(descriptor.filter_columns)
        entity.table_name = descriptor.table_name
        entity.table_view = descriptor.table_view
        entity.module_name = descriptor.module

        self.context.dynamic_tables.ensure_table_exists(descriptor.table_name)
        manager.save(entity)

        safe_logger(self.context.logger).log_debug(
            "Form imported",
            {"name": entity.name, "table": entity.table_name, "created": created},
        )
        return entity
