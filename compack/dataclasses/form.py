#!/usr/bin/env python3
"""
form.py
-------------------
Descriptor for a form definition.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from compack.core.validators import DataValidator

from .base import ComponentDescriptor


@dataclass
class FormDescriptor(ComponentDescriptor):
    """
    Plain-data form of a Form.

    Attributes:
        name: Unique form name
        code: Package-relative reference to the form script
        read_privilege: Privilege name needed to read records
        write_privilege: Privilege name needed to write records
        register_api_crud_controller: Expose JSON CRUD endpoints
        register_html_crud_controller: Expose HTML CRUD pages
        show_on_organization_dashboard: List on the organization dashboard
        table_columns: Columns of the records table view
        filter_columns: Columns offered as filters
        table_name: Dynamic table holding the form's records
        table_view: Custom table view template
    """

    KIND = "form"

    name: str = ""
    code: Optional[str] = None
    read_privilege: Optional[str] = None
    write_privilege: Optional[str] = None
    register_api_crud_controller: bool = False
    register_html_crud_controller: bool = False
    show_on_organization_dashboard: bool = False
    table_columns: List[str] = field(default_factory=list)
    filter_columns: List[str] = field(default_factory=list)
    table_name: Optional[str] = None
    table_view: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FormDescriptor":
        cls._check_kind(data)
        DataValidator.validate_required_fields(data, ["name"])
        return cls(
            **cls._ownership(data),
            name=str(data["name"]).strip(),
            code=DataValidator.normalize_string(data.get("code")),
            read_privilege=DataValidator.normalize_string(data.get("read_privilege")),
            write_privilege=DataValidator.normalize_string(data.get("write_privilege")),
            register_api_crud_controller=cls._flag(data, "register_api_crud_controller"),
            register_html_crud_controller=cls._flag(data, "register_html_crud_controller"),
            show_on_organization_dashboard=cls._flag(data, "show_on_organization_dashboard"),
            table_columns=DataValidator.normalize_list(data.get("table_columns")),
            filter_columns=DataValidator.normalize_list(data.get("filter_columns")),
            table_name=DataValidator.normalize_string(data.get("table_name")),
            table_view=DataValidator.normalize_string(data.get("table_view")),
        )
