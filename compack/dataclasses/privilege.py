#!/usr/bin/env python3
"""
privilege.py
-------------------
Descriptor for a dynamic privilege.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from compack.core.validators import DataValidator

from .base import ComponentDescriptor


@dataclass
class PrivilegeDescriptor(ComponentDescriptor):
    """
    Plain-data form of a DynamicPrivilege.

    Privileges are global, so organization_id is always None.
    """

    KIND = "privilege"

    name: str = ""
    category: Optional[str] = None
    privilege_group: str = "DYNAMIC"
    label: Optional[str] = None
    index_string: Optional[str] = None
    removable: bool = True

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PrivilegeDescriptor":
        cls._check_kind(data)
        DataValidator.validate_required_fields(data, ["name"])
        ownership = cls._ownership(data)
        ownership["organization_id"] = None
        return cls(
            **ownership,
            name=str(data["name"]).strip(),
            category=DataValidator.normalize_string(data.get("category")),
            privilege_group=DataValidator.normalize_string(data.get("privilege_group")) or "DYNAMIC",
            label=DataValidator.normalize_string(data.get("label")),
            index_string=DataValidator.normalize_string(data.get("index_string")),
            removable=cls._flag(data, "removable", default=True),
        )
