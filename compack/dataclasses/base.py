#!/usr/bin/env python3
"""
base.py
-------------------
Common base for component descriptors.

A descriptor is the plain-data form of a component as it appears in a
package metadata document: scalar fields, lists and mappings only, with
script and content bodies replaced by package-relative references.

Every document carries a ``kind`` key naming its descriptor class, so a
package reader can map a document back to a descriptor without knowing
where the document came from.
"""
from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, ClassVar, Dict, Optional

from compack.core.exceptions import DescriptorError
from compack.core.validators import DataValidator

DEFAULT_MODULE = "core"


@dataclass
class ComponentDescriptor:
    """
    Base descriptor with ownership fields shared by every component.

    Attributes:
        module: Owning module name
        organization_id: Owning organization, None for global components
    """

    KIND: ClassVar[str] = ""

    module: str = DEFAULT_MODULE
    organization_id: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize to a metadata document.

        ``kind`` comes first; fields follow in declaration order.
        Fields flagged ``transient`` in their metadata are left out.
        """
        data: Dict[str, Any] = {"kind": self.KIND}
        for f in fields(self):
            if f.metadata.get("transient"):
                continue
            value = getattr(self, f.name)
            if isinstance(value, list):
                value = [v.to_dict() if isinstance(v, ComponentDescriptor) else v for v in value]
            elif isinstance(value, dict):
                value = dict(value)
            data[f.name] = value
        return data

    @classmethod
    def _check_kind(cls, data: Dict[str, Any]) -> None:
        kind = data.get("kind", cls.KIND)
        if kind != cls.KIND:
            raise DescriptorError(
                f"Document of kind '{kind}' cannot be read as '{cls.KIND}'"
            )

    @staticmethod
    def _ownership(data: Dict[str, Any]) -> Dict[str, Any]:
        """Common module / organization_id keyword arguments."""
        return {
            "module": DataValidator.normalize_string(data.get("module")) or DEFAULT_MODULE,
            "organization_id": DataValidator.normalize_int(data.get("organization_id")),
        }

    @staticmethod
    def _flag(data: Dict[str, Any], key: str, default: bool = False) -> bool:
        value = DataValidator.normalize_bool(data.get(key))
        return default if value is None else value
