#!/usr/bin/env python3
"""
endpoint.py
-------------------
Descriptor for an HTTP endpoint attached to a UI resource.

Endpoint descriptors are embedded in their owning resource's document;
they never appear as documents of their own.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from compack.core.validators import DataValidator

from .base import ComponentDescriptor


@dataclass
class EndpointDescriptor(ComponentDescriptor):
    """
    Plain-data form of an Endpoint.

    Attributes:
        sub_path: Path below the owning resource ('' for the resource itself)
        http_method: 'GET' or 'POST'
        response_kind: Response kind value (e.g. 'HTML', 'MODEL_AS_JSON')
        http_headers: Response headers
        model_attributes: Model attribute names exposed to the response
        code: Package-relative reference to the endpoint script
        resource_id: Owning resource id, assigned during import only
    """

    KIND = "endpoint"

    sub_path: str = ""
    http_method: str = "GET"
    response_kind: str = "HTML"
    http_headers: Dict[str, str] = field(default_factory=dict)
    model_attributes: List[str] = field(default_factory=list)
    code: Optional[str] = None
    resource_id: Optional[int] = field(
        default=None, compare=False, metadata={"transient": True}
    )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EndpointDescriptor":
        cls._check_kind(data)
        return cls(
            **cls._ownership(data),
            sub_path=DataValidator.normalize_string(data.get("sub_path")) or "",
            http_method=DataValidator.normalize_string(data.get("http_method")) or "GET",
            response_kind=DataValidator.normalize_string(data.get("response_kind")) or "HTML",
            http_headers=DataValidator.normalize_mapping(data.get("http_headers")),
            model_attributes=DataValidator.normalize_list(data.get("model_attributes")),
            code=DataValidator.normalize_string(data.get("code")),
        )
