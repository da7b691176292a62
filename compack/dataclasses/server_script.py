#!/usr/bin/env python3
"""
server_script.py
-------------------
Descriptor for a reusable server-side script.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from compack.core.validators import DataValidator

from .base import ComponentDescriptor


@dataclass
class ServerScriptDescriptor(ComponentDescriptor):
    """Plain-data form of a ServerScript; ``code`` is a package reference."""

    KIND = "server-script"

    name: str = ""
    arguments: Optional[str] = None
    model: Optional[str] = None
    code: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ServerScriptDescriptor":
        cls._check_kind(data)
        DataValidator.validate_required_fields(data, ["name"])
        return cls(
            **cls._ownership(data),
            name=str(data["name"]).strip(),
            arguments=DataValidator.normalize_string(data.get("arguments")),
            model=DataValidator.normalize_string(data.get("model")),
            code=DataValidator.normalize_string(data.get("code")),
        )
