#!/usr/bin/env python3
"""
event_listener.py
-------------------
Descriptor for an event listener.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from compack.core.validators import DataValidator

from .base import ComponentDescriptor


@dataclass
class EventListenerDescriptor(ComponentDescriptor):
    """Plain-data form of an EventListener (all fields map one to one)."""

    KIND = "event-listener"

    event_name: str = ""
    event_class_name: Optional[str] = None
    event_object_type: Optional[str] = None
    consumer_class_name: Optional[str] = None
    consumer_method_name: Optional[str] = None
    consumer_parameter_class_name: Optional[str] = None
    static_data_1: Optional[str] = None
    static_data_2: Optional[str] = None
    static_data_3: Optional[str] = None
    static_data_4: Optional[str] = None
    index_string: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EventListenerDescriptor":
        cls._check_kind(data)
        DataValidator.validate_required_fields(data, ["event_name"])
        text = DataValidator.normalize_string
        return cls(
            **cls._ownership(data),
            event_name=str(data["event_name"]).strip(),
            event_class_name=text(data.get("event_class_name")),
            event_object_type=text(data.get("event_object_type")),
            consumer_class_name=text(data.get("consumer_class_name")),
            consumer_method_name=text(data.get("consumer_method_name")),
            consumer_parameter_class_name=text(data.get("consumer_parameter_class_name")),
            static_data_1=text(data.get("static_data_1")),
            static_data_2=text(data.get("static_data_2")),
            static_data_3=text(data.get("static_data_3")),
            static_data_4=text(data.get("static_data_4")),
            index_string=text(data.get("index_string")),
        )
