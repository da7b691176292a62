#!/usr/bin/env python3
"""
registry.py
-----------
Lookup tables from entity and descriptor types to converters.

The tables are built once per conversion context from a fixed list;
there is no scanning or dynamic registration. A type missing from the
tables is a configuration error and fails immediately.

Usage:
    registry = ConverterRegistry.build(context)
    converter = registry.for_entity(form)
    converter = registry.for_descriptor(descriptor)
"""
from __future__ import annotations

from typing import Any, Dict, List, Type

from compack.core.exceptions import UnrecognizedTypeError
from compack.dataclasses import ComponentDescriptor

from .base import ComponentConverter, ConversionContext
from .endpoint import EndpointConverter
from .event_listener import EventListenerConverter
from .form import FormConverter
from .privilege import PrivilegeConverter
from .scheduler import SchedulerConverter
from .server_script import ServerScriptConverter
from .ui_resource import UIResourceConverter


class ConverterRegistry:
    """
    Static entity-type and descriptor-type tables.

    Attributes:
        by_entity: Entity class -> converter
        by_descriptor: Descriptor class -> converter
    """

    def __init__(self, converters: List[ComponentConverter]):
        self.by_entity: Dict[Type, ComponentConverter] = {
            c.entity_type: c for c in converters
        }
        self.by_descriptor: Dict[Type, ComponentConverter] = {
            c.descriptor_type: c for c in converters
        }

    @classmethod
    def build(cls, context: ConversionContext) -> "ConverterRegistry":
        """Build the registry with every known converter bound to ``context``."""
        endpoints = EndpointConverter(context)
        return cls(
            [
                UIResourceConverter(context, endpoints),
                endpoints,
                FormConverter(context),
                EventListenerConverter(context),
                SchedulerConverter(context),
                PrivilegeConverter(context),
                ServerScriptConverter(context),
            ]
        )

    def for_entity(self, entity: Any) -> ComponentConverter:
        """
        Converter for an entity instance.

        Raises:
            UnrecognizedTypeError: If no converter handles the entity's type
        """
        converter = self.by_entity.get(type(entity))
        if converter is None:
            raise UnrecognizedTypeError(
                f"No converter registered for entity {type(entity).__name__}"
            )
        return converter

    def for_descriptor(self, descriptor: ComponentDescriptor) -> ComponentConverter:
        """
        Converter for a descriptor instance.

        Raises:
            UnrecognizedTypeError: If no converter handles the descriptor's type
        """
        converter = self.by_descriptor.get(type(descriptor))
        if converter is None:
            raise UnrecognizedTypeError(
                f"No converter registered for descriptor {type(descriptor).__name__}"
            )
        return converter
