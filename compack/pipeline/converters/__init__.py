"""
converters package
------------------
Per-type converters between component entities and descriptors.

Available Converters:
    UIResourceConverter: UI resources, cascading to their endpoints
    EndpointConverter: Endpoints (embedded in resource documents)
    FormConverter: Forms (ensures the record table on import)
    EventListenerConverter, SchedulerConverter: Automation components
    PrivilegeConverter: Dynamic privileges (plus upgrade SQL)
    ServerScriptConverter: Server-side scripts

Usage:
    from compack.pipeline.converters import ConversionContext, ConverterRegistry

    registry = ConverterRegistry.build(ConversionContext.from_db(db))
"""
from .base import (
    ComponentConverter,
    ConversionContext,
    remove_component_files,
    save_component_files,
    write_component,
)
from .endpoint import EndpointConverter
from .event_listener import EventListenerConverter
from .form import FormConverter
from .privilege import PrivilegeConverter
from .registry import ConverterRegistry
from .scheduler import SchedulerConverter
from .server_script import ServerScriptConverter
from .ui_resource import UIResourceConverter

__all__ = [
    "ComponentConverter",
    "ConversionContext",
    "ConverterRegistry",
    "EndpointConverter",
    "EventListenerConverter",
    "FormConverter",
    "PrivilegeConverter",
    "SchedulerConverter",
    "ServerScriptConverter",
    "UIResourceConverter",
    "remove_component_files",
    "save_component_files",
    "write_component",
]
