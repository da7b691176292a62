"""
dataclasses package
-------------------
Descriptor dataclasses for exported components.

This package provides the plain-data form of every component kind, as
written to and read from package metadata documents:
- UIResourceDescriptor (with embedded EndpointDescriptor list)
- FormDescriptor, EventListenerDescriptor, SchedulerDescriptor
- PrivilegeDescriptor, ServerScriptDescriptor

``descriptor_from_dict`` picks the descriptor class from a document's
``kind`` key.
"""
from typing import Any, Dict, Type

from compack.core.exceptions import DescriptorError, ValidationError
from compack.dataclasses.base import ComponentDescriptor
from compack.dataclasses.endpoint import EndpointDescriptor
from compack.dataclasses.event_listener import EventListenerDescriptor
from compack.dataclasses.form import FormDescriptor
from compack.dataclasses.privilege import PrivilegeDescriptor
from compack.dataclasses.scheduler import SchedulerDescriptor
from compack.dataclasses.server_script import ServerScriptDescriptor
from compack.dataclasses.ui_resource import UIResourceDescriptor

DESCRIPTOR_TYPES: Dict[str, Type[ComponentDescriptor]] = {
    cls.KIND: cls
    for cls in (
        UIResourceDescriptor,
        EndpointDescriptor,
        FormDescriptor,
        EventListenerDescriptor,
        SchedulerDescriptor,
        PrivilegeDescriptor,
        ServerScriptDescriptor,
    )
}


def descriptor_from_dict(data: Any) -> ComponentDescriptor:
    """
    Build the descriptor named by a document's ``kind`` key.

    Raises:
        DescriptorError: If the document is not a mapping, has an unknown
            kind or holds values that cannot be coerced
    """
    if not isinstance(data, dict):
        raise DescriptorError("Metadata document must be a mapping")
    kind = data.get("kind")
    descriptor_class = DESCRIPTOR_TYPES.get(kind)
    if descriptor_class is None:
        raise DescriptorError(f"Unknown component kind '{kind}'")
    try:
        return descriptor_class.from_dict(data)
    except ValidationError as e:
        raise DescriptorError(f"Invalid '{kind}' document: {e}") from e


__all__ = [
    "ComponentDescriptor",
    "DESCRIPTOR_TYPES",
    "EndpointDescriptor",
    "EventListenerDescriptor",
    "FormDescriptor",
    "PrivilegeDescriptor",
    "SchedulerDescriptor",
    "ServerScriptDescriptor",
    "UIResourceDescriptor",
    "descriptor_from_dict",
]
