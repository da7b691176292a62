#!/usr/bin/env python3
"""
managers package
--------------------
Component managers for the component database.

Available Managers:
    BaseManager: Abstract base class with common utilities
    ComponentManager: Config-driven manager for every component type
    OwnershipManager: Creates missing organizations and modules

Usage:
    from compack.database.managers import ComponentManager

    forms = ComponentManager.for_forms(session, logger)
"""
from .base_manager import BaseManager, HasId
from .component_manager import ComponentManager, ComponentManagerConfig
from .ownership_manager import OwnershipManager

__all__ = [
    "BaseManager",
    "HasId",
    "ComponentManager",
    "ComponentManagerConfig",
    "OwnershipManager",
]
