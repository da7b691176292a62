"""
Database Models Package
------------------------

SQLAlchemy ORM models for the component database.

This package provides a modular organization of database models:
- base: Base class and mixins
- enums: Enumeration types
- organization: Organization, ComponentModule
- frontend: UIResource, Endpoint
- forms: Form
- automation: EventListener, Scheduler, ServerScript
- security: DynamicPrivilege

Usage:
    from compack.database.models import UIResource, Endpoint, Form
"""
# Base classes
from .base import DEFAULT_MODULE, Base, ComponentMixin, TimestampMixin

# Enumerations
from .enums import (
    AccessScope,
    HttpMethod,
    Privilege,
    PrivilegeGroup,
    ResourceCategory,
    ResourceKind,
    ResponseKind,
)

# Ownership
from .organization import ComponentModule, Organization

# Components
from .frontend import Endpoint, UIResource
from .forms import Form
from .automation import EventListener, Scheduler, ServerScript
from .security import DynamicPrivilege

__all__ = [
    # Base
    "Base",
    "ComponentMixin",
    "TimestampMixin",
    "DEFAULT_MODULE",
    # Enums
    "AccessScope",
    "HttpMethod",
    "Privilege",
    "PrivilegeGroup",
    "ResourceCategory",
    "ResourceKind",
    "ResponseKind",
    # Ownership
    "Organization",
    "ComponentModule",
    # Components
    "UIResource",
    "Endpoint",
    "Form",
    "EventListener",
    "Scheduler",
    "ServerScript",
    "DynamicPrivilege",
]
