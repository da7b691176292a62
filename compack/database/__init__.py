#!/usr/bin/env python3
"""
Compack Database Package
---------------------------
Persistence layer for runtime-configurable components.

This package provides:
- Core database operations (ComponentDB, session scopes, Alembic)
- Component models and config-driven managers
- Privilege lookup and dynamic form table creation
"""

from .manager import ComponentDB
from compack.core.exceptions import DatabaseError, ValidationError
from .dynamic_tables import DynamicTableService
from .privileges import PrivilegeLookup
from .decorators import log_database_operation, handle_db_errors

__all__ = [
    # Main manager
    "ComponentDB",
    # Exceptions
    "DatabaseError",
    "ValidationError",
    # Services
    "DynamicTableService",
    "PrivilegeLookup",
    # Decorators
    "log_database_operation",
    "handle_db_errors",
]
