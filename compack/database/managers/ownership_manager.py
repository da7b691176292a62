#!/usr/bin/env python3
"""
ownership_manager.py
--------------------
Ensures the organization and module rows a component points at exist.

Packages may be imported into a database that has never seen the
organization ids or module names they carry; those rows are created
on demand before the component itself is saved.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from typing import List, Optional

# --- Third party imports ---
from sqlalchemy import select

# --- Local imports ---
from compack.core.logging_manager import safe_logger
from compack.database.decorators import handle_db_errors
from compack.database.models import DEFAULT_MODULE, ComponentModule, Organization

from .base_manager import BaseManager


class OwnershipManager(BaseManager):
    """Manager for Organization and ComponentModule rows."""

    @handle_db_errors
    def ensure_organization(self, organization_id: Optional[int]) -> Optional[Organization]:
        """
        Get or create the organization with the given id.

        Args:
            organization_id: Organization id, None for global components

        Returns:
            The organization, or None when organization_id is None
        """
        if organization_id is None:
            return None
        existing = self.session.get(Organization, organization_id)
        if existing is not None:
            return existing
        safe_logger(self.logger).log_info(
            "Creating missing organization", {"organization_id": organization_id}
        )
        return self._get_or_create(Organization, {"id": organization_id})

    @handle_db_errors
    def ensure_module(self, name: Optional[str]) -> ComponentModule:
        """
        Get or create the module with the given name.

        Args:
            name: Module name; empty or None means the default module

        Returns:
            The module row
        """
        return self._get_or_create(ComponentModule, {"name": name or DEFAULT_MODULE})

    @handle_db_errors
    def list_modules(self) -> List[str]:
        """Names of all known modules, sorted."""
        return list(
            self.session.scalars(select(ComponentModule.name).order_by(ComponentModule.name))
        )
