#!/usr/bin/env python3
"""
privileges.py
--------------------
Resolves privilege names to privilege tokens.

A privilege name is either one of the built-in Privilege enum values or
the name of a DynamicPrivilege row. Anything else is an error: imports
never substitute a default privilege.

Usage:
    lookup = PrivilegeLookup(session)
    lookup.token("readOrgData")      # -> Privilege.READ_ORG_DATA
    lookup.token("canSeeReports")    # -> DynamicPrivilege row
    lookup.token("nope")             # raises UnknownPrivilegeError
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from typing import Optional, Union

# --- Third party imports ---
from sqlalchemy import select
from sqlalchemy.orm import Session

# --- Local imports ---
from compack.core.exceptions import UnknownPrivilegeError
from compack.database.models import DynamicPrivilege, Privilege

PrivilegeToken = Union[Privilege, DynamicPrivilege]


class PrivilegeLookup:
    """
    Name-to-token resolution over built-in and dynamic privileges.

    Attributes:
        session: SQLAlchemy session used for dynamic privilege queries
    """

    def __init__(self, session: Session):
        self.session = session

    def find(self, name: Optional[str]) -> Optional[PrivilegeToken]:
        """
        Find a privilege token by name.

        Args:
            name: Privilege name

        Returns:
            Built-in Privilege member, DynamicPrivilege row, or None
        """
        if not name:
            return None
        try:
            return Privilege(name)
        except ValueError:
            pass
        return self.session.scalars(
            select(DynamicPrivilege).where(DynamicPrivilege.name == name)
        ).first()

    def token(self, name: str) -> PrivilegeToken:
        """
        Resolve a privilege name, failing on unknown names.

        Raises:
            UnknownPrivilegeError: If no built-in or dynamic privilege matches
        """
        found = self.find(name)
        if found is None:
            raise UnknownPrivilegeError(f"Unknown privilege: {name}")
        return found

    def resolve_name(self, name: Optional[str]) -> Optional[str]:
        """
        Validate an optional privilege name and return its canonical form.

        Args:
            name: Privilege name or None

        Returns:
            None when name is empty, else the token's name
        """
        if not name:
            return None
        found = self.token(name)
        return found.value if isinstance(found, Privilege) else found.name

    @staticmethod
    def is_dynamic(token: PrivilegeToken) -> bool:
        return isinstance(token, DynamicPrivilege)
