"""
Organization Models
--------------------

Ownership models referenced by every component.

Models:
    - Organization: Tenant owning organization-scoped components
    - ComponentModule: Named module grouping components for packaging

Both rows are created on demand when a package names an organization
or module the database does not know yet.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from typing import Optional

# --- Third party imports ---
from sqlalchemy import CheckConstraint, String
from sqlalchemy.orm import Mapped, mapped_column

# --- Local imports ---
from .base import Base, TimestampMixin


class Organization(Base, TimestampMixin):
    """
    Represents a tenant organization.

    Organization ids are written into package paths (``org_<id>``), so
    the id is kept stable across export and import rather than being
    reassigned.

    Attributes:
        id: Primary key, also the organization path segment
        name: Display name
    """

    __tablename__ = "organizations"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    def __repr__(self) -> str:
        return f"<Organization(id={self.id}, name={self.name})>"


class ComponentModule(Base, TimestampMixin):
    """
    Represents a component module.

    Attributes:
        id: Primary key
        name: Unique module name (e.g. 'core', 'crm')
    """

    __tablename__ = "component_modules"
    __table_args__ = (
        CheckConstraint("name != ''", name="ck_component_module_non_empty_name"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)

    def __repr__(self) -> str:
        return f"<ComponentModule(name={self.name})>"
