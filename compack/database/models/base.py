"""
Base Classes and Mixins
------------------------

Foundational ORM classes for the component database.

Classes:
    - Base: Declarative base for all SQLAlchemy models
    - TimestampMixin: created_at / updated_at columns
    - ComponentMixin: Columns shared by every exportable component

This module provides the core infrastructure that other model modules build upon.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from datetime import datetime, timezone
from typing import Optional

# --- Third party ---
from sqlalchemy import DateTime, ForeignKey, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

DEFAULT_MODULE = "core"


# --- Base ORM class ---
class Base(DeclarativeBase):
    """
    Base class for all ORM models.

    Serves as the declarative base for SQLAlchemy models and provides
    access to the metadata object for table creation and migrations.
    """

    pass


# --- Timestamps ---
class TimestampMixin:
    """
    Mixin adding record bookkeeping timestamps.

    Attributes:
        created_at: When this database record was created
        updated_at: When this database record was last updated
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )


# --- Components ---
class ComponentMixin(TimestampMixin):
    """
    Mixin for runtime-configurable components.

    Every exportable component belongs to a module (the unit of packaging
    and bulk deletion) and optionally to an organization. A component
    without an organization is global.

    Attributes:
        module_name: Owning module name
        organization_id: Owning organization, None for global components
    """

    module_name: Mapped[str] = mapped_column(
        String(255), nullable=False, default=DEFAULT_MODULE, index=True
    )
    organization_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("organizations.id", ondelete="CASCADE"), nullable=True, index=True
    )

    @property
    def is_global(self) -> bool:
        """Check if the component is shared across organizations."""
        return self.organization_id is None
