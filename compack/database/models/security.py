"""
Security Models
----------------

Models:
    - DynamicPrivilege: Privilege created at runtime, resolved by name

Built-in privileges are static enum members (see enums.Privilege) and
are never stored.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from typing import Optional

# --- Third party imports ---
from sqlalchemy import Boolean, CheckConstraint, String, Text
from sqlalchemy import Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column

# --- Local imports ---
from .base import DEFAULT_MODULE, Base, TimestampMixin
from .enums import PrivilegeGroup


class DynamicPrivilege(Base, TimestampMixin):
    """
    Represents a privilege defined at runtime.

    Dynamic privileges are global: they carry no organization.
    Natural key: name.

    Attributes:
        id: Primary key
        name: Unique privilege token
        category: Free-form category used by administration screens
        privilege_group: Administrative group (enum)
        label: Human-readable label
        index_string: Search index text
        removable: Whether administrators may delete the privilege
        module_name: Owning module name
    """

    __tablename__ = "dynamic_privileges"
    __table_args__ = (
        CheckConstraint("name != ''", name="ck_dynamic_privilege_non_empty_name"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    category: Mapped[Optional[str]] = mapped_column(String(255))
    privilege_group: Mapped[PrivilegeGroup] = mapped_column(
        SQLEnum(PrivilegeGroup, values_callable=lambda x: [e.value for e in x]),
        nullable=False,
        default=PrivilegeGroup.DYNAMIC,
    )
    label: Mapped[Optional[str]] = mapped_column(String(255))
    index_string: Mapped[Optional[str]] = mapped_column(Text)
    removable: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    module_name: Mapped[str] = mapped_column(
        String(255), nullable=False, default=DEFAULT_MODULE, index=True
    )

    @property
    def organization_id(self) -> None:
        """Dynamic privileges are always global."""
        return None

    def __repr__(self) -> str:
        return f"<DynamicPrivilege(name={self.name}, group={self.privilege_group})>"
