"""
Form Models
------------

Models for data-entry forms backed by dynamically created tables.

Models:
    - Form: Form definition with its privileges, table layout and script

Each form stores its records in a table named by ``table_name``; the
table is created on demand when the form is imported.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from typing import List, Optional

# --- Third party imports ---
from sqlalchemy import JSON, Boolean, CheckConstraint, String, Text
from sqlalchemy.orm import Mapped, mapped_column

# --- Local imports ---
from .base import Base, ComponentMixin


class Form(Base, ComponentMixin):
    """
    Represents a form definition.

    Natural key: name.

    Attributes:
        id: Primary key
        name: Unique form name
        read_privilege: Privilege name needed to read form records
        write_privilege: Privilege name needed to write form records
        table_name: Name of the dynamic table holding form records
        table_columns: Columns shown in the records table view
        filter_columns: Columns offered as filters
        table_view: Custom table view template, if any
        register_api_crud_controller: Expose JSON CRUD endpoints
        register_html_crud_controller: Expose HTML CRUD pages
        show_on_organization_dashboard: List the form on the dashboard
        code: Form definition script
    """

    __tablename__ = "forms"
    __table_args__ = (CheckConstraint("name != ''", name="ck_form_non_empty_name"),)

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    read_privilege: Mapped[Optional[str]] = mapped_column(String(255))
    write_privilege: Mapped[Optional[str]] = mapped_column(String(255))
    table_name: Mapped[Optional[str]] = mapped_column(String(255))
    table_columns: Mapped[List[str]] = mapped_column(JSON, default=list)
    filter_columns: Mapped[List[str]] = mapped_column(JSON, default=list)
    table_view: Mapped[Optional[str]] = mapped_column(Text)
    register_api_crud_controller: Mapped[bool] = mapped_column(
        Boolean, default=False, nullable=False
    )
    register_html_crud_controller: Mapped[bool] = mapped_column(
        Boolean, default=False, nullable=False
    )
    show_on_organization_dashboard: Mapped[bool] = mapped_column(
        Boolean, default=False, nullable=False
    )
    code: Mapped[Optional[str]] = mapped_column(Text)

    @property
    def privilege_names(self) -> List[str]:
        """Read and write privilege names that are set."""
        return [p for p in (self.read_privilege, self.write_privilege) if p]

    def __repr__(self) -> str:
        return f"<Form(name={self.name}, table={self.table_name})>"
