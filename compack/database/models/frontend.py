"""
Frontend Models
----------------

Models for UI resources and the HTTP endpoints attached to them.

Models:
    - UIResource: Page, dashboard or UI component with its content
    - Endpoint: HTTP endpoint owned by a UI resource, with its script

A UI resource owns its endpoints: exporting a resource exports its
endpoints, and deleting a resource deletes them.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from typing import Any, Dict, List, Optional

# --- Third party imports ---
from sqlalchemy import JSON, Boolean, CheckConstraint, ForeignKey, String, Text
from sqlalchemy import Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

# --- Local imports ---
from .base import Base, ComponentMixin
from .enums import AccessScope, HttpMethod, ResourceCategory, ResourceKind, ResponseKind


class UIResource(Base, ComponentMixin):
    """
    Represents a frontend resource served by the application.

    Natural key: (name, access_scope, organization_id).

    Attributes:
        id: Primary key
        name: Resource name, also its URL path and file name in a package
        access_scope: Visibility tier (enum)
        required_privilege: Privilege name needed to view the resource
        resource_kind: Content type (enum)
        category: Page, UI component or dashboard (enum)
        content: Resource body (HTML, JS...)
        embeddable: Whether the resource may be embedded in other pages
        include_in_sitemap: Whether the resource is listed in the sitemap

    Relationships:
        endpoints: One-to-many with Endpoint (owned, deleted with the resource)
    """

    __tablename__ = "ui_resources"
    __table_args__ = (
        CheckConstraint("name != ''", name="ck_ui_resource_non_empty_name"),
    )

    # ---- Primary fields ----
    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    access_scope: Mapped[AccessScope] = mapped_column(
        SQLEnum(AccessScope, values_callable=lambda x: [e.value for e in x]),
        nullable=False,
        default=AccessScope.PUBLIC,
    )
    required_privilege: Mapped[Optional[str]] = mapped_column(String(255))
    resource_kind: Mapped[ResourceKind] = mapped_column(
        SQLEnum(ResourceKind, values_callable=lambda x: [e.value for e in x]),
        nullable=False,
        default=ResourceKind.HTML,
    )
    category: Mapped[ResourceCategory] = mapped_column(
        SQLEnum(ResourceCategory, values_callable=lambda x: [e.value for e in x]),
        nullable=False,
        default=ResourceCategory.PAGE,
    )
    content: Mapped[Optional[str]] = mapped_column(Text)
    embeddable: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    include_in_sitemap: Mapped[bool] = mapped_column(
        Boolean, default=False, nullable=False
    )

    # ---- Relationships ----
    endpoints: Mapped[List["Endpoint"]] = relationship(
        "Endpoint",
        back_populates="resource",
        cascade="all, delete-orphan",
        order_by="Endpoint.id",
    )

    @property
    def file_name(self) -> str:
        """Content file name including the kind's extension."""
        return f"{self.name}.{self.resource_kind.extension}"

    def __repr__(self) -> str:
        return (
            f"<UIResource(name={self.name}, scope={self.access_scope.value}, "
            f"org={self.organization_id})>"
        )


class Endpoint(Base, ComponentMixin):
    """
    Represents an HTTP endpoint attached to a UI resource.

    Natural key: (resource_id, sub_path, http_method, organization_id).

    Attributes:
        id: Primary key
        resource_id: Owning UI resource
        sub_path: Path below the resource URL ('' for the resource itself)
        http_method: GET or POST (enum)
        response_kind: How the result is rendered (enum)
        http_headers: Response headers as a name -> value mapping
        model_attributes: Names of model attributes exposed to the response
        code: Server-side script run for each request
    """

    __tablename__ = "endpoints"

    # ---- Primary fields ----
    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    resource_id: Mapped[int] = mapped_column(
        ForeignKey("ui_resources.id", ondelete="CASCADE"), nullable=False, index=True
    )
    sub_path: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    http_method: Mapped[HttpMethod] = mapped_column(
        SQLEnum(HttpMethod, values_callable=lambda x: [e.value for e in x]),
        nullable=False,
        default=HttpMethod.GET,
    )
    response_kind: Mapped[ResponseKind] = mapped_column(
        SQLEnum(ResponseKind, values_callable=lambda x: [e.value for e in x]),
        nullable=False,
        default=ResponseKind.HTML,
    )
    http_headers: Mapped[Dict[str, Any]] = mapped_column(JSON, default=dict)
    model_attributes: Mapped[List[str]] = mapped_column(JSON, default=list)
    code: Mapped[Optional[str]] = mapped_column(Text)

    # ---- Relationships ----
    resource: Mapped["UIResource"] = relationship(
        "UIResource", back_populates="endpoints"
    )

    def __repr__(self) -> str:
        return (
            f"<Endpoint(resource_id={self.resource_id}, "
            f"method={self.http_method.value}, sub_path={self.sub_path!r})>"
        )
