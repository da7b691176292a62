"""
Enumeration Types
------------------

Enum classes for the component models.

Enums:
    - AccessScope: Visibility tier of a UI resource (public, global, ...)
    - ResourceKind: Content type of a UI resource, with its file extension
    - ResourceCategory: Page-like resource vs. API-bound UI component
    - HttpMethod: HTTP verb an endpoint answers to
    - ResponseKind: How an endpoint renders its result
    - PrivilegeGroup: Grouping of privileges for administration screens
    - Privilege: Built-in privilege tokens

Values are the strings written to the database and to package documents.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from enum import Enum
from typing import List


class AccessScope(str, Enum):
    """
    Visibility tier of a UI resource, encoded as a package path segment.
    - PUBLIC: Served without authentication
    - GLOBAL: Available to every authenticated user
    - ORGANIZATION: Served within an organization context
    - INTERNAL: Backend-only resources
    """

    PUBLIC = "public"
    GLOBAL = "global"
    ORGANIZATION = "organization"
    INTERNAL = "internal"

    @classmethod
    def choices(cls) -> List[str]:
        """Get all available access scope choices."""
        return [scope.value for scope in cls]

    @property
    def path_segment(self) -> str:
        """Directory name used for this scope inside a package."""
        return self.value


class ResourceKind(str, Enum):
    """Content type of a UI resource."""

    HTML = "html"
    JS = "js"
    CSS = "css"
    JSON = "json"
    CSV = "csv"
    TEXT = "text"
    XML = "xml"

    @classmethod
    def choices(cls) -> List[str]:
        return [kind.value for kind in cls]

    @property
    def extension(self) -> str:
        """File extension (without dot) of the content file."""
        return "txt" if self is ResourceKind.TEXT else self.value


class ResourceCategory(str, Enum):
    """
    Category of a UI resource.
    - PAGE: Regular page or template
    - UI_COMPONENT: Component bound to one or more HTTP endpoints
    - DASHBOARD: Dashboard page
    """

    PAGE = "page"
    UI_COMPONENT = "ui_component"
    DASHBOARD = "dashboard"

    @classmethod
    def choices(cls) -> List[str]:
        return [category.value for category in cls]

    @property
    def package_folder(self) -> str:
        """Package category folder holding resources of this category."""
        return "ui-component" if self is ResourceCategory.UI_COMPONENT else "resource"


class HttpMethod(str, Enum):
    """HTTP method an endpoint answers to."""

    GET = "GET"
    POST = "POST"

    @classmethod
    def choices(cls) -> List[str]:
        return [method.value for method in cls]


class ResponseKind(str, Enum):
    """
    How an endpoint returns its result.
    - HTML: Rendered through the owning UI resource
    - MODEL_AS_JSON: Model attributes serialized as JSON
    - FILE: File download
    - STREAM: Streamed response
    """

    HTML = "HTML"
    MODEL_AS_JSON = "MODEL_AS_JSON"
    FILE = "FILE"
    STREAM = "STREAM"

    @classmethod
    def choices(cls) -> List[str]:
        return [kind.value for kind in cls]


class PrivilegeGroup(str, Enum):
    """Administrative grouping of privileges."""

    ADMIN = "ADMIN"
    ORGANIZATION = "ORGANIZATION"
    USER = "USER"
    ROLE = "ROLE"
    SETTINGS = "SETTINGS"
    DYNAMIC = "DYNAMIC"

    @classmethod
    def choices(cls) -> List[str]:
        return [group.value for group in cls]


class Privilege(str, Enum):
    """
    Built-in privilege tokens.

    Dynamic privileges created at runtime live in the dynamic_privileges
    table; both are resolved by name through the privilege lookup.
    """

    READ_ORG_DATA = "readOrgData"
    MANAGE_ORG_DATA = "manageOrgData"
    READ_USER_DATA = "readUserData"
    MANAGE_USER_DATA = "manageUserData"
    CAN_READ_BACKEND = "canReadBackend"
    CAN_MANAGE_BACKEND = "canManageBackend"
    CAN_ACCESS_GLOBAL_SETTINGS = "canAccessGlobalSettings"
    CAN_IMPERSONATE = "canImpersonate"

    @classmethod
    def choices(cls) -> List[str]:
        return [privilege.value for privilege in cls]

    @property
    def group(self) -> PrivilegeGroup:
        group_map = {
            Privilege.READ_ORG_DATA: PrivilegeGroup.ORGANIZATION,
            Privilege.MANAGE_ORG_DATA: PrivilegeGroup.ORGANIZATION,
            Privilege.READ_USER_DATA: PrivilegeGroup.USER,
            Privilege.MANAGE_USER_DATA: PrivilegeGroup.USER,
            Privilege.CAN_IMPERSONATE: PrivilegeGroup.USER,
        }
        return group_map.get(self, PrivilegeGroup.ADMIN)
