#!/usr/bin/env python3
"""
component_manager.py
--------------------
Config-driven manager for exportable components.

Every component type is defined by a ComponentManagerConfig that names:
- The model class
- The natural key fields used for lookup-or-create on import
- Defaults substituted for missing key values (e.g. endpoint sub-path)

Usage:
    resources = ComponentManager.for_resources(session, logger)
    home = resources.find(name="home", access_scope=AccessScope.PUBLIC,
                          organization_id=None)

    forms = ComponentManager.for_forms(session, logger)
    forms.delete_by_module("crm")
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Type

# --- Third party imports ---
from sqlalchemy import select
from sqlalchemy.orm import Session

# --- Local imports ---
from compack.core.exceptions import ValidationError
from compack.core.logging_manager import PackLogger, safe_logger
from compack.database.decorators import handle_db_errors, log_database_operation
from compack.database.models import (
    DynamicPrivilege,
    Endpoint,
    EventListener,
    Form,
    Scheduler,
    ServerScript,
    UIResource,
)

from .base_manager import BaseManager


@dataclass
class ComponentManagerConfig:
    """
    Configuration for a component manager.

    Attributes:
        model_class: SQLAlchemy model class
        key_fields: Natural key field names, in lookup order
        display_name: Human-readable name for logs and error messages
        key_defaults: Values substituted when a key field is None
    """

    model_class: Type
    key_fields: Tuple[str, ...]
    display_name: str
    key_defaults: Dict[str, Any] = field(default_factory=dict)


RESOURCE_CONFIG = ComponentManagerConfig(
    model_class=UIResource,
    key_fields=("name", "access_scope", "organization_id"),
    display_name="ui resource",
)

ENDPOINT_CONFIG = ComponentManagerConfig(
    model_class=Endpoint,
    key_fields=("resource_id", "sub_path", "http_method", "organization_id"),
    display_name="endpoint",
    key_defaults={"sub_path": ""},
)

FORM_CONFIG = ComponentManagerConfig(
    model_class=Form,
    key_fields=("name",),
    display_name="form",
)

EVENT_LISTENER_CONFIG = ComponentManagerConfig(
    model_class=EventListener,
    key_fields=("event_name", "organization_id"),
    display_name="event listener",
)

SCHEDULER_CONFIG = ComponentManagerConfig(
    model_class=Scheduler,
    key_fields=("event_data", "organization_id"),
    display_name="scheduler",
)

PRIVILEGE_CONFIG = ComponentManagerConfig(
    model_class=DynamicPrivilege,
    key_fields=("name",),
    display_name="dynamic privilege",
)

SERVER_SCRIPT_CONFIG = ComponentManagerConfig(
    model_class=ServerScript,
    key_fields=("name", "organization_id"),
    display_name="server script",
)


class ComponentManager(BaseManager):
    """
    Generic manager for component entities.

    Uses configuration to provide natural-key lookup, persistence and
    module-wide listing and deletion for every component type.
    """

    def __init__(
        self,
        session: Session,
        logger: Optional[PackLogger],
        config: ComponentManagerConfig,
    ):
        """
        Initialize the component manager.

        Args:
            session: SQLAlchemy session
            logger: Optional logger for operation tracking
            config: Component-specific configuration
        """
        super().__init__(session, logger)
        self.config = config

    # -------------------------------------------------------------------------
    # Factory Methods
    # -------------------------------------------------------------------------

    @classmethod
    def for_resources(
        cls, session: Session, logger: Optional[PackLogger] = None
    ) -> "ComponentManager":
        """Create a manager for UIResource entities."""
        return cls(session, logger, RESOURCE_CONFIG)

    @classmethod
    def for_endpoints(
        cls, session: Session, logger: Optional[PackLogger] = None
    ) -> "ComponentManager":
        """Create a manager for Endpoint entities."""
        return cls(session, logger, ENDPOINT_CONFIG)

    @classmethod
    def for_forms(
        cls, session: Session, logger: Optional[PackLogger] = None
    ) -> "ComponentManager":
        """Create a manager for Form entities."""
        return cls(session, logger, FORM_CONFIG)

    @classmethod
    def for_event_listeners(
        cls, session: Session, logger: Optional[PackLogger] = None
    ) -> "ComponentManager":
        """Create a manager for EventListener entities."""
        return cls(session, logger, EVENT_LISTENER_CONFIG)

    @classmethod
    def for_schedulers(
        cls, session: Session, logger: Optional[PackLogger] = None
    ) -> "ComponentManager":
        """Create a manager for Scheduler entities."""
        return cls(session, logger, SCHEDULER_CONFIG)

    @classmethod
    def for_privileges(
        cls, session: Session, logger: Optional[PackLogger] = None
    ) -> "ComponentManager":
        """Create a manager for DynamicPrivilege entities."""
        return cls(session, logger, PRIVILEGE_CONFIG)

    @classmethod
    def for_server_scripts(
        cls, session: Session, logger: Optional[PackLogger] = None
    ) -> "ComponentManager":
        """Create a manager for ServerScript entities."""
        return cls(session, logger, SERVER_SCRIPT_CONFIG)

    # -------------------------------------------------------------------------
    # Natural Keys
    # -------------------------------------------------------------------------

    def normalize_key(self, **key: Any) -> Dict[str, Any]:
        """
        Complete and normalize a natural key.

        Args:
            **key: Natural key values by field name

        Returns:
            Key dictionary with every key field, defaults applied

        Raises:
            ValidationError: If a key field is unknown or an unscoped
                field (no default, not organization_id) is missing
        """
        unknown = set(key) - set(self.config.key_fields)
        if unknown:
            raise ValidationError(
                f"Unknown key fields for {self.config.display_name}: {sorted(unknown)}"
            )

        normalized: Dict[str, Any] = {}
        for field_name in self.config.key_fields:
            value = key.get(field_name)
            if value is None:
                value = self.config.key_defaults.get(field_name)
            if value is None and field_name != "organization_id":
                raise ValidationError(
                    f"Missing key field '{field_name}' for {self.config.display_name}"
                )
            normalized[field_name] = value
        return normalized

    def natural_key(self, entity: Any) -> Dict[str, Any]:
        """Natural key values of an existing entity."""
        return {name: getattr(entity, name) for name in self.config.key_fields}

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    @handle_db_errors
    def find(self, **key: Any) -> Optional[Any]:
        """
        Look up a component by its natural key.

        Args:
            **key: Natural key values; None organization_id means global

        Returns:
            The matching entity, or None
        """
        normalized = self.normalize_key(**key)
        model = self.config.model_class
        stmt = select(model).where(*self._key_criteria(model, normalized))
        return self.session.scalars(stmt).first()

    @handle_db_errors
    def find_all(self, **criteria: Any) -> List[Any]:
        """
        List components matching arbitrary column values, ordered by id.

        Args:
            **criteria: Column name -> value (None compares as NULL)
        """
        model = self.config.model_class
        stmt = (
            select(model)
            .where(*self._key_criteria(model, criteria))
            .order_by(model.id)
        )
        return list(self.session.scalars(stmt))

    def list_all(self) -> List[Any]:
        """All components of this type, ordered by id."""
        return self.find_all()

    def find_by_module(self, module_name: str) -> List[Any]:
        """All components belonging to a module."""
        return self.find_all(module_name=module_name)

    def count(self) -> int:
        return len(self.list_all())

    # -------------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------------

    @handle_db_errors
    def save(self, entity: Any) -> Any:
        """
        Add the entity to the session and flush it, assigning its id.

        Args:
            entity: Component instance

        Returns:
            The same entity, now persistent
        """

        def _flush():
            self.session.add(entity)
            self.session.flush()
            return entity

        return self._execute_with_retry(_flush)

    @handle_db_errors
    def delete(self, entity: Any) -> None:
        """Delete a component (owned children follow ORM cascades)."""
        self.session.delete(entity)
        self.session.flush()

    @handle_db_errors
    @log_database_operation("delete_by_module")
    def delete_by_module(self, module_name: str) -> int:
        """
        Delete every component of this type in a module.

        Rows are deleted one by one through the ORM so relationship
        cascades (resource -> endpoints) apply.

        Args:
            module_name: Module whose components are removed

        Returns:
            Number of deleted components
        """
        entities = self.find_by_module(module_name)
        for entity in entities:
            self.session.delete(entity)
        self.session.flush()

        safe_logger(self.logger).log_info(
            f"Deleted {self.config.display_name} components",
            {"module": module_name, "count": len(entities)},
        )
        return len(entities)
