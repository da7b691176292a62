#!/usr/bin/env python3
"""
base_manager.py
--------------------
Base manager providing common lookup and persistence utilities.
All component managers inherit from this class.

Key Features:
    - Retry logic for database lock handling
    - Generic get-or-create for ownership rows (organizations, modules)
    - Natural-key filtering that treats None as SQL NULL

Usage:
    class OwnershipManager(BaseManager):
        def ensure_module(self, name: str) -> ComponentModule:
            return self._get_or_create(ComponentModule, {"name": name})
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import time
from abc import ABC
from typing import Any, Callable, Dict, Optional, Protocol, Type, TypeVar

# --- Third party imports ---
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.orm import Mapped, Session

# --- Local imports ---
from compack.core.exceptions import DatabaseError
from compack.core.logging_manager import PackLogger, safe_logger


class HasId(Protocol):
    """Protocol for objects that have an id attribute."""

    id: Mapped[int]


T = TypeVar("T", bound=HasId)


class BaseManager(ABC):
    """
    Abstract base manager providing common utilities.

    Attributes:
        session: SQLAlchemy session for database operations
        logger: Optional logger for operation tracking
    """

    def __init__(self, session: Session, logger: Optional[PackLogger] = None):
        """
        Initialize the base manager.

        Args:
            session: SQLAlchemy session
            logger: Optional logger for operation tracking
        """
        self.session = session
        self.logger = logger

    # -------------------------------------------------------------------------
    # Core Helper Methods
    # -------------------------------------------------------------------------

    def _execute_with_retry(
        self,
        operation: Callable,
        max_retries: int = 3,
        retry_delay: float = 0.1,
    ) -> Any:
        """
        Execute database operation with retry on lock.

        Args:
            operation: Callable that performs the operation
            max_retries: Maximum number of retry attempts
            retry_delay: Base delay between retries (exponential backoff)

        Returns:
            Result of the operation

        Raises:
            OperationalError: If the error is not a lock or retries are exhausted
        """
        for attempt in range(max_retries):
            try:
                return operation()
            except OperationalError as e:
                error_msg = str(e).lower()

                if (
                    "locked" in error_msg or "busy" in error_msg
                ) and attempt < max_retries - 1:
                    wait_time = retry_delay * (2**attempt)

                    safe_logger(self.logger).log_debug(
                        f"Database locked, retrying in {wait_time}s",
                        {"attempt": attempt + 1, "max_retries": max_retries},
                    )

                    time.sleep(wait_time)
                    continue

                raise

        raise DatabaseError("Retry loop completed without success")

    def _get_or_create(
        self,
        model_class: Type[T],
        lookup_fields: Dict[str, Any],
        extra_fields: Optional[Dict[str, Any]] = None,
    ) -> T:
        """
        Get an existing row or create it if it doesn't exist.

        The insert runs inside a savepoint so that losing a race against
        another writer only rolls back the insert, not the caller's work.

        Args:
            model_class: ORM model class to query or create
            lookup_fields: Dictionary of field_name: value to filter/create
            extra_fields: Additional fields for new object creation only

        Returns:
            ORM instance of the model class

        Raises:
            DatabaseError: If creation fails after handling race condition
        """
        obj = self.session.scalars(
            select(model_class).filter_by(**lookup_fields)
        ).first()
        if obj:
            return obj

        fields = lookup_fields.copy()
        if extra_fields:
            fields.update(extra_fields)

        try:
            with self.session.begin_nested():
                obj = model_class(**fields)
                self.session.add(obj)
            return obj
        except IntegrityError:
            obj = self.session.scalars(
                select(model_class).filter_by(**lookup_fields)
            ).first()
            if obj:
                return obj
            raise DatabaseError(
                f"Failed to create {model_class.__name__} even after handling race condition"
            )

    @staticmethod
    def _key_criteria(model_class: Type, key: Dict[str, Any]) -> list:
        """
        Build WHERE criteria for a natural key.

        None values compare with IS NULL, so a global component (no
        organization) never matches an organization-scoped one.
        """
        criteria = []
        for field_name, value in key.items():
            column = getattr(model_class, field_name)
            criteria.append(column.is_(None) if value is None else column == value)
        return criteria
