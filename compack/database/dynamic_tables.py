#!/usr/bin/env python3
"""
dynamic_tables.py
--------------------
Creates the storage tables backing forms.

Each form names a table that holds its records. The table is created on
demand, the first time a form naming it is imported; creating it again
is a no-op.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import re
from datetime import datetime, timezone
from typing import Optional

# --- Third party imports ---
from sqlalchemy import JSON, Column, DateTime, Integer, MetaData, Table, inspect
from sqlalchemy.orm import Session

# --- Local imports ---
from compack.core.exceptions import ValidationError
from compack.core.logging_manager import PackLogger, safe_logger
from compack.database.decorators import handle_db_errors

TABLE_NAME_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class DynamicTableService:
    """
    Idempotent creation of form record tables.

    Record tables share a fixed layout: an integer id, the owning
    organization, a JSON document with the form fields and timestamps.

    Attributes:
        session: Session whose connection runs the DDL
        logger: Optional logger for table creation events
    """

    def __init__(self, session: Session, logger: Optional[PackLogger] = None):
        self.session = session
        self.logger = logger

    @staticmethod
    def _build_table(table_name: str) -> Table:
        metadata = MetaData()
        return Table(
            table_name,
            metadata,
            Column("id", Integer, primary_key=True, autoincrement=True),
            Column("organization_id", Integer, nullable=True, index=True),
            Column("data", JSON, nullable=False, default=dict),
            Column(
                "created_at",
                DateTime(timezone=True),
                default=lambda: datetime.now(timezone.utc),
            ),
            Column(
                "updated_at",
                DateTime(timezone=True),
                default=lambda: datetime.now(timezone.utc),
            ),
        )

    def table_exists(self, table_name: str) -> bool:
        return inspect(self.session.connection()).has_table(table_name)

    @handle_db_errors
    def ensure_table_exists(self, table_name: Optional[str]) -> bool:
        """
        Create the record table if it does not exist yet.

        Args:
            table_name: Table to create; None or empty is ignored

        Returns:
            True if the table was created, False if it already existed
            or no table name was given

        Raises:
            ValidationError: If the name is not a plain SQL identifier
        """
        if not table_name:
            return False
        if not TABLE_NAME_PATTERN.match(table_name):
            raise ValidationError(f"Invalid dynamic table name: {table_name!r}")

        if self.table_exists(table_name):
            return False

        self._build_table(table_name).create(self.session.connection(), checkfirst=True)
        safe_logger(self.logger).log_operation(
            "dynamic_table_created", {"table_name": table_name}
        )
        return True
