"""
Automation Models
------------------

Models for server-side behaviour configured at runtime.

Models:
    - EventListener: Binds an application event to a consumer method
    - Scheduler: Cron-triggered job emitting a scheduler event
    - ServerScript: Reusable server-side script
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from typing import Optional

# --- Third party imports ---
from sqlalchemy import Boolean, String, Text
from sqlalchemy.orm import Mapped, mapped_column

# --- Local imports ---
from .base import Base, ComponentMixin


class EventListener(Base, ComponentMixin):
    """
    Represents a listener wiring an event to a consumer.

    Natural key: (event_name, organization_id).

    Attributes:
        id: Primary key
        event_name: Name of the event listened to
        event_class_name: Class emitting the event
        event_object_type: Type of the event payload
        consumer_class_name: Class implementing the consumer
        consumer_method_name: Consumer method invoked
        consumer_parameter_class_name: Type of the consumer's extra parameter
        static_data_1..static_data_4: Static arguments passed to the consumer
        index_string: Search index text
    """

    __tablename__ = "event_listeners"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    event_name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    event_class_name: Mapped[Optional[str]] = mapped_column(String(255))
    event_object_type: Mapped[Optional[str]] = mapped_column(String(255))
    consumer_class_name: Mapped[Optional[str]] = mapped_column(String(255))
    consumer_method_name: Mapped[Optional[str]] = mapped_column(String(255))
    consumer_parameter_class_name: Mapped[Optional[str]] = mapped_column(String(255))
    static_data_1: Mapped[Optional[str]] = mapped_column(Text)
    static_data_2: Mapped[Optional[str]] = mapped_column(Text)
    static_data_3: Mapped[Optional[str]] = mapped_column(Text)
    static_data_4: Mapped[Optional[str]] = mapped_column(Text)
    index_string: Mapped[Optional[str]] = mapped_column(Text)

    def __repr__(self) -> str:
        return f"<EventListener(event={self.event_name}, org={self.organization_id})>"


class Scheduler(Base, ComponentMixin):
    """
    Represents a cron-scheduled job.

    Natural key: (event_data, organization_id).

    Attributes:
        id: Primary key
        cron_expression: Cron schedule
        event_data: Payload of the emitted scheduler event
        on_master_only: Run on the master node only
    """

    __tablename__ = "schedulers"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    cron_expression: Mapped[str] = mapped_column(String(255), nullable=False)
    event_data: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    on_master_only: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    def __repr__(self) -> str:
        return f"<Scheduler(event_data={self.event_data}, cron={self.cron_expression})>"


class ServerScript(Base, ComponentMixin):
    """
    Represents a reusable server-side script.

    Natural key: (name, organization_id).

    Attributes:
        id: Primary key
        name: Script name
        arguments: Comma-separated argument names
        model: Model descriptor passed to the script
        code: Script source
    """

    __tablename__ = "server_scripts"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    arguments: Mapped[Optional[str]] = mapped_column(String(255))
    model: Mapped[Optional[str]] = mapped_column(Text)
    code: Mapped[Optional[str]] = mapped_column(Text)

    def __repr__(self) -> str:
        return f"<ServerScript(name={self.name}, org={self.organization_id})>"
