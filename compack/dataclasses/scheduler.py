#!/usr/bin/env python3
"""
scheduler.py
-------------------
Descriptor for a cron-scheduled job.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

from compack.core.validators import DataValidator

from .base import ComponentDescriptor


@dataclass
class SchedulerDescriptor(ComponentDescriptor):
    """
    Plain-data form of a Scheduler.

    Attributes:
        cron_expression: Cron schedule
        event_data: Payload of the emitted event, also the job's identity
        on_master_only: Run on the master node only
    """

    KIND = "scheduler"

    cron_expression: str = ""
    event_data: str = ""
    on_master_only: bool = True

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SchedulerDescriptor":
        cls._check_kind(data)
        DataValidator.validate_required_fields(data, ["cron_expression", "event_data"])
        return cls(
            **cls._ownership(data),
            cron_expression=str(data["cron_expression"]).strip(),
            event_data=str(data["event_data"]).strip(),
            on_master_only=cls._flag(data, "on_master_only", default=True),
        )
