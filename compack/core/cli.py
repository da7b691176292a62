#!/usr/bin/env python3
"""
cli.py
------
Shared CLI utilities and statistics for Compack commands.

Functions:
    setup_logger: Initialize PackLogger for CLI operations

Classes:
    OperationStats: Base class for all statistics
    ExportStats: For export operations (entities -> package)
    ImportStats: For import operations (package -> entities)

Usage:
    from compack.core.cli import setup_logger, ExportStats

    logger = setup_logger(log_dir, "export")
    stats = ExportStats()
    stats.components_exported += 1
    print(stats.summary())
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

# --- Local imports ---
from compack.core.logging_manager import PackLogger


def setup_logger(log_dir: Path, component_name: str) -> PackLogger:
    """
    Setup logging for CLI operations.

    Creates the operations log directory if it doesn't exist and initializes
    a PackLogger instance for the specified component.

    Args:
        log_dir: Base log directory (typically from paths.LOG_DIR)
        component_name: Component identifier for logging (e.g., 'export', 'import')

    Returns:
        Configured PackLogger instance
    """
    operations_log_dir = log_dir / "operations"
    operations_log_dir.mkdir(parents=True, exist_ok=True)
    return PackLogger(operations_log_dir, component_name=component_name)


@dataclass
class OperationStats:
    """
    Base class for CLI operation statistics.

    Attributes:
        errors: Number of errors encountered
        start_time: Operation start timestamp
    """
    errors: int = 0
    start_time: datetime = field(default_factory=datetime.now)
    _duration_cached: Optional[float] = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        if self.errors < 0:
            raise ValueError(f"errors must be non-negative, got {self.errors}")

    def duration(self) -> float:
        """Seconds elapsed since start_time (cached after first call)."""
        if self._duration_cached is None:
            self._duration_cached = (datetime.now() - self.start_time).total_seconds()
        return self._duration_cached

    def summary(self) -> str:
        return f"{self.errors} errors, {self.duration():.2f}s"

    def to_dict(self) -> Dict[str, Any]:
        return {"errors": self.errors, "duration": self.duration()}


@dataclass
class ExportStats(OperationStats):
    """
    Statistics for export operations.

    Attributes:
        components_exported: Top-level components handed to the exporter
        files_written: Package entries written (content + metadata)
        files_deduplicated: Writes skipped because the path was already written
    """
    components_exported: int = 0
    files_written: int = 0
    files_deduplicated: int = 0

    def summary(self) -> str:
        return (
            f"{self.components_exported} components exported, "
            f"{self.files_written} files written, "
            f"{self.files_deduplicated} duplicates skipped, "
            f"{self.errors} errors, "
            f"{self.duration():.2f}s"
        )

    def to_dict(self) -> Dict[str, Any]:
        d = super().to_dict()
        d.update({
            "components_exported": self.components_exported,
            "files_written": self.files_written,
            "files_deduplicated": self.files_deduplicated,
        })
        return d


@dataclass
class ImportStats(OperationStats):
    """
    Statistics for import operations.

    Attributes:
        documents_processed: Metadata documents handed to a converter
        components_imported: Components created or updated
        components_deleted: Components removed before import (delete mode)
    """
    documents_processed: int = 0
    components_imported: int = 0
    components_deleted: int = 0

    def summary(self) -> str:
        return (
            f"{self.documents_processed} documents processed, "
            f"{self.components_imported} imported, "
            f"{self.components_deleted} deleted, "
            f"{self.errors} errors, "
            f"{self.duration():.2f}s"
        )

    def to_dict(self) -> Dict[str, Any]:
        d = super().to_dict()
        d.update({
            "documents_processed": self.documents_processed,
            "components_imported": self.components_imported,
            "components_deleted": self.components_deleted,
        })
        return d
