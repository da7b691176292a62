#!/usr/bin/env python3
"""
component_exporter.py
---------------------
Exports components from the database into packages.

A package is written to a zip archive (for download or transfer) or to
a directory tree. With filesystem sync enabled, single components are
also mirrored into the export directory whenever they change, and
their files removed when they are deleted.

All methods must run inside ``db.session_scope()``: converters read
related rows (endpoints, privileges) through the active session.

Usage:
    exporter = ComponentExporter(db, EXPORT_DIR, logger=logger)
    with db.session_scope():
        archive = exporter.export_to_zip(exporter.select_components(module="crm"))
"""
from __future__ import annotations

import io
import zipfile
from pathlib import Path
from typing import Any, Iterable, List, Optional, Sequence, Union

from compack.core.cli import ExportStats
from compack.core.logging_manager import PackLogger, safe_logger
from compack.core.paths import EXPORT_DIR
from compack.core.exceptions import ValidationError
from compack.dataclasses import ComponentDescriptor
from compack.database.decorators import log_database_operation
from compack.database.manager import ComponentDB

from .converters import (
    ConversionContext,
    ConverterRegistry,
    remove_component_files,
    save_component_files,
    write_component,
)
from .package import (
    DirectoryPackageWriter,
    ExportSession,
    PackageWriter,
    ZipPackageWriter,
)
from .path_codec import UPGRADE_SCRIPT_PATH

# Component managers in package order; endpoints travel with their resources
EXPORTABLE_KINDS = (
    "privileges",
    "server_scripts",
    "forms",
    "event_listeners",
    "schedulers",
    "resources",
)


class ComponentExporter:
    """
    Writes components and everything they pull in to packages.

    Attributes:
        db: Database manager (its session scope must be active)
        export_dir: Directory mirrored by filesystem sync
        sync_with_filesystem: Whether the *_if_required methods act
        logger: Optional logger
    """

    def __init__(
        self,
        db: ComponentDB,
        export_dir: Union[str, Path] = EXPORT_DIR,
        sync_with_filesystem: bool = False,
        logger: Optional[PackLogger] = None,
    ):
        self.db = db
        self.export_dir = Path(export_dir)
        self.sync_with_filesystem = sync_with_filesystem
        self.logger = logger

    def _registry(self) -> ConverterRegistry:
        return ConverterRegistry.build(ConversionContext.from_db(self.db, self.logger))

    # -------------------------------------------------------------------------
    # Selection
    # -------------------------------------------------------------------------

    def select_components(
        self,
        kinds: Optional[Sequence[str]] = None,
        module: Optional[str] = None,
    ) -> List[Any]:
        """
        Collect components to export.

        Args:
            kinds: Manager names to include (default: all exportable kinds)
            module: Restrict to one module

        Returns:
            Entities in package order (privileges before the forms that
            use them, resources last)

        Raises:
            ValidationError: If a kind is not exportable
        """
        selected = list(kinds) if kinds else list(EXPORTABLE_KINDS)
        unknown = [kind for kind in selected if kind not in EXPORTABLE_KINDS]
        if unknown:
            raise ValidationError(
                f"Unknown component kinds {unknown}. "
                f"Expected any of: {', '.join(EXPORTABLE_KINDS)}"
            )

        managers = self.db.component_managers()
        entities: List[Any] = []
        for kind in EXPORTABLE_KINDS:
            if kind not in selected:
                continue
            manager = managers[kind]
            entities.extend(
                manager.find_by_module(module) if module else manager.list_all()
            )
        return entities

    # -------------------------------------------------------------------------
    # Packages
    # -------------------------------------------------------------------------

    def export_entity(
        self,
        entity: Any,
        session: ExportSession,
        registry: Optional[ConverterRegistry] = None,
    ) -> ComponentDescriptor:
        """
        Write one entity (with children and dependencies) to a session.

        Raises:
            UnrecognizedTypeError: If no converter handles the entity's type
        """
        registry = registry or self._registry()
        converter = registry.for_entity(entity)
        return write_component(converter, entity, session, registry)

    def _export(
        self, entities: Iterable[Any], writer: PackageWriter, stats: ExportStats
    ) -> ExportSession:
        registry = self._registry()
        session = ExportSession(writer, logger=self.logger)
        for entity in entities:
            self.export_entity(entity, session, registry)
            stats.components_exported += 1

        if session.upgrade_statements:
            session.write_once(
                UPGRADE_SCRIPT_PATH, "\n\n".join(session.upgrade_statements) + "\n"
            )

        stats.files_written = len(session.written)
        stats.files_deduplicated = session.deduplicated
        return session

    @log_database_operation("export_to_zip")
    def export_to_zip(
        self, entities: Iterable[Any], stats: Optional[ExportStats] = None
    ) -> bytes:
        """
        Export entities into an in-memory zip archive.

        Args:
            entities: Components to export
            stats: Optional statistics tracker (updated in place)

        Returns:
            Archive bytes
        """
        stats = stats if stats is not None else ExportStats()
        buffer = io.BytesIO()
        with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as archive:
            self._export(entities, ZipPackageWriter(archive), stats)

        safe_logger(self.logger).log_operation("zip_export_complete", stats.to_dict())
        return buffer.getvalue()

    @log_database_operation("export_to_directory")
    def export_to_directory(
        self, entities: Iterable[Any], target: Union[str, Path, None] = None
    ) -> ExportStats:
        """
        Export entities into a directory tree.

        Args:
            entities: Components to export
            target: Package root (default: the export directory)

        Returns:
            Export statistics
        """
        stats = ExportStats()
        root = Path(target) if target is not None else self.export_dir
        self._export(entities, DirectoryPackageWriter(root), stats)
        safe_logger(self.logger).log_operation(
            "directory_export_complete", {"target": str(root), **stats.to_dict()}
        )
        return stats

    # -------------------------------------------------------------------------
    # Filesystem sync
    # -------------------------------------------------------------------------

    def export_to_file(self, entity: Any) -> List[str]:
        """
        Write one entity's files below the export directory.

        Returns:
            Package paths written
        """
        registry = self._registry()
        written = save_component_files(
            registry.for_entity(entity), entity, self.export_dir, registry, self.logger
        )
        safe_logger(self.logger).log_debug(
            "Component exported to filesystem", {"paths": written}
        )
        return written

    def export_to_file_if_required(self, entity: Any) -> List[str]:
        """export_to_file when filesystem sync is enabled, else nothing."""
        if not self.sync_with_filesystem:
            return []
        return self.export_to_file(entity)

    def remove_exported_files(self, entity: Any) -> List[str]:
        """
        Delete one entity's files from the export directory.

        Directories emptied by the removal are deleted too.

        Returns:
            Package paths removed
        """
        registry = self._registry()
        removed = remove_component_files(
            registry.for_entity(entity), entity, self.export_dir, registry, self.logger
        )
        safe_logger(self.logger).log_debug(
            "Exported component files removed", {"paths": removed}
        )
        return removed

    def remove_exported_files_if_required(self, entity: Any) -> List[str]:
        """remove_exported_files when filesystem sync is enabled, else nothing."""
        if not self.sync_with_filesystem:
            return []
        return self.remove_exported_files(entity)
