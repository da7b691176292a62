#!/usr/bin/env python3
"""
component_importer.py
---------------------
Imports components from packages into the database.

Each metadata document is mapped to a descriptor and handed to the
converter for its type, which looks the component up by natural key,
overwrites it (or creates it) and loads its content. Importing the same
package twice leaves the database unchanged after the first run.

Documents are imported in dependency order: privileges first (forms
and resources name them), UI resources last. Every component is
imported inside its own savepoint, so one failing component is rolled
back and recorded in the report while the rest of the package is
imported. With ``fail_fast`` the first failure aborts the run instead.

All methods must run inside ``db.session_scope()``.

Usage:
    importer = ComponentImporter(db, logger=logger)
    with db.session_scope():
        report = importer.import_zip(Path("crm.zip"), delete_existing=True)
    print(report.summary())
"""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

from compack.core.cli import ImportStats
from compack.core.exceptions import ComponentPackError, DatabaseError, ValidationError
from compack.core.logging_manager import PackLogger, safe_logger
from compack.core.paths import EXPORT_DIR
from compack.dataclasses import (
    ComponentDescriptor,
    EndpointDescriptor,
    EventListenerDescriptor,
    FormDescriptor,
    PrivilegeDescriptor,
    SchedulerDescriptor,
    ServerScriptDescriptor,
    UIResourceDescriptor,
    descriptor_from_dict,
)
from compack.database.decorators import log_database_operation
from compack.database.manager import ComponentDB
from compack.database.models import AccessScope

from .converters import ConversionContext, ConverterRegistry
from .package import (
    DirectoryResourceLoader,
    PackageContents,
    ResourceLoader,
    as_loader,
    load_document,
    read_directory_package,
    read_zip_package,
)
from .path_codec import CONFIG_ROOT, encode

IMPORT_ORDER = {
    PrivilegeDescriptor.KIND: 0,
    ServerScriptDescriptor.KIND: 1,
    FormDescriptor.KIND: 2,
    EventListenerDescriptor.KIND: 3,
    SchedulerDescriptor.KIND: 4,
    UIResourceDescriptor.KIND: 5,
    EndpointDescriptor.KIND: 6,
}

# Endpoints before resources: resource deletion cascades to its endpoints
DELETE_ORDER = (
    "endpoints",
    "resources",
    "forms",
    "event_listeners",
    "schedulers",
    "server_scripts",
    "privileges",
)

ImportErrors = (ComponentPackError, DatabaseError, ValidationError)


def describe_key(descriptor: ComponentDescriptor) -> str:
    """Human-readable natural key of a descriptor for reports and logs."""
    for attr in ("name", "event_name", "event_data"):
        value = getattr(descriptor, attr, None)
        if value:
            break
    else:
        value = f"{getattr(descriptor, 'http_method', '')} {getattr(descriptor, 'sub_path', '')}"
    if descriptor.organization_id is not None:
        return f"{value} (org {descriptor.organization_id})"
    return str(value)


@dataclass
class ImportFailure:
    """A document that could not be imported."""

    path: str
    key: Optional[str]
    error: str


@dataclass
class ImportReport:
    """
    Outcome of a package import.

    Attributes:
        imported: Package path -> natural key of every imported component
        failures: Documents that failed, with the error message
        stats: Counters for the run
    """

    imported: Dict[str, str] = field(default_factory=dict)
    failures: List[ImportFailure] = field(default_factory=list)
    stats: ImportStats = field(default_factory=ImportStats)

    @property
    def ok(self) -> bool:
        return not self.failures

    def record_success(self, path: str, key: str) -> None:
        self.imported[path] = key
        self.stats.components_imported += 1

    def record_failure(self, path: str, key: Optional[str], error: Exception) -> None:
        self.failures.append(ImportFailure(path, key, f"{type(error).__name__}: {error}"))
        self.stats.errors += 1

    def summary(self) -> str:
        return self.stats.summary()

    def to_note(self) -> str:
        """Multi-line import note listing every imported and failed item."""
        lines = [f"Import: {self.summary()}"]
        lines.extend(f"  + {path} [{key}]" for path, key in self.imported.items())
        lines.extend(
            f"  ! {failure.path} [{failure.key or '?'}]: {failure.error}"
            for failure in self.failures
        )
        return "\n".join(lines)


class ComponentImporter:
    """
    Restores components from descriptors, directories and archives.

    Attributes:
        db: Database manager (its session scope must be active)
        components_dir: Package root searched by load_component
        fail_fast: Abort a package import on the first failure
        logger: Optional logger
    """

    def __init__(
        self,
        db: ComponentDB,
        components_dir: Union[str, Path] = EXPORT_DIR,
        fail_fast: bool = False,
        logger: Optional[PackLogger] = None,
    ):
        self.db = db
        self.components_dir = Path(components_dir)
        self.fail_fast = fail_fast
        self.logger = logger

    def _registry(self) -> ConverterRegistry:
        return ConverterRegistry.build(ConversionContext.from_db(self.db, self.logger))

    # -------------------------------------------------------------------------
    # Single descriptors
    # -------------------------------------------------------------------------

    def import_descriptor(
        self,
        descriptor: ComponentDescriptor,
        path: Optional[str] = None,
        resources: Union[None, ResourceLoader, Mapping[str, str], str, Path] = None,
        registry: Optional[ConverterRegistry] = None,
    ) -> Any:
        """
        Create or update the component a descriptor describes.

        Args:
            descriptor: Descriptor to import
            path: Package path of its metadata document; scope and
                organization are decoded from it when given
            resources: Loader, mapping or directory resolving content
                references (default: the components directory)
            registry: Converter registry to reuse across calls

        Returns:
            The persisted entity

        Raises:
            UnrecognizedTypeError: If no converter handles the descriptor
            ComponentPackError: For any conversion failure
        """
        registry = registry or self._registry()
        converter = registry.for_descriptor(descriptor)
        loader = as_loader(resources, default_root=self.components_dir)
        return converter.from_descriptor(descriptor, path, loader)

    # -------------------------------------------------------------------------
    # Packages
    # -------------------------------------------------------------------------

    def _delete_modules(self, modules: List[str], report: ImportReport) -> None:
        managers = self.db.component_managers()
        for module in modules:
            for name in DELETE_ORDER:
                report.stats.components_deleted += managers[name].delete_by_module(module)
        safe_logger(self.logger).log_info(
            "Deleted existing module components",
            {"modules": modules, "count": report.stats.components_deleted},
        )

    def import_package(
        self, contents: PackageContents, delete_existing: bool = False
    ) -> ImportReport:
        """
        Import every document of a package.

        Args:
            contents: Documents and resource loader of the package
            delete_existing: Delete all components of the package's
                modules before importing

        Returns:
            Report of imported and failed documents

        Raises:
            ComponentPackError: Only with fail_fast, on the first failure
        """
        report = ImportReport()
        session = self.db.session
        registry = self._registry()

        parsed: List[tuple] = []
        for path, document in contents.documents.items():
            report.stats.documents_processed += 1
            try:
                parsed.append((path, descriptor_from_dict(document)))
            except ComponentPackError as e:
                report.record_failure(path, None, e)
                safe_logger(self.logger).log_error(e, {"path": path})
                if self.fail_fast:
                    raise

        parsed.sort(key=lambda item: (IMPORT_ORDER.get(item[1].KIND, 99), item[0]))

        if delete_existing:
            modules = sorted({descriptor.module for _, descriptor in parsed})
            self._delete_modules(modules, report)

        for path, descriptor in parsed:
            key = describe_key(descriptor)
            try:
                with session.begin_nested():
                    self.import_descriptor(descriptor, path, contents.loader, registry)
            except ImportErrors as e:
                report.record_failure(path, key, e)
                safe_logger(self.logger).log_error(e, {"path": path, "key": key})
                if self.fail_fast:
                    raise
                continue
            report.record_success(path, key)

        safe_logger(self.logger).log_operation("package_import_complete", report.stats.to_dict())
        return report

    @log_database_operation("import_zip")
    def import_zip(
        self, source: Union[bytes, str, Path], delete_existing: bool = False
    ) -> ImportReport:
        """Import a zip package given as bytes or a file path."""
        return self.import_package(read_zip_package(source), delete_existing)

    @log_database_operation("import_directory")
    def import_directory(
        self, root: Union[str, Path, None] = None, delete_existing: bool = False
    ) -> ImportReport:
        """Import a package directory (default: the components directory)."""
        return self.import_package(
            read_directory_package(root if root is not None else self.components_dir),
            delete_existing,
        )

    # -------------------------------------------------------------------------
    # Lookup by name
    # -------------------------------------------------------------------------

    def load_component(
        self,
        category: str,
        name: str,
        access_scope: Optional[AccessScope] = None,
        organization_id: Optional[int] = None,
        root: Union[str, Path, None] = None,
    ) -> Optional[Any]:
        """
        Import a single component from a package directory by name.

        The organization-specific document is tried first, then the
        global one.

        Args:
            category: Package category folder (e.g. 'form', 'resource')
            name: Component name (file name without extension)
            access_scope: Access scope, for scoped categories
            organization_id: Organization to look for first
            root: Package root (default: the components directory)

        Returns:
            The imported entity, or None when no document exists
        """
        base = Path(root) if root is not None else self.components_dir
        candidates = []
        if organization_id is not None:
            candidates.append(
                encode(CONFIG_ROOT, category, name, "yaml", access_scope, organization_id)
            )
        candidates.append(encode(CONFIG_ROOT, category, name, "yaml", access_scope))

        for path in candidates:
            file_path = base / path
            if not file_path.is_file():
                continue
            document = load_document(file_path.read_text(encoding="utf-8"), path)
            descriptor = descriptor_from_dict(document)
            safe_logger(self.logger).log_debug("Loading component", {"path": path})
            return self.import_descriptor(
                descriptor, path, DirectoryResourceLoader(base)
            )

        safe_logger(self.logger).log_warning(
            "Component document not found", {"category": category, "name": name}
        )
        return None
