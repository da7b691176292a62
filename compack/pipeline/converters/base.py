#!/usr/bin/env python3
"""
base.py
-------
Converter contract and the mechanics shared by every converter.

A converter maps one component type between its entity and descriptor
forms and knows where the component's files live in a package:

    content_path(entity)    -> package path of the content file, or None
    content(entity)         -> content body, or None
    metadata_path(entity)   -> package path of the YAML document, or None
                               when the descriptor is embedded in a parent
    to_descriptor(entity)   -> descriptor
    from_descriptor(descriptor, path, resources) -> persisted entity

Converters may also define these optional hooks:

    children(entity)           -> owned entities exported first (cascade)
    dependencies(entity)       -> other components the package must carry
    upgrade_statements(entity) -> upgrade SQL for the package

Writing, saving and removing files is not part of any converter: the
module-level helpers below drive every converter the same way.
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import (
    TYPE_CHECKING,
    Any,
    Callable,
    Dict,
    List,
    Optional,
    Protocol,
    Type,
    Union,
)

from sqlalchemy.orm import Session

from compack.core.exceptions import PackageIOError, PathDecodeError, ValidationError
from compack.core.logging_manager import PackLogger, safe_logger
from compack.core.validators import DataValidator
from compack.dataclasses import ComponentDescriptor
from compack.database.dynamic_tables import DynamicTableService
from compack.database.managers import ComponentManager, OwnershipManager
from compack.database.models import AccessScope
from compack.database.privileges import PrivilegeLookup
from compack.pipeline.package import (
    DirectoryPackageWriter,
    ExportSession,
    ResourceLoader,
    dump_document,
)
from compack.pipeline.path_codec import PathScope, category_of, decode

if TYPE_CHECKING:
    from compack.database.manager import ComponentDB
    from compack.pipeline.converters.registry import ConverterRegistry


@dataclass
class ConversionContext:
    """
    Everything a converter needs from the active database session.

    Attributes:
        session: SQLAlchemy session of the active scope
        managers: Component managers by name ('resources', 'forms', ...)
        ownership: Creates missing organizations and modules
        privileges: Privilege name lookup
        dynamic_tables: Form record table creation
        logger: Optional logger
    """

    session: Session
    managers: Dict[str, ComponentManager]
    ownership: OwnershipManager
    privileges: PrivilegeLookup
    dynamic_tables: DynamicTableService
    logger: Optional[PackLogger] = None

    @classmethod
    def from_db(
        cls, db: "ComponentDB", logger: Optional[PackLogger] = None
    ) -> "ConversionContext":
        """
        Build a context from the active session scope of ``db``.

        Raises:
            DatabaseError: If called outside ``db.session_scope()``
        """
        return cls(
            session=db.session,
            managers=db.component_managers(),
            ownership=db.ownership,
            privileges=db.privilege_lookup,
            dynamic_tables=db.dynamic_tables,
            logger=logger if logger is not None else db.logger,
        )

    def manager(self, name: str) -> ComponentManager:
        return self.managers[name]


class ComponentConverter(Protocol):
    """Structural contract implemented by every per-type converter."""

    entity_type: Type
    descriptor_type: Type[ComponentDescriptor]

    def content_path(self, entity: Any) -> Optional[str]:
        ...

    def content(self, entity: Any) -> Optional[str]:
        ...

    def metadata_path(self, entity: Any) -> Optional[str]:
        ...

    def to_descriptor(self, entity: Any) -> ComponentDescriptor:
        ...

    def from_descriptor(
        self,
        descriptor: ComponentDescriptor,
        path: Optional[str],
        resources: ResourceLoader,
    ) -> Any:
        ...


def _hook(converter: Any, name: str) -> Callable[[Any], List[Any]]:
    return getattr(converter, name, None) or (lambda entity: [])


def write_component(
    converter: ComponentConverter,
    entity: Any,
    session: ExportSession,
    registry: Optional["ConverterRegistry"] = None,
) -> ComponentDescriptor:
    """
    Write an entity's files, and those of its children, to a session.

    Children are written first, then dependencies, then the entity's
    own content and metadata document. Paths already written in the
    session are skipped. Empty content is not written.

    Args:
        converter: Converter for the entity's type
        entity: Entity to export
        session: Export session (writer plus dedup state)
        registry: Registry resolving converters for children and
            dependencies; required when the converter defines them

    Returns:
        The entity's descriptor
    """
    logger = safe_logger(session.logger)

    for child in _hook(converter, "children")(entity):
        write_component(registry.for_entity(child), child, session, registry)
    for dependency in _hook(converter, "dependencies")(entity):
        write_component(registry.for_entity(dependency), dependency, session, registry)

    content_path = converter.content_path(entity)
    content = converter.content(entity)
    if content_path and content:
        session.write_once(content_path, content)
    elif content_path:
        logger.log_warning("Component has no content, skipping file", {"path": content_path})

    descriptor = converter.to_descriptor(entity)
    metadata_path = converter.metadata_path(entity)
    if metadata_path:
        session.write_once(metadata_path, dump_document(descriptor.to_dict()))

    for statement in _hook(converter, "upgrade_statements")(entity):
        session.add_upgrade_statement(statement)

    return descriptor


def save_component_files(
    converter: ComponentConverter,
    entity: Any,
    root: Union[str, Path],
    registry: Optional["ConverterRegistry"] = None,
    logger: Optional[PackLogger] = None,
) -> List[str]:
    """
    Write an entity's package files below a directory.

    Returns:
        Package paths written
    """
    session = ExportSession(DirectoryPackageWriter(root), logger=logger)
    write_component(converter, entity, session, registry)
    return sorted(session.written)


def _remove_file(root: Path, path: str, logger: Any) -> bool:
    target = root / path
    try:
        if not target.is_file():
            return False
        target.unlink()
        logger.log_debug("Removed exported file", {"path": path})
        parent = target.parent
        if parent != root and parent.is_dir() and not any(parent.iterdir()):
            parent.rmdir()
        return True
    except OSError as e:
        raise PackageIOError(f"Cannot remove {target}: {e}") from e


def remove_component_files(
    converter: ComponentConverter,
    entity: Any,
    root: Union[str, Path],
    registry: Optional["ConverterRegistry"] = None,
    logger: Optional[PackLogger] = None,
) -> List[str]:
    """
    Delete an entity's content and metadata files below a directory.

    The files of owned children are removed as well. A directory left
    empty by a removal is deleted; the root itself is kept.

    Returns:
        Package paths that were removed
    """
    root = Path(root)
    log = safe_logger(logger)
    removed: List[str] = []

    for child in _hook(converter, "children")(entity):
        removed.extend(
            remove_component_files(registry.for_entity(child), child, root, registry, logger)
        )

    for path in (converter.content_path(entity), converter.metadata_path(entity)):
        if path and _remove_file(root, path, log):
            removed.append(path)
    return removed


# ----- Import helpers -----


def load_reference(resources: ResourceLoader, reference: Optional[str]) -> Optional[str]:
    """
    Read the body a content reference points at.

    Raises:
        ResourceLoadError: If the reference cannot be resolved
    """
    if not reference:
        return None
    return resources.load(reference)


def parse_enum(value: Any, enum_class: Type, label: str) -> Any:
    """
    Convert a descriptor value into an enum member.

    Raises:
        PathDecodeError: If the value matches no member
    """
    try:
        member = DataValidator.normalize_enum(value, enum_class)
    except ValidationError as e:
        raise PathDecodeError(f"Invalid {label}: {e}") from e
    if member is None:
        raise PathDecodeError(f"Missing {label}")
    return member


def resolve_scope(
    path: Optional[str],
    category: str,
    descriptor: ComponentDescriptor,
    fallback_scope: Optional[str] = None,
) -> PathScope:
    """
    Scope and organization of an imported component.

    The package path is authoritative when given; a descriptor imported
    without a path (embedded, or built in code) uses its own fields.
    """
    if path:
        found = category_of(path) or category
        return decode(path, found)
    access_scope = (
        parse_enum(fallback_scope, AccessScope, "access scope")
        if fallback_scope is not None
        else None
    )
    return PathScope(access_scope, descriptor.organization_id)


def prepare_ownership(
    context: ConversionContext, organization_id: Optional[int], module: Optional[str]
) -> None:
    """Create the organization and module rows a component points at."""
    context.ownership.ensure_organization(organization_id)
    context.ownership.ensure_module(module)
