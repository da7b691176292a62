#!/usr/bin/env python3
"""
package.py
----------
Reading and writing component packages.

A package is a tree of files laid out by ``path_codec``: YAML metadata
documents under ``config/``, content bodies under ``resources/`` and
``code/``, and optional upgrade SQL under ``migration/``. The same tree
is written either to a directory or to a zip archive.

Writers:
    - DirectoryPackageWriter: Files below a root directory
    - ZipPackageWriter: Entries of an open zipfile.ZipFile

Loaders (content references -> text):
    - DirectoryResourceLoader: Reads files below a root directory
    - MapResourceLoader: Looks paths up in an in-memory mapping

Readers:
    - read_directory_package / read_zip_package -> PackageContents
"""
from __future__ import annotations

import io
import zipfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Protocol, Set, Union

import yaml

from compack.core.exceptions import DescriptorError, PackageIOError, ResourceLoadError
from compack.core.logging_manager import PackLogger, safe_logger

from .path_codec import CODE_ROOT, CONFIG_ROOT, RESOURCES_ROOT, strip_to_package

ENCODING = "utf-8"


# ----- YAML documents -----


def dump_document(data: Dict[str, Any]) -> str:
    """Serialize a metadata document (keys kept in insertion order)."""
    return yaml.safe_dump(
        data,
        default_flow_style=False,
        allow_unicode=True,
        sort_keys=False,
    )


def load_document(text: str, path: str = "<string>") -> Dict[str, Any]:
    """
    Parse a metadata document.

    Raises:
        DescriptorError: If the text is not valid YAML or not a mapping
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise DescriptorError(f"Invalid YAML in {path}: {e}") from e
    if not isinstance(data, dict):
        raise DescriptorError(f"Metadata document {path} must be a mapping")
    return data


# ----- Writers -----


class PackageWriter(Protocol):
    """Destination accepting one file per package path."""

    def write(self, path: str, data: bytes) -> None:
        ...


class DirectoryPackageWriter:
    """Writes package files below a root directory."""

    def __init__(self, root: Union[str, Path]):
        self.root = Path(root)

    def write(self, path: str, data: bytes) -> None:
        target = self.root / path
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(data)
        except OSError as e:
            raise PackageIOError(f"Cannot write {target}: {e}") from e


class ZipPackageWriter:
    """Writes package files as deflated entries of an open archive."""

    def __init__(self, archive: zipfile.ZipFile):
        self.archive = archive

    def write(self, path: str, data: bytes) -> None:
        try:
            self.archive.writestr(path, data, compress_type=zipfile.ZIP_DEFLATED)
        except (OSError, ValueError) as e:
            raise PackageIOError(f"Cannot add {path} to archive: {e}") from e


@dataclass
class ExportSession:
    """
    One export run against a single writer.

    Tracks every path already written so that a component reached twice
    (directly and through a cascade, or as a shared dependency) is
    written once. Collects upgrade SQL statements for the run.

    Attributes:
        writer: Package destination
        written: Paths written so far
        upgrade_statements: Upgrade SQL, in emission order, without duplicates
        deduplicated: Number of writes skipped because the path was written
        logger: Optional logger
    """

    writer: PackageWriter
    written: Set[str] = field(default_factory=set)
    upgrade_statements: List[str] = field(default_factory=list)
    deduplicated: int = 0
    logger: Optional[PackLogger] = None

    def write_once(self, path: str, data: Union[str, bytes]) -> bool:
        """
        Write a file unless the path was already written in this session.

        Args:
            path: Package-relative path
            data: File body (text is encoded as UTF-8)

        Returns:
            True if the file was written, False if it was a duplicate
        """
        if path in self.written:
            self.deduplicated += 1
            safe_logger(self.logger).log_debug("Skipping duplicate entry", {"path": path})
            return False
        payload = data.encode(ENCODING) if isinstance(data, str) else data
        self.writer.write(path, payload)
        self.written.add(path)
        return True

    def add_upgrade_statement(self, statement: str) -> None:
        if statement not in self.upgrade_statements:
            self.upgrade_statements.append(statement)


# ----- Loaders -----


class ResourceLoader(Protocol):
    """Resolves a package content reference to its text."""

    def load(self, path: str) -> str:
        ...


class DirectoryResourceLoader:
    """Reads content references relative to a package root directory."""

    def __init__(self, root: Union[str, Path]):
        self.root = Path(root)

    def load(self, path: str) -> str:
        candidate = Path(path)
        target = candidate if candidate.is_absolute() else self.root / strip_to_package(path)
        try:
            return target.read_text(encoding=ENCODING)
        except FileNotFoundError as e:
            raise ResourceLoadError(f"Resource not found: {path}") from e
        except UnicodeDecodeError as e:
            raise ResourceLoadError(f"Resource {path} is not valid {ENCODING}: {e}") from e
        except OSError as e:
            raise ResourceLoadError(f"Cannot read resource {path}: {e}") from e


class MapResourceLoader:
    """
    Looks content references up in an in-memory mapping.

    Values may be text or raw bytes; bytes are decoded on load.
    """

    def __init__(self, resources: Mapping[str, Union[str, bytes]]):
        self.resources = dict(resources)

    def load(self, path: str) -> str:
        key = strip_to_package(path)
        if key not in self.resources:
            raise ResourceLoadError(f"Resource not found: {path}")
        body = self.resources[key]
        if isinstance(body, bytes):
            try:
                return body.decode(ENCODING)
            except UnicodeDecodeError as e:
                raise ResourceLoadError(
                    f"Resource {path} is not valid {ENCODING}: {e}"
                ) from e
        return body


def as_loader(
    resources: Union[None, ResourceLoader, Mapping[str, str], str, Path],
    default_root: Optional[Path] = None,
) -> ResourceLoader:
    """
    Coerce the accepted resource sources into a loader.

    A mapping becomes a MapResourceLoader, a path a DirectoryResourceLoader,
    and None a DirectoryResourceLoader on ``default_root`` (or an empty
    map when no default is given).
    """
    if resources is None:
        if default_root is not None:
            return DirectoryResourceLoader(default_root)
        return MapResourceLoader({})
    if isinstance(resources, (str, Path)):
        return DirectoryResourceLoader(resources)
    if isinstance(resources, Mapping):
        return MapResourceLoader(resources)
    return resources


# ----- Readers -----


@dataclass
class PackageContents:
    """
    A package read into memory.

    Attributes:
        documents: Package path -> parsed metadata document
        loader: Resolves the content references the documents contain
    """

    documents: Dict[str, Dict[str, Any]]
    loader: ResourceLoader


def _decode_document(data: bytes, path: str) -> str:
    try:
        return data.decode(ENCODING)
    except UnicodeDecodeError as e:
        raise DescriptorError(f"Metadata document {path} is not valid {ENCODING}: {e}") from e


def read_directory_package(root: Union[str, Path]) -> PackageContents:
    """
    Read every metadata document below ``root/config``.

    Content files are left on disk and read on demand.

    Raises:
        PackageIOError: If the root is not a directory
        DescriptorError: If a document is not valid YAML
    """
    root = Path(root)
    if not root.is_dir():
        raise PackageIOError(f"Package directory not found: {root}")

    documents: Dict[str, Dict[str, Any]] = {}
    config_dir = root / CONFIG_ROOT
    if config_dir.is_dir():
        for file_path in sorted(config_dir.rglob("*.yaml")):
            relative = file_path.relative_to(root).as_posix()
            documents[relative] = load_document(
                _decode_document(file_path.read_bytes(), relative), relative
            )
    return PackageContents(documents, DirectoryResourceLoader(root))


def read_zip_package(source: Union[bytes, str, Path]) -> PackageContents:
    """
    Read an archive into documents and an in-memory resource map.

    ``*.yaml`` entries under ``config/`` become documents; entries under
    ``code/`` and ``resources/`` become resources. Entry names are
    normalized to their package-relative form.

    Raises:
        PackageIOError: If the archive cannot be opened
        DescriptorError: If a document is not valid YAML
    """
    try:
        archive = zipfile.ZipFile(
            io.BytesIO(source) if isinstance(source, bytes) else Path(source)
        )
    except (OSError, zipfile.BadZipFile) as e:
        raise PackageIOError(f"Cannot open package archive: {e}") from e

    documents: Dict[str, Dict[str, Any]] = {}
    resources: Dict[str, bytes] = {}
    with archive:
        for info in archive.infolist():
            if info.is_dir():
                continue
            name = strip_to_package(info.filename)
            root = name.split("/", 1)[0]
            if root == CONFIG_ROOT and name.endswith(".yaml"):
                documents[name] = load_document(_decode_document(archive.read(info), name), name)
            elif root in (CODE_ROOT, RESOURCES_ROOT):
                resources[name] = archive.read(info)
    return PackageContents(dict(sorted(documents.items())), MapResourceLoader(resources))
