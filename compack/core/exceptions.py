#!/usr/bin/env python3
"""
exceptions.py
--------------------
Custom exception classes for the Compack project.

This module defines a hierarchy of exceptions used throughout the project
to handle specific error conditions in different subsystems.

Exception Hierarchy:
    Exception (built-in)
    ├── DatabaseError - Base for all database-related errors
    ├── ValidationError - Data validation failures
    └── ComponentPackError - Base for export/import failures
        ├── UnrecognizedTypeError - No converter registered for a type
        ├── PathDecodeError - Package path segment is not a known value
        ├── ResourceLoadError - Content reference cannot be read
        ├── UnknownPrivilegeError - Privilege name has no matching token
        ├── PackageIOError - Directory/file/archive write failures
        └── DescriptorError - Metadata document cannot be mapped to a descriptor

Propagation policy:
    None of these are retried. The failing entity's operation is aborted
    and the caller (an import or export batch) decides whether to continue
    with the next entity or abort the whole run.

Usage:
    from compack.core.exceptions import ComponentPackError, ResourceLoadError

    try:
        importer.import_descriptor(descriptor, path, resources)
    except ResourceLoadError as e:
        logger.log_error(e, {"path": path})
"""


class DatabaseError(Exception):
    """
    Base exception for database-related errors.

    Raised when database operations fail due to connection issues,
    query errors, integrity violations, or other database problems.

    Examples:
        >>> raise DatabaseError("Connection to database failed")
        >>> raise DatabaseError("Data integrity violation: duplicate form name")
    """

    pass


class ValidationError(Exception):
    """
    Exception for data validation failures.

    Raised when input data fails validation checks:
    - Missing required fields
    - Type mismatches
    - Malformed descriptor values

    Examples:
        >>> raise ValidationError("Required field 'name' missing or empty")
        >>> raise ValidationError("Cannot convert 'maybe' to boolean")
    """

    pass


class ComponentPackError(Exception):
    """
    Base exception for component export and import failures.

    Catch this to handle any packaging error, or catch specific
    subclasses for more granular error handling.
    """

    pass


class UnrecognizedTypeError(ComponentPackError):
    """
    Exception for entity or descriptor types without a registered converter.

    This is a configuration error: the registry is built once from a
    fixed table, so a missing entry will not appear on a retry.

    Examples:
        >>> raise UnrecognizedTypeError("No converter registered for entity Organization")
    """

    pass


class PathDecodeError(ComponentPackError):
    """
    Exception for package paths or values that do not decode.

    Raised when an access-scope segment, an http method or a response
    kind does not match a known value.

    Examples:
        >>> raise PathDecodeError("Unknown access scope 'secret' in config/resource/secret/a.yaml")
        >>> raise PathDecodeError("Unknown http method 'FETCH'")
    """

    pass


class ResourceLoadError(ComponentPackError):
    """
    Exception for content references that cannot be read.

    Raised when a descriptor points at a content file that is missing
    from disk or from the in-memory resource map of an archive.

    Examples:
        >>> raise ResourceLoadError("Resource not found: code/form/orders.js")
    """

    pass


class UnknownPrivilegeError(ComponentPackError):
    """
    Exception for privilege names without a matching token.

    The whole import of the entity naming the privilege fails; no
    default privilege is substituted.

    Examples:
        >>> raise UnknownPrivilegeError("Unknown privilege: canDoEverything")
    """

    pass


class PackageIOError(ComponentPackError):
    """
    Exception for directory, file or archive write failures.

    Wraps the underlying OSError so callers only need to handle the
    packaging hierarchy.

    Examples:
        >>> raise PackageIOError("Cannot write config/form/orders.yaml: permission denied")
    """

    pass


class DescriptorError(ComponentPackError):
    """
    Exception for metadata documents that do not map to a descriptor.

    Raised for empty documents, documents without a known ``kind`` and
    values that cannot be coerced into the descriptor's fields.

    Examples:
        >>> raise DescriptorError("Unknown component kind 'widget'")
    """

    pass
