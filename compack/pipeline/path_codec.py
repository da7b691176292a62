#!/usr/bin/env python3
"""
path_codec.py
-------------
Package path layout for exported components.

Every file in a package lives at

    <root>/<category>/[<access-scope>/][org_<id>/]<name>.<ext>

where ``root`` separates metadata documents (config), UI resource bodies
(resources), scripts (code) and upgrade SQL (migration), and ``category``
names the component kind. Only UI resources and their endpoints carry an
access-scope segment. The organization segment is present only for
organization-scoped components.

Examples:
    config/resource/public/home.yaml
    resources/resource/public/home.html
    code/endpoint/public/home-POST-/submit.js
    config/form/org_7/orders.yaml

The layout is deterministic: the same component always maps to the same
path, and ``decode`` recovers the scope and organization ``encode`` was
given.
"""
from __future__ import annotations

import re
from pathlib import PurePath
from typing import List, NamedTuple, Optional, Union

from compack.core.exceptions import PathDecodeError, ValidationError
from compack.database.models.enums import AccessScope

# --- Roots ---
CONFIG_ROOT = "config"
RESOURCES_ROOT = "resources"
CODE_ROOT = "code"
MIGRATION_ROOT = "migration"
ROOTS = (CONFIG_ROOT, RESOURCES_ROOT, CODE_ROOT, MIGRATION_ROOT)

# --- Categories ---
RESOURCE = "resource"
UI_COMPONENT = "ui-component"
ENDPOINT = "endpoint"
FORM = "form"
EVENT = "event"
SCHEDULER = "scheduler"
PRIVILEGE = "privilege"
SERVER_SCRIPT = "server-script"
CATEGORIES = (
    RESOURCE,
    UI_COMPONENT,
    ENDPOINT,
    FORM,
    EVENT,
    SCHEDULER,
    PRIVILEGE,
    SERVER_SCRIPT,
)
SCOPED_CATEGORIES = frozenset({RESOURCE, UI_COMPONENT, ENDPOINT})

ORG_PREFIX = "org_"
ORG_SEGMENT = re.compile(rf"^{ORG_PREFIX}(\d+)$")

UPGRADE_SCRIPT_PATH = f"{MIGRATION_ROOT}/upgrade.sql"


class PathScope(NamedTuple):
    """Scope information recovered from a package path."""

    access_scope: Optional[AccessScope]
    organization_id: Optional[int]


def _segments(path: Union[str, PurePath]) -> List[str]:
    text = str(path).replace("\\", "/")
    return [segment for segment in text.split("/") if segment]


def encode(
    root: str,
    category: str,
    name: str,
    ext: str,
    access_scope: Optional[AccessScope] = None,
    organization_id: Optional[int] = None,
) -> str:
    """
    Build the package-relative path of a component file.

    Args:
        root: One of ROOTS
        category: One of CATEGORIES
        name: Component name; may contain '/' for nested names
        ext: File extension without the dot
        access_scope: Required for scoped categories, ignored otherwise
        organization_id: Owning organization, None for global components

    Returns:
        Path with '/' separators, e.g. 'config/resource/public/home.yaml'

    Raises:
        ValidationError: If root or category is unknown, or a scoped
            category is given no access scope
    """
    if root not in ROOTS:
        raise ValidationError(f"Unknown package root '{root}'")
    if category not in CATEGORIES:
        raise ValidationError(f"Unknown package category '{category}'")

    parts = [root, category]
    if category in SCOPED_CATEGORIES:
        if access_scope is None:
            raise ValidationError(f"Category '{category}' requires an access scope")
        parts.append(AccessScope(access_scope).path_segment)
    if organization_id is not None:
        parts.append(f"{ORG_PREFIX}{organization_id}")
    parts.append(f"{name}.{ext}")
    return "/".join(parts)


def _category_index(segments: List[str], category: str) -> int:
    """Index of the category folder, preferring one right after a root."""
    candidates = [i for i, segment in enumerate(segments) if segment == category]
    for i in candidates:
        if i > 0 and segments[i - 1] in ROOTS:
            return i
    if candidates:
        return candidates[0]
    raise PathDecodeError(f"Category '{category}' not found in path '{'/'.join(segments)}'")


def _organization(segment: str) -> Optional[int]:
    """Organization id of an ``org_<digits>`` segment; None for any other segment."""
    match = ORG_SEGMENT.match(segment)
    return int(match.group(1)) if match else None


def decode(path: Union[str, PurePath], category: str) -> PathScope:
    """
    Recover access scope and organization from a package path.

    Tolerates paths with any prefix before the root (absolute filesystem
    paths, archive folders) and a missing organization segment.

    Args:
        path: Package path of a component file
        category: Category folder to decode against

    Returns:
        PathScope(access_scope, organization_id); access_scope is None
        for unscoped categories

    Raises:
        PathDecodeError: If the category folder or the scope segment is
            missing, or the scope segment is not an AccessScope value
    """
    segments = _segments(path)
    text = "/".join(segments)
    position = _category_index(segments, category) + 1

    access_scope: Optional[AccessScope] = None
    if category in SCOPED_CATEGORIES:
        if position >= len(segments) - 1:
            raise PathDecodeError(f"Missing access scope segment in '{text}'")
        try:
            access_scope = AccessScope(segments[position])
        except ValueError as e:
            raise PathDecodeError(
                f"Unknown access scope '{segments[position]}' in '{text}'"
            ) from e
        position += 1

    organization_id: Optional[int] = None
    if position < len(segments) - 1:
        organization_id = _organization(segments[position])

    return PathScope(access_scope, organization_id)


def category_of(path: Union[str, PurePath]) -> Optional[str]:
    """Category folder following the first root segment, if any."""
    segments = _segments(path)
    for i, segment in enumerate(segments[:-1]):
        if segment in ROOTS and segments[i + 1] in CATEGORIES:
            return segments[i + 1]
    return None


def strip_to_package(path: Union[str, PurePath]) -> str:
    """
    Turn an absolute or prefixed path into its package-relative form.

    The package part starts at the first root segment followed by a
    known category (or, for upgrade SQL, the migration root). Paths
    without such a segment are returned with '/' separators unchanged.

    Examples:
        >>> strip_to_package("/srv/export/config/form/orders.yaml")
        'config/form/orders.yaml'
    """
    segments = _segments(path)
    for i, segment in enumerate(segments[:-1]):
        if segment == MIGRATION_ROOT or (
            segment in ROOTS and segments[i + 1] in CATEGORIES
        ):
            return "/".join(segments[i:])
    return "/".join(segments)
