#!/usr/bin/env python3
"""
validators.py
--------------------
Data validation and normalization utilities.

Provides type-safe conversion of values read from YAML metadata
documents before they are assigned to descriptor fields.
"""
from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional, Type, TypeVar

from .exceptions import ValidationError

E = TypeVar("E", bound=Enum)


class DataValidator:
    """Centralized data validation for descriptor documents."""

    @staticmethod
    def validate_required_fields(
        data: Dict[str, Any], required_fields: List[str]
    ) -> None:
        """
        Validate that required fields are present and non-empty.

        Args:
            data: Data dictionary to validate
            required_fields: List of required field names

        Raises:
            ValidationError: If validation fails
        """
        for field in required_fields:
            if field not in data or data[field] in (None, ""):
                raise ValidationError(f"Required field '{field}' missing or empty")

    @staticmethod
    def normalize_string(value: Any) -> Optional[str]:
        """
        Normalize string value (strip whitespace, empty to None).

        Args:
            value: Value to normalize

        Returns:
            Normalized string or None
        """
        if value is None:
            return None
        text = str(value).strip()
        return text or None

    @staticmethod
    def normalize_bool(value: Any) -> Optional[bool]:
        """
        Convert various inputs to boolean.

        Args:
            value: Value to convert

        Returns:
            Boolean value or None

        Raises:
            ValidationError: If conversion fails
        """
        if isinstance(value, bool):
            return value
        elif isinstance(value, (int, float)):
            if value == 0:
                return False
            elif value == 1:
                return True
            else:
                raise ValidationError(f"Cannot convert numeric '{value}' to boolean")
        elif isinstance(value, str):
            if value.lower() in ("true", "1", "yes", "on"):
                return True
            elif value.lower() in ("false", "0", "no", "off"):
                return False
            else:
                raise ValidationError(f"Cannot convert '{value}' to boolean")
        elif value is not None:
            return bool(value)
        return None

    @staticmethod
    def normalize_int(value: Any) -> Optional[int]:
        """
        Convert value to integer.

        Raises:
            ValidationError: If the value is not an integer
        """
        if value is None or value == "":
            return None
        if isinstance(value, bool):
            raise ValidationError(f"Cannot convert boolean '{value}' to integer")
        try:
            return int(value)
        except (TypeError, ValueError) as e:
            raise ValidationError(f"Cannot convert '{value}' to integer") from e

    @staticmethod
    def normalize_list(value: Any) -> List[str]:
        """
        Normalize a list of names.

        Accepts a list or a comma separated string; drops empty items.
        """
        if value is None:
            return []
        if isinstance(value, str):
            items = value.split(",")
        elif isinstance(value, (list, tuple)):
            items = list(value)
        else:
            raise ValidationError(f"Expected a list, got {type(value).__name__}")
        return [str(item).strip() for item in items if str(item).strip()]

    @staticmethod
    def normalize_mapping(value: Any) -> Dict[str, str]:
        """Normalize a string-to-string mapping (None becomes empty)."""
        if value is None:
            return {}
        if not isinstance(value, dict):
            raise ValidationError(f"Expected a mapping, got {type(value).__name__}")
        return {str(k): "" if v is None else str(v) for k, v in value.items()}

    @staticmethod
    def normalize_enum(value: Any, enum_class: Type[E]) -> Optional[E]:
        """
        Convert a name or value into an enum member.

        Matching is case-insensitive against both member names and values.

        Raises:
            ValidationError: If no member matches
        """
        if value is None or value == "":
            return None
        if isinstance(value, enum_class):
            return value
        text = str(value).strip()
        for member in enum_class:
            if text.upper() == member.name or text.lower() == str(member.value).lower():
                return member
        raise ValidationError(
            f"Invalid {enum_class.__name__} value '{value}'. "
            f"Expected one of: {', '.join(m.name for m in enum_class)}"
        )
