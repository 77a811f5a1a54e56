"""Utility functions for the document diff engine."""

from __future__ import annotations

import re
from typing import Any


def is_numeric(value: Any) -> bool:
    """Check if a value is numeric (int or float)."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def build_path(parent_path: str, key: str | int) -> str:
    """Build a display path from parent path and member name or list index."""
    if isinstance(key, int):
        return f"{parent_path}[{key}]"
    if not parent_path:
        return str(key)
    # Handle special characters in key names
    if re.match(r'^[a-zA-Z_][a-zA-Z0-9_]*$', str(key)):
        return f"{parent_path}.{key}"
    return f"{parent_path}['{key}']"


def schema_path(schema_name: str, field_name: str) -> str:
    """Build the root path of a field inside a schema."""
    return f"{schema_name}:{field_name}"


def get_type_name(value: Any) -> str:
    """Get a friendly type name for a raw value or value tree node."""
    property_type = getattr(value, "property_type", None)
    if property_type is not None:
        return property_type.value
    if value is None:
        return "null"
    elif isinstance(value, bool):
        return "boolean"
    elif isinstance(value, int):
        return "integer"
    elif isinstance(value, float):
        return "number"
    elif isinstance(value, str):
        return "string"
    elif isinstance(value, list):
        return "array"
    elif isinstance(value, dict):
        return "object"
    else:
        return type(value).__name__
