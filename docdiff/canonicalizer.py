"""Canonical string forms of scalar values, used for equality and for leaf diffs."""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Any, Optional

from .models import PropertyType
from .exceptions import MalformedScalarError
from .utils import is_numeric


DATE_FORMAT = '%Y-%m-%dT%H:%M:%SZ'

_ISO_FORMATS = [
    '%Y-%m-%dT%H:%M:%S.%fZ',
    '%Y-%m-%dT%H:%M:%SZ',
    '%Y-%m-%dT%H:%M:%S.%f%z',
    '%Y-%m-%dT%H:%M:%S%z',
    '%Y-%m-%dT%H:%M:%S.%f',
    '%Y-%m-%dT%H:%M:%S',
    '%Y-%m-%d %H:%M:%S.%f',
    '%Y-%m-%d %H:%M:%S',
    '%Y-%m-%d',
]


def parse_datetime(value: str) -> datetime:
    """
    Parse an ISO 8601 datetime string.

    Args:
        value: The datetime string

    Returns:
        Parsed datetime object (naive when the string carries no offset)
    """
    value = value.strip()
    for fmt in _ISO_FORMATS:
        try:
            parsed = datetime.strptime(value, fmt)
        except ValueError:
            continue
        if fmt.endswith('Z'):
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed

    # Try fromisoformat as fallback
    try:
        return datetime.fromisoformat(value.replace('Z', '+00:00'))
    except ValueError:
        pass

    raise ValueError(f"Cannot parse datetime '{value}' as ISO8601")


def format_datetime(value: datetime) -> str:
    """Format a datetime in UTC; naive datetimes are taken to be UTC already."""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.strftime(DATE_FORMAT)


def _canonical_boolean(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str) and value.strip().lower() in ("true", "false"):
        return value.strip().lower()
    raise MalformedScalarError(PropertyType.BOOLEAN.value, value, "expected true or false")


def _canonical_integer(kind: PropertyType, value: Any) -> str:
    if isinstance(value, bool):
        raise MalformedScalarError(kind.value, value, "boolean is not an integer")
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, str):
        try:
            return str(int(value.strip()))
        except ValueError as e:
            raise MalformedScalarError(kind.value, value, str(e))
    raise MalformedScalarError(kind.value, value, f"unsupported type {type(value).__name__}")


def _canonical_double(value: Any) -> str:
    if is_numeric(value):
        return str(float(value))
    if isinstance(value, str):
        try:
            return str(float(value.strip()))
        except ValueError as e:
            raise MalformedScalarError(PropertyType.DOUBLE.value, value, str(e))
    raise MalformedScalarError(
        PropertyType.DOUBLE.value, value, f"unsupported type {type(value).__name__}"
    )


def _canonical_date(value: Any) -> str:
    if isinstance(value, datetime):
        return format_datetime(value)
    if isinstance(value, date):
        return format_datetime(datetime(value.year, value.month, value.day))
    if isinstance(value, str):
        try:
            return format_datetime(parse_datetime(value))
        except ValueError as e:
            raise MalformedScalarError(PropertyType.DATE.value, value, str(e))
    raise MalformedScalarError(
        PropertyType.DATE.value, value, f"unsupported type {type(value).__name__}"
    )


def _canonical_text(kind: PropertyType, value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if is_numeric(value):
        return str(value)
    if isinstance(value, datetime):
        return format_datetime(value)
    if isinstance(value, date):
        return value.isoformat()
    raise MalformedScalarError(kind.value, value, f"unsupported type {type(value).__name__}")


def canonicalize(kind: PropertyType, value: Any) -> Optional[str]:
    """
    Convert a raw scalar to its canonical string form.

    Strings keep their original text (trimming only applies when comparing,
    see :func:`canonical_equal`); absent values stay None.

    Raises:
        MalformedScalarError: if the value cannot be read as ``kind``
    """
    if value is None:
        return None

    if kind == PropertyType.BOOLEAN:
        return _canonical_boolean(value)
    if kind in (PropertyType.INTEGER, PropertyType.LONG):
        return _canonical_integer(kind, value)
    if kind == PropertyType.DOUBLE:
        return _canonical_double(value)
    if kind == PropertyType.DATE:
        return _canonical_date(value)
    if kind in (PropertyType.STRING, PropertyType.UNDEFINED):
        return _canonical_text(kind, value)

    raise MalformedScalarError(kind.value, value, "not a scalar kind")


def comparison_key(canonical: Optional[str]) -> Optional[str]:
    """Key used for equality: the canonical form trimmed of surrounding whitespace."""
    if canonical is None:
        return None
    return canonical.strip()


def canonical_equal(left: Optional[str], right: Optional[str]) -> bool:
    """Two canonical forms are equal when both are absent or trimmed-equal."""
    if left is None or right is None:
        return left is None and right is None
    return comparison_key(left) == comparison_key(right)
