"""Diff tree model: sparse property diffs indexed by schema and field name."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional, Union

from .models import PropertyType, DiffError


@dataclass(frozen=True)
class SimplePropertyDiff:
    """A scalar slot whose canonical left and right values differ."""
    property_type: PropertyType
    left_value: Optional[str] = None
    right_value: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "type": self.property_type.value,
            "left": self.left_value,
            "right": self.right_value,
        }


@dataclass(frozen=True)
class ComplexPropertyDiff:
    """Diffs of the members of a record; only differing members have an entry."""
    diff_map: dict[str, "PropertyDiff"] = field(default_factory=dict)
    property_type: PropertyType = PropertyType.COMPLEX

    def get_diff(self, name: str) -> Optional["PropertyDiff"]:
        return self.diff_map.get(name)

    def get_names(self) -> list[str]:
        return list(self.diff_map)

    def is_empty(self) -> bool:
        return not self.diff_map

    def to_dict(self) -> dict:
        return {
            "type": self.property_type.value,
            "diff": {name: d.to_dict() for name, d in self.diff_map.items()},
        }


@dataclass(frozen=True)
class ListPropertyDiff:
    """Diffs of list elements by position; only differing indexes have an entry."""
    property_type: PropertyType
    diff_map: dict[int, "PropertyDiff"] = field(default_factory=dict)

    def __post_init__(self):
        if not self.property_type.is_list():
            raise ValueError(f"Not a list type: {self.property_type.value}")

    def get_diff(self, index: int) -> Optional["PropertyDiff"]:
        return self.diff_map.get(index)

    def get_indexes(self) -> list[int]:
        return sorted(self.diff_map)

    def is_empty(self) -> bool:
        return not self.diff_map

    def to_dict(self) -> dict:
        return {
            "type": self.property_type.value,
            "diff": {str(i): self.diff_map[i].to_dict() for i in self.get_indexes()},
        }


PropertyDiff = Union[SimplePropertyDiff, ComplexPropertyDiff, ListPropertyDiff]


@dataclass(frozen=True)
class SchemaDiff:
    """Field diffs of one schema; a missing field name means identical."""
    name: str
    field_diffs: dict[str, PropertyDiff] = field(default_factory=dict)

    def get_field_diff(self, field_name: str) -> Optional[PropertyDiff]:
        return self.field_diffs.get(field_name)

    @property
    def field_names(self) -> list[str]:
        return list(self.field_diffs)

    @property
    def field_count(self) -> int:
        return len(self.field_diffs)

    def is_empty(self) -> bool:
        return not self.field_diffs

    def to_dict(self) -> dict:
        return {name: d.to_dict() for name, d in self.field_diffs.items()}


@dataclass(frozen=True)
class DocumentDiff:
    """
    Whole-document diff.

    ``schema_count`` is the number of schemas compared, whether or not any of
    their fields differ; every compared schema has an entry in ``schemas``.
    """
    schemas: dict[str, SchemaDiff] = field(default_factory=dict)
    schema_count: int = 0
    errors: list[DiffError] = field(default_factory=list)

    def get_schema_diff(self, schema_name: str) -> Optional[SchemaDiff]:
        return self.schemas.get(schema_name)

    def get_field_diff(self, schema_name: str, field_name: str) -> Optional[PropertyDiff]:
        schema_diff = self.schemas.get(schema_name)
        if schema_diff is None:
            return None
        return schema_diff.get_field_diff(field_name)

    @property
    def schema_names(self) -> list[str]:
        return list(self.schemas)

    def is_identical(self) -> bool:
        return not self.errors and all(s.is_empty() for s in self.schemas.values())

    def select(self, expression: str) -> list[Any]:
        """Return the values matching a JSONPath expression over :meth:`to_dict`."""
        from .jsonpath_utils import JSONPathMatcher
        return JSONPathMatcher.find_values(self.to_dict(), expression)

    def to_dict(self) -> dict:
        return {
            "schema_count": self.schema_count,
            "is_identical": self.is_identical(),
            "schemas": {name: s.to_dict() for name, s in self.schemas.items()},
            "errors": [e.to_dict() for e in self.errors],
        }
