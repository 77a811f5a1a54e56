"""Data models for the document diff engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Union


class LogLevel(Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARN = "WARNING"
    ERROR = "ERROR"


class PropertyType(Enum):
    STRING = "string"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    LONG = "long"
    DOUBLE = "double"
    DATE = "date"
    UNDEFINED = "undefined"
    COMPLEX = "complex"
    SCALAR_LIST = "scalarList"
    COMPLEX_LIST = "complexList"

    def is_scalar(self) -> bool:
        return self not in (
            PropertyType.COMPLEX,
            PropertyType.SCALAR_LIST,
            PropertyType.COMPLEX_LIST,
        )

    def is_list(self) -> bool:
        return self in (PropertyType.SCALAR_LIST, PropertyType.COMPLEX_LIST)


@dataclass
class EngineConfig:
    """Global configuration for the diff engine."""
    max_depth: int = 100
    fail_fast: bool = False
    include_system_elements: bool = False
    log_level: LogLevel = LogLevel.INFO


# Value tree nodes. An absent value is represented by None wherever a node
# is expected (list slots, record members, whole fields).

@dataclass(frozen=True)
class Scalar:
    """A scalar value of a declared primitive kind; ``value`` may be None."""
    kind: PropertyType
    value: Any = None

    @property
    def property_type(self) -> PropertyType:
        return self.kind


@dataclass(frozen=True)
class ScalarList:
    """Ordered list of scalars of a single kind."""
    item_kind: PropertyType
    items: list[Optional[Scalar]] = field(default_factory=list)

    @property
    def property_type(self) -> PropertyType:
        return PropertyType.SCALAR_LIST


@dataclass(frozen=True)
class Record:
    """
    A complex value.

    ``fields`` holds every member declared by the record's definition, in
    declaration order, with None for members that carry no value.
    """
    fields: dict[str, Optional["ValueNode"]] = field(default_factory=dict)

    @property
    def property_type(self) -> PropertyType:
        return PropertyType.COMPLEX


@dataclass(frozen=True)
class RecordList:
    """Ordered list of records."""
    items: list[Optional[Record]] = field(default_factory=list)

    @property
    def property_type(self) -> PropertyType:
        return PropertyType.COMPLEX_LIST


@dataclass(frozen=True)
class Unreadable:
    """Record member or list element whose raw value could not be materialized."""
    path: str


ValueNode = Union[Scalar, ScalarList, Record, RecordList]


@dataclass
class DiffError:
    """A failure scoped to a single field, record member or list element."""
    path: str
    code: str
    message: str

    def to_dict(self) -> dict:
        return {
            "path": self.path,
            "code": self.code,
            "message": self.message,
        }
