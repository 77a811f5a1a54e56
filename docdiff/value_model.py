"""Documents and the materialization of their raw values into value trees."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Optional

from .models import (
    PropertyType,
    DiffError,
    ValueNode,
    Scalar,
    ScalarList,
    Record,
    RecordList,
    Unreadable,
)
from .schema import FieldDefinition, SchemaDefinition, DocumentType, TypeRegistry
from .exceptions import DocDiffError, TypeMismatchError, ValidationError
from .utils import build_path, get_type_name, schema_path

logger = logging.getLogger(__name__)


@dataclass
class Document:
    """A document instance: its type, identity and raw field values per schema."""
    doc_type: DocumentType
    values: dict[str, dict[str, Any]] = field(default_factory=dict)
    name: str = ""
    path: str = ""

    def get_raw_fields(self, schema_name: str) -> dict[str, Any]:
        return self.values.get(schema_name) or {}

    def system_fields(self) -> dict[str, Scalar]:
        """Type name and path of the document, compared as a pseudo-schema."""
        return {
            "type": Scalar(PropertyType.UNDEFINED, self.doc_type.name),
            "path": Scalar(PropertyType.UNDEFINED, self.path or None),
        }

    @classmethod
    def from_dict(cls, data: dict, registry: TypeRegistry) -> "Document":
        """
        Build a document from its serialized form.

        Expected shape::

            {"type": "File", "name": "doc", "path": "/doc",
             "schemas": {"dublincore": {"title": "..."}}}
        """
        if not isinstance(data, dict):
            raise ValidationError(
                "Document must be an object",
                {"type": type(data).__name__}
            )
        if "type" not in data:
            raise ValidationError("Document type is required")

        values = data.get("schemas")
        if values is None:
            values = {}
        elif not isinstance(values, dict):
            raise ValidationError(
                "Document schemas must be an object",
                {"type": type(values).__name__}
            )

        return cls(
            doc_type=registry.get_type(data["type"]),
            values=values,
            name=data.get("name", ""),
            path=data.get("path", ""),
        )


class Materializer:
    """
    Turns raw JSON-like values into value trees following field definitions.

    Records always carry every declared member, so diffing iterates the
    declared fields rather than the keys seen in either document.

    With ``collect_errors`` set, a record member or list element whose raw
    value has the wrong shape is recorded in :attr:`errors` and replaced by an
    :class:`Unreadable` marker, which the differ skips on both sides.
    """

    def __init__(self, collect_errors: bool = False):
        self.collect_errors = collect_errors
        self.errors: list[DiffError] = []

    def materialize_schema(
        self,
        schema: SchemaDefinition,
        raw_fields: dict[str, Any]
    ) -> tuple[dict[str, Optional[ValueNode]], set[str]]:
        """
        Materialize every declared field of a schema.

        Returns:
            Tuple of (field values, names of fields that failed)
        """
        for key in raw_fields:
            if key not in schema.fields:
                logger.debug("Ignoring undeclared field %s", schema_path(schema.name, key))

        values = {}
        failed = set()
        for name, definition in schema.fields.items():
            path = schema_path(schema.name, name)
            try:
                values[name] = self.materialize(definition, raw_fields.get(name), path)
            except DocDiffError as e:
                if not self.collect_errors:
                    raise
                self.errors.append(DiffError(path=path, code=e.code, message=str(e)))
                failed.add(name)
        return values, failed

    def materialize(
        self,
        definition: FieldDefinition,
        raw: Any,
        path: str
    ) -> Optional[ValueNode]:
        """Materialize a raw value; missing records and lists stay None."""
        property_type = definition.property_type

        if property_type.is_scalar():
            return self._scalar(property_type, raw, path)

        if raw is None:
            return None

        if property_type == PropertyType.COMPLEX:
            return self._record(definition, raw, path)

        if not isinstance(raw, list):
            raise TypeMismatchError(path, property_type.value, get_type_name(raw))

        if property_type == PropertyType.SCALAR_LIST:
            kind = definition.item.property_type
            return ScalarList(
                item_kind=kind,
                items=[
                    None if item is None
                    else self._slot(self._scalar, kind, item, build_path(path, i))
                    for i, item in enumerate(raw)
                ]
            )

        return RecordList(items=[
            None if item is None
            else self._slot(self._record, definition.item, item, build_path(path, i))
            for i, item in enumerate(raw)
        ])

    def _slot(self, build, definition, raw: Any, path: str):
        """Materialize a record member or list element within its own error scope."""
        try:
            return build(definition, raw, path)
        except DocDiffError as e:
            if not self.collect_errors:
                raise
            logger.debug("Collected %s at %s: %s", e.code, path, e)
            self.errors.append(DiffError(path=path, code=e.code, message=str(e)))
            return Unreadable(path)

    def _scalar(self, kind: PropertyType, raw: Any, path: str) -> Scalar:
        if isinstance(raw, (Mapping, list)):
            raise TypeMismatchError(path, kind.value, get_type_name(raw))
        return Scalar(kind, raw)

    def _record(self, definition: FieldDefinition, raw: Any, path: str) -> Record:
        if not isinstance(raw, Mapping):
            raise TypeMismatchError(path, PropertyType.COMPLEX.value, get_type_name(raw))

        for key in raw:
            if key not in definition.fields:
                logger.debug("Ignoring undeclared member %s", build_path(path, key))

        return Record(fields={
            name: self._slot(self.materialize, member, raw.get(name), build_path(path, name))
            for name, member in definition.fields.items()
        })
