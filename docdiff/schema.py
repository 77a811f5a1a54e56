"""Document type definitions: schemas, fields and their loading."""

from __future__ import annotations

import logging
from copy import deepcopy
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml

from .models import PropertyType
from .exceptions import (
    ExternalRefError,
    CircularRefError,
    SchemaDefinitionError,
    UnknownDocumentTypeError,
)

logger = logging.getLogger(__name__)

TYPE_ALIASES = {
    "object": "complex",
    "array": "list",
    "number": "double",
    "datetime": "date",
}

SYSTEM_SCHEMA = "system"


@dataclass
class FieldDefinition:
    """Declared shape of a field, record member or list item."""
    name: str
    property_type: PropertyType
    item: Optional["FieldDefinition"] = None
    fields: dict[str, "FieldDefinition"] = field(default_factory=dict)

    @property
    def item_kind(self) -> Optional[PropertyType]:
        """Scalar kind of the items of a scalar list."""
        if self.property_type == PropertyType.SCALAR_LIST:
            return self.item.property_type
        return None


@dataclass
class SchemaDefinition:
    """A named group of declared fields."""
    name: str
    fields: dict[str, FieldDefinition] = field(default_factory=dict)

    @property
    def field_names(self) -> list[str]:
        return list(self.fields)


@dataclass
class DocumentType:
    """A document type and the schemas it is made of, in declaration order."""
    name: str
    schemas: dict[str, SchemaDefinition] = field(default_factory=dict)

    @property
    def schema_names(self) -> list[str]:
        return list(self.schemas)


class RefResolver:
    """
    Inlines local ``$ref`` references (``#/definitions/...``) of a definition file.

    Each reference is resolved once and reused; a reference that reaches
    itself again while being expanded is circular.
    """

    def __init__(self, document: dict):
        self.document = document
        self._resolved: dict[str, Any] = {}

    def resolve(self, node: Any, active: frozenset = frozenset()) -> Any:
        """Return a copy of ``node`` with every reference replaced by its target."""
        if isinstance(node, list):
            return [self.resolve(item, active) for item in node]
        if not isinstance(node, dict):
            return node
        if "$ref" not in node:
            return {key: self.resolve(value, active) for key, value in node.items()}

        ref = node["$ref"]
        if not isinstance(ref, str) or not ref.startswith("#/"):
            raise ExternalRefError(str(ref))
        if ref in active:
            raise CircularRefError(ref)
        if ref not in self._resolved:
            self._resolved[ref] = self.resolve(self.lookup(ref), active | {ref})
        return deepcopy(self._resolved[ref])

    def lookup(self, ref: str) -> Any:
        """Follow a JSON pointer through the document."""
        target = self.document
        for token in ref[2:].split("/"):
            token = token.replace("~1", "/").replace("~0", "~")
            if not isinstance(target, dict) or token not in target:
                raise SchemaDefinitionError(
                    f"Cannot resolve $ref: {ref}",
                    path=ref,
                    reason=f"'{token}' not found"
                )
            target = target[token]
        return target


class FieldParser:
    """Builds field definitions from resolved definition nodes."""

    @classmethod
    def parse(cls, name: str, node: Any, path: str) -> FieldDefinition:
        """
        Parse a field definition node.

        Args:
            name: The field or member name
            node: Either a type name or a mapping with a ``type`` key
            path: Location of the node, for error messages

        Returns:
            FieldDefinition for the node
        """
        if isinstance(node, str):
            node = {"type": node}
        if not isinstance(node, dict) or "type" not in node:
            raise SchemaDefinitionError(
                f"Invalid field definition at {path}",
                path=path,
                reason="expected a type name or a mapping with a 'type' key"
            )

        type_name = str(node["type"]).strip()
        type_name = TYPE_ALIASES.get(type_name, type_name)

        if type_name == "complex":
            members = node.get("fields", node.get("properties"))
            if not isinstance(members, dict):
                raise SchemaDefinitionError(
                    f"Complex field {path} declares no fields",
                    path=path,
                    reason="missing 'fields' mapping"
                )
            return FieldDefinition(
                name=name,
                property_type=PropertyType.COMPLEX,
                fields={
                    member: cls.parse(member, member_node, f"{path}.{member}")
                    for member, member_node in members.items()
                }
            )

        if type_name == "list":
            if "items" not in node:
                raise SchemaDefinitionError(
                    f"List field {path} declares no items",
                    path=path,
                    reason="missing 'items'"
                )
            item = cls.parse(name, node["items"], f"{path}[]")
            if item.property_type.is_list():
                raise SchemaDefinitionError(
                    f"List field {path} cannot hold lists",
                    path=path,
                    reason="nested lists must be wrapped in a complex item"
                )
            list_type = (
                PropertyType.COMPLEX_LIST
                if item.property_type == PropertyType.COMPLEX
                else PropertyType.SCALAR_LIST
            )
            return FieldDefinition(name=name, property_type=list_type, item=item)

        try:
            kind = PropertyType(type_name)
        except ValueError:
            raise SchemaDefinitionError(
                f"Unknown type '{type_name}' at {path}",
                path=path,
                reason="unknown type"
            )
        if not kind.is_scalar():
            raise SchemaDefinitionError(
                f"Type '{type_name}' at {path} must be declared as complex or list",
                path=path,
                reason="unknown type"
            )
        return FieldDefinition(name=name, property_type=kind)


class TypeRegistry:
    """
    Holds the schemas and document types known to the engine.

    Usage:
        registry = TypeRegistry.load("types.yaml")
        doc_type = registry.get_type("File")
    """

    def __init__(
        self,
        schemas: Optional[dict[str, SchemaDefinition]] = None,
        types: Optional[dict[str, DocumentType]] = None
    ):
        self.schemas = schemas or {}
        self.types = types or {}

    def get_schema(self, name: str) -> SchemaDefinition:
        if name not in self.schemas:
            raise SchemaDefinitionError(f"Unknown schema: {name}", path=name)
        return self.schemas[name]

    def get_type(self, name: str) -> DocumentType:
        if name not in self.types:
            raise UnknownDocumentTypeError(name)
        return self.types[name]

    @classmethod
    def from_dict(cls, data: dict) -> "TypeRegistry":
        """Build a registry from a parsed definition file."""
        if not isinstance(data, dict):
            raise SchemaDefinitionError("Definition file must contain a mapping")

        resolved_schemas = RefResolver(data).resolve(data.get("schemas") or {})

        schemas = {}
        for schema_name, fields in resolved_schemas.items():
            if not isinstance(fields, dict):
                raise SchemaDefinitionError(
                    f"Schema {schema_name} must map field names to definitions",
                    path=schema_name
                )
            schemas[schema_name] = SchemaDefinition(
                name=schema_name,
                fields={
                    name: FieldParser.parse(name, node, f"{schema_name}:{name}")
                    for name, node in fields.items()
                }
            )

        types = {}
        for type_name, schema_names in (data.get("types") or {}).items():
            if not isinstance(schema_names, list):
                raise SchemaDefinitionError(
                    f"Document type {type_name} must list its schemas",
                    path=type_name
                )
            missing = [s for s in schema_names if s not in schemas]
            if missing:
                raise SchemaDefinitionError(
                    f"Document type {type_name} refers to unknown schemas: {missing}",
                    path=type_name
                )
            types[type_name] = DocumentType(
                name=type_name,
                schemas={s: schemas[s] for s in schema_names}
            )

        logger.debug("Loaded %d schemas and %d document types", len(schemas), len(types))
        return cls(schemas, types)

    @classmethod
    def load(cls, path: str | Path) -> "TypeRegistry":
        """Load a registry from a YAML or JSON file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Definition file not found: {path}")

        with open(path, 'r') as f:
            content = f.read()

        # JSON is valid YAML
        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise SchemaDefinitionError(f"Failed to parse definition file: {e}", path=str(path))

        return cls.from_dict(data)
