"""
DocDiff - structural diff of schema-typed documents

Compares two versions of a document, schema by schema and field by field,
and produces a sparse diff tree holding only the places where they differ.
"""

from .engine import DocumentDiffEngine, diff_document
from .differ import Differ, diff_field, diff_schema
from .models import (
    EngineConfig,
    LogLevel,
    PropertyType,
    Scalar,
    ScalarList,
    Record,
    RecordList,
    Unreadable,
    DiffError,
)
from .diff_tree import (
    SimplePropertyDiff,
    ComplexPropertyDiff,
    ListPropertyDiff,
    SchemaDiff,
    DocumentDiff,
)
from .canonicalizer import canonicalize, canonical_equal
from .schema import (
    FieldDefinition,
    SchemaDefinition,
    DocumentType,
    TypeRegistry,
)
from .value_model import Document, Materializer
from .runner import DocumentDiffRunner, run_diff

__version__ = "1.0.0"
__all__ = [
    # Engine
    "DocumentDiffEngine",
    "diff_document",
    "Differ",
    "diff_field",
    "diff_schema",
    "EngineConfig",
    "LogLevel",
    # Value model
    "PropertyType",
    "Scalar",
    "ScalarList",
    "Record",
    "RecordList",
    "Unreadable",
    "Document",
    "Materializer",
    "FieldDefinition",
    "SchemaDefinition",
    "DocumentType",
    "TypeRegistry",
    # Diff tree
    "SimplePropertyDiff",
    "ComplexPropertyDiff",
    "ListPropertyDiff",
    "SchemaDiff",
    "DocumentDiff",
    "DiffError",
    # Canonicalization
    "canonicalize",
    "canonical_equal",
    # Runner
    "DocumentDiffRunner",
    "run_diff",
]
