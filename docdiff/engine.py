"""Document-level diff: runs the schema diffs and assembles the result."""

from __future__ import annotations

import logging
import time
from typing import Optional

from .models import EngineConfig
from .diff_tree import DocumentDiff
from .differ import Differ
from .schema import SYSTEM_SCHEMA
from .value_model import Document, Materializer
from .exceptions import ValidationError

logger = logging.getLogger(__name__)


class DocumentDiffEngine:
    """
    Main diff engine that orchestrates, for every schema shared by both documents:

    1. Materialization: raw values become value trees following the schema
    2. Diffing: field-by-field structural comparison into a sparse diff tree

    Failures are scoped to the field, record member or list element they occur
    in and reported in ``DocumentDiff.errors``, unless ``fail_fast`` is set.
    """

    def __init__(self, config: Optional[EngineConfig] = None):
        """
        Initialize the engine.

        Args:
            config: Engine configuration (uses defaults if not provided)
        """
        self.config = config or EngineConfig()

    def diff(self, left: Document, right: Document) -> DocumentDiff:
        """
        Diff two documents.

        Args:
            left: The left-hand document
            right: The right-hand document

        Returns:
            DocumentDiff holding one SchemaDiff per compared schema
        """
        start_time = time.time()
        self._validate_inputs(left, right)

        collect_errors = not self.config.fail_fast
        materializer = Materializer(collect_errors=collect_errors)
        differ = Differ(max_depth=self.config.max_depth, collect_errors=collect_errors)

        schemas = {}
        if self.config.include_system_elements:
            schemas[SYSTEM_SCHEMA] = differ.diff_schema(
                SYSTEM_SCHEMA, left.system_fields(), right.system_fields()
            )

        for schema_name in self._shared_schemas(left, right):
            logger.debug("Diffing schema %s", schema_name)
            left_fields, left_failed = materializer.materialize_schema(
                left.doc_type.schemas[schema_name], left.get_raw_fields(schema_name)
            )
            right_fields, right_failed = materializer.materialize_schema(
                right.doc_type.schemas[schema_name], right.get_raw_fields(schema_name)
            )

            # A field that failed on either side is reported, not compared
            for field_name in left_failed | right_failed:
                left_fields.pop(field_name, None)
                right_fields.pop(field_name, None)

            schemas[schema_name] = differ.diff_schema(schema_name, left_fields, right_fields)

        errors = materializer.errors + differ.errors
        for error in errors:
            logger.warning("Field %s not compared: %s", error.path, error.message)

        document_diff = DocumentDiff(
            schemas=schemas,
            schema_count=len(schemas),
            errors=errors
        )

        duration_ms = int((time.time() - start_time) * 1000)
        logger.info(
            "Compared %d schemas of %s and %s in %dms: %d differing fields, %d errors",
            document_diff.schema_count,
            left.name or left.doc_type.name,
            right.name or right.doc_type.name,
            duration_ms,
            sum(s.field_count for s in schemas.values()),
            len(errors)
        )
        return document_diff

    def _validate_inputs(self, left: Document, right: Document):
        """Validate input parameters."""
        if left is None:
            raise ValidationError("left document is required")
        if right is None:
            raise ValidationError("right document is required")

        for side, doc in (("left", left), ("right", right)):
            if not isinstance(doc, Document):
                raise ValidationError(
                    f"{side} must be a Document",
                    {"type": type(doc).__name__}
                )

    def _shared_schemas(self, left: Document, right: Document) -> list[str]:
        """Schemas of the left type that the right type also declares."""
        right_schemas = set(right.doc_type.schema_names)
        return [s for s in left.doc_type.schema_names if s in right_schemas]


def diff_document(
    left: Document,
    right: Document,
    config: Optional[EngineConfig] = None
) -> DocumentDiff:
    """
    Convenience function to diff two documents.

    Args:
        left: The left-hand document
        right: The right-hand document
        config: Optional engine configuration

    Returns:
        DocumentDiff of the two documents
    """
    engine = DocumentDiffEngine(config)
    return engine.diff(left, right)
