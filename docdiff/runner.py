"""Runner that loads type definitions and document files and diffs them."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

import yaml

from .engine import DocumentDiffEngine
from .models import EngineConfig
from .diff_tree import DocumentDiff
from .schema import TypeRegistry
from .value_model import Document
from .exceptions import ValidationError

logger = logging.getLogger(__name__)


class DocumentDiffRunner:
    """
    Diffs document files against a YAML/JSON type definition file.

    Usage:
        runner = DocumentDiffRunner("types.yaml")
        doc_diff = runner.diff_files("left.json", "right.json")
        runner.write_report(doc_diff, "report.json")
    """

    def __init__(
        self,
        types_path: str,
        engine_config: Optional[EngineConfig] = None
    ):
        """
        Initialize the runner.

        Args:
            types_path: Path to the YAML/JSON type definition file
            engine_config: Optional engine configuration
        """
        self.types_path = Path(types_path)
        self.engine = DocumentDiffEngine(engine_config or EngineConfig())
        self._registry: Optional[TypeRegistry] = None

    @property
    def registry(self) -> TypeRegistry:
        """Load and cache the type registry from file."""
        if self._registry is None:
            self._registry = TypeRegistry.load(self.types_path)
        return self._registry

    def load_document(self, path: str) -> Document:
        """Load a document from a YAML or JSON file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Document file not found: {path}")

        with open(path, 'r') as f:
            content = f.read()

        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ValidationError(f"Failed to parse document file: {e}", {"path": str(path)})

        document = Document.from_dict(data, self.registry)
        if not document.name:
            document.name = path.stem
        return document

    def diff_files(self, left_path: str, right_path: str) -> DocumentDiff:
        """Diff the documents stored in two files."""
        logger.debug("Diffing %s against %s", left_path, right_path)
        left = self.load_document(left_path)
        right = self.load_document(right_path)
        return self.engine.diff(left, right)

    @staticmethod
    def write_report(doc_diff: DocumentDiff, report_path: str):
        """Write the rendered diff as JSON."""
        with open(report_path, 'w') as f:
            json.dump(doc_diff.to_dict(), indent=2, fp=f)
        logger.info("Report saved to %s", report_path)


def run_diff(
    types_path: str,
    left_path: str,
    right_path: str,
    engine_config: Optional[EngineConfig] = None
) -> DocumentDiff:
    """
    Diff two document files in one call.

        from docdiff.runner import run_diff
        doc_diff = run_diff("types.yaml", "left.json", "right.json")
    """
    return DocumentDiffRunner(types_path, engine_config).diff_files(left_path, right_path)
