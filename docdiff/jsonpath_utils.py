"""JSONPath querying of rendered diff reports."""

from __future__ import annotations

from functools import lru_cache
from typing import Any

from jsonpath_ng import parse as jsonpath_parse
from jsonpath_ng.exceptions import JSONPathError


@lru_cache(maxsize=256)
def _compile(path: str):
    """Compile and cache a JSONPath expression."""
    try:
        return jsonpath_parse(path)
    except JSONPathError as e:
        raise ValueError(f"Invalid JSONPath expression '{path}': {e}")


class JSONPathMatcher:
    """
    Runs JSONPath expressions against ``DocumentDiff.to_dict()`` output.

    Examples:
        $.schemas.dublincore.title.right
        $.schemas.*.contributors.diff.*
    """

    @classmethod
    def compile(cls, path: str):
        return _compile(path)

    @classmethod
    def find_all(cls, data: Any, path: str) -> list[tuple[str, Any]]:
        """
        Find all matches for a JSONPath expression.

        Returns:
            List of (full_path, value) tuples
        """
        matches = cls.compile(path).find(data)
        return [(str(m.full_path), m.value) for m in matches]

    @classmethod
    def find_values(cls, data: Any, path: str) -> list[Any]:
        """Find all values matching a JSONPath expression."""
        return [m.value for m in cls.compile(path).find(data)]


def changed_fields(report: dict) -> list[str]:
    """List the differing fields of a rendered document diff as ``schema:field``."""
    changed = []
    for match in JSONPathMatcher.compile("$.schemas.*.*").find(report):
        # match.path is the field, match.context.path its schema
        field_name = match.path.fields[0]
        schema_name = match.context.path.fields[0]
        changed.append(f"{schema_name}:{field_name}")
    return changed
