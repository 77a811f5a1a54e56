"""Recursive structural diffing of value trees."""

from __future__ import annotations

import logging
from typing import Optional

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
from .diff_tree import (
    PropertyDiff,
    SimplePropertyDiff,
    ComplexPropertyDiff,
    ListPropertyDiff,
    SchemaDiff,
)
from .canonicalizer import canonicalize, canonical_equal
from .exceptions import DocDiffError, TypeMismatchError, MaxDepthExceededError
from .utils import build_path, get_type_name, schema_path

logger = logging.getLogger(__name__)


class Differ:
    """
    Compares two value trees and builds a sparse diff tree.

    Handles:
    - Scalars, compared on their canonical string form
    - Records, member by member over the declared members
    - Lists of scalars or records, position by position

    An absent side (None) is compared against the present side's shape, so a
    record present on one side only yields a diff for each non-empty member.

    With ``collect_errors`` set, a failure in a record member or list element
    is recorded in :attr:`errors` and that slot is left out of the tree;
    otherwise the first failure propagates.
    """

    def __init__(self, max_depth: int = 100, collect_errors: bool = False):
        self.max_depth = max_depth
        self.collect_errors = collect_errors
        self.errors: list[DiffError] = []

    def diff(
        self,
        left: Optional[ValueNode],
        right: Optional[ValueNode],
        path: str = "$",
        depth: int = 0
    ) -> Optional[PropertyDiff]:
        """
        Diff two values of the same declared shape.

        Args:
            left: The left value, or None when absent
            right: The right value, or None when absent
            path: Display path of the value, used in error reports
            depth: Current nesting depth

        Returns:
            The property diff, or None if both sides are identical
        """
        if depth > self.max_depth:
            raise MaxDepthExceededError(self.max_depth, path)

        if left is None and right is None:
            return None

        if left is not None and right is not None:
            self._check_same_shape(left, right, path)

        reference = left if left is not None else right
        property_type = reference.property_type

        if property_type.is_scalar():
            return self._diff_scalars(left, right, property_type)
        elif property_type == PropertyType.COMPLEX:
            return self._diff_records(left, right, path, depth)
        else:
            return self._diff_lists(left, right, property_type, path, depth)

    def diff_schema(
        self,
        schema_name: str,
        left_fields: dict[str, Optional[ValueNode]],
        right_fields: dict[str, Optional[ValueNode]]
    ) -> SchemaDiff:
        """Diff every declared field of a schema, keeping only differing ones."""
        field_diffs = {}
        for field_name in _member_names(left_fields, right_fields):
            field_diff = self._diff_child(
                left_fields.get(field_name),
                right_fields.get(field_name),
                schema_path(schema_name, field_name),
                0
            )
            if field_diff is not None:
                field_diffs[field_name] = field_diff
        return SchemaDiff(name=schema_name, field_diffs=field_diffs)

    def _diff_scalars(
        self,
        left: Optional[Scalar],
        right: Optional[Scalar],
        kind: PropertyType
    ) -> Optional[SimplePropertyDiff]:
        left_value = canonicalize(kind, left.value) if left is not None else None
        right_value = canonicalize(kind, right.value) if right is not None else None

        if canonical_equal(left_value, right_value):
            return None
        return SimplePropertyDiff(kind, left_value, right_value)

    def _diff_records(
        self,
        left: Optional[Record],
        right: Optional[Record],
        path: str,
        depth: int
    ) -> Optional[ComplexPropertyDiff]:
        left_fields = left.fields if left is not None else {}
        right_fields = right.fields if right is not None else {}

        diff_map = {}
        for name in _member_names(left_fields, right_fields):
            member_diff = self._diff_child(
                left_fields.get(name),
                right_fields.get(name),
                build_path(path, name),
                depth + 1
            )
            if member_diff is not None:
                diff_map[name] = member_diff

        if not diff_map:
            return None
        return ComplexPropertyDiff(diff_map)

    def _diff_lists(
        self,
        left: Optional[ScalarList | RecordList],
        right: Optional[ScalarList | RecordList],
        list_type: PropertyType,
        path: str,
        depth: int
    ) -> Optional[ListPropertyDiff]:
        """Compare lists index-by-index; a missing tail element counts as absent."""
        left_items = left.items if left is not None else []
        right_items = right.items if right is not None else []

        diff_map = {}
        for i in range(max(len(left_items), len(right_items))):
            left_item = left_items[i] if i < len(left_items) else None
            right_item = right_items[i] if i < len(right_items) else None

            item_diff = self._diff_child(
                left_item,
                right_item,
                build_path(path, i),
                depth + 1,
                list_type
            )
            if item_diff is not None:
                diff_map[i] = item_diff

        if not diff_map:
            return None
        return ListPropertyDiff(list_type, diff_map)

    def _diff_child(
        self,
        left: Optional[ValueNode],
        right: Optional[ValueNode],
        path: str,
        depth: int,
        list_type: Optional[PropertyType] = None
    ) -> Optional[PropertyDiff]:
        """Diff a field, record member or list element within its own error scope."""
        if isinstance(left, Unreadable) or isinstance(right, Unreadable):
            # already reported by the materializer
            return None
        try:
            if list_type is not None:
                self._check_list_item(left, list_type, path)
                self._check_list_item(right, list_type, path)
            return self.diff(left, right, path, depth)
        except DocDiffError as e:
            if not self.collect_errors:
                raise
            self._add_error(path, e)
            return None

    def _check_same_shape(self, left: ValueNode, right: ValueNode, path: str):
        if left.property_type != right.property_type:
            raise TypeMismatchError(path, get_type_name(left), get_type_name(right))

        if isinstance(left, ScalarList) and left.item_kind != right.item_kind:
            raise TypeMismatchError(
                path,
                f"{PropertyType.SCALAR_LIST.value}<{left.item_kind.value}>",
                f"{PropertyType.SCALAR_LIST.value}<{right.item_kind.value}>"
            )

    def _check_list_item(
        self,
        item: Optional[ValueNode],
        list_type: PropertyType,
        path: str
    ):
        if item is None:
            return
        if list_type == PropertyType.SCALAR_LIST:
            valid = item.property_type.is_scalar()
            expected = "scalar"
        else:
            valid = item.property_type == PropertyType.COMPLEX
            expected = PropertyType.COMPLEX.value
        if not valid:
            raise TypeMismatchError(path, expected, get_type_name(item))

    def _add_error(self, path: str, error: DocDiffError):
        """Add an error entry."""
        logger.debug("Collected %s at %s: %s", error.code, path, error)
        self.errors.append(DiffError(
            path=path,
            code=error.code,
            message=str(error)
        ))


def _member_names(left: dict, right: dict) -> list[str]:
    """Declared member names of both sides, left order first."""
    return list(dict.fromkeys([*left, *right]))


def diff_field(
    left: Optional[ValueNode],
    right: Optional[ValueNode],
    max_depth: int = 100
) -> Optional[PropertyDiff]:
    """
    Diff a single field.

    Returns:
        The property diff, or None if both sides are identical

    Raises:
        TypeMismatchError: if the two sides disagree on their shape
        MalformedScalarError: if a scalar cannot be canonicalized
    """
    return Differ(max_depth=max_depth).diff(left, right)


def diff_schema(
    schema_name: str,
    left_fields: dict[str, Optional[ValueNode]],
    right_fields: dict[str, Optional[ValueNode]],
    max_depth: int = 100
) -> SchemaDiff:
    """Diff all declared fields of a schema, raising on the first failure."""
    return Differ(max_depth=max_depth).diff_schema(schema_name, left_fields, right_fields)
