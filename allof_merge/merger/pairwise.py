"""
Field-by-field merging of two dereferenced schemas.

Some fields union permissively (enum, required, properties), some must agree
exactly (type, format, flags, exclusive bounds) and some follow precedence
rules (additionalProperties). Combinations without a defined meaning, such as
two defaults, raise instead of guessing.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from ..errors import (
    BuildError,
    CompositionDepthExceeded,
    ConflictingBound,
    ConflictingFlag,
    IncompatibleBoundDialect,
    IncompatibleFormats,
    IncompatibleTypes,
    SchemaMergeError,
    TransitiveFlattenError,
    UndefinedDefaultMerge,
    UnsupportedAdditionalPropertiesMerge,
)
from ..resolver import ReferenceResolver
from ..schema_ast import BooleanBound, ExclusiveBound, NumericBound, SchemaSource, SchemaValue


class SchemaMerger:
    """Merges schema values pairwise, flattening nested allOf on the way."""

    def __init__(self, resolver: ReferenceResolver, max_depth: int = 64):
        """
        Initialize the merger.

        Args:
            resolver: Dereferencing capability for nested allOf entries
            max_depth: Maximum nesting of transitively flattened allOf lists
        """
        self.resolver = resolver
        self.max_depth = max_depth

    def merge(self, s1: SchemaValue, s2: SchemaValue, all_of_context: bool = True, depth: int = 0) -> SchemaValue:
        """
        Merge two schemas into one whose constraints are those of both.

        Args:
            s1: First schema
            s2: Second schema
            all_of_context: Whether the merge comes from an allOf (no rule depends on it yet)
            depth: Current allOf nesting, used to stop on cyclic composition

        Returns:
            A new SchemaValue; neither input is modified

        Raises:
            SchemaMergeError: On the first field that cannot be merged
        """
        result = SchemaValue(source_path=_joined_path(s1.source_path, s2.source_path))

        result.extensions = self._merge_extensions(s1.extensions, s2.extensions)
        result.one_of = s1.one_of + s2.one_of

        # allOf is transitive: nested lists are flattened before any comparison
        if s1.all_of:
            s1 = self._flatten_side(s1, 1, depth)
        if s2.all_of:
            s2 = self._flatten_side(s2, 2, depth)
        result.all_of = s1.all_of + s2.all_of

        if s1.type and s2.type and s1.type != s2.type:
            raise IncompatibleTypes.between(f"can not merge incompatible types '{s1.type}' and '{s2.type}'", "type", s1, s2)
        result.type = s1.type or s2.type

        if s1.format != s2.format:
            raise IncompatibleFormats.between(f"can not merge incompatible formats '{s1.format}' and '{s2.format}'", "format", s1, s2)
        result.format = s1.format

        # Union rather than intersection: the permissive choice
        result.enum = s1.enum + s2.enum

        if s1.has_default and s2.has_default:
            raise UndefinedDefaultMerge.between("merging two sets of defaults is undefined", "default", s1, s2)
        if s1.has_default:
            result.default, result.has_default = s1.default, True
        elif s2.has_default:
            result.default, result.has_default = s2.default, True

        result.unique_items = self._merge_flag("uniqueItems", s1.unique_items, s2.unique_items, s1, s2)

        result.exclusive_minimum = self._merge_bound("exclusiveMinimum", s1.exclusive_minimum, s2.exclusive_minimum, s1, s2)
        result.exclusive_maximum = self._merge_bound("exclusiveMaximum", s1.exclusive_maximum, s2.exclusive_maximum, s1, s2)

        result.nullable = self._merge_flag("nullable", s1.nullable, s2.nullable, s1, s2)
        result.read_only = self._merge_flag("readOnly", s1.read_only, s2.read_only, s1, s2)
        result.write_only = self._merge_flag("writeOnly", s1.write_only, s2.write_only, s1, s2)

        result.required = s1.required + s2.required

        # Same-named properties are not checked for conflicts: the second one wins
        result.properties = dict(s1.properties)
        result.properties.update(s2.properties)

        result.additional_properties = self._merge_additional_properties(s1, s2)

        return result

    def flatten(self, sources: Sequence[SchemaSource], depth: int = 0, source_path: str = "") -> SchemaValue:
        """
        Collapse an allOf list into a single equivalent schema.

        Args:
            sources: The non-empty allOf entries
            depth: Nesting level of this list
            source_path: Location of the schema owning the list (for error messages)

        Returns:
            The merged SchemaValue

        Raises:
            BuildError: If an entry cannot be dereferenced
            CompositionDepthExceeded: If nesting is deeper than max_depth
        """
        if not sources:
            raise ValueError("cannot flatten an empty allOf list")
        if depth > self.max_depth:
            raise CompositionDepthExceeded(self.max_depth, source_path)

        schemas = [self._build(source) for source in sources]

        result = schemas[0]
        if result.all_of:
            result = self.flatten(result.all_of, depth + 1, result.source_path)
        for schema in schemas[1:]:
            result = self.merge(result, schema, True, depth)
        return result

    def _build(self, source: SchemaSource) -> SchemaValue:
        try:
            return self.resolver.resolve(source)
        except SchemaMergeError as e:
            raise BuildError(f"error merging schemas for AllOf: {e}") from e

    def _flatten_side(self, schema: SchemaValue, side: int, depth: int) -> SchemaValue:
        try:
            return self.flatten(schema.all_of, depth + 1, schema.source_path)
        except CompositionDepthExceeded:
            raise
        except SchemaMergeError as e:
            raise TransitiveFlattenError(side, e) from e

    def _merge_extensions(self, e1: dict[str, Any] | None, e2: dict[str, Any] | None) -> dict[str, Any] | None:
        if e1 is None and e2 is None:
            return None
        extensions = dict(e1 or {})
        extensions.update(e2 or {})
        return extensions

    def _merge_flag(self, name: str, f1: bool, f2: bool, s1: SchemaValue, s2: SchemaValue) -> bool:
        if f1 != f2:
            raise ConflictingFlag.between(f"merging two schemas with different {name}", name, s1, s2)
        return f1

    def _merge_bound(
        self,
        name: str,
        b1: ExclusiveBound | None,
        b2: ExclusiveBound | None,
        s1: SchemaValue,
        s2: SchemaValue,
    ) -> ExclusiveBound | None:
        """Merge exclusiveMinimum/exclusiveMaximum without mixing dialects."""
        if b1 is None:
            return b2
        if b2 is None:
            return b1

        for bound in (b1, b2):
            if not isinstance(bound, (BooleanBound, NumericBound)):
                raise TypeError(f"Unsupported exclusive bound: {bound!r}")

        if isinstance(b1, BooleanBound) != isinstance(b2, BooleanBound):
            raise IncompatibleBoundDialect.between(
                f"merging two schemas with {name} defined as {_dialect(b1)} and {_dialect(b2)}",
                name,
                s1,
                s2,
            )
        if b1.value != b2.value:
            raise ConflictingBound.between(f"merging two schemas with different {name}", name, s1, s2)
        return b1

    def _merge_additional_properties(self, s1: SchemaValue, s2: SchemaValue) -> bool | SchemaSource | None:
        ap1 = s1.additional_properties
        ap2 = s2.additional_properties

        # An explicit false forbids extra properties whatever the other side says
        if ap1 is False or ap2 is False:
            return False
        if isinstance(ap1, SchemaSource):
            if isinstance(ap2, SchemaSource):
                raise UnsupportedAdditionalPropertiesMerge.between(
                    "merging two schemas with additional properties, this is unhandled",
                    "additionalProperties",
                    s1,
                    s2,
                )
            return ap1
        if isinstance(ap2, SchemaSource):
            return ap2
        if ap1 is True or ap2 is True:
            return True
        return None


def _dialect(bound: ExclusiveBound) -> str:
    if isinstance(bound, BooleanBound):
        return "a boolean (OpenAPI 3.0)"
    return "a number (OpenAPI 3.1)"


def _joined_path(left: str, right: str) -> str:
    if left and right and left != right:
        return f"{left} & {right}"
    return left or right
