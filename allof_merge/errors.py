"""
Exceptions raised while parsing, resolving and merging schemas.

Every failure is terminal for the merge that produced it. Errors raised
while comparing two schemas carry the name of the offending field and the
source path of each side so callers can report a location.
"""

from __future__ import annotations

from typing import Any


class SchemaMergeError(Exception):
    """Base class for all allof_merge errors.

    Attributes:
        field: The schema field being merged, if any
        left: Source path of the first schema, if any
        right: Source path of the second schema, if any
    """

    def __init__(self, message: str, *, field: str | None = None, left: str | None = None, right: str | None = None):
        super().__init__(message)
        self.field = field
        self.left = left
        self.right = right

    @classmethod
    def between(cls, message: str, field: str, left: Any, right: Any) -> SchemaMergeError:
        """Build an error about ``field`` for two schema values."""
        left_path = left.source_path or "<inline>"
        right_path = right.source_path or "<inline>"
        return cls(
            f"{message} (field '{field}' in {left_path} and {right_path})",
            field=field,
            left=left_path,
            right=right_path,
        )


class SchemaParseError(SchemaMergeError):
    """Raised when a document node cannot be turned into a schema."""


class UnsupportedReference(SchemaMergeError):
    """Raised for a reference string that cannot be split into document and fragment."""

    def __init__(self, ref: str):
        super().__init__(f"unsupported reference: {ref}")
        self.ref = ref


class MissingSchemaValue(SchemaMergeError):
    """Raised when a schema source resolves to no value."""

    def __init__(self, ref: str, reason: str = ""):
        message = f"no schema value for reference '{ref}'" if ref else "inline schema source has no value"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.ref = ref


class IncompatibleTypes(SchemaMergeError):
    """Both schemas declare a type and the types differ."""


class IncompatibleFormats(SchemaMergeError):
    """The schemas declare different formats."""


class UndefinedDefaultMerge(SchemaMergeError):
    """Both schemas declare a default value."""


class ConflictingFlag(SchemaMergeError):
    """The schemas disagree on uniqueItems, nullable, readOnly or writeOnly."""


class IncompatibleBoundDialect(SchemaMergeError):
    """One schema uses the boolean exclusive bound, the other the numeric one."""


class ConflictingBound(SchemaMergeError):
    """The schemas declare different exclusive bounds."""


class UnsupportedAdditionalPropertiesMerge(SchemaMergeError):
    """Both schemas constrain additionalProperties with a schema."""


class BuildError(SchemaMergeError):
    """Raised when an entry of a nested allOf cannot be dereferenced."""


class TransitiveFlattenError(SchemaMergeError):
    """Wraps a failure while flattening the nested allOf of one merge input."""

    def __init__(self, side: int, cause: Exception):
        super().__init__(f"error transitive merging AllOf on schema {side}: {cause}")
        self.side = side


class CompositionDepthExceeded(SchemaMergeError):
    """Nested allOf composition is deeper than the configured limit (usually a cycle)."""

    def __init__(self, max_depth: int, source_path: str = ""):
        super().__init__(f"allOf nesting deeper than {max_depth} levels at {source_path or '<inline>'}, is the composition cyclic?")
        self.max_depth = max_depth


class AllOfMergeError(SchemaMergeError):
    """Raised by the orchestrator when folding the allOf list fails."""

    def __init__(self, cause: SchemaMergeError):
        super().__init__(
            f"error merging schemas for AllOf: {cause}",
            field=cause.field,
            left=cause.left,
            right=cause.right,
        )


class LegacyMergeUnavailable(SchemaMergeError):
    """The legacy merge algorithm was requested but none is configured."""
