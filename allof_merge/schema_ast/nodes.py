"""
AST node definitions for OpenAPI schemas.

These nodes represent a parsed schema object. A ``SchemaSource`` is the
reference-or-inline handle found wherever a schema may appear, and a
``SchemaValue`` is the structural node a source dereferences to.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class BooleanBound:
    """OpenAPI 3.0 exclusive bound: a flag modifying ``minimum``/``maximum``."""

    value: bool = False


@dataclass(frozen=True)
class NumericBound:
    """OpenAPI 3.1 exclusive bound: the bound itself."""

    value: float = 0


ExclusiveBound = BooleanBound | NumericBound


@dataclass
class SchemaSource:
    """A reference to a schema, or an inline schema value.

    Exactly one of ``ref`` and ``schema`` is expected to be set.
    """

    ref: str = ""  # e.g. "#/components/schemas/Pet" or "pets.json#/components/schemas/Pet"
    schema: SchemaValue | None = None

    # Path of the document the source was parsed from, empty for the root document.
    # Local references resolve against it.
    document: str = ""

    @property
    def is_reference(self) -> bool:
        return bool(self.ref)

    @property
    def is_local_reference(self) -> bool:
        """True for a same-document reference (fragment only)."""
        return self.ref.startswith("#")

    @property
    def qualified_ref(self) -> str:
        """The reference with the owning document prepended to a local fragment."""
        if self.document and self.is_local_reference:
            return self.document + self.ref
        return self.ref


@dataclass
class SchemaValue:
    """A dereferenced schema node."""

    # Original location in the document (for error messages)
    source_path: str = ""

    type: str | None = None
    format: str | None = None
    enum: list[Any] = field(default_factory=list)

    # has_default distinguishes an explicit null default from no default
    default: Any = None
    has_default: bool = False

    exclusive_minimum: ExclusiveBound | None = None
    exclusive_maximum: ExclusiveBound | None = None

    unique_items: bool = False
    nullable: bool = False
    read_only: bool = False
    write_only: bool = False

    required: list[str] = field(default_factory=list)
    properties: dict[str, SchemaSource] = field(default_factory=dict)

    # None when absent, a bool flag, or a schema constraining extra properties
    additional_properties: bool | SchemaSource | None = None

    # x-* vendor extensions, None when the schema has none
    extensions: dict[str, Any] | None = None

    all_of: list[SchemaSource] = field(default_factory=list)
    one_of: list[SchemaSource] = field(default_factory=list)
