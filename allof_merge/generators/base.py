"""
Base classes for type generators.

A type generator receives the final merged schema and builds the
declaration of a type for it.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass

from ..schema_ast import SchemaValue
from ..utils import type_name_from_path


@dataclass
class GeneratedType:
    """A generated type declaration.

    Attributes:
        name: Type name derived from the naming path
        schema: The schema the type was generated from
        code: Generated source text
        ref: Reference the schema was reached through, empty for merged schemas
    """

    name: str
    schema: SchemaValue
    code: str
    ref: str = ""


class TypeGenerator(ABC):
    """Abstract base class for type generators."""

    @abstractmethod
    def generate(self, schema: SchemaValue, path: Sequence[str], ref: str = "") -> GeneratedType:
        """
        Generate a type for a schema.

        Args:
            schema: The (merged) schema
            path: Naming context, e.g. ["components", "schemas", "Pet"]
            ref: Reference the schema was reached through, if any

        Returns:
            The generated type
        """

    def type_name(self, path: Sequence[str]) -> str:
        """Derive a type name from the naming path."""
        return type_name_from_path(path)
