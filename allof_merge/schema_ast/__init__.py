"""
Schema AST module.

Contains the schema node definitions, the parser building them from
document nodes and the serializer turning them back into dictionaries.
"""

from __future__ import annotations

from .nodes import BooleanBound, ExclusiveBound, NumericBound, SchemaSource, SchemaValue
from .parser import SchemaParser
from .serializer import SchemaSerializer

__all__ = [
    "SchemaValue",
    "SchemaSource",
    "BooleanBound",
    "NumericBound",
    "ExclusiveBound",
    "SchemaParser",
    "SchemaSerializer",
]
