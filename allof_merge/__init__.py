"""allOf merge engine

Flattens the schemas of an OpenAPI allOf composition into a single
equivalent schema and hands it to a type generator. Conflicting or
undefined combinations raise instead of producing a wrong merged type.
"""

__version__ = "1.0.0"

from .config import MergeConfig
from .errors import (
    AllOfMergeError,
    BuildError,
    CompositionDepthExceeded,
    ConflictingBound,
    ConflictingFlag,
    IncompatibleBoundDialect,
    IncompatibleFormats,
    IncompatibleTypes,
    LegacyMergeUnavailable,
    MissingSchemaValue,
    SchemaMergeError,
    SchemaParseError,
    TransitiveFlattenError,
    UndefinedDefaultMerge,
    UnsupportedAdditionalPropertiesMerge,
    UnsupportedReference,
)
from .generators import GeneratedType, JsonSchemaGenerator, PythonDataclassGenerator, TypeGenerator
from .merger import AllOfMerger, SchemaMerger, merge_all_of, value_with_propagated_ref
from .resolver import ReferenceResolver
from .schema_ast import BooleanBound, NumericBound, SchemaParser, SchemaSerializer, SchemaSource, SchemaValue

__all__ = [
    "AllOfMerger",
    "merge_all_of",
    "SchemaMerger",
    "value_with_propagated_ref",
    "MergeConfig",
    "ReferenceResolver",
    "SchemaParser",
    "SchemaSerializer",
    "SchemaSource",
    "SchemaValue",
    "BooleanBound",
    "NumericBound",
    "GeneratedType",
    "TypeGenerator",
    "JsonSchemaGenerator",
    "PythonDataclassGenerator",
    "SchemaMergeError",
    "SchemaParseError",
    "UnsupportedReference",
    "MissingSchemaValue",
    "IncompatibleTypes",
    "IncompatibleFormats",
    "UndefinedDefaultMerge",
    "ConflictingFlag",
    "IncompatibleBoundDialect",
    "ConflictingBound",
    "UnsupportedAdditionalPropertiesMerge",
    "BuildError",
    "TransitiveFlattenError",
    "CompositionDepthExceeded",
    "AllOfMergeError",
    "LegacyMergeUnavailable",
]
