"""
JSON type generator.

Emits the merged schema as an OpenAPI schema object.
"""

from __future__ import annotations

import json
from collections.abc import Sequence

from ..schema_ast import SchemaSerializer, SchemaValue
from .base import GeneratedType, TypeGenerator


class JsonSchemaGenerator(TypeGenerator):
    """Generates a JSON schema document for the merged schema."""

    def __init__(self, indent: int = 2):
        self.indent = indent
        self.serializer = SchemaSerializer()

    def generate(self, schema: SchemaValue, path: Sequence[str], ref: str = "") -> GeneratedType:
        # A single referenced schema stays a reference
        body = {"$ref": ref} if ref else self.serializer.to_dict(schema)
        return GeneratedType(
            name=self.type_name(path),
            schema=schema,
            code=json.dumps(body, indent=self.indent) + "\n",
            ref=ref,
        )
