"""
Serializer turning SchemaValue nodes back into OpenAPI dictionaries.
"""

from __future__ import annotations

from typing import Any

from .nodes import BooleanBound, ExclusiveBound, NumericBound, SchemaSource, SchemaValue


class SchemaSerializer:
    """Converts the schema AST into JSON-compatible dictionaries.

    Keys are emitted in a fixed order and unset fields are omitted, so
    serializing a parsed schema gives back the keywords it was parsed from.
    """

    def to_dict(self, schema: SchemaValue) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if schema.type is not None:
            out["type"] = schema.type
        if schema.format is not None:
            out["format"] = schema.format
        if schema.enum:
            out["enum"] = list(schema.enum)
        if schema.has_default:
            out["default"] = schema.default
        if schema.exclusive_minimum is not None:
            out["exclusiveMinimum"] = self._bound_value(schema.exclusive_minimum)
        if schema.exclusive_maximum is not None:
            out["exclusiveMaximum"] = self._bound_value(schema.exclusive_maximum)
        if schema.unique_items:
            out["uniqueItems"] = True
        if schema.nullable:
            out["nullable"] = True
        if schema.read_only:
            out["readOnly"] = True
        if schema.write_only:
            out["writeOnly"] = True
        if schema.required:
            out["required"] = list(schema.required)
        if schema.properties:
            out["properties"] = {name: self.source_to_dict(source) for name, source in schema.properties.items()}
        if isinstance(schema.additional_properties, bool):
            out["additionalProperties"] = schema.additional_properties
        elif schema.additional_properties is not None:
            out["additionalProperties"] = self.source_to_dict(schema.additional_properties)
        if schema.all_of:
            out["allOf"] = [self.source_to_dict(s) for s in schema.all_of]
        if schema.one_of:
            out["oneOf"] = [self.source_to_dict(s) for s in schema.one_of]
        if schema.extensions:
            out.update(schema.extensions)
        return out

    def source_to_dict(self, source: SchemaSource) -> dict[str, Any]:
        """Serialize a source, keeping references as $ref."""
        if source.is_reference:
            return {"$ref": source.ref}
        if source.schema is None:
            return {}
        return self.to_dict(source.schema)

    def _bound_value(self, bound: ExclusiveBound) -> bool | float:
        if isinstance(bound, (BooleanBound, NumericBound)):
            return bound.value
        raise TypeError(f"Unsupported exclusive bound: {bound!r}")
