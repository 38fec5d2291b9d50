"""
OpenAPI schema parser that builds an AST.

Parses JSON-decoded schema objects into ``SchemaValue`` nodes without
resolving any ``$ref``: references become ``SchemaSource`` handles that the
resolver dereferences on demand.
"""

from __future__ import annotations

from typing import Any

from ..errors import SchemaParseError
from .nodes import BooleanBound, ExclusiveBound, NumericBound, SchemaSource, SchemaValue


class SchemaParser:
    """Parses OpenAPI schema objects into an AST."""

    # Primitive type names
    PRIMITIVE_TYPES = {"object", "array", "string", "number", "integer", "boolean"}

    def parse(self, schema: dict[str, Any], path: str = "#", document: str = "") -> SchemaValue:
        """
        Parse a schema object into a SchemaValue.

        Args:
            schema: The schema dictionary
            path: Location of the schema in its document (for error messages)
            document: Path of the document the schema comes from, recorded on every
                nested source so local references resolve against it

        Returns:
            The parsed SchemaValue
        """
        if not isinstance(schema, dict):
            raise SchemaParseError(f"expected a schema object at {path}, got {type(schema).__name__}")

        node = SchemaValue(source_path=path)
        node.type, implied_nullable = self._parse_type(schema.get("type"), path)
        node.format = schema.get("format")
        node.enum = list(schema.get("enum", []))

        if "default" in schema:
            node.default = schema["default"]
            node.has_default = True

        node.exclusive_minimum = self._parse_bound(schema, "exclusiveMinimum", path)
        node.exclusive_maximum = self._parse_bound(schema, "exclusiveMaximum", path)

        node.unique_items = bool(schema.get("uniqueItems", False))
        node.nullable = bool(schema.get("nullable", False)) or implied_nullable
        node.read_only = bool(schema.get("readOnly", False))
        node.write_only = bool(schema.get("writeOnly", False))

        node.required = list(schema.get("required", []))
        for prop_name, prop_schema in schema.get("properties", {}).items():
            node.properties[prop_name] = self.parse_source(
                prop_schema, f"{path}/properties/{prop_name}", document
            )

        if "additionalProperties" in schema:
            additional = schema["additionalProperties"]
            if isinstance(additional, bool):
                node.additional_properties = additional
            else:
                node.additional_properties = self.parse_source(additional, f"{path}/additionalProperties", document)

        node.extensions = self._extract_extensions(schema)

        node.all_of = [
            self.parse_source(s, f"{path}/allOf/{i}", document) for i, s in enumerate(schema.get("allOf", []))
        ]
        node.one_of = [
            self.parse_source(s, f"{path}/oneOf/{i}", document) for i, s in enumerate(schema.get("oneOf", []))
        ]

        return node

    def parse_source(self, schema: dict[str, Any], path: str, document: str = "") -> SchemaSource:
        """Parse a schema position that may hold either a $ref or an inline schema."""
        if isinstance(schema, dict) and "$ref" in schema:
            return SchemaSource(ref=schema["$ref"], document=document)
        return SchemaSource(schema=self.parse(schema, path, document), document=document)

    def _parse_type(self, type_value: Any, path: str) -> tuple[str | None, bool]:
        """
        Parse the type keyword.

        Returns:
            The single type tag (or None) and whether a "null" member of a
            type array implied nullable.
        """
        if type_value is None:
            return None, False

        implied_nullable = False
        if isinstance(type_value, list):
            # OpenAPI 3.1 spells nullable as a "null" member of the type array
            types = [t for t in type_value if t != "null"]
            implied_nullable = len(types) != len(type_value)
            if len(types) > 1:
                raise SchemaParseError(f"multiple types {type_value} at {path} are not supported")
            if not types:
                return None, implied_nullable
            type_value = types[0]

        if type_value not in self.PRIMITIVE_TYPES:
            raise SchemaParseError(f"unknown type '{type_value}' at {path}")
        return type_value, implied_nullable

    def _parse_bound(self, schema: dict[str, Any], key: str, path: str) -> ExclusiveBound | None:
        """Parse exclusiveMinimum/exclusiveMaximum keeping its dialect."""
        if key not in schema:
            return None
        value = schema[key]
        # bool is checked first: it is a subclass of int
        if isinstance(value, bool):
            return BooleanBound(value)
        if isinstance(value, (int, float)):
            return NumericBound(value)
        raise SchemaParseError(f"{key} at {path} must be a boolean or a number, got {value!r}")

    def _extract_extensions(self, schema: dict[str, Any]) -> dict[str, Any] | None:
        """Extract x-* extensions, or None when there are none."""
        extensions = {key: value for key, value in schema.items() if key.startswith("x-")}
        return extensions or None
