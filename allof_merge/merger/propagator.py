"""
Reference propagation for schemas copied out of an external document.

A schema loaded from ``pets.json#/components/schemas/Pet`` may point at its
siblings with local references such as ``#/components/schemas/Tag``. Once the
schema is merged into another document those references would resolve
against the wrong document, so they are qualified with the document path
(``pets.json#/components/schemas/Tag``).
"""

from __future__ import annotations

from dataclasses import replace

from ..resolver import ReferenceResolver, split_reference
from ..schema_ast import SchemaSource, SchemaValue


def value_with_propagated_ref(source: SchemaSource, resolver: ReferenceResolver) -> SchemaValue:
    """
    Dereference a source, qualifying local property references if it is external.

    The resolver hands out shared values, so the rewrite happens on a copy
    with its own properties dict and its own SchemaSource entries.

    Args:
        source: The schema source to dereference
        resolver: Dereferencing capability

    Returns:
        The dereferenced value, or a rewritten copy of it

    Raises:
        MissingSchemaValue: Raised by the resolver if the source resolves to nothing
        UnsupportedReference: If the reference holds more than one '#'
    """
    schema = resolver.resolve(source)

    if not source.is_reference or source.is_local_reference:
        return schema

    document_path, _ = split_reference(source.ref)

    properties: dict[str, SchemaSource] = {}
    for name, prop in schema.properties.items():
        if prop.is_local_reference:
            prop = replace(prop, ref=document_path + prop.ref)
        properties[name] = prop

    return replace(schema, properties=properties)
