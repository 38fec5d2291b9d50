"""
Reference resolver for $ref resolution.

Resolves schema sources to the SchemaValue they point at, loading
external documents from disk on demand.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from ..errors import MissingSchemaValue, UnsupportedReference
from ..schema_ast import SchemaParser, SchemaSource, SchemaValue

logger = logging.getLogger(__name__)


class ReferenceResolver:
    """Resolves schema sources against a root document and external documents.

    Parsed values are cached per reference and shared between every source
    pointing at the same location, so callers must treat them as read-only.
    """

    def __init__(self, document: dict[str, Any], schema_base_path: str = "", parser: SchemaParser | None = None):
        """
        Initialize the resolver.

        Args:
            document: The root document local references point into
            schema_base_path: Base path for resolving external documents
            parser: Parser used to build values (a default one if omitted)
        """
        self.document = document
        self.schema_base_path = Path(schema_base_path) if schema_base_path else Path.cwd()
        self.parser = parser or SchemaParser()
        self._schema_cache: dict[str, SchemaValue] = {}
        self._external_document_cache: dict[str, dict[str, Any]] = {}

    def resolve(self, source: SchemaSource) -> SchemaValue:
        """
        Dereference a schema source.

        Args:
            source: An inline schema or a $ref
                (local references are qualified with the document they were read from)

        Returns:
            The SchemaValue the source stands for

        Raises:
            MissingSchemaValue: If the source resolves to nothing
            UnsupportedReference: If the reference string is malformed
        """
        if not source.is_reference:
            if source.schema is None:
                raise MissingSchemaValue("")
            return source.schema
        return self.resolve_ref(source.qualified_ref)

    def resolve_ref(self, ref: str) -> SchemaValue:
        """Resolve a reference string, following $ref aliases."""
        cached = self._schema_cache.get(ref)
        if cached is not None:
            return cached

        seen: set[str] = set()
        current = ref
        while True:
            if current in seen:
                raise MissingSchemaValue(ref, f"circular $ref chain through '{current}'")
            seen.add(current)

            document_path, fragment = split_reference(current)
            document = self._load_document(document_path, ref)
            node = self._walk_pointer(document, fragment, ref)

            # A bare alias to another schema: keep following it
            if isinstance(node, dict) and "$ref" in node:
                target = node["$ref"]
                current = document_path + target if target.startswith("#") else target
                continue
            break

        schema = self.parser.parse(node, current, document_path)
        self._schema_cache[ref] = schema
        return schema

    def _load_document(self, document_path: str, ref: str) -> dict[str, Any]:
        """Load the document a reference points into (the root one for local refs)."""
        if not document_path:
            return self.document

        path = Path(document_path)
        if not path.is_absolute():
            path = self.schema_base_path / path

        cache_key = str(path)
        if cache_key not in self._external_document_cache:
            if not path.exists():
                raise MissingSchemaValue(ref, f"document {path} not found")
            logger.info("Loading external document %s", path)
            with open(path, encoding="utf-8") as f:
                self._external_document_cache[cache_key] = json.load(f)
        return self._external_document_cache[cache_key]

    def _walk_pointer(self, document: Any, fragment: str, ref: str) -> Any:
        """Follow a JSON pointer fragment such as /components/schemas/Pet."""
        if fragment in ("", "/"):
            return document
        if not fragment.startswith("/"):
            raise MissingSchemaValue(ref, f"fragment '{fragment}' is not a JSON pointer")

        node = document
        for token in fragment[1:].split("/"):
            token = token.replace("~1", "/").replace("~0", "~")
            if isinstance(node, dict) and token in node:
                node = node[token]
            elif isinstance(node, list) and token.isdigit() and int(token) < len(node):
                node = node[int(token)]
            else:
                raise MissingSchemaValue(ref, f"'{token}' not found")

        if node is None:
            raise MissingSchemaValue(ref)
        return node


def split_reference(ref: str) -> tuple[str, str]:
    """
    Split a reference into its document path and fragment.

    "pets.json#/components/schemas/Pet" -> ("pets.json", "/components/schemas/Pet")
    "#/components/schemas/Pet" -> ("", "/components/schemas/Pet")
    "pets.json" -> ("pets.json", "")

    Raises:
        UnsupportedReference: If the reference holds more than one '#'
    """
    parts = ref.split("#")
    if len(parts) > 2:
        raise UnsupportedReference(ref)
    if len(parts) == 1:
        return parts[0], ""
    return parts[0], parts[1]
