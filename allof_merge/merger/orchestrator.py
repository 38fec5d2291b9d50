"""
Orchestration of allOf merges.

Folds the pairwise merger over the ordered allOf list and hands the single
merged schema to a type generator.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

from ..config import MergeConfig
from ..errors import AllOfMergeError, LegacyMergeUnavailable, SchemaMergeError
from ..generators import GeneratedType, TypeGenerator
from ..resolver import ReferenceResolver
from ..schema_ast import SchemaSource, SchemaValue
from .pairwise import SchemaMerger
from .propagator import value_with_propagated_ref

logger = logging.getLogger(__name__)

LegacyMerger = Callable[[Sequence[SchemaSource], Sequence[str]], GeneratedType]


class AllOfMerger:
    """Merges the schemas of an allOf list into one generated type."""

    def __init__(
        self,
        resolver: ReferenceResolver,
        generator: TypeGenerator,
        config: MergeConfig | None = None,
        legacy_merger: LegacyMerger | None = None,
    ):
        """
        Initialize the orchestrator.

        Args:
            resolver: Dereferencing capability
            generator: Type generation capability receiving the merged schema
            config: Merge configuration (defaults if omitted)
            legacy_merger: Algorithm used instead when config.old_merge_schemas is set
        """
        self.resolver = resolver
        self.generator = generator
        self.config = config or MergeConfig()
        self.legacy_merger = legacy_merger
        self.schema_merger = SchemaMerger(resolver, self.config.max_all_of_depth)

    def merge_all_of(self, sources: Sequence[SchemaSource], path: Sequence[str]) -> GeneratedType:
        """
        Merge all the schemas of an allOf into one generated type.

        Args:
            sources: The allOf entries, in document order
            path: Naming context forwarded unchanged to the generator

        Returns:
            Whatever the generator builds from the merged schema

        Raises:
            AllOfMergeError: If two schemas cannot be merged
            LegacyMergeUnavailable: If the legacy algorithm is requested but not configured
        """
        if self.config.old_merge_schemas:
            if self.legacy_merger is None:
                raise LegacyMergeUnavailable("old_merge_schemas is set but no legacy merge algorithm is configured")
            logger.debug("Using legacy merge for %s", "/".join(path))
            return self.legacy_merger(sources, path)

        if not sources:
            raise ValueError("allOf must contain at least one schema")

        if len(sources) == 1:
            # Nothing to merge: keep the reference so the generator can reuse the named type
            logger.debug("Single allOf entry for %s, no merge needed", "/".join(path))
            schema = self.resolver.resolve(sources[0])
            return self.generator.generate(schema, path, ref=sources[0].qualified_ref)

        schema = self.merge_values(sources)
        return self.generator.generate(schema, path)

    def merge_values(self, sources: Sequence[SchemaSource]) -> SchemaValue:
        """
        Fold the allOf entries into a single SchemaValue.

        Raises:
            AllOfMergeError: If two schemas cannot be merged
        """
        if not sources:
            raise ValueError("allOf must contain at least one schema")

        schema = value_with_propagated_ref(sources[0], self.resolver)
        for source in sources[1:]:
            other = value_with_propagated_ref(source, self.resolver)
            try:
                schema = self.schema_merger.merge(schema, other, True)
            except SchemaMergeError as e:
                raise AllOfMergeError(e) from e
            logger.debug("Merged %s", schema.source_path)
        return schema


def merge_all_of(
    sources: Sequence[SchemaSource],
    path: Sequence[str],
    resolver: ReferenceResolver,
    generator: TypeGenerator,
    config: MergeConfig | None = None,
    legacy_merger: LegacyMerger | None = None,
) -> GeneratedType:
    """Convenience wrapper building an AllOfMerger for a single call."""
    return AllOfMerger(resolver, generator, config, legacy_merger).merge_all_of(sources, path)
