"""
Merger module.

Contains reference propagation, the pairwise schema merger and the
orchestrator folding it over an allOf list.
"""

from __future__ import annotations

from .orchestrator import AllOfMerger, LegacyMerger, merge_all_of
from .pairwise import SchemaMerger
from .propagator import value_with_propagated_ref

__all__ = [
    "AllOfMerger",
    "LegacyMerger",
    "SchemaMerger",
    "merge_all_of",
    "value_with_propagated_ref",
]
