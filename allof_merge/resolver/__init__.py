"""
Resolver module.

Contains the reference resolver dereferencing schema sources.
"""

from __future__ import annotations

from .reference_resolver import ReferenceResolver, split_reference

__all__ = [
    "ReferenceResolver",
    "split_reference",
]
