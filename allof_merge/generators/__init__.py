"""
Generators module.

Contains the type generators receiving merged schemas.
"""

from __future__ import annotations

from .base import GeneratedType, TypeGenerator
from .json_generator import JsonSchemaGenerator
from .python_generator import PythonDataclassGenerator

__all__ = [
    "GeneratedType",
    "TypeGenerator",
    "JsonSchemaGenerator",
    "PythonDataclassGenerator",
]
