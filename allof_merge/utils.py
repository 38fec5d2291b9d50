"""
Utility functions for naming generated types.
"""

import keyword
import re
from collections.abc import Sequence

# Regex pattern to split text into words, handling camelCase boundaries
_WORD_PATTERN = re.compile(r"[a-z]+|[A-Z][a-z]*|[0-9]+")

# Path segments that only locate a schema and add nothing to its name
_CONTAINER_SEGMENTS = {"components", "schemas", "definitions", "$defs", "properties"}


def snake_to_pascal_case(text: str) -> str:
    """Convert snake_case, camelCase, kebab-case or space-separated text to PascalCase.

    Examples:
        "first_name" -> "FirstName"
        "actionTemplate" -> "ActionTemplate"
        "pet-store" -> "PetStore"
    """
    if not text:
        return ""
    words = _WORD_PATTERN.findall(text.replace("_", " ").replace("-", " "))
    return "".join(word.capitalize() for word in words if word)


def type_name_from_path(path: Sequence[str]) -> str:
    """Build a type name from a naming path.

    Examples:
        ["components", "schemas", "Pet"] -> "Pet"
        ["Pet", "properties", "owner"] -> "PetOwner"
    """
    segments = [segment for segment in path if segment not in _CONTAINER_SEGMENTS]
    name = "".join(snake_to_pascal_case(segment) for segment in segments)
    return name or "Schema"


def type_name_from_ref(ref: str) -> str:
    """Build a type name from the last segment of a reference.

    Examples:
        "#/components/schemas/pet_tag" -> "PetTag"
        "pets.json#/components/schemas/Tag" -> "Tag"
        "common/error.json" -> "Error"
    """
    last = ref.rstrip("/").split("/")[-1]
    if last.endswith(".json"):
        last = last[: -len(".json")]
    return snake_to_pascal_case(last) or "Schema"


def python_identifier(name: str) -> str:
    """Turn a property name into a valid Python attribute name."""
    identifier = re.sub(r"\W", "_", name)
    if not identifier or identifier[0].isdigit():
        identifier = f"_{identifier}"
    if keyword.iskeyword(identifier):
        identifier = f"{identifier}_"
    return identifier
