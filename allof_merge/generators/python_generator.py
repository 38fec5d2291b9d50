"""
Python type generator.

Renders a dataclass (or a type alias) for the merged schema.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import jinja2

from ..schema_ast import SchemaSource, SchemaValue
from ..utils import python_identifier, type_name_from_ref
from .base import GeneratedType, TypeGenerator


@dataclass
class FieldContext:
    """Template context for one dataclass field."""

    name: str
    declaration: str
    has_default: bool


class PythonDataclassGenerator(TypeGenerator):
    """Generates a Python dataclass for the merged schema."""

    TYPE_MAP = {
        "integer": "int",
        "string": "str",
        "boolean": "bool",
        "number": "float",
        "array": "list[Any]",
        "object": "dict[str, Any]",
    }

    def __init__(self, add_generation_comment: bool = True, command_line: str = "allof_merge"):
        """
        Initialize the generator.

        Args:
            add_generation_comment: Whether to put a generation comment at the top
            command_line: Command line quoted in the generation comment
        """
        self.add_generation_comment = add_generation_comment
        self.command_line = command_line
        template_dir = Path(__file__).parent.parent / "templates" / "python"
        self.jinja_env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(template_dir)),
            lstrip_blocks=True,
            trim_blocks=True,
        )
        self.module_template = self.jinja_env.get_template("module.py.jinja2")
        self.imports: dict[str, set[str]] = {}

    def generate(self, schema: SchemaValue, path: Sequence[str], ref: str = "") -> GeneratedType:
        name = self.type_name(path)
        self.imports = {}

        fields = None
        alias = None
        if ref:
            # Referenced schema: alias the type generated for the reference
            alias = type_name_from_ref(ref)
        elif schema.type == "object" or schema.properties:
            fields = self._build_fields(schema)
            self._add_import("dataclasses", "dataclass")
        else:
            alias = self._translate_value(schema)

        code = self.module_template.render(
            header=self._header(),
            imports=[f"from {module} import {', '.join(sorted(names))}" for module, names in sorted(self.imports.items())],
            name=name,
            fields=fields,
            alias=alias,
        )
        return GeneratedType(name=name, schema=schema, code=code, ref=ref)

    def _header(self) -> str | None:
        if not self.add_generation_comment:
            return None
        return f"Generated by {self.command_line}, do not edit by hand"

    def _build_fields(self, schema: SchemaValue) -> list[FieldContext]:
        """Build field contexts: fields without defaults first, as dataclasses require."""
        fields = []
        for prop_name, source in schema.properties.items():
            field_name = python_identifier(prop_name)
            type_str = self._translate_source(source)
            is_required = prop_name in schema.required
            default = self._format_default(source.schema) if source.schema is not None and source.schema.has_default else None

            if default is None and not is_required:
                if not type_str.endswith("| None"):
                    type_str = f"{type_str} | None"
                default = "None"

            declaration = f"{field_name}: {type_str}" if default is None else f"{field_name}: {type_str} = {default}"
            fields.append(FieldContext(name=field_name, declaration=declaration, has_default=default is not None))

        return [f for f in fields if not f.has_default] + [f for f in fields if f.has_default]

    def _translate_source(self, source: SchemaSource) -> str:
        if source.is_reference:
            return type_name_from_ref(source.ref)
        if source.schema is None:
            self._add_import("typing", "Any")
            return "Any"
        return self._translate_value(source.schema)

    def _translate_value(self, schema: SchemaValue) -> str:
        if schema.enum and all(isinstance(v, str) for v in schema.enum):
            self._add_import("typing", "Literal")
            type_str = f"Literal[{', '.join(repr(v) for v in dict.fromkeys(schema.enum))}]"
        elif schema.type is None:
            type_str = "Any"
        else:
            type_str = self.TYPE_MAP[schema.type]

        if "Any" in type_str:
            self._add_import("typing", "Any")
        if schema.nullable:
            type_str = f"{type_str} | None"
        return type_str

    def _format_default(self, schema: SchemaValue) -> str:
        value: Any = schema.default
        if isinstance(value, (list, dict)):
            self._add_import("dataclasses", "field")
            return f"field(default_factory=lambda: {value!r})"
        return repr(value)

    def _add_import(self, module: str, name: str) -> None:
        self.imports.setdefault(module, set()).add(name)
