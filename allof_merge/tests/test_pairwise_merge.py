"""
Tests for the pairwise schema merger.

Field rules are driven by the JSON tables in test_data; the class based
tests cover ordering, immutability, error context and transitive flattening.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from allof_merge import errors
from allof_merge.merger import SchemaMerger
from allof_merge.resolver import ReferenceResolver
from allof_merge.schema_ast import SchemaParser, SchemaSerializer, SchemaSource

TEST_DATA = Path(__file__).parent / "test_data"


def load_cases(file_name):
    """Load merge cases from a JSON file in test_data."""
    with open(TEST_DATA / file_name) as f:
        return json.load(f)


def merge_dicts(*schemas, resolver=None):
    """Parse the schemas and fold them left to right with the pairwise merger."""
    parser = SchemaParser()
    merger = SchemaMerger(resolver or ReferenceResolver({}))
    values = [parser.parse(schema, f"#/allOf/{i}") for i, schema in enumerate(schemas)]
    result = values[0]
    for value in values[1:]:
        result = merger.merge(result, value, True)
    return result


@pytest.mark.parametrize("test_case", load_cases("merge_cases.json"), ids=lambda tc: tc["name"])
def test_merge_cases(test_case):
    """Merged schema matches the expected keywords."""
    merged = merge_dicts(*test_case["schemas"])
    assert SchemaSerializer().to_dict(merged) == test_case["expected"]


@pytest.mark.parametrize("test_case", load_cases("merge_error_cases.json"), ids=lambda tc: tc["name"])
def test_merge_error_cases(test_case):
    """Conflicting schemas raise the expected error, naming the field and both sides."""
    error_class = getattr(errors, test_case["error"])
    with pytest.raises(error_class) as exc_info:
        merge_dicts(*test_case["schemas"])

    assert exc_info.value.field == test_case["field"]
    assert exc_info.value.left == "#/allOf/0"
    assert exc_info.value.right == "#/allOf/1"
    assert test_case["field"] in str(exc_info.value)


class TestPropertiesMerge:
    """Tests for the ordered union of properties."""

    def test_properties_keep_insertion_order(self):
        """Properties of the first schema come first, then new ones of the second."""
        merged = merge_dicts(
            {"properties": {"b": {"type": "string"}, "a": {"type": "string"}}},
            {"properties": {"c": {"type": "string"}, "a0": {"type": "string"}}},
        )
        assert list(merged.properties) == ["b", "a", "c", "a0"]

    def test_duplicate_property_second_wins_first_position(self):
        """A property in both schemas keeps its first position and takes the second value."""
        merged = merge_dicts(
            {"properties": {"id": {"type": "string"}, "name": {"type": "string"}}},
            {"properties": {"extra": {"type": "boolean"}, "id": {"type": "integer"}}},
        )
        assert list(merged.properties) == ["id", "name", "extra"]
        assert merged.properties["id"].schema.type == "integer"

    def test_property_references_are_kept(self):
        """Referenced properties are carried over as references, not dereferenced."""
        merged = merge_dicts(
            {"properties": {"owner": {"$ref": "#/components/schemas/Person"}}},
            {"properties": {"name": {"type": "string"}}},
        )
        assert merged.properties["owner"].ref == "#/components/schemas/Person"
        assert merged.properties["owner"].schema is None


class TestMergeInputs:
    """Tests that merging never alters its inputs."""

    def test_inputs_unchanged(self):
        """Both inputs keep their own lists and dicts after a merge."""
        parser = SchemaParser()
        s1 = parser.parse({"enum": ["a"], "required": ["x"], "properties": {"x": {"type": "string"}}, "x-one": 1})
        s2 = parser.parse({"enum": ["b"], "required": ["y"], "properties": {"y": {"type": "string"}}, "x-two": 2})

        merged = SchemaMerger(ReferenceResolver({})).merge(s1, s2, True)

        assert merged.enum == ["a", "b"]
        assert s1.enum == ["a"]
        assert s2.enum == ["b"]
        assert s1.required == ["x"]
        assert list(s1.properties) == ["x"]
        assert s1.extensions == {"x-one": 1}
        assert s2.extensions == {"x-two": 2}

    def test_extensions_absent_when_both_absent(self):
        """No extensions on either side gives no extensions."""
        merged = merge_dicts({"type": "object"}, {"type": "object"})
        assert merged.extensions is None

    def test_all_of_context_does_not_change_rules(self):
        """The allOf context flag is accepted but no rule depends on it."""
        parser = SchemaParser()
        s1 = parser.parse({"type": "object", "enum": [1], "required": ["a"]})
        s2 = parser.parse({"enum": [2], "additionalProperties": True})
        merger = SchemaMerger(ReferenceResolver({}))

        assert merger.merge(s1, s2, True) == merger.merge(s1, s2, False)

    def test_merged_source_path_names_both_sides(self):
        """The merged value remembers where both inputs came from."""
        merged = merge_dicts({"type": "object"}, {"type": "object"})
        assert merged.source_path == "#/allOf/0 & #/allOf/1"

    def test_unsupported_bound_value_raises_type_error(self):
        """Anything other than the two bound dialects is a programming error."""
        parser = SchemaParser()
        s1 = parser.parse({"exclusiveMinimum": 1})
        s2 = parser.parse({"exclusiveMinimum": 1})
        s2.exclusive_minimum = 1

        with pytest.raises(TypeError):
            SchemaMerger(ReferenceResolver({})).merge(s1, s2, True)


@pytest.fixture
def petstore_resolver():
    with open(TEST_DATA / "petstore.json") as f:
        document = json.load(f)
    return ReferenceResolver(document, str(TEST_DATA))


class TestTransitiveFlattening:
    """Tests for flattening nested allOf lists before merging."""

    def test_nested_all_of_is_flattened(self, petstore_resolver):
        """A schema with allOf [A, B] merged with C has A, B and C fields at the top level."""
        person = petstore_resolver.resolve_ref("#/components/schemas/Person")
        extra = SchemaParser().parse({"properties": {"email": {"type": "string"}}, "required": ["email"]})

        merged = SchemaMerger(petstore_resolver).merge(person, extra, True)

        assert merged.all_of == []
        assert list(merged.properties) == ["name", "age", "email"]
        assert merged.required == ["name", "age", "email"]
        assert merged.type == "object"

    def test_flattening_on_second_side(self, petstore_resolver):
        """The second input is flattened too."""
        person = petstore_resolver.resolve_ref("#/components/schemas/Person")
        first = SchemaParser().parse({"type": "object", "properties": {"id": {"type": "integer"}}})

        merged = SchemaMerger(petstore_resolver).merge(first, person, True)

        assert merged.all_of == []
        assert list(merged.properties) == ["id", "name", "age"]

    def test_flatten_single_entry_is_flattened_transitively(self, petstore_resolver):
        """A single nested entry that itself has an allOf is flattened as well."""
        alias = petstore_resolver.resolve_ref("#/components/schemas/NamedAlias")
        nested = SchemaSource(schema=SchemaParser().parse({"allOf": [{"$ref": "#/components/schemas/Person"}]}))

        merged = SchemaMerger(petstore_resolver).flatten([nested, *alias.all_of])

        assert merged.all_of == []
        assert list(merged.properties) == ["name", "age"]

    def test_external_nested_entries_stay_in_their_document(self, petstore_resolver):
        """Dog in ext.json flattens its local Base from ext.json, the root Base is a string."""
        dog = petstore_resolver.resolve_ref("ext.json#/components/schemas/Dog")

        merged = SchemaMerger(petstore_resolver).flatten(dog.all_of)

        assert merged.type == "object"
        assert list(merged.properties) == ["ext_id", "bark"]

    def test_one_of_of_the_outer_schema_is_kept(self, petstore_resolver):
        """oneOf and extensions are taken from the inputs before flattening."""
        outer = SchemaParser().parse(
            {
                "allOf": [{"$ref": "#/components/schemas/NamedEntity"}],
                "oneOf": [{"type": "object"}],
                "x-outer": True,
            }
        )
        other = SchemaParser().parse({"type": "object"})

        merged = SchemaMerger(petstore_resolver).merge(outer, other, True)

        assert len(merged.one_of) == 1
        assert merged.extensions == {"x-outer": True}

    def test_nested_conflict_is_wrapped(self, petstore_resolver):
        """A conflict inside a nested allOf surfaces as TransitiveFlattenError naming the side."""
        broken = petstore_resolver.resolve_ref("#/components/schemas/Broken")
        other = SchemaParser().parse({"type": "string"})

        with pytest.raises(errors.TransitiveFlattenError) as exc_info:
            SchemaMerger(petstore_resolver).merge(other, broken, True)

        assert exc_info.value.side == 2
        assert isinstance(exc_info.value.__cause__, errors.IncompatibleTypes)
        assert "schema 2" in str(exc_info.value)

    def test_unresolvable_nested_entry_is_build_error(self, petstore_resolver):
        """A nested allOf entry that cannot be dereferenced raises BuildError."""
        schema = SchemaParser().parse({"allOf": [{"$ref": "#/components/schemas/Missing"}]})
        other = SchemaParser().parse({})

        with pytest.raises(errors.TransitiveFlattenError) as exc_info:
            SchemaMerger(petstore_resolver).merge(schema, other, True)

        assert exc_info.value.side == 1
        assert isinstance(exc_info.value.__cause__, errors.BuildError)
        assert isinstance(exc_info.value.__cause__.__cause__, errors.MissingSchemaValue)

    def test_cyclic_composition_fails_fast(self, petstore_resolver):
        """Cyclic allOf nesting stops at the configured depth."""
        cyclic = petstore_resolver.resolve_ref("#/components/schemas/Cyclic")
        other = SchemaParser().parse({})

        with pytest.raises(errors.CompositionDepthExceeded) as exc_info:
            SchemaMerger(petstore_resolver, max_depth=5).merge(cyclic, other, True)

        assert exc_info.value.max_depth == 5

    def test_flatten_empty_list_is_invalid(self, petstore_resolver):
        """Flattening is only called with a non-empty list."""
        with pytest.raises(ValueError):
            SchemaMerger(petstore_resolver).flatten([])
