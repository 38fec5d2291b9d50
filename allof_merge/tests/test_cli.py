"""
Tests for the allof_merge command line.
"""

from __future__ import annotations

import json
from pathlib import Path

import click
from click.testing import CliRunner

from allof_merge.allof_merge import allof_merge, schema_pointer
from allof_merge.cli_utils import reconstruct_command_line

TEST_DATA = Path(__file__).parent / "test_data"
PETSTORE = str(TEST_DATA / "petstore.json")


class TestAllOfMergeCommand:
    """Tests for the allof_merge click command."""

    def test_json_output(self, tmp_path):
        output = tmp_path / "employee.json"

        result = CliRunner().invoke(allof_merge, [PETSTORE, "Employee", str(output)])

        assert result.exit_code == 0, result.output
        merged = json.loads(output.read_text())
        assert list(merged["properties"]) == ["name", "age", "employee_id"]
        assert merged["required"] == ["name", "age"]

    def test_external_document_next_to_input(self, tmp_path):
        """External references resolve next to the input document by default."""
        output = tmp_path / "pet.json"

        result = CliRunner().invoke(allof_merge, [PETSTORE, "PetWithOwner", str(output)])

        assert result.exit_code == 0, result.output
        merged = json.loads(output.read_text())
        assert merged["properties"]["tag"] == {"$ref": "pets.json#/components/schemas/Tag"}

    def test_python_output(self, tmp_path):
        output = tmp_path / "pet.py"

        result = CliRunner().invoke(allof_merge, ["--language", "python", "--name", "Pet", PETSTORE, "PetWithOwner", str(output)])

        assert result.exit_code == 0, result.output
        code = output.read_text()
        assert "class Pet:" in code
        assert code.startswith("# Generated by allof_merge petstore.json PetWithOwner")
        compile(code, str(output), "exec")

    def test_schema_without_all_of(self, tmp_path):
        output = tmp_path / "status.json"

        result = CliRunner().invoke(allof_merge, [PETSTORE, "Status", str(output)])

        assert result.exit_code == 0, result.output
        assert json.loads(output.read_text()) == {"type": "string", "enum": ["available", "sold"]}

    def test_merge_error(self, tmp_path):
        output = tmp_path / "broken.json"

        result = CliRunner().invoke(allof_merge, [PETSTORE, "Broken", str(output)])

        assert result.exit_code == 1
        assert "error merging schemas for AllOf" in result.output
        assert not output.exists()

    def test_unknown_schema(self, tmp_path):
        result = CliRunner().invoke(allof_merge, [PETSTORE, "Nope", str(tmp_path / "out.json")])

        assert result.exit_code == 1
        assert "#/components/schemas/Nope" in result.output

    def test_config_file(self, tmp_path):
        """The legacy switch from a config file reaches the orchestrator."""
        config = tmp_path / "config.json"
        config.write_text(json.dumps({"old_merge_schemas": True}))

        result = CliRunner().invoke(allof_merge, ["--config", str(config), PETSTORE, "Person", str(tmp_path / "out.json")])

        assert result.exit_code == 1
        assert "legacy" in result.output


class TestSchemaPointer:
    def test_component_name(self):
        assert schema_pointer("Pet") == "#/components/schemas/Pet"

    def test_escaped_component_name(self):
        assert schema_pointer("a/b~c") == "#/components/schemas/a~1b~0c"

    def test_full_pointer(self):
        assert schema_pointer("#/definitions/Pet") == "#/definitions/Pet"


class TestCliUtils:
    """Tests for command line reconstruction."""

    def test_reconstruct_command_line_without_context(self):
        """Without an active Click context the bare command name is returned."""
        assert reconstruct_command_line(allof_merge) == "allof_merge"

    def test_reconstruct_command_line_from_context(self):
        """Existing paths are shown by name and options left at their default are dropped."""
        ctx = click.Context(allof_merge, info_name="allof_merge")
        ctx.params = {
            "name": None,
            "config": None,
            "language": "python",
            "verbose": True,
            "path": PETSTORE,
            "schema_name": "PetWithOwner",
            "output": "out dir/pet.py",
        }

        with ctx:
            command_line = reconstruct_command_line(allof_merge)

        assert command_line == "allof_merge petstore.json PetWithOwner 'out dir/pet.py' --language python --verbose"
