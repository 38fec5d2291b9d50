import json
import logging
from pathlib import Path

import click

from .cli_utils import reconstruct_command_line
from .config import MergeConfig
from .errors import SchemaMergeError
from .generators import JsonSchemaGenerator, PythonDataclassGenerator
from .merger import AllOfMerger
from .resolver import ReferenceResolver
from .schema_ast import SchemaSource


def schema_pointer(schema_name: str) -> str:
    """Turn a component name (or a full "#/..." pointer) into a local reference."""
    if schema_name.startswith("#"):
        return schema_name
    escaped = schema_name.replace("~", "~0").replace("/", "~1")
    return f"#/components/schemas/{escaped}"


@click.command()
@click.option("--name", "-n", default=None, type=str, help="Name of the generated type (defaults to SCHEMA_NAME)")
@click.option("--config", "-c", default=None, type=click.Path(exists=True, resolve_path=True))
@click.option("--language", "-l", default="json", type=click.Choice(["json", "python"]))
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log every merge step")
@click.argument("path", type=click.Path(exists=True, resolve_path=True))
@click.argument("schema_name", type=str)
@click.argument("output", type=click.Path(resolve_path=True))
def allof_merge(name, config, language, verbose, path, schema_name, output):
    """Merge the allOf of SCHEMA_NAME in the document at PATH and write the type to OUTPUT."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    with open(path) as f:
        document = json.load(f)

    if config is not None:
        with open(config) as f:
            config = MergeConfig.from_dict(json.load(f))
    else:
        config = MergeConfig()

    # External documents are looked up next to the input document by default
    if not config.schema_base_path:
        config.schema_base_path = str(Path(path).parent)

    if language == "python":
        generator = PythonDataclassGenerator(config.add_generation_comment, reconstruct_command_line(allof_merge))
    else:
        generator = JsonSchemaGenerator()

    ref = schema_pointer(schema_name)
    type_path = [segment for segment in ref.lstrip("#").split("/") if segment]
    if name is not None:
        type_path = [name]

    resolver = ReferenceResolver(document, config.schema_base_path)
    merger = AllOfMerger(resolver, generator, config)
    try:
        schema = resolver.resolve_ref(ref)
        sources = schema.all_of or [SchemaSource(schema=schema)]
        generated = merger.merge_all_of(sources, type_path)
    except SchemaMergeError as e:
        raise click.ClickException(str(e)) from e

    with open(output, "w") as f:
        f.write(generated.code)
    logging.getLogger(__name__).info("Wrote %s to %s", generated.name, output)
