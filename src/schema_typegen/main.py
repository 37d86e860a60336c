"""
schema-typegen CLI: generates TypeScript declarations from the schema.org ontology.

Usage:
    # Download a schema.org release and print declarations to stdout
    uv run schema-typegen generate --schema 3.4 --layer schema

    # Generate from a local JSON-LD or N-Triples file into a .ts file
    uv run schema-typegen generate --file schema.jsonld --output schema.ts
"""

import asyncio
import sys
from pathlib import Path

import click
import httpx
from dotenv import load_dotenv
from rich.markup import escape

from schema_typegen import __version__
from schema_typegen.config import DEFAULT_LANG, DEFAULT_LAYER, DEFAULT_SCHEMA_VERSION
from schema_typegen.errors import OntologyError
from schema_typegen.models import Settings

load_dotenv()


@click.group()
@click.version_option(version=__version__)
def cli():
    """schema-typegen: schema.org ontology to TypeScript types."""
    pass


@cli.command()
@click.option(
    "--schema", "-s",
    default=DEFAULT_SCHEMA_VERSION,
    show_default=True,
    envvar="SCHEMA_TYPEGEN_SCHEMA",
    help="The version of the schema to load.",
)
@click.option(
    "--layer", "-l",
    default=DEFAULT_LAYER,
    show_default=True,
    envvar="SCHEMA_TYPEGEN_LAYER",
    help="Which layer of the schema to load? E.g. schema or all-layers.",
)
@click.option(
    "--file", "-f", "file_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Read the ontology from a local file instead of downloading it.",
)
@click.option(
    "--lang",
    default=DEFAULT_LANG,
    show_default=True,
    envvar="SCHEMA_TYPEGEN_LANG",
    help="Language used when picking among language-tagged comments.",
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    envvar="SCHEMA_TYPEGEN_VERBOSE",
    help="Log missing comments, merges and unprocessed values.",
)
@click.option(
    "--deprecated/--no-deprecated",
    default=True,
    show_default=True,
    help="Include deprecated properties.",
)
@click.option(
    "--output", "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Output file. Defaults to stdout.",
)
def generate(
    schema: str,
    layer: str,
    file_path: Path | None,
    lang: str,
    verbose: bool,
    deprecated: bool,
    output: Path | None,
):
    """Generate type declarations for a schema.org release."""
    from schema_typegen.pipeline import generate_from_document, generate_from_graph, render
    from schema_typegen.reader import fetch_ontology, is_jsonld, load_document, load_graph
    from schema_typegen.utils import console

    settings = Settings(lang=lang, verbose=verbose, include_deprecated=deprecated)

    try:
        if file_path is None:
            document = asyncio.run(fetch_ontology(schema, layer))
            result = generate_from_document(document, settings)
        elif is_jsonld(file_path):
            result = generate_from_document(load_document(file_path), settings)
        else:
            result = generate_from_graph(load_graph(file_path), settings)
    except (OntologyError, httpx.HTTPError) as exc:
        console.print(f"\n[bold red]Failed:[/bold red] {escape(str(exc))}")
        sys.exit(1)

    source = render(result)
    if output is None:
        sys.stdout.write(source)
    else:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(source, encoding="utf-8")
        console.print(f"  Declarations written to: {output}")

    console.print(f"  Stats:   {result.stats}")


if __name__ == "__main__":
    cli()
