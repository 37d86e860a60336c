"""
Ontology loading: download from schema.org or read from disk.

JSON-LD documents are returned decoded, so that the raw graph members (and
their layering) reach the fact store intact. Other RDF serializations are
parsed with rdflib into a Graph.
"""

import json
from pathlib import Path

import httpx
from rdflib import Graph
from rdflib.util import guess_format

from schema_typegen.config import FETCH_TIMEOUT_SECONDS, SCHEMA_URL_TEMPLATE
from schema_typegen.utils import console

JSONLD_SUFFIXES = (".jsonld", ".json")


def schema_url(version: str, layer: str) -> str:
    return SCHEMA_URL_TEMPLATE.format(version=version, layer=layer)


async def fetch_ontology(
    version: str,
    layer: str,
    timeout: float = FETCH_TIMEOUT_SECONDS,
    transport: httpx.AsyncBaseTransport | None = None,
) -> dict:
    """Download and decode a published schema.org JSON-LD release.

    Raises
    ------
    httpx.HTTPError:
        If the request fails or the server answers with an error status.
    """
    url = schema_url(version, layer)
    console.print(f"  Fetching {url}...")
    async with httpx.AsyncClient(
        timeout=timeout, follow_redirects=True, transport=transport
    ) as client:
        response = await client.get(url)
        response.raise_for_status()
        return response.json()


def is_jsonld(path: Path) -> bool:
    return path.suffix.lower() in JSONLD_SUFFIXES


def load_document(path: Path) -> dict:
    """Read a local JSON-LD document."""
    if not path.exists():
        raise FileNotFoundError(f"Ontology file not found: {path}")
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def load_graph(path: Path, format: str | None = None) -> Graph:
    """Parse a local RDF file (N-Triples, Turtle, RDF/XML, ...) with rdflib."""
    if not path.exists():
        raise FileNotFoundError(f"Ontology file not found: {path}")
    graph = Graph()
    graph.parse(str(path), format=format or guess_format(str(path)) or "nt")
    return graph
