"""
Generation pipeline.

Stages run strictly in order, each to completion:

  1. Group facts into Topics (merging duplicate declarations)
  2. Seed builtins, forward-declare classes, resolve inheritance
  3. Attach properties to their owning classes
  4. Attach enumeration members to their owning classes
  5. Freeze the registry
  6. Synthesize declarations in emission order
"""

from __future__ import annotations

from rdflib import Graph

from schema_typegen.enums import resolve_enums
from schema_typegen.graph import BuiltinNode, ClassRegistry, build_class_graph
from schema_typegen.jsonld import iter_declarations
from schema_typegen.models import GenerationResult, Settings
from schema_typegen.primitives import seed_builtins
from schema_typegen.printer import render_module
from schema_typegen.properties import resolve_properties
from schema_typegen.synth import synthesize
from schema_typegen.terms import facts_from_graph
from schema_typegen.topics import Topic, group_declarations, group_facts


def build_registry(topics: list[Topic], settings: Settings) -> ClassRegistry:
    """Run the resolution stages and return the frozen class registry."""
    registry = seed_builtins(ClassRegistry(), settings.namespace)
    build_class_graph(topics, registry, settings)
    resolve_properties(topics, registry, settings)
    resolve_enums(topics, registry, settings)
    registry.freeze()
    return registry


def generate(topics: list[Topic], settings: Settings) -> GenerationResult:
    """Resolve ``topics`` and synthesize declarations for every class."""
    registry = build_registry(topics, settings)
    nodes = list(registry)
    classes = [n for n in nodes if not isinstance(n, BuiltinNode)]

    properties = {id(p) for n in classes for p in n.properties}
    stats = {
        "classes": len(classes),
        "builtins": len(nodes) - len(classes),
        "properties": len(properties),
        "enum_members": sum(len(n.enum_members) for n in nodes),
        "deprecated": sum(1 for n in classes if n.deprecated),
    }
    return GenerationResult(declarations=synthesize(registry, settings), stats=stats)


def generate_from_document(document: dict | list, settings: Settings) -> GenerationResult:
    """Generate from an already-decoded JSON-LD document."""
    return generate(group_declarations(iter_declarations(document), settings), settings)


def generate_from_graph(graph: Graph, settings: Settings) -> GenerationResult:
    """Generate from parsed rdflib triples."""
    return generate(group_facts(facts_from_graph(graph), settings), settings)


def render(result: GenerationResult) -> str:
    return render_module(result.declarations)
