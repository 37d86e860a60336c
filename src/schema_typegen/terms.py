"""
Fact vocabulary.

Subjects and objects are rdflib terms: ``URIRef`` for named entities,
``BNode`` for anonymous ones and ``Literal`` for (optionally
language-tagged) strings. Predicates the pipeline understands are mapped
onto the ``Vocab`` enum; any other predicate stays a ``URIRef``.
"""

from __future__ import annotations

from enum import Enum
from typing import Iterator, NamedTuple

from rdflib import BNode, Graph, Literal, URIRef
from rdflib.namespace import DCTERMS, OWL, RDF, RDFS, SKOS

from schema_typegen.utils import local_name

Node = URIRef | BNode
Term = URIRef | BNode | Literal

_SCHEMA_NAMESPACES = ("http://schema.org/", "https://schema.org/")


class Vocab(Enum):
    """Well-known predicates."""

    TYPE = "type"
    SUBCLASS_OF = "subClassOf"
    DOMAIN_INCLUDES = "domainIncludes"
    RANGE_INCLUDES = "rangeIncludes"
    COMMENT = "comment"
    LABEL = "label"
    SUPERSEDED_BY = "supersededBy"
    EQUIVALENT_CLASS = "equivalentClass"
    CLOSE_MATCH = "closeMatch"
    SOURCE = "source"

    @classmethod
    def from_iri(cls, iri: str) -> Vocab | None:
        return _BY_IRI.get(str(iri))


_BY_IRI: dict[str, Vocab] = {
    str(RDF.type): Vocab.TYPE,
    str(RDFS.subClassOf): Vocab.SUBCLASS_OF,
    str(RDFS.comment): Vocab.COMMENT,
    str(RDFS.label): Vocab.LABEL,
    str(OWL.equivalentClass): Vocab.EQUIVALENT_CLASS,
    str(SKOS.closeMatch): Vocab.CLOSE_MATCH,
    str(DCTERMS.source): Vocab.SOURCE,
}
for _ns in _SCHEMA_NAMESPACES:
    _BY_IRI[_ns + "domainIncludes"] = Vocab.DOMAIN_INCLUDES
    _BY_IRI[_ns + "rangeIncludes"] = Vocab.RANGE_INCLUDES
    _BY_IRI[_ns + "supersededBy"] = Vocab.SUPERSEDED_BY

Predicate = Vocab | URIRef


class Fact(NamedTuple):
    """One immutable subject/predicate/object assertion."""

    subject: Node
    predicate: Predicate
    object: Term


class PredicateObject(NamedTuple):
    """A fact with its subject factored out, as stored on a Topic."""

    predicate: Predicate
    object: Term


def to_predicate(iri: str) -> Predicate:
    return Vocab.from_iri(iri) or URIRef(iri)


def human_name(node: Term) -> str:
    """Human-readable name of a term: local name, blank id or literal text."""
    if isinstance(node, URIRef):
        return local_name(node)
    return str(node)


def describe(value: PredicateObject) -> str:
    """One-line rendering of a value, for diagnostics."""
    predicate = value.predicate
    pred = predicate.value if isinstance(predicate, Vocab) else str(predicate)
    return f"{{ Predicate: {pred} Object: {value.object} }}"


def facts_from_graph(graph: Graph) -> Iterator[Fact]:
    """Turn parsed rdflib triples into Facts.

    Triples are sorted first: store iteration order is not stable across runs.
    """
    for subject, predicate, obj in sorted(graph):
        if not isinstance(subject, (URIRef, BNode)):
            continue
        yield Fact(subject, to_predicate(predicate), obj)
