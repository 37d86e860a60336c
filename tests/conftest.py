"""
Shared fixtures: small in-memory schema.org-style JSON-LD documents.
"""

import pytest

from schema_typegen.jsonld import iter_declarations
from schema_typegen.models import Settings
from schema_typegen.topics import group_declarations

SCHEMA = "http://schema.org/"

CONTEXT = {
    "rdf": "http://www.w3.org/1999/02/22-rdf-syntax-ns#",
    "rdfs": "http://www.w3.org/2000/01/rdf-schema#",
    "xsd": "http://www.w3.org/2001/XMLSchema#",
    "schema": SCHEMA,
}


def ref(name):
    return {"@id": f"schema:{name}"}


def cls(name, parents=(), comment=None, **extra):
    member = {"@id": f"schema:{name}", "@type": "rdfs:Class", "rdfs:label": name}
    if comment is not None:
        member["rdfs:comment"] = comment
    if parents:
        member["rdfs:subClassOf"] = [ref(p) for p in parents]
    member.update(extra)
    return member


def prop(name, domain=(), range=(), comment=None, **extra):
    member = {"@id": f"schema:{name}", "@type": "rdf:Property", "rdfs:label": name}
    if comment is not None:
        member["rdfs:comment"] = comment
    if domain:
        member["http://schema.org/domainIncludes"] = [ref(d) for d in domain]
    if range:
        member["http://schema.org/rangeIncludes"] = [ref(r) for r in range]
    member.update(extra)
    return member


def member(name, *types, comment=None):
    item = {"@id": f"schema:{name}", "@type": [f"schema:{t}" for t in types]}
    if comment is not None:
        item["rdfs:comment"] = comment
    return item


def document(*members):
    return {"@context": dict(CONTEXT), "@graph": list(members)}


def topics_of(doc, settings=None):
    return group_declarations(iter_declarations(doc), settings or Settings())


@pytest.fixture
def settings():
    return Settings()


@pytest.fixture
def verbose():
    return Settings(verbose=True)


@pytest.fixture
def simple_document():
    """A is a root class, B extends A, p is a Text property of A."""
    return document(
        cls("A", comment="The A class."),
        cls("B", parents=["A"], comment="The B class."),
        prop("p", domain=["A"], range=["Text"], comment="A property."),
    )
