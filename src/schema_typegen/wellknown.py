"""
Well-known meta-types and helpers shared by the resolver stages.
"""

from __future__ import annotations

from typing import Iterable

from rdflib import Literal, URIRef
from rdflib.namespace import RDF, RDFS

from schema_typegen.terms import PredicateObject, Vocab

CLASS_TYPE = URIRef(str(RDFS.Class))
PROPERTY_TYPE = URIRef(str(RDF.Property))
DATATYPE_TYPES = frozenset(
    URIRef(ns + "DataType") for ns in ("http://schema.org/", "https://schema.org/")
)


def is_class_type(node) -> bool:
    return node == CLASS_TYPE


def is_property_type(node) -> bool:
    return node == PROPERTY_TYPE


def is_data_type(node) -> bool:
    return node in DATATYPE_TYPES


def is_well_known(node) -> bool:
    return is_class_type(node) or is_property_type(node) or is_data_type(node)


def has_enum_type(types: Iterable[URIRef]) -> bool:
    """True if any type tag is something other than a well-known meta-type."""
    return any(not is_well_known(t) for t in types)


def get_comment(value: PredicateObject, lang: str) -> str | None:
    """Return the comment text carried by ``value``, if it is one we use.

    Untagged comments and comments in ``lang`` qualify; other languages do not.
    """
    if value.predicate is not Vocab.COMMENT:
        return None
    obj = value.object
    if not isinstance(obj, Literal):
        return None
    if obj.language is not None and obj.language != lang:
        return None
    return str(obj)


def get_reference(value: PredicateObject, predicate: Vocab) -> URIRef | None:
    """Return the referenced IRI if ``value`` is a ``predicate`` edge."""
    if value.predicate is not predicate:
        return None
    if isinstance(value.object, Literal):
        return None
    return value.object
