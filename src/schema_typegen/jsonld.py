"""
Raw JSON-LD graph members to Facts.

schema.org publishes its vocabulary as a JSON-LD document whose ``@graph``
holds one member per declaration; layered releases nest further ``@graph``
blocks. This module walks the members recursively and yields, per member,
the list of Facts it declares, so that duplicate declarations of a subject
can be merged (and reported) later.

Term, CURIE and coercion handling is rdflib's JSON-LD ``Context``, the same
machinery ``Graph.parse(format="json-ld")`` uses.
"""

from __future__ import annotations

from typing import Any, Iterator

from rdflib import BNode, Literal, URIRef
from rdflib.plugins.shared.jsonld.context import UNDEF, Context
from rdflib.plugins.shared.jsonld.keys import CONTEXT, ID, LANG, TYPE, VALUE, VOCAB

from schema_typegen.config import META_TEST_SUBJECT
from schema_typegen.terms import Fact, Node, Term, Vocab, to_predicate
from schema_typegen.utils import warn

_SKIPPED_WHEN_ALONE = {
    "http://purl.org/dc/terms/source",
    "http://www.w3.org/2004/02/skos/core#closeMatch",
    "http://schema.org/softwareVersion",
    "https://schema.org/softwareVersion",
}


def to_array(item: Any) -> list:
    if item is None:
        return []
    if isinstance(item, list):
        return item
    return [item]


def load_context(definition: Any = None) -> Context:
    """An rdflib JSON-LD context for ``definition`` (a dict, or a list of them).

    The base is empty: schema.org members only use absolute IRIs and CURIEs.
    """
    return Context(definition, base="")


def predicate_iri(key: str, context: Context) -> str | None:
    """Full IRI of a member key, or None when the context cannot map it."""
    term = context.terms.get(key)
    if term is not None:
        return term.id
    return context.expand(key) or None


def _node(ref: str, context: Context) -> Node:
    if ref.startswith("_:"):
        return BNode(ref[2:])
    return URIRef(context.resolve(ref))


def _type_tag(value: str, context: Context) -> URIRef:
    return URIRef(context.expand(value) or context.resolve_iri(value))


def _object(value: Any, key: str, context: Context) -> Term:
    term = context.terms.get(key)
    coercion = term.type if term is not None else UNDEF

    if isinstance(value, dict):
        if ID in value:
            return _node(value[ID], context)
        if VALUE in value:
            return Literal(value[VALUE], lang=value.get(LANG))
        raise ValueError(f"Unsupported JSON-LD value for {key}: {value!r}")

    if isinstance(value, str):
        if coercion == ID:
            return _node(value, context)
        if coercion == VOCAB:
            return _type_tag(value, context)
        if coercion is not UNDEF:
            return Literal(value, datatype=context.expand(coercion))
        language = term.language if term is not None and term.language is not UNDEF else None
        return Literal(value, lang=language or context.language)
    return Literal(value)


def _is_skippable(member: dict, context: Context) -> bool:
    if context.get_id(member) == META_TEST_SUBJECT:
        return True
    if context.get_type(member) is not None:
        return False
    keys = {
        predicate_iri(k, context)
        for k in member
        if not k.startswith("@") and k not in context.get_keys(ID)
    }
    return bool(keys) and keys <= _SKIPPED_WHEN_ALONE


def member_facts(member: dict, context: Context) -> list[Fact]:
    """Facts declared by one graph member.

    Keys the context cannot map to an IRI are reported and dropped.
    """
    subject = _node(context.get_id(member), context)
    facts: list[Fact] = []
    for t in to_array(context.get_type(member)):
        facts.append(Fact(subject, Vocab.TYPE, _type_tag(t, context)))

    reserved = set(context.get_keys(ID)) | set(context.get_keys(TYPE))
    for key, raw in member.items():
        if key.startswith("@") or key in reserved:
            continue
        iri = predicate_iri(key, context)
        if iri is None:
            warn(f"Could not expand key {key} on {subject}; its values are dropped.")
            continue
        predicate = to_predicate(iri)
        for value in to_array(raw):
            facts.append(Fact(subject, predicate, _object(value, key, context)))
    return facts


def iter_declarations(document: dict | list, definitions: tuple = ()) -> Iterator[list[Fact]]:
    """Yield the Facts of every member, descending into nested graphs.

    ``definitions`` are the context definitions in scope; a nested ``@context``
    is loaded on top of them. Members that only carry provenance (source,
    closeMatch, softwareVersion) and the schema.org meta test comment are
    skipped.
    """
    if isinstance(document, dict) and CONTEXT in document:
        definitions = definitions + tuple(to_array(document[CONTEXT]))
    context = load_context(list(definitions))
    members = to_array(context.get_graph(document)) if isinstance(document, dict) else document

    for member in members:
        if context.get_graph(member) is not None:
            yield from iter_declarations(member, definitions)
            continue
        member_context = context
        if CONTEXT in member:
            member_context = load_context(list(definitions) + to_array(member[CONTEXT]))
        if member_context.get_id(member) is None or _is_skippable(member, member_context):
            continue
        yield member_facts(member, member_context)
