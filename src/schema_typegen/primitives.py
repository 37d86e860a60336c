"""
Builtin data types.

schema.org models its primitive values (Text, Number, ...) as DataType
classes. These are not generated from the ontology; each one is seeded from
a fixed catalogue and aliased to a primitive of the target type system.
Classes that inherit from a builtin (e.g. URL from Text) alias it too, and
never receive a discriminant field.
"""

from dataclasses import dataclass

from rdflib import URIRef

from schema_typegen.graph import BuiltinNode, ClassRegistry


@dataclass(frozen=True)
class Primitive:
    name: str
    target: str
    doc: str


CATALOGUE = (
    Primitive("Text", "string", "Data type: Text."),
    Primitive("Number", "number", "Data type: Number."),
    Primitive(
        "Time",
        "string",
        "DateTime represented in string, e.g. 2017-01-04T17:10:00-05:00.",
    ),
    Primitive(
        "Date",
        "string",
        'A date value in <a href="http://en.wikipedia.org/wiki/ISO_8601">ISO 8601 date format</a>.',
    ),
    Primitive(
        "DateTime",
        "string",
        "A combination of date and time of day in the form "
        "[-]CCYY-MM-DDThh:mm:ss[Z|(+|-)hh:mm] (see Chapter 5.4 of ISO 8601).",
    ),
    Primitive("Boolean", "boolean", "Boolean: True or False."),
)


def seed_builtins(registry: ClassRegistry, namespace: str) -> ClassRegistry:
    """Register every catalogue entry under ``namespace``."""
    for primitive in CATALOGUE:
        registry.declare(
            BuiltinNode(
                URIRef(namespace + primitive.name),
                target=primitive.target,
                doc=primitive.doc,
            )
        )
    return registry
