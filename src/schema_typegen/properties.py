"""
Property resolver: attaches typed properties to the classes that own them.

A property Topic resolves its range (rangeIncludes) once and is attached to
every class named in its domainIncludes; all owners share the same node.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from rdflib import URIRef

from schema_typegen.graph import ClassNode, ClassRegistry, deprecation_notice
from schema_typegen.models import Settings
from schema_typegen.terms import Node, Vocab, describe, human_name
from schema_typegen.topics import Topic
from schema_typegen.utils import log, warn
from schema_typegen.wellknown import get_comment, get_reference, is_property_type


@dataclass(eq=False)
class PropertyNode:
    """A property declaration, shared by every class that owns it."""

    subject: Node
    description: str | None = None
    range: list[ClassNode] = field(default_factory=list)
    """Allowed value classes. Empty means the range could not be resolved."""

    owners: list[ClassNode] = field(default_factory=list)
    superseded_by: list[URIRef] = field(default_factory=list)

    def __repr__(self) -> str:
        return f"PropertyNode({self.subject})"

    @property
    def name(self) -> str:
        return human_name(self.subject)

    @property
    def deprecated(self) -> bool:
        return bool(self.superseded_by)

    @property
    def comment(self) -> str | None:
        if not self.deprecated:
            return self.description
        notice = deprecation_notice(
            [human_name(s) for s in self.superseded_by], verb="Consider using"
        )
        return f"{self.description}\n{notice}" if self.description else notice


def is_property_topic(topic: Topic) -> bool:
    return any(is_property_type(t) for t in topic.types)


def resolve_property(topic: Topic, registry: ClassRegistry, settings: Settings) -> PropertyNode:
    """Resolve one property Topic and attach it to its owning classes."""
    prop = PropertyNode(topic.subject)
    domains: list[ClassNode] = []
    skipped = []

    for value in topic.values:
        if value.predicate is Vocab.LABEL:
            continue

        comment = get_comment(value, settings.lang)
        if comment is not None:
            if prop.description is not None:
                warn(f"Duplicate comments provided on property {topic.subject}.")
            prop.description = comment
            continue

        range_id = get_reference(value, Vocab.RANGE_INCLUDES)
        if range_id is not None:
            prop.range.append(registry.resolve(range_id, topic.subject, "range class"))
            continue

        domain_id = get_reference(value, Vocab.DOMAIN_INCLUDES)
        if domain_id is not None:
            domains.append(registry.resolve(domain_id, topic.subject, "domain class"))
            continue

        replacement = get_reference(value, Vocab.SUPERSEDED_BY)
        if replacement is not None:
            prop.superseded_by.append(replacement)
            continue

        skipped.append(value)

    for owner in domains:
        owner.add_property(prop)
        prop.owners.append(owner)

    if prop.description is None and settings.verbose:
        log(f"Property {topic.subject} has no comments.")
    if skipped and settings.verbose:
        log(
            f"For property {prop.name}, did not process:\n\t"
            + "\n\t".join(describe(v) for v in skipped)
        )
    return prop


def resolve_properties(
    topics: Iterable[Topic], registry: ClassRegistry, settings: Settings
) -> list[PropertyNode]:
    """Resolve every property Topic against ``registry``."""
    return [
        resolve_property(topic, registry, settings)
        for topic in topics
        if is_property_topic(topic)
    ]
