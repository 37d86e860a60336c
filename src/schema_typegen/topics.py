"""
Fact store: groups facts by subject into Topics.

Several raw declarations of the same subject (e.g. one per schema layer)
merge into a single Topic:

- type tags and reference-valued predicates (domainIncludes, rangeIncludes,
  subClassOf, ...) merge as a set union keyed by identifier, keeping first
  seen order;
- comments and labels are singular per language. When two declarations
  disagree the most recently observed one wins and a warning is printed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from rdflib import Literal, URIRef

from schema_typegen.config import META_TEST_SUBJECT
from schema_typegen.models import Settings
from schema_typegen.terms import Fact, Node, PredicateObject, Term, Vocab, describe
from schema_typegen.utils import log, warn

_SINGULAR = (Vocab.COMMENT, Vocab.LABEL)
_PROVENANCE = frozenset(
    [
        Vocab.SOURCE,
        Vocab.CLOSE_MATCH,
        URIRef("http://schema.org/softwareVersion"),
        URIRef("https://schema.org/softwareVersion"),
    ]
)


@dataclass
class Topic:
    """All facts about one subject, merged."""

    subject: Node
    types: list[URIRef] = field(default_factory=list)
    """Type tags, deduplicated, in first seen order."""

    values: list[PredicateObject] = field(default_factory=list)
    """Every non-type value about the subject."""

    def add(self, predicate, obj: Term) -> None:
        """Record one value, applying the merge policy."""
        if predicate is Vocab.TYPE:
            if obj not in self.types:
                self.types.append(obj)
            return

        value = PredicateObject(predicate, obj)
        if predicate in _SINGULAR:
            language = obj.language if isinstance(obj, Literal) else None
            for i, existing in enumerate(self.values):
                if existing.predicate is not predicate:
                    continue
                existing_language = (
                    existing.object.language if isinstance(existing.object, Literal) else None
                )
                if existing_language != language:
                    continue
                if existing.object != obj:
                    warn(
                        f"Two {predicate.value}s found for {self.subject}. "
                        f"Keeping the last one."
                    )
                    self.values[i] = value
                return
            self.values.append(value)
            return

        if value not in self.values:
            self.values.append(value)

    def merge(self, other: Topic) -> None:
        """Fold ``other`` (a later declaration of the same subject) into self."""
        for t in other.types:
            self.add(Vocab.TYPE, t)
        for value in other.values:
            self.add(value.predicate, value.object)

    @property
    def is_provenance_only(self) -> bool:
        return not self.types and all(v.predicate in _PROVENANCE for v in self.values)


class FactStore:
    """Mapping from subject identifier to its merged Topic."""

    def __init__(self, settings: Settings):
        self._settings = settings
        self._topics: dict[str, Topic] = {}

    def __len__(self) -> int:
        return len(self._topics)

    def __contains__(self, subject) -> bool:
        return str(subject) in self._topics

    def get(self, subject) -> Topic | None:
        return self._topics.get(str(subject))

    def add_fact(self, fact: Fact) -> None:
        if _is_ignored(fact.subject):
            return
        key = str(fact.subject)
        topic = self._topics.get(key)
        if topic is None:
            topic = self._topics[key] = Topic(fact.subject)
        topic.add(fact.predicate, fact.object)

    def add_facts(self, facts: Iterable[Fact]) -> None:
        for fact in facts:
            self.add_fact(fact)

    def add_declaration(self, facts: list[Fact]) -> None:
        """Add one raw declaration: facts that all share a subject."""
        if not facts:
            return
        subject = facts[0].subject
        if _is_ignored(subject):
            return

        incoming = Topic(subject)
        for fact in facts:
            incoming.add(fact.predicate, fact.object)

        key = str(subject)
        existing = self._topics.get(key)
        if existing is None:
            self._topics[key] = incoming
            return
        if self._settings.verbose:
            log(f"Merging two items with ID {key}")
        existing.merge(incoming)

    def topics(self) -> list[Topic]:
        """Merged Topics in first seen order, without untyped subjects."""
        result: list[Topic] = []
        for topic in self._topics.values():
            if topic.is_provenance_only:
                continue
            if not topic.types:
                if self._settings.verbose:
                    log(
                        f"Dropping {topic.subject}, which has no type: "
                        + ", ".join(describe(v) for v in topic.values)
                    )
                continue
            result.append(topic)
        return result


def _is_ignored(subject) -> bool:
    # Some published layers reference local files.
    s = str(subject)
    return s.startswith("file:") or s == META_TEST_SUBJECT


def group_declarations(declarations: Iterable[list[Fact]], settings: Settings) -> list[Topic]:
    """Group raw declarations (as yielded by ``jsonld.iter_declarations``)."""
    store = FactStore(settings)
    for facts in declarations:
        store.add_declaration(facts)
    return store.topics()


def group_facts(facts: Iterable[Fact], settings: Settings) -> list[Topic]:
    """Group a flat stream of facts."""
    store = FactStore(settings)
    store.add_facts(facts)
    return store.topics()
