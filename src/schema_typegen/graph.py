"""
Class graph: the registry of ClassNodes and their inheritance edges.

Construction is two-phase. Every class Topic is first forward-declared so
that references resolve regardless of declaration order; then each Topic's
values are dispatched onto its node (comment, subClassOf, supersededBy).
Any reference that does not resolve aborts the run.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterable, Iterator

from rdflib import URIRef

from schema_typegen.errors import (
    EmptyOntologyError,
    InheritanceCycleError,
    InvalidTermError,
    UnresolvedReferenceError,
)
from schema_typegen.models import Settings
from schema_typegen.terms import Node, PredicateObject, Vocab, describe, human_name
from schema_typegen.utils import log, to_identifier, warn
from schema_typegen.wellknown import get_comment, get_reference, is_class_type, is_data_type

if TYPE_CHECKING:
    from schema_typegen.enums import EnumMemberNode
    from schema_typegen.properties import PropertyNode
    from schema_typegen.topics import Topic


def deprecation_notice(replacements: list[str], verb: str = "Use") -> str:
    return f"@deprecated {verb} {' or '.join(replacements)} instead."


def class_name(subject: Node) -> str:
    """Type name for a class subject."""
    if not isinstance(subject, URIRef):
        raise InvalidTermError(f"Did not expect a blank node to be a class: {subject}")
    name = human_name(subject)
    if not name:
        raise InvalidTermError(f"IRI required for class node {subject}.")
    return to_identifier(name)


@dataclass(eq=False)
class ClassNode:
    """One class of the ontology and its accumulated declarations."""

    subject: Node
    description: str | None = None
    parents: list[ClassNode] = field(default_factory=list)
    children: list[ClassNode] = field(default_factory=list)
    properties: list[PropertyNode] = field(default_factory=list)
    enum_members: list[EnumMemberNode] = field(default_factory=list)
    superseded_by: list[ClassNode] = field(default_factory=list)
    _frozen: bool = field(default=False, repr=False)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.subject})"

    @property
    def name(self) -> str:
        return human_name(self.subject)

    @property
    def deprecated(self) -> bool:
        return bool(self.superseded_by)

    @property
    def comment(self) -> str | None:
        """Own comment, followed by a deprecation notice when superseded."""
        if not self.deprecated:
            return self.description
        notice = deprecation_notice([class_name(c.subject) for c in self.superseded_by])
        return f"{self.description}\n{notice}" if self.description else notice

    def _check_mutable(self) -> None:
        if self._frozen:
            raise RuntimeError(f"Class {self.subject} is frozen.")

    def add(self, value: PredicateObject, registry: ClassRegistry, settings: Settings) -> bool:
        """Claim ``value`` if it describes this class. Returns False if unclaimed."""
        self._check_mutable()

        comment = get_comment(value, settings.lang)
        if comment is not None:
            if self.description is not None:
                warn(f"Duplicate comments provided on class {self.subject}. It will be overwritten.")
            self.description = comment
            return True

        parent_id = get_reference(value, Vocab.SUBCLASS_OF)
        if parent_id is not None:
            parent = registry.resolve(parent_id, self.subject, "parent")
            registry.link(self, parent)
            return True

        target_id = get_reference(value, Vocab.SUPERSEDED_BY)
        if target_id is not None:
            target = registry.resolve(target_id, self.subject, "superseding class")
            self.superseded_by.append(target)
            return True

        return False

    def add_property(self, prop: PropertyNode) -> None:
        self._check_mutable()
        self.properties.append(prop)

    def add_enum_member(self, member: EnumMemberNode) -> None:
        self._check_mutable()
        self.enum_members.append(member)


@dataclass(eq=False, repr=False)
class BuiltinNode(ClassNode):
    """A class standing for a primitive of the target type system."""

    target: str = "string"
    doc: str = ""

    @property
    def comment(self) -> str | None:
        return self.doc


def aliases_builtin(node: ClassNode) -> bool:
    """True if any ancestor of ``node`` is a builtin."""
    for parent in node.parents:
        if isinstance(parent, BuiltinNode) or aliases_builtin(parent):
            return True
    return False


def is_leaf(node: ClassNode) -> bool:
    """A leaf has no children and does not alias a builtin.

    Computed on demand: parents keep gaining children while the graph is built.
    """
    return not node.children and not aliases_builtin(node)


def ancestors(node: ClassNode) -> set[ClassNode]:
    """Every class reachable through parent edges."""
    seen: set[ClassNode] = set()
    queue = deque(node.parents)
    while queue:
        current = queue.popleft()
        if current in seen:
            continue
        seen.add(current)
        queue.extend(current.parents)
    return seen


class ClassRegistry:
    """Owns every ClassNode of a run, keyed by subject identifier."""

    def __init__(self) -> None:
        self._classes: dict[str, ClassNode] = {}
        self.frozen = False

    def __len__(self) -> int:
        return len(self._classes)

    def __iter__(self) -> Iterator[ClassNode]:
        return iter(self._classes.values())

    def __contains__(self, subject) -> bool:
        return str(subject) in self._classes

    def get(self, subject) -> ClassNode | None:
        return self._classes.get(str(subject))

    def declare(self, node: ClassNode) -> ClassNode:
        if self.frozen:
            raise RuntimeError("Class registry is frozen.")
        self._classes[str(node.subject)] = node
        return node

    def resolve(self, reference, subject, role: str) -> ClassNode:
        node = self.get(reference)
        if node is None:
            raise UnresolvedReferenceError(str(subject), str(reference), role)
        return node

    def link(self, child: ClassNode, parent: ClassNode) -> None:
        """Add a parent edge, rejecting edges that would close a cycle."""
        if parent is child or child in ancestors(parent):
            raise InheritanceCycleError(str(child.subject), str(parent.subject))
        child._check_mutable()
        parent._check_mutable()
        child.parents.append(parent)
        parent.children.append(child)

    def builtins(self) -> list[BuiltinNode]:
        return [c for c in self if isinstance(c, BuiltinNode)]

    def freeze(self) -> None:
        """Make the graph read-only before emission."""
        self.frozen = True
        for node in self:
            node._frozen = True


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------


def is_class_topic(topic: Topic) -> bool:
    # Data types are covered by the builtin catalogue.
    if any(is_data_type(t) for t in topic.types):
        return False
    if is_data_type(topic.subject):
        return False
    return any(is_class_type(t) for t in topic.types)


def _forward_declare(topics: list[Topic], registry: ClassRegistry) -> None:
    for topic in topics:
        existing = registry.get(topic.subject)
        if isinstance(existing, BuiltinNode):
            warn(f"Class {topic.subject} is already a builtin data type; keeping the builtin.")
            continue
        class_name(topic.subject)
        registry.declare(ClassNode(topic.subject))


def build_class_graph(
    topics: Iterable[Topic], registry: ClassRegistry, settings: Settings
) -> ClassRegistry:
    """Declare every class Topic, then resolve comments and edges."""
    class_topics = [t for t in topics if is_class_topic(t)]
    if not class_topics:
        raise EmptyOntologyError("Expected Class topics to exist.")

    _forward_declare(class_topics, registry)

    for topic in class_topics:
        node = registry.get(topic.subject)
        if isinstance(node, BuiltinNode):
            continue

        skipped = [
            v for v in topic.values
            if v.predicate is not Vocab.LABEL and not node.add(v, registry, settings)
        ]

        if node.description is None and settings.verbose:
            log(f"Class {topic.subject} has no comments.")
        if skipped and settings.verbose:
            log(
                f"For class {node.name}, did not process:\n\t"
                + "\n\t".join(describe(v) for v in skipped)
            )

    return registry
