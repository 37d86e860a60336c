"""
Enum resolver: attaches enumeration members to the class they instantiate.

Any Topic carrying a type tag other than Class, Property or DataType is an
instance of that type, i.e. a member of an enumeration. A Topic may be both
(e.g. SurgicalProcedure is a Class and a MedicalProcedureType member).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from schema_typegen.graph import ClassNode, ClassRegistry
from schema_typegen.models import Settings
from schema_typegen.terms import Node, Vocab, describe, human_name
from schema_typegen.topics import Topic
from schema_typegen.utils import log, to_enum_member_name, warn
from schema_typegen.wellknown import get_comment, has_enum_type, is_well_known


@dataclass(eq=False)
class EnumMemberNode:
    subject: Node
    comment: str | None = None

    @property
    def value(self) -> str:
        """Literal value of the member: the subject's canonical string."""
        return str(self.subject)

    @property
    def name(self) -> str:
        return to_enum_member_name(human_name(self.subject))


def find_owner(topic: Topic, registry: ClassRegistry) -> ClassNode | None:
    """The first non-well-known type tag; it must resolve.

    Only the first candidate is used; later owner tags on the same Topic are
    ignored.
    """
    for type_tag in topic.types:
        if is_well_known(type_tag):
            continue
        return registry.resolve(type_tag, topic.subject, "enumeration type")
    return None


def resolve_enum_member(
    topic: Topic, registry: ClassRegistry, settings: Settings
) -> EnumMemberNode | None:
    owner = find_owner(topic, registry)
    if owner is None:
        return None

    member = EnumMemberNode(topic.subject)
    skipped = []
    for value in topic.values:
        if value.predicate is Vocab.LABEL:
            continue
        comment = get_comment(value, settings.lang)
        if comment is None:
            skipped.append(value)
            continue
        if member.comment is not None:
            warn(f"Duplicate comments found in {topic.subject}.")
        member.comment = comment

    if member.comment is None and settings.verbose:
        log(f"No comments found in {topic.subject}.")
    if skipped and settings.verbose:
        log(
            f"For enum item {human_name(topic.subject)}, did not process:\n\t"
            + "\n\t".join(describe(v) for v in skipped)
        )

    owner.add_enum_member(member)
    return member


def resolve_enums(
    topics: Iterable[Topic], registry: ClassRegistry, settings: Settings
) -> list[EnumMemberNode]:
    """Annotate classes with the enum members that belong to them."""
    members = []
    for topic in topics:
        if not has_enum_type(topic.types):
            continue
        member = resolve_enum_member(topic, registry, settings)
        if member is not None:
            members.append(member)
    return members
