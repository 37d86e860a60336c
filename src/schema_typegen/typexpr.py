"""
Abstract type-expression language.

A small closed set of immutable nodes describing structural types, plus the
declarations that bind them to names. Nothing here knows about the target
syntax; see ``schema_typegen.printer`` for rendering.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union as _Union


@dataclass(frozen=True)
class Reference:
    """A named type, referenced by name rather than by value."""

    name: str


@dataclass(frozen=True)
class Keyword:
    """A primitive of the target type system (``string``, ``never``, ...)."""

    name: str


NEVER = Keyword("never")


@dataclass(frozen=True)
class Literal:
    """A string literal type."""

    value: str


@dataclass(frozen=True)
class ArrayOf:
    element: TypeExpr


@dataclass(frozen=True)
class Union:
    members: tuple[TypeExpr, ...]


@dataclass(frozen=True)
class Intersection:
    members: tuple[TypeExpr, ...]


@dataclass(frozen=True)
class Field:
    """One member of a structural record."""

    key: str
    value: TypeExpr
    optional: bool = True
    comment: str | None = None


@dataclass(frozen=True)
class Record:
    """An object literal type."""

    fields: tuple[Field, ...] = ()


TypeExpr = _Union[Reference, Keyword, Literal, ArrayOf, Union, Intersection, Record]

COMPOUND = (Union, Intersection)


def union_of(members: list[TypeExpr]) -> TypeExpr:
    """Union of ``members``; ``never`` when empty, the member itself when alone."""
    if not members:
        return NEVER
    if len(members) == 1:
        return members[0]
    return Union(tuple(members))


def intersection_of(members: list[TypeExpr]) -> TypeExpr | None:
    """Intersection of ``members``; None when empty."""
    if not members:
        return None
    if len(members) == 1:
        return members[0]
    return Intersection(tuple(members))


# ---------------------------------------------------------------------------
# Declarations
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class EnumMember:
    name: str
    value: str
    comment: str | None = None


@dataclass(frozen=True)
class EnumDeclaration:
    name: str
    members: tuple[EnumMember, ...]
    comment: str | None = None
    exported: bool = True


@dataclass(frozen=True)
class TypeAlias:
    name: str
    value: TypeExpr
    comment: str | None = None
    exported: bool = True


Declaration = _Union[EnumDeclaration, TypeAlias]
