"""
Type expression synthesizer.

Turns each ClassNode of a frozen registry into declarations:

- ``<Name>Enum``: an enumeration of its members, if it has any;
- ``<Name>Base``: its own structural shape, intersected with its parents';
- ``<Name>``: the public total type, a closed union over the class itself
  and all of its subclasses, discriminated by the ``@type`` field.

Cross references are by name, so declarations can be emitted in any order;
``emission_order`` fixes one for byte-identical output.
"""

from __future__ import annotations

from schema_typegen.config import BASE_SUFFIX, ENUM_SUFFIX, TYPE_FIELD
from schema_typegen.graph import BuiltinNode, ClassNode, ClassRegistry, class_name, is_leaf
from schema_typegen.models import Settings
from schema_typegen.properties import PropertyNode
from schema_typegen.terms import human_name
from schema_typegen.typexpr import (
    NEVER,
    ArrayOf,
    Declaration,
    EnumDeclaration,
    EnumMember,
    Field,
    Intersection,
    Keyword,
    Literal,
    Record,
    Reference,
    TypeAlias,
    TypeExpr,
    Union,
    intersection_of,
    union_of,
)
from schema_typegen.utils import sort_key


# ---------------------------------------------------------------------------
# Ordering
# ---------------------------------------------------------------------------


def subject_key(subject) -> tuple:
    """Order by human-readable name, then by full identifier."""
    return sort_key(human_name(subject)), sort_key(str(subject))


def emission_key(node: ClassNode) -> tuple:
    """Builtins first, then by name and identifier."""
    return (0 if isinstance(node, BuiltinNode) else 1,) + subject_key(node.subject)


def emission_order(registry: ClassRegistry) -> list[ClassNode]:
    return sorted(registry, key=emission_key)


# ---------------------------------------------------------------------------
# Names
# ---------------------------------------------------------------------------


def base_name(node: ClassNode) -> str:
    if isinstance(node, BuiltinNode):
        return class_name(node.subject)
    return class_name(node.subject) + BASE_SUFFIX


def enum_name(node: ClassNode) -> str:
    return class_name(node.subject) + ENUM_SUFFIX


# ---------------------------------------------------------------------------
# Fields
# ---------------------------------------------------------------------------


def field_type(key: str, scalar: TypeExpr) -> TypeExpr:
    """Structural markers are single-valued; everything else may repeat."""
    if key.startswith("@"):
        return scalar
    return Union((scalar, ArrayOf(scalar)))


def discriminant_field(node: ClassNode) -> Field:
    return Field(TYPE_FIELD, Literal(node.name), optional=False)


def property_field(prop: PropertyNode) -> Field:
    scalar = union_of([Reference(class_name(c.subject)) for c in prop.range])
    return Field(
        prop.name,
        field_type(prop.name, scalar),
        optional=not prop.name.startswith("@"),
        comment=prop.comment,
    )


def own_fields(node: ClassNode, settings: Settings) -> list[Field]:
    """Discriminant (leaves only) followed by the sorted own properties."""
    props = sorted(node.properties, key=lambda p: subject_key(p.subject))
    if not settings.include_deprecated:
        props = [p for p in props if not p.deprecated]
    fields = [property_field(p) for p in props]
    if is_leaf(node):
        fields.insert(0, discriminant_field(node))
    return fields


# ---------------------------------------------------------------------------
# Shapes
# ---------------------------------------------------------------------------


def base_shape(node: ClassNode, settings: Settings) -> TypeExpr:
    """Parents' base shapes intersected with the class's own record."""
    parents = intersection_of([Reference(base_name(p)) for p in node.parents])
    fields = own_fields(node, settings)
    record = Record(tuple(fields)) if fields else None

    if parents is not None and record is not None:
        return Intersection((parents, record))
    if parents is not None:
        return parents
    if record is not None:
        return record
    return NEVER


def non_enum_shape(node: ClassNode) -> TypeExpr:
    base = Reference(base_name(node))
    if not node.children:
        return base
    children = sorted(node.children, key=lambda c: subject_key(c.subject))
    itself = Intersection((Record((discriminant_field(node),)), base))
    return Union((itself,) + tuple(Reference(class_name(c.subject)) for c in children))


def total_shape(node: ClassNode) -> TypeExpr:
    shape = non_enum_shape(node)
    if not node.enum_members:
        return shape
    return Union((Reference(enum_name(node)), shape))


# ---------------------------------------------------------------------------
# Declarations
# ---------------------------------------------------------------------------


def enum_declaration(node: ClassNode) -> EnumDeclaration | None:
    if not node.enum_members:
        return None
    members = sorted(node.enum_members, key=lambda m: sort_key(m.value))
    return EnumDeclaration(
        enum_name(node),
        tuple(EnumMember(m.name, m.value, m.comment) for m in members),
    )


def declarations(node: ClassNode, settings: Settings) -> list[Declaration]:
    """Ordered declarations for one class."""
    enum = enum_declaration(node)
    if isinstance(node, BuiltinNode):
        # Members typed as a builtin (True and False are Booleans) widen the alias.
        primitive = Keyword(node.target)
        if enum is None:
            return [TypeAlias(base_name(node), primitive, comment=node.comment)]
        value = Union((Reference(enum.name), primitive))
        return [enum, TypeAlias(base_name(node), value, comment=node.comment)]

    result: list[Declaration] = []
    if enum is not None:
        result.append(enum)
    result.append(TypeAlias(base_name(node), base_shape(node, settings), exported=False))
    result.append(TypeAlias(class_name(node.subject), total_shape(node), comment=node.comment))
    return result


def synthesize(registry: ClassRegistry, settings: Settings) -> list[list[Declaration]]:
    """Declarations for every class, in emission order."""
    return [declarations(node, settings) for node in emission_order(registry)]
