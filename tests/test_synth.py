"""
Type expression synthesis tests.
"""

import random

from conftest import cls, document, member, prop, topics_of
from schema_typegen.models import Settings
from schema_typegen.pipeline import build_registry, generate, render
from schema_typegen.synth import (
    base_shape,
    declarations,
    emission_order,
    non_enum_shape,
    total_shape,
)
from schema_typegen.typexpr import (
    NEVER,
    ArrayOf,
    EnumDeclaration,
    EnumMember,
    Field,
    Intersection,
    Keyword,
    Literal,
    Record,
    Reference,
    TypeAlias,
    Union,
)

SCHEMA = "http://schema.org/"


def _registry(*members, settings=None):
    settings = settings or Settings()
    return build_registry(topics_of(document(*members)), settings)


def _type_field(name):
    return Field("@type", Literal(name), optional=False)


def _text_field(name, comment=None):
    return Field(
        name,
        Union((Reference("Text"), ArrayOf(Reference("Text")))),
        optional=True,
        comment=comment,
    )


class TestScenario:
    def test_root_with_one_subclass(self, simple_document, settings):
        registry = build_registry(topics_of(simple_document), settings)
        a = registry.get(SCHEMA + "A")
        b = registry.get(SCHEMA + "B")

        assert base_shape(a, settings) == Record((_text_field("p", "A property."),))
        assert total_shape(a) == Union(
            (Intersection((Record((_type_field("A"),)), Reference("ABase"))), Reference("B"))
        )
        assert base_shape(b, settings) == Intersection(
            (Reference("ABase"), Record((_type_field("B"),)))
        )
        assert total_shape(b) == Reference("BBase")

    def test_declaration_triplet(self, simple_document, settings):
        registry = build_registry(topics_of(simple_document), settings)
        decls = declarations(registry.get(SCHEMA + "A"), settings)
        assert [d.name for d in decls] == ["ABase", "A"]
        assert not decls[0].exported
        assert decls[1].exported
        assert decls[1].comment == "The A class."


class TestLeafDiscriminant:
    def test_only_leaves_carry_the_discriminant(self, settings):
        registry = _registry(
            cls("Thing"),
            cls("Person", parents=["Thing"]),
            cls("Place", parents=["Thing"]),
            cls("URL", parents=["Text"]),
            prop("name", domain=["Thing"], range=["Text"]),
        )
        for node in registry:
            if node.name in ("Person", "Place"):
                record = base_shape(node, settings).members[1]
                type_fields = [f for f in record.fields if f.key == "@type"]
                assert type_fields == [_type_field(node.name)]
        thing = base_shape(registry.get(SCHEMA + "Thing"), settings)
        assert all(f.key != "@type" for f in thing.fields)
        assert base_shape(registry.get(SCHEMA + "URL"), settings) == Reference("Text")

    def test_discriminant_comes_before_properties(self, settings):
        registry = _registry(
            cls("Leaf"),
            prop("alpha", domain=["Leaf"], range=["Text"]),
        )
        fields = base_shape(registry.get(SCHEMA + "Leaf"), settings).fields
        assert [f.key for f in fields] == ["@type", "alpha"]

    def test_empty_non_leaf_base_is_never(self, settings):
        registry = _registry(cls("Thing"), cls("Person", parents=["Thing"]))
        assert base_shape(registry.get(SCHEMA + "Thing"), settings) == NEVER


class TestMultipleInheritance:
    def test_parents_are_intersected(self, settings):
        registry = _registry(
            cls("P1"),
            cls("P2"),
            cls("C", parents=["P1", "P2"]),
            prop("one", domain=["P1"], range=["Text"]),
            prop("two", domain=["P2"], range=["Text"]),
            prop("own", domain=["C"], range=["Text"]),
        )
        assert base_shape(registry.get(SCHEMA + "C"), settings) == Intersection(
            (
                Intersection((Reference("P1Base"), Reference("P2Base"))),
                Record((_type_field("C"), _text_field("own"))),
            )
        )


class TestProperties:
    def test_properties_sorted_by_name(self, settings):
        registry = _registry(
            cls("A"),
            cls("B", parents=["A"]),
            prop("zeta", domain=["A"], range=["Text"]),
            prop("Alpha", domain=["A"], range=["Text"]),
            prop("beta", domain=["A"], range=["Text"]),
        )
        fields = base_shape(registry.get(SCHEMA + "A"), settings).fields
        assert [f.key for f in fields] == ["Alpha", "beta", "zeta"]

    def test_union_range(self, settings):
        registry = _registry(
            cls("A"),
            cls("B", parents=["A"]),
            prop("p", domain=["A"], range=["Text", "Number"]),
        )
        field = base_shape(registry.get(SCHEMA + "A"), settings).fields[0]
        scalar = Union((Reference("Text"), Reference("Number")))
        assert field.value == Union((scalar, ArrayOf(scalar)))

    def test_unresolvable_range_is_never(self, settings):
        registry = _registry(cls("A"), cls("B", parents=["A"]), prop("p", domain=["A"]))
        field = base_shape(registry.get(SCHEMA + "A"), settings).fields[0]
        assert field.value == Union((NEVER, ArrayOf(NEVER)))

    def test_deprecated_properties_can_be_skipped(self):
        members = (
            cls("A"),
            cls("B", parents=["A"]),
            prop("old", domain=["A"], range=["Text"],
                 **{"http://schema.org/supersededBy": {"@id": "schema:new"}}),
            prop("new", domain=["A"], range=["Text"]),
        )
        kept = Settings()
        skipped = Settings(include_deprecated=False)
        a_kept = _registry(*members, settings=kept).get(SCHEMA + "A")
        a_skipped = _registry(*members, settings=skipped).get(SCHEMA + "A")
        assert [f.key for f in base_shape(a_kept, kept).fields] == ["new", "old"]
        assert [f.key for f in base_shape(a_skipped, skipped).fields] == ["new"]


class TestEnums:
    def test_enum_union(self, settings):
        registry = _registry(
            cls("Color"),
            member("Red", "Color", comment="Red."),
            member("Blue", "Color"),
        )
        color = registry.get(SCHEMA + "Color")
        decls = declarations(color, settings)
        assert decls[0] == EnumDeclaration(
            "ColorEnum",
            (
                EnumMember("Blue", SCHEMA + "Blue"),
                EnumMember("Red", SCHEMA + "Red", "Red."),
            ),
        )
        assert total_shape(color) == Union((Reference("ColorEnum"), Reference("ColorBase")))
        assert [type(d) for d in decls] == [EnumDeclaration, TypeAlias, TypeAlias]

    def test_enum_with_children(self, settings):
        registry = _registry(
            cls("Color"),
            cls("Shade", parents=["Color"]),
            member("Red", "Color"),
        )
        color = registry.get(SCHEMA + "Color")
        assert total_shape(color) == Union((Reference("ColorEnum"), non_enum_shape(color)))


class TestBuiltins:
    def test_text_alias(self, simple_document, settings):
        registry = build_registry(topics_of(simple_document), settings)
        assert declarations(registry.get(SCHEMA + "Text"), settings) == [
            TypeAlias("Text", Keyword("string"), comment="Data type: Text.")
        ]

    def test_boolean_members_widen_the_alias(self, settings):
        registry = _registry(
            cls("A"),
            member("True", "Boolean", comment="The boolean value true."),
            member("False", "Boolean", comment="The boolean value false."),
        )
        assert declarations(registry.get(SCHEMA + "Boolean"), settings) == [
            EnumDeclaration(
                "BooleanEnum",
                (
                    EnumMember("False", SCHEMA + "False", "The boolean value false."),
                    EnumMember("True", SCHEMA + "True", "The boolean value true."),
                ),
            ),
            TypeAlias(
                "Boolean",
                Union((Reference("BooleanEnum"), Keyword("boolean"))),
                comment="Boolean: True or False.",
            ),
        ]

    def test_boolean_members_are_rendered(self, settings):
        result = generate(
            topics_of(document(cls("A"), member("True", "Boolean"), member("False", "Boolean"))),
            settings,
        )
        source = render(result)
        assert "export enum BooleanEnum {\n" in source
        assert f'    True = "{SCHEMA}True",\n' in source
        assert "export type Boolean = BooleanEnum | boolean;" in source
        assert result.stats["enum_members"] == 2


class TestDeprecation:
    def test_deprecated_class_comment_and_shape(self, settings):
        registry = _registry(
            cls("M", comment="Old thing.", **{"http://schema.org/supersededBy": {"@id": "schema:N"}}),
            cls("N"),
            prop("keep", domain=["M"], range=["Text"]),
        )
        m = registry.get(SCHEMA + "M")
        alias = declarations(m, settings)[-1]
        assert "@deprecated Use N instead." in alias.comment
        assert alias.comment.startswith("Old thing.")
        assert base_shape(m, settings) == Record((_type_field("M"), _text_field("keep")))


class TestOrdering:
    def test_builtins_first_then_alphabetical(self, settings):
        registry = _registry(cls("banana"), cls("Apple"), cls("Aardvark"), cls("cherry"))
        names = [n.name for n in emission_order(registry)]
        assert names == [
            "Boolean", "Date", "DateTime", "Number", "Text", "Time",
            "Aardvark", "Apple", "banana", "cherry",
        ]

    def test_same_name_tie_broken_by_identifier(self, settings):
        registry = _registry(
            cls("Thing"),
            {"@id": "http://example.org/Thing", "@type": "rdfs:Class"},
        )
        ordered = [str(n.subject) for n in emission_order(registry) if n.name == "Thing"]
        assert ordered == ["http://example.org/Thing", SCHEMA + "Thing"]

    def test_children_sorted_in_total_shape(self, settings):
        registry = _registry(
            cls("Root"),
            cls("Zed", parents=["Root"]),
            cls("Mid", parents=["Root"]),
            cls("alpha", parents=["Root"]),
        )
        shape = total_shape(registry.get(SCHEMA + "Root"))
        assert shape.members[1:] == (Reference("alpha"), Reference("Mid"), Reference("Zed"))


class TestDeterminism:
    def test_output_is_independent_of_input_order(self, settings):
        members = [
            cls("Thing", comment="Anything."),
            cls("Person", parents=["Thing"]),
            cls("Place", parents=["Thing"]),
            cls("City", parents=["Place"]),
            cls("Color"),
            member("Red", "Color"),
            member("Green", "Color"),
            prop("name", domain=["Thing"], range=["Text"]),
            prop("address", domain=["Person", "Place"], range=["Text", "Place"]),
        ]
        expected = render(generate(topics_of(document(*members)), settings))
        shuffled = list(members)
        for seed in range(5):
            random.Random(seed).shuffle(shuffled)
            assert render(generate(topics_of(document(*shuffled)), settings)) == expected
