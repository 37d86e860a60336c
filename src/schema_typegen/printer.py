"""
TypeScript printer for the type-expression language.

Renders declarations verbatim in the order given. Compound expressions
nested inside other compound expressions (or arrays) are parenthesized.
"""

from __future__ import annotations

import json
from typing import Iterable

from schema_typegen.config import OUTPUT_HEADER
from schema_typegen.typexpr import (
    COMPOUND,
    ArrayOf,
    Declaration,
    EnumDeclaration,
    Field,
    Intersection,
    Keyword,
    Literal,
    Record,
    Reference,
    TypeAlias,
    TypeExpr,
    Union,
)

INDENT = "    "


def _string(value: str) -> str:
    return json.dumps(value, ensure_ascii=False)


def render_comment(comment: str | None, indent: str = "") -> str:
    """A JSDoc block, or nothing when there is no comment."""
    if not comment:
        return ""
    lines = comment.replace("*/", "*\\/").splitlines()
    if len(lines) == 1:
        return f"{indent}/** {lines[0]} */\n"
    body = "".join(f"{indent} * {line}".rstrip() + "\n" for line in lines)
    return f"{indent}/**\n{body}{indent} */\n"


def _nested(expr: TypeExpr, indent: str) -> str:
    text = render_type(expr, indent)
    return f"({text})" if isinstance(expr, COMPOUND) else text


def _field(field: Field, indent: str) -> str:
    inner = indent + INDENT
    marker = "?" if field.optional else ""
    return (
        render_comment(field.comment, inner)
        + f"{inner}{_string(field.key)}{marker}: {render_type(field.value, inner)};\n"
    )


def render_type(expr: TypeExpr, indent: str = "") -> str:
    if isinstance(expr, Reference):
        return expr.name
    if isinstance(expr, Keyword):
        return expr.name
    if isinstance(expr, Literal):
        return _string(expr.value)
    if isinstance(expr, ArrayOf):
        return f"{_nested(expr.element, indent)}[]"
    if isinstance(expr, Union):
        return " | ".join(_nested(m, indent) for m in expr.members)
    if isinstance(expr, Intersection):
        return " & ".join(_nested(m, indent) for m in expr.members)
    if isinstance(expr, Record):
        if not expr.fields:
            return "{}"
        body = "".join(_field(f, indent) for f in expr.fields)
        return "{\n" + body + indent + "}"
    raise TypeError(f"Unrecognized type expression {expr!r}")


def render_declaration(decl: Declaration) -> str:
    if isinstance(decl, TypeAlias):
        export = "export " if decl.exported else ""
        return (
            render_comment(decl.comment)
            + f"{export}type {decl.name} = {render_type(decl.value)};\n"
        )
    if isinstance(decl, EnumDeclaration):
        export = "export " if decl.exported else ""
        members = "".join(
            render_comment(m.comment, INDENT) + f"{INDENT}{m.name} = {_string(m.value)},\n"
            for m in decl.members
        )
        return render_comment(decl.comment) + f"{export}enum {decl.name} {{\n{members}}}\n"
    raise TypeError(f"Unrecognized declaration {decl!r}")


def render_module(groups: Iterable[list[Declaration]]) -> str:
    """The whole output file: header, then one block per class."""
    blocks = ["".join(render_declaration(d) for d in group) for group in groups]
    return OUTPUT_HEADER + "\n".join(blocks)
