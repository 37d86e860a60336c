"""
Utility helpers: diagnostics console, local names, identifier sanitizing.
"""

import re

from rich.console import Console
from rich.markup import escape

# Generated declarations go to stdout; diagnostics never do.
console = Console(stderr=True, soft_wrap=True)


def log(message: str) -> None:
    """Print an advisory diagnostic."""
    console.print(f"[dim]{escape(message)}[/dim]")


def warn(message: str) -> None:
    """Print a data-quality warning."""
    console.print(f"[yellow]{escape(message)}[/yellow]")


def local_name(iri: str) -> str:
    """Extract the local name from an IRI (after # or last /).

    Examples
    --------
    >>> local_name("http://schema.org/Thing")
    'Thing'
    >>> local_name("http://www.w3.org/2000/01/rdf-schema#Class")
    'Class'
    """
    s = str(iri)
    return s.split("#")[-1] if "#" in s else s.split("/")[-1]


def to_identifier(name: str) -> str:
    """Turn a local name into a valid identifier.

    >>> to_identifier("3DModel")
    '_3DModel'
    >>> to_identifier("Sub-Type")
    'Sub_Type'
    """
    cleaned = re.sub(r"[^A-Za-z0-9_]", "_", name)
    if cleaned[:1].isdigit():
        cleaned = "_" + cleaned
    return cleaned


def to_enum_member_name(name: str) -> str:
    """Sanitize an enum member name; only invalid characters are replaced."""
    return re.sub(r"[^A-Za-z0-9_]", "_", name)


def sort_key(text: str) -> tuple[str, str]:
    """Case-insensitive ordering key, lowercase before uppercase on ties.

    Close to an ICU locale compare for letters and digits, but punctuation
    sorts by code point: ICU puts ``_`` before digits, this key puts it after.
    """
    return text.casefold(), text.swapcase()
