"""
Data classes shared across the generation pipeline.
"""

from dataclasses import dataclass, field

from schema_typegen.config import DEFAULT_LANG, SCHEMA_NAMESPACE
from schema_typegen.typexpr import Declaration


@dataclass(frozen=True)
class Settings:
    """Options consumed by every pipeline stage."""

    lang: str = DEFAULT_LANG
    """Preferred language tag when choosing among language-tagged comments."""

    verbose: bool = False
    """Log missing comments, merges and unconsumed values."""

    include_deprecated: bool = True
    """Emit properties that have been superseded."""

    namespace: str = SCHEMA_NAMESPACE
    """Namespace the builtin data types are registered under."""


@dataclass
class GenerationResult:
    """Result of running the pipeline over one ontology."""

    declarations: list[list[Declaration]] = field(default_factory=list)
    """Per class, in emission order, its ordered declarations."""

    stats: dict[str, int] = field(default_factory=dict)
    """Counts: classes, builtins, properties, enum_members, deprecated."""
