"""
Exceptions raised while resolving an ontology.

Every error here is fatal: the run stops and produces no output.
"""


class OntologyError(Exception):
    """Base class for ontology resolution failures."""


class UnresolvedReferenceError(OntologyError):
    """A referenced class is missing from the registry."""

    def __init__(self, subject: str, reference: str, role: str):
        self.subject = subject
        self.reference = reference
        self.role = role
        super().__init__(f"Couldn't find {role} {reference} referenced by {subject}.")


class InheritanceCycleError(OntologyError):
    """A subclass edge would make the class graph cyclic."""

    def __init__(self, child: str, parent: str):
        self.child = child
        self.parent = parent
        super().__init__(f"Making {child} a subclass of {parent} creates a cycle.")


class EmptyOntologyError(OntologyError):
    """The input contains no Class topics."""


class InvalidTermError(OntologyError):
    """A term cannot be turned into a type name."""
