"""
schema-typegen: schema.org ontology to static type declarations.
"""

__version__ = "0.1.0"
