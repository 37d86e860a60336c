"""
Shared configuration: download locations and constants.
"""

# ---------------------------------------------------------------------------
# Ontology source
# ---------------------------------------------------------------------------
SCHEMA_URL_TEMPLATE = "https://schema.org/version/{version}/{layer}.jsonld"
SCHEMA_NAMESPACE = "http://schema.org/"
META_TEST_SUBJECT = "http://meta.schema.org/"

# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------
DEFAULT_SCHEMA_VERSION = "3.4"
DEFAULT_LAYER = "schema"
DEFAULT_LANG = "en"
FETCH_TIMEOUT_SECONDS = 60

# ---------------------------------------------------------------------------
# Emission
# ---------------------------------------------------------------------------
TYPE_FIELD = "@type"           # discriminant key injected into leaf classes
BASE_SUFFIX = "Base"
ENUM_SUFFIX = "Enum"
OUTPUT_HEADER = "// tslint:disable\n\n"
