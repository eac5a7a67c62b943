"""Schema-Vorschläge – Kernlogik des Modell-Assistenten.

Öffentliche API:
- generate_schemas: Beschreibung → SchemaSet (Input/Output)
- match_pattern: Gewinner-Muster mit Score und Treffern
- validate_schema: Editor-Text prüfen
- format_schema / schema_to_string: Schema → Editor-Text
"""

from app.schemas.builder import FieldSpec, build_schema
from app.schemas.catalog import (
    SCHEMA_CATALOG,
    PatternEntry,
    SchemaSet,
    default_schema_set,
    get_pattern,
)
from app.schemas.editor import (
    SCHEMA_NOT_OBJECT_MESSAGE,
    ValidationResult,
    format_schema,
    schema_to_string,
    validate_schema,
)
from app.schemas.matcher import MatchResult, generate_schemas, match_pattern

__all__ = [
    # Builder
    "FieldSpec",
    "build_schema",
    # Katalog
    "SCHEMA_CATALOG",
    "PatternEntry",
    "SchemaSet",
    "default_schema_set",
    "get_pattern",
    # Matcher
    "MatchResult",
    "generate_schemas",
    "match_pattern",
    # Editor
    "SCHEMA_NOT_OBJECT_MESSAGE",
    "ValidationResult",
    "format_schema",
    "schema_to_string",
    "validate_schema",
]
