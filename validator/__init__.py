"""
validator — walidator zgodności dokumentów ADR z formatem Structured MADR.

Interfejs publiczny:
    AdrValidator      — główny walidator (etapy A–H)
    AdrRules          — zestaw reguł strukturalnych (domyślny lub z pliku YAML)
    ValidationResult, Finding, FindingCode — typy wyniku
    load_default_schema, jsonschema_engine — schemat metadanych i jego silnik

Typowe użycie:
    from validator import AdrValidator, load_default_schema

    validator = AdrValidator(load_default_schema())
    result    = validator.validate(Path("docs/decisions/adr-0001.md").read_text())
    if not result.valid:
        for e in result.errors:
            print(e.code, e.line, e.message)
"""

from .types import Finding, FindingCode, ValidationResult
from .rules import AdrRules, SectionRule
from .schema_engine import SchemaEngine, SchemaViolation, jsonschema_engine, load_default_schema
from .adr_validator import AdrValidator, validate_text

__all__ = [
    "AdrRules",
    "AdrValidator",
    "Finding",
    "FindingCode",
    "SchemaEngine",
    "SchemaViolation",
    "SectionRule",
    "ValidationResult",
    "jsonschema_engine",
    "load_default_schema",
    "validate_text",
]
