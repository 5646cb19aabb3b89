"""
validator/adr_validator.py — główny walidator dokumentów Structured MADR.

AdrValidator.validate(text, path=None) -> ValidationResult

Etapy:
  A — blok metadanych        (obecność, poprawność YAML)
  B — JSON Schema            (tylko gdy podano schemat i blok jest poprawny)
  C — semantyka metadanych   (daty, status, tagi)
  D — tytuł H1               (format, zgodność z metadanymi)
  E — sekcje H2              (obecność, kolejność)
  F — podsekcje H3           (obecność)
  G — audyt                  (wpisy, pola, statusy)
  H — opcje                  (zalecane elementy każdej opcji)

Żaden etap nie przerywa walidacji — uszkodzony blok metadanych pomija tylko
etapy B i C, a etapy D–H zawsze działają na treści dokumentu.
"""

from __future__ import annotations

import logging
from typing import Any

from mdscan.frontmatter import split_frontmatter
from mdscan.headings import body_lines, extract_headings

from .normalizer import normalize_metadata
from .rules import AdrRules
from .schema_engine import SchemaEngine, jsonschema_engine
from .semantics import check_metadata_semantics
from .structure import (
    check_audit,
    check_options,
    check_sections,
    check_subsections,
    check_title,
)
from .types import FindingCode, ValidationResult

logger = logging.getLogger(__name__)


class AdrValidator:
    """
    Walidator dokumentu ADR względem formatu Structured MADR.

    Użycie:
        schema    = load_default_schema()
        validator = AdrValidator(schema)
        result    = validator.validate(text, path="docs/decisions/adr-0001.md")

    Instancja nie przechowuje stanu między wywołaniami validate() — można ją
    współdzielić między wątkami.
    """

    def __init__(
        self,
        schema: dict[str, Any] | None = None,
        rules: AdrRules | None = None,
        engine: SchemaEngine = jsonschema_engine,
    ) -> None:
        self._schema = schema
        self._rules  = rules or AdrRules.default()
        self._engine = engine

    # ------------------------------------------------------------------
    # Publiczny interfejs
    # ------------------------------------------------------------------

    def validate(self, text: str, path: str | None = None) -> ValidationResult:
        """
        Waliduje tekst dokumentu i zwraca ValidationResult.

        Args:
            text: pełna treść pliku ADR
            path: ścieżka pliku (tylko do raportu)
        """
        result = ValidationResult(path=path)

        # A — blok metadanych
        split    = split_frontmatter(text)
        metadata: dict[str, Any] | None = None

        if split.unterminated:
            result.add_error(
                FindingCode.METADATA_MISSING,
                "Unterminated YAML frontmatter: opening --- has no closing ---",
                1,
            )
        elif not split.present:
            result.add_error(
                FindingCode.METADATA_MISSING,
                "Missing YAML frontmatter. File must start with ---",
                1,
            )
        elif split.error is not None:
            result.add_error(
                FindingCode.METADATA_INVALID,
                f"Invalid YAML frontmatter: {split.error}",
                1,
            )
        else:
            metadata = normalize_metadata(split.block.data)

        if metadata is not None:
            # B — JSON Schema
            if self._schema is not None:
                self._stage_schema(metadata, result)

            # C — semantyka
            check_metadata_semantics(metadata, self._rules, result)
        else:
            logger.debug("%s: brak poprawnych metadanych — etapy B i C pominięte", path or "<text>")

        # D–H — struktura treści
        headings = extract_headings(split.body, split.body_start_line)
        lines    = body_lines(text)

        check_title(headings, metadata.get("title") if metadata else None, result)
        check_sections(headings, self._rules, result)
        check_subsections(headings, self._rules, result)
        check_audit(lines, headings, self._rules, result)
        check_options(lines, headings, self._rules, result)

        logger.debug(
            "%s: %d nagłówków, %d błąd(ów), %d ostrzeżeń",
            path or "<text>", len(headings), len(result.errors), len(result.warnings),
        )
        return result

    # ------------------------------------------------------------------
    # Stage B — JSON Schema
    # ------------------------------------------------------------------

    def _stage_schema(self, metadata: dict[str, Any], result: ValidationResult) -> None:
        try:
            violations = self._engine(self._schema, metadata)
        except Exception as exc:  # dowolny błąd silnika → jedno ustalenie
            result.add_error(
                FindingCode.SCHEMA_ENGINE,
                f"Frontmatter schema validation failed: {exc}",
            )
            return

        for v in violations:
            result.add_error(
                FindingCode.SCHEMA_VIOLATION,
                f"Frontmatter schema error at {v.path}: {v.message}",
            )


def validate_text(
    text: str,
    schema: dict[str, Any] | None = None,
    rules: AdrRules | None = None,
) -> ValidationResult:
    """Skrót: jednorazowa walidacja tekstu dokumentu."""
    return AdrValidator(schema, rules).validate(text)
