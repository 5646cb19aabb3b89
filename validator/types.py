"""
validator/types.py — kody ustaleń i struktury wyniku walidacji.

Finding — pojedyncze ustalenie (błąd lub ostrzeżenie) z kodem, komunikatem
    i opcjonalnym numerem linii.
ValidationResult — wynik walidacji jednego dokumentu: valid, errors, warnings.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any


class FindingCode(StrEnum):
    """Stałe kody ustaleń walidatora (E_ = błąd, W_ = ostrzeżenie)."""

    # A — blok metadanych
    METADATA_MISSING          = "E_METADATA_MISSING"
    METADATA_INVALID          = "E_METADATA_INVALID"
    READ_FAILED               = "E_READ_FAILED"

    # B — JSON Schema
    SCHEMA_VIOLATION          = "E_SCHEMA_VIOLATION"
    SCHEMA_ENGINE             = "E_SCHEMA_ENGINE"

    # C — semantyka metadanych
    DATE_ORDER                = "E_DATE_ORDER"
    STATUS_INVALID            = "E_STATUS_INVALID"
    TAG_INVALID               = "E_TAG_INVALID"
    TAG_DUPLICATE             = "W_TAG_DUPLICATE"

    # D — tytuł
    TITLE_MISSING             = "E_TITLE_MISSING"
    TITLE_FORMAT              = "E_TITLE_FORMAT"
    TITLE_MULTIPLE            = "W_TITLE_MULTIPLE"
    TITLE_MISMATCH            = "W_TITLE_MISMATCH"

    # E/F — sekcje i podsekcje
    SECTION_MISSING           = "E_SECTION_MISSING"
    SECTION_ORDER             = "W_SECTION_ORDER"
    SUBSECTION_MISSING        = "E_SUBSECTION_MISSING"

    # G — audyt
    AUDIT_EMPTY               = "E_AUDIT_EMPTY"
    AUDIT_DATE                = "W_AUDIT_DATE"
    AUDIT_FIELD_MISSING       = "W_AUDIT_FIELD_MISSING"
    AUDIT_STATUS              = "W_AUDIT_STATUS"

    # H — rozważane opcje
    OPTIONS_EMPTY             = "E_OPTIONS_EMPTY"
    OPTION_ELEMENT_MISSING    = "W_OPTION_ELEMENT_MISSING"


@dataclass(frozen=True, slots=True)
class Finding:
    """
    Pojedyncze ustalenie walidacji.

    - code:    stały identyfikator klasy ustalenia (FindingCode)
    - message: czytelny opis
    - line:    1-based numer linii w pliku; None gdy nie da się go ustalić
    """

    code: FindingCode
    message: str
    line: int | None = None


@dataclass(slots=True)
class ValidationResult:
    """
    Wynik walidacji jednego dokumentu ADR.

    - path:     ścieżka pliku (informacyjnie; None dla tekstu z pamięci)
    - errors:   błędy w kolejności wykrycia — każdy ustawia valid=False
    - warnings: ostrzeżenia — nigdy nie zmieniają valid
    - valid:    True dopóki nie dodano żadnego błędu
    """

    path: str | None = None
    errors: list[Finding] = field(default_factory=list)
    warnings: list[Finding] = field(default_factory=list)
    valid: bool = True

    def add_error(self, code: FindingCode, message: str, line: int | None = None) -> None:
        self.errors.append(Finding(code, message, line))
        self.valid = False

    def add_warning(self, code: FindingCode, message: str, line: int | None = None) -> None:
        self.warnings.append(Finding(code, message, line))

    def passed(self, strict: bool = False) -> bool:
        """Czy dokument przechodzi kontrolę? W trybie strict ostrzeżenia też blokują."""
        return self.valid and (not strict or not self.warnings)

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": self.path,
            "valid": self.valid,
            "errors": [_finding_dict(f) for f in self.errors],
            "warnings": [_finding_dict(f) for f in self.warnings],
        }


def _finding_dict(f: Finding) -> dict[str, Any]:
    return {"code": str(f.code), "message": f.message, "line": f.line}
