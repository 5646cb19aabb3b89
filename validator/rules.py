"""
validator/rules.py — zestaw reguł strukturalnych formatu Structured MADR.

AdrRules wczytuje konfigurację reguł (słownik lub plik YAML) i buduje:
  sections        — wymagane sekcje H2 w kolejności (SectionRule)
  subsections     — wymagane podsekcje H3 dla sekcji-rodziców
  statuses        — dozwolone wartości pola `status` w metadanych
  audit_*         — sekcja audytu: nazwa, wymagane pola, dozwolone statusy
  options_*       — sekcja opcji: nazwa, zalecane znaczniki

Brakujące klucze konfiguracji przyjmują wartości domyślne (DEFAULT_RULES).

Dopasowanie nazw sekcji:
  exact=False → nagłówek zaczyna się od nazwy (bez rozróżniania wielkości liter)
  exact=True  → nagłówek równy nazwie (np. "Decision" vs "Decision Drivers")

Nazwa dopasowywana prefiksowo, która jest prefiksem innej wymaganej nazwy,
jest niejednoznaczna — konstruktor zgłasza wtedy ValueError.
"""

from __future__ import annotations

import pathlib
from dataclasses import dataclass
from typing import Any

import yaml


DEFAULT_RULES: dict[str, Any] = {
    "sections": [
        "Status",
        "Context",
        "Decision Drivers",
        "Considered Options",
        {"name": "Decision", "exact": True},
        "Consequences",
        "Decision Outcome",
        "Related Decisions",
        "Links",
        "More Information",
        "Audit",
    ],
    "subsections": {
        "Context": ["Background and Problem Statement"],
        "Decision Drivers": ["Primary Decision Drivers", "Secondary Decision Drivers"],
        "Consequences": ["Positive", "Negative", "Neutral"],
    },
    "statuses": ["proposed", "accepted", "deprecated", "superseded"],
    "audit": {
        "section": "Audit",
        "fields": ["Status", "Findings", "Summary", "Action Required"],
        "status_field": "Status",
        "statuses": ["Pending", "Compliant", "Non-Compliant", "Partial"],
    },
    "options": {
        "section": "Considered Options",
        "markers": ["Advantages", "Disadvantages", "Risk Assessment"],
    },
}


# ---------------------------------------------------------------------------
# SectionRule
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class SectionRule:
    name: str
    exact: bool = False

    def matches(self, heading_text: str) -> bool:
        text = heading_text.lower()
        name = self.name.lower()
        if self.exact:
            return text == name
        return text.startswith(name)


def _section_rule(item: Any) -> SectionRule:
    if isinstance(item, str):
        return SectionRule(item)
    if isinstance(item, dict) and isinstance(item.get("name"), str):
        return SectionRule(item["name"], bool(item.get("exact", False)))
    raise ValueError(f"Invalid section rule: {item!r}")


def _mapping(value: Any, key: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise ValueError(f"Rule '{key}' must be a mapping, got {value!r}")
    return value


def _str_tuple(value: Any, key: str) -> tuple[str, ...]:
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ValueError(f"Rule '{key}' must be a list of strings, got {value!r}")
    return tuple(value)


# ---------------------------------------------------------------------------
# AdrRules
# ---------------------------------------------------------------------------

class AdrRules:
    """
    Niezmienny zestaw reguł strukturalnych używany przez walidator.

    Użycie:
        rules = AdrRules.default()
        rules = AdrRules.from_file("madr-rules.yaml")
    """

    def __init__(self, config: dict[str, Any]) -> None:
        audit   = {**DEFAULT_RULES["audit"],   **_mapping(config.get("audit", {}), "audit")}
        options = {**DEFAULT_RULES["options"], **_mapping(config.get("options", {}), "options")}

        sections = config.get("sections", DEFAULT_RULES["sections"])
        if not isinstance(sections, list):
            raise ValueError(f"Rule 'sections' must be a list, got {sections!r}")
        self.sections: tuple[SectionRule, ...] = tuple(_section_rule(s) for s in sections)

        subs = _mapping(config.get("subsections", DEFAULT_RULES["subsections"]), "subsections")
        self.subsections: tuple[tuple[str, tuple[str, ...]], ...] = tuple(
            (parent, _str_tuple(required, f"subsections.{parent}"))
            for parent, required in subs.items()
        )

        self.statuses: tuple[str, ...] = _str_tuple(
            config.get("statuses", DEFAULT_RULES["statuses"]), "statuses"
        )

        self.audit_section: str                = str(audit["section"])
        self.audit_fields: tuple[str, ...]     = _str_tuple(audit["fields"], "audit.fields")
        self.audit_status_field: str           = str(audit["status_field"])
        self.audit_statuses: tuple[str, ...]   = _str_tuple(audit["statuses"], "audit.statuses")

        self.options_section: str              = str(options["section"])
        self.option_markers: tuple[str, ...]   = _str_tuple(options["markers"], "options.markers")

        self._check_ambiguous()

    # ------------------------------------------------------------------
    # Walidacja konfiguracji
    # ------------------------------------------------------------------

    def _check_ambiguous(self) -> None:
        for rule in self.sections:
            if rule.exact:
                continue
            prefix = rule.name.lower()
            for other in self.sections:
                other_name = other.name.lower()
                if other_name != prefix and other_name.startswith(prefix):
                    raise ValueError(
                        f"Section '{rule.name}' is a prefix of required section "
                        f"'{other.name}'; mark it as exact to disambiguate."
                    )

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def rule_for(self, name: str) -> SectionRule:
        """Reguła dopasowania dla nazwy sekcji; nazwy spoza listy — dopasowanie prefiksowe."""
        for rule in self.sections:
            if rule.name == name:
                return rule
        return SectionRule(name)

    # ------------------------------------------------------------------
    # Konstruktory fabryczne
    # ------------------------------------------------------------------

    @classmethod
    def default(cls) -> "AdrRules":
        return cls(DEFAULT_RULES)

    @classmethod
    def from_dict(cls, config: dict[str, Any]) -> "AdrRules":
        """Buduje reguły z już wczytanego słownika."""
        return cls(config)

    @classmethod
    def from_file(cls, path: str | pathlib.Path) -> "AdrRules":
        """Ładuje reguły z pliku YAML (lub JSON — YAML jest jego nadzbiorem)."""
        data = yaml.safe_load(pathlib.Path(path).read_text(encoding="utf-8"))
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ValueError(f"Rules file {path} must contain a mapping")
        return cls(data)
