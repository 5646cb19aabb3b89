"""
validator/structure.py — reguły strukturalne treści dokumentu ADR.

Wszystkie funkcje operują na płaskiej liście nagłówków (HeadingList) z
numerami linii pliku oraz, tam gdzie potrzebny jest surowy tekst, na
liniach całego dokumentu (indeks = numer linii - 1).

Etapy:
  D — tytuł H1                 check_title
  E — wymagane sekcje H2       check_sections
  F — wymagane podsekcje H3    check_subsections
  G — sekcja audytu            check_audit
  H — rozważane opcje          check_options

Żaden etap nie przerywa pozostałych; brak sekcji zgłasza tylko check_sections.
"""

from __future__ import annotations

import logging
from typing import Any

from data_model.documents import Heading, HeadingList
from mdscan.headings import children, next_heading_line
from mdscan.section_patterns import (
    AUDIT_DATE_RE,
    TITLE_RE,
    bold_label,
    label_value_pattern,
    marker_pattern,
)

from .rules import AdrRules, SectionRule
from .types import FindingCode, ValidationResult

logger = logging.getLogger(__name__)

# Poziom sekcji głównych i ich podsekcji
SECTION_LEVEL    = 2
SUBSECTION_LEVEL = 3


# ---------------------------------------------------------------------------
# Funkcje pomocnicze
# ---------------------------------------------------------------------------

def find_section(headings: HeadingList, rule: SectionRule) -> int | None:
    """Indeks (w headings) pierwszego nagłówka H2 pasującego do reguły."""
    for i, h in enumerate(headings):
        if h.level == SECTION_LEVEL and rule.matches(h.text):
            return i
    return None


def _line_slice(lines: list[str], start_line: int, stop_line: int | None) -> list[str]:
    """Surowe linie [start_line, stop_line); stop_line=None → do końca dokumentu."""
    if stop_line is None:
        stop_line = len(lines) + 1
    return lines[start_line - 1:stop_line - 1]


def _section_text(lines: list[str], headings: HeadingList, heading: Heading) -> list[str]:
    """Surowe linie sekcji: od nagłówka do następnego nagłówka o poziomie ≤ heading.level."""
    return _line_slice(lines, heading.line, next_heading_line(headings, heading.line, heading.level))


# ---------------------------------------------------------------------------
# D — tytuł
# ---------------------------------------------------------------------------

def check_title(headings: HeadingList, metadata_title: Any, result: ValidationResult) -> None:
    h1 = [h for h in headings if h.level == 1]

    if not h1:
        result.add_error(
            FindingCode.TITLE_MISSING,
            "Missing H1 title. Expected format: # ADR-{NUMBER}: {TITLE}",
        )
        return

    if len(h1) > 1:
        result.add_warning(
            FindingCode.TITLE_MULTIPLE,
            "Multiple H1 headings found. ADR should have exactly one H1 title.",
            h1[1].line,
        )

    title = h1[0]
    m = TITLE_RE.match(title.text)
    if not m:
        result.add_error(
            FindingCode.TITLE_FORMAT,
            "H1 title does not match required format. Expected: # ADR-{NUMBER}: {TITLE}",
            title.line,
        )
        return

    if not isinstance(metadata_title, str) or not metadata_title.strip():
        return

    body_title = m.group(2).strip()
    a, b = body_title.lower(), metadata_title.strip().lower()
    if a != b and b not in a and a not in b:
        result.add_warning(
            FindingCode.TITLE_MISMATCH,
            f'H1 title "{body_title}" differs from frontmatter title "{metadata_title}"',
            title.line,
        )


# ---------------------------------------------------------------------------
# E — wymagane sekcje i ich kolejność
# ---------------------------------------------------------------------------

def check_sections(headings: HeadingList, rules: AdrRules, result: ValidationResult) -> None:
    h2 = [h for h in headings if h.level == SECTION_LEVEL]

    last_found = -1
    for rule in rules.sections:
        found = next((i for i, h in enumerate(h2) if rule.matches(h.text)), -1)

        if found == -1:
            result.add_error(
                FindingCode.SECTION_MISSING,
                f"Missing required section: ## {rule.name}",
            )
            continue

        if found < last_found:
            result.add_warning(
                FindingCode.SECTION_ORDER,
                f'Section "## {rule.name}" appears out of order',
                h2[found].line,
            )
        last_found = max(last_found, found)


# ---------------------------------------------------------------------------
# F — wymagane podsekcje
# ---------------------------------------------------------------------------

def check_subsections(headings: HeadingList, rules: AdrRules, result: ValidationResult) -> None:
    for parent, required in rules.subsections:
        index = find_section(headings, rules.rule_for(parent))
        line  = headings[index].line if index is not None else None

        # brak rodzica → pusty zakres, wszystkie podsekcje zgłaszane jako brakujące
        subs = [h.text.lower() for h in children(headings, index, SUBSECTION_LEVEL)]

        for sub in required:
            if not any(sub.lower() in s for s in subs):
                result.add_error(
                    FindingCode.SUBSECTION_MISSING,
                    f'Missing required subsection "### {sub}" under "## {parent}"',
                    line,
                )


# ---------------------------------------------------------------------------
# G — sekcja audytu
# ---------------------------------------------------------------------------

def check_audit(
    lines: list[str],
    headings: HeadingList,
    rules: AdrRules,
    result: ValidationResult,
) -> None:
    index = find_section(headings, rules.rule_for(rules.audit_section))
    if index is None:
        logger.debug("Brak sekcji %s — kontrola audytu pominięta", rules.audit_section)
        return

    audit   = headings[index]
    entries = children(headings, index, SUBSECTION_LEVEL)

    if not entries:
        result.add_error(
            FindingCode.AUDIT_EMPTY,
            f"{rules.audit_section} section must contain at least one dated entry (### YYYY-MM-DD)",
            audit.line,
        )
        return

    for entry in entries:
        if not AUDIT_DATE_RE.match(entry.text):
            result.add_warning(
                FindingCode.AUDIT_DATE,
                f'Audit entry heading should be a date (YYYY-MM-DD), found: "{entry.text}"',
                entry.line,
            )

    section_lines = _section_text(lines, headings, audit)
    status_re     = label_value_pattern(rules.audit_status_field)

    for field_name in rules.audit_fields:
        label = bold_label(field_name)
        if not any(label in line for line in section_lines):
            result.add_warning(
                FindingCode.AUDIT_FIELD_MISSING,
                f"Audit entry should include {label} field",
                audit.line,
            )

    for offset, line in enumerate(section_lines):
        m = status_re.search(line)
        if m and m.group(1) not in rules.audit_statuses:
            result.add_warning(
                FindingCode.AUDIT_STATUS,
                f'Audit status "{m.group(1)}" should be one of: {", ".join(rules.audit_statuses)}',
                audit.line + offset,
            )


# ---------------------------------------------------------------------------
# H — rozważane opcje
# ---------------------------------------------------------------------------

def check_options(
    lines: list[str],
    headings: HeadingList,
    rules: AdrRules,
    result: ValidationResult,
) -> None:
    index = find_section(headings, rules.rule_for(rules.options_section))
    if index is None:
        logger.debug("Brak sekcji %s — kontrola opcji pominięta", rules.options_section)
        return

    options = children(headings, index, SUBSECTION_LEVEL)
    if not options:
        result.add_error(
            FindingCode.OPTIONS_EMPTY,
            f"{rules.options_section} section must contain at least one option (### Option N: Name)",
            headings[index].line,
        )
        return

    markers = [(label, marker_pattern(label)) for label in rules.option_markers]

    for i, option in enumerate(options):
        stop = options[i + 1].line if i + 1 < len(options) else None
        if stop is None:
            stop = next_heading_line(headings, option.line, SECTION_LEVEL)
        text = "\n".join(_line_slice(lines, option.line, stop))

        for label, pattern in markers:
            if not pattern.search(text):
                result.add_warning(
                    FindingCode.OPTION_ELEMENT_MISSING,
                    f'Option "{option.text}" should include {label}',
                    option.line,
                )
