"""
mdscan/section_patterns.py — wzorce regex do rozpoznawania elementów dokumentu ADR.

Wszystkie wzorce dopasowują pojedynczą linię (bez znaku końca linii).
Wzorce znaczników opcji (Advantages / Disadvantages / Risk Assessment) są
budowane przez marker_pattern() i akceptują zarówno postać pogrubioną
(**Advantages**), jak i zwykłą z dwukropkiem (Advantages:). Postać zwykła musi
zaczynać słowo, więc "Disadvantages:" nie spełnia znacznika "Advantages".
"""

from __future__ import annotations

import re


def _p(pattern: str, flags: int = 0) -> re.Pattern[str]:
    return re.compile(pattern, flags | re.UNICODE)


# Ogranicznik bloku metadanych — linia składająca się wyłącznie z '---'
FRONTMATTER_DELIMITER = "---"

# Znacznik bloku kodu; każde wystąpienie przełącza stan "wewnątrz kodu"
FENCE_MARKER = "```"

# Nagłówek ATX: 1–6 znaków '#', biały znak, tekst
HEADING_RE = _p(r"^(#{1,6})\s+(.+)$")

# Tytuł H1: "ADR-{NUMER}: {TYTUŁ}"
TITLE_RE = _p(r"^ADR-(\d+):\s*(.+)$")

# Nagłówek wpisu audytu: YYYY-MM-DD
AUDIT_DATE_RE = _p(r"^\d{4}-\d{2}-\d{2}$")

# Tag: małe litery i cyfry, myślniki tylko wewnątrz
TAG_RE = _p(r"^[a-z0-9][a-z0-9-]*[a-z0-9]$|^[a-z0-9]$")


def bold_label(label: str) -> str:
    """Zwraca pogrubioną etykietę pola audytu, np. '**Status:**'."""
    return f"**{label}:**"


def label_value_pattern(label: str) -> re.Pattern[str]:
    """Wzorzec wyciągający wartość pola po pogrubionej etykiecie (np. 'Non-Compliant')."""
    return _p(re.escape(bold_label(label)) + r"\s*([\w-]+)")


def marker_pattern(label: str) -> re.Pattern[str]:
    """Wzorzec znacznika sekcji opcji: '**Label**' lub 'Label:' (bez rozróżniania wielkości liter)."""
    escaped = re.escape(label)
    return _p(rf"\*\*{escaped}\*\*|(?<![\w-]){escaped}:", re.IGNORECASE)
