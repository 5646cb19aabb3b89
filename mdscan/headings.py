"""
mdscan/headings.py — ekstrakcja nagłówków Markdown i zakresy sekcji.

Architektura:
  tekst → body_lines() → linie
  → extract_headings() → HeadingList (z pominięciem bloków ```)
  → section_range() / children() → niejawne drzewo sekcji na płaskiej liście

Sekcja trwa od swojego nagłówka do następnego nagłówka o poziomie ≤ jej
poziomowi (albo do końca dokumentu).

Kluczowe funkcje publiczne:
  extract_headings(body, start_line) -> HeadingList
  section_range(headings, index)     -> SpanRange
  children(headings, index, level)   -> HeadingList
"""

from __future__ import annotations

from data_model.documents import Heading, HeadingList, SpanRange
from mdscan.section_patterns import FENCE_MARKER, HEADING_RE


# ---------------------------------------------------------------------------
# Publiczne API
# ---------------------------------------------------------------------------

def body_lines(text: str) -> list[str]:
    """Dzieli tekst na linie po '\\n' i usuwa końcowe '\\r' (pliki CRLF)."""
    return [line.removesuffix("\r") for line in text.split("\n")]


def extract_headings(body: str, start_line: int = 1) -> HeadingList:
    """
    Zwraca nagłówki w kolejności dokumentu.

    Args:
        body:       Treść dokumentu (bez bloku metadanych).
        start_line: Numer linii pliku odpowiadający pierwszej linii `body`.
    """
    headings: HeadingList = []
    in_code = False

    for i, line in enumerate(body_lines(body)):
        if line.lstrip().startswith(FENCE_MARKER):
            in_code = not in_code
            continue
        if in_code:
            continue

        m = HEADING_RE.match(line)
        if m:
            headings.append(Heading(
                level=len(m.group(1)),
                text=m.group(2).strip(),
                line=start_line + i,
            ))

    return headings


def section_end(headings: HeadingList, index: int) -> int:
    """Indeks następnego nagłówka o poziomie ≤ poziomowi headings[index] (lub len)."""
    level = headings[index].level
    for j in range(index + 1, len(headings)):
        if headings[j].level <= level:
            return j
    return len(headings)


def section_range(headings: HeadingList, index: int | None) -> SpanRange:
    """
    Zakres indeksów nagłówków-dzieci sekcji zaczynającej się na headings[index].

    Dla index=None (brak sekcji) zwraca pusty zakres.
    """
    if index is None:
        return SpanRange(0, 0)
    return SpanRange(index + 1, section_end(headings, index))


def children(headings: HeadingList, index: int | None, level: int) -> HeadingList:
    """Nagłówki o danym poziomie wewnątrz sekcji headings[index]."""
    span = section_range(headings, index)
    return [h for h in headings[span.start:span.end] if h.level == level]


def next_heading_line(
    headings: HeadingList,
    after_line: int,
    max_level: int,
) -> int | None:
    """Numer linii pierwszego nagłówka o poziomie ≤ max_level po linii after_line."""
    for h in headings:
        if h.line > after_line and h.level <= max_level:
            return h.line
    return None
