"""
data_model/documents.py — model nagłówków i bloku metadanych dokumentu ADR.

Heading odpowiada jednej linii nagłówka Markdown; lista nagłówków w kolejności
dokumentu tworzy HeadingList. Sekcje nie są materializowane jako drzewo —
reprezentuje je SpanRange, czyli zakres indeksów na HeadingList.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class Heading:
    level: int           # liczba znaków '#' (1..6)
    text: str            # tekst nagłówka po strip()
    line: int            # 1-based numer linii w pliku


@dataclass(frozen=True, slots=True)
class MetadataBlock:
    """
    Sparsowany blok metadanych (YAML frontmatter) z początku dokumentu.

    - data:     słownik klucz → wartość po yaml.safe_load
    - raw:      surowy tekst pomiędzy ogranicznikami '---'
    - end_line: numer linii pierwszej linii treści (tuż po zamykającym '---');
                od niego liczone są numery linii nagłówków
    """

    data: dict[str, Any] = field(default_factory=dict)
    raw: str = ""
    end_line: int = 1


@dataclass(frozen=True, slots=True)
class SpanRange:
    start: int           # indeks pierwszego nagłówka w zakresie (włącznie)
    end: int             # indeks końca zakresu (wyłącznie)

    def __len__(self) -> int:
        return max(0, self.end - self.start)


# Nagłówki w kolejności dokumentu.
HeadingList = list[Heading]
