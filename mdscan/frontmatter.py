"""
mdscan/frontmatter.py — wykrywanie i parsowanie bloku metadanych (YAML frontmatter).

Blok zaczyna się w pierwszej linii dokumentu linią '---' i kończy kolejną
linią '---'. Brak ogranicznika otwierającego lub zamykającego oznacza brak
bloku — wtedy całym `body` jest cały dokument.

Publiczne API:
  split_frontmatter(text) -> FrontmatterSplit
"""

from __future__ import annotations

from dataclasses import dataclass

import yaml

from data_model.documents import MetadataBlock
from mdscan.headings import body_lines
from mdscan.section_patterns import FRONTMATTER_DELIMITER


@dataclass(frozen=True, slots=True)
class FrontmatterSplit:
    """
    Wynik podziału dokumentu na blok metadanych i treść.

    - block:           sparsowany blok (None gdy brak lub błąd parsowania)
    - error:           komunikat błędu parsowania YAML (None gdy brak błędu)
    - body:            treść dokumentu po bloku metadanych
    - body_start_line: numer linii pliku pierwszej linii `body`
    - unterminated:    pierwsza linia to '---', ale brak zamykającego '---'
    """

    block: MetadataBlock | None
    error: str | None
    body: str
    body_start_line: int
    unterminated: bool = False

    @property
    def present(self) -> bool:
        """Czy dokument ma zamknięty blok metadanych (nawet jeśli niepoprawny)?"""
        return self.block is not None or self.error is not None


def split_frontmatter(text: str) -> FrontmatterSplit:
    lines = body_lines(text)

    if not lines or lines[0] != FRONTMATTER_DELIMITER:
        return FrontmatterSplit(block=None, error=None, body=text, body_start_line=1)

    end_index = -1
    for i in range(1, len(lines)):
        if lines[i] == FRONTMATTER_DELIMITER:
            end_index = i
            break

    if end_index == -1:
        # niezamknięty blok traktujemy jak brak bloku
        return FrontmatterSplit(
            block=None, error=None, body=text, body_start_line=1, unterminated=True
        )

    raw       = "\n".join(lines[1:end_index])
    body      = "\n".join(lines[end_index + 1:])
    end_line  = end_index + 2  # 1-based linia tuż po zamykającym '---'

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        return FrontmatterSplit(block=None, error=str(exc), body=body, body_start_line=end_line)

    if data is None:
        data = {}
    if not isinstance(data, dict):
        return FrontmatterSplit(
            block=None,
            error=f"expected a mapping of fields, got {type(data).__name__}",
            body=body,
            body_start_line=end_line,
        )

    return FrontmatterSplit(
        block=MetadataBlock(data=data, raw=raw, end_line=end_line),
        error=None,
        body=body,
        body_start_line=end_line,
    )
