"""
mdscan — skanowanie tekstu dokumentów ADR (Markdown + YAML frontmatter).

Interfejs publiczny:
    extract_headings   — nagłówki poza blokami kodu, z numerami linii pliku
    section_range      — zakres nagłówków-dzieci sekcji
    children           — nagłówki danego poziomu wewnątrz sekcji
    split_frontmatter  — podział dokumentu na blok metadanych i treść
"""

from .headings import (
    body_lines,
    children,
    extract_headings,
    next_heading_line,
    section_end,
    section_range,
)
from .frontmatter import FrontmatterSplit, split_frontmatter

__all__ = [
    "FrontmatterSplit",
    "body_lines",
    "children",
    "extract_headings",
    "next_heading_line",
    "section_end",
    "section_range",
    "split_frontmatter",
]
