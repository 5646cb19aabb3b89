"""
data_model — struktury danych dokumentu ADR.

Użycie:
  from data_model import Heading, MetadataBlock, SpanRange

Moduły:
  documents — Heading, MetadataBlock, SpanRange, HeadingList
"""

from .documents import (
    Heading,
    HeadingList,
    MetadataBlock,
    SpanRange,
)

__all__ = [
    "Heading",
    "HeadingList",
    "MetadataBlock",
    "SpanRange",
]
