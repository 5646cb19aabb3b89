"""
validator/normalizer.py — normalizacja metadanych przed walidacją schematu.

normalize_metadata():
  - Zwraca głęboką kopię metadanych (oryginał z MetadataBlock nie jest zmieniany).
  - YAML zamienia gołe daty (2024-01-15) na datetime.date — zamieniamy je
    z powrotem na napisy ISO, bo schemat opisuje daty jako string/format=date.
  - Nie zmienia pozostałych wartości.
"""

from __future__ import annotations

import copy
import datetime
from typing import Any


def normalize_metadata(data: dict[str, Any]) -> dict[str, Any]:
    """Zwraca głęboką kopię metadanych z datami zamienionymi na napisy ISO."""
    return _normalize_value(copy.deepcopy(data))


def _normalize_value(value: Any) -> Any:
    if isinstance(value, datetime.date):
        return value.isoformat()
    if isinstance(value, dict):
        return {k: _normalize_value(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_normalize_value(v) for v in value]
    return value
