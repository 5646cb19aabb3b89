"""
madr/discovery.py — wyszukiwanie plików ADR i walidacja wsadowa.

Publiczne API:
  discover_files(path, pattern)          -> list[Path]
  validate_file(path, validator)         -> ValidationResult
  validate_files(paths, validator, jobs) -> list[ValidationResult]

Każdy plik jest walidowany niezależnie; kolejność wyników odpowiada
kolejności ścieżek niezależnie od liczby wątków.
"""

from __future__ import annotations

import logging
import pathlib
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable

from validator import AdrValidator, FindingCode, ValidationResult

logger = logging.getLogger(__name__)


def discover_files(path: str | pathlib.Path, pattern: str = "**/*.md") -> list[pathlib.Path]:
    """Pojedynczy plik → [plik]; katalog → pliki pasujące do wzorca glob (posortowane)."""
    root = pathlib.Path(path)
    if root.is_file():
        return [root]
    if not root.is_dir():
        return []
    return sorted(p for p in root.glob(pattern) if p.is_file())


def display_path(path: pathlib.Path) -> str:
    """Ścieżka względem bieżącego katalogu, jeśli to możliwe."""
    try:
        return path.resolve().relative_to(pathlib.Path.cwd()).as_posix()
    except ValueError:
        return path.as_posix()


def validate_file(path: pathlib.Path, validator: AdrValidator) -> ValidationResult:
    """Wczytuje i waliduje jeden plik; nieczytelny plik daje wynik z jednym błędem."""
    shown = display_path(path)
    try:
        text = path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as exc:
        logger.debug("Nie można wczytać %s: %s", shown, exc)
        result = ValidationResult(path=shown)
        result.add_error(FindingCode.READ_FAILED, f"Failed to read file: {exc}")
        return result
    return validator.validate(text, path=shown)


def validate_files(
    paths: Iterable[pathlib.Path],
    validator: AdrValidator,
    jobs: int = 1,
) -> list[ValidationResult]:
    paths = list(paths)
    if jobs <= 1 or len(paths) <= 1:
        return [validate_file(p, validator) for p in paths]

    with ThreadPoolExecutor(max_workers=jobs) as pool:
        return list(pool.map(lambda p: validate_file(p, validator), paths))
