"""Konfiguracja uruchomienia walidatora — zmienne środowiskowe w stylu GitHub Actions.

Opcjonalnie plik .env w bieżącym katalogu:
  INPUT_PATH=docs/decisions
  INPUT_STRICT=true
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import find_dotenv, load_dotenv


def _int_env(name: str, default: str) -> int:
    raw = os.getenv(name) or default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


@dataclass(slots=True)
class RunConfig:
    path:          str
    pattern:       str
    schema:        str | None      # None → dołączony schemat
    rules:         str | None      # None → reguły domyślne
    strict:        bool
    fail_on_error: bool
    jobs:          int
    github_output: str | None
    annotations:   bool

    @classmethod
    def from_env(cls) -> "RunConfig":
        """Zgłasza ValueError, gdy INPUT_JOBS nie jest liczbą całkowitą."""
        load_dotenv(find_dotenv(usecwd=True), override=False)
        return cls(
            path          = os.getenv("INPUT_PATH",    "docs/decisions"),
            pattern       = os.getenv("INPUT_PATTERN", "**/*.md"),
            schema        = os.getenv("INPUT_SCHEMA") or None,
            rules         = os.getenv("INPUT_RULES") or None,
            strict        = os.getenv("INPUT_STRICT", "false").lower() == "true",
            fail_on_error = os.getenv("INPUT_FAIL_ON_ERROR", "true").lower() != "false",
            jobs          = max(1, _int_env("INPUT_JOBS", "1")),
            github_output = os.getenv("GITHUB_OUTPUT") or None,
            annotations   = os.getenv("GITHUB_ACTIONS", "false").lower() == "true",
        )
