"""
madr/reporting.py — podsumowanie uruchomienia i wyjścia dla GitHub Actions.

  RunSummary.from_results(results, strict) — liczniki plików i ustaleń
  annotation(kind, message, file, line)    — linia `::error file=...::...`
  write_github_output(path, summary)       — dopisuje wyjścia do $GITHUB_OUTPUT
"""

from __future__ import annotations

import pathlib
from dataclasses import dataclass

from validator import ValidationResult


@dataclass(slots=True)
class RunSummary:
    total: int = 0
    passed: int = 0
    failed: int = 0
    errors: int = 0
    warnings: int = 0
    valid: bool = True

    @classmethod
    def from_results(cls, results: list[ValidationResult], strict: bool = False) -> "RunSummary":
        s = cls(total=len(results))
        for r in results:
            if r.valid:
                s.passed += 1
            else:
                s.failed += 1
            s.errors   += len(r.errors)
            s.warnings += len(r.warnings)
        s.valid = s.failed == 0 and (not strict or s.warnings == 0)
        return s

    def to_dict(self) -> dict[str, int | bool]:
        return {
            "valid": self.valid,
            "total": self.total,
            "passed": self.passed,
            "failed": self.failed,
            "errors": self.errors,
            "warnings": self.warnings,
        }

    def outputs(self) -> list[str]:
        return [
            f"valid={'true' if self.valid else 'false'}",
            f"total={self.total}",
            f"passed={self.passed}",
            f"failed={self.failed}",
            f"warnings={self.warnings}",
        ]


def _escape(message: str) -> str:
    return message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def annotation(kind: str, message: str, file: str | None = None, line: int | None = None) -> str:
    """Komenda przepływu pracy GitHub Actions (kind: 'error' | 'warning')."""
    params = []
    if file:
        params.append(f"file={file}")
    if file and line:
        params.append(f"line={line}")
    head = f"::{kind} {','.join(params)}" if params else f"::{kind}"
    return f"{head}::{_escape(message)}"


def write_github_output(path: str | pathlib.Path, summary: RunSummary) -> None:
    with open(path, "a", encoding="utf-8") as f:
        f.write("\n".join(summary.outputs()) + "\n")
