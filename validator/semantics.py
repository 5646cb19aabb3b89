"""
validator/semantics.py — reguły metadanych, których schemat nie wyraża.

  - updated >= created               (błąd)
  - status z dozwolonej listy        (błąd)
  - format każdego tagu              (błąd na tag)
  - powtórzone tagi                  (ostrzeżenie)
"""

from __future__ import annotations

import datetime
from typing import Any

from mdscan.section_patterns import TAG_RE

from .rules import AdrRules
from .types import FindingCode, ValidationResult


def check_metadata_semantics(
    data: dict[str, Any],
    rules: AdrRules,
    result: ValidationResult,
) -> None:
    _check_dates(data, result)
    _check_status(data, rules, result)
    _check_tags(data, result)


def _parse_date(value: Any) -> datetime.datetime | None:
    """Napis ISO (lub date/datetime z YAML) → datetime; None gdy nie da się sparsować."""
    if isinstance(value, datetime.datetime):
        return value.replace(tzinfo=None)
    if isinstance(value, datetime.date):
        return datetime.datetime.combine(value, datetime.time())
    if not isinstance(value, str):
        return None
    try:
        return datetime.datetime.fromisoformat(value.strip()).replace(tzinfo=None)
    except ValueError:
        return None  # format daty zgłasza schemat


def _check_dates(data: dict[str, Any], result: ValidationResult) -> None:
    created_raw = data.get("created")
    updated_raw = data.get("updated")
    if not created_raw or not updated_raw:
        return

    created = _parse_date(created_raw)
    updated = _parse_date(updated_raw)
    if created is None or updated is None:
        return

    if updated < created:
        result.add_error(
            FindingCode.DATE_ORDER,
            f"'updated' date ({updated_raw}) cannot be before 'created' date ({created_raw})",
        )


def _check_status(data: dict[str, Any], rules: AdrRules, result: ValidationResult) -> None:
    status = data.get("status")
    if status and status not in rules.statuses:
        result.add_error(
            FindingCode.STATUS_INVALID,
            f"Invalid status '{status}'. Must be one of: {', '.join(rules.statuses)}",
        )


def _check_tags(data: dict[str, Any], result: ValidationResult) -> None:
    tags = data.get("tags")
    if not isinstance(tags, list):
        return

    for tag in tags:
        if not isinstance(tag, str) or not TAG_RE.fullmatch(tag):
            result.add_error(
                FindingCode.TAG_INVALID,
                f"Invalid tag '{tag}'. Tags must be lowercase alphanumeric with hyphens, "
                f"no leading/trailing hyphens.",
            )

    seen: list[Any] = []
    duplicates: list[str] = []
    for tag in tags:
        if tag in seen:
            if str(tag) not in duplicates:
                duplicates.append(str(tag))
        else:
            seen.append(tag)

    if duplicates:
        result.add_warning(
            FindingCode.TAG_DUPLICATE,
            f"Duplicate tags found in frontmatter: {', '.join(duplicates)}",
        )
