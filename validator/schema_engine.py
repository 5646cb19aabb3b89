"""
validator/schema_engine.py — walidacja metadanych względem JSON Schema.

Silnik schematu to czysta funkcja (schema, data) -> list[SchemaViolation].
Walidator dokumentu przyjmuje dowolny obiekt zgodny z protokołem SchemaEngine;
domyślnie jsonschema_engine (jsonschema, Draft 2020-12 + sprawdzanie formatów).

Publiczne API:
  jsonschema_engine(schema, data) -> list[SchemaViolation]
  load_default_schema()           -> dict (dołączony structured-madr.schema.json)
"""

from __future__ import annotations

import functools
import json
import pathlib
from dataclasses import dataclass
from typing import Any, Protocol

import jsonschema


SCHEMA_DIR     = pathlib.Path(__file__).resolve().parent / "schemas"
DEFAULT_SCHEMA = SCHEMA_DIR / "structured-madr.schema.json"


@dataclass(frozen=True, slots=True)
class SchemaViolation:
    path: str            # JSON Pointer, np. "/tags/0"; "root" dla całego obiektu
    message: str


class SchemaEngine(Protocol):
    def __call__(self, schema: dict[str, Any], data: Any) -> list[SchemaViolation]:
        ...


def jsonschema_engine(schema: dict[str, Any], data: Any) -> list[SchemaViolation]:
    """
    Waliduje `data` względem `schema` i zwraca wszystkie naruszenia.

    Raises:
        jsonschema.SchemaError: Sam schemat jest niepoprawny.
    """
    validator_cls = jsonschema.validators.validator_for(schema, default=jsonschema.Draft202012Validator)
    validator_cls.check_schema(schema)
    validator = validator_cls(schema, format_checker=validator_cls.FORMAT_CHECKER)

    violations: list[SchemaViolation] = []
    for e in sorted(validator.iter_errors(data), key=lambda err: [str(p) for p in err.absolute_path]):
        path = (
            "/" + "/".join(str(p) for p in e.absolute_path)
            if e.absolute_path
            else "root"
        )
        violations.append(SchemaViolation(path=path, message=e.message))
    return violations


@functools.lru_cache(maxsize=1)
def _default_schema_text() -> str:
    return DEFAULT_SCHEMA.read_text(encoding="utf-8")


def load_default_schema() -> dict[str, Any]:
    """Zwraca świeżą kopię dołączonego schematu Structured MADR."""
    return json.loads(_default_schema_text())
