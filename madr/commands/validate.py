"""Komenda: madr validate — waliduje pliki ADR względem formatu Structured MADR."""

from __future__ import annotations

import argparse
import json
import pathlib
import sys

import jsonschema
import yaml
from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from madr._config import RunConfig
from madr.discovery import discover_files, validate_files
from madr.reporting import RunSummary, annotation, write_github_output
from validator import AdrRules, AdrValidator, ValidationResult, load_default_schema
from validator.schema_engine import DEFAULT_SCHEMA


def _load_schema(path: str | None, console: Console) -> dict | None:
    if path is None:
        return load_default_schema()

    schema_path = pathlib.Path(path)
    if not schema_path.exists():
        console.print(f"[red]Brak pliku schematu:[/red] {schema_path}")
        raise SystemExit(2)
    try:
        schema = json.loads(schema_path.read_text(encoding="utf-8"))
        jsonschema.validators.validator_for(schema).check_schema(schema)
    except (json.JSONDecodeError, jsonschema.SchemaError) as exc:
        console.print(f"[red]Niepoprawny schemat {schema_path.name}:[/red] {exc}")
        raise SystemExit(2)
    return schema


def _load_rules(path: str | None, console: Console) -> AdrRules:
    if path is None:
        return AdrRules.default()
    try:
        return AdrRules.from_file(path)
    except (OSError, yaml.YAMLError, ValueError) as exc:
        console.print(f"[red]Niepoprawny plik reguł {path}:[/red] {exc}")
        raise SystemExit(2)


def _print_result(result: ValidationResult, console: Console) -> None:
    if result.valid and not result.warnings:
        console.print(f"[green]✓[/green] {escape(str(result.path))}")
        return
    if result.valid:
        console.print(f"[yellow]⚠[/yellow] {escape(str(result.path))} ({len(result.warnings)} warning(s))")
    else:
        console.print(f"[red]✗[/red] {escape(str(result.path))} ({len(result.errors)} error(s))")

    table = Table(box=box.SIMPLE, show_header=True, header_style="bold")
    table.add_column("Kod",    style="yellow", no_wrap=True)
    table.add_column("Linia",  style="cyan",   justify="right")
    table.add_column("Komunikat")

    for e in result.errors:
        table.add_row(f"[red]{e.code}[/red]", str(e.line or ""), escape(e.message))
    for w in result.warnings:
        table.add_row(str(w.code), str(w.line or ""), escape(w.message))

    console.print(table)


def run(args: argparse.Namespace) -> None:
    # w trybie JSON stdout jest zarezerwowany dla raportu
    console = Console(stderr=args.json_output)
    notes   = sys.stderr if args.json_output else sys.stdout

    try:
        cfg = RunConfig.from_env()
    except ValueError as exc:
        console.print(f"[red]Niepoprawna konfiguracja:[/red] {escape(str(exc))}")
        raise SystemExit(2)

    path          = args.path or cfg.path
    pattern       = args.pattern or cfg.pattern
    strict        = cfg.strict if args.strict is None else args.strict
    fail_on_error = cfg.fail_on_error if args.fail_on_error is None else args.fail_on_error
    jobs          = args.jobs or cfg.jobs
    annotations   = args.annotations or cfg.annotations

    # --- Schemat i reguły -------------------------------------------------
    schema = None if args.no_schema else _load_schema(args.schema or cfg.schema, console)
    rules  = _load_rules(args.rules or cfg.rules, console)

    # --- Pliki ------------------------------------------------------------
    files = discover_files(path, pattern)
    if not files:
        console.print(
            f"[yellow]Nie znaleziono plików ADR:[/yellow] {pathlib.Path(path) / pattern}"
        )
        if annotations:
            print(annotation("warning", f"No ADR files found matching pattern: {pathlib.Path(path) / pattern}"), file=notes)
        summary = RunSummary()
        if cfg.github_output:
            write_github_output(cfg.github_output, summary)
        if args.json_output:
            print(json.dumps({"summary": summary.to_dict(), "results": []}, indent=2))
        return

    console.print(f"\nWalidacja {len(files)} plik(ów) ADR...\n")

    # --- Walidacja --------------------------------------------------------
    validator = AdrValidator(schema, rules)
    results   = validate_files(files, validator, jobs)
    summary   = RunSummary.from_results(results, strict)

    for result in results:
        _print_result(result, console)
        if annotations:
            for e in result.errors:
                print(annotation("error", e.message, result.path, e.line), file=notes)
            for w in result.warnings:
                print(annotation("warning", w.message, result.path, w.line), file=notes)

    console.print("\n---")
    console.print(
        f"Razem: {summary.total} | Poprawne: {summary.passed} | Błędne: {summary.failed}"
    )
    console.print(f"Błędy: {summary.errors} | Ostrzeżenia: {summary.warnings}")

    if cfg.github_output:
        write_github_output(cfg.github_output, summary)

    # --- Wyjście JSON (opcjonalnie) --------------------------------------
    if args.json_output:
        out = {
            "summary": summary.to_dict(),
            "results": [r.to_dict() for r in results],
        }
        print(json.dumps(out, ensure_ascii=False, indent=2))

    if not summary.valid and fail_on_error:
        sys.exit(1)


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "validate",
        help="Waliduje pliki ADR względem formatu Structured MADR.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description=f"""\
Waliduje pliki ADR (etapy A–H):

  A  Blok metadanych      (YAML frontmatter między liniami ---)
  B  JSON Schema          (metadane względem schematu)
  C  Semantyka metadanych (daty, status, tagi)
  D  Tytuł                (# ADR-{{NUMER}}: {{TYTUŁ}})
  E  Sekcje               (obecność i kolejność sekcji ##)
  F  Podsekcje            (wymagane ### w Context, Decision Drivers, Consequences)
  G  Audyt                (wpisy ### YYYY-MM-DD i pola **Status:** itd.)
  H  Opcje                (Advantages / Disadvantages / Risk Assessment)

Domyślny schemat JSON: {DEFAULT_SCHEMA.name} (dołączony do pakietu)
Zmienne środowiskowe: INPUT_PATH, INPUT_PATTERN, INPUT_SCHEMA, INPUT_RULES,
  INPUT_STRICT, INPUT_FAIL_ON_ERROR, INPUT_JOBS, GITHUB_OUTPUT, GITHUB_ACTIONS

Przykłady:
  madr validate
  madr validate docs/decisions --strict
  madr validate docs/adr/adr-0007.md --json-output
  madr validate docs/decisions --schema schemas/custom.schema.json --jobs 4
        """,
    )
    p.add_argument(
        "path",
        nargs="?",
        default=None,
        metavar="ŚCIEŻKA",
        help="Plik ADR lub katalog (domyślnie: $INPUT_PATH lub docs/decisions).",
    )
    p.add_argument(
        "--pattern", "-p",
        default=None,
        metavar="GLOB",
        help="Wzorzec plików w katalogu (domyślnie: **/*.md).",
    )
    p.add_argument(
        "--schema", "-s",
        default=None,
        metavar="PLIK",
        help=f"Schemat JSON metadanych (domyślnie: {DEFAULT_SCHEMA.name}).",
    )
    p.add_argument(
        "--no-schema",
        action="store_true",
        help="Pomiń walidację metadanych względem schematu JSON.",
    )
    p.add_argument(
        "--rules", "-r",
        default=None,
        metavar="PLIK",
        help="Plik YAML z własnym zestawem reguł strukturalnych.",
    )
    p.add_argument(
        "--strict",
        action="store_true",
        default=None,
        help="Ostrzeżenia również powodują niepowodzenie.",
    )
    p.add_argument(
        "--no-fail-on-error",
        dest="fail_on_error",
        action="store_false",
        default=None,
        help="Nie zwracaj kodu wyjścia 1 przy błędach.",
    )
    p.add_argument(
        "--jobs", "-j",
        type=int,
        default=None,
        metavar="N",
        help="Liczba równoległych wątków walidacji (domyślnie: 1).",
    )
    p.add_argument(
        "--annotations",
        action="store_true",
        help="Wypisz adnotacje GitHub Actions (::error / ::warning).",
    )
    p.add_argument(
        "--json-output",
        action="store_true",
        help="Wypisz raport walidacji jako JSON na stdout.",
    )
    p.set_defaults(func=run)
