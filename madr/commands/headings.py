"""Komenda: madr headings — wypisuje nagłówki dokumentu ADR tak, jak widzi je walidator."""

from __future__ import annotations

import argparse
import pathlib

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from mdscan import extract_headings, split_frontmatter

console = Console()


def run(args: argparse.Namespace) -> None:
    path = pathlib.Path(args.file)
    if not path.exists():
        console.print(f"[red]Brak pliku:[/red] {path}")
        raise SystemExit(1)

    text     = path.read_text(encoding="utf-8-sig")
    split    = split_frontmatter(text)
    headings = extract_headings(split.body, split.body_start_line)

    if split.block is not None:
        console.print(
            f"[dim]Metadane: {len(split.block.data)} pól, treść od linii {split.body_start_line}[/dim]"
        )
    elif split.error is not None:
        console.print(f"[yellow]Niepoprawny blok metadanych:[/yellow] {escape(split.error)}")
    else:
        console.print("[yellow]Brak bloku metadanych.[/yellow]")

    if args.max_level:
        headings = [h for h in headings if h.level <= args.max_level]

    table = Table(box=box.SIMPLE, show_header=True, header_style="bold")
    table.add_column("Linia",   style="cyan", justify="right")
    table.add_column("Poziom",  style="dim",  justify="right")
    table.add_column("Nagłówek")

    for h in headings:
        indent = "  " * (h.level - 1)
        table.add_row(str(h.line), str(h.level), f"{indent}{'#' * h.level} {escape(h.text)}")

    console.print(table)
    console.print(f"[dim]{len(headings)} nagłówek(ów)[/dim]")


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "headings",
        help="Wypisuje nagłówki dokumentu (z pominięciem bloków kodu).",
    )
    p.add_argument(
        "file",
        metavar="PLIK",
        help="Ścieżka do pliku ADR (Markdown).",
    )
    p.add_argument(
        "--max-level",
        type=int,
        default=None,
        metavar="N",
        help="Pokaż tylko nagłówki o poziomie ≤ N.",
    )
    p.set_defaults(func=run)
