from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

from rapidfuzz import fuzz, process
from rich.columns import Columns
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .convert import Conversion
from .fields import FieldCatalog

console = Console()

# ── Palette ────────────────────────────────────────────────────────────────────
_ACCENT  = "#4d9fff"
_GREEN   = "#3ecf8e"
_AMBER   = "#f0a500"
_RED     = "#f05c5c"
_TEXT    = "#c9d1e0"
_DIM     = "#546075"
_BORDER  = "#2a3347"

_INDEXED = re.compile(r"^(?P<prefix>.+)\[(?P<idx>\d+)\]\.(?P<part>number|type)$")


# ── Column detection ───────────────────────────────────────────────────────────

@dataclass
class ColumnMatch:
    column: str
    attribute: str | None   # None: column is not read at all


def _indexed_attribute(column: str, catalog: FieldCatalog) -> str | None:
    m = _INDEXED.match(column)
    if not m or m["prefix"] not in catalog.indexed_phone_prefixes:
        return None
    if int(m["idx"]) >= catalog.phone_index_limit:
        return None
    return "phone" if m["part"] == "number" else "phone type"


def detect_columns(header: list[str], catalog: FieldCatalog) -> list[ColumnMatch]:
    """Map each header column to the attribute it feeds, in header order."""
    singles = {col: attr for attr, col in catalog.single_columns().items()}
    out: list[ColumnMatch] = []
    for column in header:
        if column in singles:
            attr = singles[column]
        elif column in catalog.phone_columns:
            attr = "phone"
        elif column in catalog.email_columns:
            attr = "email"
        else:
            attr = _indexed_attribute(column, catalog)
        out.append(ColumnMatch(column, attr))
    return out


def suggest_columns(header: list[str], catalog: FieldCatalog, threshold: float = 85.0) -> dict[str, str]:
    """Closest known column name for each unrecognised column, if close enough."""
    known = [
        *catalog.single_columns().values(),
        *catalog.phone_columns,
        *catalog.email_columns,
    ]
    suggestions: dict[str, str] = {}
    for match in detect_columns(header, catalog):
        if match.attribute is not None:
            continue
        best = process.extractOne(
            match.column.lower(),
            known,
            scorer=fuzz.ratio,
            processor=str.lower,
            score_cutoff=threshold,
        )
        if best:
            suggestions[match.column] = best[0]
    return suggestions


def print_detection(path: Path, header: list[str], catalog: FieldCatalog) -> None:
    matches = detect_columns(header, catalog)
    suggestions = suggest_columns(header, catalog)

    t = Table(title=f"Columns in {path.name}", show_lines=False, border_style=_BORDER)
    t.add_column("Column", style="bold")
    t.add_column("Read as")
    t.add_column("Did you mean", style=f"dim {_AMBER}")
    for m in matches:
        read_as = Text(m.attribute, style=_GREEN) if m.attribute else Text("ignored", style=f"dim {_DIM}")
        t.add_row(m.column, read_as, suggestions.get(m.column, ""))
    console.print(t)

    recognised = sum(1 for m in matches if m.attribute)
    console.print(
        f"  [bold]{recognised}[/bold] of {len(matches)} column(s) recognised"
        + (f", [{_AMBER}]{len(suggestions)} near miss(es)[/]" if suggestions else "")
    )


# ── Summary ────────────────────────────────────────────────────────────────────

def _stat_panel(value: str, label: str, colour: str) -> Panel:
    body = Text()
    body.append(f"{value}\n", style=f"bold {colour}")
    body.append(label, style=f"dim {_DIM}")
    return Panel(body, border_style=_BORDER, padding=(0, 2), expand=True)


def print_summary(
    *,
    conversions: list[Conversion],
    written: int,
    failures: list[tuple[int, str]],
    out_path: Path,
) -> None:
    phones = sum(len(c.contact.phones) for c in conversions)
    emails = sum(len(c.contact.emails) for c in conversions)
    unnamed = sum(1 for c in conversions if not c.contact.display_name)

    console.print()
    console.print(Text("  CONVERSION SUMMARY", style=f"dim {_DIM}"))
    console.print()
    row1 = Columns([
        _stat_panel(str(written), "contacts written", _ACCENT),
        _stat_panel(str(len(failures)), "failed", _RED if failures else _GREEN),
    ], equal=True, expand=True)
    row2 = Columns([
        _stat_panel(str(phones), "phone numbers", _TEXT),
        _stat_panel(str(emails), "email addresses", _TEXT),
        _stat_panel(str(unnamed), "without a name", _AMBER if unnamed else _TEXT),
    ], equal=True, expand=True)
    console.print(row1)
    console.print(row2)

    if failures:
        console.print()
        for row, reason in failures:
            console.print(f"  [{_RED}]✗ row {row}:[/] {reason}")

    console.print()
    console.print(f"  [dim]Output →[/dim] [bold]{out_path}[/bold]")
    console.print()
