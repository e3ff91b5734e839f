from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Confirm, Prompt
from rich.table import Table

from .config import Settings
from .io import collect_csv_sources

console = Console()


def _banner() -> None:
    console.print()
    console.print(
        Panel.fit(
            " csv-vcard  •  CSV contacts → vCard 3.0 ",
            style="magenta",
            border_style="bright_black",
            padding=(0, 2),
        )
    )
    console.print()


def _pick_input() -> Path | None:
    candidates = collect_csv_sources(Path.cwd())
    if candidates:
        t = Table(show_header=True, header_style="bold", box=None, padding=(0, 2))
        t.add_column("#", justify="right", style="cyan")
        t.add_column("CSV file")
        for i, p in enumerate(candidates, start=1):
            t.add_row(str(i), p.name)
        console.print(t)
        answer = Prompt.ask("Pick a number or type a path", default="1")
    else:
        answer = Prompt.ask("Path to the CSV file")

    answer = answer.strip().strip('"')
    if answer.isdigit() and candidates and 1 <= int(answer) <= len(candidates):
        return candidates[int(answer) - 1]
    path = Path(answer).expanduser()
    if not path.is_file():
        console.print(f"[red]No such file: {path}[/red]")
        return None
    return path


def main(settings: Settings | None = None) -> None:
    from .cli import default_output, run_conversion

    settings = settings or Settings()
    _banner()

    input_path = _pick_input()
    if input_path is None:
        raise typer.Exit(code=2)

    split = Confirm.ask("Write one .vcf file per contact?", default=settings.split)
    suggested = default_output(input_path, split)
    target = Prompt.ask(
        "Output directory" if split else "Output file",
        default=str(suggested),
    )

    failed = run_conversion(input_path, Path(target).expanduser(), split, settings)
    if failed:
        raise typer.Exit(code=1)
