from __future__ import annotations

import csv
import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel

from .config import DEFAULT_CONF_NAME, Settings, load_settings, write_default_config
from .convert import convert_records
from .exporter import write_per_contact, write_single_file
from .io import read_header, read_records
from .report import print_detection, print_summary

app = typer.Typer(
    no_args_is_help=True,
    add_completion=False,
    help="csv-vcard: turn contact exports (CSV) into vCard 3.0 files.",
)
console = Console()


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def default_output(input_path: Path, split: bool) -> Path:
    """contacts.csv -> contacts.vcf, or the directory contacts/ in split mode."""
    return input_path.with_suffix("") if split else input_path.with_suffix(".vcf")


# ── Shared pipeline ────────────────────────────────────────────────────────────

def run_conversion(
    input_path: Path,
    output: Path | None,
    split: bool,
    settings: Settings,
    phone_region: str | None = None,
) -> int:
    """Convert one CSV file. Returns the number of contacts that failed."""
    if not input_path.is_file():
        console.print(f"[bold red]Input file not found: {input_path}[/bold red]")
        raise typer.Exit(code=2)

    try:
        records = read_records(input_path, encoding=settings.encoding)
    except (UnicodeDecodeError, csv.Error) as e:
        console.print(f"[bold red]Could not read {input_path}: {e}[/bold red]")
        raise typer.Exit(code=2)
    console.print(f"\n[bold]Read {len(records)} row(s)[/bold] from [dim]{input_path}[/dim]")

    region = phone_region if phone_region is not None else settings.phone_region
    if region:
        console.print(f"  Formatting phones (region: [bold]{region.upper()}[/bold])…")
    conversions = convert_records(records, catalog=settings.catalog(), phone_region=region or None)

    out_path = output or default_output(input_path, split)
    try:
        if split:
            result = write_per_contact(conversions, out_path)
            written, failures = len(result.written), result.failures
        else:
            written = write_single_file((c.block for c in conversions), out_path)
            failures = []
    except OSError as e:
        console.print(f"[bold red]Could not write {out_path}: {e}[/bold red]")
        raise typer.Exit(code=1)

    print_summary(conversions=conversions, written=written, failures=failures, out_path=out_path)
    return len(failures)


# ── Commands ───────────────────────────────────────────────────────────────────

@app.command()
def convert(
    input_path: Path = typer.Argument(..., metavar="INPUT", help="CSV file to convert"),
    output: Path | None = typer.Option(
        None, "--output", "-o",
        help="Output .vcf file, or directory with --split. Defaults to next to INPUT.",
    ),
    split: bool = typer.Option(
        False, "--split", "-s",
        help="One .vcf per contact instead of a single file (also `split = true` in the config).",
    ),
    region: str | None = typer.Option(
        None, "--region", "-r",
        help="ISO-2 region for formatting phone numbers (e.g. GB, US).",
    ),
    config: Path = typer.Option(Path(DEFAULT_CONF_NAME), "--config", "-c", help="TOML config file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Convert a CSV contact export to vCard."""
    _setup_logging(verbose)
    settings = load_settings(config)
    failed = run_conversion(input_path, output, split or settings.split, settings, phone_region=region)
    if failed:
        raise typer.Exit(code=1)


@app.command()
def inspect(
    input_path: Path = typer.Argument(..., metavar="INPUT", help="CSV file to inspect"),
    config: Path = typer.Option(Path(DEFAULT_CONF_NAME), "--config", "-c", help="TOML config file"),
) -> None:
    """Show which CSV columns are recognised and what they are read as."""
    _setup_logging(False)
    if not input_path.is_file():
        console.print(f"[bold red]Input file not found: {input_path}[/bold red]")
        raise typer.Exit(code=2)
    settings = load_settings(config)
    try:
        header = read_header(input_path, encoding=settings.encoding)
    except (UnicodeDecodeError, csv.Error) as e:
        console.print(f"[bold red]Could not read {input_path}: {e}[/bold red]")
        raise typer.Exit(code=2)
    print_detection(input_path, header, settings.catalog())


@app.command("init-config")
def init_config(
    path: Path = typer.Argument(Path(DEFAULT_CONF_NAME), help="Where to write the config"),
) -> None:
    """Write a commented default config file."""
    if write_default_config(path):
        console.print(f"[green]Wrote {path}[/green]")
    else:
        console.print(Panel(f"Config already exists, left untouched: {path}", border_style="yellow"))


@app.command()
def interactive(
    config: Path = typer.Option(Path(DEFAULT_CONF_NAME), "--config", "-c", help="TOML config file"),
) -> None:
    """Pick the input file and output by answering prompts."""
    from .launcher import main as launcher_main

    _setup_logging(False)
    launcher_main(load_settings(config))


if __name__ == "__main__":
    app()
