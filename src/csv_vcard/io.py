from __future__ import annotations

import csv
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_ENCODING = "utf-8-sig"  # strips a leading BOM from the first header


def read_records(path: Path, encoding: str = DEFAULT_ENCODING) -> list[dict[str, str | None]]:
    """Read every row of a CSV file as a column -> value mapping.

    Header order is preserved. Raises FileNotFoundError when ``path`` does
    not exist.
    """
    with path.open("r", encoding=encoding, newline="") as fh:
        reader = csv.DictReader(fh)
        records = [dict(row) for row in reader]
    logger.debug("%s: %d record(s), columns=%s", path.name, len(records), reader.fieldnames)
    return records


def read_header(path: Path, encoding: str = DEFAULT_ENCODING) -> list[str]:
    """Column names from the header row (empty for an empty file)."""
    with path.open("r", encoding=encoding, newline="") as fh:
        reader = csv.DictReader(fh)
        return list(reader.fieldnames or [])


def collect_csv_sources(directory: Path) -> list[Path]:
    """Return all .csv files found directly inside directory, sorted by name."""
    if not directory.is_dir():
        return []
    return sorted(p for p in directory.iterdir() if p.suffix.lower() == ".csv")
