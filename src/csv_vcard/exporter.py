from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from .convert import Conversion
from .filenames import sanitize
from .model import ResolvedContact
from .render import CRLF

logger = logging.getLogger(__name__)


@dataclass
class ExportResult:
    written: list[Path] = field(default_factory=list)
    failures: list[tuple[int, str]] = field(default_factory=list)  # (row, reason)


def _write_text(path: Path, text: str) -> None:
    # newline="" keeps the CRLF line endings exactly as rendered
    with path.open("w", encoding="utf-8", newline="") as fh:
        fh.write(text)


def write_single_file(blocks: Iterable[str], path: Path) -> int:
    """Write all blocks, in order, to one .vcf file separated by a blank line."""
    blocks = list(blocks)
    path.parent.mkdir(parents=True, exist_ok=True)
    text = (CRLF + CRLF).join(blocks)
    _write_text(path, text + CRLF if blocks else "")
    return len(blocks)


def candidate_name(contact: ResolvedContact, index: int) -> str:
    """Pick the string a per-contact filename is derived from."""
    if contact.display_name:
        return contact.display_name
    parts = " ".join(p for p in (contact.given_name, contact.family_name) if p)
    if parts:
        return parts
    if contact.skype_handle:
        return contact.skype_handle
    return f"contact_{index}"


def unique_path(out_dir: Path, base: str, used: set[Path]) -> Path:
    """First free ``base.vcf`` / ``base_N.vcf`` in out_dir; records it in ``used``."""
    path = out_dir / f"{base}.vcf"
    n = 1
    while path in used or path.exists():
        path = out_dir / f"{base}_{n}.vcf"
        n += 1
    used.add(path)
    return path


def write_per_contact(conversions: Iterable[Conversion], out_dir: Path) -> ExportResult:
    """Write one .vcf per contact. A failed contact is logged and skipped."""
    out_dir.mkdir(parents=True, exist_ok=True)
    result = ExportResult()
    used: set[Path] = set()
    for conv in conversions:
        base = sanitize(candidate_name(conv.contact, conv.index))
        path = unique_path(out_dir, base, used)
        try:
            _write_text(path, conv.block + CRLF)
        except (OSError, ValueError) as e:
            logger.error("Row %d: could not write %s: %s", conv.index, path, e)
            result.failures.append((conv.index, str(e)))
            continue
        result.written.append(path)
    return result
