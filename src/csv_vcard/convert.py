from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from .fields import DEFAULT_CATALOG, FieldCatalog
from .model import ContactRecord, ResolvedContact
from .phones import format_phones
from .render import render
from .resolve import resolve


@dataclass
class Conversion:
    index: int          # 1-based row number, header excluded
    contact: ResolvedContact
    block: str


def convert_record(
    record: ContactRecord,
    index: int,
    catalog: FieldCatalog = DEFAULT_CATALOG,
    phone_region: str | None = None,
) -> Conversion:
    contact = resolve(record, catalog)
    if phone_region:
        contact = format_phones(contact, phone_region)
    return Conversion(index=index, contact=contact, block=render(contact))


def convert_records(
    records: Iterable[ContactRecord],
    catalog: FieldCatalog = DEFAULT_CATALOG,
    phone_region: str | None = None,
) -> list[Conversion]:
    """Resolve and render every record, keeping input order."""
    return [
        convert_record(r, i, catalog=catalog, phone_region=phone_region)
        for i, r in enumerate(records, start=1)
    ]
