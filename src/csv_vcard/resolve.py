from __future__ import annotations

import logging
from datetime import datetime, timezone

from dateutil import parser as date_parser

from .fields import DEFAULT_CATALOG, FieldCatalog, infer_email_kind, infer_phone_kind
from .model import ContactRecord, Email, Phone, PhoneKind, ResolvedContact

logger = logging.getLogger(__name__)


def _get_text(record: ContactRecord, column: str) -> str | None:
    """Trimmed value of ``column``, or None when absent or blank."""
    raw = record.get(column)
    if raw is None:
        return None
    value = str(raw).strip()
    return value or None


def _parse_timestamp(raw: str | None) -> datetime | None:
    if raw is None:
        return None
    try:
        parsed = date_parser.parse(raw)
        if parsed.tzinfo is None:
            return parsed.replace(tzinfo=timezone.utc)
        return parsed.astimezone(timezone.utc)
    except (ValueError, OverflowError):
        # unparseable, or an offset that cannot be moved to UTC
        logger.debug("Unparseable timestamp %r ignored", raw)
        return None


def _resolve_name(record: ContactRecord, catalog: FieldCatalog) -> tuple[str | None, str | None, str | None]:
    given = _get_text(record, catalog.given_name)
    family = _get_text(record, catalog.family_name)
    display = _get_text(record, catalog.display_name)
    if display is None:
        display = " ".join(p for p in (given, family) if p).strip() or None
    return display, given, family


def _phone_candidates(record: ContactRecord, catalog: FieldCatalog) -> list[Phone]:
    out: list[Phone] = []
    for number_col, type_col in catalog.indexed_phone_columns():
        number = _get_text(record, number_col)
        if number:
            out.append(Phone(number, PhoneKind.from_token(_get_text(record, type_col))))
    for column in catalog.phone_columns:
        number = _get_text(record, column)
        if number:
            out.append(Phone(number, infer_phone_kind(column)))
    return out


def dedupe_phones(phones: list[Phone]) -> list[Phone]:
    """Keep one entry per distinct trimmed number; the first one seen wins."""
    seen: set[str] = set()
    out: list[Phone] = []
    for p in phones:
        key = p.number.strip()
        if key in seen:
            logger.debug("Duplicate phone %r dropped", key)
            continue
        seen.add(key)
        out.append(p)
    return out


def _emails(record: ContactRecord, catalog: FieldCatalog) -> list[Email]:
    out: list[Email] = []
    for column in catalog.email_columns:
        address = _get_text(record, column)
        if address:
            out.append(Email(address, infer_email_kind(column)))
    return out


def resolve(record: ContactRecord, catalog: FieldCatalog = DEFAULT_CATALOG) -> ResolvedContact:
    """Extract a normalised contact from one CSV row.

    Never raises for bad data: anything missing, blank or unparseable is
    simply left unset on the result.
    """
    display, given, family = _resolve_name(record, catalog)
    country = _get_text(record, catalog.country)
    return ResolvedContact(
        display_name=display,
        given_name=given,
        family_name=family,
        phones=dedupe_phones(_phone_candidates(record, catalog)),
        emails=_emails(record, catalog),
        skype_handle=_get_text(record, catalog.skype_handle),
        website=_get_text(record, catalog.website),
        note=_get_text(record, catalog.note),
        avatar_url=_get_text(record, catalog.avatar_url),
        country=country.upper() if country else None,
        created_at=_parse_timestamp(_get_text(record, catalog.created_at)),
    )
