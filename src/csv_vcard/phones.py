from __future__ import annotations

import logging
from dataclasses import replace

import phonenumbers
from phonenumbers import NumberParseException

from .model import Phone, ResolvedContact
from .resolve import dedupe_phones

logger = logging.getLogger(__name__)


def _format_international(num: phonenumbers.PhoneNumber) -> str:
    """Pretty international form with spaces only, e.g. +44 7980 220 220."""
    intl = phonenumbers.format_number(num, phonenumbers.PhoneNumberFormat.INTERNATIONAL)
    out = intl.replace("-", " ").replace("(", "").replace(")", "")
    return " ".join(out.split())


def format_number(raw: str, region: str) -> str:
    """Format ``raw`` for ``region``; numbers that do not validate come back unchanged."""
    try:
        parsed = phonenumbers.parse(raw, region.upper())
    except NumberParseException:
        return raw
    if phonenumbers.is_possible_number(parsed) and phonenumbers.is_valid_number(parsed):
        return _format_international(parsed)
    return raw


def format_phones(contact: ResolvedContact, region: str) -> ResolvedContact:
    """Return a copy of ``contact`` with its numbers in international format.

    Two raw spellings of the same number can format identically, so the
    result is deduplicated again.
    """
    formatted: list[Phone] = []
    for p in contact.phones:
        new = format_number(p.number, region)
        if new != p.number:
            logger.debug("Phone %r -> %r", p.number, new)
        formatted.append(Phone(new, p.kind))
    return replace(contact, phones=dedupe_phones(formatted))
