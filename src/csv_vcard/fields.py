"""Catalogs of recognised column names.

Detection is data-driven: each catalog is an ordered tuple consulted front to
back, so adding support for another export format means adding names here,
not branches in the resolver.
"""
from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from typing import Any

from .model import EmailKind, PhoneKind

# Indexed phone arrays are scanned for i in range(PHONE_INDEX_LIMIT) only.
PHONE_INDEX_LIMIT = 10

INDEXED_PHONE_PREFIXES: tuple[str, ...] = ("phones", "profile.phones")

PHONE_COLUMNS: tuple[str, ...] = (
    "phone",
    "phone_number",
    "telephone",
    "mobile",
    "mobile_phone",
    "cell",
    "cell_phone",
    "home_phone",
    "work_phone",
    "business_phone",
    "profile.phone",
    "profile.mobile",
    "profile.mobile_phone",
    "profile.home_phone",
    "profile.work_phone",
    "profile.business_phone",
    "contact.phone",
    "contact.mobile",
    "contact.mobile_phone",
    "contact.home_phone",
    "contact.work_phone",
    "contact.business_phone",
)

EMAIL_COLUMNS: tuple[str, ...] = (
    "email",
    "mail",
    "email_address",
    "home_email",
    "work_email",
    "business_email",
    "profile.email",
    "profile.mail",
    "profile.home_email",
    "profile.work_email",
    "contact.email",
    "contact.mail",
    "contact.home_email",
    "contact.work_email",
)

# (substring, kind) pairs, first match wins; matched case-insensitively
# against the column name.
PHONE_KIND_RULES: tuple[tuple[str, PhoneKind], ...] = (
    ("mobile", PhoneKind.CELL),
    ("cell", PhoneKind.CELL),
    ("home", PhoneKind.HOME),
    ("work", PhoneKind.WORK),
    ("business", PhoneKind.WORK),
)

EMAIL_KIND_RULES: tuple[tuple[str, EmailKind], ...] = (
    ("home", EmailKind.HOME),
    ("work", EmailKind.WORK),
    ("business", EmailKind.WORK),
)


def infer_phone_kind(column: str) -> PhoneKind:
    name = column.lower()
    for needle, kind in PHONE_KIND_RULES:
        if needle in name:
            return kind
    return PhoneKind.VOICE


def infer_email_kind(column: str) -> EmailKind:
    name = column.lower()
    for needle, kind in EMAIL_KIND_RULES:
        if needle in name:
            return kind
    return EmailKind.INTERNET


@dataclass(frozen=True)
class FieldCatalog:
    """Where each contact attribute is read from."""

    display_name: str = "display_name"
    given_name: str = "profile.name.first"
    family_name: str = "profile.name.surname"
    skype_handle: str = "profile.skype_handle"
    website: str = "profile.website"
    note: str = "profile.about"
    avatar_url: str = "profile.avatar_url"
    country: str = "profile.location.country"
    created_at: str = "creation_time"
    phone_columns: tuple[str, ...] = PHONE_COLUMNS
    email_columns: tuple[str, ...] = EMAIL_COLUMNS
    indexed_phone_prefixes: tuple[str, ...] = INDEXED_PHONE_PREFIXES
    phone_index_limit: int = field(default=PHONE_INDEX_LIMIT)

    def single_columns(self) -> dict[str, str]:
        """Attribute name -> column name for every one-column attribute."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if isinstance(getattr(self, f.name), str)
        }

    def indexed_phone_columns(self) -> list[tuple[str, str]]:
        """(number column, type column) pairs in scan order."""
        pairs: list[tuple[str, str]] = []
        for prefix in self.indexed_phone_prefixes:
            for i in range(self.phone_index_limit):
                pairs.append((f"{prefix}[{i}].number", f"{prefix}[{i}].type"))
        return pairs

    def with_columns(self, overrides: dict[str, Any]) -> FieldCatalog:
        """Return a copy with single-column names replaced.

        Keys that are not single-column attributes are ignored, as are
        blank values.
        """
        known = self.single_columns()
        clean = {
            k: str(v).strip()
            for k, v in overrides.items()
            if k in known and str(v).strip()
        }
        return replace(self, **clean) if clean else self


DEFAULT_CATALOG = FieldCatalog()
