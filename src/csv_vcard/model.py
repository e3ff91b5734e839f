from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Mapping, Optional

# One CSV row: column name -> raw value. csv.DictReader yields None for
# columns missing from a short row.
ContactRecord = Mapping[str, Optional[str]]


class PhoneKind(str, Enum):
    CELL = "CELL"
    HOME = "HOME"
    WORK = "WORK"
    VOICE = "VOICE"

    @classmethod
    def from_token(cls, token: str | None) -> PhoneKind:
        """Map a free-form type token (``home``, ``Cell`` …) to a kind."""
        if not token:
            return cls.VOICE
        return _PHONE_TOKENS.get(token.strip().lower(), cls.VOICE)


_PHONE_TOKENS = {
    "cell": PhoneKind.CELL,
    "home": PhoneKind.HOME,
    "work": PhoneKind.WORK,
}


class EmailKind(str, Enum):
    INTERNET = "INTERNET"
    HOME = "HOME"
    WORK = "WORK"


@dataclass
class Phone:
    number: str
    kind: PhoneKind = PhoneKind.VOICE


@dataclass
class Email:
    address: str
    kind: EmailKind = EmailKind.INTERNET


@dataclass
class ResolvedContact:
    display_name: str | None = None
    given_name: str | None = None
    family_name: str | None = None
    phones: list[Phone] = field(default_factory=list)
    emails: list[Email] = field(default_factory=list)
    skype_handle: str | None = None
    website: str | None = None
    note: str | None = None           # unescaped; the renderer escapes it
    avatar_url: str | None = None
    country: str | None = None        # upper-cased as read, not an ISO lookup
    created_at: datetime | None = None  # always UTC-aware
