from __future__ import annotations

from datetime import timezone

from .model import EmailKind, PhoneKind, ResolvedContact

CRLF = "\r\n"

# Backslash must go first so later replacements are not escaped twice.
_NOTE_ESCAPES: tuple[tuple[str, str], ...] = (
    ("\\", "\\\\"),
    (",", "\\,"),
    (";", "\\;"),
    ("\r", ""),
    ("\n", "\\n"),
)


def escape_text(value: str) -> str:
    for old, new in _NOTE_ESCAPES:
        value = value.replace(old, new)
    return value


def _tel_type(kind: PhoneKind | str) -> str:
    token = getattr(kind, "value", kind).upper()
    return token if token in ("CELL", "HOME", "WORK") else "VOICE"


def _email_type(kind: EmailKind | str) -> str:
    token = getattr(kind, "value", kind).upper()
    return token if token in ("HOME", "WORK") else "INTERNET"


def render_lines(contact: ResolvedContact) -> list[str]:
    """vCard 3.0 property lines for one contact, in fixed emission order."""
    c = contact
    lines = ["BEGIN:VCARD", "VERSION:3.0"]

    if c.display_name:
        lines.append(f"FN:{c.display_name}")
    if c.given_name or c.family_name:
        lines.append(f"N:{c.family_name or ''};{c.given_name or ''};;;")
    if c.skype_handle:
        lines.append(f"X-SKYPE:{c.skype_handle}")
        lines.append(f"IMPP:skype:{c.skype_handle}")
    if c.website:
        lines.append(f"URL:{c.website}")
    if c.note:
        lines.append(f"NOTE:{escape_text(c.note)}")
    if c.avatar_url:
        lines.append(f"PHOTO;VALUE=URI:{c.avatar_url}")

    for p in c.phones:
        lines.append(f"TEL;TYPE={_tel_type(p.kind)}:{p.number}")
    for e in c.emails:
        lines.append(f"EMAIL;TYPE={_email_type(e.kind)}:{e.address}")

    if c.country:
        lines.append(f"ADR:;;;;;;{c.country}")
    if c.created_at:
        rev = c.created_at
        rev = rev.replace(tzinfo=timezone.utc) if rev.tzinfo is None else rev.astimezone(timezone.utc)
        lines.append(
            f"REV:{rev.year:04d}{rev.month:02d}{rev.day:02d}"
            f"T{rev.hour:02d}{rev.minute:02d}{rev.second:02d}Z"
        )

    lines.append("END:VCARD")
    return lines


def render(contact: ResolvedContact) -> str:
    """One vCard block, lines joined with CRLF, no trailing line break."""
    return CRLF.join(render_lines(contact))
