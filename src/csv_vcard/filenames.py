from __future__ import annotations

import re

FALLBACK_NAME = "Unknown_Contact"
MAX_NAME_LENGTH = 50

# Control characters other than whitespace; \t..\r are collapsed below.
_UNSAFE_CHARS = re.compile(r'[<>:"/\\|?*\x00-\x08\x0e-\x1f]')
_WHITESPACE_RUN = re.compile(r"\s+")


def sanitize(candidate: str | None) -> str:
    """Filesystem-safe base name (no extension) for a contact file."""
    if not candidate or not candidate.strip():
        return FALLBACK_NAME
    name = _UNSAFE_CHARS.sub("_", candidate)
    name = _WHITESPACE_RUN.sub("_", name)
    name = name.strip("._")
    if not name:
        return FALLBACK_NAME
    return name[:MAX_NAME_LENGTH]
