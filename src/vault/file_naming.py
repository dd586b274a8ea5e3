"""Filename sanitization for vault documents."""

from __future__ import annotations

import re

from core.constants import DOCUMENT_EXTENSION, ILLEGAL_FILENAME_CHARACTERS, MAX_FILENAME_LENGTH

_ILLEGAL_PATTERN = re.compile(f"[{re.escape(ILLEGAL_FILENAME_CHARACTERS)}]")
_WHITESPACE_PATTERN = re.compile(r"\s+")
_EDGE_PATTERN = re.compile(r"^[\s.]+|[\s.]+$")


def sanitize_filename(name: str) -> str:
    """Turn a display name into a filesystem-safe file stem.

    Illegal characters are removed, whitespace runs collapse to one space,
    leading/trailing dots and spaces are stripped, and the result is capped
    at ``MAX_FILENAME_LENGTH`` characters.

    Args:
        name: Contact display name.

    Returns:
        Sanitized stem, possibly empty.
    """
    sanitized = _ILLEGAL_PATTERN.sub("", name.strip())
    sanitized = _WHITESPACE_PATTERN.sub(" ", sanitized)
    sanitized = _EDGE_PATTERN.sub("", sanitized)
    if len(sanitized) > MAX_FILENAME_LENGTH:
        sanitized = _EDGE_PATTERN.sub("", sanitized[:MAX_FILENAME_LENGTH])
    return sanitized


def build_filename(name: str) -> str:
    """Return the document filename for a contact name."""
    return f"{sanitize_filename(name)}{DOCUMENT_EXTENSION}"


def versioned_filename(stem: str, version: int) -> str:
    """Return ``stem.md`` for version 1 and ``stem-N.md`` otherwise."""
    if version <= 1:
        return f"{stem}{DOCUMENT_EXTENSION}"
    return f"{stem}-{version}{DOCUMENT_EXTENSION}"
