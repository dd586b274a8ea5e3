"""Clay JSON payload parsing.

This module converts raw Clay contact payloads into typed records.
Only identity is strict; every other field falls back to an empty default.
"""

from __future__ import annotations

from typing import Any, Mapping

from core.clay_types import (
    ClayContactRecord,
    ClayEducationEntry,
    ClayInteractionHistory,
    ClayWorkEntry,
)
from core.errors import TendLookupError


def contact_record_from_payload(payload: object) -> ClayContactRecord:
    """Deserialize a Clay contact payload.

    Args:
        payload: Decoded JSON value returned by a lookup.

    Returns:
        Parsed contact record.

    Raises:
        TendLookupError: If the payload is not a contact object with id and name.
    """
    if not isinstance(payload, Mapping):
        raise TendLookupError(
            f"Invalid Clay contact payload: expected JSON object, got {type(payload).__name__}."
        )
    contact_id = _strict_id(payload.get("id"))
    name = payload.get("name")
    if not isinstance(name, str) or not name.strip():
        raise TendLookupError(f"Invalid Clay contact payload for id {contact_id}: missing name.")
    return ClayContactRecord(
        id=contact_id,
        name=name.strip(),
        display_name=_text(payload.get("displayName")) or name.strip(),
        avatar_url=_optional_text(payload.get("avatarURL")),
        is_memorialized=bool(payload.get("isMemorialized", False)),
        bio=_optional_text(payload.get("bio")),
        location=_optional_text(payload.get("location")),
        birthday=_optional_text(payload.get("birthday")),
        emails=_text_tuple(payload.get("emails")),
        phone_numbers=_text_tuple(payload.get("phone_numbers")),
        social_links=_text_tuple(payload.get("social_links")),
        work_history=tuple(
            _work_entry(item) for item in _mapping_list(payload.get("work_history"))
        ),
        education_history=tuple(
            _education_entry(item) for item in _mapping_list(payload.get("education_history"))
        ),
        score=_number(payload.get("score")),
        interaction_history=_history(payload.get("interaction_history")),
        message_history=_history(payload.get("message_history")),
        email_history=_history(payload.get("email_history")),
        event_history=_history(payload.get("event_history")),
        groups=_text_tuple(payload.get("groups")),
        created=_optional_text(payload.get("created")),
        url=_text(payload.get("url")),
        notes=_text_tuple(payload.get("notes")),
        integrations=_text_tuple(payload.get("integrations")),
    )


def _strict_id(value: object) -> int:
    if isinstance(value, bool):
        raise TendLookupError("Invalid Clay contact payload: id must be an integer.")
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    raise TendLookupError(f"Invalid Clay contact payload: id {value!r} is not an integer.")


def _work_entry(item: Mapping[str, Any]) -> ClayWorkEntry:
    return ClayWorkEntry(
        company=_text(item.get("company")),
        title=_text(item.get("title")),
        is_active=bool(item.get("is_active", False)),
        start_year=_optional_int(item.get("start_year")),
        end_year=_optional_int(item.get("end_year")),
    )


def _education_entry(item: Mapping[str, Any]) -> ClayEducationEntry:
    return ClayEducationEntry(
        school=_text(item.get("school")),
        degree=_optional_text(item.get("degree")),
        start_year=_optional_int(item.get("start_year")),
        end_year=_optional_int(item.get("end_year")),
    )


def _history(value: object) -> ClayInteractionHistory:
    if not isinstance(value, Mapping):
        return ClayInteractionHistory()
    count = _optional_int(value.get("count"))
    return ClayInteractionHistory(
        first_date=_optional_text(value.get("first_date")),
        last_date=_optional_text(value.get("last_date")),
        count=count or 0,
    )


def _mapping_list(value: object) -> list[Mapping[str, Any]]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, Mapping)]


def _text_tuple(value: object) -> tuple[str, ...]:
    if not isinstance(value, list):
        return ()
    return tuple(item.strip() for item in value if isinstance(item, str) and item.strip())


def _text(value: object) -> str:
    return value.strip() if isinstance(value, str) else ""


def _optional_text(value: object) -> str | None:
    return _text(value) or None


def _optional_int(value: object) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


def _number(value: object) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    return value
