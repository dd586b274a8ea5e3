"""Unit tests for Clay payload parsing."""

from __future__ import annotations

import pytest

from core.errors import TendLookupError
from sources.record_payload import contact_record_from_payload


def test_payload_parses_nested_histories() -> None:
    """Nested history objects should parse into typed records."""
    record = contact_record_from_payload(
        {
            "id": 5,
            "name": "Hal Finney",
            "email_history": {"count": 3, "last_date": "2026-01-01T00:00:00Z"},
            "work_history": [{"company": "PGP", "title": "Engineer", "is_active": True}],
        }
    )

    assert (record.email_history.count, record.work_history[0].company) == (3, "PGP")


def test_payload_accepts_digit_string_id() -> None:
    """Numeric string ids should be accepted."""
    assert contact_record_from_payload({"id": "42", "name": "Grace"}).id == 42


def test_payload_defaults_display_name_to_name() -> None:
    """Missing display names should fall back to the name."""
    assert contact_record_from_payload({"id": 1, "name": "Ada"}).display_name == "Ada"


def test_payload_ignores_malformed_optional_fields() -> None:
    """Wrongly typed optional fields should degrade to empty defaults."""
    record = contact_record_from_payload(
        {"id": 1, "name": "Ada", "emails": "ada@example.com", "score": "high", "groups": [3, "A"]}
    )

    assert (record.emails, record.score, record.groups) == ((), 0, ("A",))


def test_payload_without_name_is_rejected() -> None:
    """Records without a name should be rejected."""
    with pytest.raises(TendLookupError):
        contact_record_from_payload({"id": 1, "name": "  "})

    assert True


def test_payload_with_boolean_id_is_rejected() -> None:
    """Boolean ids should not be mistaken for integers."""
    with pytest.raises(TendLookupError):
        contact_record_from_payload({"id": True, "name": "Ada"})

    assert True


def test_non_object_payload_is_rejected() -> None:
    """Lists and scalars should be rejected."""
    with pytest.raises(TendLookupError, match="expected JSON object"):
        contact_record_from_payload([{"id": 1, "name": "Ada"}])

    assert True
