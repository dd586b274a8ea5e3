"""Unit tests for Clay contact normalization."""

from __future__ import annotations

from datetime import date, datetime, timezone

from core.clay_types import ClayContactRecord, ClayInteractionHistory, ClayWorkEntry
from ingest.normalizer import (
    detect_platform,
    extract_brain_links,
    infer_contact_type,
    infer_interests,
    infer_priority,
    infer_status,
    normalize_contact,
    parse_birthday,
    parse_timestamp,
)
from sources.fixture_client import load_contact_file
from tests.fixture_paths import fixture_path

_NOW = datetime(2026, 10, 1, tzinfo=timezone.utc)


def test_priority_boundary_high() -> None:
    """Score 80 should be high priority."""
    assert infer_priority(80) == "high"


def test_priority_boundary_medium() -> None:
    """Score 79 should be medium priority."""
    assert infer_priority(79) == "medium"


def test_priority_boundary_low() -> None:
    """Score 39 should be low priority."""
    assert infer_priority(39) == "low"


def test_status_archived_when_memorialized() -> None:
    """Memorialized contacts should be archived regardless of recency."""
    assert infer_status(True, _NOW, _NOW) == "archived"


def test_status_dormant_without_interactions() -> None:
    """Contacts without any interaction should be dormant."""
    assert infer_status(False, None, _NOW) == "dormant"


def test_status_dormant_after_a_year() -> None:
    """Interactions older than 365 days should mean dormant."""
    last_interaction = datetime(2025, 9, 30, tzinfo=timezone.utc)

    assert infer_status(False, last_interaction, _NOW) == "dormant"


def test_status_active_within_a_year() -> None:
    """Recent interactions should mean active."""
    last_interaction = datetime(2026, 9, 1, tzinfo=timezone.utc)

    assert infer_status(False, last_interaction, _NOW) == "active"


def test_contact_type_detects_organizations() -> None:
    """Legal-entity suffixes should mark organizations."""
    assert (infer_contact_type("Acme Consulting LLC"), infer_contact_type("Ada Lovelace")) == (
        "organization",
        "person",
    )


def test_birthday_without_year_uses_placeholder() -> None:
    """Month/day birthdays should take the placeholder year."""
    assert parse_birthday("3/14", 2026) == date(2026, 3, 14)


def test_birthday_with_year_is_kept() -> None:
    """Full birthdays should keep their year."""
    assert parse_birthday("12/10/1815", 2026) == date(1815, 12, 10)


def test_birthday_invalid_is_none() -> None:
    """Impossible or malformed birthdays should be dropped."""
    assert (parse_birthday("2/30", 2026), parse_birthday("March 3", 2026)) == (None, None)


def test_parse_timestamp_handles_zulu_suffix() -> None:
    """Trailing Z should parse as UTC."""
    assert parse_timestamp("2026-05-01T09:30:00Z") == datetime(
        2026, 5, 1, 9, 30, tzinfo=timezone.utc
    )


def test_parse_timestamp_invalid_is_none() -> None:
    """Unparseable timestamps should degrade to None."""
    assert parse_timestamp("yesterday") is None


def test_interest_substring_matching() -> None:
    """Keyword matching should be substring based."""
    assert infer_interests(["Said he would email me"]) == ("AI",)


def test_detect_platform_maps_x_to_twitter() -> None:
    """x.com links should be treated as twitter."""
    assert detect_platform("https://x.com/ada") == "twitter"


def test_extract_brain_links_decodes_thought_name() -> None:
    """Brain references should yield decoded thought names."""
    links = extract_brain_links(["ref brain://api.thebrain.com/b1/t2/Deep%20Work here"])

    assert (links[0].brain_id, links[0].thought_id, links[0].thought_name) == (
        "b1",
        "t2",
        "Deep Work",
    )


def test_normalize_fixture_contact() -> None:
    """Fixture contact should map onto the canonical model."""
    record = load_contact_file(fixture_path("contacts/7.json"))

    contact = normalize_contact(record, now=_NOW)

    assert (
        contact.id,
        contact.priority,
        contact.status,
        contact.organization,
        contact.tags,
        contact.communities,
    ) == ("7", "high", "active", "Analytical Software Ltd", ("people", "linkedin", "calendar"), (
        "Friends",
    ))


def test_normalize_uses_latest_interaction_across_channels() -> None:
    """Last contact should be the newest date across all channels."""
    record = load_contact_file(fixture_path("contacts/7.json"))

    contact = normalize_contact(record, now=_NOW)

    assert contact.last_contact == datetime(2026, 9, 10, 8, tzinfo=timezone.utc)


def test_normalize_industries_from_companies() -> None:
    """Industries should be inferred from employer names."""
    record = ClayContactRecord(
        id=1,
        name="Sam",
        work_history=(
            ClayWorkEntry(company="First National Bank", title="Analyst"),
            ClayWorkEntry(company="Google", title="Engineer", is_active=True),
        ),
    )

    contact = normalize_contact(record, now=_NOW)

    assert (contact.industries, contact.organization) == (("Technology", "Finance"), "Google")


def test_normalize_minimal_record_degrades_to_empty_values() -> None:
    """A bare record should normalize without errors."""
    contact = normalize_contact(ClayContactRecord(id=3, name="Solo"), now=_NOW)

    assert (
        contact.status,
        contact.priority,
        contact.birthday,
        contact.organization,
        contact.tags,
    ) == ("dormant", "low", None, None, ("people",))


def test_display_name_dropped_when_same_as_name() -> None:
    """Display name should only be kept when it differs from the name."""
    record = ClayContactRecord(
        id=4,
        name="Kim",
        display_name="Kim",
        interaction_history=ClayInteractionHistory(last_date="2026-09-01T00:00:00Z"),
    )

    assert normalize_contact(record, now=_NOW).display_name is None
