"""Clay-to-canonical contact normalization.

This module maps a typed Clay record onto the canonical contact model and
infers status, priority, tags, industries, interests, and cross-references.
It performs no I/O, and every inference degrades to an empty value instead
of raising.
"""

from __future__ import annotations

from datetime import date, datetime, timezone
import re
from typing import Iterable, Sequence
from urllib.parse import unquote

from core.clay_types import ClayContactRecord, ClayEducationEntry, ClayWorkEntry
from core.constants import DORMANT_AFTER_DAYS, HIGH_PRIORITY_SCORE, MEDIUM_PRIORITY_SCORE
from core.contact_types import (
    BrainLink,
    CanonicalContact,
    ContactStatus,
    ContactType,
    EducationEntry,
    InteractionStats,
    Priority,
    SocialAccount,
    WorkEntry,
)

_BRAIN_LINK_PATTERN = re.compile(r"brain://api\.thebrain\.com/([^/]+)/([^/]+)/([^\s)]+)")
_ORGANIZATION_NAME_PATTERN = re.compile(
    r"\b(Inc|LLC|Corp|Company|Consulting|Group|Ltd|LLP)\b", re.IGNORECASE
)
_INDUSTRY_KEYWORDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("Technology", ("tech", "software", "google")),
    ("Finance", ("finance", "bank")),
    ("Consulting", ("consult",)),
    ("Government", ("government", "federal")),
)
_INTEREST_KEYWORDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("Bitcoin", ("bitcoin",)),
    ("Photography", ("photography",)),
    ("AI", ("ai", "artificial")),
    ("Government", ("government",)),
    ("Technology", ("tech",)),
)
_SOCIAL_PLATFORMS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("linkedin", ("linkedin.com",)),
    ("twitter", ("twitter.com", "x.com")),
    ("facebook", ("facebook.com",)),
    ("instagram", ("instagram.com",)),
    ("github", ("github.com",)),
    ("youtube", ("youtube.com", "youtu.be")),
)
_TAGGED_INTEGRATIONS = ("linkedin", "twitter", "calendar")


def normalize_contact(record: ClayContactRecord, now: datetime | None = None) -> CanonicalContact:
    """Map a Clay record to a canonical contact.

    Args:
        record: Structurally valid Clay record.
        now: Reference time for status and birthday inference; defaults to
            the current UTC time.

    Returns:
        Fully populated canonical contact.
    """
    reference_time = _as_utc(now) if now is not None else datetime.now(timezone.utc)
    last_interaction = parse_timestamp(record.interaction_history.last_date)
    return CanonicalContact(
        name=record.name,
        display_name=record.display_name
        if record.display_name and record.display_name != record.name
        else None,
        contact_type=infer_contact_type(record.name),
        id=str(record.id),
        external_id=record.id,
        status=infer_status(record.is_memorialized, last_interaction, reference_time),
        emails=record.emails,
        phones=record.phone_numbers,
        location=record.location,
        social_accounts=tuple(
            SocialAccount(platform=detect_platform(url), url=url) for url in record.social_links
        ),
        tags=infer_tags(record.integrations),
        communities=record.groups,
        priority=infer_priority(record.score),
        last_contact=latest_interaction(record),
        organization=_current_work_field(record.work_history, "company"),
        title=_current_work_field(record.work_history, "title"),
        industries=infer_industries(entry.company for entry in record.work_history),
        work_history=tuple(_normalize_work(entry) for entry in record.work_history),
        education_history=tuple(
            _normalize_education(entry) for entry in record.education_history
        ),
        interests=infer_interests(record.notes),
        bio=record.bio,
        birthday=parse_birthday(record.birthday, reference_time.year),
        source_url=record.url,
        avatar_url=record.avatar_url,
        relationship_score=record.score,
        interaction_stats=InteractionStats(
            first_interaction=parse_timestamp(record.interaction_history.first_date),
            last_interaction=last_interaction,
            message_count=record.message_history.count,
            email_count=record.email_history.count,
            event_count=record.event_history.count,
        ),
        source_created=parse_timestamp(record.created),
        integrations=record.integrations,
        notes=record.notes,
        brain_links=extract_brain_links(record.notes),
    )


def infer_status(
    is_memorialized: bool,
    last_interaction: datetime | None,
    now: datetime,
) -> ContactStatus:
    """Archived if memorialized, dormant after a year of silence, else active."""
    if is_memorialized:
        return "archived"
    if last_interaction is None:
        return "dormant"
    if (_as_utc(now) - last_interaction).days > DORMANT_AFTER_DAYS:
        return "dormant"
    return "active"


def infer_priority(score: float) -> Priority:
    """Bucket a relationship-strength score."""
    if score >= HIGH_PRIORITY_SCORE:
        return "high"
    if score >= MEDIUM_PRIORITY_SCORE:
        return "medium"
    return "low"


def infer_contact_type(name: str) -> ContactType:
    """Detect organization names by legal-entity suffixes."""
    return "organization" if _ORGANIZATION_NAME_PATTERN.search(name) else "person"


def infer_tags(integrations: Sequence[str]) -> tuple[str, ...]:
    """Base ``people`` tag plus one tag per notable integration."""
    return ("people",) + tuple(name for name in _TAGGED_INTEGRATIONS if name in integrations)


def infer_industries(companies: Iterable[str]) -> tuple[str, ...]:
    """Match employer names against the industry vocabulary."""
    return _match_keywords(" ".join(companies), _INDUSTRY_KEYWORDS)


def infer_interests(notes: Sequence[str]) -> tuple[str, ...]:
    """Match free-text notes against the interest vocabulary."""
    return _match_keywords(" ".join(notes), _INTEREST_KEYWORDS)


def detect_platform(url: str) -> str:
    """Name the social platform a profile URL belongs to."""
    for platform, domains in _SOCIAL_PLATFORMS:
        if any(domain in url for domain in domains):
            return platform
    return "other"


def extract_brain_links(notes: Sequence[str]) -> tuple[BrainLink, ...]:
    """Collect every ``brain://`` reference embedded in the notes."""
    links: list[BrainLink] = []
    for note in notes:
        for match in _BRAIN_LINK_PATTERN.finditer(note):
            links.append(
                BrainLink(
                    brain_id=match.group(1),
                    thought_id=match.group(2),
                    thought_name=unquote(match.group(3)),
                    url=match.group(0),
                )
            )
    return tuple(links)


def latest_interaction(record: ClayContactRecord) -> datetime | None:
    """Most recent of the four interaction channels, or None."""
    candidates = [
        parse_timestamp(history.last_date)
        for history in (
            record.interaction_history,
            record.message_history,
            record.email_history,
            record.event_history,
        )
    ]
    present = [moment for moment in candidates if moment is not None]
    return max(present) if present else None


def parse_timestamp(raw_value: str | None) -> datetime | None:
    """Parse an ISO-8601 timestamp into an aware UTC datetime."""
    if not raw_value:
        return None
    try:
        parsed = datetime.fromisoformat(raw_value.strip().replace("Z", "+00:00"))
    except ValueError:
        return None
    return _as_utc(parsed)


def parse_birthday(raw_value: str | None, placeholder_year: int) -> date | None:
    """Parse ``M/D`` or ``M/D/YYYY``.

    ``M/D`` gets ``placeholder_year`` since the real year is unknown.
    Anything else, including impossible dates, yields None.
    """
    if not raw_value:
        return None
    parts = [part.strip() for part in raw_value.strip().split("/")]
    if len(parts) not in (2, 3) or not all(part.isdigit() for part in parts):
        return None
    month, day = int(parts[0]), int(parts[1])
    year = int(parts[2]) if len(parts) == 3 else placeholder_year
    try:
        return date(year, month, day)
    except ValueError:
        return None


def _match_keywords(
    text: str, vocabulary: tuple[tuple[str, tuple[str, ...]], ...]
) -> tuple[str, ...]:
    haystack = text.lower()
    return tuple(
        label for label, keywords in vocabulary if any(keyword in haystack for keyword in keywords)
    )


def _current_work_field(entries: Sequence[ClayWorkEntry], field_name: str) -> str | None:
    """Read a field from the active work entry, else the first entry."""
    if not entries:
        return None
    current = next((entry for entry in entries if entry.is_active), entries[0])
    value = getattr(current, field_name) or getattr(entries[0], field_name)
    return value or None


def _normalize_work(entry: ClayWorkEntry) -> WorkEntry:
    return WorkEntry(
        company=entry.company,
        title=entry.title,
        is_active=entry.is_active,
        start_year=entry.start_year,
        end_year=entry.end_year,
    )


def _normalize_education(entry: ClayEducationEntry) -> EducationEntry:
    return EducationEntry(
        school=entry.school,
        degree=entry.degree,
        start_year=entry.start_year,
        end_year=entry.end_year,
    )


def _as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)
