"""Canonical contact models.

This module defines the normalized contact representation that the
renderer and vault writer consume, independent of the source shape.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Literal

ContactType = Literal["person", "organization"]
ContactStatus = Literal["active", "dormant", "archived"]
Priority = Literal["high", "medium", "low"]


@dataclass(frozen=True)
class SocialAccount:
    """A social profile link with its detected platform."""

    platform: str
    url: str


@dataclass(frozen=True)
class BrainLink:
    """A TheBrain cross-reference found in contact notes."""

    brain_id: str
    thought_id: str
    thought_name: str
    url: str


@dataclass(frozen=True)
class WorkEntry:
    """Normalized work-history entry."""

    company: str
    title: str
    is_active: bool = False
    start_year: int | None = None
    end_year: int | None = None


@dataclass(frozen=True)
class EducationEntry:
    """Normalized education-history entry."""

    school: str
    degree: str | None = None
    start_year: int | None = None
    end_year: int | None = None


@dataclass(frozen=True)
class InteractionStats:
    """Interaction timestamps and per-channel counts."""

    first_interaction: datetime | None
    last_interaction: datetime | None
    message_count: int
    email_count: int
    event_count: int


@dataclass(frozen=True)
class CanonicalContact:
    """Normalized contact owned by Tend.

    Attributes:
        name: Full contact name, used for the document filename.
        display_name: Source display name when it differs from ``name``.
        contact_type: Person or organization.
        id: String form of the external identifier.
        external_id: Clay contact identifier.
        status: Inferred relationship status.
        emails: Email addresses.
        phones: Phone numbers.
        location: Free-text location.
        social_accounts: Social links with detected platforms.
        tags: Inferred tags.
        communities: Ordered community names used for folder routing.
        priority: Priority bucket derived from relationship score.
        last_contact: Most recent interaction across all channels.
        organization: Current employer.
        title: Current job title.
        industries: Industries inferred from employer names.
        work_history: Normalized work history.
        education_history: Normalized education history.
        interests: Interests inferred from notes.
        bio: Free-text biography.
        birthday: Parsed birthday.
        source_url: Clay web URL.
        avatar_url: Avatar image URL.
        relationship_score: Source relationship-strength score.
        interaction_stats: Interaction timestamps and counts.
        source_created: When the contact was added to Clay.
        integrations: Connected source integrations.
        notes: Source notes, verbatim.
        brain_links: TheBrain references parsed from notes.
    """

    name: str
    display_name: str | None
    contact_type: ContactType
    id: str
    external_id: int
    status: ContactStatus
    emails: tuple[str, ...]
    phones: tuple[str, ...]
    location: str | None
    social_accounts: tuple[SocialAccount, ...]
    tags: tuple[str, ...]
    communities: tuple[str, ...]
    priority: Priority
    last_contact: datetime | None
    organization: str | None
    title: str | None
    industries: tuple[str, ...]
    work_history: tuple[WorkEntry, ...]
    education_history: tuple[EducationEntry, ...]
    interests: tuple[str, ...]
    bio: str | None
    birthday: date | None
    source_url: str
    avatar_url: str | None
    relationship_score: float
    interaction_stats: InteractionStats
    source_created: datetime | None
    integrations: tuple[str, ...]
    notes: tuple[str, ...]
    brain_links: tuple[BrainLink, ...]
