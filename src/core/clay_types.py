"""Typed external contact records.

These models mirror the Clay contact payload after the lookup client has
unwrapped its transport shape. The normalizer consumes them once.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace


@dataclass(frozen=True)
class ClayWorkEntry:
    """One work-history entry."""

    company: str
    title: str
    is_active: bool = False
    start_year: int | None = None
    end_year: int | None = None


@dataclass(frozen=True)
class ClayEducationEntry:
    """One education-history entry."""

    school: str
    degree: str | None = None
    start_year: int | None = None
    end_year: int | None = None


@dataclass(frozen=True)
class ClayInteractionHistory:
    """First/last timestamps and a count for one interaction channel."""

    first_date: str | None = None
    last_date: str | None = None
    count: int = 0


@dataclass(frozen=True)
class ClayContactRecord:
    """Full contact record returned by a Clay lookup."""

    id: int
    name: str
    display_name: str = ""
    avatar_url: str | None = None
    is_memorialized: bool = False
    bio: str | None = None
    location: str | None = None
    birthday: str | None = None
    emails: tuple[str, ...] = ()
    phone_numbers: tuple[str, ...] = ()
    social_links: tuple[str, ...] = ()
    work_history: tuple[ClayWorkEntry, ...] = ()
    education_history: tuple[ClayEducationEntry, ...] = ()
    score: float = 0
    interaction_history: ClayInteractionHistory = field(default_factory=ClayInteractionHistory)
    message_history: ClayInteractionHistory = field(default_factory=ClayInteractionHistory)
    email_history: ClayInteractionHistory = field(default_factory=ClayInteractionHistory)
    event_history: ClayInteractionHistory = field(default_factory=ClayInteractionHistory)
    groups: tuple[str, ...] = ()
    created: str | None = None
    url: str = ""
    notes: tuple[str, ...] = ()
    integrations: tuple[str, ...] = ()

    def with_groups(self, groups: tuple[str, ...]) -> "ClayContactRecord":
        """Return a copy whose community groups are replaced."""
        return replace(self, groups=groups)
