"""Markdown document rendering for canonical contacts.

A document is YAML front matter followed by a Markdown body. The body has
system sections regenerated on every sync, a horizontal rule, and
placeholder sections reserved for the user.
"""

from __future__ import annotations

from datetime import date, datetime, timezone

import yaml

from core.contact_types import CanonicalContact

_USER_SECTIONS = ("Notes", "Family Notes")


def render_contact_document(contact: CanonicalContact, today: date | None = None) -> str:
    """Render the complete document text for one contact.

    Args:
        contact: Canonical contact to render.
        today: Date stamped into ``updated``; defaults to the current UTC date.

    Returns:
        Document text with front matter and body.
    """
    render_date = today or datetime.now(timezone.utc).date()
    front_matter = render_front_matter(contact, render_date)
    return f"---\n{front_matter}\n---\n\n{render_body(contact)}"


def render_front_matter(contact: CanonicalContact, today: date) -> str:
    """Serialize contact metadata as YAML front matter (without fences)."""
    created = _iso(contact.source_created) or today.isoformat()
    fields: dict[str, object] = {
        "name": contact.name,
        "type": contact.contact_type,
        "clayId": contact.external_id,
        "status": contact.status,
        "created": created,
        "updated": today.isoformat(),
    }
    optional_fields: dict[str, object] = {
        "email": list(contact.emails),
        "phone": list(contact.phones),
        "location": contact.location,
        "social": {account.platform: account.url for account in contact.social_accounts},
        "tags": list(contact.tags),
        "priority": contact.priority,
        "lastContact": _iso(contact.last_contact),
        "organization": contact.organization,
        "title": contact.title,
        "industry": list(contact.industries),
        "interests": list(contact.interests),
        "birthday": contact.birthday.isoformat() if contact.birthday else None,
    }
    fields.update({key: value for key, value in optional_fields.items() if value})
    fields["clayUrl"] = contact.source_url
    fields["clayCreated"] = created
    if contact.integrations:
        fields["clayIntegrations"] = list(contact.integrations)
    stats = contact.interaction_stats
    fields["relationshipScore"] = _score(contact.relationship_score)
    fields["interactions"] = {
        "first": _iso(stats.first_interaction) or "",
        "last": _iso(stats.last_interaction) or "",
        "messageCount": stats.message_count,
        "emailCount": stats.email_count,
        "eventCount": stats.event_count,
    }
    return yaml.safe_dump(
        fields,
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=False,
    ).strip()


def render_body(contact: CanonicalContact) -> str:
    """Render the Markdown body sections."""
    sections = [_links_section(contact), _contact_details_section(contact)]
    if contact.work_history:
        sections.append(_work_history_section(contact))
    if contact.education_history:
        sections.append(_education_section(contact))
    sections.append(_interaction_section(contact))
    if contact.notes:
        sections.append(_notes_section(contact))
    sections.append("---\n")
    sections.extend(
        f"## {heading}\n\n[User notes - preserved across syncs]" for heading in _USER_SECTIONS
    )
    return "\n\n".join(sections)


def _links_section(contact: CanonicalContact) -> str:
    lines = [
        "## Links",
        "",
        "[[400 People and Relationships MOC | People and Relationships]]",
        "[[++Home | Index]]",
    ]
    if contact.brain_links:
        lines.extend(["", "### TheBrain References"])
        lines.extend(f"- [[{link.thought_name}]]" for link in contact.brain_links)
    return "\n".join(lines) + "\n"


def _contact_details_section(contact: CanonicalContact) -> str:
    rows: list[str] = []
    if contact.emails:
        rows.append(f"| Email | {', '.join(contact.emails)} |")
    if contact.phones:
        rows.append(f"| Phone | {', '.join(contact.phones)} |")
    if contact.location:
        rows.append(f"| Location | {contact.location} |")
    if contact.organization or contact.title:
        organization = f" @ {contact.organization}" if contact.organization else ""
        rows.append(f"| Role | {contact.title or ''}{organization} |")
    if contact.birthday:
        rows.append(f"| Birthday | {contact.birthday.strftime('%b')} {contact.birthday.day} |")
    if contact.social_accounts:
        links = " · ".join(
            f"[{account.platform.capitalize()}]({account.url})"
            for account in contact.social_accounts
        )
        rows.append(f"| Social | {links} |")
    content = "## Contact Details\n\n"
    if rows:
        content += "| | |\n|---|---|\n" + "\n".join(rows)
    else:
        content += "[No contact details available]"
    if contact.bio:
        content += f"\n\n**About:**\n{contact.bio}"
    return content


def _work_history_section(contact: CanonicalContact) -> str:
    lines = ["## Work History", ""]
    for work in contact.work_history:
        entry = f"- {work.title} @ {work.company}"
        if work.is_active:
            entry += " (current)"
        elif work.start_year and work.end_year:
            entry += f" [{work.start_year}-{work.end_year}]"
        elif work.start_year:
            entry += f" [since {work.start_year}]"
        lines.append(entry)
    return "\n".join(lines) + "\n"


def _education_section(contact: CanonicalContact) -> str:
    lines = ["## Education", ""]
    for education in contact.education_history:
        entry = education.school
        if education.degree:
            entry += f" - {education.degree}"
        if education.start_year and education.end_year:
            entry += f" [{education.start_year}-{education.end_year}]"
        elif education.start_year:
            entry += f" [{education.start_year}]"
        lines.append(f"- {entry}")
    return "\n".join(lines) + "\n"


def _interaction_section(contact: CanonicalContact) -> str:
    stats = contact.interaction_stats
    content = "## Interaction History\n\n"
    content += f"**Relationship Score:** {_score(contact.relationship_score)}/100\n\n"
    if stats.first_interaction:
        content += f"**First Interaction:** {_iso(stats.first_interaction)}\n\n"
    if stats.last_interaction:
        content += f"**Last Interaction:** {_iso(stats.last_interaction)}\n\n"
    if stats.message_count > 0 or stats.email_count > 0 or stats.event_count > 0:
        content += "**Activity:**\n"
        if stats.email_count > 0:
            content += f"- {stats.email_count} emails exchanged\n"
        if stats.message_count > 0:
            content += f"- {stats.message_count} messages\n"
        if stats.event_count > 0:
            content += f"- {stats.event_count} calendar events\n"
        content += "\n"
    return content


def _notes_section(contact: CanonicalContact) -> str:
    lines = ["## Clay Notes", ""]
    lines.extend(f"- {note}" for note in contact.notes)
    return "\n".join(lines) + "\n"


def _iso(moment: datetime | None) -> str | None:
    return moment.date().isoformat() if moment else None


def _score(score: float) -> int | float:
    return int(score) if float(score).is_integer() else score
