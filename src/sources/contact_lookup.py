"""Contract shared by every Clay lookup client."""

from __future__ import annotations

from typing import Protocol

from core.clay_types import ClayContactRecord


class ContactLookup(Protocol):
    """Lookup operations required by the sync pipeline."""

    def get_contact_by_id(self, contact_id: int) -> ClayContactRecord: ...

    def search_contacts(self, query: str, limit: int = 10) -> list[ClayContactRecord]: ...

    def close(self) -> None: ...
