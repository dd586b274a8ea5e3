"""Offline lookup client backed by JSON fixture files.

Each contact lives in ``<fixture_dir>/<id>.json`` using the Clay payload
shape. Used for dry runs, demos, and tests.
"""

from __future__ import annotations

import json
from pathlib import Path

from core.clay_types import ClayContactRecord
from core.constants import DEFAULT_SEARCH_LIMIT
from core.errors import TendConfigError, TendLookupError
from sources.record_payload import contact_record_from_payload


class FixtureLookupClient:
    """Resolve contacts from a directory of JSON payloads."""

    def __init__(self, fixture_dir: Path | None) -> None:
        if fixture_dir is None or not fixture_dir.is_dir():
            raise TendConfigError(
                f"Fixture directory not found: {fixture_dir}. "
                "Set TEND_FIXTURE_DIR to a folder of <id>.json contact files."
            )
        self._fixture_dir = fixture_dir

    def get_contact_by_id(self, contact_id: int) -> ClayContactRecord:
        """Load ``<contact_id>.json``."""
        return load_contact_file(self._fixture_dir / f"{contact_id}.json")

    def search_contacts(
        self, query: str, limit: int = DEFAULT_SEARCH_LIMIT
    ) -> list[ClayContactRecord]:
        """Return fixtures whose name contains ``query``, case-insensitively."""
        needle = query.strip().lower()
        matches: list[ClayContactRecord] = []
        for fixture_path in sorted(self._fixture_dir.glob("*.json")):
            record = load_contact_file(fixture_path)
            if needle in record.name.lower() or needle in record.display_name.lower():
                matches.append(record)
            if len(matches) >= limit:
                break
        return matches

    def close(self) -> None:
        return None


def load_contact_file(fixture_path: Path) -> ClayContactRecord:
    """Read one Clay contact payload from a JSON file.

    Raises:
        TendLookupError: If the file is missing or not a valid contact payload.
    """
    if not fixture_path.is_file():
        raise TendLookupError(f"Contact fixture not found: {fixture_path}.")
    try:
        payload = json.loads(fixture_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as error:
        raise TendLookupError(f"Failed to read contact fixture {fixture_path}: {error}.") from error
    return contact_record_from_payload(payload)
