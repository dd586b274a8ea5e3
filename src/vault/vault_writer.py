"""Conflict-safe contact document upserts.

Each contact is written to ``<vault>/<folder>/<name>.md``. An existing
document is never overwritten or merged; a fresh copy goes to the first free
``<name>-N.md`` slot, and once every slot is taken the write is refused so a
person can resolve the duplicates.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Sequence

from core.constants import FALLBACK_FOLDER_NAME, MAX_DOCUMENT_VERSIONS
from core.contact_types import CanonicalContact
from core.errors import TendVaultError, TendVersionConflictError
from core.logging_config import get_logger
from core.types import UpsertResult
from vault.document_renderer import render_contact_document
from vault.file_naming import sanitize_filename, versioned_filename
from vault.folder_routing import route_folder

_LOGGER = get_logger(__name__)

DocumentRenderer = Callable[[CanonicalContact], str]


class VaultWriter:
    """Write canonical contacts into community folders of a vault."""

    def __init__(
        self,
        vault_path: Path,
        priority_list: Sequence[str],
        renderer: DocumentRenderer = render_contact_document,
    ) -> None:
        if not vault_path.is_dir():
            raise TendVaultError(
                f"Vault path does not exist: {vault_path}. "
                "Create the vault folder or point TEND_VAULT_PATH at an existing one."
            )
        self._vault_path = vault_path
        self._priority_list = tuple(priority_list)
        self._renderer = renderer

    @property
    def vault_path(self) -> Path:
        """Root folder of the vault."""
        return self._vault_path

    def folder_for(self, contact: CanonicalContact) -> str:
        """Return the sanitized folder name a contact routes to."""
        folder = sanitize_filename(route_folder(contact.communities, self._priority_list))
        return folder or FALLBACK_FOLDER_NAME

    def plan_upsert(self, contact: CanonicalContact) -> UpsertResult:
        """Resolve the write target without touching the filesystem.

        Args:
            contact: Contact to place.

        Returns:
            Target path, filename, folder, and whether the canonical name was free.

        Raises:
            TendVaultError: If the contact name sanitizes to nothing.
            TendVersionConflictError: If every version slot is taken.
        """
        stem = sanitize_filename(contact.name)
        if not stem:
            raise TendVaultError(
                f"Contact {contact.id} has no usable name for a filename: {contact.name!r}."
            )
        folder = self.folder_for(contact)
        folder_path = self._vault_path / folder
        for version in range(1, MAX_DOCUMENT_VERSIONS + 1):
            filename = versioned_filename(stem, version)
            target_path = folder_path / filename
            if not target_path.exists():
                return UpsertResult(
                    path=str(target_path),
                    filename=filename,
                    folder=folder,
                    was_created=version == 1,
                )
        raise TendVersionConflictError(
            f'Too many versions of "{stem}" exist ({MAX_DOCUMENT_VERSIONS}+ versions found) '
            f"in {folder_path}. Manual resolution needed. Files: "
            f"{versioned_filename(stem, 1)} through "
            f"{versioned_filename(stem, MAX_DOCUMENT_VERSIONS)}"
        )

    def upsert(self, contact: CanonicalContact) -> UpsertResult:
        """Render and write one contact document.

        Raises:
            TendVaultError: If the document cannot be written.
            TendVersionConflictError: If every version slot is taken.
        """
        result = self.plan_upsert(contact)
        document = self._renderer(contact)
        target_path = Path(result.path)
        try:
            target_path.parent.mkdir(parents=True, exist_ok=True)
            target_path.write_text(document, encoding="utf-8")
        except OSError as error:
            raise TendVaultError(
                f"Failed to write contact document {target_path}: {error}. "
                "Check vault permissions and free space."
            ) from error
        _LOGGER.info(
            "vault_document_written",
            contact_id=contact.id,
            folder=result.folder,
            filename=result.filename,
            was_created=result.was_created,
        )
        return result
