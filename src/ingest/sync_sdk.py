"""Python SDK for contact sync operations.

This module exposes high-level APIs for batch syncs, single-contact
syncs, and checkpoint inspection backed by the ingest pipeline.
"""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path
import time
from typing import Callable

from core.config import TendConfig
from core.types import BatchSyncOptions, BatchSyncResult, UpsertResult
from ingest.checkpoint_store import CheckpointStore
from ingest.pipeline import sync_batch, sync_contact_by_name, sync_fixture_file
from ingest.run_journal import RunJournal
from sources.contact_lookup import ContactLookup


class TendClient:
    """Primary SDK entry point for sync workflows."""

    def __init__(
        self,
        config: TendConfig | None = None,
        lookup: ContactLookup | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """Create SDK client.

        Args:
            config: Optional runtime configuration.
            lookup: Optional lookup client shared across calls. When omitted,
                each call builds and closes its own client from config.
            sleep: Delay function used between batch lookups.
        """
        self._config = config or TendConfig.from_env()
        self._lookup = lookup
        self._sleep = sleep

    @property
    def config(self) -> TendConfig:
        """Active runtime configuration."""
        return self._config

    def with_vault(self, vault_path: Path) -> "TendClient":
        """Return a client writing into another vault."""
        config = replace(self._config, vault_path=vault_path.expanduser().resolve())
        return TendClient(config, lookup=self._lookup, sleep=self._sleep)

    def sync_batch(
        self,
        options: BatchSyncOptions,
        journal: RunJournal | None = None,
    ) -> BatchSyncResult:
        """Sync a CSV contact list into the vault.

        Args:
            options: Batch sync options.
            journal: Optional run journal override.

        Returns:
            Run summary with per-row outcomes.

        Raises:
            TendError: On any fatal configuration, input, checkpoint, or vault error.
        """
        return sync_batch(
            options,
            self._config,
            lookup=self._lookup,
            journal=journal,
            sleep=self._sleep,
        )

    def sync_contact_by_name(self, name: str) -> UpsertResult:
        """Search Clay for ``name`` and write the best match."""
        return sync_contact_by_name(name, self._config, lookup=self._lookup)

    def sync_fixture(self, fixture_path: Path) -> UpsertResult:
        """Write the document for a contact stored in a JSON file."""
        return sync_fixture_file(fixture_path, self._config)

    def read_checkpoint(self) -> int:
        """Return the stored batch checkpoint (0 when absent)."""
        return CheckpointStore(self._config.data_root).read()

    def reset_checkpoint(self) -> None:
        """Delete the stored batch checkpoint."""
        CheckpointStore(self._config.data_root).reset()
