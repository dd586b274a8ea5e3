"""Sync orchestration.

This module coordinates batch loading, checkpoint-aware selection,
contact lookups, normalization, and vault writes for resumable
batch runs and single-contact syncs.
"""

from __future__ import annotations

from pathlib import Path
import time
from typing import Callable

from core.clay_types import ClayContactRecord
from core.config import TendConfig
from core.errors import TendConfigError, TendLookupError
from core.logging_config import get_logger
from core.types import BatchSyncOptions, BatchSyncResult, IngestionRow, UpsertResult
from ingest.batch_reader import parse_batch_rows, read_batch_text
from ingest.checkpoint_store import CheckpointStore
from ingest.fetch_executor import RateLimitedFetchExecutor
from ingest.normalizer import normalize_contact
from ingest.row_selection import select_pending_rows
from ingest.run_journal import RunJournal
from sources.contact_lookup import ContactLookup
from sources.fixture_client import load_contact_file
from sources.lookup_factory import build_lookup_client
from vault.folder_routing import load_priority_list
from vault.vault_writer import VaultWriter

_LOGGER = get_logger(__name__)


class BatchSyncRunner:
    """Stateful runner for one resumable batch sync."""

    def __init__(
        self,
        options: BatchSyncOptions,
        config: TendConfig,
        lookup: ContactLookup,
        journal: RunJournal,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._options = options
        self._config = config
        self._lookup = lookup
        self._journal = journal
        self._sleep = sleep
        self._checkpoint = CheckpointStore(config.data_root)

    def run(self) -> BatchSyncResult:
        """Execute the batch and return its summary."""
        validate_batch_options(self._options)
        writer = _build_vault_writer(self._config)
        checkpoint = self._reset_or_read_checkpoint()
        rows = parse_batch_rows(read_batch_text(self._options.source_uri, self._config))
        self._journal.record(
            "Batch Loaded", f"{len(rows)} rows from {self._options.source_uri}"
        )
        selection = select_pending_rows(
            rows,
            checkpoint=checkpoint,
            start_sequence=self._options.start_sequence,
            batch_size=self._options.batch_size,
        )
        _LOGGER.info(
            "batch_selection_ready",
            source_uri=self._options.source_uri,
            total_rows=len(rows),
            pending_rows=len(selection.rows_to_process),
            skipped_rows=selection.skipped_count,
            resume_after=selection.resume_after,
            dry_run=self._options.dry_run,
        )
        executor = RateLimitedFetchExecutor(
            lookup=self._lookup,
            checkpoint_store=self._checkpoint,
            delay_seconds=self._config.request_delay_seconds,
            journal=self._journal,
            sleep=self._sleep,
        )
        return executor.execute(
            selection.rows_to_process,
            _build_record_processor(writer, self._options.dry_run),
            dry_run=self._options.dry_run,
            skipped_checkpointed=selection.skipped_count,
        )

    def _reset_or_read_checkpoint(self) -> int:
        """Apply a requested reset and return the checkpoint to select from.

        Dry runs leave the stored checkpoint in place and select as if it
        had been reset.
        """
        if not self._options.reset_checkpoint:
            return self._checkpoint.read()
        if self._options.dry_run:
            self._journal.record("Would Reset Checkpoint", str(self._checkpoint.path))
            return 0
        self._checkpoint.reset()
        self._journal.record("Checkpoint Reset", str(self._checkpoint.path))
        return 0


def validate_batch_options(options: BatchSyncOptions) -> None:
    """Validate batch options before any checkpoint or vault access.

    Raises:
        TendConfigError: If batch size or start sequence is below 1.
    """
    if options.batch_size is not None and options.batch_size < 1:
        raise TendConfigError(
            f"Invalid batch_size {options.batch_size}: expected value >= 1. "
            "Pass a positive --batch-size or omit it."
        )
    if options.start_sequence is not None and options.start_sequence < 1:
        raise TendConfigError(
            f"Invalid start_sequence {options.start_sequence}: expected value >= 1. "
            "Pass a positive --start-from or omit it."
        )


def sync_batch(
    options: BatchSyncOptions,
    config: TendConfig,
    lookup: ContactLookup | None = None,
    journal: RunJournal | None = None,
    sleep: Callable[[float], None] = time.sleep,
) -> BatchSyncResult:
    """Run a resumable batch sync from a CSV contact list.

    Args:
        options: Batch sync options.
        config: Runtime configuration.
        lookup: Optional lookup client; built from config when omitted.
        journal: Optional run journal; written to ``config.resolve_journal_path()``
            when omitted.
        sleep: Delay function used between lookups.

    Returns:
        Run summary with per-row outcomes.

    Raises:
        TendConfigError: If options, the vault, the priority list, or the
            journal location are invalid.
        TendIngestError: If the batch input is missing, empty, or malformed.
        TendCheckpointError: If the checkpoint cannot be reset or written.
        TendVersionConflictError: If a contact has exhausted its version slots.
    """
    owns_lookup = lookup is None
    active_lookup = lookup or build_lookup_client(config)
    try:
        runner = BatchSyncRunner(
            options,
            config,
            lookup=active_lookup,
            journal=journal or RunJournal(config.resolve_journal_path()),
            sleep=sleep,
        )
        return runner.run()
    finally:
        if owns_lookup:
            active_lookup.close()


def sync_contact_by_name(
    name: str,
    config: TendConfig,
    lookup: ContactLookup | None = None,
) -> UpsertResult:
    """Search for one contact by name and write its document.

    An exact (case-insensitive) name match wins over the first search hit.

    Raises:
        TendLookupError: If the search returns no contacts.
    """
    writer = _build_vault_writer(config)
    owns_lookup = lookup is None
    active_lookup = lookup or build_lookup_client(config)
    try:
        matches = active_lookup.search_contacts(name)
        if not matches:
            raise TendLookupError(
                f"No contact found matching '{name}'. Check the spelling and retry."
            )
        chosen = _pick_match(name, matches)
        record = active_lookup.get_contact_by_id(chosen.id)
    finally:
        if owns_lookup:
            active_lookup.close()
    return _write_record(writer, record)


def sync_fixture_file(fixture_path: Path, config: TendConfig) -> UpsertResult:
    """Write the document for a contact stored in a local JSON file."""
    writer = _build_vault_writer(config)
    return _write_record(writer, load_contact_file(fixture_path))


def _build_vault_writer(config: TendConfig) -> VaultWriter:
    return VaultWriter(config.require_vault_path(), load_priority_list(config.priority_file))


def _build_record_processor(
    writer: VaultWriter, dry_run: bool
) -> Callable[[IngestionRow, ClayContactRecord], UpsertResult]:
    """Bind the vault writer into the executor's per-row callback."""

    def process_record(row: IngestionRow, record: ClayContactRecord) -> UpsertResult:
        contact = normalize_contact(record)
        if dry_run:
            return writer.plan_upsert(contact)
        return writer.upsert(contact)

    return process_record


def _write_record(writer: VaultWriter, record: ClayContactRecord) -> UpsertResult:
    result = writer.upsert(normalize_contact(record))
    _LOGGER.info(
        "contact_synced",
        contact_id=record.id,
        folder=result.folder,
        filename=result.filename,
        was_created=result.was_created,
    )
    return result


def _pick_match(name: str, matches: list[ClayContactRecord]) -> ClayContactRecord:
    wanted = name.strip().lower()
    for record in matches:
        if record.name.strip().lower() == wanted:
            return record
    return matches[0]
