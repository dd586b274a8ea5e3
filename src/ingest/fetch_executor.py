"""Sequential, rate-limited contact fetching.

The executor resolves ingestion rows one at a time, sleeps a fixed delay
between lookups, and advances the checkpoint only after a row has been
fully written. Row failures are isolated: they are logged and counted, and
the loop moves on.

Checkpoint contract: the stored value is always the highest sequence of
the contiguous run of successful rows. Once a row fails, later rows in the
same run are still processed but no longer move the checkpoint, so the
failed row is retried on the next invocation.
"""

from __future__ import annotations

import time
from typing import Callable, Sequence

from core.clay_types import ClayContactRecord
from core.errors import TendCheckpointError, TendVersionConflictError
from core.logging_config import get_logger
from core.types import BatchSyncResult, IngestionRow, RowOutcome, UpsertResult
from ingest.checkpoint_store import CheckpointStore
from ingest.run_journal import NullRunJournal, RunJournal
from sources.contact_lookup import ContactLookup

_LOGGER = get_logger(__name__)

_FATAL_ERRORS = (TendCheckpointError, TendVersionConflictError)

RecordProcessor = Callable[[IngestionRow, ClayContactRecord], UpsertResult]


class RateLimitedFetchExecutor:
    """Resolve rows to Clay records and hand them to a processor."""

    def __init__(
        self,
        lookup: ContactLookup,
        checkpoint_store: CheckpointStore,
        delay_seconds: float,
        journal: RunJournal | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._lookup = lookup
        self._checkpoint_store = checkpoint_store
        self._delay_seconds = delay_seconds
        self._journal = journal or NullRunJournal()
        self._sleep = sleep

    def execute(
        self,
        rows: Sequence[IngestionRow],
        process_record: RecordProcessor,
        dry_run: bool = False,
        skipped_checkpointed: int = 0,
    ) -> BatchSyncResult:
        """Process rows in order.

        Args:
            rows: Rows already filtered past the checkpoint and batch-limited.
            process_record: Normalizes and writes (or plans) one record.
            dry_run: Report outcomes as planned and never write the checkpoint.
            skipped_checkpointed: Count of rows filtered out before this call.

        Returns:
            Run summary with per-row outcomes.

        Raises:
            TendCheckpointError: If the checkpoint cannot be persisted.
            TendVersionConflictError: If a contact has exhausted its version slots.
        """
        checkpoint = self._checkpoint_store.read()
        contiguous = True
        outcomes: list[RowOutcome] = []
        succeeded = 0
        failed = 0
        for index, row in enumerate(rows):
            if index > 0:
                self._sleep(self._delay_seconds)
            try:
                record = self._fetch(row)
                result = process_record(row, record)
            except _FATAL_ERRORS:
                raise
            except Exception as error:
                failed += 1
                contiguous = False
                outcomes.append(self._record_failure(row, error))
                continue
            succeeded += 1
            if not dry_run and contiguous and row.sequence > checkpoint:
                self._checkpoint_store.write(row.sequence)
                checkpoint = row.sequence
            outcomes.append(self._record_success(row, record, result, dry_run))
        self._journal.record_summary(succeeded, failed)
        _LOGGER.info(
            "batch_completed",
            succeeded=succeeded,
            failed=failed,
            checkpoint=checkpoint,
            dry_run=dry_run,
        )
        return BatchSyncResult(
            succeeded=succeeded,
            failed=failed,
            skipped_checkpointed=skipped_checkpointed,
            checkpoint=checkpoint,
            dry_run=dry_run,
            outcomes=tuple(outcomes),
        )

    def _fetch(self, row: IngestionRow) -> ClayContactRecord:
        """Look up one row and apply its group override."""
        self._journal.record_lookup("getContact", {"contact_id": row.external_id})
        record = self._lookup.get_contact_by_id(row.external_id)
        if row.groups:
            record = record.with_groups(row.groups)
        return record

    def _record_success(
        self,
        row: IngestionRow,
        record: ClayContactRecord,
        result: UpsertResult,
        dry_run: bool,
    ) -> RowOutcome:
        action = "Would create" if dry_run else ("Created" if result.was_created else "Versioned")
        message = f"{action}: {result.folder}/{result.filename}"
        self._journal.record_contact(record.name, succeeded=True, message=message)
        _LOGGER.info(
            "batch_row_synced",
            sequence=row.sequence,
            contact_id=row.external_id,
            folder=result.folder,
            filename=result.filename,
            was_created=result.was_created,
            dry_run=dry_run,
        )
        return RowOutcome(
            sequence=row.sequence,
            external_id=row.external_id,
            status="planned" if dry_run else "synced",
            path=result.path,
            message=message,
        )

    def _record_failure(self, row: IngestionRow, error: Exception) -> RowOutcome:
        message = f"{type(error).__name__}: {error}"
        self._journal.record_contact(row.display_name, succeeded=False, message=message)
        _LOGGER.warning(
            "batch_row_failed",
            sequence=row.sequence,
            contact_id=row.external_id,
            error=message,
        )
        return RowOutcome(
            sequence=row.sequence,
            external_id=row.external_id,
            status="failed",
            message=message,
        )
