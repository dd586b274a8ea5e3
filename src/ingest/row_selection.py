"""Checkpoint-aware row selection.

This module decides which parsed rows a batch run still has to process.
Rows at or below the resume point are excluded; the rest are ordered by
sequence and optionally capped to the batch size.
"""

from __future__ import annotations

from dataclasses import dataclass

from core.types import IngestionRow


@dataclass(frozen=True)
class PendingSelection:
    """Rows selected for one batch run."""

    rows_to_process: list[IngestionRow]
    skipped_count: int
    resume_after: int


def select_pending_rows(
    rows: list[IngestionRow],
    checkpoint: int,
    start_sequence: int | None = None,
    batch_size: int | None = None,
) -> PendingSelection:
    """Select rows with ``sequence`` past the resume point.

    Args:
        rows: Parsed ingestion rows.
        checkpoint: Stored checkpoint value.
        start_sequence: Optional first sequence to process; overrides the
            checkpoint when given.
        batch_size: Optional cap on the number of selected rows.

    Returns:
        Selected rows in ascending sequence order, plus the skipped count.
    """
    resume_after = start_sequence - 1 if start_sequence is not None else checkpoint
    pending = sorted(
        (row for row in rows if row.sequence > resume_after),
        key=lambda row: row.sequence,
    )
    skipped_count = len(rows) - len(pending)
    if batch_size is not None:
        pending = pending[: max(batch_size, 0)]
    return PendingSelection(
        rows_to_process=pending,
        skipped_count=skipped_count,
        resume_after=resume_after,
    )
