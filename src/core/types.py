"""Shared typed models.

This module defines immutable data models used by the ingest, vault,
SDK, and CLI layers to keep interfaces explicit and stable.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

RowStatus = Literal["synced", "planned", "failed"]


@dataclass(frozen=True)
class IngestionRow:
    """One contact row parsed from a batch input file.

    Attributes:
        first_name: Given name as written in the source file.
        last_name: Family name as written in the source file.
        external_id: Clay contact identifier used for direct lookup.
        sequence: Source-supplied or 1-based positional sequence number.
        groups: Ordered community names carried by the row.
    """

    first_name: str
    last_name: str
    external_id: int
    sequence: int
    groups: tuple[str, ...] = ()

    @property
    def display_name(self) -> str:
        """Return a readable name for logs."""
        full_name = f"{self.first_name} {self.last_name}".strip()
        return full_name or f"contact {self.external_id}"


@dataclass(frozen=True)
class BatchSyncOptions:
    """Batch sync command options.

    Attributes:
        source_uri: Local CSV path or ``s3://bucket/key`` URI.
        batch_size: Optional cap on rows processed in this run.
        start_sequence: Optional first sequence to process, ignoring the checkpoint.
        reset_checkpoint: Delete the stored checkpoint before running.
        dry_run: Report planned writes without touching the vault or checkpoint.
    """

    source_uri: str
    batch_size: int | None = None
    start_sequence: int | None = None
    reset_checkpoint: bool = False
    dry_run: bool = False


@dataclass(frozen=True)
class UpsertResult:
    """Outcome of writing, or planning to write, one contact document.

    Attributes:
        path: Absolute document path.
        filename: Document file name inside the folder.
        folder: Vault folder the contact was routed to.
        was_created: True when the canonical filename was free.
    """

    path: str
    filename: str
    folder: str
    was_created: bool


@dataclass(frozen=True)
class RowOutcome:
    """Per-row result recorded by the fetch executor."""

    sequence: int
    external_id: int
    status: RowStatus
    path: str | None = None
    message: str = ""


@dataclass(frozen=True)
class BatchSyncResult:
    """Summary of one batch sync run.

    Attributes:
        succeeded: Rows fetched, normalized, and written (or planned).
        failed: Rows skipped because of a row-level error.
        skipped_checkpointed: Rows excluded by the checkpoint or start sequence.
        checkpoint: Checkpoint value after the run.
        dry_run: Whether writes were suppressed.
        outcomes: Ordered per-row outcomes.
    """

    succeeded: int
    failed: int
    skipped_checkpointed: int
    checkpoint: int
    dry_run: bool = False
    outcomes: tuple[RowOutcome, ...] = field(default_factory=tuple)
