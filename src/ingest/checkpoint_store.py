"""Batch sync checkpoint persistence.

This module stores the highest fully processed batch sequence number.
It enables resume behavior across process restarts.
"""

from __future__ import annotations

import os
from pathlib import Path

from core.constants import CHECKPOINT_FILE_NAME
from core.errors import TendCheckpointError
from core.logging_config import get_logger

_LOGGER = get_logger(__name__)


class CheckpointStore:
    """Filesystem-backed single-integer checkpoint store."""

    def __init__(self, data_root: Path) -> None:
        self._checkpoint_path = data_root / CHECKPOINT_FILE_NAME

    @property
    def path(self) -> Path:
        """Checkpoint file location."""
        return self._checkpoint_path

    def read(self) -> int:
        """Read the last processed sequence number.

        Returns:
            Stored sequence, or 0 when no checkpoint exists.
        """
        if not self._checkpoint_path.exists():
            return 0
        raw_value = self._checkpoint_path.read_text(encoding="utf-8").strip()
        try:
            sequence = int(raw_value)
        except ValueError:
            _LOGGER.warning(
                "checkpoint_unreadable",
                path=str(self._checkpoint_path),
                value=raw_value[:40],
            )
            return 0
        return max(sequence, 0)

    def write(self, sequence: int) -> None:
        """Persist a new checkpoint value.

        The value is written to a sibling temp file and swapped in, so a
        crash never leaves a truncated checkpoint behind.

        Args:
            sequence: Highest fully processed sequence number.

        Raises:
            TendCheckpointError: If the value is invalid or cannot be written.
        """
        if isinstance(sequence, bool) or not isinstance(sequence, int) or sequence < 0:
            raise TendCheckpointError(
                f"Invalid checkpoint value {sequence!r}: expected a non-negative integer."
            )
        temp_path = self._checkpoint_path.with_name(self._checkpoint_path.name + ".tmp")
        try:
            self._checkpoint_path.parent.mkdir(parents=True, exist_ok=True)
            temp_path.write_text(str(sequence), encoding="utf-8")
            os.replace(temp_path, self._checkpoint_path)
        except OSError as error:
            raise TendCheckpointError(
                f"Failed to write checkpoint at {self._checkpoint_path}: {error}. "
                "Check directory permissions before resuming the batch."
            ) from error

    def reset(self) -> None:
        """Delete persisted checkpoint state.

        Raises:
            TendCheckpointError: If the checkpoint file cannot be removed.
        """
        try:
            self._checkpoint_path.unlink(missing_ok=True)
        except OSError as error:
            raise TendCheckpointError(
                f"Failed to reset checkpoint at {self._checkpoint_path}: {error}. "
                "Delete the file manually and retry."
            ) from error
