"""Markdown run journal.

The journal is a user-facing log of execution checkpoints for one run.
It is handed to the pipeline explicitly; nothing writes to it globally.
"""

from __future__ import annotations

from datetime import datetime, timezone
import json
from pathlib import Path
import time

from core.errors import TendConfigError
from core.logging_config import get_logger

_LOGGER = get_logger(__name__)


class RunJournal:
    """Append-only Markdown journal written to one file per run."""

    def __init__(self, log_path: Path) -> None:
        """Create the journal file, replacing any previous run's journal.

        Raises:
            TendConfigError: If the journal file cannot be created.
        """
        self._log_path = log_path
        self._started_at = time.monotonic()
        header = (
            "# Tend Sync Log\n\n"
            f"Generated at: {_format_timestamp(datetime.now(timezone.utc))}\n\n"
            "---\n\n"
            "## Execution Checkpoints\n\n"
        )
        try:
            self._log_path.parent.mkdir(parents=True, exist_ok=True)
            self._log_path.write_text(header, encoding="utf-8")
        except OSError as error:
            raise TendConfigError(
                f"Failed to create run journal at {self._log_path}: {error}. "
                "Set TEND_JOURNAL_PATH or --data-root to a writable location."
            ) from error

    @property
    def path(self) -> Path:
        """Journal file location."""
        return self._log_path

    def record(self, checkpoint: str, details: str = "") -> None:
        """Append one checkpoint entry."""
        elapsed = _format_duration(time.monotonic() - self._started_at)
        entry = (
            f"### {checkpoint}\n"
            f"- **Time**: {_format_timestamp(datetime.now(timezone.utc))}\n"
            f"- **Duration from start**: {elapsed}\n"
        )
        if details:
            entry += f"- **Details**: {details}\n"
        self._append(entry + "\n")

    def record_lookup(self, tool_name: str, params: dict[str, object]) -> None:
        """Append an entry for an external lookup call."""
        self.record(
            f"Lookup: {tool_name}",
            f"Tool: `{tool_name}` | Params: {json.dumps(params, sort_keys=True)}",
        )

    def record_contact(self, contact_name: str, succeeded: bool, message: str = "") -> None:
        """Append the final status of one contact."""
        if succeeded:
            self.record(f"✓ Contact Synced: {contact_name}", message)
        else:
            self.record(f"✗ Contact Error: {contact_name}", message or "Unknown error")

    def record_summary(self, succeeded: int, failed: int) -> None:
        """Append the end-of-run summary block."""
        total = succeeded + failed
        success_rate = f"{succeeded / total * 100:.1f}%" if total else "0%"
        self._append(
            "### Program Complete\n"
            f"- **Total Duration**: {_format_duration(time.monotonic() - self._started_at)}\n"
            f"- **Total Contacts**: {total}\n"
            f"- **Successful**: {succeeded}\n"
            f"- **Failed**: {failed}\n"
            f"- **Success Rate**: {success_rate}\n\n"
        )

    def _append(self, text: str) -> None:
        try:
            with self._log_path.open("a", encoding="utf-8") as handle:
                handle.write(text)
        except OSError as error:
            # Journal write failures never abort a batch.
            _LOGGER.warning("journal_write_failed", path=str(self._log_path), error=str(error))


class NullRunJournal(RunJournal):
    """Journal that discards every entry."""

    def __init__(self) -> None:
        self._started_at = time.monotonic()

    @property
    def path(self) -> Path:
        """Null journals have no backing file."""
        return Path("/dev/null")

    def _append(self, text: str) -> None:
        return None


def _format_timestamp(moment: datetime) -> str:
    return moment.strftime("%Y-%m-%d %H:%M:%S UTC")


def _format_duration(seconds: float) -> str:
    """Render elapsed seconds as ms, s, or m+s."""
    if seconds < 1:
        return f"{int(seconds * 1000)}ms"
    if seconds < 60:
        return f"{seconds:.2f}s"
    minutes, remainder = divmod(seconds, 60)
    return f"{int(minutes)}m {remainder:.2f}s"
