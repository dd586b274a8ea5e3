"""Unit tests for sync orchestration."""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path

import pytest

from core.clay_types import ClayContactRecord
from core.config import TendConfig
from core.errors import TendConfigError, TendLookupError
from core.types import BatchSyncOptions
from ingest.checkpoint_store import CheckpointStore
from ingest.pipeline import sync_batch, sync_contact_by_name, sync_fixture_file
from tests.fixture_paths import fixture_path


class _SearchLookup:
    def __init__(self, matches: list[ClayContactRecord]) -> None:
        self.matches = matches
        self.fetched: list[int] = []

    def get_contact_by_id(self, contact_id: int) -> ClayContactRecord:
        self.fetched.append(contact_id)
        return ClayContactRecord(id=contact_id, name=f"Full {contact_id}", groups=("Friends",))

    def search_contacts(self, query: str, limit: int = 10) -> list[ClayContactRecord]:
        return self.matches

    def close(self) -> None:
        return None


def _config(tmp_path: Path) -> TendConfig:
    vault_path = tmp_path / "vault"
    vault_path.mkdir()
    return replace(
        TendConfig.from_env(),
        vault_path=vault_path,
        data_root=tmp_path / "state",
        priority_file=fixture_path("priority/group-priority.md"),
        lookup_backend="fixtures",
        fixture_dir=fixture_path("contacts"),
        request_delay_seconds=0,
        journal_path=tmp_path / "state" / "Tend-log.md",
    )


def test_sync_batch_writes_documents_and_checkpoint(tmp_path: Path) -> None:
    """Batch sync should write every row and advance the checkpoint."""
    config = _config(tmp_path)
    options = BatchSyncOptions(source_uri=str(fixture_path("batch/sequenced.csv")))

    result = sync_batch(options, config, sleep=lambda seconds: None)

    assert (result.succeeded, result.failed, result.checkpoint) == (3, 0, 3)


def test_sync_batch_routes_row_groups_by_priority(tmp_path: Path) -> None:
    """Row groups should override Clay groups and route by priority."""
    config = _config(tmp_path)
    options = BatchSyncOptions(source_uri=str(fixture_path("batch/sequenced.csv")))

    sync_batch(options, config, sleep=lambda seconds: None)

    assert (tmp_path / "vault" / "Bitcoin" / "Grace Hopper.md").is_file()


def test_sync_batch_dry_run_writes_nothing(tmp_path: Path) -> None:
    """Dry runs should leave the vault and checkpoint untouched."""
    config = _config(tmp_path)
    options = BatchSyncOptions(source_uri=str(fixture_path("batch/sequenced.csv")), dry_run=True)

    result = sync_batch(options, config, sleep=lambda seconds: None)

    assert (
        result.succeeded == 3
        and list((tmp_path / "vault").iterdir()) == []
        and CheckpointStore(config.data_root).read() == 0
    )


def test_sync_batch_respects_batch_size(tmp_path: Path) -> None:
    """Batch size should limit rows processed in one run."""
    config = _config(tmp_path)
    options = BatchSyncOptions(source_uri=str(fixture_path("batch/sequenced.csv")), batch_size=2)

    result = sync_batch(options, config, sleep=lambda seconds: None)

    assert (result.succeeded, result.checkpoint) == (2, 2)


def test_sync_batch_reset_checkpoint_reprocesses_rows(tmp_path: Path) -> None:
    """Resetting the checkpoint should process every row again."""
    config = _config(tmp_path)
    CheckpointStore(config.data_root).write(3)
    options = BatchSyncOptions(
        source_uri=str(fixture_path("batch/sequenced.csv")), reset_checkpoint=True
    )

    result = sync_batch(options, config, sleep=lambda seconds: None)

    assert (result.succeeded, result.skipped_checkpointed) == (3, 0)


def test_sync_batch_writes_run_journal(tmp_path: Path) -> None:
    """Batch runs should record a Markdown journal."""
    config = _config(tmp_path)
    options = BatchSyncOptions(source_uri=str(fixture_path("batch/sequenced.csv")))

    sync_batch(options, config, sleep=lambda seconds: None)

    assert "### Program Complete" in config.journal_path.read_text(encoding="utf-8")


def test_sync_batch_requires_vault(tmp_path: Path) -> None:
    """Runs without a configured vault should fail before any lookup."""
    config = replace(_config(tmp_path), vault_path=None)
    options = BatchSyncOptions(source_uri=str(fixture_path("batch/sequenced.csv")))

    with pytest.raises(TendConfigError):
        sync_batch(options, config, sleep=lambda seconds: None)

    assert CheckpointStore(config.data_root).read() == 0


def test_sync_contact_by_name_prefers_exact_match(tmp_path: Path) -> None:
    """Exact name matches should win over the first search hit."""
    lookup = _SearchLookup(
        [
            ClayContactRecord(id=1, name="Ada Lovelace Byron"),
            ClayContactRecord(id=2, name="Ada Lovelace"),
        ]
    )

    sync_contact_by_name("ada lovelace", _config(tmp_path), lookup=lookup)

    assert lookup.fetched == [2]


def test_sync_contact_by_name_falls_back_to_first_hit(tmp_path: Path) -> None:
    """Without an exact match the first search hit should be synced."""
    lookup = _SearchLookup([ClayContactRecord(id=5, name="Grace B. Hopper")])

    result = sync_contact_by_name("Grace Hopper", _config(tmp_path), lookup=lookup)

    assert (lookup.fetched, result.filename) == ([5], "Full 5.md")


def test_sync_contact_by_name_without_hits_is_lookup_error(tmp_path: Path) -> None:
    """Empty searches should raise a lookup error."""
    with pytest.raises(TendLookupError, match="No contact found"):
        sync_contact_by_name("Nobody", _config(tmp_path), lookup=_SearchLookup([]))

    assert True


def test_sync_fixture_file_writes_document(tmp_path: Path) -> None:
    """Fixture sync should write the contact into its community folder."""
    result = sync_fixture_file(fixture_path("contacts/7.json"), _config(tmp_path))

    assert Path(result.path) == tmp_path / "vault" / "Friends" / "Ada Lovelace.md"


def test_sync_batch_dry_run_reset_keeps_checkpoint(tmp_path: Path) -> None:
    """Dry-run resets should preview every row and keep the stored checkpoint."""
    config = _config(tmp_path)
    CheckpointStore(config.data_root).write(3)
    options = BatchSyncOptions(
        source_uri=str(fixture_path("batch/sequenced.csv")),
        dry_run=True,
        reset_checkpoint=True,
    )

    result = sync_batch(options, config, sleep=lambda seconds: None)

    assert (
        result.succeeded == 3
        and result.skipped_checkpointed == 0
        and CheckpointStore(config.data_root).read() == 3
        and "### Would Reset Checkpoint" in config.journal_path.read_text(encoding="utf-8")
    )


@pytest.mark.parametrize(
    ("batch_size", "start_sequence"),
    [(0, None), (-2, None), (None, 0)],
)
def test_sync_batch_rejects_non_positive_options(
    tmp_path: Path, batch_size: int | None, start_sequence: int | None
) -> None:
    """Batch size and start sequence below 1 should be config errors."""
    config = _config(tmp_path)
    CheckpointStore(config.data_root).write(2)
    options = BatchSyncOptions(
        source_uri=str(fixture_path("batch/sequenced.csv")),
        batch_size=batch_size,
        start_sequence=start_sequence,
        reset_checkpoint=True,
    )

    with pytest.raises(TendConfigError, match="expected value >= 1"):
        sync_batch(options, config, sleep=lambda seconds: None)

    assert CheckpointStore(config.data_root).read() == 2
