"""Unit tests for the SDK client."""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path

from core.config import TendConfig
from tend import BatchSyncOptions, TendClient
from tests.fixture_paths import fixture_path


def _client(tmp_path: Path) -> TendClient:
    config = replace(
        TendConfig.from_env(),
        vault_path=None,
        data_root=tmp_path / "state",
        priority_file=fixture_path("priority/groups.yaml"),
        lookup_backend="fixtures",
        fixture_dir=fixture_path("contacts"),
        journal_path=tmp_path / "state" / "Tend-log.md",
    )
    return TendClient(config, sleep=lambda seconds: None)


def test_with_vault_sets_vault_path(tmp_path: Path) -> None:
    """with_vault should return a client bound to the new vault."""
    client = _client(tmp_path).with_vault(tmp_path)

    assert client.config.vault_path == tmp_path.resolve()


def test_client_sync_batch_and_checkpoint(tmp_path: Path) -> None:
    """SDK batch sync should persist a checkpoint readable through the client."""
    vault_path = tmp_path / "vault"
    vault_path.mkdir()
    client = _client(tmp_path).with_vault(vault_path)

    client.sync_batch(BatchSyncOptions(source_uri=str(fixture_path("batch/clay_export.csv"))))

    assert client.read_checkpoint() == 4


def test_client_reset_checkpoint(tmp_path: Path) -> None:
    """reset_checkpoint should clear the stored sequence."""
    client = _client(tmp_path)
    (tmp_path / "state").mkdir()
    (tmp_path / "state" / "tend-checkpoint.txt").write_text("12", encoding="utf-8")

    client.reset_checkpoint()

    assert client.read_checkpoint() == 0


def test_client_sync_fixture(tmp_path: Path) -> None:
    """sync_fixture should write a single contact document."""
    vault_path = tmp_path / "vault"
    vault_path.mkdir()

    client = _client(tmp_path).with_vault(vault_path)

    result = client.sync_fixture(fixture_path("contacts/13.json"))

    assert result.folder == "Ungrouped" and result.was_created
