"""Unit tests for batch contact list parsing."""

from __future__ import annotations

from pathlib import Path

import pytest

from core.config import TendConfig
from core.errors import TendIngestError
from ingest.batch_reader import parse_batch_rows, parse_group_field, read_batch_text
from tests.fixture_paths import fixture_path


def _load_rows(relative_path: str):
    text = read_batch_text(str(fixture_path(relative_path)), TendConfig.from_env())
    return parse_batch_rows(text)


def test_sequenced_dialect_reads_sequence_column() -> None:
    """Sequenced files should keep source-supplied sequence numbers."""
    rows = _load_rows("batch/sequenced.csv")

    assert [(row.sequence, row.external_id) for row in rows] == [(1, 7), (2, 42), (3, 13)]


def test_sequenced_dialect_parses_quoted_groups() -> None:
    """Quoted comma-separated groups should split into ordered communities."""
    rows = _load_rows("batch/sequenced.csv")

    assert rows[1].groups == ("Bitcoin", "Acquaintance")


def test_system_groups_are_dropped() -> None:
    """Groups with the reserved prefix should not become communities."""
    rows = _load_rows("batch/sequenced.csv")

    assert rows[2].groups == ()


def test_export_dialect_uses_positional_sequence() -> None:
    """Export files should number non-blank data rows from one."""
    rows = _load_rows("batch/clay_export.csv")

    assert [(row.sequence, row.external_id) for row in rows] == [(1, 7), (2, 42), (4, 13)]


def test_export_dialect_deduplicates_groups() -> None:
    """Repeated group names should be kept once in first-seen order."""
    rows = _load_rows("batch/clay_export.csv")

    assert rows[1].groups == ("Bitcoin", "Acquaintance")


def test_row_without_id_is_skipped() -> None:
    """Rows without a numeric id should be skipped, not fatal."""
    rows = _load_rows("batch/clay_export.csv")

    assert "Bad" not in [row.first_name for row in rows]


def test_header_only_input_is_fatal() -> None:
    """A header with no data rows should fail the run."""
    with pytest.raises(TendIngestError):
        _load_rows("batch/header_only.csv")

    assert fixture_path("batch/header_only.csv").exists()


def test_missing_id_column_is_fatal() -> None:
    """A header without an id column should fail with a clear error."""
    with pytest.raises(TendIngestError, match="contact id column"):
        _load_rows("batch/missing_id_column.csv")

    assert True


def test_missing_file_is_fatal(tmp_path: Path) -> None:
    """Nonexistent local input should raise an ingest error."""
    with pytest.raises(TendIngestError):
        read_batch_text(str(tmp_path / "absent.csv"), TendConfig.from_env())

    assert not (tmp_path / "absent.csv").exists()


def test_empty_file_is_fatal(tmp_path: Path) -> None:
    """Whitespace-only input should raise an ingest error."""
    source_path = tmp_path / "empty.csv"
    source_path.write_text("\n  \n", encoding="utf-8")

    with pytest.raises(TendIngestError):
        read_batch_text(str(source_path), TendConfig.from_env())

    assert source_path.exists()


def test_utf8_bom_is_ignored() -> None:
    """A leading byte-order mark should not hide the sequence column."""
    rows = parse_batch_rows("\ufeffsequence,first_name,last_name,clay_id\n5,Hal,Finney,42\n")

    assert rows[0].sequence == 5


def test_all_invalid_rows_is_fatal() -> None:
    """Input whose rows are all invalid should fail the run."""
    with pytest.raises(TendIngestError, match="no valid contact rows"):
        parse_batch_rows("sequence,first_name,last_name,clay_id\nx,Hal,Finney,42\n1,Ada,L,\n")

    assert True


def test_parse_group_field_trims_entries() -> None:
    """Whitespace and empty entries should be dropped."""
    assert parse_group_field(" Bitcoin ,, Friends ,_Hidden") == ("Bitcoin", "Friends")
