"""Batch contact list readers.

This module loads CSV contact lists from local paths or S3 objects.
It normalizes both supported header dialects into ingestion rows.
"""

from __future__ import annotations

import csv
import io
from pathlib import Path
from typing import Any, Mapping, Sequence

from core.config import TendConfig
from core.constants import SEQUENCE_SIGNATURE_COLUMN, SYSTEM_GROUP_PREFIX
from core.errors import TendDependencyError, TendIngestError
from core.logging_config import get_logger
from core.s3_uri import parse_s3_uri
from core.types import IngestionRow

_LOGGER = get_logger(__name__)

# Normalized header name -> canonical field, per dialect.
_SEQUENCED_COLUMNS = {
    "sequence": "sequence",
    "firstname": "first_name",
    "lastname": "last_name",
    "clayid": "external_id",
    "externalid": "external_id",
    "groups": "groups",
}
_EXPORT_COLUMNS = {
    "firstname": "first_name",
    "lastname": "last_name",
    "id": "external_id",
    "clayid": "external_id",
    "groups": "groups",
    "communities": "groups",
}


def read_batch_text(source_uri: str, config: TendConfig) -> str:
    """Load raw batch text from a local file or S3.

    Args:
        source_uri: Local file path or ``s3://bucket/key`` URI.
        config: Runtime configuration for S3 session defaults.

    Returns:
        Decoded CSV text.

    Raises:
        TendIngestError: If the source is missing, unreadable, or empty.
    """
    if source_uri.startswith("s3://"):
        text = _read_s3_text(source_uri, config)
    else:
        text = _read_local_text(Path(source_uri).expanduser())
    if not text.strip():
        raise TendIngestError(
            f"Batch input at {source_uri} is empty. "
            "Provide a CSV file with a header row and at least one contact."
        )
    return text


def parse_batch_rows(text: str) -> list[IngestionRow]:
    """Parse CSV text into ordered ingestion rows.

    The header decides the dialect: a ``sequence`` column selects the
    sequenced dialect, anything else is treated as a Clay export where the
    sequence is the 1-based data row position. Malformed rows are skipped
    with a warning.

    Args:
        text: Raw CSV text including the header row.

    Returns:
        Ingestion rows in file order.

    Raises:
        TendIngestError: If the input has no valid rows or lacks mandatory columns.
    """
    lines = [row for row in csv.reader(io.StringIO(text.lstrip("\ufeff"))) if _has_content(row)]
    if not lines:
        raise TendIngestError(
            "Batch input is empty. Provide a CSV file with a header row and contacts."
        )
    header, data_rows = lines[0], lines[1:]
    column_map = _resolve_columns(header)
    sequenced = "sequence" in column_map
    rows: list[IngestionRow] = []
    for position, cells in enumerate(data_rows, 1):
        line_number = position + 1
        fields = _extract_fields(cells, column_map)
        row = _build_row(fields, position, sequenced, line_number)
        if row is not None:
            rows.append(row)
    if not rows:
        raise TendIngestError(
            f"Batch input has no valid contact rows ({len(data_rows)} data rows read). "
            "Every row needs a numeric contact id."
        )
    _LOGGER.info(
        "batch_rows_parsed",
        dialect="sequenced" if sequenced else "export",
        data_rows=len(data_rows),
        accepted_rows=len(rows),
    )
    return rows


def parse_group_field(raw_value: str) -> tuple[str, ...]:
    """Split a comma-separated group field into community names.

    Entries are trimmed; empty entries, duplicates, and system groups
    (names starting with the reserved prefix) are dropped.
    """
    groups: list[str] = []
    for entry in raw_value.split(","):
        name = entry.strip()
        if not name or name.startswith(SYSTEM_GROUP_PREFIX) or name in groups:
            continue
        groups.append(name)
    return tuple(groups)


def _resolve_columns(header: Sequence[str]) -> dict[str, int]:
    """Map canonical field names to column indexes for the detected dialect.

    Raises:
        TendIngestError: If the identifier column is missing.
    """
    normalized = [_normalize_header(name) for name in header]
    aliases = _SEQUENCED_COLUMNS if SEQUENCE_SIGNATURE_COLUMN in normalized else _EXPORT_COLUMNS
    column_map: dict[str, int] = {}
    for index, name in enumerate(normalized):
        field_name = aliases.get(name)
        if field_name is not None and field_name not in column_map:
            column_map[field_name] = index
    if "external_id" not in column_map:
        raise TendIngestError(
            f"Batch header is missing a contact id column: {', '.join(header)}. "
            "Add a 'clay_id' (sequenced) or 'Id' (Clay export) column."
        )
    return column_map


def _normalize_header(name: str) -> str:
    return "".join(character for character in name.lower() if character not in " _-\t")


def _extract_fields(cells: Sequence[str], column_map: Mapping[str, int]) -> dict[str, str]:
    fields: dict[str, str] = {}
    for field_name, index in column_map.items():
        fields[field_name] = cells[index].strip() if index < len(cells) else ""
    return fields


def _build_row(
    fields: Mapping[str, str],
    position: int,
    sequenced: bool,
    line_number: int,
) -> IngestionRow | None:
    """Build one ingestion row, or return None when it must be skipped."""
    external_id = _parse_int(fields.get("external_id", ""))
    if external_id is None:
        _LOGGER.warning(
            "batch_row_skipped",
            line=line_number,
            reason="missing_or_invalid_contact_id",
            value=fields.get("external_id", ""),
        )
        return None
    sequence = position
    if sequenced:
        parsed_sequence = _parse_int(fields.get("sequence", ""))
        if parsed_sequence is None or parsed_sequence < 1:
            _LOGGER.warning(
                "batch_row_skipped",
                line=line_number,
                reason="invalid_sequence",
                value=fields.get("sequence", ""),
            )
            return None
        sequence = parsed_sequence
    return IngestionRow(
        first_name=fields.get("first_name", ""),
        last_name=fields.get("last_name", ""),
        external_id=external_id,
        sequence=sequence,
        groups=parse_group_field(fields.get("groups", "")),
    )


def _parse_int(raw_value: str) -> int | None:
    try:
        return int(raw_value.strip())
    except ValueError:
        return None


def _has_content(cells: Sequence[str]) -> bool:
    return any(cell.strip() for cell in cells)


def _read_local_text(source_path: Path) -> str:
    """Read a local batch file.

    Raises:
        TendIngestError: If the file is missing or unreadable.
    """
    if not source_path.is_file():
        raise TendIngestError(
            f"Failed to read batch input at {source_path}: file does not exist. "
            "Provide an existing CSV file."
        )
    try:
        return source_path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as error:
        raise TendIngestError(
            f"Failed to read batch input at {source_path}: {error}. "
            "Save the file as UTF-8 CSV and retry."
        ) from error


def _read_s3_text(source_uri: str, config: TendConfig) -> str:
    """Download one CSV object from S3.

    Raises:
        TendIngestError: If the object cannot be fetched or decoded.
    """
    location = parse_s3_uri(source_uri)
    s3_client = _create_s3_client(config)
    try:
        response = s3_client.get_object(Bucket=location.bucket, Key=location.key)
        payload = response["Body"].read()
    except Exception as error:
        raise TendIngestError(
            f"Failed to download batch input {source_uri}: {error}. "
            "Check AWS credentials and the object key."
        ) from error
    try:
        return payload.decode("utf-8-sig")
    except UnicodeDecodeError as error:
        raise TendIngestError(
            f"Batch input {source_uri} is not valid UTF-8: {error}."
        ) from error


def _create_s3_client(config: TendConfig) -> Any:
    """Create a boto3 S3 client.

    Args:
        config: Runtime config containing optional profile/region.

    Returns:
        Boto3 S3 client.

    Raises:
        TendDependencyError: If boto3 is missing.
    """
    try:
        import boto3
    except ImportError as error:
        raise TendDependencyError(
            "S3 support requires boto3, but it is not installed. "
            "Install boto3 to read batch input from s3:// sources."
        ) from error
    session_kwargs: dict[str, str] = {}
    if config.s3_profile:
        session_kwargs["profile_name"] = config.s3_profile
    if config.s3_region:
        session_kwargs["region_name"] = config.s3_region
    session = boto3.session.Session(**session_kwargs)
    return session.client("s3")
