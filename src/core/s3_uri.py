"""S3 URI parsing helpers.

This module validates ``s3://bucket/key`` batch input locations.
"""

from __future__ import annotations

from dataclasses import dataclass

from core.errors import TendIngestError


@dataclass(frozen=True)
class S3Location:
    """Parsed S3 object location."""

    bucket: str
    key: str


def parse_s3_uri(uri: str) -> S3Location:
    """Parse and validate an S3 object URI.

    Args:
        uri: URI in format ``s3://bucket/key``.

    Returns:
        Parsed bucket and key pair.

    Raises:
        TendIngestError: If bucket or key is missing.
    """
    stripped_uri = uri.removeprefix("s3://")
    bucket, _, key = stripped_uri.partition("/")
    if not bucket or not key or key.endswith("/"):
        raise TendIngestError(
            f"Invalid S3 URI '{uri}': expected s3://bucket/key. "
            "Point the batch input at a single CSV object."
        )
    return S3Location(bucket=bucket, key=key)
