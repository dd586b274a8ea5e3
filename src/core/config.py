"""Runtime configuration model for Tend.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path

from core.constants import (
    DEFAULT_CLAY_API_URL,
    DEFAULT_DATA_ROOT,
    DEFAULT_LOOKUP_BACKEND,
    DEFAULT_MCP_COMMAND,
    DEFAULT_PRIORITY_FILE,
    DEFAULT_REQUEST_DELAY_SECONDS,
    DEFAULT_REQUEST_TIMEOUT_SECONDS,
    JOURNAL_FILE_NAME,
    SUPPORTED_LOOKUP_BACKENDS,
)
from core.errors import TendConfigError


@dataclass(frozen=True)
class TendConfig:
    """Validated runtime configuration.

    Attributes:
        vault_path: Root folder of the document vault, if configured.
        data_root: Local directory for checkpoint and journal state.
        priority_file: YAML or Markdown list of community names.
        lookup_backend: Contact lookup back end ("api", "mcp", "fixtures").
        clay_api_key: Optional API key for Clay lookups.
        clay_api_url: Base URL of the Clay REST API.
        fixture_dir: Directory of ``<id>.json`` records for fixture lookups.
        mcp_command: Command used to spawn the Clay MCP server.
        request_delay_seconds: Fixed pause between successive lookups.
        request_timeout_seconds: Per-lookup timeout.
        journal_path: Explicit run journal location; defaults to the data root.
        s3_region: Optional default AWS region for S3 reads.
        s3_profile: Optional AWS profile for boto3 session initialization.
    """

    vault_path: Path | None
    data_root: Path
    priority_file: Path
    lookup_backend: str
    clay_api_key: str | None
    clay_api_url: str
    fixture_dir: Path | None
    mcp_command: tuple[str, ...]
    request_delay_seconds: float
    request_timeout_seconds: float
    journal_path: Path | None
    s3_region: str | None
    s3_profile: str | None

    @classmethod
    def from_env(cls) -> "TendConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            TendConfigError: If environment values are invalid.
        """
        data_root = _resolve_path(os.getenv("TEND_DATA_ROOT", str(DEFAULT_DATA_ROOT)))
        vault_value = os.getenv("TEND_VAULT_PATH")
        fixture_value = os.getenv("TEND_FIXTURE_DIR")
        journal_value = os.getenv("TEND_JOURNAL_PATH")
        mcp_value = os.getenv("TEND_MCP_COMMAND")
        return cls(
            vault_path=_resolve_path(vault_value) if vault_value else None,
            data_root=data_root,
            priority_file=_resolve_path(
                os.getenv("TEND_PRIORITY_FILE", str(DEFAULT_PRIORITY_FILE))
            ),
            lookup_backend=_parse_lookup_backend(
                os.getenv("TEND_LOOKUP_BACKEND", DEFAULT_LOOKUP_BACKEND)
            ),
            clay_api_key=os.getenv("CLAY_API_KEY") or None,
            clay_api_url=os.getenv("TEND_CLAY_API_URL", DEFAULT_CLAY_API_URL).rstrip("/"),
            fixture_dir=_resolve_path(fixture_value) if fixture_value else None,
            mcp_command=tuple(mcp_value.split()) if mcp_value else DEFAULT_MCP_COMMAND,
            request_delay_seconds=_parse_seconds(
                "TEND_REQUEST_DELAY_SECONDS",
                os.getenv("TEND_REQUEST_DELAY_SECONDS", str(DEFAULT_REQUEST_DELAY_SECONDS)),
                allow_zero=True,
            ),
            request_timeout_seconds=_parse_seconds(
                "TEND_REQUEST_TIMEOUT_SECONDS",
                os.getenv("TEND_REQUEST_TIMEOUT_SECONDS", str(DEFAULT_REQUEST_TIMEOUT_SECONDS)),
                allow_zero=False,
            ),
            journal_path=_resolve_path(journal_value) if journal_value else None,
            s3_region=os.getenv("TEND_S3_REGION"),
            s3_profile=os.getenv("TEND_S3_PROFILE"),
        )

    def require_vault_path(self) -> Path:
        """Return the configured vault path.

        Raises:
            TendConfigError: If no vault path is configured.
        """
        if self.vault_path is None:
            raise TendConfigError(
                "No vault path configured. "
                "Set TEND_VAULT_PATH or pass --vault to the CLI."
            )
        return self.vault_path

    def resolve_journal_path(self) -> Path:
        """Return the run journal location, following ``data_root`` unless overridden."""
        if self.journal_path is not None:
            return self.journal_path
        return self.data_root / JOURNAL_FILE_NAME


def _resolve_path(raw_value: str) -> Path:
    return Path(raw_value).expanduser().resolve()


def _parse_lookup_backend(raw_value: str) -> str:
    """Validate the lookup back-end name.

    Raises:
        TendConfigError: If the name is not supported.
    """
    backend = raw_value.strip().lower()
    if backend not in SUPPORTED_LOOKUP_BACKENDS:
        raise TendConfigError(
            f"Invalid TEND_LOOKUP_BACKEND value '{raw_value}'. "
            f"Supported values: {', '.join(SUPPORTED_LOOKUP_BACKENDS)}."
        )
    return backend


def _parse_seconds(variable_name: str, raw_value: str, allow_zero: bool) -> float:
    """Parse a duration environment value.

    Args:
        variable_name: Variable name for error messages.
        raw_value: Raw string from environment.
        allow_zero: Whether zero is an accepted value.

    Returns:
        Parsed number of seconds.

    Raises:
        TendConfigError: If value is not a valid duration.
    """
    try:
        seconds = float(raw_value)
    except ValueError as error:
        raise TendConfigError(
            f"Invalid {variable_name} value: expected number of seconds, got '{raw_value}'. "
            f"Set {variable_name} to a numeric value."
        ) from error
    if seconds < 0 or (seconds == 0 and not allow_zero):
        raise TendConfigError(
            f"Invalid {variable_name} value: {raw_value} is out of range. "
            f"Set {variable_name} to a positive number."
        )
    return seconds
