"""Lookup client selection from runtime configuration."""

from __future__ import annotations

from core.config import TendConfig
from sources.clay_api_client import ClayApiClient
from sources.clay_mcp_client import ClayMcpClient
from sources.contact_lookup import ContactLookup
from sources.fixture_client import FixtureLookupClient


def build_lookup_client(config: TendConfig) -> ContactLookup:
    """Create the lookup client named by ``config.lookup_backend``."""
    if config.lookup_backend == "fixtures":
        return FixtureLookupClient(config.fixture_dir)
    if config.lookup_backend == "mcp":
        return ClayMcpClient(
            api_key=config.clay_api_key,
            command=config.mcp_command,
            timeout_seconds=config.request_timeout_seconds,
        )
    return ClayApiClient(
        api_key=config.clay_api_key,
        base_url=config.clay_api_url,
        timeout_seconds=config.request_timeout_seconds,
    )
