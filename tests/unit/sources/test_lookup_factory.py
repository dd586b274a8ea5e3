"""Unit tests for lookup client selection."""

from __future__ import annotations

from dataclasses import replace

from core.config import TendConfig
from sources.clay_api_client import ClayApiClient
from sources.clay_mcp_client import ClayMcpClient
from sources.fixture_client import FixtureLookupClient
from sources.lookup_factory import build_lookup_client
from tests.fixture_paths import fixture_path


def _config(backend: str) -> TendConfig:
    return replace(
        TendConfig.from_env(),
        lookup_backend=backend,
        clay_api_key="secret",
        fixture_dir=fixture_path("contacts"),
    )


def test_factory_builds_fixture_client() -> None:
    """The fixtures back end should read local JSON files."""
    assert isinstance(build_lookup_client(_config("fixtures")), FixtureLookupClient)


def test_factory_builds_mcp_client() -> None:
    """The mcp back end should build a stdio client without spawning it."""
    assert isinstance(build_lookup_client(_config("mcp")), ClayMcpClient)


def test_factory_builds_api_client() -> None:
    """The api back end should build a REST client."""
    client = build_lookup_client(_config("api"))
    client.close()

    assert isinstance(client, ClayApiClient)
