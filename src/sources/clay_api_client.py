"""Clay REST API lookup client.

This module calls the hosted Clay API with a bearer token.
Every transport or HTTP failure surfaces as ``TendLookupError``.
"""

from __future__ import annotations

from typing import Any

import requests

from core.clay_types import ClayContactRecord
from core.constants import DEFAULT_SEARCH_LIMIT, HTTP_USER_AGENT
from core.errors import TendConfigError, TendLookupError
from core.logging_config import get_logger
from sources.record_payload import contact_record_from_payload
from sources.tool_response import as_result_list

_LOGGER = get_logger(__name__)


class ClayApiClient:
    """Synchronous Clay REST client."""

    def __init__(
        self,
        api_key: str | None,
        base_url: str,
        timeout_seconds: float,
        session: requests.Session | None = None,
    ) -> None:
        if not api_key:
            raise TendConfigError(
                "Clay API key not found. Set CLAY_API_KEY from your Clay account settings, "
                "or use TEND_LOOKUP_BACKEND=fixtures for offline runs."
            )
        self._base_url = base_url.rstrip("/")
        self._timeout_seconds = timeout_seconds
        self._session = session or requests.Session()
        self._session.headers.update(
            {
                "Authorization": f"Bearer {api_key}",
                "Content-Type": "application/json",
                "User-Agent": HTTP_USER_AGENT,
            }
        )

    def get_contact_by_id(self, contact_id: int) -> ClayContactRecord:
        """Fetch one full contact record."""
        payload = self._request("GET", f"/contacts/{contact_id}")
        return contact_record_from_payload(payload)

    def search_contacts(
        self, query: str, limit: int = DEFAULT_SEARCH_LIMIT
    ) -> list[ClayContactRecord]:
        """Search contacts by free-text query."""
        payload = self._request("POST", "/contacts/search", {"query": query, "limit": limit})
        return [contact_record_from_payload(item) for item in as_result_list(payload)]

    def close(self) -> None:
        """Release pooled HTTP connections."""
        self._session.close()

    def _request(self, method: str, endpoint: str, body: dict[str, object] | None = None) -> Any:
        """Send one authenticated request and decode the JSON body.

        Raises:
            TendLookupError: On timeouts, transport errors, non-2xx responses,
                or undecodable bodies.
        """
        url = f"{self._base_url}{endpoint}"
        try:
            response = self._session.request(
                method,
                url,
                json=body,
                timeout=self._timeout_seconds,
            )
        except requests.Timeout as error:
            raise TendLookupError(
                f"Clay API request timed out after {self._timeout_seconds}s: {method} {endpoint}."
            ) from error
        except requests.RequestException as error:
            raise TendLookupError(f"Clay API request failed: {method} {endpoint}: {error}.") from error
        if not response.ok:
            raise TendLookupError(
                f"Clay API error ({response.status_code}) for {method} {endpoint}: "
                f"{_error_message(response)}."
            )
        try:
            payload = response.json()
        except ValueError as error:
            raise TendLookupError(
                f"Clay API returned a non-JSON body for {method} {endpoint}."
            ) from error
        _LOGGER.debug("clay_api_response", method=method, endpoint=endpoint)
        return payload


def _error_message(response: requests.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        return response.text.strip() or response.reason or "unknown error"
    if isinstance(payload, dict) and isinstance(payload.get("message"), str):
        return payload["message"]
    return response.reason or "unknown error"
