"""MCP tool response unwrapping.

Clay MCP servers answer ``tools/call`` either with a content array
(``{"content": [{"type": "text", "text": "<json>"}]}``) or with the legacy
flat shape (``{"type": "text", "text": "<json>"}``). This module turns both
into the decoded JSON value.
"""

from __future__ import annotations

import json
from typing import Any, Mapping

from core.errors import TendLookupError


def unwrap_tool_result(result: object, tool_name: str) -> Any:
    """Decode the JSON payload carried by an MCP tool result.

    Args:
        result: The ``result`` member of a JSON-RPC response.
        tool_name: Tool name for error messages.

    Returns:
        Decoded JSON value, or the result itself when it carries no text.

    Raises:
        TendLookupError: If the tool reported an error or returned bad JSON.
    """
    if not isinstance(result, Mapping):
        raise TendLookupError(f"Clay MCP tool {tool_name} returned an empty result.")
    if result.get("isError"):
        raise TendLookupError(
            f"Clay MCP tool {tool_name} reported an error: {_first_text(result) or 'no details'}."
        )
    text = _first_text(result)
    if text is None and result.get("type") == "text":
        text = result.get("text") if isinstance(result.get("text"), str) else None
    if text is None:
        return result
    try:
        return json.loads(text)
    except json.JSONDecodeError as error:
        raise TendLookupError(
            f"Clay MCP tool {tool_name} returned non-JSON text: {error.msg}."
        ) from error


def as_result_list(payload: Any) -> list[Any]:
    """Normalize a search payload into a list of contact payloads."""
    if isinstance(payload, list):
        return payload
    if isinstance(payload, Mapping) and isinstance(payload.get("results"), list):
        return list(payload["results"])
    if payload is None:
        return []
    return [payload]


def _first_text(result: Mapping[str, Any]) -> str | None:
    content = result.get("content")
    if not isinstance(content, list):
        return None
    for item in content:
        if isinstance(item, Mapping) and item.get("type") == "text":
            text = item.get("text")
            if isinstance(text, str):
                return text
    return None
