"""Clay MCP lookup client over stdio.

This module spawns the Clay MCP server and speaks line-delimited JSON-RPC
to it. Calls are strictly sequential; a reader thread only exists so each
call can wait on its response with a timeout.
"""

from __future__ import annotations

import json
import os
import queue
import subprocess
import threading
import time
from typing import IO, Any, Sequence

from core.clay_types import ClayContactRecord
from core.constants import DEFAULT_SEARCH_LIMIT, MCP_STARTUP_GRACE_SECONDS
from core.errors import TendConfigError, TendLookupError
from core.logging_config import get_logger
from sources.record_payload import contact_record_from_payload
from sources.tool_response import as_result_list, unwrap_tool_result

_LOGGER = get_logger(__name__)
_PROTOCOL_VERSION = "2024-11-05"


class ClayMcpClient:
    """JSON-RPC client for a local ``clay-mcp`` subprocess."""

    def __init__(
        self,
        api_key: str | None,
        command: Sequence[str],
        timeout_seconds: float,
    ) -> None:
        if not api_key:
            raise TendConfigError(
                "Clay API key not found. Set CLAY_API_KEY so the clay-mcp server can authenticate."
            )
        self._api_key = api_key
        self._command = tuple(command)
        self._timeout_seconds = timeout_seconds
        self._process: subprocess.Popen[str] | None = None
        self._responses: queue.Queue[dict[str, Any]] = queue.Queue()
        self._request_id = 0

    def get_contact_by_id(self, contact_id: int) -> ClayContactRecord:
        """Fetch one full contact record through the ``getContact`` tool."""
        payload = self._call_tool("getContact", {"contact_id": contact_id})
        return contact_record_from_payload(payload)

    def search_contacts(
        self, query: str, limit: int = DEFAULT_SEARCH_LIMIT
    ) -> list[ClayContactRecord]:
        """Search contacts through the ``searchContacts`` tool."""
        payload = self._call_tool("searchContacts", {"query": query, "limit": limit})
        return [contact_record_from_payload(item) for item in as_result_list(payload)]

    def close(self) -> None:
        """Terminate the MCP subprocess if it is running."""
        process = self._process
        self._process = None
        if process is None:
            return
        process.terminate()
        try:
            process.wait(timeout=5)
        except subprocess.TimeoutExpired:
            process.kill()

    def _call_tool(self, tool_name: str, arguments: dict[str, object]) -> Any:
        self._ensure_started()
        result = self._send("tools/call", {"name": tool_name, "arguments": arguments})
        return unwrap_tool_result(result, tool_name)

    def _ensure_started(self) -> None:
        """Spawn the server and run the MCP initialize handshake once."""
        if self._process is not None and self._process.poll() is None:
            return
        env = {**os.environ, "CLAY_API_KEY": self._api_key}
        try:
            self._process = subprocess.Popen(
                self._command,
                stdin=subprocess.PIPE,
                stdout=subprocess.PIPE,
                stderr=None,
                text=True,
                encoding="utf-8",
                env=env,
            )
        except OSError as error:
            raise TendLookupError(
                f"Failed to start clay-mcp with '{' '.join(self._command)}': {error}. "
                "Install Node.js or set TEND_MCP_COMMAND."
            ) from error
        stdout = self._process.stdout
        if stdout is None:
            raise TendLookupError("stdout not available for clay-mcp.")
        self._responses = queue.Queue()
        reader = threading.Thread(
            target=_read_responses,
            args=(stdout, self._responses),
            daemon=True,
        )
        reader.start()
        time.sleep(MCP_STARTUP_GRACE_SECONDS)
        self._send(
            "initialize",
            {
                "protocolVersion": _PROTOCOL_VERSION,
                "capabilities": {},
                "clientInfo": {"name": "tend", "version": "1.0"},
            },
        )
        self._notify("notifications/initialized")
        _LOGGER.info("clay_mcp_started", command=" ".join(self._command))

    def _send(self, method: str, params: dict[str, object]) -> Any:
        """Send one request and wait for its response.

        Raises:
            TendLookupError: On timeout, server exit, or a JSON-RPC error.
        """
        self._request_id += 1
        request_id = self._request_id
        self._write({"jsonrpc": "2.0", "id": request_id, "method": method, "params": params})
        deadline = time.monotonic() + self._timeout_seconds
        while True:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                raise TendLookupError(
                    f"clay-mcp call timeout for {method} after {self._timeout_seconds}s."
                )
            try:
                response = self._responses.get(timeout=remaining)
            except queue.Empty:
                continue
            if response.get("_closed"):
                self._process = None
                raise TendLookupError(f"clay-mcp exited while waiting for {method}.")
            if response.get("id") != request_id:
                continue
            error = response.get("error")
            if isinstance(error, dict):
                raise TendLookupError(f"MCP Error: {error.get('message', 'unknown error')}")
            return response.get("result")

    def _notify(self, method: str) -> None:
        self._write({"jsonrpc": "2.0", "method": method})

    def _write(self, message: dict[str, object]) -> None:
        process = self._process
        if process is None or process.stdin is None:
            raise TendLookupError("stdin not available for clay-mcp.")
        try:
            process.stdin.write(json.dumps(message) + "\n")
            process.stdin.flush()
        except OSError as error:
            raise TendLookupError(f"clay-mcp call failed: {error}") from error


def _read_responses(stream: IO[str], responses: "queue.Queue[dict[str, Any]]") -> None:
    """Forward each JSON line from the server to the response queue."""
    for line in stream:
        try:
            message = json.loads(line)
        except json.JSONDecodeError:
            # Servers may print non-protocol debug output on stdout.
            continue
        if isinstance(message, dict):
            responses.put(message)
    responses.put({"_closed": True})
