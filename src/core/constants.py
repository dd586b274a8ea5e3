"""Core constants used across Tend modules.

This module centralizes non-domain-specific constants.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

from pathlib import Path

DEFAULT_DATA_ROOT = Path(".tend")
DEFAULT_PRIORITY_FILE = Path("config/group-priority.md")
CHECKPOINT_FILE_NAME = "tend-checkpoint.txt"
JOURNAL_FILE_NAME = "Tend-log.md"
DOCUMENT_EXTENSION = ".md"
FALLBACK_FOLDER_NAME = "Ungrouped"
MAX_DOCUMENT_VERSIONS = 5
MAX_FILENAME_LENGTH = 200
ILLEGAL_FILENAME_CHARACTERS = '<>:"/\\|?*'
SYSTEM_GROUP_PREFIX = "_"
SEQUENCE_SIGNATURE_COLUMN = "sequence"
DEFAULT_REQUEST_DELAY_SECONDS = 1.0
DEFAULT_REQUEST_TIMEOUT_SECONDS = 30.0
DEFAULT_SEARCH_LIMIT = 10
DEFAULT_LOOKUP_BACKEND = "api"
SUPPORTED_LOOKUP_BACKENDS = ("api", "mcp", "fixtures")
DEFAULT_CLAY_API_URL = "https://api.clay.earth/api/v1"
DEFAULT_MCP_COMMAND = ("npx", "@clayhq/clay-mcp@latest")
MCP_STARTUP_GRACE_SECONDS = 0.5
HTTP_USER_AGENT = "Tend/1.0"
DORMANT_AFTER_DAYS = 365
HIGH_PRIORITY_SCORE = 80
MEDIUM_PRIORITY_SCORE = 40
