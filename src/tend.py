"""Public SDK surface for Tend.

This module provides a stable import path for SDK users.
It re-exports the primary client and typed option models.
"""

from __future__ import annotations

from core.config import TendConfig
from core.types import BatchSyncOptions, BatchSyncResult, RowOutcome, UpsertResult
from ingest.normalizer import normalize_contact
from ingest.sync_sdk import TendClient
from vault.document_renderer import render_contact_document

__all__ = [
    "BatchSyncOptions",
    "BatchSyncResult",
    "RowOutcome",
    "TendClient",
    "TendConfig",
    "UpsertResult",
    "normalize_contact",
    "render_contact_document",
]
