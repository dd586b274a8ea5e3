"""Tend exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each subsystem raises a specific error type for debuggability.
"""

from __future__ import annotations


class TendError(Exception):
    """Base exception for all Tend failures."""


class TendConfigError(TendError):
    """Raised for invalid runtime configuration."""


class TendIngestError(TendError):
    """Raised for batch source reading and parsing failures."""


class TendCheckpointError(TendError):
    """Raised when checkpoint state cannot be persisted."""


class TendLookupError(TendError):
    """Raised when an external contact lookup fails."""


class TendVaultError(TendError):
    """Raised for vault layout and document write failures."""


class TendVersionConflictError(TendVaultError):
    """Raised when every versioned filename slot is already taken."""


class TendDependencyError(TendError):
    """Raised when an optional runtime dependency is missing."""
