"""Folio exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each pipeline stage raises a specific error type for debuggability.
"""

from __future__ import annotations


class FolioError(Exception):
    """Base exception for all Folio failures."""


class FolioConfigError(FolioError):
    """Raised for invalid runtime configuration."""


class FolioValidationError(FolioError):
    """Raised when an uploaded payload fails middleware validation."""


class FolioIngestError(FolioError):
    """Raised when an uploaded blob cannot be fetched."""


class FolioStoreError(FolioError):
    """Raised for document database write failures."""


class FolioDependencyError(FolioError):
    """Raised when an optional cloud SDK dependency is missing."""
