"""Process-wide service context.

This module bundles configuration and cloud clients into one immutable
object built at startup and passed explicitly to pipeline handlers.
"""

from __future__ import annotations

from dataclasses import dataclass

from core.config import FolioConfig
from store.blob_store import BlobStore, create_blob_store
from store.document_writer import DocumentStore, create_document_store


@dataclass(frozen=True)
class ServiceContext:
    """Shared, read-only services for every upload event.

    Attributes:
        config: Validated runtime configuration.
        blob_store: Object store used to download uploads.
        document_store: Database receiving final documents.
    """

    config: FolioConfig
    blob_store: BlobStore
    document_store: DocumentStore


def build_service_context(config: FolioConfig | None = None) -> ServiceContext:
    """Create the service context with real cloud clients.

    Args:
        config: Optional runtime configuration, read from env when omitted.

    Returns:
        Service context backed by the configured backends.

    Raises:
        FolioConfigError: If environment configuration is invalid.
        FolioDependencyError: If a required cloud SDK is missing.
    """
    resolved_config = config or FolioConfig.from_env()
    return ServiceContext(
        config=resolved_config,
        blob_store=create_blob_store(resolved_config),
        document_store=create_document_store(resolved_config),
    )
