"""Document database writer.

This module resolves destination collections and performs full-document
upserts keyed by the computed document identity.
"""

from __future__ import annotations

import asyncio
from typing import Any, Mapping, Protocol

from core.config import FolioConfig
from core.constants import DOCUMENT_ID_FIELD
from core.errors import FolioDependencyError, FolioStoreError
from core.logging_config import get_logger
from core.types import DataRecord, DocumentWrite

_LOGGER = get_logger(__name__)


class DocumentStore(Protocol):
    """Upsert interface the writer depends on."""

    def set(self, collection: str, document_id: str, fields: Mapping[str, Any]) -> None:
        """Create or fully replace one document."""
        ...


class FirestoreDocumentStore:
    """Firestore backed document store."""

    def __init__(self, client: Any) -> None:
        self._client = client

    def set(self, collection: str, document_id: str, fields: Mapping[str, Any]) -> None:
        """Replace the document, dropping fields absent from *fields*."""
        document_ref = self._client.collection(collection).document(document_id)
        document_ref.set(dict(fields))


def create_document_store(config: FolioConfig) -> DocumentStore:
    """Create a Firestore document store.

    Args:
        config: Runtime config with optional project and database ids.

    Returns:
        Ready-to-use document store.

    Raises:
        FolioDependencyError: If google-cloud-firestore is missing.
    """
    try:
        from google.cloud import firestore
    except ImportError as error:
        raise FolioDependencyError(
            "Document writes require google-cloud-firestore, but it is not installed. "
            "Install google-cloud-firestore to persist uploads."
        ) from error
    client_kwargs: dict[str, str] = {}
    if config.gcp_project:
        client_kwargs["project"] = config.gcp_project
    if config.firestore_database:
        client_kwargs["database"] = config.firestore_database
    return FirestoreDocumentStore(firestore.Client(**client_kwargs))


def resolve_collection_name(folder_name: str, fallback_collection: str) -> str:
    """Return the folder name, or the fallback collection when it is empty."""
    return folder_name or fallback_collection


async def write_document(
    document_store: DocumentStore,
    collection: str,
    document_id: str,
    record: DataRecord,
) -> DocumentWrite:
    """Upsert *record* under *document_id* inside *collection*.

    The reserved ``documentId`` field is never persisted.

    Args:
        document_store: Destination store.
        collection: Collection name.
        document_id: Document identity.
        record: Fields to persist.

    Returns:
        The write request that was applied.

    Raises:
        FolioStoreError: If the store rejects the write.
    """
    request = DocumentWrite(
        collection=collection,
        document_id=document_id,
        fields={key: value for key, value in record.items() if key != DOCUMENT_ID_FIELD},
    )
    try:
        await asyncio.to_thread(
            document_store.set, request.collection, request.document_id, request.fields
        )
    except Exception as error:
        raise FolioStoreError(
            f"Failed to write document '{document_id}' to collection '{collection}': "
            f"{error}. Check database availability and credentials."
        ) from error
    _LOGGER.info(
        "document_written",
        collection=collection,
        document_id=document_id,
        field_count=len(request.fields),
    )
    return request
