"""Shared typed models.

This module defines immutable data models used by the router, loader,
middleware chain, and writer to keep interfaces explicit and stable.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Mapping, Union

from core.errors import FolioValidationError

DataRecord = Mapping[str, Any]


@dataclass(frozen=True)
class UploadEvent:
    """One finalized object upload delivered by the storage trigger.

    Attributes:
        file_path: Object path inside the bucket, e.g. ``articles/post.md``.
        bucket: Bucket name the object was written to.
    """

    file_path: str
    bucket: str

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "UploadEvent":
        """Build an event from a raw storage notification payload.

        Args:
            payload: Mapping with ``name`` and ``bucket`` keys.

        Returns:
            Parsed upload event.

        Raises:
            FolioValidationError: If the payload has no string object name.
        """
        file_path = payload.get("name")
        if not isinstance(file_path, str):
            raise FolioValidationError(
                "Storage event payload is missing a string 'name' field. "
                "Deliver events with the uploaded object path in 'name'."
            )
        return cls(file_path=file_path, bucket=str(payload.get("bucket", "")))


UploadHandler = Callable[[str, UploadEvent], Awaitable[None]]


@dataclass(frozen=True)
class FolderRoute:
    """Allow-list of upload folders bound to one processing handler."""

    allowed_folders: frozenset[str]
    handler: UploadHandler


@dataclass(frozen=True)
class StageSuccess:
    """Middleware stage outcome carrying the next record."""

    record: DataRecord


@dataclass(frozen=True)
class StageFailure:
    """Middleware stage outcome that stops the chain.

    Attributes:
        stage_name: Name of the stage that rejected the record.
        message: Human-readable rejection reason.
    """

    stage_name: str
    message: str


StageResult = Union[StageSuccess, StageFailure]
Stage = Callable[[DataRecord], StageResult]


@dataclass(frozen=True)
class DocumentWrite:
    """Validated document upsert request.

    Attributes:
        collection: Destination collection name.
        document_id: Document identity inside the collection.
        fields: Persisted fields, free of pipeline-internal metadata.
    """

    collection: str
    document_id: str
    fields: Mapping[str, Any]
