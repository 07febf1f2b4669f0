"""Upload processing pipelines.

This module wires the content loader, middleware chains, and document
writer into the Markdown and JSON inventory pipelines. Both pipelines
share one chain engine and differ only in their decoder and stage list.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from core.config import FolioConfig
from core.constants import (
    CONTENT_FIELD,
    DOCUMENT_ID_FIELD,
    FILE_PATH_FIELD,
    JSON_EXTENSION,
    MARKDOWN_EXTENSION,
    MARKDOWN_IDENTITY_CONTENT,
    PIPELINE_INVENTORY,
    PIPELINE_MARKDOWN,
    SUPPORTED_PIPELINES,
)
from core.errors import FolioValidationError
from core.logging_config import get_logger
from core.object_path import parent_folder_name
from core.types import DataRecord, DocumentWrite, FolderRoute, Stage, UploadEvent, UploadHandler
from ingest.content_loader import decode_json_record, decode_markdown_record, load_blob
from store.document_writer import resolve_collection_name, write_document
from store.service_context import ServiceContext
from transforms.content_encoding import normalize_content
from transforms.document_id import compute_document_id, filename_to_document_id
from transforms.field_filters import clear_fields, require_fields
from transforms.file_type import validate_file_type
from transforms.middleware import run_chain

_LOGGER = get_logger(__name__)

RecordDecoder = Callable[[str, bytes], DataRecord]


@dataclass(frozen=True)
class ContentPipeline:
    """Decoder plus middleware stages for one content type.

    Attributes:
        name: Pipeline name used in logs.
        decoder: Converts raw upload bytes into the upload's own fields.
        stages: Middleware stages applied in order.
        fallback_collection: Collection used for uploads at the bucket root.
    """

    name: str
    decoder: RecordDecoder
    stages: tuple[Stage, ...]
    fallback_collection: str

    def transform(self, file_path: str, payload: bytes) -> DocumentWrite:
        """Decode and transform one upload into a document write.

        Args:
            file_path: Object path of the upload.
            payload: Raw object bytes.

        Returns:
            Write request with identity and persisted fields.

        Raises:
            FolioValidationError: If decoding or any stage fails.
        """
        source_fields = self.decoder(file_path, payload)
        record = run_chain({**source_fields, FILE_PATH_FIELD: file_path}, self.stages)
        collection = resolve_collection_name(
            parent_folder_name(file_path), self.fallback_collection
        )
        return build_document_write(record, collection, source_fields)


def build_markdown_pipeline(config: FolioConfig) -> ContentPipeline:
    """Build the Markdown pipeline for the configured identity source."""
    identity_stage: Stage = filename_to_document_id
    if config.markdown_identity == MARKDOWN_IDENTITY_CONTENT:
        identity_stage = compute_document_id
    return ContentPipeline(
        name=PIPELINE_MARKDOWN,
        decoder=decode_markdown_record,
        stages=(
            validate_file_type(MARKDOWN_EXTENSION),
            require_fields(CONTENT_FIELD),
            identity_stage,
            normalize_content,
        ),
        fallback_collection=config.fallback_collection,
    )


def build_inventory_pipeline(config: FolioConfig) -> ContentPipeline:
    """Build the JSON inventory pipeline."""
    return ContentPipeline(
        name=PIPELINE_INVENTORY,
        decoder=decode_json_record,
        stages=(validate_file_type(JSON_EXTENSION), compute_document_id),
        fallback_collection=config.fallback_collection,
    )


def build_document_write(
    record: DataRecord,
    collection: str,
    source_fields: DataRecord | None = None,
) -> DocumentWrite:
    """Split a transformed record into identity and persisted fields.

    The chain sees the object path under ``filePath``. That field is
    cleared before the write unless the upload carried its own
    ``filePath``, in which case the uploaded value is persisted.

    Args:
        record: Final chain output carrying ``documentId``.
        collection: Destination collection.
        source_fields: Decoded upload fields before the chain ran.

    Returns:
        Write request without pipeline-internal fields.

    Raises:
        FolioValidationError: If the chain produced no usable identity.
    """
    document_id = record.get(DOCUMENT_ID_FIELD)
    if not isinstance(document_id, str) or not document_id.strip():
        raise FolioValidationError(
            f"Middleware chain produced no '{DOCUMENT_ID_FIELD}' for {record.get(FILE_PATH_FIELD)}. "
            "Add an identity stage to the chain."
        )
    fields = run_chain(record, (clear_fields(DOCUMENT_ID_FIELD, FILE_PATH_FIELD),))
    if source_fields is not None and FILE_PATH_FIELD in source_fields:
        fields = {**fields, FILE_PATH_FIELD: source_fields[FILE_PATH_FIELD]}
    return DocumentWrite(collection=collection, document_id=document_id, fields=fields)


class UploadProcessor:
    """Runs one content pipeline end to end for accepted upload events."""

    def __init__(self, context: ServiceContext, pipeline: ContentPipeline) -> None:
        self._context = context
        self._pipeline = pipeline

    async def __call__(self, file_path: str, event: UploadEvent) -> None:
        """Process one upload; errors propagate to the router boundary."""
        await self.process(file_path, event)

    async def process(self, file_path: str, event: UploadEvent) -> DocumentWrite:
        """Fetch, transform, and persist one upload.

        Args:
            file_path: Object path of the upload.
            event: Upload event carrying the bucket.

        Returns:
            The applied write request.

        Raises:
            FolioIngestError: If the download fails.
            FolioValidationError: If decoding or a middleware stage fails.
            FolioStoreError: If the document write fails.
        """
        payload = await load_blob(self._context.blob_store, event.bucket, file_path)
        request = self._pipeline.transform(file_path, payload)
        await write_document(
            self._context.document_store,
            request.collection,
            request.document_id,
            request.fields,
        )
        _LOGGER.info(
            "upload_processed",
            pipeline=self._pipeline.name,
            file_path=file_path,
            collection=request.collection,
            document_id=request.document_id,
        )
        return request


def build_folder_routes(context: ServiceContext) -> dict[str, FolderRoute]:
    """Bind each pipeline to its configured folder allow-list.

    Args:
        context: Shared service context.

    Returns:
        Folder routes keyed by pipeline name.
    """
    config = context.config
    markdown_handler: UploadHandler = UploadProcessor(context, build_markdown_pipeline(config))
    inventory_handler: UploadHandler = UploadProcessor(context, build_inventory_pipeline(config))
    return {
        PIPELINE_MARKDOWN: FolderRoute(
            allowed_folders=config.text_folders, handler=markdown_handler
        ),
        PIPELINE_INVENTORY: FolderRoute(
            allowed_folders=config.inventory_folders, handler=inventory_handler
        ),
    }


def build_pipeline(pipeline_name: str, config: FolioConfig) -> ContentPipeline:
    """Return the content pipeline registered under *pipeline_name*."""
    if pipeline_name == PIPELINE_MARKDOWN:
        return build_markdown_pipeline(config)
    if pipeline_name == PIPELINE_INVENTORY:
        return build_inventory_pipeline(config)
    raise ValueError(
        f"Unsupported pipeline '{pipeline_name}'. "
        f"Choose one of {list(SUPPORTED_PIPELINES)}."
    )
