"""Public SDK surface for Folio.

This module provides a stable import path for embedding the pipelines.
It re-exports the router, chain engine, stages, and typed models.
"""

from __future__ import annotations

from core.config import FolioConfig
from core.types import DocumentWrite, FolderRoute, StageFailure, StageSuccess, UploadEvent
from ingest.pipeline import (
    ContentPipeline,
    UploadProcessor,
    build_inventory_pipeline,
    build_markdown_pipeline,
)
from ingest.routing import create_storage_event, route_upload
from store.document_writer import resolve_collection_name, write_document
from store.service_context import ServiceContext, build_service_context
from transforms.content_encoding import decode_content, encode_content, normalize_content
from transforms.document_id import compute_document_id, filename_to_document_id
from transforms.field_filters import clear_fields, require_fields
from transforms.file_type import validate_file_type
from transforms.middleware import compose, run_chain

__all__ = [
    "ContentPipeline",
    "DocumentWrite",
    "FolderRoute",
    "FolioConfig",
    "ServiceContext",
    "StageFailure",
    "StageSuccess",
    "UploadEvent",
    "UploadProcessor",
    "build_inventory_pipeline",
    "build_markdown_pipeline",
    "build_service_context",
    "clear_fields",
    "compose",
    "compute_document_id",
    "create_storage_event",
    "decode_content",
    "encode_content",
    "filename_to_document_id",
    "normalize_content",
    "require_fields",
    "resolve_collection_name",
    "route_upload",
    "run_chain",
    "validate_file_type",
    "write_document",
]
