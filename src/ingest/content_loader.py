"""Upload content loading and decoding.

This module downloads uploaded objects and decodes them into the
initial data record of a middleware chain.
"""

from __future__ import annotations

import asyncio
import json

from core.constants import CONTENT_FIELD, TEXT_ENCODING
from core.errors import FolioIngestError, FolioValidationError
from core.logging_config import get_logger
from core.types import DataRecord
from store.blob_store import BlobStore

_LOGGER = get_logger(__name__)


async def load_blob(blob_store: BlobStore, bucket: str, file_path: str) -> bytes:
    """Download one uploaded object.

    Args:
        blob_store: Object store backend.
        bucket: Bucket holding the object.
        file_path: Object path inside the bucket.

    Returns:
        Raw object bytes.

    Raises:
        FolioIngestError: If the object is missing or unreadable.
    """
    try:
        payload = await asyncio.to_thread(blob_store.download, bucket, file_path)
    except Exception as error:
        raise FolioIngestError(
            f"Failed to download {file_path} from bucket '{bucket}': {error}. "
            "Check that the object exists and the function can read it."
        ) from error
    _LOGGER.info("blob_downloaded", bucket=bucket, file_path=file_path, size=len(payload))
    return payload


def decode_markdown_record(file_path: str, payload: bytes) -> DataRecord:
    """Decode Markdown bytes into a ``{content}`` record.

    Raises:
        FolioValidationError: If the payload is not valid UTF-8.
    """
    return {CONTENT_FIELD: _decode_text(file_path, payload)}


def decode_json_record(file_path: str, payload: bytes) -> DataRecord:
    """Parse JSON bytes into the uploaded object's own fields.

    The object path is not added here. Fields such as ``filePath`` that
    the upload itself carries are returned untouched.

    Args:
        file_path: Object path of the upload, used in error messages.
        payload: Raw object bytes.

    Returns:
        Parsed object fields.

    Raises:
        FolioValidationError: If bytes are not UTF-8 JSON with an object root.
    """
    text = _decode_text(file_path, payload)
    try:
        parsed = json.loads(text)
    except json.JSONDecodeError as error:
        raise FolioValidationError(
            f"Failed to parse JSON upload {file_path} at line {error.lineno}: {error.msg}. "
            "Fix the JSON syntax and upload again."
        ) from error
    if not isinstance(parsed, dict):
        raise FolioValidationError(
            f"Invalid JSON upload {file_path}: expected an object at the top level, "
            f"got {type(parsed).__name__}."
        )
    return parsed


def _decode_text(file_path: str, payload: bytes) -> str:
    try:
        return payload.decode(TEXT_ENCODING)
    except UnicodeDecodeError as error:
        raise FolioValidationError(
            f"Upload {file_path} is not valid UTF-8: {error.reason} at byte {error.start}."
        ) from error
