"""Unit tests for upload content loading."""

from __future__ import annotations

import asyncio

import pytest

from core.errors import FolioIngestError, FolioValidationError
from ingest.content_loader import decode_json_record, decode_markdown_record, load_blob
from tests.fakes import InMemoryBlobStore


def test_load_blob_returns_object_bytes(blob_store: InMemoryBlobStore) -> None:
    """Loader should return the stored bytes for bucket and path."""
    blob_store.put("uploads", "articles/a.md", b"hello")

    payload = asyncio.run(load_blob(blob_store, "uploads", "articles/a.md"))

    assert payload == b"hello"


def test_load_blob_wraps_download_failures(blob_store: InMemoryBlobStore) -> None:
    """Missing objects should surface as ingest errors."""
    with pytest.raises(FolioIngestError):
        asyncio.run(load_blob(blob_store, "uploads", "articles/missing.md"))


def test_decode_markdown_record_wraps_text() -> None:
    """Markdown bytes should become a content record."""
    record = decode_markdown_record("articles/a.md", "héllo\n".encode("utf-8"))

    assert record == {"content": "héllo\n"}


def test_decode_markdown_record_rejects_invalid_utf8() -> None:
    """Non UTF-8 uploads are validation failures."""
    with pytest.raises(FolioValidationError):
        decode_markdown_record("articles/a.md", b"\xff\xfe")


def test_decode_json_record_returns_object_fields() -> None:
    """JSON objects should decode to exactly their own fields."""
    record = decode_json_record("mobiles/x.json", b'{"brand": "Acme", "name": "X1"}')

    assert record == {"brand": "Acme", "name": "X1"}


def test_decode_json_record_keeps_uploaded_file_path() -> None:
    """A filePath field inside the upload is not replaced by the object path."""
    record = decode_json_record("mobiles/x.json", b'{"name": "X1", "filePath": "/img/x1.png"}')

    assert record["filePath"] == "/img/x1.png"


@pytest.mark.parametrize("payload", [b'{"brand": ', b"[1, 2]", b'"text"'])
def test_decode_json_record_rejects_bad_payloads(payload: bytes) -> None:
    """Malformed JSON or non-object roots are validation failures."""
    with pytest.raises(FolioValidationError):
        decode_json_record("mobiles/x.json", payload)
