"""Integration tests for the end-to-end upload flow."""

from __future__ import annotations

import asyncio
import json

from core.types import UploadEvent
from ingest.trigger import build_storage_triggers, dispatch_to_all
from tests.fakes import InMemoryBlobStore, InMemoryDocumentStore, build_test_context


def _run_upload(
    blob_store: InMemoryBlobStore,
    document_store: InMemoryDocumentStore,
    file_path: str,
) -> None:
    context = build_test_context(blob_store=blob_store, document_store=document_store)
    event = UploadEvent(file_path=file_path, bucket="uploads")
    asyncio.run(dispatch_to_all(build_storage_triggers(context), event))


def test_markdown_upload_is_written_with_filename_identity() -> None:
    """Markdown uploads land in their folder keyed by file name."""
    blob_store = InMemoryBlobStore({("uploads", "articles/hello-world.md"): b"Line1\n\tLine2"})
    document_store = InMemoryDocumentStore()

    _run_upload(blob_store, document_store, "articles/hello-world.md")

    assert document_store.collections == {
        "articles": {"hello-world": {"content": "Line1&#10;&#9;Line2"}}
    }


def test_json_upload_is_written_without_internal_fields() -> None:
    """Inventory uploads are keyed by brand/name and strip documentId."""
    blob_store = InMemoryBlobStore(
        {("uploads", "mobiles/device.json"): b'{"brand":"Acme","name":"X1"}'}
    )
    document_store = InMemoryDocumentStore()

    _run_upload(blob_store, document_store, "mobiles/device.json")

    stored = document_store.get("mobiles", "acme-x1")
    assert stored == {"brand": "Acme", "name": "X1"}
    assert "documentId" not in stored and "firestoreDocId" not in stored


def test_json_upload_keeps_its_own_file_path_field() -> None:
    """A filePath field in the uploaded JSON is stored like any other field."""
    uploaded = {"brand": "Acme", "name": "X1", "filePath": "/img/x1.png"}
    blob_store = InMemoryBlobStore({("uploads", "mobiles/d.json"): json.dumps(uploaded).encode()})
    document_store = InMemoryDocumentStore()

    _run_upload(blob_store, document_store, "mobiles/d.json")

    assert document_store.get("mobiles", "acme-x1") == uploaded


def test_unrouted_upload_is_ignored() -> None:
    """Uploads outside every allow-list cause no download and no write."""
    blob_store = InMemoryBlobStore({("uploads", "random-folder/file.json"): b"{}"})
    document_store = InMemoryDocumentStore()

    _run_upload(blob_store, document_store, "random-folder/file.json")

    assert blob_store.downloads == [] and document_store.write_count == 0


def test_invalid_upload_fails_quietly() -> None:
    """Validation failures are swallowed at the router boundary."""
    blob_store = InMemoryBlobStore({("uploads", "mobiles/notes.md"): b"# not json"})
    document_store = InMemoryDocumentStore()

    _run_upload(blob_store, document_store, "mobiles/notes.md")

    assert document_store.write_count == 0


def test_identity_collision_keeps_last_write() -> None:
    """Equal slugs overwrite each other; the last upload wins."""
    blob_store = InMemoryBlobStore(
        {
            ("uploads", "mobiles/a.json"): b'{"brand":"Acme","name":"X1","rev":1}',
            ("uploads", "mobiles/b.json"): b'{"brand":"ACME","name":" x1 ","rev":2}',
        }
    )
    document_store = InMemoryDocumentStore()

    _run_upload(blob_store, document_store, "mobiles/a.json")
    _run_upload(blob_store, document_store, "mobiles/b.json")

    assert document_store.get("mobiles", "acme-x1") == {"brand": "ACME", "name": " x1 ", "rev": 2}
