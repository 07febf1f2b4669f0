"""Unit tests for blob store backends."""

from __future__ import annotations

import io
from typing import Any

from core.config import FolioConfig
from store.blob_store import GcsBlobStore, S3BlobStore, build_boto3_session_kwargs


class _FakeGcsBlob:
    def __init__(self, payload: bytes) -> None:
        self._payload = payload

    def download_as_bytes(self) -> bytes:
        return self._payload


class _FakeGcsBucket:
    def __init__(self, objects: dict[str, bytes]) -> None:
        self._objects = objects

    def blob(self, name: str) -> _FakeGcsBlob:
        return _FakeGcsBlob(self._objects[name])


class _FakeGcsClient:
    def __init__(self, buckets: dict[str, dict[str, bytes]]) -> None:
        self._buckets = buckets

    def bucket(self, name: str) -> _FakeGcsBucket:
        return _FakeGcsBucket(self._buckets[name])


class _FakeS3Client:
    def __init__(self) -> None:
        self.requests: list[dict[str, Any]] = []

    def get_object(self, **kwargs: Any) -> dict[str, Any]:
        self.requests.append(kwargs)
        return {"Body": io.BytesIO(b"s3-bytes")}


def test_gcs_blob_store_downloads_object() -> None:
    """GCS store should read blob bytes from the named bucket."""
    client = _FakeGcsClient({"uploads": {"articles/a.md": b"gcs-bytes"}})

    payload = GcsBlobStore(client).download("uploads", "articles/a.md")

    assert payload == b"gcs-bytes"


def test_s3_blob_store_downloads_object() -> None:
    """S3 store should request the object by bucket and key."""
    client = _FakeS3Client()

    payload = S3BlobStore(client).download("uploads", "mobiles/x.json")

    assert payload == b"s3-bytes"
    assert client.requests == [{"Bucket": "uploads", "Key": "mobiles/x.json"}]


def test_build_boto3_session_kwargs_includes_set_values() -> None:
    """Only configured profile and region should be forwarded."""
    config = FolioConfig(s3_region="eu-west-1")

    assert build_boto3_session_kwargs(config) == {"region_name": "eu-west-1"}
