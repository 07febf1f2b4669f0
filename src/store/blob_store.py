"""Object store download backends.

This module encapsulates Google Cloud Storage and boto3 S3 client
creation behind one small download interface used by the loader.
"""

from __future__ import annotations

from typing import Any, Protocol

from core.config import FolioConfig
from core.constants import BLOB_BACKEND_S3
from core.errors import FolioDependencyError


class BlobStore(Protocol):
    """Download interface the content loader depends on."""

    def download(self, bucket: str, file_path: str) -> bytes:
        """Return the raw bytes of one object."""
        ...


class GcsBlobStore:
    """Google Cloud Storage backed blob store."""

    def __init__(self, client: Any) -> None:
        self._client = client

    def download(self, bucket: str, file_path: str) -> bytes:
        """Download one object through the storage client."""
        blob = self._client.bucket(bucket).blob(file_path)
        return bytes(blob.download_as_bytes())


class S3BlobStore:
    """Amazon S3 backed blob store."""

    def __init__(self, client: Any) -> None:
        self._client = client

    def download(self, bucket: str, file_path: str) -> bytes:
        """Download one object through the boto3 S3 client."""
        response = self._client.get_object(Bucket=bucket, Key=file_path)
        return bytes(response["Body"].read())


def create_blob_store(config: FolioConfig) -> BlobStore:
    """Create the configured blob store backend.

    Args:
        config: Runtime config naming the backend and its session settings.

    Returns:
        Ready-to-use blob store.

    Raises:
        FolioDependencyError: If the backend's SDK is not installed.
    """
    if config.blob_backend == BLOB_BACKEND_S3:
        return S3BlobStore(_create_s3_client(config))
    return GcsBlobStore(_create_gcs_client(config))


def _create_gcs_client(config: FolioConfig) -> Any:
    try:
        from google.cloud import storage
    except ImportError as error:
        raise FolioDependencyError(
            "GCS downloads require google-cloud-storage, but it is not installed. "
            "Install google-cloud-storage or set FOLIO_BLOB_BACKEND=s3."
        ) from error
    return storage.Client(project=config.gcp_project)


def _create_s3_client(config: FolioConfig) -> Any:
    """Create a boto3 S3 client.

    Args:
        config: Runtime config containing optional profile/region.

    Returns:
        Boto3 S3 client.

    Raises:
        FolioDependencyError: If boto3 is missing.
    """
    try:
        import boto3
    except ImportError as error:
        raise FolioDependencyError(
            "S3 downloads require boto3, but it is not installed. "
            "Install boto3 or set FOLIO_BLOB_BACKEND=gcs."
        ) from error
    session = boto3.session.Session(**build_boto3_session_kwargs(config))
    return session.client("s3")


def build_boto3_session_kwargs(config: FolioConfig) -> dict[str, str]:
    """Build boto3 Session kwargs from config.

    Args:
        config: Runtime config.

    Returns:
        Session keyword arguments.
    """
    kwargs: dict[str, str] = {}
    if config.s3_profile:
        kwargs["profile_name"] = config.s3_profile
    if config.s3_region:
        kwargs["region_name"] = config.s3_region
    return kwargs
