"""Runtime configuration model for Folio.

This module owns all environment variable and routes-file parsing.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
import os
from pathlib import Path
from typing import Mapping, cast

import yaml

from core.constants import (
    BLOB_BACKEND_GCS,
    DEFAULT_COLLECTION_NAME,
    DEFAULT_INVENTORY_FOLDERS,
    DEFAULT_TEXT_FOLDERS,
    MARKDOWN_IDENTITY_FILENAME,
    SUPPORTED_BLOB_BACKENDS,
    SUPPORTED_MARKDOWN_IDENTITIES,
)
from core.errors import FolioConfigError

_ROUTES_FILE_KEYS = (
    "text_folders",
    "inventory_folders",
    "fallback_collection",
    "markdown_identity",
)


@dataclass(frozen=True)
class FolioConfig:
    """Validated runtime configuration.

    Attributes:
        text_folders: Upload folders routed to the Markdown pipeline.
        inventory_folders: Upload folders routed to the JSON inventory pipeline.
        fallback_collection: Collection used when the upload has no parent folder.
        markdown_identity: Identity source for Markdown uploads ("filename" or "content").
        blob_backend: Object store backend used for downloads ("gcs" or "s3").
        s3_region: Optional default AWS region for S3 downloads.
        s3_profile: Optional AWS profile for boto3 session initialization.
        gcp_project: Optional Google Cloud project for storage and Firestore clients.
        firestore_database: Optional Firestore database id.
    """

    text_folders: frozenset[str] = frozenset(DEFAULT_TEXT_FOLDERS)
    inventory_folders: frozenset[str] = frozenset(DEFAULT_INVENTORY_FOLDERS)
    fallback_collection: str = DEFAULT_COLLECTION_NAME
    markdown_identity: str = MARKDOWN_IDENTITY_FILENAME
    blob_backend: str = BLOB_BACKEND_GCS
    s3_region: str | None = None
    s3_profile: str | None = None
    gcp_project: str | None = None
    firestore_database: str | None = None

    @classmethod
    def from_env(cls) -> "FolioConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            FolioConfigError: If environment values or the routes file are invalid.
        """
        config = cls(
            text_folders=_parse_folder_list(
                os.getenv("FOLIO_TEXT_FOLDERS"), DEFAULT_TEXT_FOLDERS
            ),
            inventory_folders=_parse_folder_list(
                os.getenv("FOLIO_INVENTORY_FOLDERS"), DEFAULT_INVENTORY_FOLDERS
            ),
            fallback_collection=os.getenv("FOLIO_FALLBACK_COLLECTION", DEFAULT_COLLECTION_NAME),
            markdown_identity=os.getenv("FOLIO_MARKDOWN_IDENTITY", MARKDOWN_IDENTITY_FILENAME),
            blob_backend=os.getenv("FOLIO_BLOB_BACKEND", BLOB_BACKEND_GCS),
            s3_region=os.getenv("FOLIO_S3_REGION"),
            s3_profile=os.getenv("FOLIO_S3_PROFILE"),
            gcp_project=os.getenv("FOLIO_GCP_PROJECT"),
            firestore_database=os.getenv("FOLIO_FIRESTORE_DATABASE"),
        )
        routes_file = os.getenv("FOLIO_ROUTES_FILE")
        if routes_file:
            config = apply_routes_file(config, routes_file)
        return validate_config(config)


def apply_routes_file(config: FolioConfig, routes_path: str) -> FolioConfig:
    """Override routing settings from a YAML routes file.

    Args:
        config: Base configuration, usually built from environment.
        routes_path: Path to the YAML routes file.

    Returns:
        Config with routing fields replaced by file values.

    Raises:
        FolioConfigError: If the file is missing, malformed, or has unknown keys.
    """
    payload = _load_routes_payload(routes_path)
    unknown_keys = sorted(set(payload) - set(_ROUTES_FILE_KEYS))
    if unknown_keys:
        raise FolioConfigError(
            f"Unsupported keys in routes file {routes_path}: {unknown_keys}. "
            f"Allowed keys: {list(_ROUTES_FILE_KEYS)}."
        )
    overrides: dict[str, object] = {}
    for key in ("text_folders", "inventory_folders"):
        if key in payload:
            overrides[key] = _expect_folder_sequence(payload[key], key)
    for key in ("fallback_collection", "markdown_identity"):
        if key in payload:
            overrides[key] = _expect_string(payload[key], key)
    return replace(config, **overrides)  # type: ignore[arg-type]


def validate_config(config: FolioConfig) -> FolioConfig:
    """Check enumerated settings and the fallback collection name.

    Args:
        config: Candidate configuration.

    Returns:
        The same config when valid.

    Raises:
        FolioConfigError: If any setting is outside its supported values.
    """
    if config.markdown_identity not in SUPPORTED_MARKDOWN_IDENTITIES:
        raise FolioConfigError(
            f"Invalid FOLIO_MARKDOWN_IDENTITY value '{config.markdown_identity}'. "
            f"Choose one of {list(SUPPORTED_MARKDOWN_IDENTITIES)}."
        )
    if config.blob_backend not in SUPPORTED_BLOB_BACKENDS:
        raise FolioConfigError(
            f"Invalid FOLIO_BLOB_BACKEND value '{config.blob_backend}'. "
            f"Choose one of {list(SUPPORTED_BLOB_BACKENDS)}."
        )
    if not config.fallback_collection.strip():
        raise FolioConfigError(
            "FOLIO_FALLBACK_COLLECTION must not be blank. "
            "Set it to a collection name such as 'unsorted-data'."
        )
    return config


def _parse_folder_list(raw_value: str | None, default: tuple[str, ...]) -> frozenset[str]:
    """Parse a comma-separated folder allow-list.

    Args:
        raw_value: Raw string from environment, or None when unset.
        default: Folders used when the variable is unset.

    Returns:
        Set of trimmed, non-empty folder names.
    """
    if raw_value is None:
        return frozenset(default)
    return frozenset(part.strip() for part in raw_value.split(",") if part.strip())


def _load_routes_payload(routes_path: str) -> Mapping[str, object]:
    routes_file = Path(routes_path).expanduser().resolve()
    if not routes_file.exists():
        raise FolioConfigError(
            f"Routes file does not exist at {routes_file}. "
            "Fix FOLIO_ROUTES_FILE or unset it."
        )
    try:
        payload = cast(object, yaml.safe_load(routes_file.read_text(encoding="utf-8")))
    except OSError as error:
        raise FolioConfigError(
            f"Failed to read routes file at {routes_file}: {error}. Check file permissions."
        ) from error
    except yaml.YAMLError as error:
        raise FolioConfigError(
            f"Failed to parse YAML routes file at {routes_file}: {error}. Fix YAML syntax."
        ) from error
    if payload is None:
        return {}
    if not isinstance(payload, Mapping):
        raise FolioConfigError(
            f"Routes file at {routes_file} must contain a mapping at the top level."
        )
    return cast(Mapping[str, object], payload)


def _expect_folder_sequence(value: object, key: str) -> frozenset[str]:
    if isinstance(value, str) or not isinstance(value, (list, tuple)):
        raise FolioConfigError(f"Routes file key '{key}' must be a list of folder names.")
    folders: set[str] = set()
    for item in value:
        if not isinstance(item, str):
            raise FolioConfigError(
                f"Routes file key '{key}' must contain strings, got {type(item).__name__}."
            )
        folders.add(item.strip())
    return frozenset(folders)


def _expect_string(value: object, key: str) -> str:
    if not isinstance(value, str):
        raise FolioConfigError(
            f"Routes file key '{key}' must be a string, got {type(value).__name__}."
        )
    return value
