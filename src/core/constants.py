"""Core constants used across Folio modules.

This module centralizes field names, folder defaults, and env keys.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

PATH_SEPARATOR = "/"
EXTENSION_SEPARATOR = "."
DOCUMENT_ID_FIELD = "documentId"
FILE_PATH_FIELD = "filePath"
CONTENT_FIELD = "content"
BRAND_FIELD = "brand"
NAME_FIELD = "name"
DEFAULT_COLLECTION_NAME = "unsorted-data"
DEFAULT_TEXT_FOLDERS = ("articles", "news")
DEFAULT_INVENTORY_FOLDERS = ("mobiles", "laptops")
MARKDOWN_EXTENSION = "md"
JSON_EXTENSION = "json"
TEXT_ENCODING = "utf-8"
MARKDOWN_IDENTITY_FILENAME = "filename"
MARKDOWN_IDENTITY_CONTENT = "content"
SUPPORTED_MARKDOWN_IDENTITIES = (MARKDOWN_IDENTITY_FILENAME, MARKDOWN_IDENTITY_CONTENT)
BLOB_BACKEND_GCS = "gcs"
BLOB_BACKEND_S3 = "s3"
SUPPORTED_BLOB_BACKENDS = (BLOB_BACKEND_GCS, BLOB_BACKEND_S3)
PIPELINE_MARKDOWN = "markdown"
PIPELINE_INVENTORY = "inventory"
SUPPORTED_PIPELINES = (PIPELINE_MARKDOWN, PIPELINE_INVENTORY)
