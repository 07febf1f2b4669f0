"""Shared pytest configuration and fixtures."""

from __future__ import annotations

import pytest

from tests.fakes import InMemoryBlobStore, InMemoryDocumentStore

_FOLIO_ENV_VARS = (
    "FOLIO_TEXT_FOLDERS",
    "FOLIO_INVENTORY_FOLDERS",
    "FOLIO_FALLBACK_COLLECTION",
    "FOLIO_MARKDOWN_IDENTITY",
    "FOLIO_BLOB_BACKEND",
    "FOLIO_ROUTES_FILE",
)


@pytest.fixture(autouse=True)
def _isolate_folio_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer FOLIO_* variables out of test runs."""
    for name in _FOLIO_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def blob_store() -> InMemoryBlobStore:
    return InMemoryBlobStore()


@pytest.fixture
def document_store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()
