"""Document identity stages.

This module derives the ``documentId`` under which a record is stored.
Content-derived identities are canonical slugs, so inputs that differ
only in case or spacing collide on purpose and act as a dedup key.
"""

from __future__ import annotations

from uuid import uuid4

from core.constants import BRAND_FIELD, DOCUMENT_ID_FIELD, FILE_PATH_FIELD, NAME_FIELD
from core.object_path import file_stem
from core.types import DataRecord, StageResult
from transforms.middleware import fail, succeed


def compute_document_id(record: DataRecord) -> StageResult:
    """Derive ``documentId`` from the ``brand`` and ``name`` fields.

    A blank ``name`` is replaced by a fresh random UUID on every call, so
    two records without a name never share an identity. Falsy JSON values
    (``null``, ``false``, ``0``, ``""``) count as blank for both ``brand``
    and ``name``. Other non-string values use their ``str()`` form.

    Args:
        record: Input record.

    Returns:
        Success with a copy of the record carrying ``documentId``.
    """
    brand = slugify(_field_text(record, BRAND_FIELD))
    name = slugify(_field_text(record, NAME_FIELD))
    if not name:
        name = str(uuid4())
    document_id = f"{brand}-{name}" if brand else name
    return succeed({**record, DOCUMENT_ID_FIELD: document_id})


def filename_to_document_id(record: DataRecord) -> StageResult:
    """Derive ``documentId`` from the uploaded file's base name.

    ``articles/My-Post.md`` becomes ``my-post``.

    Args:
        record: Input record with a ``filePath`` field.

    Returns:
        Success with a copy of the record carrying ``documentId``, or a
        failure when ``filePath`` is missing.
    """
    file_path = record.get(FILE_PATH_FIELD)
    if not isinstance(file_path, str):
        return fail(
            "filename_to_document_id",
            f"record has no string '{FILE_PATH_FIELD}' field",
        )
    document_id = file_stem(file_path).lower()
    return succeed({**record, DOCUMENT_ID_FIELD: document_id})


def slugify(text: str) -> str:
    """Lower-case, trim, and collapse internal whitespace to single hyphens.

    Args:
        text: Free-text value.

    Returns:
        Canonical slug, e.g. ``"Wireless  Mouse "`` -> ``"wireless-mouse"``.
    """
    return "-".join(text.lower().split())


def _field_text(record: DataRecord, field_name: str) -> str:
    value = record.get(field_name)
    if not value:
        return ""
    return str(value)
