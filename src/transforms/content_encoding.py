"""Content normalization stage.

This module stores Markdown bodies as single-line, entity-safe strings.
HTML-significant characters are entity-escaped first, then newline,
carriage return, and tab become numeric character references.

Decode contract: ``decode_content(encode_content(text)) == text``.
Encoding is not idempotent; a value encoded twice needs two decode
passes but never loses data.
"""

from __future__ import annotations

import html

from core.constants import CONTENT_FIELD
from core.types import DataRecord, StageResult
from transforms.middleware import fail, succeed

_WHITESPACE_ENTITIES = (
    ("\n", "&#10;"),
    ("\r", "&#13;"),
    ("\t", "&#9;"),
)


def normalize_content(record: DataRecord) -> StageResult:
    """Encode the ``content`` field of a record.

    Args:
        record: Input record with a string ``content`` field.

    Returns:
        Success with a copy of the record holding encoded content, or a
        failure when ``content`` is missing or not text.
    """
    content = record.get(CONTENT_FIELD)
    if not isinstance(content, str):
        return fail("normalize_content", f"record has no string '{CONTENT_FIELD}' field")
    return succeed({**record, CONTENT_FIELD: encode_content(content)})


def encode_content(text: str) -> str:
    """Entity-encode text and escape structural whitespace.

    Args:
        text: Raw text.

    Returns:
        Encoded single-line text, e.g. ``"a\\n\\tb"`` -> ``"a&#10;&#9;b"``.
    """
    encoded = html.escape(text, quote=True)
    for character, entity in _WHITESPACE_ENTITIES:
        encoded = encoded.replace(character, entity)
    return encoded


def decode_content(value: str) -> str:
    """Reverse one pass of :func:`encode_content`."""
    return html.unescape(value)
