"""File type validation stage.

This module rejects uploads whose extension does not match the
content type a chain expects.
"""

from __future__ import annotations

from core.constants import EXTENSION_SEPARATOR, FILE_PATH_FIELD
from core.object_path import file_extension
from core.types import DataRecord, Stage, StageResult
from transforms.middleware import fail, succeed

_STAGE_NAME = "validate_file_type"


def validate_file_type(expected_extension: str) -> Stage:
    """Build a stage that checks the ``filePath`` extension.

    Args:
        expected_extension: Extension such as ``"md"`` or ``".json"``.

    Returns:
        Stage that passes the record through unchanged on a
        case-insensitive match and fails otherwise.
    """
    expected = expected_extension.lstrip(EXTENSION_SEPARATOR).lower()

    def _stage(record: DataRecord) -> StageResult:
        file_path = record.get(FILE_PATH_FIELD)
        if not isinstance(file_path, str):
            return fail(_STAGE_NAME, f"record has no string '{FILE_PATH_FIELD}' field")
        actual = file_extension(file_path)
        if actual.lower() != expected:
            return fail(
                _STAGE_NAME,
                f"expected '.{expected}' file but got '{file_path}'",
            )
        return succeed(record)

    return _stage
