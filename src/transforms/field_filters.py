"""Field presence and removal stages."""

from __future__ import annotations

from core.types import DataRecord, Stage, StageResult
from transforms.middleware import fail, succeed


def clear_fields(*field_names: str) -> Stage:
    """Build a stage that drops the named fields from a record copy.

    Args:
        field_names: Fields to remove; absent names are ignored.

    Returns:
        Stage leaving every other field untouched.
    """
    removed = frozenset(field_names)

    def _stage(record: DataRecord) -> StageResult:
        return succeed({key: value for key, value in record.items() if key not in removed})

    return _stage


def require_fields(*field_names: str) -> Stage:
    """Build a stage that fails when any named field is missing or not text."""

    def _stage(record: DataRecord) -> StageResult:
        for field_name in field_names:
            if not isinstance(record.get(field_name), str):
                return fail("require_fields", f"record has no string '{field_name}' field")
        return succeed(record)

    return _stage
