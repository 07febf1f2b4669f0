"""Unit tests for middleware chain composition."""

from __future__ import annotations

import pytest

from core.errors import FolioValidationError
from core.types import DataRecord, StageFailure, StageResult, StageSuccess
from transforms.middleware import compose, fail, run_chain, succeed


def _append(marker: str):
    def _stage(record: DataRecord) -> StageResult:
        return succeed({**record, "trail": [*record.get("trail", []), marker]})

    return _stage


def _reject(record: DataRecord) -> StageResult:
    return fail("reject", "nope")


def test_compose_applies_stages_left_to_right() -> None:
    """Stages should run in the order they are given."""
    result = compose({}, _append("a"), _append("b"), _append("c"))

    assert result == StageSuccess(record={"trail": ["a", "b", "c"]})


def test_compose_without_stages_returns_input() -> None:
    """An empty chain should succeed with the initial record."""
    record = {"name": "x"}

    result = compose(record)

    assert isinstance(result, StageSuccess) and result.record is record


def test_compose_stops_at_first_failure() -> None:
    """Stages after a failure should never run."""
    calls: list[str] = []

    def _spy(record: DataRecord) -> StageResult:
        calls.append("spy")
        return succeed(record)

    result = compose({}, _append("a"), _reject, _spy)

    assert result == StageFailure(stage_name="reject", message="nope")
    assert calls == []


def test_compose_does_not_mutate_initial_record() -> None:
    """Chains fold into new records and leave the input untouched."""
    record = {"trail": ["start"]}

    compose(record, _append("a"))

    assert record == {"trail": ["start"]}


def test_run_chain_raises_validation_error_on_failure() -> None:
    """run_chain should surface stage failures as validation errors."""
    with pytest.raises(FolioValidationError, match="reject: nope"):
        run_chain({}, (_reject,))
