"""Middleware chain composition.

This module folds a record through an ordered list of pure stages.
Each stage returns a StageResult; the first failure ends the chain
and no later stage observes the rejected record.
"""

from __future__ import annotations

from typing import Sequence

from core.errors import FolioValidationError
from core.types import DataRecord, Stage, StageFailure, StageResult, StageSuccess


def compose(record: DataRecord, *stages: Stage) -> StageResult:
    """Apply stages left to right, short-circuiting on failure.

    Args:
        record: Initial data record.
        stages: Middleware stages, applied in order.

    Returns:
        Success with the final record, or the first stage failure.
    """
    result: StageResult = StageSuccess(record=record)
    for stage in stages:
        result = stage(result.record)
        if isinstance(result, StageFailure):
            return result
    return result


def run_chain(record: DataRecord, stages: Sequence[Stage]) -> DataRecord:
    """Run a chain and unwrap its result.

    Args:
        record: Initial data record.
        stages: Middleware stages, applied in order.

    Returns:
        Final transformed record.

    Raises:
        FolioValidationError: If any stage rejects the record.
    """
    result = compose(record, *stages)
    if isinstance(result, StageFailure):
        raise FolioValidationError(f"{result.stage_name}: {result.message}")
    return result.record


def succeed(record: DataRecord) -> StageSuccess:
    """Wrap a record as a successful stage outcome."""
    return StageSuccess(record=record)


def fail(stage_name: str, message: str) -> StageFailure:
    """Build a stage failure outcome."""
    return StageFailure(stage_name=stage_name, message=message)
