"""Unit tests for the Cloud Functions entry points."""

from __future__ import annotations

from types import SimpleNamespace

import pytest

import main
from core.types import UploadEvent


class _RecordingTrigger:
    def __init__(self) -> None:
        self.events: list[UploadEvent] = []

    async def __call__(self, event: UploadEvent) -> None:
        self.events.append(event)


@pytest.fixture
def recorded_triggers(monkeypatch: pytest.MonkeyPatch) -> dict[str, _RecordingTrigger]:
    triggers = {"markdown": _RecordingTrigger(), "inventory": _RecordingTrigger()}
    monkeypatch.setattr(main, "_storage_triggers", lambda: triggers)
    return triggers


def test_handle_storage_event_feeds_markdown_trigger(
    recorded_triggers: dict[str, _RecordingTrigger],
) -> None:
    """The Markdown entry point should only reach the Markdown trigger."""
    main.handle_storage_event(SimpleNamespace(data={"name": "articles/a.md", "bucket": "uploads"}))

    assert recorded_triggers["markdown"].events == [UploadEvent("articles/a.md", "uploads")]
    assert recorded_triggers["inventory"].events == []


def test_handle_inventory_event_feeds_inventory_trigger(
    recorded_triggers: dict[str, _RecordingTrigger],
) -> None:
    """The inventory entry point should only reach the inventory trigger."""
    main.handle_inventory_event(SimpleNamespace(data={"name": "mobiles/p.json", "bucket": "uploads"}))

    assert recorded_triggers["inventory"].events == [UploadEvent("mobiles/p.json", "uploads")]
    assert recorded_triggers["markdown"].events == []
