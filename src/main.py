"""Cloud Functions entry points.

Deploy ``handle_storage_event`` for Markdown folders and
``handle_inventory_event`` for JSON inventory folders, both on the
object-finalized storage trigger.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any

import functions_framework

from core.constants import PIPELINE_INVENTORY, PIPELINE_MARKDOWN
from ingest.routing import StorageTrigger
from ingest.trigger import build_storage_triggers, dispatch_storage_payload
from store.service_context import build_service_context


@lru_cache(maxsize=1)
def _storage_triggers() -> dict[str, StorageTrigger]:
    return build_storage_triggers(build_service_context())


@functions_framework.cloud_event
def handle_storage_event(cloud_event: Any) -> None:
    """Sync uploaded Markdown files into their folder's collection."""
    dispatch_storage_payload(_storage_triggers()[PIPELINE_MARKDOWN], cloud_event.data)


@functions_framework.cloud_event
def handle_inventory_event(cloud_event: Any) -> None:
    """Sync uploaded JSON inventory files into their folder's collection."""
    dispatch_storage_payload(_storage_triggers()[PIPELINE_INVENTORY], cloud_event.data)
