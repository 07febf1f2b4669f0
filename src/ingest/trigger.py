"""Storage trigger adapters.

This module turns raw storage notifications into upload events and
runs the routed pipelines for them on a fresh event loop per call.
"""

from __future__ import annotations

import asyncio
from typing import Any, Mapping

from core.errors import FolioValidationError
from core.logging_config import get_logger
from core.types import UploadEvent
from ingest.pipeline import build_folder_routes
from ingest.routing import StorageTrigger, create_storage_event
from store.service_context import ServiceContext

_LOGGER = get_logger(__name__)


def build_storage_triggers(context: ServiceContext) -> dict[str, StorageTrigger]:
    """Create one storage trigger per configured pipeline.

    Args:
        context: Shared service context.

    Returns:
        Triggers keyed by pipeline name.
    """
    return {
        name: create_storage_event(route.allowed_folders, route.handler)
        for name, route in build_folder_routes(context).items()
    }


def dispatch_storage_payload(trigger: StorageTrigger, payload: Mapping[str, Any]) -> None:
    """Run *trigger* for one raw ``{name, bucket}`` notification payload.

    Malformed payloads are logged and dropped like every other failure.

    Args:
        trigger: Storage trigger from :func:`build_storage_triggers`.
        payload: Notification data delivered by the storage service.
    """
    try:
        event = UploadEvent.from_payload(payload)
    except FolioValidationError as error:
        _LOGGER.error("upload_event_invalid", error=str(error))
        return
    asyncio.run(trigger(event))


async def dispatch_to_all(
    triggers: Mapping[str, StorageTrigger],
    event: UploadEvent,
) -> None:
    """Offer one event to every trigger, as if each were deployed separately."""
    for trigger in triggers.values():
        await trigger(event)
