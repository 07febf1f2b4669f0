"""Upload event routing.

This module accepts or discards upload events by their parent folder
and is the single error boundary for processing handlers: failures are
logged and dropped, never re-raised to the trigger infrastructure.
"""

from __future__ import annotations

from typing import AbstractSet, Awaitable, Callable

from core.errors import FolioError
from core.logging_config import get_logger
from core.object_path import parent_folder_name
from core.types import FolderRoute, UploadEvent, UploadHandler

_LOGGER = get_logger(__name__)

StorageTrigger = Callable[[UploadEvent], Awaitable[None]]


async def route_upload(
    allowed_folders: AbstractSet[str],
    handler: UploadHandler,
    event: UploadEvent,
) -> None:
    """Invoke *handler* for events whose parent folder is allowed.

    Args:
        allowed_folders: Folder names eligible for processing. Objects at the
            bucket root match only when ``""`` is included.
        handler: Async callback receiving ``(file_path, event)``.
        event: Upload event to route.
    """
    file_path = event.file_path
    folder_name = parent_folder_name(file_path)
    if folder_name not in allowed_folders:
        _LOGGER.info("upload_skipped", file_path=file_path, folder=folder_name)
        return
    try:
        await handler(file_path, event)
    except FolioError as error:
        _LOGGER.error(
            "upload_failed",
            file_path=file_path,
            bucket=event.bucket,
            error_type=type(error).__name__,
            error=str(error),
        )
    except Exception as error:
        _LOGGER.error(
            "upload_failed",
            file_path=file_path,
            bucket=event.bucket,
            error_type=type(error).__name__,
            error=str(error),
            exc_info=True,
        )


def create_storage_event(
    allowed_folders: AbstractSet[str],
    handler: UploadHandler,
) -> StorageTrigger:
    """Bind a folder allow-list and handler into a storage trigger.

    Args:
        allowed_folders: Folder names eligible for processing.
        handler: Async callback receiving ``(file_path, event)``.

    Returns:
        Async callable taking one upload event.
    """
    route = FolderRoute(allowed_folders=frozenset(allowed_folders), handler=handler)

    async def _trigger(event: UploadEvent) -> None:
        await route_upload(route.allowed_folders, route.handler, event)

    return _trigger
