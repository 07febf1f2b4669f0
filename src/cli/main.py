"""Folio CLI entry points.

This module exposes developer commands to preview and replay uploads.
It maps argparse commands onto the same pipelines the functions run.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Any, Sequence

from core.config import FolioConfig, apply_routes_file, validate_config
from core.constants import PATH_SEPARATOR, PIPELINE_INVENTORY, PIPELINE_MARKDOWN
from core.errors import FolioError, FolioValidationError
from core.types import UploadEvent
from ingest.pipeline import build_pipeline
from ingest.trigger import build_storage_triggers, dispatch_to_all
from store.service_context import build_service_context


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(prog="folio", description="Folio upload sync CLI")
    parser.add_argument("--routes-file", help="Override FOLIO_ROUTES_FILE for this command")
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_preview_command(subparsers)
    _add_replay_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the Folio CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        config = _build_config(args.routes_file)
    except FolioError as error:
        print(str(error), file=sys.stderr)
        return 1
    if args.command == "preview":
        return _run_preview_command(config, args)
    if args.command == "replay":
        return _run_replay_command(config, args)
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _build_config(routes_file: str | None) -> FolioConfig:
    """Build config with an optional routes-file override.

    Args:
        routes_file: Optional YAML routes file path.

    Returns:
        Validated configuration.
    """
    config = FolioConfig.from_env()
    if routes_file:
        config = validate_config(apply_routes_file(config, routes_file))
    return config


def _run_preview_command(config: FolioConfig, args: argparse.Namespace) -> int:
    """Handle preview command.

    Args:
        config: Runtime configuration.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    local_file = Path(args.file).expanduser()
    folder = args.folder if args.folder is not None else local_file.resolve().parent.name
    pipeline_name = _pipeline_for_folder(config, folder)
    if pipeline_name is None:
        print(f"Folder '{folder}' is not routed to any pipeline.", file=sys.stderr)
        return 2
    object_path = f"{folder}{PATH_SEPARATOR}{local_file.name}" if folder else local_file.name
    pipeline = build_pipeline(pipeline_name, config)
    try:
        request = pipeline.transform(object_path, local_file.read_bytes())
    except (OSError, FolioValidationError) as error:
        print(str(error), file=sys.stderr)
        return 1
    payload = {
        "pipeline": pipeline_name,
        "collection": request.collection,
        "document_id": request.document_id,
        "fields": dict(request.fields),
    }
    print(json.dumps(payload, indent=2, sort_keys=True, ensure_ascii=False))
    return 0


def _run_replay_command(config: FolioConfig, args: argparse.Namespace) -> int:
    """Handle replay command.

    Args:
        config: Runtime configuration.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    try:
        context = build_service_context(config)
    except FolioError as error:
        print(str(error), file=sys.stderr)
        return 1
    event = UploadEvent(file_path=args.path, bucket=args.bucket)
    asyncio.run(dispatch_to_all(build_storage_triggers(context), event))
    return 0


def _pipeline_for_folder(config: FolioConfig, folder: str) -> str | None:
    if folder in config.text_folders:
        return PIPELINE_MARKDOWN
    if folder in config.inventory_folders:
        return PIPELINE_INVENTORY
    return None


def _add_preview_command(subparsers: Any) -> None:
    """Register preview subcommand."""
    parser = subparsers.add_parser(
        "preview",
        help="Transform a local file and print the document it would write",
    )
    parser.add_argument("file", help="Local Markdown or JSON file")
    parser.add_argument(
        "--folder",
        help="Upload folder to simulate (defaults to the file's parent directory name)",
    )


def _add_replay_command(subparsers: Any) -> None:
    """Register replay subcommand."""
    parser = subparsers.add_parser("replay", help="Replay one upload event against live services")
    parser.add_argument("bucket", help="Bucket holding the uploaded object")
    parser.add_argument("path", help="Object path inside the bucket")
