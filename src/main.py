# src/main.py - v2
"""CLI entry point: manifest and scan commands.

Usage:
    itembatch manifest <file.json> [options]
    itembatch scan <directory> [options]
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from itembatch.version import __version__

if TYPE_CHECKING:
    from itembatch.batch.models import BatchResult
    from itembatch.config.settings import Settings

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    try:
        settings = _load_settings(args)
    except Exception as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        return 1

    _setup_logging(settings, args.verbose)

    try:
        return asyncio.run(args.func(args, settings))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except Exception as exc:
        logger.error("Fatal error: %s", exc, exc_info=args.verbose)
        return 1


def _build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="itembatch",
        description=f"itembatch v{__version__} - batch item processor",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )
    common.add_argument(
        "--types", default=None,
        help="Comma-separated supported types (default: from settings)",
    )
    common.add_argument(
        "--concurrency", type=int, default=None,
        help="Items processed at once (default: from settings)",
    )
    common.add_argument(
        "--max-size", type=int, default=None,
        help="Reject items larger than this many bytes",
    )
    common.add_argument(
        "--json", action="store_true",
        help="Print the full batch result as JSON",
    )
    common.add_argument(
        "-o", "--output", type=Path, default=None,
        help="Write the batch result as JSON to this file",
    )

    subparsers = parser.add_subparsers(dest="command")

    # --- manifest ---
    p_manifest = subparsers.add_parser(
        "manifest", parents=[common], help="Process items listed in a JSON manifest",
    )
    p_manifest.add_argument("file", type=Path, help="Path to manifest (JSON array)")
    p_manifest.set_defaults(func=_cmd_manifest)

    # --- scan ---
    p_scan = subparsers.add_parser(
        "scan", parents=[common], help="Process every file in a directory",
    )
    p_scan.add_argument("directory", type=Path, help="Directory to scan")
    p_scan.add_argument(
        "--no-recursive", action="store_true",
        help="Disable recursive scanning",
    )
    p_scan.set_defaults(func=_cmd_scan)

    return parser


def _load_settings(args: argparse.Namespace) -> Settings:
    """Load settings from .env and apply CLI overrides."""
    from itembatch.config.settings import load_settings

    overrides: dict[str, object] = {}
    if args.types:
        overrides["supported_types"] = args.types
    if args.concurrency is not None:
        overrides["max_concurrency"] = args.concurrency
    if args.max_size is not None:
        overrides["max_item_size_bytes"] = args.max_size
    return load_settings(**overrides)


async def _cmd_manifest(args: argparse.Namespace, settings: Settings) -> int:
    """Process a JSON manifest."""
    from itembatch.api.facade import process_items
    from itembatch.batch.manifest import ManifestError, load_manifest

    try:
        entries = load_manifest(args.file)
    except ManifestError as exc:
        logger.error("%s", exc)
        return 1

    result = await process_items(entries, settings=settings)
    _emit_result(result, args)
    return 0


async def _cmd_scan(args: argparse.Namespace, settings: Settings) -> int:
    """Scan a directory and process what was found."""
    from itembatch.api.facade import process_directory

    directory: Path = args.directory
    if not directory.is_dir():
        logger.error("Not a directory: %s", directory)
        return 1

    recursive = False if args.no_recursive else settings.scan_recursive
    result = await process_directory(directory, settings=settings, recursive=recursive)
    _emit_result(result, args)
    return 0


def _emit_result(result: BatchResult, args: argparse.Namespace) -> None:
    payload = result.model_dump(mode="json", by_alias=True)
    if args.output is not None:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        logger.info("Batch result written to %s", args.output)

    if args.json:
        print(json.dumps(payload, indent=2))
        return

    print(f"\nBatch {result.batch_id} complete:")
    print(f"  Items:      {result.total_items}")
    print(f"  Succeeded:  {result.success_count}")
    print(f"  Failed:     {result.failure_count}")
    if result.cancelled:
        print(f"  Cancelled:  {result.cancelled_count}")
    print(f"  Duration:   {result.duration_seconds:.2f}s")
    for failure in result.failures:
        print(f"    - {failure.item_name}: {failure.reason}")


def _setup_logging(settings: Settings, verbose: bool) -> None:
    """Configure logging for CLI usage."""
    from itembatch.logging.logger import setup_logging

    setup_logging(
        level="DEBUG" if verbose else settings.log_level,
        log_format=settings.log_format,
        log_file=settings.log_file,
        rotation=settings.log_rotation,
        retention=settings.log_retention,
    )


if __name__ == "__main__":
    sys.exit(main())
