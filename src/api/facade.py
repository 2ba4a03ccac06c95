# src/api/facade.py - v2
"""Public API facade: single entry point for batch processing.

Usage:
    from itembatch.api.facade import process_items
    result = await process_items(items)
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import TYPE_CHECKING, Any

from itembatch.batch.processor import BatchProcessor
from itembatch.batch.scanner import ItemScanner
from itembatch.config.settings import Settings

if TYPE_CHECKING:
    from itembatch.batch.cancellation import CancellationToken
    from itembatch.batch.models import BatchResult
    from itembatch.batch.transforms import ItemTransform
    from itembatch.tracking.failure_recorder import BaseFailureRecorder

logger = logging.getLogger(__name__)


async def process_items(
    items: Iterable[Any],
    settings: Settings | None = None,
    transform: ItemTransform | None = None,
    recorder: BaseFailureRecorder | None = None,
    cancel_token: CancellationToken | None = None,
) -> BatchResult:
    """Process a batch of items with a processor built from settings.

    Args:
        items: Items or raw item mappings, in the order results should keep.
        settings: Global settings. Loaded from .env if None.
        transform: Custom per-item transform. Default copies and timestamps.
        recorder: Failure recorder. Default logs each failure.
        cancel_token: Optional cooperative cancellation token.

    Returns:
        BatchResult with results and failures in input order.
    """
    settings = settings or Settings()
    processor = BatchProcessor.from_settings(
        settings, transform=transform, recorder=recorder,
    )
    return await processor.process_batch(items, cancel_token=cancel_token)


async def process_directory(
    directory: Path,
    settings: Settings | None = None,
    recursive: bool | None = None,
    transform: ItemTransform | None = None,
    recorder: BaseFailureRecorder | None = None,
    cancel_token: CancellationToken | None = None,
) -> BatchResult:
    """Scan a directory and process every file found as one batch.

    Raises:
        ValueError: If directory is not a directory.
    """
    settings = settings or Settings()
    if recursive is None:
        recursive = settings.scan_recursive
    items = ItemScanner().scan(directory, recursive=recursive)
    logger.info("Processing %d scanned items from %s", len(items), directory)
    return await process_items(
        items,
        settings=settings,
        transform=transform,
        recorder=recorder,
        cancel_token=cancel_token,
    )
