# src/batch/manifest.py - v1
"""JSON manifest item source.

A manifest is a JSON array of item objects::

    [{"name": "a.png", "type": "image", "size": 10}, ...]

Entries are returned as-is so a malformed entry fails on its own inside the
batch instead of rejecting the whole manifest.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


class ManifestError(ValueError):
    """Raised when a manifest file is unreadable or not a JSON array."""


def load_manifest(path: Path) -> list[Any]:
    """Read a manifest file and return its raw entries.

    Raises:
        ManifestError: If the file cannot be read or parsed, or the
            top-level value is not a list.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ManifestError(f"Cannot read manifest {path}: {exc}") from exc

    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ManifestError(f"Invalid JSON in manifest {path}: {exc}") from exc

    if not isinstance(data, list):
        raise ManifestError(
            f"Manifest {path} must contain a JSON array, got {type(data).__name__}"
        )

    logger.debug("Loaded %d entries from %s", len(data), path)
    return data
