# src/batch/scanner.py - v3
"""Directory item source: discover files and describe them as Items.

Each file becomes an Item whose type is the category derived from its
extension. Files with unknown extensions are still emitted, as "other",
so the processor reports them instead of silently dropping them.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path

from itembatch.core.models import Item

logger = logging.getLogger(__name__)

OTHER_CATEGORY = "other"

# File extensions mapped to item categories
EXTENSION_CATEGORIES: dict[str, str] = {
    # Images
    ".jpg": "image", ".jpeg": "image", ".png": "image", ".webp": "image", ".gif": "image",
    # Documents
    ".pdf": "document", ".txt": "document", ".md": "document",
    # Code
    ".js": "code", ".jsx": "code", ".ts": "code", ".tsx": "code", ".py": "code",
    ".java": "code", ".c": "code", ".cpp": "code", ".h": "code", ".hpp": "code",
    ".cs": "code", ".php": "code", ".rb": "code", ".go": "code", ".rs": "code",
    ".swift": "code", ".kt": "code", ".scala": "code", ".html": "code", ".css": "code",
    ".scss": "code", ".xml": "code", ".json": "code", ".yaml": "code", ".yml": "code",
    ".sql": "code", ".sh": "code",
}


def categorize(path: Path, categories: Mapping[str, str] | None = None) -> str:
    """Return the item category for a file path, based on its extension."""
    if categories is None:
        categories = EXTENSION_CATEGORIES
    return categories.get(path.suffix.lower(), OTHER_CATEGORY)


class ItemScanner:
    """Scan a directory and build one Item per regular file."""

    def __init__(self, extension_categories: Mapping[str, str] | None = None) -> None:
        if extension_categories is None:
            extension_categories = EXTENSION_CATEGORIES
        self._categories = dict(extension_categories)

    def scan(self, scan_root: Path, recursive: bool = True) -> list[Item]:
        """Discover files under scan_root.

        Args:
            scan_root: Root directory to scan.
            recursive: If True, scan subdirectories recursively.

        Returns:
            Items sorted by path, so repeated scans give the same order.

        Raises:
            ValueError: If scan_root is not a directory.
        """
        if not scan_root.is_dir():
            msg = f"Scan root is not a directory: {scan_root}"
            raise ValueError(msg)

        pattern_fn = scan_root.rglob if recursive else scan_root.glob
        items: list[Item] = []
        for path in sorted(pattern_fn("*")):
            if not path.is_file():
                continue
            items.append(
                Item(
                    name=str(path.relative_to(scan_root)),
                    type=categorize(path, self._categories),
                    size=path.stat().st_size,
                )
            )

        logger.info(
            "Scanned %s: found %d files (recursive=%s)", scan_root, len(items), recursive,
        )
        return items
