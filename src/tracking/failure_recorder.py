# src/tracking/failure_recorder.py - v1
"""Failure recorders: the observability collaborator of the batch processor.

The processor hands every FailureRecord to exactly one recorder through
record_failure(). Recorders are injected, so nothing writes to a hidden
global sink.
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path

from itembatch.core.models import FailureRecord

logger = logging.getLogger(__name__)


class BaseFailureRecorder(ABC):
    """Receives one call per failed item."""

    @abstractmethod
    def record_failure(self, record: FailureRecord) -> None:
        """Record a single item failure. Must not block for long."""


class LoggingFailureRecorder(BaseFailureRecorder):
    """Emit a human-readable log line per failure (default recorder)."""

    def __init__(
        self,
        target: logging.Logger | None = None,
        level: int = logging.WARNING,
    ) -> None:
        self._logger = target or logger
        self._level = level

    def record_failure(self, record: FailureRecord) -> None:
        self._logger.log(
            self._level, "Failed to process %s: %s", record.item_name, record.reason,
        )


class CollectingFailureRecorder(BaseFailureRecorder):
    """Accumulates failure records in memory for post-run inspection."""

    def __init__(self) -> None:
        self._records: list[FailureRecord] = []

    def record_failure(self, record: FailureRecord) -> None:
        self._records.append(record)

    @property
    def records(self) -> list[FailureRecord]:
        """All recorded failures, in the order they were reported."""
        return list(self._records)

    @property
    def total_failures(self) -> int:
        return len(self._records)

    def clear(self) -> None:
        self._records.clear()

    def save(self, path: Path) -> None:
        """Save all records to a JSON Lines file."""
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as f:
            for record in self._records:
                f.write(json.dumps(record.model_dump(by_alias=True)) + "\n")


class CompositeFailureRecorder(BaseFailureRecorder):
    """Fan a failure out to several recorders.

    A recorder that raises is logged and skipped; the others still run.
    """

    def __init__(self, *recorders: BaseFailureRecorder) -> None:
        self._recorders = list(recorders)

    @property
    def recorders(self) -> list[BaseFailureRecorder]:
        return list(self._recorders)

    def record_failure(self, record: FailureRecord) -> None:
        for recorder in self._recorders:
            try:
                recorder.record_failure(record)
            except Exception:
                logger.warning(
                    "Recorder %s raised for %s",
                    type(recorder).__name__, record.item_name, exc_info=True,
                )
