# src/batch/models.py - v3
"""Batch processing models: ItemState, ItemOutcome, BatchResult."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, Field

from itembatch.core.models import FailureRecord, ProcessedResult

CANCELLED_REASON = "cancelled"


class ItemState(str, Enum):
    """Terminal state recorded in an ItemOutcome.

    FAILED covers validation and transform errors. CANCELLED marks items that
    were never started, or whose transform raised BatchCancelledError.
    """

    SUCCEEDED = "succeeded"
    FAILED = "failed"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class ItemOutcome:
    """Tagged outcome of one item: exactly one of result / failure is set."""

    index: int
    state: ItemState
    result: ProcessedResult | None = None
    failure: FailureRecord | None = None

    def __post_init__(self) -> None:
        if (self.result is None) == (self.failure is None):
            raise ValueError("ItemOutcome needs exactly one of result or failure")
        if self.result is not None and self.state is not ItemState.SUCCEEDED:
            raise ValueError(f"Result outcome must be SUCCEEDED, got {self.state.value}")
        if self.failure is not None and self.state not in (
            ItemState.FAILED, ItemState.CANCELLED,
        ):
            raise ValueError(f"Failure outcome must be FAILED or CANCELLED, got {self.state.value}")

    @property
    def succeeded(self) -> bool:
        return self.result is not None


class BatchResult(BaseModel):
    """Aggregate of one batch run, owned by the caller once returned."""

    batch_id: str = ""
    results: list[ProcessedResult] = Field(default_factory=list)
    failures: list[FailureRecord] = Field(default_factory=list)
    total_items: int = 0
    cancelled: bool = False
    duration_seconds: float = 0.0

    @property
    def success_count(self) -> int:
        return len(self.results)

    @property
    def failure_count(self) -> int:
        return len(self.failures)

    @property
    def cancelled_count(self) -> int:
        """Failures caused by cancellation rather than by the item itself."""
        return sum(1 for f in self.failures if f.reason == CANCELLED_REASON)
