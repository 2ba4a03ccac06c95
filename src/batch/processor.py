# src/batch/processor.py - v2
"""Batch processor: validate, transform and collect items with failure isolation.

Each item runs through validation (type policy, item shape, optional size
policy) and then the transform. Every item yields exactly one tagged ItemOutcome; the
outcomes are put back in input order and partitioned into results and
failures. An item-level error never leaves process_batch.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
import time
import uuid
from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any

from itembatch.batch.cancellation import BatchCancelledError, CancellationToken
from itembatch.batch.models import CANCELLED_REASON, BatchResult, ItemOutcome, ItemState
from itembatch.batch.transforms import (
    ItemTransform,
    TransformError,
    coerce_item,
    describe_error,
    normalize_item,
)
from itembatch.core.models import FailureRecord, Item, ProcessedResult
from itembatch.logging.context import batch_context, item_context
from itembatch.policy.size_policy import SizePolicy
from itembatch.policy.type_policy import TypePolicy
from itembatch.tracking.failure_recorder import BaseFailureRecorder, LoggingFailureRecorder

if TYPE_CHECKING:
    from itembatch.config.settings import Settings

logger = logging.getLogger(__name__)


class BatchInvariantError(RuntimeError):
    """The processor's own bookkeeping broke; the batch result cannot be trusted."""


class BatchProcessor:
    """Drive the per-item pipeline over a whole batch.

    Args:
        policy: Supported-type policy. Defaults to image/document/code.
        transform: Callable(Item) -> ProcessedResult, sync or async.
        recorder: Receives every FailureRecord. Defaults to logging.
        max_concurrency: Items in flight at once; 1 means sequential.
        size_policy: Optional per-item size limit.
    """

    def __init__(
        self,
        policy: TypePolicy | None = None,
        transform: ItemTransform | None = None,
        recorder: BaseFailureRecorder | None = None,
        max_concurrency: int = 1,
        size_policy: SizePolicy | None = None,
    ) -> None:
        if max_concurrency < 1:
            raise ValueError("max_concurrency must be >= 1")
        self._policy = policy or TypePolicy()
        self._transform = transform or normalize_item
        self._recorder = recorder or LoggingFailureRecorder()
        self._max_concurrency = max_concurrency
        self._size_policy = size_policy

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        transform: ItemTransform | None = None,
        recorder: BaseFailureRecorder | None = None,
    ) -> BatchProcessor:
        size_policy = None
        if settings.max_item_size_bytes is not None:
            size_policy = SizePolicy(settings.max_item_size_bytes)
        return cls(
            policy=TypePolicy.from_settings(settings),
            transform=transform,
            recorder=recorder,
            max_concurrency=settings.max_concurrency,
            size_policy=size_policy,
        )

    @property
    def policy(self) -> TypePolicy:
        return self._policy

    @property
    def max_concurrency(self) -> int:
        return self._max_concurrency

    async def process_batch(
        self,
        items: Iterable[Any],
        cancel_token: CancellationToken | None = None,
    ) -> BatchResult:
        """Process every item and return results and failures in input order.

        Args:
            items: Item instances, or raw mappings/objects with an item shape.
            cancel_token: Optional token; items not yet started when it is
                cancelled are reported with the "cancelled" reason.

        Returns:
            A fresh BatchResult. A batch where every item failed is still a
            normal result.

        Raises:
            BatchInvariantError: If the processor lost track of an item.
        """
        batch = list(items)
        batch_id = uuid.uuid4().hex[:12]
        t0 = time.perf_counter()

        with batch_context(batch_id):
            logger.info(
                "Batch %s started: %d items (max_concurrency=%d)",
                batch_id, len(batch), self._max_concurrency,
            )
            if self._max_concurrency == 1 or len(batch) <= 1:
                outcomes = []
                for index, raw in enumerate(batch):
                    outcomes.append(
                        await self._process_item(index, raw, cancel_token, concurrent=False)
                    )
            else:
                outcomes = await self._process_concurrently(batch, cancel_token)

            result = self._assemble(batch_id, len(batch), outcomes)
            result.duration_seconds = round(time.perf_counter() - t0, 4)

            logger.info(
                "Batch %s completed: %d/%d succeeded, %d failed (%d cancelled) in %.2fs",
                batch_id, result.success_count, result.total_items,
                result.failure_count, result.cancelled_count, result.duration_seconds,
            )
        return result

    def process_batch_sync(
        self,
        items: Iterable[Any],
        cancel_token: CancellationToken | None = None,
    ) -> BatchResult:
        """Blocking wrapper around process_batch() for synchronous callers."""
        return asyncio.run(self.process_batch(items, cancel_token))

    async def _process_concurrently(
        self,
        batch: list[Any],
        cancel_token: CancellationToken | None,
    ) -> list[ItemOutcome]:
        semaphore = asyncio.Semaphore(self._max_concurrency)

        async def run(index: int, raw: Any) -> ItemOutcome:
            async with semaphore:
                return await self._process_item(index, raw, cancel_token, concurrent=True)

        return list(await asyncio.gather(*(run(i, raw) for i, raw in enumerate(batch))))

    async def _process_item(
        self,
        index: int,
        raw: Any,
        cancel_token: CancellationToken | None,
        concurrent: bool,
    ) -> ItemOutcome:
        """Run one item to a terminal outcome."""
        name = _item_name(raw, index)

        if cancel_token is not None and cancel_token.cancelled:
            return self._fail(index, name, CANCELLED_REASON, ItemState.CANCELLED)

        with item_context(name):
            try:
                item = self._validate(raw)
            except Exception as exc:
                return self._fail(index, name, describe_error(exc), ItemState.FAILED)
            logger.debug("Item %s validated", name)

            try:
                result = await self._run_transform(item, concurrent)
            except BatchCancelledError:
                return self._fail(index, name, CANCELLED_REASON, ItemState.CANCELLED)
            except Exception as exc:
                return self._fail(index, name, describe_error(exc), ItemState.FAILED)

        return ItemOutcome(index=index, state=ItemState.SUCCEEDED, result=result)

    def _validate(self, raw: Any) -> Item:
        """Type check on the raw value, then shape, then size on the validated Item."""
        self._policy.check(_field(raw, "type"))
        item = coerce_item(raw)
        if self._size_policy is not None:
            self._size_policy.check(item.size)
        return item

    async def _run_transform(self, item: Item, concurrent: bool) -> ProcessedResult:
        try:
            if inspect.iscoroutinefunction(self._transform):
                result = await self._transform(item)
            elif concurrent:
                result = await asyncio.to_thread(self._transform, item)
            else:
                result = self._transform(item)
            if inspect.isawaitable(result):
                result = await result
        except (TransformError, BatchCancelledError):
            raise
        except Exception as exc:
            raise TransformError(describe_error(exc)) from exc

        if not isinstance(result, ProcessedResult):
            raise TransformError(
                f"transform returned {type(result).__name__}, expected ProcessedResult"
            )
        return result

    def _fail(self, index: int, name: str, reason: str, state: ItemState) -> ItemOutcome:
        record = FailureRecord(item_name=name, reason=reason)
        try:
            self._recorder.record_failure(record)
        except Exception:
            logger.error(
                "Failure recorder %s raised for %s",
                type(self._recorder).__name__, name, exc_info=True,
            )
        return ItemOutcome(index=index, state=state, failure=record)

    def _assemble(
        self, batch_id: str, total: int, outcomes: list[ItemOutcome],
    ) -> BatchResult:
        ordered = sorted(outcomes, key=lambda o: o.index)
        if [o.index for o in ordered] != list(range(total)):
            raise BatchInvariantError(
                f"Batch {batch_id}: expected one outcome per item for {total} items, "
                f"got {len(ordered)}"
            )

        result = BatchResult(batch_id=batch_id, total_items=total)
        for outcome in ordered:
            if outcome.result is not None:
                result.results.append(outcome.result)
            elif outcome.failure is not None:
                result.failures.append(outcome.failure)
            if outcome.state is ItemState.CANCELLED:
                result.cancelled = True
        return result


def _field(raw: Any, key: str) -> Any:
    """Read a field leniently from an Item, mapping or plain object."""
    if isinstance(raw, Mapping):
        return raw.get(key)
    return getattr(raw, key, None)


def _item_name(raw: Any, index: int) -> str:
    name = _field(raw, "name")
    if isinstance(name, str) and name:
        return name
    return f"item[{index}]"
