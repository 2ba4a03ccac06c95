# src/batch/cancellation.py - v2
"""Cooperative cancellation for batch runs.

A token is shared between the caller and the processor. The processor
checks it before starting each item; items already finished or in flight
are left alone. A transform may call raise_if_cancelled() to give up early,
and its item is then reported as cancelled.
"""

from __future__ import annotations

import threading


class BatchCancelledError(Exception):
    """Raised by CancellationToken.raise_if_cancelled() once cancel() was called."""


class CancellationToken:
    """Thread-safe cancellation flag.

    Backed by threading.Event so cancel() may be called from another thread,
    a signal handler, or from inside a transform.
    """

    def __init__(self) -> None:
        self._event = threading.Event()
        self._reason: str | None = None

    def cancel(self, reason: str | None = None) -> None:
        if not self._event.is_set():
            self._reason = reason
            self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    @property
    def reason(self) -> str | None:
        return self._reason

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise BatchCancelledError(self._reason or "batch cancelled")
