# recall_ai/core/cancellation.py
"""Cooperative cancellation shared between a caller and one pipeline run."""

from __future__ import annotations

import threading


class CancellationToken:
    """
    Thread-safe cancellation flag.

    The caller calls cancel() from any thread; the pipeline polls
    is_cancelled at its suspension points. wait() doubles as an
    interruptible sleep for stream pacing.
    """

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def is_cancelled(self) -> bool:
        return self._event.is_set()

    def wait(self, seconds: float) -> bool:
        """Sleep up to `seconds`; return True early if cancelled."""
        if seconds <= 0:
            return self._event.is_set()
        return self._event.wait(seconds)


__all__ = ["CancellationToken"]
