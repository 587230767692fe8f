"""
Repeating timers for the tracker host.

Each RepeatingTask is an independent asyncio task: it sleeps for its
interval, runs its synchronous callback, and repeats until cancelled.
The tracker registers two of them (display clock and reclassification)
so that each keeps its own cadence.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import Callable

logger = logging.getLogger(__name__)


class RepeatingTask:
    """A cancellable periodic callback.

    Usage:
        task = RepeatingTask("reclassify", 30, tracker.run_reclassify)
        task.start()
        ...
        await task.stop()
    """

    def __init__(self, name: str, interval: float, callback: Callable[[], object]) -> None:
        """
        Args:
            name: Identifier used in logs and as the asyncio task name
            interval: Seconds between invocations (first run after one interval)
            callback: Synchronous, non-blocking function to invoke
        """
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        self.name = name
        self.interval = interval
        self._callback = callback
        self._task: asyncio.Task[None] | None = None
        self.runs = 0

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Schedule the loop on the running event loop. Idempotent."""
        if self.running:
            return
        self._task = asyncio.get_running_loop().create_task(self._run(), name=self.name)
        logger.info("Started timer %s (every %ss)", self.name, self.interval)

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.interval)
            try:
                self._callback()
            except Exception:  # Intentional catch-all: one failing tick must not stop the timer
                logger.exception("Timer %s callback failed", self.name)
            self.runs += 1

    def cancel(self) -> None:
        """Request cancellation without waiting for it."""
        if self._task is not None:
            self._task.cancel()

    async def stop(self) -> None:
        """Cancel the loop and wait until it has exited."""
        if self._task is None:
            return
        self._task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._task
        self._task = None
        logger.info("Stopped timer %s", self.name)
