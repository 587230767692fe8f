"""
Persistence side channel for the tracker stores.

The in-memory stores are authoritative. Storage is an asynchronous mirror:
every committed mutation schedules a write on the running event loop and
returns immediately. Writes and deletes for the same key are applied in
the order they were scheduled. Failed writes are logged and never
retried; nothing is reported back to the caller.

Three keys are used, one per top-level collection:
    - fitness-activities: JSON array of activity records
    - fitness-milestones: JSON array of milestone records
    - fitness-colors:     JSON object of category -> hex color
"""

from __future__ import annotations

import asyncio
import functools
import logging
from collections.abc import Awaitable, Callable
from typing import Protocol

logger = logging.getLogger(__name__)

ACTIVITIES_KEY = "fitness-activities"
MILESTONES_KEY = "fitness-milestones"
COLORS_KEY = "fitness-colors"

ALL_KEYS: tuple[str, ...] = (ACTIVITIES_KEY, MILESTONES_KEY, COLORS_KEY)


class PersistenceGateway(Protocol):
    """Asynchronous key-value storage holding serialized strings.

    `set` and `delete` return False (or raise) when the backend did not
    accept the operation.
    """

    async def get(self, key: str) -> str | None: ...

    async def set(self, key: str, value: str) -> bool: ...

    async def delete(self, key: str) -> bool: ...


class InMemoryGateway:
    """Process-local gateway backed by a dict.

    Used for the `memory` storage backend and in tests. Data does not
    survive the process, but does survive tracker restarts that share
    the same gateway instance.
    """

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.data: dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> str | None:
        return self.data.get(key)

    async def set(self, key: str, value: str) -> bool:
        self.data[key] = value
        return True

    async def delete(self, key: str) -> bool:
        return self.data.pop(key, None) is not None


class PersistenceMirror:
    """Best-effort mirror of the stores into a PersistenceGateway.

    Usage:
        mirror = PersistenceMirror(InMemoryGateway())
        mirror.schedule_set(ACTIVITIES_KEY, payload)  # fire-and-forget
        await mirror.drain()                          # on shutdown
    """

    def __init__(self, gateway: PersistenceGateway, key_prefix: str = "") -> None:
        """
        Initialize the mirror.

        Args:
            gateway: Storage backend
            key_prefix: Prepended to every key (namespacing on shared backends)
        """
        self._gateway = gateway
        self._key_prefix = key_prefix
        self._pending: set[asyncio.Task[bool]] = set()
        self._tails: dict[str, asyncio.Task[bool]] = {}

    @property
    def gateway(self) -> PersistenceGateway:
        return self._gateway

    @property
    def pending(self) -> int:
        """Number of writes/deletes still in flight."""
        return len(self._pending)

    def _key(self, key: str) -> str:
        return f"{self._key_prefix}{key}"

    async def read(self, key: str) -> str | None:
        """Fetch a stored value; any backend failure reads as absent."""
        try:
            return await self._gateway.get(self._key(key))
        except Exception as exc:  # Intentional catch-all: a failed read means "no data", never fatal
            logger.warning("Failed to read %s from storage: %s", key, exc)
            return None

    async def write(self, key: str, value: str) -> bool:
        """Store a value now. Failures are logged, never raised."""
        try:
            ok = await self._gateway.set(self._key(key), value)
        except Exception as exc:  # Intentional catch-all: persistence is a side channel
            logger.warning("Failed to persist %s: %s", key, exc)
            return False
        if not ok:
            logger.warning("Storage backend rejected write for %s", key)
        return bool(ok)

    async def remove(self, key: str) -> bool:
        """Delete a key now. Failures are logged, never raised."""
        try:
            ok = await self._gateway.delete(self._key(key))
        except Exception as exc:  # Intentional catch-all: persistence is a side channel
            logger.warning("Failed to delete %s from storage: %s", key, exc)
            return False
        return bool(ok)

    def schedule_set(self, key: str, value: str) -> asyncio.Task[bool] | None:
        """Fire-and-forget write of `value` under `key`."""
        return self._schedule(key, lambda: self.write(key, value), f"persist:{key}")

    def schedule_delete(self, key: str) -> asyncio.Task[bool] | None:
        """Fire-and-forget delete of `key`."""
        return self._schedule(key, lambda: self.remove(key), f"delete:{key}")

    def _schedule(
        self, key: str, make_op: Callable[[], Awaitable[bool]], name: str
    ) -> asyncio.Task[bool] | None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.warning("No running event loop; skipped %s", name)
            return None

        # Operations on one key run one after another, in scheduling order
        previous = self._tails.get(key)
        task = loop.create_task(self._run_after(previous, make_op), name=name)
        self._tails[key] = task
        self._pending.add(task)
        task.add_done_callback(functools.partial(self._finished, key))
        return task

    @staticmethod
    async def _run_after(
        previous: asyncio.Task[bool] | None, make_op: Callable[[], Awaitable[bool]]
    ) -> bool:
        if previous is not None and not previous.done():
            await asyncio.wait([previous])
        return await make_op()

    def _finished(self, key: str, task: asyncio.Task[bool]) -> None:
        self._pending.discard(task)
        if self._tails.get(key) is task:
            del self._tails[key]

    async def drain(self) -> None:
        """Wait for every scheduled write/delete to finish."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)


__all__ = [
    "ACTIVITIES_KEY",
    "MILESTONES_KEY",
    "COLORS_KEY",
    "ALL_KEYS",
    "PersistenceGateway",
    "InMemoryGateway",
    "PersistenceMirror",
]
