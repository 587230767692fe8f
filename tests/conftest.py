"""
Shared test fixtures for the Fitness Progress Tracker.

This module provides common fixtures used across all test modules:
- A frozen clock pinned to a Wednesday morning
- An in-memory storage gateway and the persistence mirror over it
- A gateway with per-call latency, for ordering and race tests
- Stores wired to that mirror
- A FitnessTracker built from the same pieces

Usage:
    All fixtures are automatically available to any test in the tests/ directory.
"""

from __future__ import annotations

import asyncio
import os
from datetime import datetime

import pytest

os.environ.setdefault("FITNESS_DEV_MODE", "1")

from fitness_tracker.core.tracker import FitnessTracker  # noqa: E402
from fitness_tracker.lib.clock import FrozenClock  # noqa: E402
from fitness_tracker.services.activity_store import ActivityStore  # noqa: E402
from fitness_tracker.services.milestone_store import MilestoneStore  # noqa: E402
from fitness_tracker.services.persistence import InMemoryGateway, PersistenceMirror  # noqa: E402

# Wednesday 14 October 2026, 09:00 local. Week window: Sun 11th 00:00 -> Sun 18th 00:00.
NOW = datetime(2026, 10, 14, 9, 0)


# ---------------------------------------------------------------------------
# 1. clock -- FrozenClock at NOW, advanced explicitly by tests
# ---------------------------------------------------------------------------

@pytest.fixture()
def clock() -> FrozenClock:
    return FrozenClock(NOW)


# ---------------------------------------------------------------------------
# 2. gateway / mirror -- in-memory storage
# ---------------------------------------------------------------------------

@pytest.fixture()
def gateway() -> InMemoryGateway:
    return InMemoryGateway()


@pytest.fixture()
def mirror(gateway: InMemoryGateway) -> PersistenceMirror:
    return PersistenceMirror(gateway)


class SlowGateway(InMemoryGateway):
    """InMemoryGateway that yields on every call.

    `set_delays` is consumed one entry per set() (sleep before storing);
    `delete_delay` is slept after the key is removed, before replying.
    """

    def __init__(self) -> None:
        super().__init__()
        self.set_delays: list[float] = []
        self.delete_delay = 0.0

    async def set(self, key: str, value: str) -> bool:
        await asyncio.sleep(self.set_delays.pop(0) if self.set_delays else 0)
        return await super().set(key, value)

    async def delete(self, key: str) -> bool:
        removed = await super().delete(key)
        await asyncio.sleep(self.delete_delay)
        return removed


@pytest.fixture()
def slow_gateway() -> SlowGateway:
    return SlowGateway()


# ---------------------------------------------------------------------------
# 3. stores
# ---------------------------------------------------------------------------

@pytest.fixture()
def activity_store(clock: FrozenClock, mirror: PersistenceMirror) -> ActivityStore:
    return ActivityStore(clock=clock, mirror=mirror)


@pytest.fixture()
def milestone_store(mirror: PersistenceMirror) -> MilestoneStore:
    return MilestoneStore(mirror=mirror)


# ---------------------------------------------------------------------------
# 4. tracker -- not started; tests call start()/stop() as needed
# ---------------------------------------------------------------------------

@pytest.fixture()
def tracker(gateway: InMemoryGateway, clock: FrozenClock) -> FitnessTracker:
    return FitnessTracker.create(gateway, clock=clock)
