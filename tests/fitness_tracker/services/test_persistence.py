"""
Tests for the persistence mirror.

Covers:
- InMemoryGateway get/set/delete
- Fire-and-forget writes and drain()
- Per-key ordering against a gateway with latency
- Key prefixing
- Failure handling (rejected writes, raising gateways) -- logged, never raised
- Behaviour without a running event loop
"""

import asyncio
import logging
from unittest.mock import AsyncMock, Mock

import pytest

from fitness_tracker.services.persistence import (
    ACTIVITIES_KEY,
    ALL_KEYS,
    COLORS_KEY,
    MILESTONES_KEY,
    InMemoryGateway,
    PersistenceMirror,
)


@pytest.fixture
def failing_gateway():
    gateway = Mock()
    gateway.get = AsyncMock(side_effect=ConnectionError("storage offline"))
    gateway.set = AsyncMock(side_effect=ConnectionError("storage offline"))
    gateway.delete = AsyncMock(side_effect=ConnectionError("storage offline"))
    return gateway


def test_storage_keys() -> None:
    assert ALL_KEYS == (ACTIVITIES_KEY, MILESTONES_KEY, COLORS_KEY)
    assert ACTIVITIES_KEY == "fitness-activities"
    assert MILESTONES_KEY == "fitness-milestones"
    assert COLORS_KEY == "fitness-colors"


# =============================================================================
# InMemoryGateway
# =============================================================================


@pytest.mark.asyncio
async def test_in_memory_gateway_operations() -> None:
    gateway = InMemoryGateway()
    assert await gateway.get("k") is None
    assert await gateway.set("k", "v") is True
    assert await gateway.get("k") == "v"
    assert await gateway.delete("k") is True
    assert await gateway.delete("k") is False


# =============================================================================
# Scheduled writes
# =============================================================================


@pytest.mark.asyncio
async def test_schedule_set_is_applied_after_drain(gateway, mirror) -> None:
    task = mirror.schedule_set(ACTIVITIES_KEY, "[]")
    assert task is not None
    await mirror.drain()
    assert gateway.data[ACTIVITIES_KEY] == "[]"
    assert mirror.pending == 0


@pytest.mark.asyncio
async def test_writes_to_same_key_land_in_order(gateway, mirror) -> None:
    mirror.schedule_set(COLORS_KEY, "first")
    mirror.schedule_set(COLORS_KEY, "second")
    await mirror.drain()
    assert gateway.data[COLORS_KEY] == "second"


@pytest.mark.asyncio
async def test_slow_earlier_write_does_not_overwrite_later_one(slow_gateway) -> None:
    mirror = PersistenceMirror(slow_gateway)
    slow_gateway.set_delays = [0.05, 0]
    mirror.schedule_set(COLORS_KEY, "first")
    mirror.schedule_set(COLORS_KEY, "second")
    await mirror.drain()
    assert slow_gateway.data[COLORS_KEY] == "second"
    assert mirror.pending == 0


@pytest.mark.asyncio
async def test_delete_waits_for_pending_write_to_same_key(slow_gateway) -> None:
    mirror = PersistenceMirror(slow_gateway)
    slow_gateway.set_delays = [0.05]
    mirror.schedule_set(ACTIVITIES_KEY, "[]")
    mirror.schedule_delete(ACTIVITIES_KEY)
    await mirror.drain()
    assert ACTIVITIES_KEY not in slow_gateway.data


@pytest.mark.asyncio
async def test_write_after_slow_delete_lands_last(slow_gateway) -> None:
    mirror = PersistenceMirror(slow_gateway)
    slow_gateway.data[COLORS_KEY] = "old"
    slow_gateway.delete_delay = 0.05
    mirror.schedule_delete(COLORS_KEY)
    mirror.schedule_set(COLORS_KEY, "defaults")
    await mirror.drain()
    assert slow_gateway.data[COLORS_KEY] == "defaults"


@pytest.mark.asyncio
async def test_different_keys_are_not_serialized(slow_gateway) -> None:
    mirror = PersistenceMirror(slow_gateway)
    slow_gateway.set_delays = [10, 0]
    slow_task = mirror.schedule_set(ACTIVITIES_KEY, "[]")
    mirror.schedule_set(COLORS_KEY, "{}")
    await asyncio.sleep(0.02)
    assert slow_gateway.data == {COLORS_KEY: "{}"}
    slow_task.cancel()
    await mirror.drain()


@pytest.mark.asyncio
async def test_schedule_delete(gateway, mirror) -> None:
    gateway.data[MILESTONES_KEY] = "[]"
    mirror.schedule_delete(MILESTONES_KEY)
    await mirror.drain()
    assert MILESTONES_KEY not in gateway.data


@pytest.mark.asyncio
async def test_key_prefix_is_applied(gateway) -> None:
    mirror = PersistenceMirror(gateway, key_prefix="alice:")
    await mirror.write(COLORS_KEY, "{}")
    assert gateway.data == {"alice:fitness-colors": "{}"}
    assert await mirror.read(COLORS_KEY) == "{}"
    assert await mirror.remove(COLORS_KEY) is True


# =============================================================================
# Failures
# =============================================================================


@pytest.mark.asyncio
async def test_failed_write_is_logged_not_raised(failing_gateway, caplog) -> None:
    mirror = PersistenceMirror(failing_gateway)
    with caplog.at_level(logging.WARNING):
        mirror.schedule_set(ACTIVITIES_KEY, "[]")
        await mirror.drain()
    assert "Failed to persist fitness-activities" in caplog.text
    failing_gateway.set.assert_awaited_once_with(ACTIVITIES_KEY, "[]")


@pytest.mark.asyncio
async def test_rejected_write_returns_false(caplog) -> None:
    gateway = Mock()
    gateway.set = AsyncMock(return_value=False)
    mirror = PersistenceMirror(gateway)
    with caplog.at_level(logging.WARNING):
        assert await mirror.write(COLORS_KEY, "{}") is False
    assert "rejected write" in caplog.text


@pytest.mark.asyncio
async def test_failed_read_is_absent(failing_gateway) -> None:
    mirror = PersistenceMirror(failing_gateway)
    assert await mirror.read(ACTIVITIES_KEY) is None


@pytest.mark.asyncio
async def test_failed_delete_returns_false(failing_gateway) -> None:
    mirror = PersistenceMirror(failing_gateway)
    assert await mirror.remove(ACTIVITIES_KEY) is False


def test_schedule_without_event_loop_is_skipped(gateway, caplog) -> None:
    mirror = PersistenceMirror(gateway)
    with caplog.at_level(logging.WARNING):
        assert mirror.schedule_set(ACTIVITIES_KEY, "[]") is None
    assert gateway.data == {}
    assert "No running event loop" in caplog.text
