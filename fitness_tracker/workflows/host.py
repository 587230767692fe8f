"""
Headless host for the Fitness Progress Tracker.

Runs the tracker until SIGTERM/SIGINT: loads persisted data, starts the
two timers, logs a summary on every clock tick, and on shutdown cancels
the timers and flushes pending writes before closing the backend.
"""

from __future__ import annotations

import asyncio
import logging
import signal

from fitness_tracker.config.settings import Settings
from fitness_tracker.core.tracker import Dashboard, FitnessTracker
from fitness_tracker.services.persistence import InMemoryGateway, PersistenceGateway
from fitness_tracker.services.redis_service import RedisGateway

logger = logging.getLogger(__name__)

_SIGNALS = (signal.SIGTERM, signal.SIGINT)


def build_gateway(settings: Settings) -> PersistenceGateway:
    """Select the storage backend named in settings."""
    if settings.storage_backend == "redis":
        return RedisGateway(settings.redis_url)
    return InMemoryGateway()


def log_dashboard(view: Dashboard) -> None:
    """Clock-tick callback: one summary line per refresh."""
    logger.info(
        "%s | today: %d completed, %d active, %d scheduled | milestones %d/%d",
        view.clock_label,
        view.stats.completed,
        view.stats.active,
        view.stats.scheduled,
        view.journey.completed_count,
        view.journey.total,
    )


def install_signal_handlers(stop_event: asyncio.Event) -> None:
    """Set `stop_event` on SIGTERM/SIGINT."""
    loop = asyncio.get_running_loop()
    for sig in _SIGNALS:
        try:
            loop.add_signal_handler(sig, stop_event.set)
        except NotImplementedError:
            # Windows: no loop signal handlers
            signal.signal(sig, lambda _signum, _frame: loop.call_soon_threadsafe(stop_event.set))


def remove_signal_handlers() -> None:
    loop = asyncio.get_running_loop()
    for sig in _SIGNALS:
        try:
            loop.remove_signal_handler(sig)
        except (NotImplementedError, ValueError):
            signal.signal(sig, signal.SIG_DFL)


async def run_host(
    settings: Settings | None = None,
    stop_event: asyncio.Event | None = None,
    gateway: PersistenceGateway | None = None,
    handle_signals: bool = True,
) -> FitnessTracker:
    """
    Run a tracker until `stop_event` is set.

    Args:
        settings: Configuration (read from the environment if None)
        stop_event: Event that ends the run (created if None)
        gateway: Storage backend override (chosen from settings if None)
        handle_signals: Install SIGTERM/SIGINT handlers that set stop_event

    Returns:
        The stopped tracker
    """
    settings = settings or Settings.from_env()
    stop_event = stop_event or asyncio.Event()
    gateway = gateway or build_gateway(settings)

    tracker = FitnessTracker.create(gateway, settings=settings, on_clock_tick=log_dashboard)

    if handle_signals:
        install_signal_handlers(stop_event)
    try:
        await tracker.start()
        logger.info("Tracker running with %s storage", settings.storage_backend)
        await stop_event.wait()
        logger.info("Shutdown requested")
    finally:
        if tracker.started:
            await tracker.stop()
        if isinstance(gateway, RedisGateway):
            await gateway.close()
        if handle_signals:
            remove_signal_handlers()
    return tracker
