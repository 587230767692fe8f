"""
Fitness Progress Tracker -- Process Entry Point.

Runs the headless tracker host until SIGTERM/SIGINT.

Usage:
    python main.py
    FITNESS_STORAGE_BACKEND=redis REDIS_URL=redis://localhost:6379/0 python main.py
"""

from __future__ import annotations

import asyncio

from fitness_tracker.config.settings import Settings
from fitness_tracker.lib.logging import setup_logging
from fitness_tracker.workflows.host import run_host


def main() -> None:
    settings = Settings.from_env()
    setup_logging(dev_mode=settings.dev_mode, log_level=settings.log_level)
    asyncio.run(run_host(settings))


if __name__ == "__main__":
    main()
