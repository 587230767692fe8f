"""
Timers and process hosting for the Fitness Progress Tracker.

- scheduler.py: RepeatingTask, one cancellable asyncio loop per cadence
- host.py: headless runner with signal-driven shutdown
"""

from fitness_tracker.workflows.scheduler import RepeatingTask

__all__ = ["RepeatingTask"]
