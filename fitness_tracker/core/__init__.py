"""
Core package for the Fitness Progress Tracker.

- tracker.py: FitnessTracker lifecycle, user actions and dashboard model
- validation.py: Host-side input checks and form defaults
"""

from fitness_tracker.core.tracker import (
    Dashboard,
    FitnessTracker,
    GoalEntry,
    ScheduleEntry,
    always_confirm,
    format_clock_label,
)

__all__ = [
    "Dashboard",
    "FitnessTracker",
    "GoalEntry",
    "ScheduleEntry",
    "always_confirm",
    "format_clock_label",
]
