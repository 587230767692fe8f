"""
Models package for the Fitness Progress Tracker.

Usage:
    from fitness_tracker.models import Activity, ActivityCategory, ActivityStatus, Milestone
"""

from fitness_tracker.models.activity import Activity, ActivityCategory, ActivityStatus
from fitness_tracker.models.milestone import Milestone

__all__ = [
    "Activity",
    "ActivityCategory",
    "ActivityStatus",
    "Milestone",
]
