"""
Lib package for the Fitness Progress Tracker.

Contains shared utilities:
- clock.py: The single time source (system and frozen clocks)
- logging.py: structlog + stdlib logging setup
- exceptions.py: Exception hierarchy
"""

from fitness_tracker.lib.clock import Clock, FrozenClock, SystemClock
from fitness_tracker.lib.exceptions import (
    ConfigurationError,
    FitnessTrackerException,
    PersistenceError,
    SerializationError,
    StateError,
    ValidationError,
)

__all__ = [
    "Clock",
    "FrozenClock",
    "SystemClock",
    "ConfigurationError",
    "FitnessTrackerException",
    "PersistenceError",
    "SerializationError",
    "StateError",
    "ValidationError",
]
