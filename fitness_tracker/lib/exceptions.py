"""
Custom exception hierarchy for the Fitness Progress Tracker.

All exceptions inherit from FitnessTrackerException, enabling a
catch-all for tracker-specific errors while keeping the ability to
catch specific error types.

Persistence and deserialization failures are never propagated out of
the core: the load path and the persistence mirror catch them and log.
"""

from __future__ import annotations


class FitnessTrackerException(Exception):
    """Base exception for all Fitness Progress Tracker errors."""


class ConfigurationError(FitnessTrackerException):
    """Invalid environment configuration detected at startup."""


class ValidationError(FitnessTrackerException):
    """Host-side input validation failures (empty names, unknown categories, off-palette colors)."""


class SerializationError(FitnessTrackerException):
    """A persisted collection could not be decoded."""


class PersistenceError(FitnessTrackerException):
    """A storage backend rejected or failed a read, write or delete."""


class StateError(FitnessTrackerException):
    """Operation not valid in the tracker's current lifecycle state."""


__all__ = [
    "FitnessTrackerException",
    "ConfigurationError",
    "ValidationError",
    "SerializationError",
    "PersistenceError",
    "StateError",
]
