"""Fitness Progress Tracker: activity lifecycle and progress aggregation."""

__version__ = "1.0.0"
