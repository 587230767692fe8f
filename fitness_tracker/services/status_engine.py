"""
Status display for activities.

Pure functions: the displayed label is derived from the schedule and the
current instant on every call and never written back to the activity.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta

from fitness_tracker.models.activity import Activity

DONE_MARKER = "✓"
DUE_LABEL = "Due"

_HOUR = timedelta(hours=1)
_MINUTE = timedelta(minutes=1)


@dataclass(frozen=True)
class DisplayStatus:
    """What the host shows next to an activity."""

    label: str
    is_due: bool = False

    @property
    def has_countdown(self) -> bool:
        return not self.is_due and self.label != DONE_MARKER


def format_remaining(remaining: timedelta) -> str:
    """
    Format a non-negative time span as a countdown.

    Example:
        >>> format_remaining(timedelta(hours=1, minutes=5, seconds=59))
        "1 hr 5 min"
        >>> format_remaining(timedelta(minutes=9, seconds=30))
        "9 min"
    """
    hours = remaining // _HOUR
    minutes = (remaining % _HOUR) // _MINUTE
    if hours > 0:
        return f"{hours} hr {minutes} min"
    return f"{minutes} min"


def display_status(activity: Activity, now: datetime) -> DisplayStatus:
    """
    Derive the label for an activity at `now`.

    Completed activities show the done marker. Anything else counts down
    to its scheduled start and reads "Due" once the start has passed,
    whatever its stored status is.
    """
    if activity.is_completed:
        return DisplayStatus(label=DONE_MARKER)

    remaining = activity.scheduled_time - now
    if remaining < timedelta(0):
        return DisplayStatus(label=DUE_LABEL, is_due=True)
    return DisplayStatus(label=format_remaining(remaining))
