"""
Input checks and form defaults for hosts.

The stores accept whatever they are given; a host runs these checks on
user input first and shows the ValidationError message on failure.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from fitness_tracker.lib.exceptions import ValidationError
from fitness_tracker.models.activity import ActivityCategory

MIN_DURATION_MINUTES = 1
MAX_DURATION_MINUTES = 480
DEFAULT_DURATION_MINUTES = 30

MILESTONE_NAME_REQUIRED = "Please enter a milestone name"


def activity_form_defaults(now: datetime) -> dict[str, Any]:
    """Initial values of the add-activity form."""
    return {
        "category": ActivityCategory.CARDIO,
        "name": "",
        "description": "",
        "scheduled_time": now.replace(second=0, microsecond=0),
        "duration_minutes": DEFAULT_DURATION_MINUTES,
    }


def validate_activity_input(
    category: ActivityCategory | str,
    name: str,
    duration_minutes: int,
) -> ActivityCategory:
    """
    Check add-activity input.

    Returns:
        The category as an ActivityCategory

    Raises:
        ValidationError: unknown category, blank name, or duration outside [1, 480]
    """
    try:
        parsed = ActivityCategory(category)
    except ValueError as exc:
        raise ValidationError(f"Unknown activity type: {category!r}") from exc
    if not name or not name.strip():
        raise ValidationError("Please enter an activity name")
    if isinstance(duration_minutes, bool) or not isinstance(duration_minutes, int):
        raise ValidationError("Duration must be a whole number of minutes")
    if not MIN_DURATION_MINUTES <= duration_minutes <= MAX_DURATION_MINUTES:
        raise ValidationError(
            f"Duration must be between {MIN_DURATION_MINUTES} and {MAX_DURATION_MINUTES} minutes"
        )
    return parsed


def clean_milestone_input(name: str, value: str | None) -> tuple[str, str]:
    """
    Trim milestone input.

    Raises:
        ValidationError: if the trimmed name is empty
    """
    cleaned_name = (name or "").strip()
    if not cleaned_name:
        raise ValidationError(MILESTONE_NAME_REQUIRED)
    return cleaned_name, (value or "").strip()
