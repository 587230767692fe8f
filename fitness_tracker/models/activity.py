"""
Activity model.

An activity is a scheduled block of exercise, nutrition or recovery work.
Its valid window is the half-open interval
[scheduled_time, scheduled_time + duration_minutes).

Status moves scheduled -> active -> completed, or scheduled -> completed
when the user finishes early. Completed is terminal.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import StrEnum
from typing import Any

from fitness_tracker.lib.clock import format_local_instant, parse_local_instant
from fitness_tracker.lib.exceptions import SerializationError


class ActivityCategory(StrEnum):
    """The six fixed activity categories."""

    CARDIO = "cardio"
    STRENGTH = "strength"
    FLEXIBILITY = "flexibility"
    NUTRITION = "nutrition"
    RECOVERY = "recovery"
    ENDURANCE = "endurance"


class ActivityStatus(StrEnum):
    """Lifecycle states of an activity."""

    SCHEDULED = "scheduled"
    ACTIVE = "active"
    COMPLETED = "completed"


def _parse_duration(raw: Any) -> int:
    """Whole positive minutes from an int, an integral float or a digit string."""
    if isinstance(raw, bool):
        raise SerializationError(f"duration must be a number, got {raw!r}")
    if isinstance(raw, float):
        if not raw.is_integer():
            raise SerializationError(f"duration must be whole minutes, got {raw!r}")
        raw = int(raw)
    elif isinstance(raw, str):
        if not raw.strip().isdigit():
            raise SerializationError(f"duration must be whole minutes, got {raw!r}")
        raw = int(raw)
    elif not isinstance(raw, int):
        raise SerializationError(f"duration must be a number, got {type(raw).__name__}")
    if raw <= 0:
        raise SerializationError(f"duration must be positive, got {raw}")
    return raw


@dataclass
class Activity:
    """A scheduled fitness activity.

    Only `status` changes after creation; every other field is fixed
    when the activity is added.
    """

    id: str
    category: ActivityCategory
    name: str
    scheduled_time: datetime
    duration_minutes: int
    created_at: datetime
    description: str = ""
    status: ActivityStatus = ActivityStatus.SCHEDULED

    @property
    def end_time(self) -> datetime:
        """Exclusive end of the activity window."""
        return self.scheduled_time + timedelta(minutes=self.duration_minutes)

    def in_window(self, now: datetime) -> bool:
        """True when `now` falls inside [scheduled_time, end_time)."""
        return self.scheduled_time <= now < self.end_time

    @property
    def is_completed(self) -> bool:
        return self.status == ActivityStatus.COMPLETED

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the persisted record layout."""
        return {
            "id": self.id,
            "type": self.category.value,
            "name": self.name,
            "description": self.description,
            "scheduledTime": format_local_instant(self.scheduled_time),
            "duration": self.duration_minutes,
            "status": self.status.value,
            "createdAt": format_local_instant(self.created_at),
        }

    @classmethod
    def from_dict(cls, data: Any) -> Activity:
        """Rebuild an activity from a persisted record.

        Accepts `category` / `durationMinutes` as aliases for `type` /
        `duration`. Records without `createdAt` use the scheduled time.

        Raises:
            SerializationError: if the record is not a mapping or any
                field is missing or malformed
        """
        if not isinstance(data, dict):
            raise SerializationError(f"activity record must be an object, got {type(data).__name__}")
        try:
            category = data["type"] if "type" in data else data["category"]
            duration = data["duration"] if "duration" in data else data["durationMinutes"]
            created_raw = data.get("createdAt")
            scheduled_time = parse_local_instant(str(data["scheduledTime"]))
            return cls(
                id=str(data["id"]),
                category=ActivityCategory(category),
                name=str(data["name"]),
                description=str(data.get("description") or ""),
                scheduled_time=scheduled_time,
                duration_minutes=_parse_duration(duration),
                status=ActivityStatus(data.get("status", ActivityStatus.SCHEDULED)),
                created_at=(
                    parse_local_instant(str(created_raw))
                    if created_raw
                    else scheduled_time
                ),
            )
        except (KeyError, ValueError, TypeError) as exc:
            raise SerializationError(f"malformed activity record: {exc}") from exc
