"""
Activity store.

Owns the mutable activity collection. Mutations are synchronous and take
effect in memory immediately; each one that changes the collection
schedules a persistence write of the whole collection.

Persistence policy: an empty collection is never written. Deleting the
last activity therefore leaves the previous non-empty payload in storage.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Iterator
from datetime import datetime

from fitness_tracker.lib.clock import Clock, SystemClock
from fitness_tracker.models.activity import Activity, ActivityCategory, ActivityStatus
from fitness_tracker.services.persistence import ACTIVITIES_KEY, PersistenceMirror
from fitness_tracker.services.serialization import dumps

logger = logging.getLogger(__name__)


def _new_id() -> str:
    return uuid.uuid4().hex[:12]


class ActivityStore:
    """In-memory activity collection with a persistence mirror.

    Usage:
        store = ActivityStore(clock=clock, mirror=mirror)
        activity = store.add(ActivityCategory.CARDIO, "Morning Run", "", start, 30)
        store.reclassify(clock.now())
        store.mark_complete(activity.id)
    """

    def __init__(
        self,
        clock: Clock | None = None,
        mirror: PersistenceMirror | None = None,
        activities: list[Activity] | None = None,
    ) -> None:
        self._clock = clock or SystemClock()
        self._mirror = mirror
        self._activities: list[Activity] = list(activities or [])

    def __len__(self) -> int:
        return len(self._activities)

    def __iter__(self) -> Iterator[Activity]:
        return iter(list(self._activities))

    def all(self) -> list[Activity]:
        """Activities in insertion order (a copy of the list)."""
        return list(self._activities)

    def get(self, activity_id: str) -> Activity | None:
        for activity in self._activities:
            if activity.id == activity_id:
                return activity
        return None

    def add(
        self,
        category: ActivityCategory | str,
        name: str,
        description: str,
        scheduled_time: datetime,
        duration_minutes: int,
    ) -> Activity:
        """
        Create a scheduled activity.

        Field contents are not validated here; see core.validation for
        the checks a host runs before calling this.

        Returns:
            The new activity, status scheduled, created_at = clock now
        """
        activity = Activity(
            id=_new_id(),
            category=ActivityCategory(category),
            name=name,
            description=description or "",
            scheduled_time=scheduled_time,
            duration_minutes=duration_minutes,
            status=ActivityStatus.SCHEDULED,
            created_at=self._clock.now(),
        )
        self._activities.append(activity)
        logger.debug("Added activity %s (%s) at %s", activity.id, activity.category, scheduled_time)
        self._persist()
        return activity

    def mark_complete(self, activity_id: str) -> bool:
        """
        Mark an activity completed.

        Returns:
            True if the status changed; False if the id is unknown or the
            activity was already completed
        """
        activity = self.get(activity_id)
        if activity is None or activity.is_completed:
            return False
        activity.status = ActivityStatus.COMPLETED
        self._persist()
        return True

    def delete(self, activity_id: str) -> bool:
        """Remove an activity regardless of status. Returns False if absent."""
        remaining = [a for a in self._activities if a.id != activity_id]
        if len(remaining) == len(self._activities):
            return False
        self._activities = remaining
        self._persist()
        return True

    def reclassify(self, now: datetime) -> list[Activity]:
        """
        Promote scheduled activities whose window contains `now` to active.

        Activities whose window has already closed stay scheduled; they are
        never expired automatically.

        Returns:
            The activities that changed to active
        """
        promoted = [
            activity
            for activity in self._activities
            if activity.status == ActivityStatus.SCHEDULED and activity.in_window(now)
        ]
        for activity in promoted:
            activity.status = ActivityStatus.ACTIVE
            logger.debug("Activity %s is now active", activity.id)
        if promoted:
            self._persist()
        return promoted

    def replace_all(self, activities: list[Activity]) -> None:
        """Swap in a loaded collection without writing it back."""
        self._activities = list(activities)

    def reset(self) -> None:
        """Drop every activity. Nothing is written (empty collections never are)."""
        self._activities = []

    def _persist(self) -> None:
        if self._mirror is None or not self._activities:
            return
        self._mirror.schedule_set(ACTIVITIES_KEY, dumps(self._activities))
