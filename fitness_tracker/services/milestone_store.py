"""
Milestone store.

Owns the milestone collection in creation order. Like the activity store,
an empty collection is never persisted.
"""

from __future__ import annotations

import logging
import uuid

from fitness_tracker.models.milestone import Milestone
from fitness_tracker.services.persistence import MILESTONES_KEY, PersistenceMirror
from fitness_tracker.services.serialization import dumps

logger = logging.getLogger(__name__)


class MilestoneStore:
    """In-memory milestone collection with a persistence mirror."""

    def __init__(
        self,
        mirror: PersistenceMirror | None = None,
        milestones: list[Milestone] | None = None,
    ) -> None:
        self._mirror = mirror
        self._milestones: list[Milestone] = list(milestones or [])

    def __len__(self) -> int:
        return len(self._milestones)

    def all(self) -> list[Milestone]:
        """Milestones in insertion order (a copy of the list)."""
        return list(self._milestones)

    def get(self, milestone_id: str) -> Milestone | None:
        for milestone in self._milestones:
            if milestone.id == milestone_id:
                return milestone
        return None

    def add(self, name: str, value: str = "") -> Milestone:
        """
        Append a milestone.

        `order` is the current number of milestones, so after a delete the
        next milestone can share an order with an existing one.
        """
        milestone = Milestone(
            id=uuid.uuid4().hex[:12],
            name=name,
            value=value,
            completed=False,
            order=len(self._milestones),
        )
        self._milestones.append(milestone)
        self._persist()
        return milestone

    def toggle(self, milestone_id: str) -> bool:
        """Flip completion. Returns False if the id is unknown."""
        milestone = self.get(milestone_id)
        if milestone is None:
            return False
        milestone.completed = not milestone.completed
        logger.debug("Milestone %s completed=%s", milestone.id, milestone.completed)
        self._persist()
        return True

    def delete(self, milestone_id: str) -> bool:
        """Remove by id without renumbering. Returns False if absent."""
        remaining = [m for m in self._milestones if m.id != milestone_id]
        if len(remaining) == len(self._milestones):
            return False
        self._milestones = remaining
        self._persist()
        return True

    def replace_all(self, milestones: list[Milestone]) -> None:
        """Swap in a loaded collection without writing it back."""
        self._milestones = list(milestones)

    def reset(self) -> None:
        self._milestones = []

    def _persist(self) -> None:
        if self._mirror is None or not self._milestones:
            return
        self._mirror.schedule_set(MILESTONES_KEY, dumps(self._milestones))
