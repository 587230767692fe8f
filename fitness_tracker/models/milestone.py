"""
Milestone model.

Milestones are the stops on the user's journey. Completion is toggled by
the user only; nothing time-based ever touches it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from fitness_tracker.lib.exceptions import SerializationError


@dataclass
class Milestone:
    """A named goal on the journey.

    `order` is the number of milestones that existed when this one was
    created. Deleting a milestone never renumbers the others, so gaps and
    duplicates are possible.
    """

    id: str
    name: str
    value: str = ""
    completed: bool = False
    order: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the persisted record layout."""
        return {
            "id": self.id,
            "name": self.name,
            "value": self.value,
            "completed": self.completed,
            "order": self.order,
        }

    @classmethod
    def from_dict(cls, data: Any) -> Milestone:
        """Rebuild a milestone from a persisted record.

        Raises:
            SerializationError: if the record is not a mapping or a field is malformed
        """
        if not isinstance(data, dict):
            raise SerializationError(f"milestone record must be an object, got {type(data).__name__}")
        try:
            completed = data.get("completed", False)
            if not isinstance(completed, bool):
                raise TypeError(f"completed must be a boolean, got {completed!r}")
            return cls(
                id=str(data["id"]),
                name=str(data["name"]),
                value=str(data.get("value") or ""),
                completed=completed,
                order=int(data.get("order", 0)),
            )
        except (KeyError, ValueError, TypeError) as exc:
            raise SerializationError(f"malformed milestone record: {exc}") from exc
