"""
Journey Engine - milestone progress as a route of stops.

Positions are decided by the number of completed milestones, not by
which ones are completed:

    - node i is current when i == completed_count
    - the segment between node i and i+1 is filled when i < completed_count

With non-contiguous completion ([done, open, done]) the current marker
lands on the third node even though it is already done, and the first
segment is drawn filled although its end is open. The renderer only
enlarges/pulses a current node that is not completed (`emphasized`).
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from fitness_tracker.models.milestone import Milestone


@dataclass(frozen=True)
class JourneyNode:
    milestone: Milestone
    index: int
    completed: bool
    current: bool

    @property
    def emphasized(self) -> bool:
        return self.current and not self.completed


@dataclass(frozen=True)
class JourneySegment:
    """Connector from node `index` to node `index + 1`."""

    index: int
    filled: bool


@dataclass(frozen=True)
class Journey:
    completed_count: int
    nodes: list[JourneyNode] = field(default_factory=list)
    segments: list[JourneySegment] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.nodes)

    @property
    def current_index(self) -> int | None:
        """Position of the current marker, or None once every stop is reached."""
        if self.completed_count < self.total:
            return self.completed_count
        return None

    def to_dict(self) -> dict[str, object]:
        return {
            "completed_count": self.completed_count,
            "total": self.total,
            "current_index": self.current_index,
            "nodes": [
                {
                    "id": node.milestone.id,
                    "name": node.milestone.name,
                    "value": node.milestone.value,
                    "index": node.index,
                    "completed": node.completed,
                    "current": node.current,
                    "emphasized": node.emphasized,
                }
                for node in self.nodes
            ],
            "segments": [{"index": s.index, "filled": s.filled} for s in self.segments],
        }


def ordered_milestones(milestones: Iterable[Milestone]) -> list[Milestone]:
    """Stable sort by `order`; ties keep insertion order."""
    return sorted(milestones, key=lambda m: m.order)


def build_journey(milestones: Iterable[Milestone]) -> Journey:
    """Map the milestone sequence onto nodes and connecting segments."""
    ordered = ordered_milestones(milestones)
    completed_count = sum(1 for m in ordered if m.completed)

    nodes = [
        JourneyNode(
            milestone=milestone,
            index=index,
            completed=milestone.completed,
            current=index == completed_count,
        )
        for index, milestone in enumerate(ordered)
    ]
    segments = [
        JourneySegment(index=index, filled=index < completed_count)
        for index in range(max(len(ordered) - 1, 0))
    ]
    return Journey(completed_count=completed_count, nodes=nodes, segments=segments)
