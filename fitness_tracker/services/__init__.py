"""
Services for the Fitness Progress Tracker.

Stores (own mutable state, persist on mutation):
    - ActivityStore
    - MilestoneStore
    - CategoryColorMap

Engines (pure functions over store contents and the current instant):
    - status_engine: countdown / "Due" / done labels
    - aggregation_engine: today's counts, this week's category goals
    - journey_engine: milestone route model

Persistence:
    - PersistenceMirror over a PersistenceGateway (InMemoryGateway, RedisGateway)
"""

from .activity_store import ActivityStore
from .aggregation_engine import CategoryGoal, DailyStats, daily_stats, weekly_goals
from .color_store import CategoryColorMap
from .journey_engine import Journey, JourneyNode, JourneySegment, build_journey
from .milestone_store import MilestoneStore
from .persistence import InMemoryGateway, PersistenceGateway, PersistenceMirror
from .status_engine import DisplayStatus, display_status

__all__ = [
    "ActivityStore",
    "CategoryGoal",
    "DailyStats",
    "daily_stats",
    "weekly_goals",
    "CategoryColorMap",
    "Journey",
    "JourneyNode",
    "JourneySegment",
    "build_journey",
    "MilestoneStore",
    "InMemoryGateway",
    "PersistenceGateway",
    "PersistenceMirror",
    "DisplayStatus",
    "display_status",
]
