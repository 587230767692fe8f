"""
Fitness tracker lifecycle and host-facing operations.

FitnessTracker ties the stores, the engines and the timers together:

- start(): load persisted data, then register the two timers
  (display clock every 60s, reclassification every 30s)
- user actions are forwarded to the stores; destructive ones ask the
  injected confirm callback first and do nothing when it declines
- dashboard(): everything a host renders, recomputed on every call
- stop(): cancel the timers and wait for outstanding writes

Load path: each key is read independently. Missing or undecodable data
leaves that store empty (colors: defaults) and is only logged.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime

from fitness_tracker.config.categories import category_label
from fitness_tracker.config.settings import (
    DEFAULT_CLOCK_TICK_SECONDS,
    DEFAULT_RECLASSIFY_SECONDS,
    Settings,
)
from fitness_tracker.core.validation import clean_milestone_input, validate_activity_input
from fitness_tracker.lib.clock import Clock, SystemClock
from fitness_tracker.lib.exceptions import SerializationError, StateError
from fitness_tracker.models.activity import Activity, ActivityCategory
from fitness_tracker.models.milestone import Milestone
from fitness_tracker.services.activity_store import ActivityStore
from fitness_tracker.services.aggregation_engine import (
    CategoryGoal,
    DailyStats,
    daily_stats,
    today_activities,
    weekly_goals,
)
from fitness_tracker.services.color_store import CategoryColorMap
from fitness_tracker.services.journey_engine import Journey, build_journey
from fitness_tracker.services.milestone_store import MilestoneStore
from fitness_tracker.services.persistence import (
    ACTIVITIES_KEY,
    ALL_KEYS,
    COLORS_KEY,
    MILESTONES_KEY,
    PersistenceGateway,
    PersistenceMirror,
)
from fitness_tracker.services.serialization import load_activities, load_colors, load_milestones
from fitness_tracker.services.status_engine import DisplayStatus, display_status
from fitness_tracker.workflows.scheduler import RepeatingTask

logger = logging.getLogger(__name__)

ConfirmCallback = Callable[[str], bool]

CONFIRM_DELETE_ACTIVITY = "Delete this activity?"
CONFIRM_DELETE_MILESTONE = "Delete this milestone?"
CONFIRM_CLEAR_ALL = "Delete ALL data? This cannot be undone."


def always_confirm(_prompt: str) -> bool:
    return True


def format_clock_label(now: datetime) -> str:
    """
    12-hour clock label, lower-case, no leading zero.

    Example:
        >>> format_clock_label(datetime(2026, 10, 18, 21, 5))
        "9:05 pm"
    """
    hour = now.hour % 12 or 12
    suffix = "am" if now.hour < 12 else "pm"
    return f"{hour}:{now.minute:02d} {suffix}"


@dataclass(frozen=True)
class ScheduleEntry:
    """One row of today's schedule."""

    activity: Activity
    status: DisplayStatus
    color: str

    @property
    def category_label(self) -> str:
        return category_label(self.activity.category)


@dataclass(frozen=True)
class GoalEntry:
    """One weekly goal bar."""

    goal: CategoryGoal
    color: str

    @property
    def category_label(self) -> str:
        return category_label(self.goal.category)


@dataclass(frozen=True)
class Dashboard:
    """Display data for one render pass."""

    now: datetime
    clock_label: str
    stats: DailyStats
    schedule: list[ScheduleEntry] = field(default_factory=list)
    goals: list[GoalEntry] = field(default_factory=list)
    journey: Journey = field(default_factory=lambda: Journey(completed_count=0))
    journey_color: str = ""


class FitnessTracker:
    """Owns the stores for one process lifetime.

    Usage:
        tracker = FitnessTracker.create(InMemoryGateway(), confirm=ask_user)
        await tracker.start()
        tracker.add_activity("cardio", "Morning Run", "", start, 30)
        view = tracker.dashboard()
        await tracker.stop()
    """

    def __init__(
        self,
        activities: ActivityStore,
        milestones: MilestoneStore,
        colors: CategoryColorMap,
        mirror: PersistenceMirror,
        clock: Clock | None = None,
        confirm: ConfirmCallback = always_confirm,
        clock_tick_seconds: float = DEFAULT_CLOCK_TICK_SECONDS,
        reclassify_seconds: float = DEFAULT_RECLASSIFY_SECONDS,
        on_clock_tick: Callable[[Dashboard], None] | None = None,
    ) -> None:
        self.activities = activities
        self.milestones = milestones
        self.colors = colors
        self._mirror = mirror
        self._clock = clock or SystemClock()
        self._confirm = confirm
        self._on_clock_tick = on_clock_tick
        self.current_time: datetime = self._clock.now()

        self._clock_timer = RepeatingTask("clock-tick", clock_tick_seconds, self.tick_clock)
        self._reclassify_timer = RepeatingTask(
            "reclassify", reclassify_seconds, self.run_reclassify
        )
        self._started = False

    @classmethod
    def create(
        cls,
        gateway: PersistenceGateway,
        clock: Clock | None = None,
        confirm: ConfirmCallback = always_confirm,
        settings: Settings | None = None,
        on_clock_tick: Callable[[Dashboard], None] | None = None,
    ) -> FitnessTracker:
        """Build a tracker whose three stores share one persistence mirror."""
        settings = settings or Settings()
        clock = clock or SystemClock()
        mirror = PersistenceMirror(gateway, key_prefix=settings.key_prefix)
        return cls(
            activities=ActivityStore(clock=clock, mirror=mirror),
            milestones=MilestoneStore(mirror=mirror),
            colors=CategoryColorMap(mirror=mirror),
            mirror=mirror,
            clock=clock,
            confirm=confirm,
            clock_tick_seconds=settings.clock_tick_seconds,
            reclassify_seconds=settings.reclassify_seconds,
            on_clock_tick=on_clock_tick,
        )

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    @property
    def started(self) -> bool:
        return self._started

    @property
    def mirror(self) -> PersistenceMirror:
        return self._mirror

    async def start(self) -> None:
        """Load persisted state and start both timers."""
        if self._started:
            raise StateError("Tracker already started")
        await self.load()
        self.current_time = self._clock.now()
        self._clock_timer.start()
        self._reclassify_timer.start()
        self._started = True

    async def stop(self) -> None:
        """Stop both timers and flush outstanding persistence writes."""
        if not self._started:
            raise StateError("Tracker is not running")
        await self._clock_timer.stop()
        await self._reclassify_timer.stop()
        await self._mirror.drain()
        self._started = False

    async def load(self) -> None:
        """Replace in-memory state with whatever storage holds."""
        raw = await self._mirror.read(ACTIVITIES_KEY)
        if raw is not None:
            try:
                self.activities.replace_all(load_activities(raw))
            except SerializationError as exc:
                logger.info("Starting with no activities: %s", exc)

        raw = await self._mirror.read(MILESTONES_KEY)
        if raw is not None:
            try:
                self.milestones.replace_all(load_milestones(raw))
            except SerializationError as exc:
                logger.info("Starting with no milestones: %s", exc)

        raw = await self._mirror.read(COLORS_KEY)
        if raw is not None:
            try:
                self.colors.replace_all(load_colors(raw))
            except SerializationError as exc:
                logger.info("Starting with default colors: %s", exc)

        logger.info(
            "Loaded %d activities and %d milestones",
            len(self.activities),
            len(self.milestones),
        )

    # -------------------------------------------------------------------------
    # Timer callbacks
    # -------------------------------------------------------------------------

    def tick_clock(self) -> None:
        """Refresh the display instant."""
        self.current_time = self._clock.now()
        if self._on_clock_tick is not None:
            self._on_clock_tick(self.dashboard(self.current_time))

    def run_reclassify(self) -> list[Activity]:
        """Promote activities whose window has opened."""
        promoted = self.activities.reclassify(self._clock.now())
        if promoted:
            logger.info("Reclassified %d activities to active", len(promoted))
        return promoted

    # -------------------------------------------------------------------------
    # User actions
    # -------------------------------------------------------------------------

    def add_activity(
        self,
        category: ActivityCategory | str,
        name: str,
        description: str,
        scheduled_time: datetime,
        duration_minutes: int,
    ) -> Activity:
        """Validate user input and add a scheduled activity.

        Raises:
            ValidationError: see core.validation.validate_activity_input
        """
        parsed = validate_activity_input(category, name, duration_minutes)
        return self.activities.add(parsed, name, description, scheduled_time, duration_minutes)

    def complete_activity(self, activity_id: str) -> bool:
        return self.activities.mark_complete(activity_id)

    def delete_activity(self, activity_id: str) -> bool:
        """Delete after confirmation. Returns False when declined or absent."""
        if not self._confirm(CONFIRM_DELETE_ACTIVITY):
            return False
        return self.activities.delete(activity_id)

    def add_milestone(self, name: str, value: str = "") -> Milestone:
        """Trim input and append a milestone.

        Raises:
            ValidationError: if the name is blank
        """
        cleaned_name, cleaned_value = clean_milestone_input(name, value)
        return self.milestones.add(cleaned_name, cleaned_value)

    def toggle_milestone(self, milestone_id: str) -> bool:
        return self.milestones.toggle(milestone_id)

    def delete_milestone(self, milestone_id: str) -> bool:
        """Delete after confirmation. Returns False when declined or absent."""
        if not self._confirm(CONFIRM_DELETE_MILESTONE):
            return False
        return self.milestones.delete(milestone_id)

    def set_category_color(self, category: ActivityCategory | str, color: str) -> None:
        self.colors.set(category, color)

    async def clear_all(self) -> bool:
        """
        Delete every stored key, then reset memory to empty/defaults.

        The deletes are queued behind any pending write for the same key and
        memory is reset before control returns to the event loop, so no timer
        tick can persist the old collections afterwards. A failed delete is
        logged and the in-memory reset happens regardless. Returns once the
        queued storage operations have finished.

        Returns:
            False if the user declined, True otherwise
        """
        if not self._confirm(CONFIRM_CLEAR_ALL):
            return False
        for key in ALL_KEYS:
            self._mirror.schedule_delete(key)
        self.activities.reset()
        self.milestones.reset()
        self.colors.reset()
        logger.info("Cleared all tracker data")
        await self._mirror.drain()
        return True

    # -------------------------------------------------------------------------
    # Read model
    # -------------------------------------------------------------------------

    def now(self) -> datetime:
        return self._clock.now()

    def status_of(self, activity: Activity, now: datetime | None = None) -> DisplayStatus:
        return display_status(activity, now or self._clock.now())

    def dashboard(self, now: datetime | None = None) -> Dashboard:
        """Compute the full display model at `now` (defaults to the clock)."""
        now = now or self._clock.now()
        activities = self.activities.all()
        schedule = [
            ScheduleEntry(
                activity=activity,
                status=display_status(activity, now),
                color=self.colors.get(activity.category),
            )
            for activity in today_activities(activities, now)
        ]
        goals = [
            GoalEntry(goal=goal, color=self.colors.get(category))
            for category, goal in weekly_goals(activities, now).items()
        ]
        return Dashboard(
            now=now,
            clock_label=format_clock_label(now),
            stats=daily_stats(activities, now),
            schedule=schedule,
            goals=goals,
            journey=build_journey(self.milestones.all()),
            journey_color=self.colors.get(ActivityCategory.CARDIO),
        )
