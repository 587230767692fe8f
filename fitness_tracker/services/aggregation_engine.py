"""
Aggregation Engine - today's counts and this week's per-category goals.

Both computations are pure and recomputed from the raw collection on
every call; nothing is cached.

Windows:
    - Today: activities whose scheduled time falls on the same local
      calendar date as `now`.
    - This week: [Sunday 00:00, next Sunday 00:00) around `now`.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta

from fitness_tracker.models.activity import Activity, ActivityCategory, ActivityStatus


@dataclass(frozen=True)
class DailyStats:
    """Today's activities counted by status."""

    completed: int = 0
    active: int = 0
    scheduled: int = 0

    @property
    def total(self) -> int:
        return self.completed + self.active + self.scheduled

    def to_dict(self) -> dict[str, int]:
        return {"completed": self.completed, "active": self.active, "scheduled": self.scheduled}


@dataclass(frozen=True)
class CategoryGoal:
    """Week completion ratio for one category."""

    category: ActivityCategory
    completed_count: int
    total_count: int
    percentage: int

    def to_dict(self) -> dict[str, int | str]:
        return {
            "category": self.category.value,
            "completed": self.completed_count,
            "total": self.total_count,
            "percentage": self.percentage,
        }


def round_percentage(completed: int, total: int) -> int:
    """100 * completed / total rounded half up, in integer arithmetic."""
    return (200 * completed + total) // (2 * total)


def start_of_week(now: datetime) -> datetime:
    """Local midnight of the most recent Sunday (today if `now` is a Sunday)."""
    days_since_sunday = (now.weekday() + 1) % 7
    sunday: date = now.date() - timedelta(days=days_since_sunday)
    return datetime.combine(sunday, time.min)


def week_window(now: datetime) -> tuple[datetime, datetime]:
    """Half-open [start, end) of the week containing `now`."""
    start = start_of_week(now)
    return start, start + timedelta(days=7)


def is_today(instant: datetime, now: datetime) -> bool:
    return instant.date() == now.date()


def is_this_week(instant: datetime, now: datetime) -> bool:
    start, end = week_window(now)
    return start <= instant < end


def today_activities(activities: Iterable[Activity], now: datetime) -> list[Activity]:
    """Activities scheduled on today's date, in collection order."""
    return [a for a in activities if is_today(a.scheduled_time, now)]


def week_activities(activities: Iterable[Activity], now: datetime) -> list[Activity]:
    """Activities scheduled inside this week's window, in collection order."""
    return [a for a in activities if is_this_week(a.scheduled_time, now)]


def daily_stats(activities: Iterable[Activity], now: datetime) -> DailyStats:
    """Count today's activities by status."""
    todays = today_activities(activities, now)
    return DailyStats(
        completed=sum(1 for a in todays if a.status == ActivityStatus.COMPLETED),
        active=sum(1 for a in todays if a.status == ActivityStatus.ACTIVE),
        scheduled=sum(1 for a in todays if a.status == ActivityStatus.SCHEDULED),
    )


def weekly_goals(
    activities: Iterable[Activity], now: datetime
) -> dict[ActivityCategory, CategoryGoal]:
    """
    Per-category completion for this week.

    Categories with no activity in the window are left out entirely.
    Result keys follow the fixed category order.
    """
    week = week_activities(activities, now)
    goals: dict[ActivityCategory, CategoryGoal] = {}
    for category in ActivityCategory:
        in_category = [a for a in week if a.category == category]
        if not in_category:
            continue
        completed = sum(1 for a in in_category if a.is_completed)
        goals[category] = CategoryGoal(
            category=category,
            completed_count=completed,
            total_count=len(in_category),
            percentage=round_percentage(completed, len(in_category)),
        )
    return goals
