"""Pydantic models defining shared data contracts."""

from campmeals.models.grid import DayCell, Meal, MealBucket, MealKind, WeekGrid
from campmeals.models.meal_times import MealTimeConfig
from campmeals.models.roster import (
    DietaryBreakdown,
    Group,
    LegacyPresence,
    PresenceSlot,
    Roster,
    ScheduledPresence,
    StaffMember,
)
from campmeals.models.summary import (
    DateRange,
    MealCounts,
    MealTotals,
    RangeSummary,
    WeekSummary,
)

__all__ = [
    "DayCell",
    "Meal",
    "MealBucket",
    "MealKind",
    "WeekGrid",
    "MealTimeConfig",
    "DietaryBreakdown",
    "Group",
    "LegacyPresence",
    "PresenceSlot",
    "Roster",
    "ScheduledPresence",
    "StaffMember",
    "DateRange",
    "MealCounts",
    "MealTotals",
    "RangeSummary",
    "WeekSummary",
]
