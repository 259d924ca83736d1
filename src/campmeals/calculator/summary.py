"""Multi-week meal totals for the dashboard view."""

from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Any, Iterable, Optional

from campmeals.models.grid import Meal, MealKind, WeekGrid
from campmeals.models.meal_times import MealTimeConfig
from campmeals.models.roster import Group, ScheduledPresence, StaffMember
from campmeals.models.summary import DateRange, MealTotals, RangeSummary, WeekSummary

from .engine import generate_weekly_grid, parse_groups, parse_staff
from .utils import week_start

logger = logging.getLogger(__name__)


def _add_grid(totals: MealTotals, grid: WeekGrid) -> None:
    for cell in grid.days:
        for meal in Meal:
            for packed, counts in ((False, totals.regular), (True, totals.packed)):
                bucket = cell.bucket(MealKind.for_meal(meal, packed))
                setattr(counts, meal.value, getattr(counts, meal.value) + bucket.total)
                totals.dietary.add(bucket.dietary)
    totals.regular_total = totals.regular.total
    totals.packed_total = totals.packed.total
    totals.total_meals = totals.regular_total + totals.packed_total


def summarize_week(grid: WeekGrid) -> WeekSummary:
    """Regular, packed and dietary totals over one grid."""
    summary = WeekSummary(week_start=grid.week_start, week_end=grid.week_end)
    _add_grid(summary, grid)
    return summary


def _group_dates(group: Group) -> list[date]:
    presence = group.presence
    if isinstance(presence, ScheduledPresence):
        slots = [*presence.arrivals, *presence.departures]
        return [slot.date for slot in slots if slot.date is not None]
    return [d for d in (presence.arrival_date, presence.departure_date) if d is not None]


def _staff_dates(member: StaffMember) -> list[date]:
    return [d for d in (member.arrival_date, member.departure_date) if d is not None]


def stay_range(groups: Iterable[Group], staff: Iterable[StaffMember]) -> Optional[DateRange]:
    """Earliest arrival to latest departure over the whole roster."""
    dates: list[date] = []
    for group in groups:
        dates.extend(_group_dates(group))
    for member in staff:
        dates.extend(_staff_dates(member))
    if not dates:
        return None
    return DateRange(start=min(dates), end=max(dates))


def summarize_range(
    groups: Iterable[Any],
    staff: Iterable[Any],
    meal_times: Optional[MealTimeConfig] = None,
) -> RangeSummary:
    """Sum one weekly grid per week from the earliest arrival to the latest departure."""

    parsed_groups = parse_groups(groups)
    parsed_staff = parse_staff(staff)
    date_range = stay_range(parsed_groups, parsed_staff)
    summary = RangeSummary(date_range=date_range)
    if date_range is None:
        return summary

    current = week_start(date_range.start)
    while current <= date_range.end:
        grid = generate_weekly_grid(parsed_groups, parsed_staff, current, meal_times)
        summary.weeks.append(summarize_week(grid))
        _add_grid(summary, grid)
        current += timedelta(days=7)

    logger.debug(
        "Summarized %s week(s) from %s to %s",
        len(summary.weeks),
        date_range.start,
        date_range.end,
    )
    return summary
