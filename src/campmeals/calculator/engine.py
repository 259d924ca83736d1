"""Weekly meal-demand calculation."""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, Iterable, Optional, Sequence

from pydantic import ValidationError

from campmeals import metrics
from campmeals.models.grid import Meal, WeekGrid
from campmeals.models.meal_times import MealTimeConfig
from campmeals.models.roster import DietaryBreakdown, Group, StaffMember

from .grid import accumulate, build_week_grid
from .presence import Stay, group_stays, staff_stays
from .rules import ALL_MEALS, LUNCH_ONLY, classify_day
from .utils import is_weekend

logger = logging.getLogger(__name__)


def parse_groups(entries: Iterable[Any]) -> list[Group]:
    """Validate raw group entries, skipping any that cannot be interpreted."""
    groups: list[Group] = []
    for index, entry in enumerate(entries or ()):
        if isinstance(entry, Group):
            groups.append(entry)
            continue
        try:
            groups.append(Group.model_validate(entry))
        except ValidationError as exc:
            logger.warning("Skipping unreadable group entry index=%s errors=%s", index, exc.errors())
            metrics.ROSTER_ENTRIES_SKIPPED.labels(kind="group").inc()
    return groups


def parse_staff(entries: Iterable[Any]) -> list[StaffMember]:
    """Validate raw staff entries, skipping any that cannot be interpreted."""
    staff: list[StaffMember] = []
    for index, entry in enumerate(entries or ()):
        if isinstance(entry, StaffMember):
            staff.append(entry)
            continue
        try:
            staff.append(StaffMember.model_validate(entry))
        except ValidationError as exc:
            logger.warning("Skipping unreadable staff entry index=%s errors=%s", index, exc.errors())
            metrics.ROSTER_ENTRIES_SKIPPED.labels(kind="staff").inc()
    return staff


def _apply_stays(
    grid: WeekGrid,
    stays: Sequence[Stay],
    meal_times: MealTimeConfig,
    dietary: Optional[DietaryBreakdown],
    meals: Sequence[Meal],
) -> None:
    if not stays:
        return
    for cell in grid.days:
        weekend = is_weekend(cell.date)
        for stay in stays:
            window = stay.window_on(cell.date)
            if window is None:
                continue
            accumulate(cell, classify_day(window, meal_times, weekend, stay.count, meals), dietary)


def generate_weekly_grid(
    groups: Iterable[Any],
    staff: Iterable[Any],
    start_date: date,
    meal_times: Optional[MealTimeConfig] = None,
) -> WeekGrid:
    """Count the meals needed on each day of the week containing ``start_date``.

    ``groups`` and ``staff`` may hold validated models or raw mappings in the
    roster wire format. ``meal_times`` is taken as given for the whole call;
    ``None`` means the standard 09:00/13:00/18:00 cutoffs.
    """

    if isinstance(start_date, datetime):
        start_date = start_date.date()
    thresholds = meal_times or MealTimeConfig()
    grid = build_week_grid(start_date)

    parsed_groups = parse_groups(groups)
    parsed_staff = parse_staff(staff)

    for group in parsed_groups:
        _apply_stays(grid, group_stays(group), thresholds, group.dietary, ALL_MEALS)

    for member in parsed_staff:
        meals = ALL_MEALS if member.is_live_in else LUNCH_ONLY
        _apply_stays(grid, staff_stays(member), thresholds, None, meals)

    metrics.GRIDS_GENERATED.inc()
    logger.debug(
        "Generated meal grid for week of %s",
        grid.week_start,
        extra={
            "week_start": grid.week_start.isoformat(),
            "groups": len(parsed_groups),
            "staff": len(parsed_staff),
        },
    )
    return grid
