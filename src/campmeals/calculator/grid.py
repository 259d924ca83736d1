"""Week grid construction and accumulation."""

from __future__ import annotations

from datetime import date, timedelta
from typing import Iterable, Optional

from campmeals.models.grid import DayCell, WeekGrid
from campmeals.models.roster import DietaryBreakdown

from .rules import Contribution
from .utils import week_start, weekday_name


def build_week_grid(start_date: date) -> WeekGrid:
    """Seven zeroed day cells for the Monday-aligned week containing ``start_date``."""
    monday = week_start(start_date)
    days = []
    for offset in range(7):
        current = monday + timedelta(days=offset)
        days.append(DayCell(date=current, day_name=weekday_name(current)))
    return WeekGrid(week_start=monday, days=days)


def accumulate(
    cell: DayCell,
    contributions: Iterable[Contribution],
    dietary: Optional[DietaryBreakdown] = None,
) -> None:
    """Add each contribution's head count, and the dietary tally, to its bucket."""
    for contribution in contributions:
        cell.bucket(contribution.kind).add(contribution.count, dietary)
