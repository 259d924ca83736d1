"""Aggregated meal totals across one or more weekly grids."""

from __future__ import annotations

import datetime as dt
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .roster import DietaryBreakdown


class MealCounts(BaseModel):
    breakfast: int = 0
    lunch: int = 0
    dinner: int = 0

    @property
    def total(self) -> int:
        return self.breakfast + self.lunch + self.dinner


class DateRange(BaseModel):
    start: dt.date
    end: dt.date


class MealTotals(BaseModel):
    """Regular and packed counts plus the dietary tally over all six buckets."""

    regular: MealCounts = Field(default_factory=MealCounts)
    packed: MealCounts = Field(default_factory=MealCounts)
    dietary: DietaryBreakdown = Field(default_factory=DietaryBreakdown)
    regular_total: int = 0
    packed_total: int = 0
    total_meals: int = 0

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class WeekSummary(MealTotals):
    week_start: dt.date
    week_end: dt.date


class RangeSummary(MealTotals):
    """Totals for every week touched by the roster, as shown on the dashboard."""

    date_range: Optional[DateRange] = None
    weeks: list[WeekSummary] = Field(default_factory=list)
