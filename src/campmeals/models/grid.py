"""Weekly meal grid output models."""

from __future__ import annotations

import datetime as dt
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .roster import DietaryBreakdown


class Meal(str, Enum):
    """A served meal, independent of whether it is eaten on site or packed."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"


class MealKind(str, Enum):
    """The six buckets of a day cell. Values match the ``DayCell`` attribute names."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    PACKED_BREAKFAST = "packed_breakfast"
    PACKED_LUNCH = "packed_lunch"
    PACKED_DINNER = "packed_dinner"

    @classmethod
    def for_meal(cls, meal: Meal, packed: bool = False) -> "MealKind":
        return cls(f"packed_{meal.value}" if packed else meal.value)


class MealBucket(BaseModel):
    """Running total for one (day, meal kind) cell."""

    total: int = 0
    dietary: DietaryBreakdown = Field(default_factory=DietaryBreakdown)

    def add(self, count: int, dietary: Optional[DietaryBreakdown] = None) -> None:
        if count <= 0:
            return
        self.total += count
        self.dietary.add(dietary)


class DayCell(BaseModel):
    """One calendar day of the grid with its six meal buckets."""

    date: dt.date
    day_name: str
    breakfast: MealBucket = Field(default_factory=MealBucket, alias="B")
    lunch: MealBucket = Field(default_factory=MealBucket, alias="L")
    dinner: MealBucket = Field(default_factory=MealBucket, alias="D")
    packed_breakfast: MealBucket = Field(default_factory=MealBucket, alias="pB")
    packed_lunch: MealBucket = Field(default_factory=MealBucket, alias="pL")
    packed_dinner: MealBucket = Field(default_factory=MealBucket, alias="pD")

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def bucket(self, kind: MealKind) -> MealBucket:
        return getattr(self, kind.value)

    @property
    def is_weekend(self) -> bool:
        return self.date.weekday() >= 5


class WeekGrid(BaseModel):
    """Seven day cells, Monday through Sunday, in ascending date order."""

    week_start: dt.date
    days: list[DayCell] = Field(default_factory=list)

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @property
    def week_end(self) -> dt.date:
        return self.week_start + dt.timedelta(days=6)
