"""Meal cutoff configuration."""

from __future__ import annotations

import datetime as dt
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, field_serializer, field_validator

from .grid import Meal
from .parsing import format_time, parse_time


class MealTimeConfig(BaseModel):
    """Times of day at which breakfast, lunch and dinner are considered served.

    Validation is strict (``HH:MM``); use :meth:`from_raw` for values read back
    from storage, which falls back per field instead of failing.
    """

    breakfast: dt.time = dt.time(9, 0)
    lunch: dt.time = dt.time(13, 0)
    dinner: dt.time = dt.time(18, 0)

    model_config = ConfigDict(frozen=True)

    @field_validator("breakfast", "lunch", "dinner", mode="before")
    @classmethod
    def parse_clock_time(cls, value: Any) -> dt.time:
        parsed = parse_time(value)
        if parsed is None:
            raise ValueError("expected a time of day in HH:MM format")
        return parsed

    @field_serializer("breakfast", "lunch", "dinner")
    def serialize_clock_time(self, value: dt.time) -> str:
        return format_time(value)

    @classmethod
    def from_raw(
        cls,
        data: Optional[Mapping[str, Any]],
        defaults: Optional["MealTimeConfig"] = None,
    ) -> "MealTimeConfig":
        base = defaults or cls()
        data = data or {}
        values: dict[str, dt.time] = {}
        for meal in Meal:
            parsed = parse_time(data.get(meal.value))
            values[meal.value] = parsed if parsed is not None else base.cutoff(meal)
        return cls(**values)

    def cutoff(self, meal: Meal) -> dt.time:
        return getattr(self, meal.value)

    def is_ordered(self) -> bool:
        return self.breakfast < self.lunch < self.dinner
