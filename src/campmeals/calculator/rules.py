"""Meal eligibility rules: regular, packed or no meal for a person on a given day."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import time
from enum import Enum
from typing import Optional, Sequence

from campmeals.models.grid import Meal, MealKind
from campmeals.models.meal_times import MealTimeConfig
from campmeals.models.roster import END_OF_DAY, START_OF_DAY

ALL_MEALS: tuple[Meal, ...] = (Meal.BREAKFAST, Meal.LUNCH, Meal.DINNER)
LUNCH_ONLY: tuple[Meal, ...] = (Meal.LUNCH,)


class DayPresence(str, Enum):
    SAME_DAY = "same_day"
    ARRIVAL = "arrival"
    DEPARTURE = "departure"
    FULL_DAY = "full_day"


@dataclass(frozen=True)
class DayWindow:
    """Presence on one calendar day.

    ``arrival`` is 00:00 when the person was already on site at midnight and
    ``departure`` is 23:59 when they are still on site after the day ends.
    """

    presence: DayPresence
    arrival: time = START_OF_DAY
    departure: time = END_OF_DAY

    @classmethod
    def full_day(cls) -> "DayWindow":
        return cls(DayPresence.FULL_DAY)

    @classmethod
    def arriving(cls, at: time) -> "DayWindow":
        return cls(DayPresence.ARRIVAL, arrival=at)

    @classmethod
    def departing(cls, at: time) -> "DayWindow":
        return cls(DayPresence.DEPARTURE, departure=at)

    @classmethod
    def visiting(cls, arrival: time, departure: time) -> "DayWindow":
        return cls(DayPresence.SAME_DAY, arrival=arrival, departure=departure)


@dataclass(frozen=True)
class Contribution:
    kind: MealKind
    count: int


def placement(window: DayWindow, cutoff: time) -> Optional[bool]:
    """Return ``False`` for a regular meal, ``True`` for packed, ``None`` for no meal."""

    if window.presence is DayPresence.FULL_DAY:
        return False
    if window.presence is DayPresence.DEPARTURE:
        return window.departure < cutoff
    # Arrival-only days carry an END_OF_DAY departure, so one check covers both.
    if window.arrival <= cutoff <= window.departure:
        return False
    return None


def classify_day(
    window: DayWindow,
    meal_times: MealTimeConfig,
    weekend: bool,
    count: int,
    meals: Sequence[Meal] = ALL_MEALS,
) -> list[Contribution]:
    """Classify ``count`` people present during ``window`` into meal buckets."""

    if count <= 0:
        return []

    contributions: list[Contribution] = []
    for meal in meals:
        packed = placement(window, meal_times.cutoff(meal))
        if packed is None:
            continue
        # Weekend lunches are always packed.
        if meal is Meal.LUNCH and weekend:
            packed = True
        contributions.append(Contribution(MealKind.for_meal(meal, packed), count))
    return contributions
