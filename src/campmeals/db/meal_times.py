"""Data access helpers for the persisted meal cutoff times."""

from __future__ import annotations

import logging

from campmeals.config import get_settings
from campmeals.models.grid import Meal
from campmeals.models.meal_times import MealTimeConfig
from campmeals.models.parsing import format_time

from .repository import read_settings, write_settings

logger = logging.getLogger(__name__)

KEY_PREFIX = "meal_time."


def default_meal_times() -> MealTimeConfig:
    """Cutoffs from application settings, falling back to 09:00/13:00/18:00."""

    settings = get_settings()
    return MealTimeConfig.from_raw(
        {
            Meal.BREAKFAST.value: settings.default_breakfast_time,
            Meal.LUNCH.value: settings.default_lunch_time,
            Meal.DINNER.value: settings.default_dinner_time,
        }
    )


def load_meal_times() -> MealTimeConfig:
    """Load stored cutoffs; unset or unreadable values fall back to the defaults."""

    stored = read_settings(KEY_PREFIX)
    config = MealTimeConfig.from_raw(stored, defaults=default_meal_times())
    logger.debug("Loaded meal times stored=%s resolved=%s", stored, config.model_dump(mode="json"))
    return config


def validate_meal_times(config: MealTimeConfig) -> None:
    if not config.is_ordered():
        raise ValueError("Meal times must be in order: breakfast < lunch < dinner")


def save_meal_times(config: MealTimeConfig) -> MealTimeConfig:
    """Validate and persist the provided cutoffs."""

    validate_meal_times(config)
    logger.info("Persisting meal times %s", config.model_dump(mode="json"))
    write_settings(KEY_PREFIX, {meal.value: format_time(config.cutoff(meal)) for meal in Meal})
    return load_meal_times()
