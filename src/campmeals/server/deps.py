"""Dependency definitions for the campmeals API server."""

from __future__ import annotations

from datetime import date
from typing import Any, Callable, Iterable, Optional

from fastapi import Depends, HTTPException, Request, status

from campmeals.calculator import generate_weekly_grid, summarize_range
from campmeals.config import get_settings
from campmeals.db.meal_times import load_meal_times, save_meal_times
from campmeals.models.grid import WeekGrid
from campmeals.models.meal_times import MealTimeConfig
from campmeals.models.summary import RangeSummary

MealTimesProvider = Callable[[], MealTimeConfig]
MealTimesSaver = Callable[[MealTimeConfig], MealTimeConfig]
GridGenerator = Callable[[Iterable[Any], Iterable[Any], date, Optional[MealTimeConfig]], WeekGrid]
RangeSummarizer = Callable[[Iterable[Any], Iterable[Any], Optional[MealTimeConfig]], RangeSummary]


def get_meal_times_provider() -> MealTimesProvider:
    """Return the meal-time loader; called per request so saved changes apply immediately."""

    return load_meal_times


def get_meal_times_saver() -> MealTimesSaver:
    return save_meal_times


def get_grid_generator() -> GridGenerator:
    return generate_weekly_grid


def get_range_summarizer() -> RangeSummarizer:
    return summarize_range


def require_api_token(
    request: Request,
    settings = Depends(get_settings),
) -> None:
    """Ensure requests carry the configured API token when required."""

    token = settings.api_token
    if not token:
        return

    auth_header = request.headers.get("Authorization")
    if auth_header and auth_header.split("Bearer ")[-1].strip() == token:
        return

    if request.headers.get("X-API-Key") == token:
        return

    raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
