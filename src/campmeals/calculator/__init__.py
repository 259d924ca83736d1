"""Meal-demand calculation engine."""

from campmeals.calculator.engine import generate_weekly_grid, parse_groups, parse_staff
from campmeals.calculator.summary import stay_range, summarize_range, summarize_week

__all__ = [
    "generate_weekly_grid",
    "parse_groups",
    "parse_staff",
    "stay_range",
    "summarize_range",
    "summarize_week",
]
