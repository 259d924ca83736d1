"""Shared date helpers for calculator modules."""

from __future__ import annotations

from datetime import date, datetime, timedelta

WEEKDAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


def week_start(value: date) -> date:
    """Return the Monday on or before ``value``."""
    if isinstance(value, datetime):
        value = value.date()
    return value - timedelta(days=value.weekday())


def is_weekend(value: date) -> bool:
    return value.weekday() >= 5


def weekday_name(value: date) -> str:
    return WEEKDAY_NAMES[value.weekday()]
