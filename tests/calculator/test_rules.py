"""Meal eligibility rule tests."""

from __future__ import annotations

from datetime import time

import pytest

from campmeals.calculator.rules import (
    LUNCH_ONLY,
    Contribution,
    DayWindow,
    classify_day,
    placement,
)
from campmeals.models.grid import MealKind
from campmeals.models.meal_times import MealTimeConfig

STANDARD = MealTimeConfig()


def _kinds(contributions):
    return {c.kind: c.count for c in contributions}


def test_full_day_is_always_regular():
    assert placement(DayWindow.full_day(), time(9, 0)) is False
    assert placement(DayWindow.full_day(), time(23, 59)) is False


@pytest.mark.parametrize(
    ("arrival", "expected"),
    [
        (time(8, 0), False),
        (time(9, 0), False),  # inclusive boundary
        (time(9, 1), None),
    ],
)
def test_arrival_day_against_breakfast(arrival, expected):
    assert placement(DayWindow.arriving(arrival), time(9, 0)) is expected


@pytest.mark.parametrize(
    ("departure", "expected"),
    [
        (time(8, 59), True),
        (time(13, 0), False),  # leaving exactly at the cutoff still eats on site
        (time(15, 0), False),
    ],
)
def test_departure_day_against_lunch(departure, expected):
    assert placement(DayWindow.departing(departure), time(13, 0)) is expected


def test_same_day_visit_never_packed():
    window = DayWindow.visiting(time(10, 0), time(15, 0))
    assert placement(window, time(9, 0)) is None
    assert placement(window, time(13, 0)) is False
    assert placement(window, time(18, 0)) is None


def test_classify_arrival_after_lunch_gets_dinner_only():
    contributions = classify_day(DayWindow.arriving(time(14, 0)), STANDARD, False, 10)
    assert contributions == [Contribution(MealKind.DINNER, 10)]


def test_classify_early_departure_packs_every_meal():
    contributions = classify_day(DayWindow.departing(time(7, 0)), STANDARD, False, 3)
    assert _kinds(contributions) == {
        MealKind.PACKED_BREAKFAST: 3,
        MealKind.PACKED_LUNCH: 3,
        MealKind.PACKED_DINNER: 3,
    }


def test_weekend_redirects_only_lunch():
    contributions = classify_day(DayWindow.full_day(), STANDARD, True, 4)
    assert _kinds(contributions) == {
        MealKind.BREAKFAST: 4,
        MealKind.PACKED_LUNCH: 4,
        MealKind.DINNER: 4,
    }


def test_weekend_does_not_create_lunch_for_late_arrival():
    contributions = classify_day(DayWindow.arriving(time(15, 0)), STANDARD, True, 2)
    assert _kinds(contributions) == {MealKind.DINNER: 2}


def test_lunch_only_restricts_meals():
    contributions = classify_day(DayWindow.full_day(), STANDARD, False, 1, LUNCH_ONLY)
    assert contributions == [Contribution(MealKind.LUNCH, 1)]


def test_zero_count_contributes_nothing():
    assert classify_day(DayWindow.full_day(), STANDARD, False, 0) == []


def test_unordered_meal_times_do_not_crash():
    odd = MealTimeConfig(breakfast="19:00", lunch="13:00", dinner="07:00")
    contributions = classify_day(DayWindow.arriving(time(12, 0)), odd, False, 1)
    assert _kinds(contributions) == {MealKind.BREAKFAST: 1, MealKind.LUNCH: 1}
