"""Multi-week summary tests."""

from __future__ import annotations

from datetime import date

from campmeals.calculator import generate_weekly_grid, summarize_range, summarize_week


def test_empty_roster_has_no_range():
    summary = summarize_range([], [])

    assert summary.date_range is None
    assert summary.weeks == []
    assert summary.total_meals == 0


def test_single_week_totals(scenario_a_group):
    summary = summarize_range([scenario_a_group], [])

    assert summary.date_range.start == date(2024, 6, 3)
    assert summary.date_range.end == date(2024, 6, 7)
    assert len(summary.weeks) == 1
    assert (summary.regular.breakfast, summary.regular.lunch, summary.regular.dinner) == (40, 30, 40)
    assert (summary.packed.breakfast, summary.packed.lunch, summary.packed.dinner) == (0, 10, 10)
    assert summary.regular_total == 110
    assert summary.packed_total == 20
    assert summary.total_meals == 130


def test_range_spanning_two_weeks_sums_each_grid():
    group = {
        "pax": 2,
        "dietary": {"vegetarian": 1},
        "arrivalDate": "2024-06-08",
        "arrivalTime": "08:00",
        "departureDate": "2024-06-11",
        "departureTime": "20:00",
    }

    summary = summarize_range([group], [])

    assert [week.week_start for week in summary.weeks] == [date(2024, 6, 3), date(2024, 6, 10)]
    # Four full days of three meals for two people; weekend lunches are packed.
    assert summary.total_meals == 4 * 3 * 2
    assert summary.packed.lunch == 4
    assert summary.weeks[0].total_meals == 12
    assert summary.weeks[1].total_meals == 12
    assert summary.dietary.vegetarian == 12


def test_summary_ignores_unreadable_entries(scenario_a_group):
    summary = summarize_range([scenario_a_group, "junk"], [None])

    assert summary.total_meals == 130


def test_summarize_week_matches_grid(sample_roster_payload):
    grid = generate_weekly_grid(
        sample_roster_payload["groups"], sample_roster_payload["staff"], date(2024, 6, 3)
    )

    summary = summarize_week(grid)

    assert summary.week_start == date(2024, 6, 3)
    assert summary.week_end == date(2024, 6, 9)
    # Scenario group plus five weekday lunches for the live-out cook.
    assert summary.regular.lunch == 35
    assert summary.total_meals == 135
