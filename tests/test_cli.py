"""Tests for the campmeals command-line interface."""

from __future__ import annotations

import json
from datetime import date

import pytest
from typer.testing import CliRunner

from campmeals.calculator import generate_weekly_grid
from campmeals.cli import app, render_table

runner = CliRunner()


@pytest.fixture(autouse=True)
def quiet_logs(monkeypatch):
    monkeypatch.setenv("CAMPMEALS_LOG_LEVEL", "WARNING")


@pytest.fixture()
def roster_file(tmp_path, sample_roster_payload):
    path = tmp_path / "roster.json"
    path.write_text(json.dumps(sample_roster_payload), encoding="utf-8")
    return path


def test_grid_command_outputs_json(roster_file):
    result = runner.invoke(app, ["grid", str(roster_file), "--start-date", "2024-06-06"])

    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload["weekStart"] == "2024-06-03"
    assert payload["days"][4]["pL"]["total"] == 10


def test_grid_command_table(roster_file):
    result = runner.invoke(app, ["grid", str(roster_file), "--start-date", "2024-06-03", "--table"])

    assert result.exit_code == 0, result.output
    assert "Packed lunch" in result.stdout
    assert "Total: 135" in result.stdout


def test_grid_command_reports_unreadable_roster(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")

    result = runner.invoke(app, ["grid", str(path)])

    assert result.exit_code == 1


def test_summary_command(roster_file):
    result = runner.invoke(app, ["summary", str(roster_file)])

    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload["totalMeals"] == 135
    assert payload["dateRange"]["end"] == "2024-06-07"


def test_meal_times_commands_round_trip():
    result = runner.invoke(app, ["set-meal-times", "--breakfast", "08:15"])
    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout)["breakfast"] == "08:15"

    result = runner.invoke(app, ["meal-times"])
    assert json.loads(result.stdout) == {"breakfast": "08:15", "lunch": "13:00", "dinner": "18:00"}


@pytest.mark.parametrize("args", [["--lunch", "lunchtime"], ["--dinner", "08:00"]])
def test_set_meal_times_rejects_invalid_values(args):
    result = runner.invoke(app, ["set-meal-times", *args])
    assert result.exit_code == 1


def test_render_table_lists_every_day(sample_roster_payload):
    grid = generate_weekly_grid(sample_roster_payload["groups"], sample_roster_payload["staff"], date(2024, 6, 3))

    lines = render_table(grid).splitlines()

    assert lines[0].split() == ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun", "Total"]
    dinner = next(line for line in lines if line.startswith("Dinner"))
    assert dinner.split()[1:] == ["10", "10", "10", "10", "0", "0", "0", "40"]
    assert lines[-1].startswith("Reg: B40 L35 D40 (115) | Pkg: B0 L10 D10 (20)")
