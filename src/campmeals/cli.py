"""Command-line interface for campmeals."""

from __future__ import annotations

import json
from datetime import date, datetime
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError

from campmeals.calculator import generate_weekly_grid, summarize_range, summarize_week
from campmeals.config import get_settings
from campmeals.db.meal_times import load_meal_times, save_meal_times
from campmeals.logging_utils import configure_logging
from campmeals.models.grid import MealKind, WeekGrid
from campmeals.models.meal_times import MealTimeConfig
from campmeals.models.roster import Roster

app = typer.Typer(help="Camp meal-demand calculation commands.")

ROW_LABELS = {
    MealKind.BREAKFAST: "Breakfast",
    MealKind.LUNCH: "Lunch",
    MealKind.DINNER: "Dinner",
    MealKind.PACKED_BREAKFAST: "Packed breakfast",
    MealKind.PACKED_LUNCH: "Packed lunch",
    MealKind.PACKED_DINNER: "Packed dinner",
}


@app.callback()
def main_callback() -> None:
    settings = get_settings()
    configure_logging(settings.log_level, settings.log_format, [settings.api_token or ""])


def _load_roster(path: Path) -> Roster:
    try:
        with path.open("r", encoding="utf-8") as fh:
            payload = json.load(fh)
    except (OSError, json.JSONDecodeError) as exc:
        typer.secho(f"Unable to read roster {path}: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc
    return Roster.model_validate(payload if isinstance(payload, dict) else {})


def _echo_json(payload: dict, pretty: bool) -> None:
    typer.echo(json.dumps(payload, indent=2 if pretty else None, sort_keys=pretty))


def render_table(grid: WeekGrid) -> str:
    """Plain-text grid: one row per meal kind, one column per day, weekly totals last."""

    label_width = max(len(label) for label in ROW_LABELS.values())
    header = ["".ljust(label_width)] + [cell.day_name[:3].rjust(5) for cell in grid.days]
    header.append("Total".rjust(6))
    lines = [" ".join(header)]
    for kind, label in ROW_LABELS.items():
        counts = [cell.bucket(kind).total for cell in grid.days]
        row = [label.ljust(label_width)] + [str(count).rjust(5) for count in counts]
        row.append(str(sum(counts)).rjust(6))
        lines.append(" ".join(row))

    summary = summarize_week(grid)
    lines.append(
        f"Reg: B{summary.regular.breakfast} L{summary.regular.lunch} D{summary.regular.dinner} "
        f"({summary.regular_total}) | Pkg: B{summary.packed.breakfast} L{summary.packed.lunch} "
        f"D{summary.packed.dinner} ({summary.packed_total}) | Total: {summary.total_meals}"
    )
    return "\n".join(lines)


@app.command()
def grid(
    roster_path: Path = typer.Argument(..., help="Roster JSON file with 'groups' and 'staff'."),
    start_date: Optional[datetime] = typer.Option(
        None,
        "--start-date",
        formats=["%Y-%m-%d"],
        help="Any date in the week to compute (defaults to today).",
    ),
    pretty: bool = typer.Option(False, "--pretty", help="Pretty-print output JSON."),
    table: bool = typer.Option(False, "--table", help="Print a text table instead of JSON."),
) -> None:
    """
    Compute the weekly meal grid for the roster using the stored meal times.
    """
    roster = _load_roster(roster_path)
    target = start_date.date() if start_date else date.today()
    week = generate_weekly_grid(roster.groups, roster.staff, target, load_meal_times())

    if table:
        typer.echo(render_table(week))
        return
    _echo_json(week.model_dump(mode="json", by_alias=True), pretty)


@app.command()
def summary(
    roster_path: Path = typer.Argument(..., help="Roster JSON file with 'groups' and 'staff'."),
    pretty: bool = typer.Option(False, "--pretty", help="Pretty-print output JSON."),
) -> None:
    """Summarize meals across every week spanned by the roster."""

    roster = _load_roster(roster_path)
    result = summarize_range(roster.groups, roster.staff, load_meal_times())
    _echo_json(result.model_dump(mode="json", by_alias=True), pretty)


@app.command("meal-times")
def meal_times() -> None:
    """Show the meal cutoff times currently in effect."""

    _echo_json(load_meal_times().model_dump(mode="json"), pretty=True)


@app.command("set-meal-times")
def set_meal_times(
    breakfast: Optional[str] = typer.Option(None, "--breakfast", help="Breakfast cutoff (HH:MM)."),
    lunch: Optional[str] = typer.Option(None, "--lunch", help="Lunch cutoff (HH:MM)."),
    dinner: Optional[str] = typer.Option(None, "--dinner", help="Dinner cutoff (HH:MM)."),
) -> None:
    """Persist new meal cutoff times; omitted meals keep their current value."""

    updates = {
        key: value
        for key, value in (("breakfast", breakfast), ("lunch", lunch), ("dinner", dinner))
        if value is not None
    }
    try:
        config = MealTimeConfig.model_validate({**load_meal_times().model_dump(), **updates})
        saved = save_meal_times(config)
    except (ValidationError, ValueError) as exc:
        typer.secho(f"Invalid meal times: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc

    _echo_json(saved.model_dump(mode="json"), pretty=True)


def main(argv: Optional[list[str]] = None) -> None:
    """Entry point for the `campmeals` script."""
    app(prog_name="campmeals", args=argv)


if __name__ == "__main__":
    main()
