"""Shared pytest fixtures for the campmeals test suite."""

from __future__ import annotations

from typing import Any, Dict, Generator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from campmeals.config import get_settings
from campmeals.db.repository import reset_repository_state
from campmeals.server.app import create_app


@pytest.fixture()
def app() -> Generator[FastAPI, None, None]:
    """Create a new FastAPI app instance for each test and reset overrides."""

    application = create_app()
    yield application
    application.dependency_overrides.clear()


@pytest.fixture()
def client(app) -> TestClient:
    """Return a test client bound to the FastAPI app."""

    return TestClient(app)


@pytest.fixture()
def scenario_a_group() -> Dict[str, Any]:
    """Ten guests arriving Monday afternoon and leaving Friday morning (week of 2024-06-03)."""

    return {
        "name": "Scouts",
        "pax": 10,
        "arrivalDate": "2024-06-03",
        "arrivalTime": "14:00",
        "departureDate": "2024-06-07",
        "departureTime": "10:00",
    }


@pytest.fixture()
def sample_roster_payload(scenario_a_group) -> Dict[str, Any]:
    return {
        "groups": [scenario_a_group],
        "staff": [
            {
                "name": "Cook",
                "arrivalDate": "2024-06-03",
                "departureDate": "2024-06-07",
                "isLiveIn": False,
            }
        ],
    }


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Ensure each test uses an isolated SQLite database location."""

    db_path = tmp_path / "test_campmeals.db"
    monkeypatch.setenv("CAMPMEALS_DATABASE_PATH", str(db_path))
    get_settings.cache_clear()
    reset_repository_state()
    yield
    reset_repository_state()
    monkeypatch.delenv("CAMPMEALS_DATABASE_PATH", raising=False)
    get_settings.cache_clear()
