"""Integration tests for the meal-time settings endpoints."""

from __future__ import annotations

from fastapi import status


def test_meal_times_round_trip(client):
    response = client.get("/settings/meal-times")
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"breakfast": "09:00", "lunch": "13:00", "dinner": "18:00"}

    response = client.put("/settings/meal-times", json={"lunch": "12:30"})
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"breakfast": "09:00", "lunch": "12:30", "dinner": "18:00"}

    # Ensure persisted
    response = client.get("/settings/meal-times")
    assert response.json()["lunch"] == "12:30"


def test_saved_meal_times_apply_to_next_grid(client):
    group = {
        "pax": 5,
        "arrivalDate": "2024-06-04",
        "arrivalTime": "12:45",
        "departureDate": "2024-06-06",
    }
    before = client.post("/meal-grid", json={"startDate": "2024-06-04", "groups": [group]})
    assert before.json()["days"][1]["L"]["total"] == 5

    response = client.put("/settings/meal-times", json={"lunch": "12:30"})
    assert response.status_code == status.HTTP_200_OK

    after = client.post("/meal-grid", json={"startDate": "2024-06-04", "groups": [group]})
    assert after.json()["days"][1]["L"]["total"] == 0


def test_meal_times_reject_malformed_time(client):
    response = client.put("/settings/meal-times", json={"dinner": "25:00"})
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    assert client.get("/settings/meal-times").json()["dinner"] == "18:00"


def test_meal_times_reject_out_of_order(client):
    response = client.put("/settings/meal-times", json={"breakfast": "14:00"})

    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
    assert "breakfast < lunch < dinner" in response.json()["detail"]


def test_meal_times_reject_non_object_body(client):
    response = client.put("/settings/meal-times", json=["09:00"])
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
